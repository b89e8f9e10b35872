"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import os
from pathlib import Path

import pytest
from hypothesis import settings

if "GENESIS_PARAMS_NETWORK" not in os.environ:
    os.environ["GENESIS_PARAMS_NETWORK"] = "mainnet"

# Create a profile named "no_deadline" with deadline disabled.
settings.register_profile("no_deadline", deadline=None)
settings.load_profile("no_deadline")


@pytest.fixture
def example_config_path() -> Path:
    """The example config shipped with the repository."""
    return Path(__file__).resolve().parent.parent / "examples" / "params.yaml"
