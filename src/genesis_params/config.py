"""
Global configuration for genesis parameter generation.

This module reads environment-specific settings once at import time.
"""

import os
import re

ALL_NETWORKS = "all"
"""Network selector meaning every network in the config file."""

_NETWORK_NAME = re.compile(r"[A-Za-z0-9_-]+")

DEFAULT_NETWORK = os.environ.get("GENESIS_PARAMS_NETWORK", "mainnet")
"""Network generated when the CLI is not told otherwise. Defaults to 'mainnet'."""

if not _NETWORK_NAME.fullmatch(DEFAULT_NETWORK):
    raise ValueError(
        f"Invalid GENESIS_PARAMS_NETWORK environment variable: '{DEFAULT_NETWORK}'. "
        "Expected letters, digits, '-' or '_', or 'all'."
    )
