"""Configuration loading and artifact generation for genesis parameters."""

from .artifacts import HolderArtifact, NetworkArtifacts, build_artifacts, to_hex
from .config import (
    CycleParams,
    GenesisParamsConfig,
    InitHolder,
    LightClientParams,
    NetworkConfig,
)

__all__ = [
    "CycleParams",
    "GenesisParamsConfig",
    "HolderArtifact",
    "InitHolder",
    "LightClientParams",
    "NetworkArtifacts",
    "NetworkConfig",
    "build_artifacts",
    "to_hex",
]
