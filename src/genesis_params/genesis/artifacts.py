"""
Generated artifacts for one target network.

The artifacts document is the hand-off to template rendering. Byte blobs are
`0x`-prefixed lower-case hex, keys are camel case:

    {
      "extraData": "0x0000...",
      "validatorSetBytes": "0xf8...",
      "initMembersBytes": "0xf8...",
      "initHolders": [{"address": "0x1ef0...", "balance": "52b7d2dcc80cd2e4000000"}],
      "initCycle": {"blockPeriod": 3, ...},
      "lightClient": {"initConsensusStateBytes": "0000...", ...}
    }
"""

from __future__ import annotations

import logging

from genesis_params.types import StrictBaseModel
from genesis_params.validators import (
    build_extra_data,
    encode_address_list,
    encode_validator_pairs,
)

from .config import CycleParams, LightClientParams, NetworkConfig

logger = logging.getLogger(__name__)


def to_hex(data: bytes) -> str:
    """Render bytes as `0x`-prefixed lower-case hex."""
    return "0x" + data.hex()


class HolderArtifact(StrictBaseModel):
    """A genesis-funded account as the templates expect it."""

    address: str
    """`0x`-prefixed lower-case hex."""

    balance: str
    """Balance as lower-case hex without prefix."""


class NetworkArtifacts(StrictBaseModel):
    """All hex strings and parameters generated for one network."""

    extra_data: str
    validator_set_bytes: str
    init_members_bytes: str
    init_holders: list[HolderArtifact]
    init_cycle: CycleParams
    light_client: LightClientParams


def build_artifacts(network: NetworkConfig) -> NetworkArtifacts:
    """
    Generate every artifact of one network.

    Encoding cannot fail on a validated config, so this only logs.
    """
    duplicates = network.validators.duplicate_consensus_addresses()
    if duplicates:
        # Kept as given. Multiplicity is on-chain data.
        logger.warning(
            "Validator set repeats consensus addresses: %s",
            ", ".join(addr.to_checksum() for addr in duplicates),
        )

    if network.cycle.validator_count > len(network.validators):
        logger.warning(
            "Cycle expects %d validators but genesis defines %d",
            network.cycle.validator_count,
            len(network.validators),
        )

    artifacts = NetworkArtifacts(
        extra_data=to_hex(build_extra_data(network.validators)),
        validator_set_bytes=to_hex(encode_validator_pairs(network.validators)),
        init_members_bytes=to_hex(encode_address_list(network.members)),
        init_holders=[
            HolderArtifact(address=str(holder.address), balance=holder.balance_hex())
            for holder in network.holders
        ],
        init_cycle=network.cycle,
        light_client=network.light_client,
    )

    logger.debug(
        "Generated artifacts: validators=%d, members=%d, holders=%d",
        len(network.validators),
        len(network.members),
        len(network.holders),
    )
    return artifacts
