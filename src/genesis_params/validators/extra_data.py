"""
Genesis extraData for a Clique-style consensus engine.

Layout of the blob, for N validators::

    +----------------+---------------------------+----------------+
    | vanity (32 B)  | consensus addrs (20*N B)  |  seal (65 B)   |
    +----------------+---------------------------+----------------+

The vanity and seal regions are zero. The seal is filled in later by an
external signer. Only consensus addresses are embedded; fee addresses
travel in the RLP validator-pair list instead.
"""

from __future__ import annotations

import logging

from genesis_params.types import ADDRESS_LENGTH, Address, FormatError

from .record import ValidatorSet

EXTRA_VANITY_LENGTH = 32
"""Reserved leading bytes for a signer or engine tag."""

EXTRA_SEAL_LENGTH = 65
"""Reserved trailing bytes for a secp256k1 signature (r, s, v)."""

logger = logging.getLogger(__name__)


def extra_data_length(num_validators: int) -> int:
    """Total blob size for `num_validators` validators."""
    return EXTRA_VANITY_LENGTH + ADDRESS_LENGTH * num_validators + EXTRA_SEAL_LENGTH


def build_extra_data(validator_set: ValidatorSet) -> bytes:
    """
    Assemble the extraData blob.

    Args:
        validator_set: The initial validators, in on-chain index order.

    Returns:
        `32 zero bytes ++ consensus addresses ++ 65 zero bytes`.
    """
    blob = b"".join(
        [
            bytes(EXTRA_VANITY_LENGTH),
            *validator_set.consensus_addresses(),
            bytes(EXTRA_SEAL_LENGTH),
        ]
    )
    logger.debug("Built extraData: %d validators, %d bytes", len(validator_set), len(blob))
    return blob


def parse_extra_data(blob: bytes) -> tuple[Address, ...]:
    """
    Recover the consensus addresses embedded in an extraData blob.

    The vanity and seal regions are skipped without inspection.

    Raises:
        FormatError: If the blob is shorter than vanity plus seal, or the
            address region is not a whole number of addresses.
    """
    overhead = EXTRA_VANITY_LENGTH + EXTRA_SEAL_LENGTH
    if len(blob) < overhead:
        raise FormatError(f"extraData must be at least {overhead} bytes, got {len(blob)}")

    body = blob[EXTRA_VANITY_LENGTH : len(blob) - EXTRA_SEAL_LENGTH]
    if len(body) % ADDRESS_LENGTH:
        raise FormatError(
            f"extraData address region of {len(body)} bytes "
            f"is not a multiple of {ADDRESS_LENGTH}"
        )

    return tuple(
        Address(body[i : i + ADDRESS_LENGTH]) for i in range(0, len(body), ADDRESS_LENGTH)
    )
