"""
RLP encodings of validator and member lists for contract constructors.

Two shapes are produced:

- member list:     [addr_0, addr_1, ...]
- validator pairs: [[consensus_0, fee_0], [consensus_1, fee_1], ...]

Addresses are encoded as 20-byte strings (prefix 0x94), never as hex text.
"""

from __future__ import annotations

import logging

from genesis_params.types import Address, FormatError, decode_rlp, decode_rlp_list, encode_rlp
from genesis_params.types.rlp import RLPItem

from .record import MemberList, ValidatorRecord, ValidatorSet

logger = logging.getLogger(__name__)


def encode_address_list(members: MemberList) -> bytes:
    """Encode each address as a byte string, all wrapped in one list."""
    encoded = encode_rlp(list(members))
    logger.debug("Encoded member list: %d addresses, %d bytes", len(members), len(encoded))
    return encoded


def encode_validator_pairs(validator_set: ValidatorSet) -> bytes:
    """Encode the set as a list of `[consensus_addr, fee_addr]` pairs."""
    pairs: list[RLPItem] = [[r.consensus_addr, r.fee_addr] for r in validator_set]
    encoded = encode_rlp(pairs)
    logger.debug(
        "Encoded validator pairs: %d validators, %d bytes", len(validator_set), len(encoded)
    )
    return encoded


def decode_address_list(data: bytes) -> MemberList:
    """
    Decode the output of `encode_address_list`.

    Raises:
        FormatError: If the bytes are not a flat list of 20-byte strings.
    """
    return MemberList.build(decode_rlp_list(data))


def decode_validator_pairs(data: bytes) -> ValidatorSet:
    """
    Decode the output of `encode_validator_pairs`.

    Raises:
        FormatError: If the bytes are not a list of address pairs.
        EmptySetError: If the list holds no pairs.
    """
    item = decode_rlp(data)
    if not isinstance(item, list):
        raise FormatError("expected a list of validator pairs, got a byte string")

    records = []
    for i, pair in enumerate(item):
        if not isinstance(pair, list) or len(pair) != 2:
            raise FormatError("expected a [consensus, fee] pair", index=i)
        consensus, fee = pair
        if not isinstance(consensus, bytes) or not isinstance(fee, bytes):
            raise FormatError("pair elements must be byte strings", index=i)
        try:
            records.append(
                ValidatorRecord(consensus_addr=Address(consensus), fee_addr=Address(fee))
            )
        except FormatError as e:
            raise e.at(index=i) from e

    return ValidatorSet.build(records)
