"""Validator set model and the byte encodings derived from it."""

from .encoding import (
    decode_address_list,
    decode_validator_pairs,
    encode_address_list,
    encode_validator_pairs,
)
from .extra_data import (
    EXTRA_SEAL_LENGTH,
    EXTRA_VANITY_LENGTH,
    build_extra_data,
    extra_data_length,
    parse_extra_data,
)
from .record import MemberList, ValidatorRecord, ValidatorSet

__all__ = [
    "MemberList",
    "ValidatorRecord",
    "ValidatorSet",
    "EXTRA_SEAL_LENGTH",
    "EXTRA_VANITY_LENGTH",
    "build_extra_data",
    "extra_data_length",
    "parse_extra_data",
    "encode_address_list",
    "encode_validator_pairs",
    "decode_address_list",
    "decode_validator_pairs",
]
