"""Reusable type definitions for genesis parameter generation."""

from .address import ADDRESS_LENGTH, Address, decode_address, encode_address
from .base import CamelModel, StrictBaseModel
from .exceptions import EmptySetError, FormatError, GenesisParamsError, RLPDecodingError
from .rlp import RLPItem, decode_rlp, decode_rlp_list, encode_rlp

__all__ = [
    # Core types
    "ADDRESS_LENGTH",
    "Address",
    "CamelModel",
    "StrictBaseModel",
    "RLPItem",
    # Codecs
    "decode_address",
    "encode_address",
    "decode_rlp",
    "decode_rlp_list",
    "encode_rlp",
    # Exceptions
    "GenesisParamsError",
    "FormatError",
    "EmptySetError",
    "RLPDecodingError",
]
