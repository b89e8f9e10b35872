"""
Recursive Length Prefix (RLP) Encoding
======================================

RLP is the serialization format contract constructors use to receive the
validator and member lists generated by this package.

RLP encodes two kinds of items:

1. **Byte strings** (including the empty string)
2. **Lists** of items (including the empty list)

The first byte of an encoding tells the two apart and carries the length:

+-------------+-----------------------------------------------------------+
| Prefix      | Meaning                                                   |
+=============+===========================================================+
| [0x00-0x7f] | Single byte, value is the byte itself                     |
+-------------+-----------------------------------------------------------+
| [0x80-0xb7] | Short string (0-55 bytes), length = prefix - 0x80         |
+-------------+-----------------------------------------------------------+
| [0xb8-0xbf] | Long string (>55 bytes), prefix - 0xb7 = length of length |
+-------------+-----------------------------------------------------------+
| [0xc0-0xf7] | Short list (0-55 bytes payload), length = prefix - 0xc0   |
+-------------+-----------------------------------------------------------+
| [0xf8-0xff] | Long list (>55 bytes payload), prefix - 0xf7 = len of len |
+-------------+-----------------------------------------------------------+

Decoding is strict: every item must use the shortest encoding the rules
allow, and the input must hold exactly one item.

References:
----------
- Ethereum Yellow Paper, Appendix B
- https://ethereum.org/en/developers/docs/data-structures-and-encoding/rlp/
"""

from __future__ import annotations

from typing import TypeAlias

from .exceptions import RLPDecodingError

RLPItem: TypeAlias = bytes | list["RLPItem"]
"""
RLP-encodable item.

Either:
- bytes (a byte string)
- list of RLP items (recursive)
"""


SINGLE_BYTE_MAX = 0x7F
"""Largest byte value that encodes as itself."""

SHORT_STRING_PREFIX = 0x80
"""Prefix for short strings (0-55 bytes). Final prefix = 0x80 + length."""

SHORT_STRING_MAX_LEN = 55
"""Maximum string length for short encoding."""

LONG_STRING_BASE = 0xB7
"""Base for long string prefix. Final prefix = 0xb7 + length_of_length."""

SHORT_LIST_PREFIX = 0xC0
"""Prefix for short lists (0-55 bytes payload). Final prefix = 0xc0 + length."""

SHORT_LIST_MAX_LEN = 55
"""Maximum list payload length for short encoding."""

LONG_LIST_BASE = 0xF7
"""Base for long list prefix. Final prefix = 0xf7 + length_of_length."""


def encode_rlp(item: RLPItem) -> bytes:
    """
    Encode an item using RLP.

    `bytearray` and `bytes` subclasses (such as addresses) are encoded by
    their raw content. Tuples are accepted wherever lists are.

    Args:
        item: Bytes or nested list of bytes to encode.

    Returns:
        RLP-encoded bytes.

    Raises:
        TypeError: If item is not bytes or list.
    """
    if isinstance(item, (bytes, bytearray)):
        return _encode_bytes(bytes(item))
    if isinstance(item, (list, tuple)):
        payload = b"".join(encode_rlp(child) for child in item)
        return _length_prefix(len(payload), SHORT_LIST_PREFIX, LONG_LIST_BASE) + payload
    raise TypeError(f"Cannot RLP encode type: {type(item).__name__}")


def _encode_bytes(data: bytes) -> bytes:
    # Single byte encoding: values 0x00-0x7f encode as themselves.
    if len(data) == 1 and data[0] <= SINGLE_BYTE_MAX:
        return data
    return _length_prefix(len(data), SHORT_STRING_PREFIX, LONG_STRING_BASE) + data


def _length_prefix(length: int, short_prefix: int, long_base: int) -> bytes:
    """
    Build the prefix announcing a payload of `length` bytes.

    Short payloads (0-55 bytes) fold the length into the prefix byte.
    Longer payloads store the length as minimal big-endian bytes after
    a prefix announcing how many length bytes follow.
    """
    if length <= SHORT_STRING_MAX_LEN:
        return bytes([short_prefix + length])
    length_bytes = length.to_bytes((length.bit_length() + 7) // 8, "big")
    return bytes([long_base + len(length_bytes)]) + length_bytes


def decode_rlp(data: bytes) -> RLPItem:
    """
    Decode RLP-encoded bytes.

    Args:
        data: RLP-encoded bytes.

    Returns:
        Decoded item (bytes or nested list).

    Raises:
        RLPDecodingError: If data is empty, truncated, non-canonical,
            or has bytes left over after the first item.
    """
    data = bytes(data)
    if len(data) == 0:
        raise RLPDecodingError("empty input")

    item, consumed = _decode_item(data, 0, len(data))

    if consumed != len(data):
        raise RLPDecodingError(
            f"trailing data, decoded {consumed} of {len(data)} bytes", offset=consumed
        )

    return item


def decode_rlp_list(data: bytes) -> list[bytes]:
    """
    Decode RLP data as a flat list of byte strings.

    Raises:
        RLPDecodingError: If data is not a list or contains nested lists.
    """
    item = decode_rlp(data)

    if not isinstance(item, list):
        raise RLPDecodingError("expected a list, got a byte string")

    for i, elem in enumerate(item):
        if not isinstance(elem, bytes):
            raise RLPDecodingError(f"element {i} is a list, expected a byte string")

    return item  # type: ignore[return-value]


def _decode_item(data: bytes, offset: int, limit: int) -> tuple[RLPItem, int]:
    """
    Decode a single RLP item starting at offset.

    The item must end at or before `limit`, which is the end of the
    enclosing list payload (or of the whole input).

    Returns (decoded_item, offset just past the item).
    """
    if offset >= limit:
        raise RLPDecodingError("unexpected end of data", offset=offset)

    prefix = data[offset]

    if prefix <= SINGLE_BYTE_MAX:
        return data[offset : offset + 1], offset + 1

    if prefix < SHORT_LIST_PREFIX:
        start, end = _read_length(data, offset, limit, SHORT_STRING_PREFIX, LONG_STRING_BASE)
        value = data[start:end]
        if len(value) == 1 and value[0] <= SINGLE_BYTE_MAX:
            raise RLPDecodingError(
                "non-canonical, single byte below 0x80 carries a prefix", offset=offset
            )
        return value, end

    start, end = _read_length(data, offset, limit, SHORT_LIST_PREFIX, LONG_LIST_BASE)
    items: list[RLPItem] = []
    cursor = start
    while cursor < end:
        item, cursor = _decode_item(data, cursor, end)
        items.append(item)
    return items, end


def _read_length(
    data: bytes, offset: int, limit: int, short_prefix: int, long_base: int
) -> tuple[int, int]:
    """
    Parse the length prefix at `offset`.

    Returns the (start, end) offsets of the payload it announces.
    """
    prefix = data[offset]

    if prefix <= long_base:
        start = offset + 1
        end = start + (prefix - short_prefix)
        _check_bounds(end, limit, offset)
        return start, end

    len_of_len = prefix - long_base
    start = offset + 1 + len_of_len
    _check_bounds(start, limit, offset)

    length_bytes = data[offset + 1 : start]
    if length_bytes[0] == 0:
        raise RLPDecodingError("non-canonical, leading zeros in length", offset=offset)

    length = int.from_bytes(length_bytes, "big")
    if length <= SHORT_STRING_MAX_LEN:
        raise RLPDecodingError(
            f"non-canonical, long form used for {length}-byte payload", offset=offset
        )

    end = start + length
    _check_bounds(end, limit, offset)
    return start, end


def _check_bounds(end: int, limit: int, offset: int) -> None:
    """Verify the item ending at `end` fits before `limit`."""
    if end > limit:
        raise RLPDecodingError(f"truncated, need {end} bytes, have {limit}", offset=offset)
