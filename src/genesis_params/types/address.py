"""
Account address type.

An address is exactly 20 raw bytes. Configuration files spell it as 40
hexadecimal characters with an optional `0x` prefix, in any letter case:

    0xff19437f7e54c71e06ee852d9331a1de74947a9c
    FF19437F7E54C71E06EE852D9331A1DE74947A9C

Both spellings decode to the same bytes and compare equal. Checksum casing
(EIP-55) is accepted but never verified; `Address.to_checksum` can produce it
for display.
"""

from __future__ import annotations

import re
from typing import Any, ClassVar

from Crypto.Hash import keccak
from pydantic.annotated_handlers import GetCoreSchemaHandler
from pydantic_core import core_schema
from typing_extensions import Self

from .exceptions import FormatError

ADDRESS_LENGTH = 20
"""Number of raw bytes in an address."""

ADDRESS_HEX_LENGTH = 2 * ADDRESS_LENGTH
"""Number of hex digits in the textual form, excluding the prefix."""

_HEX_DIGITS = re.compile(r"[0-9a-fA-F]*")


class Address(bytes):
    """
    A 20-byte account address.

    Instances are immutable `bytes`, so they concatenate, slice and compare
    like raw bytes. Construct from a hex string or from exactly 20 bytes.
    """

    LENGTH: ClassVar[int] = ADDRESS_LENGTH

    def __new__(cls, value: Any) -> Self:
        """
        Create and validate a new address.

        Args:
            value: A hex string (optional `0x`/`0X` prefix) or 20 raw bytes.

        Raises:
            FormatError: If the value is not a well-formed address.
        """
        if isinstance(value, str):
            return super().__new__(cls, _parse_hex(value))
        if isinstance(value, (bytes, bytearray, memoryview)):
            raw = bytes(value)
            if len(raw) != cls.LENGTH:
                raise FormatError(
                    f"address must be exactly {cls.LENGTH} bytes, got {len(raw)}",
                    value=raw,
                )
            return super().__new__(cls, raw)
        if isinstance(value, int) and not isinstance(value, bool):
            # An integer has lost the digit count of its hex spelling.
            raise FormatError("address must be a quoted hex string, got an integer", value=value)
        raise FormatError(
            f"cannot build an address from {type(value).__name__}",
            value=value,
        )

    def to_checksum(self) -> str:
        """
        Return the EIP-55 mixed-case spelling, with `0x` prefix.

        A hex letter is upper-cased when the matching nibble of
        keccak256(lower-case hex) is 8 or greater.
        """
        lowered = self.hex()
        k = keccak.new(digest_bits=256)
        k.update(lowered.encode("ascii"))
        digest = k.hexdigest()
        return "0x" + "".join(
            ch.upper() if ch.isalpha() and int(digest[i], 16) >= 8 else ch
            for i, ch in enumerate(lowered)
        )

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        """
        Hook into Pydantic's validation system.

        Instances pass through untouched; strings and raw bytes go through
        the constructor, so malformed input surfaces as a validation error.
        Addresses serialize as `0x`-prefixed lower-case hex.
        """
        return core_schema.union_schema(
            [
                core_schema.is_instance_schema(cls),
                core_schema.no_info_plain_validator_function(cls),
            ],
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda x: "0x" + x.hex()
            ),
        )

    def __repr__(self) -> str:
        return f"Address(0x{self.hex()})"

    def __str__(self) -> str:
        return "0x" + self.hex()


def _parse_hex(text: str) -> bytes:
    digits = text[2:] if text[:2] in ("0x", "0X") else text
    if len(digits) != ADDRESS_HEX_LENGTH:
        raise FormatError(
            f"address must have exactly {ADDRESS_HEX_LENGTH} hex digits, got {len(digits)}",
            value=text,
        )
    # bytes.fromhex tolerates embedded whitespace, so check the digits first.
    if not _HEX_DIGITS.fullmatch(digits):
        raise FormatError("address contains non-hexadecimal characters", value=text)
    return bytes.fromhex(digits)


def decode_address(text: str) -> Address:
    """
    Decode the textual form of an address.

    Args:
        text: 40 hex digits, optionally prefixed with `0x` or `0X`.

    Returns:
        The 20-byte address, most significant byte first.

    Raises:
        FormatError: If the prefix-stripped text is not 40 hex digits.
    """
    if not isinstance(text, str):
        raise FormatError(f"expected a hex string, got {type(text).__name__}", value=text)
    return Address(text)


def encode_address(address: Address) -> str:
    """Encode an address as 40 lower-case hex digits without prefix."""
    return address.hex()
