"""
Validator identity records and the ordered collections built from them.

Order is part of the data. The position of a validator in a
`ValidatorSet` is its on-chain index, and it fixes where its address lands
in the encoded outputs. Nothing in this module sorts or deduplicates.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Mapping
from typing import Any, Iterator, Sequence, overload

from pydantic import Field, field_validator, model_validator

from genesis_params.types import Address, EmptySetError, FormatError, StrictBaseModel

_RECORD_FIELDS: dict[str, tuple[str, str]] = {
    "consensus_addr": ("consensusAddr", "consensus_addr"),
    "fee_addr": ("feeAddr", "fee_addr"),
}
"""Record attribute -> accepted input keys (camel case first)."""

_RECORD_KEYS = frozenset(key for keys in _RECORD_FIELDS.values() for key in keys)


class ValidatorRecord(StrictBaseModel):
    """One validator: the address it signs blocks with and the address it is paid to."""

    consensus_addr: Address
    """Identity used to participate in block production. Embedded in extraData."""

    fee_addr: Address
    """Address that receives the validator's rewards."""

    @classmethod
    def from_raw(cls, raw: Any, *, index: int | None = None) -> ValidatorRecord:
        """
        Build a record from a mapping of hex strings.

        Accepts `consensusAddr`/`feeAddr` or their snake case spellings.

        Args:
            raw: A `ValidatorRecord`, or a mapping holding both addresses.
            index: Position of the record in its set, used in error messages.

        Raises:
            FormatError: If a field is missing or unknown, or an address is
                malformed.
        """
        if isinstance(raw, ValidatorRecord):
            return raw
        if not isinstance(raw, Mapping):
            raise FormatError(
                f"validator record must be a mapping, got {type(raw).__name__}",
                index=index,
            )

        for key in raw:
            if key not in _RECORD_KEYS:
                raise FormatError("unknown field", index=index, field=str(key))

        decoded: dict[str, Address] = {}
        for attr, keys in _RECORD_FIELDS.items():
            key = next((k for k in keys if k in raw), None)
            if key is None:
                raise FormatError("missing address", index=index, field=keys[0])
            try:
                decoded[attr] = Address(raw[key])
            except FormatError as e:
                raise e.at(index=index, field=key) from e

        return cls(**decoded)


def _decode_records(raw: Any) -> tuple[ValidatorRecord, ...]:
    if isinstance(raw, (str, bytes)) or not isinstance(raw, Iterable):
        raise FormatError(f"expected a sequence of validator records, got {type(raw).__name__}")
    records = tuple(ValidatorRecord.from_raw(r, index=i) for i, r in enumerate(raw))
    if not records:
        raise EmptySetError("ValidatorSet")
    return records


def _decode_addresses(raw: Any) -> tuple[Address, ...]:
    if isinstance(raw, (str, bytes)) or not isinstance(raw, Iterable):
        raise FormatError(f"expected a sequence of addresses, got {type(raw).__name__}")
    addresses = []
    for i, value in enumerate(raw):
        try:
            addresses.append(value if isinstance(value, Address) else Address(value))
        except FormatError as e:
            raise e.at(index=i) from e
    return tuple(addresses)


class ValidatorSet(StrictBaseModel):
    """
    Ordered, non-empty, immutable sequence of validator records.

    Accepts a bare list on input, so config files can spell the set as a
    YAML sequence of records.
    """

    data: tuple[ValidatorRecord, ...]
    """The records, in caller-supplied order."""

    @model_validator(mode="before")
    @classmethod
    def _wrap_sequence(cls, v: Any) -> Any:
        """Treat a bare sequence as the `data` field."""
        if isinstance(v, (list, tuple)):
            return {"data": v}
        return v

    @field_validator("data", mode="before")
    @classmethod
    def _validate_records(cls, v: Any) -> tuple[ValidatorRecord, ...]:
        """Decode every record, keeping the input order."""
        return _decode_records(v)

    @classmethod
    def build(cls, records: Iterable[ValidatorRecord | Mapping[str, Any]]) -> ValidatorSet:
        """
        Validate raw records into a set.

        Duplicate addresses are accepted. Use
        `duplicate_consensus_addresses` to report them.

        Raises:
            EmptySetError: If `records` is empty.
            FormatError: If a record holds a malformed address. The error
                names the record index and field.
        """
        return cls(data=_decode_records(records))

    @property
    def records(self) -> tuple[ValidatorRecord, ...]:
        """Read-only ordered view of the records."""
        return self.data

    def consensus_addresses(self) -> tuple[Address, ...]:
        """Consensus addresses in set order."""
        return tuple(r.consensus_addr for r in self.data)

    def fee_addresses(self) -> tuple[Address, ...]:
        """Fee addresses in set order."""
        return tuple(r.fee_addr for r in self.data)

    def duplicate_consensus_addresses(self) -> list[Address]:
        """Consensus addresses that occur more than once, in first-seen order."""
        counts = Counter(self.consensus_addresses())
        return [addr for addr, n in counts.items() if n > 1]

    def __len__(self) -> int:
        """Return the number of validators."""
        return len(self.data)

    def __iter__(self) -> Iterator[ValidatorRecord]:  # type: ignore[override]
        """Iterate over records in order."""
        return iter(self.data)

    @overload
    def __getitem__(self, index: int) -> ValidatorRecord: ...
    @overload
    def __getitem__(self, index: slice) -> Sequence[ValidatorRecord]: ...

    def __getitem__(self, index: int | slice) -> ValidatorRecord | Sequence[ValidatorRecord]:
        return self.data[index]


class MemberList(StrictBaseModel):
    """
    Flat ordered sequence of addresses for the membership artifact.

    Unlike `ValidatorSet`, a member list may be empty.
    """

    data: tuple[Address, ...] = Field(default_factory=tuple)

    @model_validator(mode="before")
    @classmethod
    def _wrap_sequence(cls, v: Any) -> Any:
        """Treat a bare sequence as the `data` field."""
        if isinstance(v, (list, tuple)):
            return {"data": v}
        return v

    @field_validator("data", mode="before")
    @classmethod
    def _validate_addresses(cls, v: Any) -> tuple[Address, ...]:
        return _decode_addresses(v)

    @classmethod
    def build(cls, addresses: Iterable[str | bytes | Address]) -> MemberList:
        """
        Decode a flat list of hex addresses.

        Raises:
            FormatError: If an address is malformed. The error names its index.
        """
        return cls(data=_decode_addresses(addresses))

    def __len__(self) -> int:
        return len(self.data)

    def __iter__(self) -> Iterator[Address]:  # type: ignore[override]
        return iter(self.data)

    def __getitem__(self, index: int) -> Address:
        return self.data[index]
