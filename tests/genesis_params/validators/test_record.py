"""Tests for ValidatorRecord, ValidatorSet and MemberList."""

from __future__ import annotations

import pytest
from hypothesis import given
from pydantic import ValidationError

from genesis_params.types import Address, EmptySetError, FormatError
from genesis_params.validators import MemberList, ValidatorRecord, ValidatorSet
from tests.genesis_params.helpers import (
    MEMBER_ADDRESSES,
    VALIDATOR_ADDRESSES,
    make_address,
    make_records,
    validator_records,
)


class TestValidatorRecord:
    """Single records."""

    def test_from_camel_case_mapping(self) -> None:
        """Config files spell fields consensusAddr/feeAddr."""
        record = ValidatorRecord.from_raw(
            {"consensusAddr": VALIDATOR_ADDRESSES[0], "feeAddr": VALIDATOR_ADDRESSES[1]}
        )
        assert record.consensus_addr == Address(VALIDATOR_ADDRESSES[0])
        assert record.fee_addr == Address(VALIDATOR_ADDRESSES[1])

    def test_from_snake_case_mapping(self) -> None:
        """Snake case keys are accepted too."""
        record = ValidatorRecord.from_raw(
            {"consensus_addr": VALIDATOR_ADDRESSES[0], "fee_addr": VALIDATOR_ADDRESSES[0]}
        )
        assert record.consensus_addr == record.fee_addr

    def test_is_immutable(self) -> None:
        """Records are frozen once built."""
        record = ValidatorRecord(consensus_addr=make_address(1), fee_addr=make_address(2))
        with pytest.raises(ValidationError):
            record.fee_addr = make_address(3)  # type: ignore[misc]

    def test_missing_field(self) -> None:
        """A record without a fee address names the missing field."""
        with pytest.raises(FormatError, match="field 'feeAddr': missing address"):
            ValidatorRecord.from_raw({"consensusAddr": VALIDATOR_ADDRESSES[0]})

    def test_not_a_mapping(self) -> None:
        """Bare strings are not records."""
        with pytest.raises(FormatError, match="must be a mapping"):
            ValidatorRecord.from_raw(VALIDATOR_ADDRESSES[0])

    def test_unknown_field(self) -> None:
        """Extra keys are rejected like on every other config model."""
        raw = {**make_records(VALIDATOR_ADDRESSES[:1])[0], "comment": "first validator"}
        with pytest.raises(FormatError, match="record 4 field 'comment': unknown field"):
            ValidatorRecord.from_raw(raw, index=4)

    def test_unknown_field_in_config(self) -> None:
        """The same rejection surfaces through pydantic validation."""
        records = make_records(VALIDATOR_ADDRESSES)
        records[1]["name"] = "second"
        with pytest.raises(ValidationError, match="record 1 field 'name'"):
            ValidatorSet.model_validate(records)

    @given(validator_records)
    def test_generated_records_validate(self, record: ValidatorRecord) -> None:
        """Records built from the camel case aliases pass validation."""
        assert ValidatorRecord.from_raw(record) is record
        assert isinstance(record.consensus_addr, Address)
        assert len(record.fee_addr) == 20

    def test_serializes_camel_case(self) -> None:
        """Documents use the camel case key names."""
        record = ValidatorRecord(consensus_addr=make_address(1), fee_addr=make_address(2))
        assert record.to_document() == {
            "consensusAddr": "0x" + "01" * 20,
            "feeAddr": "0x" + "02" * 20,
        }


class TestValidatorSetBuild:
    """Validation performed by ValidatorSet.build."""

    def test_preserves_order(self) -> None:
        """Records come out in the order they went in."""
        validator_set = ValidatorSet.build(make_records(VALIDATOR_ADDRESSES))
        assert [str(a) for a in validator_set.consensus_addresses()] == VALIDATOR_ADDRESSES

    def test_reversed_input_stays_reversed(self) -> None:
        """No implicit sorting."""
        reversed_addresses = list(reversed(VALIDATOR_ADDRESSES))
        validator_set = ValidatorSet.build(make_records(reversed_addresses))
        assert [str(a) for a in validator_set.consensus_addresses()] == reversed_addresses

    def test_empty_fails(self) -> None:
        """Zero records is an EmptySetError."""
        with pytest.raises(EmptySetError, match="at least one validator"):
            ValidatorSet.build([])

    def test_empty_generator_fails(self) -> None:
        """Emptiness is detected for lazy iterables too."""
        with pytest.raises(EmptySetError):
            ValidatorSet.build(r for r in [])

    def test_39_char_address_fails(self) -> None:
        """A short address is a FormatError naming the record and field."""
        records = make_records(VALIDATOR_ADDRESSES)
        records[1]["feeAddr"] = "0x" + "a" * 39
        with pytest.raises(FormatError) as exc_info:
            ValidatorSet.build(records)
        err = exc_info.value
        assert err.index == 1
        assert err.field == "feeAddr"
        assert "record 1 field 'feeAddr'" in str(err)

    def test_duplicates_are_accepted(self) -> None:
        """Duplicate addresses are kept, in place."""
        addresses = [VALIDATOR_ADDRESSES[0], VALIDATOR_ADDRESSES[1], VALIDATOR_ADDRESSES[0]]
        validator_set = ValidatorSet.build(make_records(addresses))
        assert len(validator_set) == 3
        assert validator_set.duplicate_consensus_addresses() == [Address(VALIDATOR_ADDRESSES[0])]

    def test_no_duplicates_reported_for_distinct_set(self) -> None:
        """A clean set reports nothing."""
        validator_set = ValidatorSet.build(make_records(VALIDATOR_ADDRESSES))
        assert validator_set.duplicate_consensus_addresses() == []

    def test_accepts_records_and_mappings(self) -> None:
        """Prebuilt records mix with raw mappings."""
        record = ValidatorRecord(consensus_addr=make_address(7), fee_addr=make_address(8))
        validator_set = ValidatorSet.build([record, make_records(VALIDATOR_ADDRESSES[:1])[0]])
        assert validator_set[0] is record

    def test_rejects_string_input(self) -> None:
        """A single string is not a sequence of records."""
        with pytest.raises(FormatError, match="sequence of validator records"):
            ValidatorSet.build(VALIDATOR_ADDRESSES[0])  # type: ignore[arg-type]


class TestValidatorSetView:
    """Read-only sequence behaviour."""

    def test_sequence_protocol(self) -> None:
        """len, iteration, indexing and slicing follow input order."""
        validator_set = ValidatorSet.build(make_records(VALIDATOR_ADDRESSES))
        assert len(validator_set) == 3
        assert list(validator_set) == list(validator_set.records)
        assert validator_set[-1].consensus_addr == Address(VALIDATOR_ADDRESSES[2])
        assert len(validator_set[1:]) == 2

    def test_fee_addresses(self) -> None:
        """Fee addresses are exposed separately."""
        records = [
            {"consensusAddr": VALIDATOR_ADDRESSES[0], "feeAddr": VALIDATOR_ADDRESSES[2]},
            {"consensusAddr": VALIDATOR_ADDRESSES[1], "feeAddr": VALIDATOR_ADDRESSES[0]},
        ]
        validator_set = ValidatorSet.build(records)
        assert validator_set.fee_addresses() == (
            Address(VALIDATOR_ADDRESSES[2]),
            Address(VALIDATOR_ADDRESSES[0]),
        )

    def test_records_tuple_is_immutable(self) -> None:
        """The records view cannot be mutated."""
        validator_set = ValidatorSet.build(make_records(VALIDATOR_ADDRESSES))
        assert isinstance(validator_set.records, tuple)
        with pytest.raises(ValidationError):
            validator_set.data = ()  # type: ignore[misc]


class TestValidatorSetValidation:
    """ValidatorSet as a pydantic field value."""

    def test_bare_list_validates(self) -> None:
        """A YAML-style list of mappings validates directly."""
        validator_set = ValidatorSet.model_validate(make_records(VALIDATOR_ADDRESSES))
        assert len(validator_set) == 3

    def test_empty_list_is_validation_error(self) -> None:
        """Inside model validation, emptiness surfaces as a ValidationError."""
        with pytest.raises(ValidationError, match="at least one validator"):
            ValidatorSet.model_validate([])

    def test_bad_address_is_validation_error(self) -> None:
        """The record location survives into the validation message."""
        records = make_records(VALIDATOR_ADDRESSES)
        records[2]["consensusAddr"] = "0xnothex"
        with pytest.raises(ValidationError, match="record 2 field 'consensusAddr'"):
            ValidatorSet.model_validate(records)


class TestMemberList:
    """Flat address lists."""

    def test_build_preserves_order(self) -> None:
        """Members keep their input order and normalize case."""
        members = MemberList.build(MEMBER_ADDRESSES)
        assert [str(m) for m in members] == [a.lower() for a in MEMBER_ADDRESSES]

    def test_empty_is_allowed(self) -> None:
        """An empty member list is valid."""
        assert len(MemberList.build([])) == 0
        assert len(MemberList()) == 0

    def test_bad_member_names_index(self) -> None:
        """The failing element is identified by position."""
        with pytest.raises(FormatError, match="element 2") as exc_info:
            MemberList.build([*MEMBER_ADDRESSES[:2], "0x1234"])
        assert exc_info.value.index == 2

    def test_bare_list_validates(self) -> None:
        """Config files spell members as a plain list."""
        members = MemberList.model_validate(MEMBER_ADDRESSES)
        assert members[0] == Address(MEMBER_ADDRESSES[0])
