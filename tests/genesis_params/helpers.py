"""Shared vectors and builders for genesis_params tests."""

from __future__ import annotations

from hypothesis import strategies as st

from genesis_params.types import Address
from genesis_params.validators import ValidatorRecord, ValidatorSet

# Consensus addresses of the first three mainnet validators.
VALIDATOR_ADDRESSES = [
    "0xff19437f7e54c71e06ee852d9331a1de74947a9c",
    "0xfd6ac9177cb6746d8b1b778593f1b30c36f08d5e",
    "0x621bb82013b8fd872e8c6d05464cd178a4022b7f",
]

# Initial governance members, checksummed as in examples/params.yaml.
MEMBER_ADDRESSES = [
    "0x1ef01E76f1aad50144A32680f16Aa97a10f8aF95",
    "0x140A939b5a10952f958A08244D93185F6a0bC91e",
    "0xB129986cAB3b865A6267415eE4Ca2d86a5704fdE",
]


def make_records(addresses: list[str]) -> list[dict[str, str]]:
    """Records whose fee address equals their consensus address."""
    return [{"consensusAddr": a, "feeAddr": a} for a in addresses]


def make_address(seed: int) -> Address:
    """A distinct address whose every byte is `seed`."""
    return Address(bytes([seed]) * 20)


def make_validator_set(count: int) -> ValidatorSet:
    """A set whose fee addresses differ from their consensus addresses."""
    return ValidatorSet.build(
        ValidatorRecord(consensus_addr=make_address(i), fee_addr=make_address(255 - i))
        for i in range(count)
    )


addresses = st.binary(min_size=20, max_size=20).map(Address)
"""Hypothesis strategy for arbitrary addresses."""

validator_records = st.builds(ValidatorRecord, consensusAddr=addresses, feeAddr=addresses)
"""Hypothesis strategy for arbitrary validator records."""
