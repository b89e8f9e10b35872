"""Genesis parameter configuration loader.

Loads the per-network inputs of a generation run from YAML:

    networks:
      mainnet:
        validators:
          - consensusAddr: "0xff19437f7e54c71e06ee852d9331a1de74947a9c"
            feeAddr: "0xff19437f7e54c71e06ee852d9331a1de74947a9c"
        members:
          - "0x1ef01E76f1aad50144A32680f16Aa97a10f8aF95"
        holders:
          - address: "0x1ef01E76f1aad50144A32680f16Aa97a10f8aF95"
            balance: 100000000000000000000000000
        cycle:
          blockPeriod: 3
          epochLength: 20
          roundInterval: 1800
          validatorCount: 7
        lightClient:
          initChainHeight: 1

Every field except `validators` is optional. Quote addresses. Unquoted
`0x...` scalars are read as strings, but an unquoted all-decimal address is
read as an integer and rejected.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, field_validator

from genesis_params.types import Address, GenesisParamsError, StrictBaseModel
from genesis_params.validators import MemberList, ValidatorSet

DEFAULT_INIT_CONSENSUS_STATE_BYTES = (
    "0000002006226e46111a0b59caaf126043eb5bbf28c34f3a5e332a1fc7b2b73cf188910f"
    "7c878e0bd00e7c302328e8d22e26d7f519f26329e6c0462ae89059fb7fd732811728f763"
    "ffff7f2001000000"
)
"""Regtest Bitcoin block header the light client starts from when none is configured."""

_EVEN_HEX = re.compile(r"(?:[0-9a-fA-F]{2})*")

_YAML_INT_TAG = "tag:yaml.org,2002:int"


class _ConfigLoader(yaml.SafeLoader):
    """
    SafeLoader that only reads plain decimal literals as integers.

    YAML 1.1 also resolves `0x...`, `0o...`, `0b...` and sexagesimal
    scalars to ints, which turns an unquoted address into a number and
    drops its digit count. Those scalars stay strings here, so address
    validation sees exactly what the file says.
    """


_ConfigLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != _YAML_INT_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
_ConfigLoader.add_implicit_resolver(
    _YAML_INT_TAG,
    re.compile(r"^[-+]?(?:0|[1-9][0-9_]*)$"),
    list("-+0123456789"),
)


def _parse_uint(value: Any, name: str) -> Any:
    """Accept decimal strings for large integers that YAML users tend to quote."""
    if isinstance(value, str):
        try:
            return int(value, 10)
        except ValueError as e:
            raise ValueError(f"{name} must be a decimal integer, got {value!r}") from e
    return value


class InitHolder(StrictBaseModel):
    """An account funded at genesis."""

    address: Address

    balance: int = Field(ge=0)
    """Initial balance in the chain's smallest unit."""

    @field_validator("balance", mode="before")
    @classmethod
    def parse_balance(cls, v: Any) -> Any:
        """Allow balances above YAML's comfortable integer range to be quoted."""
        return _parse_uint(v, "balance")

    def balance_hex(self) -> str:
        """Balance as lower-case hex without prefix."""
        return format(self.balance, "x")


class CycleParams(StrictBaseModel):
    """Timing of the consensus cycle, rendered into the system contracts."""

    block_period: int = Field(default=3, gt=0)
    """Seconds between blocks."""

    epoch_length: int = Field(default=20, gt=0)
    """Blocks per epoch."""

    round_interval: int = Field(default=1800, gt=0)
    """Seconds per validator election round."""

    validator_count: int = Field(default=7, gt=0)
    """Size of the elected validator set."""


class LightClientParams(StrictBaseModel):
    """
    Bootstrap values for the on-chain Bitcoin light client contract.

    The consensus state bytes are an opaque block header. They are checked
    for being hex and otherwise passed through verbatim.
    """

    init_consensus_state_bytes: str = DEFAULT_INIT_CONSENSUS_STATE_BYTES
    """Serialized starting header, hex without `0x` prefix."""

    init_chain_height: int = Field(default=1, ge=0)
    """Height of the starting header."""

    reward_for_validator_set_change: int = Field(default=10**16, ge=0)
    """Reward paid to relayers for submitting a validator set change."""

    mock: bool = False
    """Whether the contract is rendered in mock mode."""

    @field_validator("init_consensus_state_bytes", mode="before")
    @classmethod
    def check_hex(cls, v: Any) -> Any:
        """Drop an optional 0x prefix and require whole hex bytes."""
        if isinstance(v, str):
            v = v[2:] if v[:2] in ("0x", "0X") else v
            if not _EVEN_HEX.fullmatch(v):
                raise ValueError("init_consensus_state_bytes must be an even-length hex string")
        return v

    @field_validator("reward_for_validator_set_change", mode="before")
    @classmethod
    def parse_reward(cls, v: Any) -> Any:
        """Allow the reward to be quoted."""
        return _parse_uint(v, "reward_for_validator_set_change")


class NetworkConfig(StrictBaseModel):
    """Everything needed to generate the parameters of one target network."""

    validators: ValidatorSet
    """Initial validators, in on-chain index order."""

    members: MemberList = Field(default_factory=MemberList)
    """Initial governance members."""

    holders: list[InitHolder] = Field(default_factory=list)
    """Accounts funded at genesis."""

    cycle: CycleParams = Field(default_factory=CycleParams)

    light_client: LightClientParams = Field(default_factory=LightClientParams)


class GenesisParamsConfig(StrictBaseModel):
    """Named target networks, each configured independently."""

    networks: dict[str, NetworkConfig]

    @field_validator("networks")
    @classmethod
    def require_networks(cls, v: dict[str, NetworkConfig]) -> dict[str, NetworkConfig]:
        """A config file that defines no networks is a mistake."""
        if not v:
            raise ValueError("config must define at least one network")
        return v

    def network(self, name: str) -> NetworkConfig:
        """
        Look up one network by name.

        Raises:
            GenesisParamsError: If the config does not define it.
        """
        try:
            return self.networks[name]
        except KeyError:
            known = ", ".join(sorted(self.networks))
            raise GenesisParamsError(f"unknown network '{name}' (defined: {known})") from None

    @classmethod
    def from_yaml_file(cls, path: Path | str) -> GenesisParamsConfig:
        """
        Load configuration from a YAML file.

        Raises:
            FileNotFoundError: If the file does not exist.
            yaml.YAMLError: If the file is not valid YAML.
            pydantic.ValidationError: If the data fails validation.
        """
        path = Path(path)
        with path.open(encoding="utf-8") as f:
            data = yaml.load(f, Loader=_ConfigLoader)
        return cls.model_validate(data)

    @classmethod
    def from_yaml(cls, content: str) -> GenesisParamsConfig:
        """Load configuration from a YAML string."""
        return cls.model_validate(yaml.load(content, Loader=_ConfigLoader))
