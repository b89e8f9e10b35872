"""Strict pydantic base models shared by configuration and artifact types."""

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """
    A base model whose external field names are camel case.

    The field `consensus_addr` is read from and written to `consensusAddr`,
    matching the key style of the contract templates that consume the
    generated parameters. Snake case names are accepted on input as well.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_default=True,
        arbitrary_types_allowed=True,
    )

    def to_document(self) -> dict[str, Any]:
        """Dump the model as a JSON-compatible dict with camel case keys."""
        return self.model_dump(mode="json", by_alias=True)


class StrictBaseModel(CamelModel):
    """A strict, immutable pydantic base model that rejects unknown keys."""

    model_config = CamelModel.model_config | {
        "extra": "forbid",
        "frozen": True,
        "strict": True,
    }
