"""Exception hierarchy for genesis parameter generation."""

from __future__ import annotations

from typing import Any


class GenesisParamsError(Exception):
    """
    Base exception for all genesis parameter errors.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r})"


class FormatError(GenesisParamsError, ValueError):
    """
    Raised when an input cannot be parsed into its canonical byte form.

    Covers malformed hexadecimal addresses as well as corrupt encoded bytes.

    Attributes:
        detail: Description of what went wrong.
        value: The offending input (truncated for display).
        index: Position of the offending record or element, if known.
        field: Name of the offending field within a record, if known.
    """

    def __init__(
        self,
        detail: str,
        *,
        value: Any = None,
        index: int | None = None,
        field: str | None = None,
    ) -> None:
        self.detail = detail
        self.value = value
        self.index = index
        self.field = field

        location = ""
        if index is not None and field is not None:
            location = f"record {index} field '{field}': "
        elif index is not None:
            location = f"element {index}: "
        elif field is not None:
            location = f"field '{field}': "

        msg = f"{location}{detail}"
        if value is not None:
            value_repr = repr(value)
            if len(value_repr) > 50:
                value_repr = value_repr[:47] + "..."
            msg = f"{msg}: {value_repr}"

        super().__init__(msg)

    def at(self, *, index: int | None = None, field: str | None = None) -> FormatError:
        """Return a copy of this error annotated with the record location."""
        return FormatError(
            self.detail,
            value=self.value,
            index=index if index is not None else self.index,
            field=field if field is not None else self.field,
        )


class EmptySetError(GenesisParamsError, ValueError):
    """
    Raised when a validator set is built from zero records.

    Attributes:
        type_name: The collection type that rejected the empty input.
    """

    def __init__(self, type_name: str = "ValidatorSet") -> None:
        self.type_name = type_name
        super().__init__(f"{type_name} requires at least one validator, got 0")


class RLPDecodingError(FormatError):
    """
    Raised when RLP bytes are truncated, malformed or non-canonical.

    Attributes:
        offset: The byte offset where the error occurred (if known).
    """

    def __init__(self, detail: str, *, offset: int | None = None) -> None:
        self.offset = offset
        if offset is not None:
            detail = f"{detail} (at byte offset {offset})"
        super().__init__(f"Invalid RLP: {detail}")
