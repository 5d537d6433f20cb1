"""Exception hierarchy for key-path encoding and decoding."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pykeypath.keypath import PathSegment


def format_coding_path(coding_path: Sequence[PathSegment]) -> str:
    """Render a coding path as a dotted string, with list positions in brackets."""
    parts: list[str] = []
    for segment in coding_path:
        if segment.int_value is not None:
            parts.append(f"[{segment.int_value}]")
        elif parts:
            parts.append(f".{segment.string_value}")
        else:
            parts.append(segment.string_value)
    return "".join(parts)


class CodingError(Exception):
    """Base exception for key-path encoding and decoding errors.

    Provides dual messaging: a short user-facing message and internal
    details (including the document position) for logging.
    """

    def __init__(
        self,
        user_message: str,
        internal_details: str = "",
        wrapped: Exception | None = None,
        coding_path: Sequence[PathSegment] = (),
    ) -> None:
        super().__init__(user_message)
        self.user_message = user_message
        self.internal_details = internal_details or user_message
        self.wrapped = wrapped
        self.coding_path = tuple(coding_path)

    @property
    def path_description(self) -> str:
        return format_coding_path(self.coding_path)

    def internal(self) -> str:
        if not self.coding_path:
            return self.internal_details
        return f"{self.internal_details} (at '{self.path_description}')"


class InvalidKeyPathError(CodingError):
    """Raised when a key path has no segments where at least one is required."""


class ValueNotFoundError(CodingError):
    """Raised when a required value or one of its enclosing sections is absent."""


class TypeMismatchError(CodingError):
    """Raised when a stored value does not have the expected shape or type."""


class DataCorruptedError(CodingError):
    """Raised when a stored value has the right shape but cannot be converted."""


class InvalidValueError(CodingError):
    """Raised when a value cannot be converted to its document form."""


ERR_MSG_EMPTY_KEY_PATH = "invalid key path: segments must not be empty"
ERR_MSG_VALUE_NOT_FOUND = "value not found"
ERR_MSG_TYPE_MISMATCH = "type mismatch"
ERR_MSG_DATA_CORRUPTED = "data corrupted"
ERR_MSG_INVALID_VALUE = "invalid value"
ERR_MSG_INVALID_JSON = "the given data was not valid JSON"
