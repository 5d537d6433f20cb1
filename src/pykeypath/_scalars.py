"""Conversion of plain leaf values through pydantic type adapters."""

from __future__ import annotations

import functools
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from pydantic import PydanticSchemaGenerationError, TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

from pykeypath._errors import (
    ERR_MSG_DATA_CORRUPTED,
    ERR_MSG_INVALID_VALUE,
    ERR_MSG_TYPE_MISMATCH,
    DataCorruptedError,
    InvalidValueError,
    TypeMismatchError,
)

if TYPE_CHECKING:
    from pykeypath.keypath import PathSegment

JSON_SCALARS = (str, int, float, bool)


@functools.lru_cache(maxsize=256)
def _adapter(type_: Any) -> TypeAdapter[Any]:
    return TypeAdapter(type_)


def _type_name(type_: Any) -> str:
    return getattr(type_, "__name__", repr(type_))


def dump_scalar(value: Any, coding_path: Sequence[PathSegment]) -> Any:
    """Convert a leaf value to its JSON-compatible form."""
    if value is None or type(value) in JSON_SCALARS:
        return value
    try:
        return _adapter(type(value)).dump_python(value, mode="json")
    except (PydanticSerializationError, PydanticSchemaGenerationError) as e:
        raise InvalidValueError(
            ERR_MSG_INVALID_VALUE,
            f"cannot encode value of type {type(value).__name__}: {e}",
            wrapped=e,
            coding_path=coding_path,
        ) from e


def load_scalar(
    type_: Any,
    raw: Any,
    coding_path: Sequence[PathSegment],
    strict: bool | None = None,
) -> Any:
    """Validate a raw document value as ``type_``.

    JSON scalar targets (str, int, float, bool) are validated strictly unless
    ``strict`` says otherwise, so ``"3"`` is not an int and ``1`` is not a bool.

    Pydantic errors of a ``*_type`` kind mean the stored value has the wrong
    shape; everything else means the value could not be converted.
    """
    try:
        adapter = _adapter(type_)
    except PydanticSchemaGenerationError as e:
        raise TypeMismatchError(
            ERR_MSG_TYPE_MISMATCH,
            f"cannot decode values of type {_type_name(type_)}",
            wrapped=e,
            coding_path=coding_path,
        ) from e
    try:
        if strict is None:
            strict = type_ in JSON_SCALARS
        return adapter.validate_python(raw, strict=strict)
    except ValidationError as e:
        details = e.errors(include_url=False)
        kind = details[0]["type"] if details else ""
        error_cls = TypeMismatchError if kind.endswith("_type") else DataCorruptedError
        user_message = ERR_MSG_TYPE_MISMATCH if error_cls is TypeMismatchError else ERR_MSG_DATA_CORRUPTED
        raise error_cls(
            user_message,
            f"expected {_type_name(type_)}: {details[0]['msg'] if details else e}",
            wrapped=e,
            coding_path=coding_path,
        ) from e
