"""Key and date conversion strategies for the JSON encoder and decoder."""

from __future__ import annotations

import enum
import re
from collections.abc import Sequence
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

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


class KeyEncodingStrategy(enum.StrEnum):
    """How schema keys are rewritten when written to a document."""

    USE_DEFAULT_KEYS = "use_default_keys"
    CONVERT_TO_SNAKE_CASE = "convert_to_snake_case"


class KeyDecodingStrategy(enum.StrEnum):
    """How document keys are rewritten before schema keys are looked up."""

    USE_DEFAULT_KEYS = "use_default_keys"
    CONVERT_FROM_SNAKE_CASE = "convert_from_snake_case"


class DateEncodingStrategy(enum.StrEnum):
    ISO8601 = "iso8601"
    SECONDS_SINCE_1970 = "seconds_since_1970"
    MILLISECONDS_SINCE_1970 = "milliseconds_since_1970"
    DEFERRED = "deferred"


class DateDecodingStrategy(enum.StrEnum):
    ISO8601 = "iso8601"
    SECONDS_SINCE_1970 = "seconds_since_1970"
    MILLISECONDS_SINCE_1970 = "milliseconds_since_1970"
    DEFERRED = "deferred"


_WORD_BOUNDARY_RE = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")
_UTC_SUFFIX = "Z"


def _split_underscores(key: str) -> tuple[str, str, str]:
    """Split a key into (leading underscores, body, trailing underscores)."""
    body = key.strip("_")
    if not body:
        return key, "", ""
    start = key.index(body)
    return key[:start], body, key[start + len(body):]


def convert_to_snake_case(key: str) -> str:
    """Convert a camelCase key to snake_case.

    Acronyms are kept together: ``myURLValue`` becomes ``my_url_value``.
    """
    leading, body, trailing = _split_underscores(key)
    if not body:
        return key
    return leading + _WORD_BOUNDARY_RE.sub("_", body).lower() + trailing


def convert_from_snake_case(key: str) -> str:
    """Convert a snake_case key to camelCase.

    Keys without an inner underscore are returned unchanged. Leading and
    trailing underscores are preserved.
    """
    leading, body, trailing = _split_underscores(key)
    if "_" not in body:
        return key
    words = [word for word in body.split("_") if word]
    return leading + words[0] + "".join(w.capitalize() for w in words[1:]) + trailing


def encode_key(strategy: KeyEncodingStrategy, key: str) -> str:
    if strategy == KeyEncodingStrategy.CONVERT_TO_SNAKE_CASE:
        return convert_to_snake_case(key)
    return key


def decode_key(strategy: KeyDecodingStrategy, key: str) -> str:
    if strategy == KeyDecodingStrategy.CONVERT_FROM_SNAKE_CASE:
        return convert_from_snake_case(key)
    return key


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc)


def encode_date(
    strategy: DateEncodingStrategy,
    value: datetime,
    coding_path: Sequence[PathSegment] = (),
) -> Any:
    """Convert a datetime to its document form.

    ISO 8601 output is in UTC with a ``Z`` suffix for aware values and has no
    offset for naive ones, so naive values read back naive. Epoch strategies
    need an absolute instant and reject naive values.

    Returns None for ``DEFERRED``; the caller hands the value to the
    generic value conversion instead.
    """
    if strategy == DateEncodingStrategy.ISO8601:
        if value.tzinfo is None:
            return value.isoformat()
        return _as_utc(value).replace(tzinfo=None).isoformat() + _UTC_SUFFIX
    if strategy == DateEncodingStrategy.DEFERRED:
        return None
    if value.tzinfo is None:
        raise InvalidValueError(
            ERR_MSG_INVALID_VALUE,
            f"cannot encode naive datetime {value.isoformat()} as {strategy.value}",
            coding_path=coding_path,
        )
    if strategy == DateEncodingStrategy.SECONDS_SINCE_1970:
        return value.timestamp()
    return value.timestamp() * 1000.0


def decode_date(
    strategy: DateDecodingStrategy,
    raw: Any,
    coding_path: Sequence[PathSegment],
) -> datetime:
    """Convert the document form of a date back to a datetime.

    ISO 8601 strings without an offset give naive values; everything else
    gives UTC-aware values.
    """
    if strategy == DateDecodingStrategy.ISO8601:
        if not isinstance(raw, str):
            raise TypeMismatchError(
                ERR_MSG_TYPE_MISMATCH,
                f"expected an ISO 8601 date string but found {type(raw).__name__}",
                coding_path=coding_path,
            )
        try:
            parsed = datetime.fromisoformat(raw)
        except ValueError as e:
            raise DataCorruptedError(
                ERR_MSG_DATA_CORRUPTED,
                f"expected date string to be ISO 8601 formatted: {raw!r}",
                wrapped=e,
                coding_path=coding_path,
            ) from e
        return _as_utc(parsed)

    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise TypeMismatchError(
            ERR_MSG_TYPE_MISMATCH,
            f"expected a numeric timestamp but found {type(raw).__name__}",
            coding_path=coding_path,
        )
    seconds = raw / 1000.0 if strategy == DateDecodingStrategy.MILLISECONDS_SINCE_1970 else raw
    try:
        return datetime.fromtimestamp(seconds, tz=timezone.utc)
    except (OverflowError, OSError, ValueError) as e:
        raise DataCorruptedError(
            ERR_MSG_DATA_CORRUPTED,
            f"timestamp out of range: {raw!r}",
            wrapped=e,
            coding_path=coding_path,
        ) from e
