"""Walks a key path through nested keyed sections to a leaf read or write."""

from __future__ import annotations

import logging
from typing import Any

from pykeypath._containers import ABSENT, KeyedReader, KeyedWriter
from pykeypath._errors import (
    ERR_MSG_EMPTY_KEY_PATH,
    InvalidKeyPathError,
    format_coding_path,
)
from pykeypath.keypath import KeyPath, PathSegment

logger = logging.getLogger(__name__)


def _reject_empty(key_path: KeyPath, coding_path: tuple[PathSegment, ...]) -> None:
    if not key_path:
        raise InvalidKeyPathError(
            ERR_MSG_EMPTY_KEY_PATH,
            "key path segments must not be empty",
            coding_path=(KeyPath(coding_path) + key_path).segments,
        )


def resolve_for_read(key_path: KeyPath, cursor: KeyedReader, type_: Any) -> Any:
    """Read the value at ``key_path`` below ``cursor``.

    Each segment but the last steps into a nested object. Returns ABSENT if
    the leaf or any enclosing section is missing or null, None if the leaf
    is null, and the converted value otherwise.

    Raises:
        InvalidKeyPathError: If the key path has no segments.
        TypeMismatchError: If an enclosing section is not an object, or the
            leaf does not have the shape of ``type_``.
        DataCorruptedError: If the leaf cannot be converted to ``type_``.
    """
    _reject_empty(key_path, cursor.coding_path)
    *intermediate, leaf = key_path.segments
    current: KeyedReader | None = cursor
    for segment in intermediate:
        current = current.nested_container_if_present(segment)
        if current is None:
            logger.debug(
                "Section %r missing while reading %r at %r",
                segment.string_value,
                str(key_path),
                format_coding_path(cursor.coding_path),
            )
            return ABSENT
    return current.decode_if_present(type_, leaf)


def resolve_for_write(key_path: KeyPath, cursor: KeyedWriter, value: Any) -> None:
    """Write ``value`` at ``key_path`` below ``cursor``.

    The value is converted before any nested object is created, so a value
    that cannot be encoded leaves the document untouched.

    Raises:
        InvalidKeyPathError: If the key path has no segments.
        TypeMismatchError: If an enclosing key already holds a non-object.
        InvalidValueError: If the value cannot be converted.
    """
    _reject_empty(key_path, cursor.coding_path)
    boxed = cursor.box(value, (KeyPath(cursor.coding_path) + key_path).segments)
    *intermediate, leaf = key_path.segments
    current = cursor
    for segment in intermediate:
        current = current.nested_container(segment)
    current.encode_boxed(leaf, boxed)
