"""Key paths: dotted addresses of values inside nested keyed documents."""

from __future__ import annotations

import enum
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Any

from pykeypath._constants import KEY_PATH_SEPARATOR
from pykeypath._errors import ERR_MSG_EMPTY_KEY_PATH, InvalidKeyPathError


@dataclass(frozen=True)
class PathSegment:
    """One atomic key, addressing one level of nesting.

    ``int_value`` is only set for positions inside a list recorded in a
    coding path. Key lookups always use ``string_value``.
    """

    string_value: str
    int_value: int | None = None

    @classmethod
    def from_key(cls, key: Any) -> PathSegment:
        """Convert an external key into a segment, keeping its stringification."""
        if isinstance(key, PathSegment):
            return key
        if isinstance(key, str):
            return cls(key)
        if isinstance(key, int) and not isinstance(key, bool):
            return cls(str(key))
        string_value = getattr(key, "string_value", None)
        if isinstance(string_value, str):
            return cls(string_value)
        raise TypeError(f"cannot use {type(key).__name__} as a key path segment")

    @classmethod
    def index(cls, position: int) -> PathSegment:
        return cls(str(position), position)

    def __str__(self) -> str:
        return self.string_value


@dataclass(frozen=True)
class KeyPath:
    """An ordered sequence of segments.

    Segments are always stored as :class:`PathSegment`; use :meth:`parse` or
    :meth:`from_keys` to build one from other representations. An empty key
    path can be constructed but is rejected when it is resolved.
    """

    segments: tuple[PathSegment, ...] = ()

    @classmethod
    def parse(cls, text: str) -> KeyPath:
        """Split a dotted string into segments.

        Empty pieces are dropped, so ``""`` yields an empty key path and
        ``"a..b"`` yields ``a``, ``b``. Numeric-looking pieces stay strings.
        """
        return cls(tuple(
            PathSegment(piece)
            for piece in text.split(KEY_PATH_SEPARATOR)
            if piece
        ))

    @classmethod
    def from_keys(cls, keys: Iterable[Any]) -> KeyPath:
        return cls(tuple(PathSegment.from_key(key) for key in keys))

    @property
    def first(self) -> PathSegment:
        if not self.segments:
            raise InvalidKeyPathError(ERR_MSG_EMPTY_KEY_PATH)
        return self.segments[0]

    def dropping_first(self) -> KeyPath:
        return KeyPath(self.segments[1:])

    def __add__(self, other: object) -> KeyPath:
        if isinstance(other, KeyPath):
            return KeyPath(self.segments + other.segments)
        return NotImplemented

    def __len__(self) -> int:
        return len(self.segments)

    def __iter__(self) -> Iterator[PathSegment]:
        return iter(self.segments)

    def __bool__(self) -> bool:
        return bool(self.segments)

    def __str__(self) -> str:
        return KEY_PATH_SEPARATOR.join(s.string_value for s in self.segments)


class KeyPaths(enum.StrEnum):
    """Base class for a schema's closed set of named key paths.

    Each member's value is a dotted key path, parsed once when the class is
    created::

        class ProposalKeyPaths(KeyPaths):
            ID = "id"
            REVIEW_START_DATE = "metadata.reviewStartDate"

    A member whose value parses to an empty key path raises
    :class:`InvalidKeyPathError` at class creation.
    """

    def __init__(self, text: str) -> None:
        key_path = KeyPath.parse(text)
        if not key_path:
            raise InvalidKeyPathError(
                ERR_MSG_EMPTY_KEY_PATH,
                f"key path constant {self._name_!r} of {type(self).__name__} "
                f"has no segments: {text!r}",
            )
        self._key_path = key_path

    @property
    def key_path(self) -> KeyPath:
        return self._key_path
