"""Typed key-path containers handed to a schema's encode and decode logic."""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from pykeypath._containers import ABSENT, CodingPath, KeyedReader, KeyedWriter
from pykeypath._errors import ERR_MSG_VALUE_NOT_FOUND, ValueNotFoundError
from pykeypath._resolver import resolve_for_read, resolve_for_write
from pykeypath.keypath import KeyPath, KeyPaths

K = TypeVar("K", bound=KeyPaths)


def _key_path_of(keyed_by: type[KeyPaths], key_path: Any) -> KeyPath:
    if not isinstance(key_path, keyed_by):
        raise TypeError(
            f"expected a member of {keyed_by.__name__}, got {key_path!r}"
        )
    return key_path.key_path


class KeyPathEncodingContainer(Generic[K]):
    """Writes values at the key paths declared by ``keyed_by``."""

    def __init__(self, keyed_by: type[K], container: KeyedWriter) -> None:
        self.keyed_by = keyed_by
        self._container = container

    @property
    def coding_path(self) -> CodingPath:
        return self._container.coding_path

    def encode(self, value: Any, key_path: K) -> None:
        resolve_for_write(_key_path_of(self.keyed_by, key_path), self._container, value)

    def encode_if_present(self, value: Any, key_path: K) -> None:
        """Encode ``value`` unless it is None, in which case nothing is written."""
        if value is None:
            return
        self.encode(value, key_path)


class KeyPathDecodingContainer(Generic[K]):
    """Reads values at the key paths declared by ``keyed_by``."""

    def __init__(self, keyed_by: type[K], container: KeyedReader) -> None:
        self.keyed_by = keyed_by
        self._container = container

    @property
    def coding_path(self) -> CodingPath:
        return self._container.coding_path

    def contains(self, key_path: K) -> bool:
        """Return True if every section along ``key_path`` and the leaf key exist."""
        path = _key_path_of(self.keyed_by, key_path)
        return resolve_for_read(path, self._container, Any) is not ABSENT

    def decode_if_present(self, type_: Any, key_path: K, default: Any = None) -> Any:
        value = resolve_for_read(_key_path_of(self.keyed_by, key_path), self._container, type_)
        if value is ABSENT or value is None:
            return default
        return value

    def decode(self, type_: Any, key_path: K) -> Any:
        path = _key_path_of(self.keyed_by, key_path)
        value = resolve_for_read(path, self._container, type_)
        if value is ABSENT or value is None:
            raise ValueNotFoundError(
                ERR_MSG_VALUE_NOT_FOUND,
                f"expected {getattr(type_, '__name__', repr(type_))} value at '{path}'",
                coding_path=(KeyPath(self.coding_path) + path).segments,
            )
        return value
