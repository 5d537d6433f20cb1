"""Container cursors: handles positioned at one nesting level of a document.

A :class:`KeyedWriter` wraps the ``dict`` being built during encoding and a
:class:`KeyedReader` wraps the ``dict`` being read during decoding; the
unkeyed variants wrap a ``list``. Descending into a nested section always
returns a new cursor; cursors never share position state with each other.
"""

from __future__ import annotations

import enum
import types
import typing
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from pykeypath._errors import (
    ERR_MSG_TYPE_MISMATCH,
    ERR_MSG_VALUE_NOT_FOUND,
    CodingError,
    TypeMismatchError,
    ValueNotFoundError,
)
from pykeypath._scalars import dump_scalar, load_scalar
from pykeypath.keypath import KeyPaths, PathSegment
from pykeypath.strategies import (
    DateDecodingStrategy,
    DateEncodingStrategy,
    KeyDecodingStrategy,
    KeyEncodingStrategy,
    decode_date,
    decode_key,
    encode_date,
    encode_key,
)

if TYPE_CHECKING:
    from pykeypath._facade import KeyPathDecodingContainer, KeyPathEncodingContainer

CodingPath = tuple[PathSegment, ...]

_NONE_TYPE = type(None)


class _Absent(enum.Enum):
    ABSENT = "absent"

    def __repr__(self) -> str:
        return "ABSENT"


ABSENT = _Absent.ABSENT
"""Result of reading a key that does not exist (as opposed to a JSON null)."""


@runtime_checkable
class Encodable(Protocol):
    def encode_to(self, encoder: ValueEncoder) -> None: ...


@runtime_checkable
class Decodable(Protocol):
    @classmethod
    def decode_from(cls, decoder: ValueDecoder) -> Any: ...


def _is_decodable_type(type_: Any) -> bool:
    return isinstance(type_, type) and isinstance(type_, Decodable)


@dataclass(frozen=True)
class EncodingOptions:
    key_encoding_strategy: KeyEncodingStrategy = KeyEncodingStrategy.USE_DEFAULT_KEYS
    date_encoding_strategy: DateEncodingStrategy = DateEncodingStrategy.ISO8601


@dataclass(frozen=True)
class DecodingOptions:
    key_decoding_strategy: KeyDecodingStrategy = KeyDecodingStrategy.USE_DEFAULT_KEYS
    date_decoding_strategy: DateDecodingStrategy = DateDecodingStrategy.ISO8601


def _type_name(type_: Any) -> str:
    return getattr(type_, "__name__", repr(type_))


def _kind_of(raw: Any) -> str:
    if raw is None:
        return "null"
    if isinstance(raw, dict):
        return "an object"
    if isinstance(raw, list):
        return "an array"
    return type(raw).__name__


def _expect_object(raw: Any, coding_path: CodingPath) -> dict[str, Any]:
    if not isinstance(raw, dict):
        raise TypeMismatchError(
            ERR_MSG_TYPE_MISMATCH,
            f"expected an object but found {_kind_of(raw)}",
            coding_path=coding_path,
        )
    return raw


def _expect_array(raw: Any, coding_path: CodingPath) -> list[Any]:
    if not isinstance(raw, list):
        raise TypeMismatchError(
            ERR_MSG_TYPE_MISMATCH,
            f"expected an array but found {_kind_of(raw)}",
            coding_path=coding_path,
        )
    return raw


# --- Leaf values ---


def _box_key(key: Any, coding_path: CodingPath) -> str:
    if isinstance(key, str):
        return key
    dumped = dump_scalar(key, coding_path)
    return dumped if isinstance(dumped, str) else str(dumped)


def box(value: Any, options: EncodingOptions, coding_path: CodingPath) -> Any:
    """Convert a value to its document form.

    Schema types are encoded through ``encode_to`` wherever they appear,
    including inside lists, tuples and dict values.
    """
    if isinstance(value, Encodable) and not isinstance(value, type):
        encoder = ValueEncoder(options, coding_path)
        value.encode_to(encoder)
        return encoder.storage if encoder.storage is not None else {}
    if isinstance(value, (list, tuple)):
        return [
            box(item, options, coding_path + (PathSegment.index(i),))
            for i, item in enumerate(value)
        ]
    if isinstance(value, dict):
        boxed: dict[str, Any] = {}
        for key, item in value.items():
            name = _box_key(key, coding_path)
            boxed[name] = box(item, options, coding_path + (PathSegment(name),))
        return boxed
    if isinstance(value, datetime):
        encoded = encode_date(options.date_encoding_strategy, value, coding_path)
        if encoded is not None:
            return encoded
    return dump_scalar(value, coding_path)


def _needs_walk(type_: Any, options: DecodingOptions) -> bool:
    """Return True if ``type_`` mentions a schema type or a strategy-handled date."""
    if _is_decodable_type(type_):
        return True
    if type_ is datetime:
        return options.date_decoding_strategy != DateDecodingStrategy.DEFERRED
    return any(
        _needs_walk(arg, options)
        for arg in typing.get_args(type_)
        if isinstance(arg, type) or typing.get_origin(arg) is not None
    )


def _unbox_union(
    members: list[Any], raw: Any, options: DecodingOptions, coding_path: CodingPath
) -> Any:
    if len(members) == 1:
        return unbox(members[0], raw, options, coding_path)
    errors: list[CodingError] = []
    for member in members:
        try:
            return unbox(member, raw, options, coding_path)
        except CodingError as e:
            errors.append(e)
    raise errors[-1]


def _unbox_generic(
    type_: Any, raw: Any, options: DecodingOptions, coding_path: CodingPath
) -> Any:
    """Walk a parameterized type, decoding schema types found inside it."""
    origin = typing.get_origin(type_)
    args = typing.get_args(type_)

    if origin is typing.Union or origin is types.UnionType:
        members = [arg for arg in args if arg is not _NONE_TYPE]
        if raw is None and len(members) < len(args):
            return None
        return _unbox_union(members, raw, options, coding_path)

    if origin is typing.Annotated:
        return unbox(args[0], raw, options, coding_path)

    if origin is list:
        return [
            unbox(args[0], item, options, coding_path + (PathSegment.index(i),))
            for i, item in enumerate(_expect_array(raw, coding_path))
        ]

    if origin is tuple:
        items = _expect_array(raw, coding_path)
        if len(args) == 2 and args[1] is Ellipsis:
            item_types = [args[0]] * len(items)
        elif len(args) != len(items):
            raise TypeMismatchError(
                ERR_MSG_TYPE_MISMATCH,
                f"expected an array of {len(args)} items but found {len(items)}",
                coding_path=coding_path,
            )
        else:
            item_types = list(args)
        return tuple(
            unbox(item_type, item, options, coding_path + (PathSegment.index(i),))
            for i, (item_type, item) in enumerate(zip(item_types, items))
        )

    if origin is dict:
        key_type, value_type = args
        result = {}
        for key, item in _expect_object(raw, coding_path).items():
            path = coding_path + (PathSegment(key),)
            result[load_scalar(key_type, key, path, strict=False)] = unbox(
                value_type, item, options, path
            )
        return result

    raise TypeMismatchError(
        ERR_MSG_TYPE_MISMATCH,
        f"cannot decode values of type {type_!r}",
        coding_path=coding_path,
    )


def unbox(type_: Any, raw: Any, options: DecodingOptions, coding_path: CodingPath) -> Any:
    """Convert a document value back to ``type_``."""
    if _is_decodable_type(type_):
        return type_.decode_from(ValueDecoder(options, raw, coding_path))
    if type_ is datetime and options.date_decoding_strategy != DateDecodingStrategy.DEFERRED:
        return decode_date(options.date_decoding_strategy, raw, coding_path)
    if _needs_walk(type_, options):
        return _unbox_generic(type_, raw, options, coding_path)
    return load_scalar(type_, raw, coding_path)


# --- Keyed cursors ---


class KeyedWriter:
    """Writer cursor over one JSON object being built."""

    def __init__(
        self,
        storage: dict[str, Any],
        options: EncodingOptions,
        coding_path: CodingPath = (),
    ) -> None:
        self._storage = storage
        self._options = options
        self.coding_path = coding_path

    def _key(self, key: Any) -> tuple[PathSegment, str]:
        segment = PathSegment.from_key(key)
        return segment, encode_key(self._options.key_encoding_strategy, segment.string_value)

    def box(self, value: Any, coding_path: CodingPath) -> Any:
        return box(value, self._options, coding_path)

    def encode(self, key: Any, value: Any) -> None:
        segment, name = self._key(key)
        self._storage[name] = self.box(value, self.coding_path + (segment,))

    def encode_boxed(self, key: Any, boxed: Any) -> None:
        """Store an already converted value."""
        _, name = self._key(key)
        self._storage[name] = boxed

    def encode_none(self, key: Any) -> None:
        _, name = self._key(key)
        self._storage[name] = None

    def _claim(self, key: Any, kind: type) -> tuple[CodingPath, Any]:
        segment, name = self._key(key)
        child_path = self.coding_path + (segment,)
        existing = self._storage.get(name)
        if existing is None:
            existing = kind()
            self._storage[name] = existing
        elif not isinstance(existing, kind):
            raise TypeMismatchError(
                ERR_MSG_TYPE_MISMATCH,
                f"cannot nest {_kind_of(kind())} under a key that already holds {_kind_of(existing)}",
                coding_path=child_path,
            )
        return child_path, existing

    def nested_container(self, key: Any) -> KeyedWriter:
        """Return a writer for the object at ``key``, creating it if needed."""
        child_path, existing = self._claim(key, dict)
        return KeyedWriter(existing, self._options, child_path)

    def nested_unkeyed_container(self, key: Any) -> UnkeyedWriter:
        """Return a writer appending to the array at ``key``, creating it if needed."""
        child_path, existing = self._claim(key, list)
        return UnkeyedWriter(existing, self._options, child_path)

    def nested_key_path_container(
        self, keyed_by: type[KeyPaths], key: Any
    ) -> KeyPathEncodingContainer:
        from pykeypath._facade import KeyPathEncodingContainer

        return KeyPathEncodingContainer(keyed_by, self.nested_container(key))


class KeyedReader:
    """Reader cursor over one JSON object of the input document."""

    def __init__(
        self,
        storage: dict[str, Any],
        options: DecodingOptions,
        coding_path: CodingPath = (),
    ) -> None:
        self._options = options
        self.coding_path = coding_path
        strategy = options.key_decoding_strategy
        if strategy == KeyDecodingStrategy.USE_DEFAULT_KEYS:
            self._storage = storage
        else:
            self._storage = {decode_key(strategy, k): v for k, v in storage.items()}

    @property
    def all_keys(self) -> list[str]:
        return list(self._storage)

    def contains(self, key: Any) -> bool:
        return PathSegment.from_key(key).string_value in self._storage

    def _lookup(self, key: Any) -> tuple[CodingPath, Any]:
        segment = PathSegment.from_key(key)
        return self.coding_path + (segment,), self._storage.get(segment.string_value, ABSENT)

    def decode_nil(self, key: Any) -> bool:
        """Return True if the value at ``key`` is JSON null."""
        path, raw = self._lookup(key)
        if raw is ABSENT:
            raise ValueNotFoundError(
                ERR_MSG_VALUE_NOT_FOUND,
                "no value associated with key",
                coding_path=path,
            )
        return raw is None

    def decode_if_present(self, type_: Any, key: Any) -> Any:
        """Decode the value at ``key``; ABSENT if missing, None if null."""
        path, raw = self._lookup(key)
        if raw is ABSENT or raw is None:
            return raw
        return unbox(type_, raw, self._options, path)

    def decode(self, type_: Any, key: Any) -> Any:
        path, raw = self._lookup(key)
        if raw is ABSENT:
            raise ValueNotFoundError(
                ERR_MSG_VALUE_NOT_FOUND,
                f"no value associated with key, expected {_type_name(type_)}",
                coding_path=path,
            )
        if raw is None:
            raise ValueNotFoundError(
                ERR_MSG_VALUE_NOT_FOUND,
                f"expected {_type_name(type_)} value but found null instead",
                coding_path=path,
            )
        return unbox(type_, raw, self._options, path)

    def nested_container_if_present(self, key: Any) -> KeyedReader | None:
        """Return a reader for the object at ``key``, or None if missing or null."""
        path, raw = self._lookup(key)
        if raw is ABSENT or raw is None:
            return None
        return KeyedReader(_expect_object(raw, path), self._options, path)

    def nested_container(self, key: Any) -> KeyedReader:
        child = self.nested_container_if_present(key)
        if child is None:
            raise ValueNotFoundError(
                ERR_MSG_VALUE_NOT_FOUND,
                "no nested object associated with key",
                coding_path=self.coding_path + (PathSegment.from_key(key),),
            )
        return child

    def nested_unkeyed_container(self, key: Any) -> UnkeyedReader:
        path, raw = self._lookup(key)
        if raw is ABSENT or raw is None:
            raise ValueNotFoundError(
                ERR_MSG_VALUE_NOT_FOUND,
                "no nested array associated with key",
                coding_path=path,
            )
        return UnkeyedReader(_expect_array(raw, path), self._options, path)

    def nested_key_path_container(
        self, keyed_by: type[KeyPaths], key: Any
    ) -> KeyPathDecodingContainer:
        from pykeypath._facade import KeyPathDecodingContainer

        return KeyPathDecodingContainer(keyed_by, self.nested_container(key))


# --- Unkeyed cursors ---


class UnkeyedWriter:
    """Writer cursor appending to one JSON array being built."""

    def __init__(
        self,
        storage: list[Any],
        options: EncodingOptions,
        coding_path: CodingPath = (),
    ) -> None:
        self._storage = storage
        self._options = options
        self.coding_path = coding_path

    @property
    def count(self) -> int:
        return len(self._storage)

    def _next_path(self) -> CodingPath:
        return self.coding_path + (PathSegment.index(len(self._storage)),)

    def encode(self, value: Any) -> None:
        self._storage.append(box(value, self._options, self._next_path()))

    def encode_none(self) -> None:
        self._storage.append(None)

    def nested_container(self) -> KeyedWriter:
        """Append an empty object and return a writer for it."""
        path = self._next_path()
        child: dict[str, Any] = {}
        self._storage.append(child)
        return KeyedWriter(child, self._options, path)

    def nested_unkeyed_container(self) -> UnkeyedWriter:
        path = self._next_path()
        child: list[Any] = []
        self._storage.append(child)
        return UnkeyedWriter(child, self._options, path)

    def nested_key_path_container(self, keyed_by: type[KeyPaths]) -> KeyPathEncodingContainer:
        from pykeypath._facade import KeyPathEncodingContainer

        return KeyPathEncodingContainer(keyed_by, self.nested_container())


class UnkeyedReader:
    """Reader cursor stepping through one JSON array of the input document.

    Each successful read advances ``current_index`` by one; a failed read
    leaves it where it was.
    """

    def __init__(
        self,
        storage: list[Any],
        options: DecodingOptions,
        coding_path: CodingPath = (),
    ) -> None:
        self._storage = storage
        self._options = options
        self.coding_path = coding_path
        self.current_index = 0

    @property
    def count(self) -> int:
        return len(self._storage)

    @property
    def is_at_end(self) -> bool:
        return self.current_index >= len(self._storage)

    def _peek(self) -> tuple[CodingPath, Any]:
        path = self.coding_path + (PathSegment.index(self.current_index),)
        if self.is_at_end:
            raise ValueNotFoundError(
                ERR_MSG_VALUE_NOT_FOUND,
                "unkeyed container is at end",
                coding_path=path,
            )
        return path, self._storage[self.current_index]

    def decode_nil(self) -> bool:
        """Consume the current element and return True if it is null; otherwise leave it."""
        _, raw = self._peek()
        if raw is None:
            self.current_index += 1
            return True
        return False

    def decode_if_present(self, type_: Any) -> Any:
        """Decode the current element; ABSENT at the end, None if null."""
        if self.is_at_end:
            return ABSENT
        if self.decode_nil():
            return None
        return self.decode(type_)

    def decode(self, type_: Any) -> Any:
        path, raw = self._peek()
        if raw is None:
            raise ValueNotFoundError(
                ERR_MSG_VALUE_NOT_FOUND,
                f"expected {_type_name(type_)} value but found null instead",
                coding_path=path,
            )
        value = unbox(type_, raw, self._options, path)
        self.current_index += 1
        return value

    def nested_container(self) -> KeyedReader:
        path, raw = self._peek()
        reader = KeyedReader(_expect_object(raw, path), self._options, path)
        self.current_index += 1
        return reader

    def nested_unkeyed_container(self) -> UnkeyedReader:
        path, raw = self._peek()
        reader = UnkeyedReader(_expect_array(raw, path), self._options, path)
        self.current_index += 1
        return reader

    def nested_key_path_container(self, keyed_by: type[KeyPaths]) -> KeyPathDecodingContainer:
        from pykeypath._facade import KeyPathDecodingContainer

        return KeyPathDecodingContainer(keyed_by, self.nested_container())


# --- Per-value handles ---


class ValueEncoder:
    """Handle passed to ``encode_to``.

    All keyed containers share one object and all unkeyed containers share
    one array; a value cannot be both.
    """

    def __init__(self, options: EncodingOptions, coding_path: CodingPath = ()) -> None:
        self.options = options
        self.coding_path = coding_path
        self.storage: dict[str, Any] | list[Any] | None = None

    def _storage_of(self, kind: type) -> Any:
        if self.storage is None:
            self.storage = kind()
        elif not isinstance(self.storage, kind):
            raise TypeMismatchError(
                ERR_MSG_TYPE_MISMATCH,
                f"cannot open {_kind_of(kind())} container on a value already encoded as {_kind_of(self.storage)}",
                coding_path=self.coding_path,
            )
        return self.storage

    def container(self) -> KeyedWriter:
        return KeyedWriter(self._storage_of(dict), self.options, self.coding_path)

    def unkeyed_container(self) -> UnkeyedWriter:
        return UnkeyedWriter(self._storage_of(list), self.options, self.coding_path)

    def key_path_container(self, keyed_by: type[KeyPaths]) -> KeyPathEncodingContainer:
        from pykeypath._facade import KeyPathEncodingContainer

        return KeyPathEncodingContainer(keyed_by, self.container())


class ValueDecoder:
    """Handle passed to ``decode_from``."""

    def __init__(
        self, options: DecodingOptions, data: Any, coding_path: CodingPath = ()
    ) -> None:
        self.options = options
        self.data = data
        self.coding_path = coding_path

    def container(self) -> KeyedReader:
        return KeyedReader(_expect_object(self.data, self.coding_path), self.options, self.coding_path)

    def unkeyed_container(self) -> UnkeyedReader:
        return UnkeyedReader(_expect_array(self.data, self.coding_path), self.options, self.coding_path)

    def key_path_container(self, keyed_by: type[KeyPaths]) -> KeyPathDecodingContainer:
        from pykeypath._facade import KeyPathDecodingContainer

        return KeyPathDecodingContainer(keyed_by, self.container())
