"""JSON encoder and decoder driving schema types through key-path containers."""

from __future__ import annotations

import json
import logging
from typing import Any

from pykeypath._constants import COMPACT_SEPARATORS, PRETTY_INDENT, PRETTY_SEPARATORS
from pykeypath._containers import (
    DecodingOptions,
    EncodingOptions,
    box,
    unbox,
)
from pykeypath._errors import (
    ERR_MSG_INVALID_JSON,
    ERR_MSG_VALUE_NOT_FOUND,
    DataCorruptedError,
    ValueNotFoundError,
)
from pykeypath.strategies import (
    DateDecodingStrategy,
    DateEncodingStrategy,
    KeyDecodingStrategy,
    KeyEncodingStrategy,
)

logger = logging.getLogger(__name__)


class Encoder:
    """Encodes values (typically schema types implementing ``encode_to``) to JSON.

    Args:
        key_encoding_strategy: How keys are rewritten on output.
        date_encoding_strategy: How ``datetime`` values are written.
        pretty_printed: Indent output by two spaces with ``" : "`` separators.
        sort_keys: Emit object keys in sorted order.
    """

    def __init__(
        self,
        *,
        key_encoding_strategy: KeyEncodingStrategy | str = KeyEncodingStrategy.USE_DEFAULT_KEYS,
        date_encoding_strategy: DateEncodingStrategy | str = DateEncodingStrategy.ISO8601,
        pretty_printed: bool = False,
        sort_keys: bool = False,
    ) -> None:
        self.options = EncodingOptions(
            key_encoding_strategy=KeyEncodingStrategy(key_encoding_strategy),
            date_encoding_strategy=DateEncodingStrategy(date_encoding_strategy),
        )
        self.pretty_printed = pretty_printed
        self.sort_keys = sort_keys

    def encode_to_object(self, value: Any) -> Any:
        """Encode ``value`` to JSON-compatible Python objects."""
        return box(value, self.options, ())

    def encode(self, value: Any) -> bytes:
        """Encode ``value`` to UTF-8 JSON bytes.

        Raises:
            InvalidValueError: If a value cannot be converted.
            InvalidKeyPathError: If a schema writes at an empty key path.
            TypeMismatchError: If two key paths disagree about a section's shape.
        """
        document = self.encode_to_object(value)
        if self.pretty_printed:
            text = json.dumps(
                document,
                indent=PRETTY_INDENT,
                separators=PRETTY_SEPARATORS,
                sort_keys=self.sort_keys,
                ensure_ascii=False,
            )
        else:
            text = json.dumps(
                document,
                separators=COMPACT_SEPARATORS,
                sort_keys=self.sort_keys,
                ensure_ascii=False,
            )
        logger.debug("Encoded %s to %d bytes of JSON", type(value).__name__, len(text))
        return text.encode("utf-8")


class Decoder:
    """Decodes JSON into values, typically schema types implementing ``decode_from``.

    Args:
        key_decoding_strategy: How document keys are rewritten before lookup.
        date_decoding_strategy: How ``datetime`` values are read.
    """

    def __init__(
        self,
        *,
        key_decoding_strategy: KeyDecodingStrategy | str = KeyDecodingStrategy.USE_DEFAULT_KEYS,
        date_decoding_strategy: DateDecodingStrategy | str = DateDecodingStrategy.ISO8601,
    ) -> None:
        self.options = DecodingOptions(
            key_decoding_strategy=KeyDecodingStrategy(key_decoding_strategy),
            date_decoding_strategy=DateDecodingStrategy(date_decoding_strategy),
        )

    def decode_object(self, type_: Any, obj: Any) -> Any:
        """Decode already-parsed JSON objects as ``type_``."""
        if obj is None:
            raise ValueNotFoundError(
                ERR_MSG_VALUE_NOT_FOUND,
                f"expected {getattr(type_, '__name__', repr(type_))} value but found null instead",
            )
        return unbox(type_, obj, self.options, ())

    def decode(self, type_: Any, data: bytes | str) -> Any:
        """Parse JSON ``data`` and decode it as ``type_``.

        Raises:
            DataCorruptedError: If ``data`` is not valid JSON, or a value
                cannot be converted.
            ValueNotFoundError: If a required value is missing.
            TypeMismatchError: If a value has the wrong shape.
            InvalidKeyPathError: If a schema reads at an empty key path.
        """
        try:
            obj = json.loads(data)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise DataCorruptedError(ERR_MSG_INVALID_JSON, str(e), wrapped=e) from e
        logger.debug("Decoding %s from JSON", getattr(type_, "__name__", repr(type_)))
        return self.decode_object(type_, obj)


def encode(value: Any, **kwargs: Any) -> bytes:
    """Encode ``value`` to JSON bytes. Keyword arguments configure the :class:`Encoder`."""
    return Encoder(**kwargs).encode(value)


def decode(type_: Any, data: bytes | str, **kwargs: Any) -> Any:
    """Decode JSON ``data`` as ``type_``. Keyword arguments configure the :class:`Decoder`."""
    return Decoder(**kwargs).decode(type_, data)

