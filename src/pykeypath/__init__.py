"""pykeypath - Map schema fields to dotted key paths in nested JSON documents."""

from __future__ import annotations

import logging

from pykeypath._containers import (
    ABSENT,
    Decodable,
    Encodable,
    KeyedReader,
    KeyedWriter,
    UnkeyedReader,
    UnkeyedWriter,
    ValueDecoder,
    ValueEncoder,
)
from pykeypath._errors import (
    CodingError,
    DataCorruptedError,
    InvalidKeyPathError,
    InvalidValueError,
    TypeMismatchError,
    ValueNotFoundError,
)
from pykeypath._facade import KeyPathDecodingContainer, KeyPathEncodingContainer
from pykeypath._resolver import resolve_for_read, resolve_for_write
from pykeypath.codec import Decoder, Encoder, decode, encode
from pykeypath.keypath import KeyPath, KeyPaths, PathSegment
from pykeypath.strategies import (
    DateDecodingStrategy,
    DateEncodingStrategy,
    KeyDecodingStrategy,
    KeyEncodingStrategy,
)

__version__ = "0.1.0"

__all__ = [
    "decode",
    "encode",
    "resolve_for_read",
    "resolve_for_write",
    "ABSENT",
    "Decoder",
    "Encoder",
    "Decodable",
    "Encodable",
    "KeyPath",
    "KeyPaths",
    "PathSegment",
    "KeyPathDecodingContainer",
    "KeyPathEncodingContainer",
    "KeyedReader",
    "KeyedWriter",
    "UnkeyedReader",
    "UnkeyedWriter",
    "ValueDecoder",
    "ValueEncoder",
    "DateDecodingStrategy",
    "DateEncodingStrategy",
    "KeyDecodingStrategy",
    "KeyEncodingStrategy",
    "CodingError",
    "DataCorruptedError",
    "InvalidKeyPathError",
    "InvalidValueError",
    "TypeMismatchError",
    "ValueNotFoundError",
]

logging.getLogger(__name__).addHandler(logging.NullHandler())
