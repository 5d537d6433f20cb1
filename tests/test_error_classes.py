"""Error class hierarchy tests."""

import pytest

from pykeypath import PathSegment
from pykeypath._errors import (
    CodingError,
    DataCorruptedError,
    InvalidKeyPathError,
    InvalidValueError,
    TypeMismatchError,
    ValueNotFoundError,
    format_coding_path,
)


class TestCodingErrorBase:
    def test_str_returns_user_message(self):
        err = CodingError("user msg", "internal detail")
        assert str(err) == "user msg"

    def test_internal_returns_details(self):
        err = CodingError("user msg", "internal detail")
        assert err.internal() == "internal detail"

    def test_internal_defaults_to_user_message(self):
        err = CodingError("same message")
        assert err.internal() == "same message"

    def test_internal_includes_coding_path(self):
        err = CodingError("user msg", "detail", coding_path=[PathSegment("a"), PathSegment("b")])
        assert err.internal() == "detail (at 'a.b')"
        assert err.coding_path == (PathSegment("a"), PathSegment("b"))

    def test_wrapped_exception(self):
        cause = ValueError("root cause")
        err = CodingError("user msg", wrapped=cause)
        assert err.wrapped is cause

    def test_is_exception(self):
        assert isinstance(CodingError("test"), Exception)


class TestFormatCodingPath:
    def test_empty(self):
        assert format_coding_path(()) == ""

    def test_keys_and_indexes(self):
        path = (PathSegment("credits"), PathSegment.index(0), PathSegment("name"))
        assert format_coding_path(path) == "credits[0].name"

    def test_leading_index(self):
        assert format_coding_path((PathSegment.index(2), PathSegment("id"))) == "[2].id"


class TestErrorHierarchy:
    ALL_ERROR_CLASSES = [
        InvalidKeyPathError,
        ValueNotFoundError,
        TypeMismatchError,
        DataCorruptedError,
        InvalidValueError,
    ]

    @pytest.mark.parametrize("error_cls", ALL_ERROR_CLASSES)
    def test_is_subclass_of_coding_error(self, error_cls):
        assert issubclass(error_cls, CodingError)

    @pytest.mark.parametrize("error_cls", ALL_ERROR_CLASSES)
    def test_can_be_caught_as_coding_error(self, error_cls):
        with pytest.raises(CodingError):
            raise error_cls("test")
