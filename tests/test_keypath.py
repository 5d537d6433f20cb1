"""Key path parsing and named key path constants."""

import dataclasses
from enum import auto

import pytest

from pykeypath import InvalidKeyPathError, KeyPath, KeyPaths, PathSegment


class TestParse:
    def test_dotted(self):
        key_path = KeyPath.parse("metadata.reviewStartDate")
        assert key_path.segments == (PathSegment("metadata"), PathSegment("reviewStartDate"))

    def test_single_segment(self):
        assert KeyPath.parse("id").segments == (PathSegment("id"),)

    def test_empty_string_has_no_segments(self):
        key_path = KeyPath.parse("")
        assert len(key_path) == 0
        assert not key_path

    def test_only_dots_has_no_segments(self):
        assert KeyPath.parse("...").segments == ()

    def test_empty_pieces_are_dropped(self):
        assert [s.string_value for s in KeyPath.parse("a..b.")] == ["a", "b"]

    def test_whitespace_passes_through(self):
        assert KeyPath.parse("  ").segments == (PathSegment("  "),)

    def test_numeric_piece_stays_string(self):
        segment = KeyPath.parse("items.3").segments[1]
        assert segment.string_value == "3"
        assert segment.int_value is None

    def test_str_renders_dotted(self):
        assert str(KeyPath.parse("a.b.c")) == "a.b.c"


class TestFromKeys:
    def test_strings(self):
        assert KeyPath.from_keys(["a", "b"]) == KeyPath.parse("a.b")

    def test_integer_key_renders_as_string(self):
        segment = KeyPath.from_keys([3]).first
        assert segment == PathSegment("3")

    def test_existing_segments_are_kept(self):
        segment = PathSegment.index(2)
        assert KeyPath.from_keys([segment]).first is segment

    def test_object_with_string_value(self):
        class ExternalKey:
            string_value = "external"

        assert KeyPath.from_keys([ExternalKey()]).first == PathSegment("external")

    def test_unsupported_key(self):
        with pytest.raises(TypeError, match="float"):
            KeyPath.from_keys([1.5])

    def test_bool_is_not_an_integer_key(self):
        with pytest.raises(TypeError):
            PathSegment.from_key(True)


class TestKeyPathValue:
    def test_first_and_dropping_first(self):
        key_path = KeyPath.parse("a.b.c")
        assert key_path.first == PathSegment("a")
        assert key_path.dropping_first() == KeyPath.parse("b.c")

    def test_first_of_empty_raises(self):
        with pytest.raises(InvalidKeyPathError):
            KeyPath().first

    def test_concatenation(self):
        assert KeyPath.parse("a") + KeyPath.parse("b.c") == KeyPath.parse("a.b.c")

    def test_iteration(self):
        assert [str(s) for s in KeyPath.parse("x.y")] == ["x", "y"]

    def test_immutable(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            KeyPath.parse("a").segments = ()

    def test_hashable(self):
        assert len({KeyPath.parse("a.b"), KeyPath.from_keys(["a", "b"])}) == 1


class TestKeyPaths:
    def test_member_key_path(self):
        class Paths(KeyPaths):
            ID = "id"
            START = "metadata.reviewStartDate"

        assert Paths.ID.key_path == KeyPath.parse("id")
        assert Paths.START.key_path == KeyPath.parse("metadata.reviewStartDate")

    def test_member_is_its_dotted_string(self):
        class Paths(KeyPaths):
            START = "metadata.reviewStartDate"

        assert Paths.START == "metadata.reviewStartDate"
        assert str(Paths.START) == "metadata.reviewStartDate"

    def test_auto_uses_lowercased_name(self):
        class Paths(KeyPaths):
            TITLE = auto()

        assert Paths.TITLE.key_path == KeyPath.parse("title")

    def test_empty_member_rejected_at_class_creation(self):
        with pytest.raises(InvalidKeyPathError, match="must not be empty"):
            class Paths(KeyPaths):
                BROKEN = ""

    def test_dots_only_member_rejected(self):
        with pytest.raises(InvalidKeyPathError) as exc_info:
            class Paths(KeyPaths):
                BROKEN = ".."

        assert "BROKEN" in exc_info.value.internal()
