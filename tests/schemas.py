"""Schema types used across the test suite."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from pykeypath import KeyPaths, ValueDecoder, ValueEncoder


@dataclass
class EvolutionProposal:
    id: str
    title: str
    review_start_date: datetime
    review_end_date: datetime

    class CodingKeyPaths(KeyPaths):
        ID = "id"
        TITLE = "title"
        REVIEW_START_DATE = "metadata.reviewStartDate"
        REVIEW_END_DATE = "metadata.reviewEndDate"

    @classmethod
    def decode_from(cls, decoder: ValueDecoder) -> EvolutionProposal:
        paths = cls.CodingKeyPaths
        container = decoder.key_path_container(paths)
        return cls(
            id=container.decode(str, paths.ID),
            title=container.decode(str, paths.TITLE),
            review_start_date=container.decode(datetime, paths.REVIEW_START_DATE),
            review_end_date=container.decode(datetime, paths.REVIEW_END_DATE),
        )

    def encode_to(self, encoder: ValueEncoder) -> None:
        paths = self.CodingKeyPaths
        container = encoder.key_path_container(paths)
        container.encode(self.id, paths.ID)
        container.encode(self.title, paths.TITLE)
        container.encode(self.review_start_date, paths.REVIEW_START_DATE)
        container.encode(self.review_end_date, paths.REVIEW_END_DATE)


@dataclass
class Author:
    name: str
    handle: str | None = None

    class CodingKeyPaths(KeyPaths):
        NAME = "name"
        HANDLE = "profile.handle"

    @classmethod
    def decode_from(cls, decoder: ValueDecoder) -> Author:
        paths = cls.CodingKeyPaths
        container = decoder.key_path_container(paths)
        return cls(
            name=container.decode(str, paths.NAME),
            handle=container.decode_if_present(str, paths.HANDLE),
        )

    def encode_to(self, encoder: ValueEncoder) -> None:
        paths = self.CodingKeyPaths
        container = encoder.key_path_container(paths)
        container.encode(self.name, paths.NAME)
        container.encode_if_present(self.handle, paths.HANDLE)


@dataclass
class Release:
    version: str
    notes: str | None = None
    shipped_at: datetime | None = None
    authors: list[Author] = field(default_factory=list)
    lead: Author | None = None

    class CodingKeyPaths(KeyPaths):
        VERSION = "version"
        NOTES = "details.notes.text"
        SHIPPED_AT = "details.shippedAt"
        AUTHORS = "credits.authors"
        LEAD = "credits.lead"

    @classmethod
    def decode_from(cls, decoder: ValueDecoder) -> Release:
        paths = cls.CodingKeyPaths
        container = decoder.key_path_container(paths)
        return cls(
            version=container.decode(str, paths.VERSION),
            notes=container.decode_if_present(str, paths.NOTES),
            shipped_at=container.decode_if_present(datetime, paths.SHIPPED_AT),
            authors=container.decode_if_present(list[Author], paths.AUTHORS, default=[]),
            lead=container.decode_if_present(Author | None, paths.LEAD),
        )

    def encode_to(self, encoder: ValueEncoder) -> None:
        paths = self.CodingKeyPaths
        container = encoder.key_path_container(paths)
        container.encode(self.version, paths.VERSION)
        container.encode_if_present(self.notes, paths.NOTES)
        container.encode_if_present(self.shipped_at, paths.SHIPPED_AT)
        if self.authors:
            container.encode(self.authors, paths.AUTHORS)
        container.encode_if_present(self.lead, paths.LEAD)


@dataclass
class Team:
    """Hand-encodes its roster as an array of key-path mapped entries."""

    name: str
    members: list[Author] = field(default_factory=list)

    @classmethod
    def decode_from(cls, decoder: ValueDecoder) -> Team:
        paths = Author.CodingKeyPaths
        container = decoder.container()
        roster = container.nested_unkeyed_container("roster")
        members = []
        while not roster.is_at_end:
            entry = roster.nested_key_path_container(paths)
            members.append(Author(
                name=entry.decode(str, paths.NAME),
                handle=entry.decode_if_present(str, paths.HANDLE),
            ))
        return cls(name=container.decode(str, "name"), members=members)

    def encode_to(self, encoder: ValueEncoder) -> None:
        paths = Author.CodingKeyPaths
        container = encoder.container()
        container.encode("name", self.name)
        roster = container.nested_unkeyed_container("roster")
        for member in self.members:
            entry = roster.nested_key_path_container(paths)
            entry.encode(member.name, paths.NAME)
            entry.encode_if_present(member.handle, paths.HANDLE)


@dataclass
class Coordinate:
    """Encodes itself as a two-element array."""

    x: float
    y: float

    @classmethod
    def decode_from(cls, decoder: ValueDecoder) -> Coordinate:
        container = decoder.unkeyed_container()
        return cls(x=container.decode(float), y=container.decode(float))

    def encode_to(self, encoder: ValueEncoder) -> None:
        container = encoder.unkeyed_container()
        container.encode(self.x)
        container.encode(self.y)
