"""Serialized files must stay readable by ordinary YAML frontmatter tooling."""

from datetime import date, datetime, timedelta, timezone

import frontmatter

from journalvault.models import (
    Coordinate,
    JournalEntry,
    Media,
    Person,
    Place,
    ScalarValue,
)
from journalvault.vault.serializer import serialize


def test_entry_reads_as_yaml() -> None:
    entry = JournalEntry.create(
        "Met [[Alice Smith|Al]].",
        datetime(2025, 1, 15, 14, 30, tzinfo=timezone(timedelta(hours=-8))),
        place="Central Park",
    )
    entry = (
        entry.with_unknown_field("custom_rating", ScalarValue.floating(4.5))
        .with_unknown_field("weather_note", ScalarValue.text("windy: very"))
        .with_unknown_field("snacks", ScalarValue.array(["pretzel", "tea"]))
    )

    post = frontmatter.loads(serialize(entry))

    assert post.content == "Met [[Alice Smith|Al]]."
    assert post["tags"] == ["entry"]
    assert post["place"] == "[[Central Park]]"
    assert post["custom_rating"] == 4.5
    assert post["weather_note"] == "windy: very"
    assert post["snacks"] == ["pretzel", "tea"]


def test_place_reads_as_yaml() -> None:
    place = Place(
        id="Pier 39",
        name="Pier 39",
        location=Coordinate(37.8087, -122.4098),
        address="Beach St: Embarcadero",
        callout="entertainment",
        aliases=("The Pier",),
    )

    post = frontmatter.loads(serialize(place))

    assert post["location"] == "37.8087,-122.4098"
    assert post["addr"] == "Beach St: Embarcadero"
    assert post["tags"] == []
    assert post["aliases"] == ["The Pier"]
    assert post.content == ""


def test_person_reads_as_yaml() -> None:
    person = Person(
        id="Alice Smith",
        name="Alice Smith",
        relationship="friend",
        phone="555 0100",
        met_date=date(2019, 9, 1),
    )

    post = frontmatter.loads(serialize(person))

    assert post["relationship"] == "friend"
    assert post["phone"] == "555 0100"
    assert post["met_date"] == date(2019, 9, 1)


def test_media_reads_as_yaml() -> None:
    media = Media(
        id="Dune Part Two",
        title="Dune: Part Two",
        media_type="movie",
        genre="sci-",
        release_year=2024,
        itunes_id="1712345678",
    )

    post = frontmatter.loads(serialize(media))

    assert post["type"] == "movie"
    assert post["title"] == "Dune: Part Two"
    assert post["genre"] == "sci-"
    assert post["release_year"] == 2024
    assert post["itunes_id"] == "1712345678"
    assert post["aliases"] == []
