from dataclasses import replace
from datetime import datetime, timedelta, timezone
from pathlib import PurePosixPath

import pytest

from journalvault.models import JournalEntry, Media, Person, Place, ScalarValue
from journalvault.vault.records import parse_entry, parse_person
from journalvault.vault.serializer import (
    entry_path,
    format_scalar,
    media_path,
    person_path,
    place_path,
    requires_relocation,
    serialize,
)

PST = timezone(timedelta(hours=-8))


@pytest.fixture
def entry() -> JournalEntry:
    return JournalEntry.create(
        "Walked around the reservoir.",
        datetime(2025, 1, 15, 14, 30, tzinfo=PST),
        place="Central Park",
    )


def test_entry_text_layout(entry: JournalEntry) -> None:
    assert serialize(entry) == "\n".join(
        [
            "---",
            "date_created: 2025-01-15T14:30:00.000-08:00",
            "tags:",
            "  - entry",
            'place: "[[Central Park]]"',
            "---",
            "",
            "Walked around the reservoir.",
            "",
        ]
    )


def test_empty_body_ends_after_closing_delimiter() -> None:
    person = Person(id="Bob Brown", name="Bob Brown", relationship="colleague")
    assert serialize(person) == "---\nrelationship: colleague\ntags: []\naliases: []\n---\n"


def test_known_text_is_quoted_only_when_needed() -> None:
    place = Place(id="Bar", name="Bar", address="Pier 39: Suite 2", pin="42")
    text = serialize(place)
    assert 'addr: "Pier 39: Suite 2"' in text
    assert 'pin: "42"' in text


@pytest.mark.parametrize(
    ("value", "line"),
    [
        (ScalarValue.integer(3), "k: 3"),
        (ScalarValue.floating(4.5), "k: 4.5"),
        (ScalarValue.boolean(False), "k: false"),
        (ScalarValue.text("hi"), 'k: "hi"'),
        (
            ScalarValue.timestamp(datetime(2025, 1, 15, 9, 0, tzinfo=timezone.utc)),
            "k: 2025-01-15T09:00:00.000+00:00",
        ),
    ],
)
def test_format_scalar(value: ScalarValue, line: str) -> None:
    assert format_scalar("k", value) == [line]


def test_unknown_arrays_are_written_multiline() -> None:
    assert format_scalar("k", ScalarValue.array(["a", "b"])) == ["k:", "  - a", "  - b"]
    assert format_scalar("k", ScalarValue.array()) == ["k:"]


def test_serialize_rejects_other_types() -> None:
    with pytest.raises(TypeError):
        serialize("not a record")  # type: ignore[arg-type]


def test_entry_path(entry: JournalEntry) -> None:
    assert entry_path(entry) == PurePosixPath("Entries/2025/01-January/15/202501151430.md")
    assert entry_path(entry, "Journal") == PurePosixPath(
        "Journal/2025/01-January/15/202501151430.md"
    )


def test_record_paths() -> None:
    assert place_path(Place(id="Central Park", name="Central Park")) == PurePosixPath(
        "Places/Central Park.md"
    )
    assert person_path(Person(id="Bob", name="Bob"), "Friends") == PurePosixPath("Friends/Bob.md")


def test_date_change_requires_relocation(entry: JournalEntry) -> None:
    moved = replace(entry, date_created=datetime(2025, 1, 16, 14, 30, tzinfo=PST))

    assert requires_relocation(entry, moved)
    assert entry_path(moved) != entry_path(entry)


def test_content_edit_does_not_require_relocation(entry: JournalEntry) -> None:
    edited = replace(entry, content="Walked twice around the reservoir.", tags=("entry", "walk"))
    assert not requires_relocation(entry, edited)


def test_same_instant_in_other_offset_relocates_when_path_differs(entry: JournalEntry) -> None:
    utc = replace(entry, date_created=entry.date_created.astimezone(timezone.utc))

    assert utc.date_created == entry.date_created
    assert requires_relocation(entry, utc)


def test_place_callout_is_never_written(entry: JournalEntry) -> None:
    assert serialize(replace(entry, place_callout="park")) == serialize(entry)


def test_text_ending_in_dash_is_quoted(entry: JournalEntry) -> None:
    dashed = replace(entry, condition="a---", location="north-")

    text = serialize(dashed)

    assert 'cond: "a---"\n' in text
    assert 'location: "north-"\n' in text
    assert parse_entry(text, "202501151430.md") == dashed
    assert serialize(parse_person("---\nrelationship: ex-\n---\n", "Z.md")).startswith(
        '---\nrelationship: "ex-"\n'
    )


def test_media_text_layout() -> None:
    media = Media(
        id="Dune Part Two",
        title="Dune: Part Two",
        media_type="movie",
        creator="Denis Villeneuve",
        release_year=2024,
        itunes_id="1712345678",
        artwork_url="https://example.com/dune.jpg",
        tags=("scifi",),
    )

    assert serialize(media) == "\n".join(
        [
            "---",
            "type: movie",
            'title: "Dune: Part Two"',
            "creator: Denis Villeneuve",
            "release_year: 2024",
            "artwork_url: https://example.com/dune.jpg",
            'itunes_id: "1712345678"',
            "tags:",
            "  - scifi",
            "aliases: []",
            "---",
            "",
        ]
    )
    assert media_path(media) == PurePosixPath("Media/Dune Part Two.md")
    assert media_path(media, "Library") == PurePosixPath("Library/Dune Part Two.md")
