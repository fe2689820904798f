from dataclasses import replace
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from journalvault.config import VaultConfig
from journalvault.errors import FileAlreadyExistsError, RecordNotFoundError
from journalvault.models import JournalEntry, Media, Person, Place
from journalvault.vault.loader import load_vault
from journalvault.vault.records import parse_entry, parse_media
from journalvault.vault.writer import (
    update_entry,
    update_media,
    update_person,
    update_place,
    write_entry,
    write_media,
    write_person,
    write_place,
)

PST = timezone(timedelta(hours=-8))


@pytest.fixture
def entry() -> JournalEntry:
    return JournalEntry.create("First day.", datetime(2025, 1, 15, 14, 30, tzinfo=PST))


def test_write_entry_creates_dated_path(tmp_path: Path, entry: JournalEntry) -> None:
    path = write_entry(tmp_path, entry)

    assert path == tmp_path / "Entries" / "2025" / "01-January" / "15" / "202501151430.md"
    assert parse_entry(path.read_text(encoding="utf-8"), path.name) == entry
    assert list(path.parent.glob("*.tmp")) == []


def test_write_entry_refuses_to_overwrite(tmp_path: Path, entry: JournalEntry) -> None:
    write_entry(tmp_path, entry)
    with pytest.raises(FileAlreadyExistsError):
        write_entry(tmp_path, replace(entry, content="Other."))


def test_update_in_place(tmp_path: Path, entry: JournalEntry) -> None:
    path = write_entry(tmp_path, entry)
    edited = replace(entry, content="First day, edited.")

    assert update_entry(tmp_path, entry, edited) == path
    assert "First day, edited." in path.read_text(encoding="utf-8")


def test_date_change_moves_the_file(tmp_path: Path, entry: JournalEntry) -> None:
    old_path = write_entry(tmp_path, entry)
    moved = replace(entry, date_created=datetime(2025, 1, 16, 14, 30, tzinfo=PST))

    new_path = update_entry(tmp_path, entry, moved)

    assert not old_path.exists()
    assert new_path == tmp_path / "Entries" / "2025" / "01-January" / "16" / "202501161430.md"
    assert [e.date_created for e in load_vault(tmp_path).entries] == [moved.date_created]


def test_update_missing_entry_raises(tmp_path: Path, entry: JournalEntry) -> None:
    with pytest.raises(RecordNotFoundError):
        update_entry(tmp_path, entry, entry)


def test_place_and_person_writes(tmp_path: Path) -> None:
    config = VaultConfig(places_dir="Spots")
    place = Place(id="Home", name="Home", callout="home")
    person = Person(id="Bob Brown", name="Bob Brown")

    place_file = write_place(tmp_path, place, config)
    person_file = write_person(tmp_path, person)
    update_place(tmp_path, replace(place, aliases=("Casa",)), config)

    assert place_file == tmp_path / "Spots" / "Home.md"
    assert person_file == tmp_path / "People" / "Bob Brown.md"
    assert "  - Casa" in place_file.read_text(encoding="utf-8")
    with pytest.raises(RecordNotFoundError):
        update_person(tmp_path, Person(id="Nobody", name="Nobody"))


def test_media_writes(tmp_path: Path) -> None:
    media = Media(id="Dune", title="Dune", media_type="book", creator="Frank Herbert")

    path = write_media(tmp_path, media)
    with pytest.raises(FileAlreadyExistsError):
        write_media(tmp_path, media)
    update_media(tmp_path, replace(media, release_year=1965))

    assert path == tmp_path / "Media" / "Dune.md"
    assert parse_media(path.read_text(encoding="utf-8"), path.name) == replace(
        media, release_year=1965
    )
    with pytest.raises(RecordNotFoundError):
        update_media(tmp_path, media, VaultConfig(media_dir="Library"))
