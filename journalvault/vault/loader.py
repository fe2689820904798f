"""Vault loading: walk the vault folders and parse every record file."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Callable, TypeVar

from ..config import VaultConfig
from ..errors import ParseError
from ..models import JournalEntry, Media, Person, Place, Record
from .records import parse_entry, parse_media, parse_person, parse_place

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class LoadFailure:
    """A file that was skipped during a bulk load."""

    path: Path
    reason: str
    message: str

    def __str__(self) -> str:
        return f"[{self.reason}] {self.path.name} - {self.message}"


@dataclass
class Vault:
    """Container for all records loaded from a vault."""

    path: Path
    config: VaultConfig = field(default_factory=VaultConfig)
    entries: list[JournalEntry] = field(default_factory=list)
    places: list[Place] = field(default_factory=list)
    people: list[Person] = field(default_factory=list)
    media: list[Media] = field(default_factory=list)
    failures: list[LoadFailure] = field(default_factory=list)

    # Source file of each loaded record, keyed by id(record)
    sources: dict[int, Path] = field(default_factory=dict)

    def place_by_id(self) -> dict[str, Place]:
        """Places keyed by id; a later place with the same id shadows an earlier one."""
        return {place.id: place for place in self.places}

    def person_by_id(self) -> dict[str, Person]:
        return {person.id: person for person in self.people}

    def get_place(self, name: str) -> Place | None:
        """Case-insensitive lookup by name or alias."""
        wanted = name.lower()
        for place in self.places:
            if place.name.lower() == wanted or any(a.lower() == wanted for a in place.aliases):
                return place
        return None

    def with_place_callouts(self) -> list[JournalEntry]:
        """Entries with `place_callout` joined from the matching place."""
        joined = []
        for entry in self.entries:
            place = self.get_place(entry.place) if entry.place else None
            joined.append(replace(entry, place_callout=place.callout if place else None))
        return joined

    def records(self) -> list[Record]:
        return [*self.entries, *self.places, *self.people, *self.media]

    def source_of(self, record: Record) -> Path | None:
        """The file `record` was loaded from; None for records built elsewhere."""
        return self.sources.get(id(record))


def _load_dir(
    files: list[Path],
    parser: Callable[[str, str], T],
    vault: Vault,
) -> list[tuple[Path, T]]:
    loaded = []
    for path in files:
        try:
            text = path.read_text(encoding="utf-8")
            record = parser(text, path.name)
        except ParseError as e:
            logger.warning("Skipping %s: %s", path, e)
            vault.failures.append(LoadFailure(path=path, reason=e.reason, message=str(e)))
            continue
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Could not read %s: %s", path, e)
            vault.failures.append(LoadFailure(path=path, reason="unreadable", message=str(e)))
            continue
        loaded.append((path, record))
    return loaded


def _markdown_files(root: Path, recursive: bool) -> list[Path]:
    if not root.is_dir():
        logger.debug("Directory not found: %s", root)
        return []
    found = root.rglob("*.md") if recursive else root.glob("*.md")
    return sorted(
        p for p in found if not any(part.startswith(".") for part in p.relative_to(root).parts)
    )


def load_entries(vault: Vault, limit: int | None = None) -> None:
    """Load entries newest first; `limit` applies after sorting."""
    files = _markdown_files(vault.path / vault.config.entries_dir, recursive=True)
    loaded = _load_dir(files, parse_entry, vault)
    loaded.sort(key=lambda item: item[1].date_created, reverse=True)
    if limit is not None:
        loaded = loaded[:limit]
    for path, entry in loaded:
        vault.sources[id(entry)] = path
    vault.entries = [entry for _, entry in loaded]
    logger.info("Loaded %d entries", len(vault.entries))


def load_places(vault: Vault) -> None:
    files = _markdown_files(vault.path / vault.config.places_dir, recursive=False)
    loaded = _load_dir(files, parse_place, vault)
    loaded.sort(key=lambda item: item[1].name)
    for path, place in loaded:
        vault.sources[id(place)] = path
    vault.places = [place for _, place in loaded]
    logger.info("Loaded %d places", len(vault.places))


def load_people(vault: Vault) -> None:
    files = _markdown_files(vault.path / vault.config.people_dir, recursive=False)
    loaded = _load_dir(files, parse_person, vault)
    loaded.sort(key=lambda item: item[1].name)
    for path, person in loaded:
        vault.sources[id(person)] = path
    vault.people = [person for _, person in loaded]
    logger.info("Loaded %d people", len(vault.people))


def load_media(vault: Vault) -> None:
    """Load media notes sorted by title."""
    files = _markdown_files(vault.path / vault.config.media_dir, recursive=False)
    loaded = _load_dir(files, parse_media, vault)
    loaded.sort(key=lambda item: item[1].title)
    for path, media in loaded:
        vault.sources[id(media)] = path
    vault.media = [media for _, media in loaded]
    logger.info("Loaded %d media", len(vault.media))


def load_vault(
    vault_path: Path,
    config: VaultConfig | None = None,
    entry_limit: int | None = None,
) -> Vault:
    """Load places, people, media and entries from the vault.

    A file that fails to parse is recorded in `Vault.failures` and skipped;
    it never aborts the load.
    """
    vault = Vault(path=vault_path, config=config or VaultConfig())
    load_places(vault)
    load_people(vault)
    load_media(vault)
    load_entries(vault, limit=entry_limit)
    return vault
