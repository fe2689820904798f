"""Write records to the vault, relocating entries whose date changed."""

from __future__ import annotations

import logging
from pathlib import Path

from ..config import VaultConfig
from ..errors import FileAlreadyExistsError, RecordNotFoundError
from ..models import JournalEntry, Media, Person, Place
from .serializer import (
    entry_path,
    media_path,
    person_path,
    place_path,
    requires_relocation,
    serialize,
)

logger = logging.getLogger(__name__)


def write_atomic(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    # Write atomically (write to temp, then rename)
    temp_path = path.with_suffix(".tmp")
    temp_path.write_text(text, encoding="utf-8")
    temp_path.replace(path)


def _create(path: Path, text: str) -> Path:
    if path.exists():
        raise FileAlreadyExistsError(path)
    write_atomic(path, text)
    logger.info("Created %s", path)
    return path


def _overwrite(path: Path, text: str) -> Path:
    if not path.exists():
        raise RecordNotFoundError(path)
    write_atomic(path, text)
    logger.info("Updated %s", path)
    return path


def write_entry(vault_path: Path, entry: JournalEntry, config: VaultConfig | None = None) -> Path:
    """Create a new entry file; refuses to overwrite an existing one."""
    config = config or VaultConfig()
    return _create(vault_path / entry_path(entry, config.entries_dir), serialize(entry))


def update_entry(
    vault_path: Path,
    old: JournalEntry,
    new: JournalEntry,
    config: VaultConfig | None = None,
) -> Path:
    """Save an edited entry.

    When the date changed the entry moves: the new file is written at its
    date-derived path first, then the old file is removed.
    """
    config = config or VaultConfig()
    old_path = vault_path / entry_path(old, config.entries_dir)
    if not old_path.exists():
        raise RecordNotFoundError(old_path)

    if not requires_relocation(old, new):
        return _overwrite(old_path, serialize(new))

    new_path = vault_path / entry_path(new, config.entries_dir)
    write_atomic(new_path, serialize(new))
    old_path.unlink()
    logger.info("Moved entry %s -> %s", old_path, new_path)
    return new_path


def write_place(vault_path: Path, place: Place, config: VaultConfig | None = None) -> Path:
    config = config or VaultConfig()
    return _create(vault_path / place_path(place, config.places_dir), serialize(place))


def update_place(vault_path: Path, place: Place, config: VaultConfig | None = None) -> Path:
    config = config or VaultConfig()
    return _overwrite(vault_path / place_path(place, config.places_dir), serialize(place))


def write_person(vault_path: Path, person: Person, config: VaultConfig | None = None) -> Path:
    config = config or VaultConfig()
    return _create(vault_path / person_path(person, config.people_dir), serialize(person))


def update_person(vault_path: Path, person: Person, config: VaultConfig | None = None) -> Path:
    config = config or VaultConfig()
    return _overwrite(vault_path / person_path(person, config.people_dir), serialize(person))


def write_media(vault_path: Path, media: Media, config: VaultConfig | None = None) -> Path:
    config = config or VaultConfig()
    return _create(vault_path / media_path(media, config.media_dir), serialize(media))


def update_media(vault_path: Path, media: Media, config: VaultConfig | None = None) -> Path:
    config = config or VaultConfig()
    return _overwrite(vault_path / media_path(media, config.media_dir), serialize(media))
