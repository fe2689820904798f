"""Render records back into frontmatter + body text.

Output conventions (the parser accepts all of them unchanged):

- arrays are always written multi-line (``key:`` then ``  - item``)
- unknown text values are double-quoted; numbers and booleans are bare
- datetimes carry milliseconds and a ``+HH:MM`` offset
"""

from __future__ import annotations

import re
from datetime import datetime
from pathlib import PurePosixPath

from ..models import JournalEntry, Media, Person, Place, Record, ScalarValue
from .frontmatter import DELIMITER, format_iso_datetime

# Values that must be quoted so the parser (and YAML readers) see plain text
_NEEDS_QUOTES_RE = re.compile(r"""^[\[\]{}&*!|>'"%@`#,?:-]|: | #|^\s|\s$|-$""")
_LOOKS_TYPED_RE = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$|^(true|false|null|~)$", re.IGNORECASE)


def _text(value: str) -> str:
    """Format a known text field, quoting only when needed."""
    if not value or _NEEDS_QUOTES_RE.search(value) or _LOOKS_TYPED_RE.match(value):
        return f'"{value}"'
    return value


def _array(key: str, items) -> list[str]:
    lines = [f"{key}:"]
    lines.extend(f"  - {item}" for item in items)
    return lines


def _inline_or_array(key: str, items) -> list[str]:
    """Place/person arrays are always present; empty ones stay inline."""
    if not items:
        return [f"{key}: []"]
    return _array(key, items)


def format_scalar(key: str, value: ScalarValue) -> list[str]:
    """Render one unknown field as frontmatter lines."""
    if value.kind == "array":
        return _array(key, value.value)  # type: ignore[arg-type]
    if value.kind == "boolean":
        return [f"{key}: {'true' if value.value else 'false'}"]
    if value.kind == "integer":
        return [f"{key}: {value.value}"]
    if value.kind == "float":
        return [f"{key}: {value.value!r}"]
    if value.kind == "datetime":
        return [f"{key}: {format_iso_datetime(value.value)}"]  # type: ignore[arg-type]
    return [f'{key}: "{value.value}"']


def _unknown_lines(record: Record) -> list[str]:
    lines: list[str] = []
    for key in record.unknown_field_order:
        lines.extend(format_scalar(key, record.unknown_fields[key]))
    return lines


def _document(lines: list[str], body: str) -> str:
    header = DELIMITER + "".join(line + "\n" for line in lines) + DELIMITER
    body = body.strip()
    return header + "\n" + body + "\n" if body else header


def serialize_entry(entry: JournalEntry) -> str:
    lines = [f"date_created: {format_iso_datetime(entry.date_created)}"]
    if entry.tags:
        lines.extend(_array("tags", entry.tags))
    if entry.place:
        lines.append(f'place: "[[{entry.place}]]"')
    if entry.location:
        lines.append(f"location: {_text(entry.location)}")
    if entry.people:
        lines.extend(_array("people", (f'"[[{name}]]"' for name in entry.people)))
    if entry.temperature is not None:
        lines.append(f"temp: {entry.temperature}")
    if entry.condition:
        lines.append(f"cond: {_text(entry.condition)}")
    if entry.humidity is not None:
        lines.append(f"humidity: {entry.humidity}")
    if entry.aqi is not None:
        lines.append(f"aqi: {entry.aqi}")
    if entry.mood_valence is not None:
        lines.append(f"mood_valence: {entry.mood_valence!r}")
    if entry.mood_labels:
        lines.extend(_array("mood_labels", entry.mood_labels))
    if entry.mood_associations:
        lines.extend(_array("mood_associations", entry.mood_associations))
    if entry.audio_attachments:
        lines.extend(_array("audio_attachments", entry.audio_attachments))
    if entry.recording_device:
        lines.append(f"recording_device: {_text(entry.recording_device)}")
    if entry.sample_rate is not None:
        lines.append(f"sample_rate: {entry.sample_rate}")
    if entry.bit_depth is not None:
        lines.append(f"bit_depth: {entry.bit_depth}")
    lines.extend(_unknown_lines(entry))
    return _document(lines, entry.content)


def serialize_place(place: Place) -> str:
    lines: list[str] = []
    if place.location is not None:
        lines.append(f'location: "{place.location.latitude!r},{place.location.longitude!r}"')
    if place.address:
        lines.append(f"addr: {_text(place.address)}")
    lines.extend(_inline_or_array("tags", place.tags))
    lines.append(f"callout: {_text(place.callout)}")
    if place.pin:
        lines.append(f"pin: {_text(place.pin)}")
    if place.color:
        lines.append(f"color: {_text(place.color)}")
    if place.url:
        lines.append(f"url: {_text(place.url)}")
    lines.extend(_inline_or_array("aliases", place.aliases))
    lines.extend(_unknown_lines(place))
    return _document(lines, place.content)


def serialize_person(person: Person) -> str:
    lines: list[str] = []
    if person.pronouns:
        lines.append(f"pronouns: {_text(person.pronouns)}")
    lines.append(f"relationship: {_text(person.relationship)}")
    lines.extend(_inline_or_array("tags", person.tags))
    lines.extend(_inline_or_array("aliases", person.aliases))
    for key, value in (
        ("email", person.email),
        ("phone", person.phone),
        ("address", person.address),
        ("birthday", person.birthday),
    ):
        if value:
            lines.append(f"{key}: {_text(value)}")
    if person.met_date is not None:
        lines.append(f"met_date: {person.met_date.isoformat()}")
    if person.color:
        lines.append(f"color: {_text(person.color)}")
    if person.photo:
        lines.append(f"photo: {_text(person.photo)}")
    lines.extend(_unknown_lines(person))
    return _document(lines, person.content)


def serialize_media(media: Media) -> str:
    lines = [f"type: {_text(media.media_type)}", f"title: {_text(media.title)}"]
    if media.creator:
        lines.append(f"creator: {_text(media.creator)}")
    if media.release_year is not None:
        lines.append(f"release_year: {media.release_year}")
    for key, value in (
        ("genre", media.genre),
        ("artwork_url", media.artwork_url),
        ("itunes_id", media.itunes_id),
        ("itunes_url", media.itunes_url),
    ):
        if value:
            lines.append(f"{key}: {_text(value)}")
    if media.tags:
        lines.extend(_array("tags", media.tags))
    lines.extend(_inline_or_array("aliases", media.aliases))
    lines.extend(_unknown_lines(media))
    return _document(lines, media.content)


def serialize(record: Record) -> str:
    """Render any record as file text."""
    if isinstance(record, JournalEntry):
        return serialize_entry(record)
    if isinstance(record, Place):
        return serialize_place(record)
    if isinstance(record, Person):
        return serialize_person(record)
    if isinstance(record, Media):
        return serialize_media(record)
    raise TypeError(f"cannot serialize {type(record).__name__}")


def entry_path(entry: JournalEntry, entries_dir: str = "Entries") -> PurePosixPath:
    """Vault-relative path: Entries/YYYY/MM-Month/DD/YYYYMMDDHHmm.md."""
    return PurePosixPath(entries_dir) / entry.date_directory / f"{entry.filename}.md"


def place_path(place: Place, places_dir: str = "Places") -> PurePosixPath:
    return PurePosixPath(places_dir) / place.filename


def person_path(person: Person, people_dir: str = "People") -> PurePosixPath:
    return PurePosixPath(people_dir) / person.filename


def media_path(media: Media, media_dir: str = "Media") -> PurePosixPath:
    return PurePosixPath(media_dir) / media.filename


def requires_relocation(old: JournalEntry, new: JournalEntry) -> bool:
    """True when a date edit moves the entry to a different file."""
    return _instant(old.date_created) != _instant(new.date_created) or (
        entry_path(old) != entry_path(new)
    )


def _instant(value: datetime) -> datetime:
    return value if value.tzinfo is not None else value.astimezone()
