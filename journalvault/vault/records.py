"""Build typed records from parsed frontmatter documents."""

from __future__ import annotations

import re
from datetime import date
from pathlib import PurePath

from ..errors import MissingRequiredFieldError
from ..models import (
    DEFAULT_CALLOUT,
    Coordinate,
    JournalEntry,
    Media,
    Person,
    Place,
    Record,
    RelationshipType,
)
from . import frontmatter
from .frontmatter import (
    FieldSchema,
    FrontmatterDocument,
    parse_float,
    parse_int,
    parse_iso_datetime,
    parse_text,
    unquote,
    unwrap_wikilink,
)

# Same character class the vault's other tooling strips from filenames
_ILLEGAL_FILENAME_CHARS = re.compile(r'[<>:"/\\|?*]')
_WHITESPACE_RUN = re.compile(r"\s+")
_ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def sanitize_filename(name: str) -> str:
    """Remove `<>:"/\\|?*` and collapse whitespace runs."""
    sanitized = _ILLEGAL_FILENAME_CHARS.sub("", name)
    return _WHITESPACE_RUN.sub(" ", sanitized).strip()


def id_from_filename(filename: str, sanitize: bool = False) -> str:
    """Strip directories and the extension from `filename`."""
    stem = PurePath(filename).stem
    return sanitize_filename(stem) if sanitize else stem


def _item(value: str) -> str:
    return value.strip()


def parse_coordinate(value: str) -> Coordinate | None:
    """Parse `"<lat>,<lon>"`."""
    parts = unquote(value.strip()).split(",")
    if len(parts) != 2:
        return None
    lat, lon = parse_float(parts[0]), parse_float(parts[1])
    if lat is None or lon is None:
        return None
    return Coordinate(latitude=lat, longitude=lon)


def parse_plain_date(value: str) -> date | None:
    cleaned = unquote(value.strip())
    if not _ISO_DATE_RE.match(cleaned):
        return None
    try:
        return date.fromisoformat(cleaned)
    except ValueError:
        return None


ENTRY_SCHEMA = FieldSchema(
    scalars={
        "date_created": parse_iso_datetime,
        "place": lambda v: unwrap_wikilink(v) or None,
        "location": parse_text,
        "temp": parse_int,
        "cond": parse_text,
        "humidity": parse_int,
        "aqi": parse_int,
        "mood_valence": parse_float,
        "recording_device": parse_text,
        "sample_rate": parse_int,
        "bit_depth": parse_int,
    },
    arrays={
        "tags": _item,
        "people": unwrap_wikilink,
        "mood_labels": _item,
        "mood_associations": _item,
        "audio_attachments": _item,
    },
)

PLACE_SCHEMA = FieldSchema(
    scalars={
        "location": parse_coordinate,
        "addr": parse_text,
        "callout": parse_text,
        "pin": parse_text,
        "color": parse_text,
        "url": parse_text,
    },
    arrays={
        "tags": _item,
        "aliases": _item,
    },
)

PERSON_SCHEMA = FieldSchema(
    scalars={
        "pronouns": parse_text,
        "relationship": parse_text,
        "email": parse_text,
        "phone": parse_text,
        "address": parse_text,
        "birthday": parse_text,
        "met_date": parse_plain_date,
        "color": parse_text,
        "photo": parse_text,
    },
    arrays={
        "tags": _item,
        "aliases": _item,
    },
)

MEDIA_SCHEMA = FieldSchema(
    scalars={
        "type": parse_text,
        "title": parse_text,
        "creator": parse_text,
        "release_year": parse_int,
        "genre": parse_text,
        "artwork_url": parse_text,
        "itunes_id": parse_text,
        "itunes_url": parse_text,
    },
    arrays={
        "tags": _item,
        "aliases": _item,
    },
)

_SCHEMAS: dict[type, FieldSchema] = {
    JournalEntry: ENTRY_SCHEMA,
    Place: PLACE_SCHEMA,
    Person: PERSON_SCHEMA,
    Media: MEDIA_SCHEMA,
}


def schema_for(record: Record) -> FieldSchema:
    """The schema a record of this type is parsed with."""
    try:
        return _SCHEMAS[type(record)]
    except KeyError:
        raise TypeError(f"no schema for {type(record).__name__}") from None


def _optional_array(doc: FrontmatterDocument, key: str) -> tuple[str, ...] | None:
    items = doc.get(key)
    return items if items else None


def build_entry(doc: FrontmatterDocument, filename: str) -> JournalEntry:
    """Fold a parsed entry document into a JournalEntry.

    Raises:
        MissingRequiredFieldError: if date_created is absent or unparseable
    """
    date_created = doc.get("date_created")
    if date_created is None:
        raise MissingRequiredFieldError("date_created", filename)

    return JournalEntry(
        id=id_from_filename(filename),
        date_created=date_created,
        tags=doc.get("tags", ()),
        place=doc.get("place"),
        people=doc.get("people", ()),
        place_callout=None,  # joined from Places at display time
        content=doc.body,
        location=doc.get("location"),
        temperature=doc.get("temp"),
        condition=doc.get("cond"),
        humidity=doc.get("humidity"),
        aqi=doc.get("aqi"),
        mood_valence=doc.get("mood_valence"),
        mood_labels=_optional_array(doc, "mood_labels"),
        mood_associations=_optional_array(doc, "mood_associations"),
        audio_attachments=_optional_array(doc, "audio_attachments"),
        recording_device=doc.get("recording_device"),
        sample_rate=doc.get("sample_rate"),
        bit_depth=doc.get("bit_depth"),
        unknown_fields=dict(doc.unknown_fields),
        unknown_field_order=doc.unknown_field_order,
    )


def build_place(doc: FrontmatterDocument, filename: str) -> Place:
    """Fold a parsed place document into a Place."""
    return Place(
        id=id_from_filename(filename, sanitize=True),
        name=id_from_filename(filename),
        location=doc.get("location"),
        address=doc.get("addr"),
        tags=doc.get("tags", ()),
        callout=doc.get("callout") or DEFAULT_CALLOUT,
        pin=doc.get("pin"),
        color=doc.get("color"),
        url=doc.get("url"),
        aliases=doc.get("aliases", ()),
        content=doc.body,
        unknown_fields=dict(doc.unknown_fields),
        unknown_field_order=doc.unknown_field_order,
    )


def build_person(doc: FrontmatterDocument, filename: str) -> Person:
    """Fold a parsed person document into a Person."""
    return Person(
        id=id_from_filename(filename, sanitize=True),
        name=id_from_filename(filename),
        pronouns=doc.get("pronouns"),
        relationship=doc.get("relationship") or RelationshipType.OTHER.value,
        tags=doc.get("tags", ()),
        aliases=doc.get("aliases", ()),
        email=doc.get("email"),
        phone=doc.get("phone"),
        address=doc.get("address"),
        birthday=doc.get("birthday"),
        met_date=doc.get("met_date"),
        color=doc.get("color"),
        photo=doc.get("photo"),
        content=doc.body,
        unknown_fields=dict(doc.unknown_fields),
        unknown_field_order=doc.unknown_field_order,
    )


def parse_entry(text: str, filename: str) -> JournalEntry:
    """Parse entry file text; raises ParseError subclasses on failure."""
    return build_entry(frontmatter.parse(text, ENTRY_SCHEMA, filename), filename)


def parse_place(text: str, filename: str) -> Place:
    return build_place(frontmatter.parse(text, PLACE_SCHEMA, filename), filename)


def parse_person(text: str, filename: str) -> Person:
    return build_person(frontmatter.parse(text, PERSON_SCHEMA, filename), filename)


def build_media(doc: FrontmatterDocument, filename: str) -> Media:
    """Fold a parsed media document into a Media.

    The title falls back to the filename stem.

    Raises:
        MissingRequiredFieldError: if type is absent
    """
    media_type = doc.get("type")
    if media_type is None:
        raise MissingRequiredFieldError("type", filename)

    return Media(
        id=id_from_filename(filename, sanitize=True),
        title=doc.get("title") or id_from_filename(filename),
        media_type=media_type,
        creator=doc.get("creator"),
        release_year=doc.get("release_year"),
        genre=doc.get("genre"),
        artwork_url=doc.get("artwork_url"),
        itunes_id=doc.get("itunes_id"),
        itunes_url=doc.get("itunes_url"),
        tags=doc.get("tags", ()),
        aliases=doc.get("aliases", ()),
        content=doc.body,
        unknown_fields=dict(doc.unknown_fields),
        unknown_field_order=doc.unknown_field_order,
    )


def parse_media(text: str, filename: str) -> Media:
    return build_media(frontmatter.parse(text, MEDIA_SCHEMA, filename), filename)
