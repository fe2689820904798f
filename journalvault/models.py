"""Data models for vault records."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from enum import Enum
from typing import Literal

ScalarKind = Literal["integer", "float", "boolean", "datetime", "text", "array"]

# Place categories used for icon/color selection
CALLOUT_TYPES = (
    "place",
    "cafe",
    "restaurant",
    "park",
    "school",
    "home",
    "shop",
    "grocery",
    "bar",
    "medical",
    "airport",
    "hotel",
    "library",
    "zoo",
    "museum",
    "workout",
    "concert",
    "movie",
    "entertainment",
    "service",
)

DEFAULT_CALLOUT = "place"

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


@dataclass(frozen=True)
class ScalarValue:
    """A frontmatter value kept verbatim for a field the parser does not know."""

    kind: ScalarKind
    value: int | float | bool | datetime | str | tuple[str, ...]

    def __post_init__(self):
        if self.kind == "array":
            items = tuple(self.value)  # type: ignore[arg-type]
            if not all(isinstance(item, str) for item in items):
                raise ValueError("array values may only hold text items")
            object.__setattr__(self, "value", items)

    @classmethod
    def integer(cls, value: int) -> "ScalarValue":
        return cls("integer", value)

    @classmethod
    def floating(cls, value: float) -> "ScalarValue":
        return cls("float", value)

    @classmethod
    def boolean(cls, value: bool) -> "ScalarValue":
        return cls("boolean", value)

    @classmethod
    def timestamp(cls, value: datetime) -> "ScalarValue":
        return cls("datetime", value)

    @classmethod
    def text(cls, value: str) -> "ScalarValue":
        return cls("text", value)

    @classmethod
    def array(cls, items=()) -> "ScalarValue":
        return cls("array", tuple(items))

    @property
    def is_array(self) -> bool:
        return self.kind == "array"


def check_unknown_order(fields: dict[str, ScalarValue], order: tuple[str, ...]) -> None:
    """Raise ValueError unless `order` lists every key of `fields` exactly once."""
    if len(order) != len(set(order)):
        raise ValueError(f"duplicate keys in unknown field order: {list(order)}")
    if set(order) != set(fields):
        raise ValueError(
            f"unknown field order {list(order)} does not match fields {sorted(fields)}"
        )


class _UnknownFieldsMixin:
    """Helpers shared by records that carry unrecognized frontmatter fields."""

    unknown_fields: dict[str, ScalarValue]
    unknown_field_order: tuple[str, ...]

    def __post_init__(self):
        check_unknown_order(self.unknown_fields, self.unknown_field_order)

    def with_unknown_field(self, key: str, value: ScalarValue):
        """Return a copy with `key` set, appended to the order if new."""
        fields = dict(self.unknown_fields)
        fields[key] = value
        order = self.unknown_field_order
        if key not in order:
            order = order + (key,)
        return replace(self, unknown_fields=fields, unknown_field_order=order)  # type: ignore[type-var]

    def without_unknown_field(self, key: str):
        fields = {k: v for k, v in self.unknown_fields.items() if k != key}
        order = tuple(k for k in self.unknown_field_order if k != key)
        return replace(self, unknown_fields=fields, unknown_field_order=order)  # type: ignore[type-var]


@dataclass(frozen=True)
class Coordinate:
    latitude: float
    longitude: float


class RelationshipType(str, Enum):
    FAMILY = "family"
    FRIEND = "friend"
    COLLEAGUE = "colleague"
    ACQUAINTANCE = "acquaintance"
    PARTNER = "partner"
    MENTOR = "mentor"
    OTHER = "other"

    @classmethod
    def from_text(cls, value: str | None) -> "RelationshipType":
        """Map frontmatter text onto a relationship, falling back to OTHER."""
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return cls.OTHER


@dataclass(frozen=True)
class JournalEntry(_UnknownFieldsMixin):
    """A journal entry from Entries/YYYY/MM-Month/DD/<id>.md."""

    id: str  # filename without extension
    date_created: datetime
    tags: tuple[str, ...] = ()
    place: str | None = None  # place name without [[ ]]
    people: tuple[str, ...] = ()
    place_callout: str | None = None  # joined from Places, never written
    content: str = ""
    location: str | None = None

    # Weather
    temperature: int | None = None
    condition: str | None = None
    humidity: int | None = None
    aqi: int | None = None

    # State of mind
    mood_valence: float | None = None
    mood_labels: tuple[str, ...] | None = None
    mood_associations: tuple[str, ...] | None = None

    # Audio
    audio_attachments: tuple[str, ...] | None = None
    recording_device: str | None = None
    sample_rate: int | None = None
    bit_depth: int | None = None

    unknown_fields: dict[str, ScalarValue] = field(default_factory=dict, hash=False)
    unknown_field_order: tuple[str, ...] = ()

    @property
    def filename(self) -> str:
        """Filename stem in YYYYMMDDHHmm form, in the entry's own UTC offset."""
        return self.date_created.strftime("%Y%m%d%H%M")

    @property
    def date_directory(self) -> str:
        """Date part of the entry directory: YYYY/MM-Month/DD."""
        d = self.date_created
        return f"{d.year:04d}/{d.month:02d}-{MONTH_NAMES[d.month - 1]}/{d.day:02d}"

    @property
    def is_valid(self) -> bool:
        return bool(self.content.strip())

    @classmethod
    def create(
        cls,
        content: str,
        date_created: datetime,
        place: str | None = None,
        tags: tuple[str, ...] = ("entry",),
    ) -> "JournalEntry":
        """Create a new entry whose id follows the filename convention."""
        return cls(
            id=date_created.strftime("%Y%m%d%H%M"),
            date_created=date_created,
            tags=tuple(tags),
            place=place,
            content=content,
        )


@dataclass(frozen=True)
class Place(_UnknownFieldsMixin):
    """A place from Places/<name>.md."""

    id: str  # sanitized filename without extension
    name: str
    location: Coordinate | None = None
    address: str | None = None
    tags: tuple[str, ...] = ()
    callout: str = DEFAULT_CALLOUT
    pin: str | None = None
    color: str | None = None  # rgb(72,133,237)
    url: str | None = None
    aliases: tuple[str, ...] = ()
    content: str = ""
    unknown_fields: dict[str, ScalarValue] = field(default_factory=dict, hash=False)
    unknown_field_order: tuple[str, ...] = ()

    @property
    def filename(self) -> str:
        return self.id + ".md"

    @property
    def is_known_callout(self) -> bool:
        return self.callout.lower() in CALLOUT_TYPES


@dataclass(frozen=True)
class Person(_UnknownFieldsMixin):
    """A person from People/<name>.md."""

    id: str
    name: str
    pronouns: str | None = None
    relationship: str = RelationshipType.OTHER.value  # raw text, written back as-is
    tags: tuple[str, ...] = ()
    aliases: tuple[str, ...] = ()
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    birthday: str | None = None  # MM-DD or YYYY-MM-DD
    met_date: date | None = None
    color: str | None = None
    photo: str | None = None  # filename in People/Photos/
    content: str = ""
    unknown_fields: dict[str, ScalarValue] = field(default_factory=dict, hash=False)
    unknown_field_order: tuple[str, ...] = ()

    @property
    def filename(self) -> str:
        return self.id + ".md"

    @property
    def relationship_type(self) -> RelationshipType:
        return RelationshipType.from_text(self.relationship)

    @property
    def social_media(self) -> dict[str, str]:
        """Text-valued extra fields, e.g. `instagram: handle`."""
        return {
            key: str(self.unknown_fields[key].value)
            for key in self.unknown_field_order
            if self.unknown_fields[key].kind == "text"
        }


class MediaType(str, Enum):
    MOVIE = "movie"
    TV_SHOW = "tv_show"
    BOOK = "book"
    PODCAST = "podcast"
    ALBUM = "album"

    @property
    def display_name(self) -> str:
        return "TV Show" if self is MediaType.TV_SHOW else self.value.capitalize()

    @classmethod
    def from_text(cls, value: str | None) -> "MediaType | None":
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return None


@dataclass(frozen=True)
class Media(_UnknownFieldsMixin):
    """A movie, show, book, podcast or album note from Media/<title>.md."""

    id: str  # sanitized filename without extension
    title: str
    media_type: str  # raw `type:` text, e.g. "tv_show"
    creator: str | None = None  # author, director, artist or host
    release_year: int | None = None
    genre: str | None = None
    artwork_url: str | None = None
    itunes_id: str | None = None
    itunes_url: str | None = None
    tags: tuple[str, ...] = ()
    aliases: tuple[str, ...] = ()
    content: str = ""
    unknown_fields: dict[str, ScalarValue] = field(default_factory=dict, hash=False)
    unknown_field_order: tuple[str, ...] = ()

    @property
    def filename(self) -> str:
        return self.id + ".md"

    @property
    def kind(self) -> MediaType | None:
        """The recognized media type, or None for a value outside the vocabulary."""
        return MediaType.from_text(self.media_type)

    @property
    def display_type(self) -> str:
        kind = self.kind
        return kind.display_name if kind is not None else self.media_type


Entity = Place | Person
Record = JournalEntry | Place | Person | Media
