"""Line-oriented frontmatter parser for the vault's YAML subset.

Vault files are written by hand, by Obsidian and by this package, so the
parser accepts exactly the shapes those writers produce:

- ``key: value`` scalars (optionally quoted)
- inline arrays ``key: [a, b, c]``
- multi-line arrays: ``key:`` followed by ``- item`` lines

It deliberately does not use a YAML library; quoting and coercion rules differ
from YAML and existing vault files depend on them.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Callable

from ..errors import MalformedDocumentError
from ..models import ScalarValue, check_unknown_order

DELIMITER = "---\n"

_ITEM_RE = re.compile(r"^-\s+")
_INT_RE = re.compile(r"^[+-]?\d+$")
_FLOAT_RE = re.compile(r"^[+-]?(?:\d+\.\d*|\.\d+|\d+)(?:[eE][+-]?\d+)?$")
# Extended ISO-8601 with mandatory offset; fractional seconds optional
_ISO_DATETIME_RE = re.compile(
    r"^(\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2})(?:\.(\d+))?(Z|[+-]\d{2}:\d{2})$"
)

Coercer = Callable[[str], Any]


@dataclass(frozen=True)
class FieldSchema:
    """Recognized keys of one record type.

    `scalars` maps a key to a coercer returning the typed value or None.
    `arrays` maps a key to a transform applied to each item.
    """

    scalars: dict[str, Coercer] = field(default_factory=dict)
    arrays: dict[str, Callable[[str], str]] = field(default_factory=dict)

    def is_known(self, key: str) -> bool:
        return key in self.scalars or key in self.arrays


@dataclass(frozen=True)
class FrontmatterDocument:
    """A parsed file: recognized values, preserved unknown values, and body."""

    known_fields: dict[str, Any] = field(default_factory=dict)
    unknown_fields: dict[str, ScalarValue] = field(default_factory=dict)
    unknown_field_order: tuple[str, ...] = ()
    body: str = ""
    unparsed_keys: tuple[str, ...] = ()  # known scalars whose value failed coercion

    def __post_init__(self):
        check_unknown_order(self.unknown_fields, self.unknown_field_order)

    def get(self, key: str, default: Any = None) -> Any:
        return self.known_fields.get(key, default)


def unquote(value: str) -> str:
    """Strip one pair of matching single or double quotes."""
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def unwrap_wikilink(value: str) -> str:
    """Turn `"[[Name]]"` into `Name` by textual stripping (no pipe handling)."""
    value = unquote(value.strip())
    if value.startswith("[["):
        value = value[2:]
    if value.endswith("]]"):
        value = value[:-2]
    return value


def split_inline_array(value: str) -> tuple[str, ...] | None:
    """Parse `[a, b, c]`; return None when `value` is not bracketed."""
    if not (value.startswith("[") and value.endswith("]")):
        return None
    inner = value[1:-1].strip()
    if not inner:
        return ()
    return tuple(unquote(item.strip()) for item in inner.split(","))


def parse_iso_datetime(value: str) -> datetime | None:
    """Parse `2025-01-15T14:30:00.000-08:00` (fraction optional) or return None."""
    match = _ISO_DATETIME_RE.match(value.strip())
    if not match:
        return None
    main, fraction, offset = match.groups()
    try:
        parsed = datetime.strptime(main, "%Y-%m-%dT%H:%M:%S")
        if offset == "Z":
            tz = timezone.utc
        else:
            sign = -1 if offset[0] == "-" else 1
            hours, minutes = int(offset[1:3]), int(offset[4:6])
            if minutes >= 60:
                return None
            tz = timezone(sign * timedelta(hours=hours, minutes=minutes))
    except ValueError:
        return None
    microsecond = int(fraction[:6].ljust(6, "0")) if fraction else 0
    return parsed.replace(microsecond=microsecond, tzinfo=tz)


def format_iso_datetime(value: datetime) -> str:
    """Format with millisecond precision and a `+HH:MM` offset."""
    if value.tzinfo is None:
        value = value.astimezone()
    return value.isoformat(timespec="milliseconds")


def parse_int(value: str) -> int | None:
    cleaned = unquote(value.strip())
    return int(cleaned) if _INT_RE.match(cleaned) else None


def parse_float(value: str) -> float | None:
    cleaned = unquote(value.strip())
    return float(cleaned) if _FLOAT_RE.match(cleaned) else None


def parse_text(value: str) -> str | None:
    cleaned = unquote(value.strip())
    return cleaned or None


def coerce_scalar(value: str) -> ScalarValue:
    """Best-effort typing of an unrecognized field's value.

    Order: inline array, integer, float, boolean, ISO-8601 datetime, text.
    """
    value = value.strip()
    items = split_inline_array(value)
    if items is not None:
        return ScalarValue.array(items)

    cleaned = unquote(value)
    if _INT_RE.match(cleaned):
        return ScalarValue.integer(int(cleaned))
    if _FLOAT_RE.match(cleaned):
        return ScalarValue.floating(float(cleaned))
    if cleaned.lower() in ("true", "false"):
        return ScalarValue.boolean(cleaned.lower() == "true")
    parsed = parse_iso_datetime(cleaned)
    if parsed is not None:
        return ScalarValue.timestamp(parsed)
    return ScalarValue.text(cleaned)


def split_document(text: str, filename: str | None = None) -> tuple[str, str]:
    """Split file text into (frontmatter block, trimmed body)."""
    segments = text.replace("\r\n", "\n").split(DELIMITER)
    if len(segments) < 3:
        raise MalformedDocumentError(filename)
    return segments[1], DELIMITER.join(segments[2:]).strip()


def parse_frontmatter(
    block: str, schema: FieldSchema
) -> tuple[dict[str, Any], dict[str, ScalarValue], tuple[str, ...], tuple[str, ...]]:
    """Run the line state machine over a frontmatter block.

    Returns (known fields, unknown fields, unknown field order, unparsed keys).
    Unparsed keys are recognized scalars whose value failed coercion; they are
    left out of the known fields.
    """
    known: dict[str, Any] = {}
    arrays: dict[str, list[str]] = {}
    unknown: dict[str, ScalarValue] = {}
    order: list[str] = []
    unparsed: list[str] = []
    active_key: str | None = None

    def set_unknown(key: str, value: ScalarValue) -> None:
        if key not in unknown:
            order.append(key)
        unknown[key] = value

    for raw_line in block.split("\n"):
        line = raw_line.strip()
        if not line:
            continue

        if line.startswith("-"):
            # Items outside an array are ignored
            if active_key is not None and _ITEM_RE.match(line):
                item = _ITEM_RE.sub("", line, count=1).strip()
                if active_key in schema.arrays:
                    arrays[active_key].append(schema.arrays[active_key](item))
                else:
                    current = unknown[active_key]
                    unknown[active_key] = ScalarValue.array(current.value + (item,))  # type: ignore[operator]
            continue

        key, sep, value = line.partition(":")
        key = key.strip()
        active_key = None
        if not sep or not key:
            continue
        value = value.strip()

        if not value:
            # An empty value always opens a multi-line array
            if key in schema.arrays:
                arrays[key] = []
                active_key = key
            elif key not in schema.scalars:
                set_unknown(key, ScalarValue.array())
                active_key = key
            continue

        if key in schema.arrays:
            items = split_inline_array(value)
            if items is None:
                items = (unquote(value),)
            arrays[key] = [schema.arrays[key](item) for item in items]
        elif key in schema.scalars:
            coerced = schema.scalars[key](value)
            if coerced is not None:
                known[key] = coerced
            elif key not in unparsed:
                unparsed.append(key)
        else:
            set_unknown(key, coerce_scalar(value))

    for key, items in arrays.items():
        known[key] = tuple(items)
    return known, unknown, tuple(order), tuple(unparsed)


def parse(text: str, schema: FieldSchema, filename: str | None = None) -> FrontmatterDocument:
    """Parse a whole vault file into a FrontmatterDocument.

    Raises:
        MalformedDocumentError: if the file has no frontmatter block
    """
    block, body = split_document(text, filename)
    known, unknown, order, unparsed = parse_frontmatter(block, schema)
    return FrontmatterDocument(
        known_fields=known,
        unknown_fields=unknown,
        unknown_field_order=order,
        body=body,
        unparsed_keys=unparsed,
    )
