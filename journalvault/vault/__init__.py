"""Vault parsing, serialization, loading and writing."""

from .frontmatter import FrontmatterDocument, FieldSchema, parse, split_document
from .loader import LoadFailure, Vault, load_vault
from .records import (
    ENTRY_SCHEMA,
    PERSON_SCHEMA,
    PLACE_SCHEMA,
    parse_entry,
    parse_person,
    parse_place,
    sanitize_filename,
)
from .serializer import entry_path, requires_relocation, serialize

__all__ = [
    "FrontmatterDocument",
    "FieldSchema",
    "parse",
    "split_document",
    "LoadFailure",
    "Vault",
    "load_vault",
    "ENTRY_SCHEMA",
    "PERSON_SCHEMA",
    "PLACE_SCHEMA",
    "parse_entry",
    "parse_person",
    "parse_place",
    "sanitize_filename",
    "entry_path",
    "requires_relocation",
    "serialize",
]
