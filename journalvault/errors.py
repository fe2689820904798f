"""Exception types raised by vault parsing, writing and configuration."""

from __future__ import annotations

from pathlib import Path


class JournalVaultError(Exception):
    """Base class for all journalvault errors."""


class ParseError(JournalVaultError):
    """A vault file could not be turned into a record."""

    reason = "parse-error"

    def __init__(self, message: str, filename: str | None = None):
        self.filename = filename
        if filename:
            message = f"{filename}: {message}"
        super().__init__(message)


class MalformedDocumentError(ParseError):
    """The `---` frontmatter delimiter structure is missing or broken."""

    reason = "malformed-document"

    def __init__(self, filename: str | None = None):
        super().__init__("frontmatter delimiters not found", filename)


class MissingRequiredFieldError(ParseError):
    """A required frontmatter field is absent or could not be parsed."""

    reason = "missing-required-field"

    def __init__(self, field: str, filename: str | None = None):
        self.field = field
        super().__init__(f"missing or unparseable required field '{field}'", filename)


class VaultWriteError(JournalVaultError):
    """A record could not be written to the vault."""

    def __init__(self, message: str, path: Path):
        self.path = path
        super().__init__(f"{message}: {path}")


class FileAlreadyExistsError(VaultWriteError):
    def __init__(self, path: Path):
        super().__init__("file already exists", path)


class RecordNotFoundError(VaultWriteError):
    def __init__(self, path: Path):
        super().__init__("file not found", path)


class ConfigError(JournalVaultError):
    """The vault configuration file is invalid."""
