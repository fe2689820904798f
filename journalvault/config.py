"""Vault configuration loaded from `journalvault.toml`."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .autocomplete import DEFAULT_LIMIT
from .errors import ConfigError

CONFIG_FILENAME = "journalvault.toml"


@dataclass(frozen=True)
class VaultConfig:
    entries_dir: str = "Entries"
    places_dir: str = "Places"
    people_dir: str = "People"
    media_dir: str = "Media"
    suggestion_limit: int = DEFAULT_LIMIT
    default_tags: tuple[str, ...] = ("entry",)
    source: Path | None = None


def _coerce_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _dir_name(section: dict[str, Any], key: str, default: str) -> str:
    value = section.get(key, default)
    if not isinstance(value, str) or not value.strip():
        raise ConfigError(f"[vault].{key} must be a non-empty string")
    return value.strip().strip("/")


def load_config(path: Path) -> VaultConfig:
    """Load a config file.

    Raises:
        ConfigError: if the file is not valid TOML or a value has the wrong type
    """
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(f"Failed to read config {path}: {e}") from e

    vault = _coerce_dict(data.get("vault"))
    autocomplete = _coerce_dict(data.get("autocomplete"))
    entries = _coerce_dict(data.get("entries"))

    limit = autocomplete.get("limit", DEFAULT_LIMIT)
    if not isinstance(limit, int) or isinstance(limit, bool) or limit < 1:
        raise ConfigError("[autocomplete].limit must be a positive integer")

    default_tags = entries.get("default_tags", ["entry"])
    if not isinstance(default_tags, list) or not all(isinstance(t, str) for t in default_tags):
        raise ConfigError("[entries].default_tags must be a list of strings")

    return VaultConfig(
        entries_dir=_dir_name(vault, "entries_dir", "Entries"),
        places_dir=_dir_name(vault, "places_dir", "Places"),
        people_dir=_dir_name(vault, "people_dir", "People"),
        media_dir=_dir_name(vault, "media_dir", "Media"),
        suggestion_limit=limit,
        default_tags=tuple(default_tags),
        source=path,
    )


def find_config(vault_path: Path, explicit: Path | None = None) -> VaultConfig:
    """Load `explicit`, else `<vault>/journalvault.toml`, else defaults."""
    if explicit is not None:
        if not explicit.exists():
            raise ConfigError(f"Config file not found: {explicit}")
        return load_config(explicit)

    candidate = vault_path / CONFIG_FILENAME
    if candidate.exists():
        return load_config(candidate)
    return VaultConfig()
