"""Rewrite vault files in canonical serialized form."""

from __future__ import annotations

import logging
from pathlib import Path

from rich.console import Console

from ..config import VaultConfig
from ..vault import frontmatter
from ..vault.loader import load_vault
from ..vault.records import schema_for
from ..vault.serializer import serialize
from ..vault.writer import write_atomic

logger = logging.getLogger(__name__)


def run_fmt(vault_path: Path, config: VaultConfig, check: bool = False) -> int:
    """Re-serialize every parseable record.

    With `check`, nothing is written and the exit code is 1 when any file
    would change. Files that fail to parse are reported and left alone, as
    are files with a recognized field whose value could not be read, since
    rewriting them would drop that line.
    """
    console = Console(stderr=True)
    vault = load_vault(vault_path, config)

    changed: list[Path] = []
    kept: list[tuple[Path, tuple[str, ...]]] = []
    for record in vault.records():
        path = vault.source_of(record)
        if path is None:
            continue
        current = path.read_text(encoding="utf-8")
        unparsed = frontmatter.parse(current, schema_for(record), path.name).unparsed_keys
        if unparsed:
            kept.append((path, unparsed))
            continue
        formatted = serialize(record)
        if current.replace("\r\n", "\n") == formatted:
            continue
        changed.append(path)
        if not check:
            write_atomic(path, formatted)
            logger.info("Formatted %s", path)

    for failure in vault.failures:
        console.print(f"skipped: {failure}", style="yellow", highlight=False, markup=False)
    for path, keys in sorted(kept):
        console.print(
            f"not reformatted: unparseable {', '.join(keys)} in {path.relative_to(vault_path)}",
            style="yellow",
            highlight=False,
            markup=False,
        )

    verb = "would reformat" if check else "reformatted"
    for path in sorted(changed):
        console.print(f"{verb} {path.relative_to(vault_path)}", highlight=False, markup=False)
    console.print(f"{len(changed)} file(s) {verb}", style="bold")

    if check and changed:
        return 1
    return 0
