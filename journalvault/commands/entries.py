"""Entry listing and creation commands."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from rich.console import Console
from rich.table import Table

from ..config import VaultConfig
from ..errors import FileAlreadyExistsError
from ..models import JournalEntry
from ..vault.loader import load_vault
from ..vault.writer import write_entry


def run_entries(
    vault_path: Path,
    config: VaultConfig,
    *,
    limit: int | None = 20,
    tag: str | None = None,
) -> int:
    """Print a newest-first table of entries."""
    console = Console()
    vault = load_vault(vault_path, config)

    entries = vault.with_place_callouts()
    if tag:
        wanted = tag.lower()
        entries = [e for e in entries if any(t.lower() == wanted for t in e.tags)]
    if limit is not None:
        entries = entries[: max(0, limit)]

    if not entries:
        Console(stderr=True).print("No entries found.", style="yellow")
        return 0

    table = Table(title=f"Entries ({len(entries)})")
    table.add_column("Date", style="cyan", no_wrap=True)
    table.add_column("Place")
    table.add_column("People")
    table.add_column("Tags", style="dim")
    table.add_column("Content")

    for entry in entries:
        place = entry.place or ""
        if entry.place_callout:
            place += f" ({entry.place_callout})"
        first_line = entry.content.strip().split("\n", 1)[0]
        table.add_row(
            entry.date_created.strftime("%Y-%m-%d %H:%M"),
            place,
            ", ".join(entry.people),
            ", ".join(entry.tags),
            first_line[:60],
        )

    console.print(table)
    return 0


def run_new(
    vault_path: Path,
    config: VaultConfig,
    content: str,
    *,
    place: str | None = None,
    when: datetime | None = None,
) -> int:
    """Create an entry stamped `when` (default now, local time)."""
    console = Console(stderr=True)
    when = when or datetime.now().astimezone()
    entry = JournalEntry.create(content, when, place=place, tags=config.default_tags)
    if not entry.is_valid:
        console.print("Entry content is empty.", style="bold red")
        return 1

    try:
        path = write_entry(vault_path, entry, config)
    except FileAlreadyExistsError as e:
        console.print(str(e), style="bold red", highlight=False, markup=False)
        return 1

    console.print(f"Created {path.relative_to(vault_path)}", style="green", highlight=False, markup=False)
    return 0
