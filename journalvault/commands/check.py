"""Check command implementation."""

from __future__ import annotations

import json
from collections import Counter
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from rich.console import Console

from ..config import VaultConfig
from ..vault.loader import Vault, load_vault
from ..wikilinks import parse_links


@dataclass
class CheckResult:
    """A single check finding."""

    level: Literal["error", "warning", "info"]
    rule: str
    file: Path
    message: str

    def __str__(self) -> str:
        return f"{self.level.upper()}: [{self.rule}] {self.file.name} - {self.message}"


def _line_of(text: str, offset: int) -> int:
    return text.count("\n", 0, offset) + 1


def check_vault(vault: Vault) -> list[CheckResult]:
    """Collect load failures and link/callout problems for a loaded vault."""
    results = [
        CheckResult(level="error", rule=f.reason, file=f.path, message=f.message)
        for f in vault.failures
    ]

    for entry in vault.entries:
        path = vault.source_of(entry) or Path(f"{entry.id}.md")
        for link in parse_links(entry.content, vault.places, vault.people):
            if not link.is_valid:
                results.append(
                    CheckResult(
                        level="warning",
                        rule="unresolved-link",
                        file=path,
                        message=f"[[{link.target}]] matches no place or person"
                        f" (body line {_line_of(entry.content, link.span[0])})",
                    )
                )
        if entry.place and vault.get_place(entry.place) is None:
            results.append(
                CheckResult(
                    level="warning",
                    rule="unknown-place",
                    file=path,
                    message=f"place '{entry.place}' has no file in {vault.config.places_dir}/",
                )
            )

    id_counts = Counter(place.id for place in vault.places)
    for place in vault.places:
        path = vault.source_of(place) or Path(place.filename)
        if not place.is_known_callout:
            results.append(
                CheckResult(
                    level="info",
                    rule="unknown-callout",
                    file=path,
                    message=f"callout '{place.callout}' is not a known category",
                )
            )
        if id_counts[place.id] > 1:
            results.append(
                CheckResult(
                    level="warning",
                    rule="duplicate-id",
                    file=path,
                    message=f"another place sanitizes to the same id '{place.id}'",
                )
            )

    return results


def run_check(
    vault_path: Path,
    config: VaultConfig,
    fail_on: str = "error",
    output_json: bool = False,
) -> int:
    """Load the whole vault and report problems.

    Returns:
        Exit code (0 = success, 1 = findings at or above `fail_on`)
    """
    console = Console(stderr=True)
    console.print(f"Loading vault from {vault_path}...", style="dim")

    vault = load_vault(vault_path, config)
    results = check_vault(vault)

    level_order = {"error": 0, "warning": 1, "info": 2}
    results.sort(key=lambda r: (level_order.get(r.level, 99), str(r.file)))
    counts = Counter(r.level for r in results)

    if output_json:
        output = {
            "errors": [_result_to_dict(r) for r in results if r.level == "error"],
            "warnings": [_result_to_dict(r) for r in results if r.level == "warning"],
            "info": [_result_to_dict(r) for r in results if r.level == "info"],
            "summary": {
                "entries": len(vault.entries),
                "places": len(vault.places),
                "people": len(vault.people),
                "media": len(vault.media),
                "errors": counts["error"],
                "warnings": counts["warning"],
                "info": counts["info"],
            },
        }
        print(json.dumps(output, indent=2, default=str))
    else:
        for r in results:
            style = {"error": "bold red", "warning": "yellow"}.get(r.level, "dim")
            console.print(str(r), style=style, highlight=False)
        console.print(
            f"\n{len(vault.entries)} entries, {len(vault.places)} places, {len(vault.people)} people,"
            f" {len(vault.media)} media"
            f" | {counts['error']} error(s), {counts['warning']} warning(s)",
            style="bold",
        )

    threshold = level_order[fail_on]
    if any(level_order[r.level] <= threshold for r in results):
        return 1
    return 0


def _result_to_dict(result: CheckResult) -> dict:
    return {
        "level": result.level,
        "rule": result.rule,
        "file": str(result.file),
        "message": result.message,
    }
