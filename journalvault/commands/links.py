"""Wiki-link rendering and autocomplete commands."""

from __future__ import annotations

from pathlib import Path

from rich.console import Console
from rich.style import Style
from rich.table import Table
from rich.text import Text

from ..autocomplete import Trigger, find_active_trigger, insert_suggestion, suggest
from ..config import VaultConfig
from ..vault.frontmatter import split_document
from ..vault.loader import load_vault
from ..wikilinks import WikiLink, entity_uri, parse_links

LINK_STYLES = {"place": "bold blue", "person": "bold magenta"}


def styled_text(text: str, links: list[WikiLink]) -> Text:
    """Replace each link with its display text; unresolved links are dimmed."""
    styled = Text()
    cursor = 0
    for link in links:
        start, end = link.span
        styled.append(text[cursor:start])
        if link.is_valid:
            style = Style.parse(LINK_STYLES[link.kind]) + Style(link=entity_uri(link.resolved))
            styled.append(link.display_text, style=style)
        else:
            styled.append(link.display_text, style="dim")
        cursor = end
    styled.append(text[cursor:])
    return styled


def run_links(vault_path: Path, config: VaultConfig, file: Path) -> int:
    """Print a file's body with its wiki-links resolved and styled."""
    console = Console()
    err = Console(stderr=True)

    vault = load_vault(vault_path, config)
    text = file.read_text(encoding="utf-8")
    _, body = split_document(text, file.name)

    links = parse_links(body, vault.places, vault.people)
    console.print(styled_text(body, links))

    unresolved = [link for link in links if not link.is_valid]
    err.print(
        f"\n{len(links)} link(s), {len(unresolved)} unresolved",
        style="yellow" if unresolved else "dim",
    )
    for link in unresolved:
        err.print(f"  unresolved: [[{link.target}]]", style="yellow", highlight=False, markup=False)
    return 0


def run_suggest(
    vault_path: Path,
    config: VaultConfig,
    text: str,
    *,
    mention: bool = False,
) -> int:
    """Show the ranked autocomplete suggestions for `text`.

    When `text` ends in an open `[[` or `@` the trigger and search text are
    taken from it, and the completed text is printed under the table.
    Otherwise the whole of `text` is the search.
    """
    console = Console()
    vault = load_vault(vault_path, config)

    active = find_active_trigger(text)
    if active is not None:
        trigger, search_text = active
    else:
        trigger = Trigger.MENTION if mention else Trigger.WIKI_LINK
        search_text = text.strip()

    suggestions = suggest(
        search_text,
        trigger,
        vault.places,
        vault.people,
        limit=config.suggestion_limit,
    )
    if not suggestions:
        Console(stderr=True).print("No suggestions.", style="yellow")
        return 0

    table = Table(title=Text(f"Suggestions for {trigger.value}{search_text}"))
    table.add_column("Name", style="bold")
    table.add_column("Kind")
    table.add_column("Detail", style="dim")
    table.add_column("Inserts")
    for s in suggestions:
        table.add_row(s.display_name, s.kind, s.subtitle or "", Text(s.insertion_text))
    console.print(table)

    if active is not None:
        completed, _ = insert_suggestion(text, suggestions[0], trigger)
        console.print(Text(completed))
    return 0
