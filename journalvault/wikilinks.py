"""Wiki-link parsing and resolution against places and people."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Literal

from .models import Entity, Person, Place

# [[target]] or [[target|display]]; a link body never contains "]"
WIKILINK_PATTERN = re.compile(r"\[\[([^\]]+)\]\]")


@dataclass(frozen=True)
class WikiLink:
    """A `[[...]]` span in some text and what it resolved to."""

    target: str
    display_text: str
    span: tuple[int, int]  # offsets of the full [[...]] in the source text
    resolved: Entity | None = None

    @property
    def is_valid(self) -> bool:
        return self.resolved is not None

    @property
    def kind(self) -> Literal["place", "person"] | None:
        if isinstance(self.resolved, Place):
            return "place"
        if isinstance(self.resolved, Person):
            return "person"
        return None


def split_link(content: str) -> tuple[str, str]:
    """Split link content into (target, display) on the first `|`."""
    if "|" in content:
        target, display = content.split("|", 1)
        return target.strip(), display.strip()
    return content, content


def extract_links(text: str) -> list[tuple[str, str, tuple[int, int]]]:
    """Find all links as (target, display, span), left to right."""
    return [(*split_link(m.group(1)), m.span()) for m in WIKILINK_PATTERN.finditer(text)]


def resolve(target: str, places: Iterable[Place], people: Iterable[Person]) -> Entity | None:
    """Find the entity a link target refers to.

    Exact name matches win over alias matches. Within each pass the places
    list is searched before the people list, first match wins; all
    comparisons are case-insensitive.
    """
    candidates: list[Entity] = [*places, *people]
    wanted = target.lower()

    for entity in candidates:
        if entity.name.lower() == wanted:
            return entity

    for entity in candidates:
        if any(alias.lower() == wanted for alias in entity.aliases):
            return entity

    return None


def parse_links(text: str, places: Iterable[Place], people: Iterable[Person]) -> list[WikiLink]:
    """Parse every wiki-link in `text` and resolve it."""
    places, people = list(places), list(people)
    return [
        WikiLink(
            target=target,
            display_text=display,
            span=span,
            resolved=resolve(target, places, people),
        )
        for target, display, span in extract_links(text)
    ]


def render_plain(text: str, links: list[WikiLink]) -> str:
    """Replace each link span with its display text."""
    parts: list[str] = []
    cursor = 0
    for link in links:
        start, end = link.span
        parts.append(text[cursor:start])
        parts.append(link.display_text)
        cursor = end
    parts.append(text[cursor:])
    return "".join(parts)


def entity_uri(entity: Entity) -> str:
    """URI used by renderers to make a resolved link tappable."""
    kind = "place" if isinstance(entity, Place) else "person"
    return f"wikilink://{kind}/{entity.id}"
