"""Autocomplete suggestions for `[[` wiki-links and `@` mentions."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from .models import Entity, Person, Place

DEFAULT_LIMIT = 10


class Trigger(str, Enum):
    WIKI_LINK = "[["
    MENTION = "@"

    @property
    def closing_chars(self) -> tuple[str, ...]:
        """Characters after the trigger that end an autocomplete session."""
        if self is Trigger.WIKI_LINK:
            return ("]", "\n")
        return (" ", "\n")


@dataclass(frozen=True)
class Suggestion:
    entity: Entity
    matched_alias: str | None = None

    @property
    def kind(self) -> str:
        return "place" if isinstance(self.entity, Place) else "person"

    @property
    def id(self) -> str:
        base = f"{self.kind}-{self.entity.id}"
        if self.matched_alias is not None:
            return f"{base}-alias-{self.matched_alias}"
        return base

    @property
    def display_name(self) -> str:
        return self.entity.name

    @property
    def subtitle(self) -> str | None:
        if self.matched_alias is not None:
            return f"as: {self.matched_alias}"
        if isinstance(self.entity, Place):
            return self.entity.address
        return self.entity.relationship_type.value.capitalize()

    @property
    def insertion_text(self) -> str:
        """`[[Full Name|alias]]` when an alias matched, else `[[Full Name]]`."""
        if self.matched_alias is not None:
            return f"[[{self.display_name}|{self.matched_alias}]]"
        return f"[[{self.display_name}]]"


def find_active_trigger(text: str) -> tuple[Trigger, str] | None:
    """Detect an unfinished `[[` or `@` at the end of `text`.

    Returns the trigger and the (stripped) search text typed after it.
    """
    for trigger in (Trigger.WIKI_LINK, Trigger.MENTION):
        index = text.rfind(trigger.value)
        if index < 0:
            continue
        after = text[index + len(trigger.value):]
        if any(ch in after for ch in trigger.closing_chars):
            continue
        if trigger is Trigger.WIKI_LINK and "]]" in text[index:]:
            continue
        return trigger, after.strip()
    return None


def _matches(entity: Entity, search: str) -> list[Suggestion]:
    if not search:
        return [Suggestion(entity)]

    needle = search.lower()
    alias = next((a for a in entity.aliases if needle in a.lower()), None)
    if alias is not None:
        # Alias form first, canonical form as the alternative
        return [Suggestion(entity, matched_alias=alias), Suggestion(entity)]
    if needle in entity.name.lower():
        return [Suggestion(entity)]
    return []


def suggest(
    search_text: str,
    trigger: Trigger,
    places: Iterable[Place],
    people: Iterable[Person],
    limit: int = DEFAULT_LIMIT,
) -> list[Suggestion]:
    """Filter and rank candidate entities for the text typed after a trigger.

    Mentions only offer people; wiki-links offer people, then places. Names
    starting with the search text rank first, then alphabetical order.
    """
    candidates: list[Entity] = list(people)
    if trigger is Trigger.WIKI_LINK:
        candidates.extend(places)

    results: list[Suggestion] = []
    for entity in candidates:
        results.extend(_matches(entity, search_text))

    needle = search_text.lower()
    results.sort(
        key=lambda s: (not s.display_name.lower().startswith(needle), s.display_name.lower())
    )
    return results[: max(0, limit)]


def insert_suggestion(text: str, suggestion: Suggestion, trigger: Trigger) -> tuple[str, int]:
    """Replace the trigger and search text with the suggestion's link.

    Returns the new text and the cursor offset just after the inserted link
    and its trailing space.
    """
    index = text.rfind(trigger.value)
    if index < 0:
        return text, len(text)

    new_text = text[:index] + suggestion.insertion_text + " "
    return new_text, len(new_text)
