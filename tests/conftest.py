"""Pytest configuration and fixtures."""

from pathlib import Path

import pytest

from journalvault.models import Person, Place
from journalvault.vault.loader import Vault, load_vault


def write_file(path: Path, lines: list[str]) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("\n".join(lines), encoding="utf-8")
    return path


@pytest.fixture
def sample_vault_path(tmp_path: Path) -> Path:
    """A small vault with two entries, two places, two people and one broken file."""
    vault = tmp_path / "vault"
    entries = vault / "Entries" / "2025" / "01-January"

    write_file(
        entries / "15" / "202501151430.md",
        [
            "---",
            "date_created: 2025-01-15T14:30:00.000-08:00",
            "tags: [entry, walk]",
            'place: "[[Central Park]]"',
            "people:",
            '  - "[[Alice Smith]]"',
            "temp: 7",
            "cond: Sunny",
            "custom_rating: 4.5",
            "---",
            "",
            "Met [[Alice Smith|Al]] at [[Central Park]]. Then on to [[Nowhere]].",
            "",
        ],
    )
    write_file(
        entries / "16" / "202501160900.md",
        [
            "---",
            "date_created: 2025-01-16T09:00:00.000-08:00",
            "tags:",
            "  - entry",
            "  - work",
            'place: "[[BB]]"',
            "---",
            "",
            "Coffee with @Bob at [[Blue Bottle]].",
            "",
        ],
    )
    write_file(entries / "17" / "202501170800.md", ["Just text, no frontmatter.", ""])
    write_file(
        vault / "Entries" / ".trash" / "202401010000.md",
        ["---", "date_created: 2024-01-01T00:00:00.000Z", "---", "", "Deleted.", ""],
    )

    write_file(
        vault / "Places" / "Central Park.md",
        [
            "---",
            'location: "40.7829,-73.9654"',
            "tags: [outdoors]",
            "callout: park",
            "aliases: [CP]",
            "---",
            "",
            "Big park.",
            "",
        ],
    )
    write_file(
        vault / "Places" / "Blue Bottle.md",
        [
            "---",
            "addr: 1 Ferry Building, San Francisco",
            "tags: []",
            "callout: cafe",
            "aliases:",
            "  - BB",
            "---",
            "",
        ],
    )

    write_file(
        vault / "People" / "Alice Smith.md",
        [
            "---",
            "pronouns: she/her",
            "relationship: friend",
            "tags: []",
            "aliases: [Al]",
            "instagram: alice.smith",
            "---",
            "",
            "Met in college.",
            "",
        ],
    )
    write_file(
        vault / "People" / "Bob Brown.md",
        ["---", "relationship: colleague", "tags: []", "aliases: []", "---", ""],
    )
    return vault


@pytest.fixture
def sample_vault(sample_vault_path: Path) -> Vault:
    """Load the sample vault."""
    return load_vault(sample_vault_path)


@pytest.fixture
def places() -> list[Place]:
    return [
        Place(id="Central Park", name="Central Park", callout="park", aliases=("CP",)),
        Place(
            id="Blue Bottle",
            name="Blue Bottle",
            address="1 Ferry Building",
            callout="cafe",
            aliases=("BB",),
        ),
    ]


@pytest.fixture
def people() -> list[Person]:
    return [
        Person(
            id="Alice Smith",
            name="Alice Smith",
            relationship="friend",
            aliases=("Al",),
        ),
        Person(id="Bob Brown", name="Bob Brown", relationship="colleague"),
    ]
