"""journalvault - read and write a Markdown journal vault of entries, places and people."""

__version__ = "0.1.0"
