"""A single input line as seen by the matcher."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from fuzzyfind.ansi import AnsiOffset, extract_color


@dataclass
class Item:
    """An input line.

    ``text`` is what gets matched; ``orig_text`` is the line as read, kept
    when ``text`` was derived from it by field selection. ``colors`` holds
    the colour spans of ``text``, if any.
    """

    text: str
    index: int = 0
    orig_text: Optional[str] = None
    colors: Optional[list[AnsiOffset]] = None

    def as_string(self, strip_ansi: bool = False) -> str:
        """Return the original line, optionally without escape sequences."""
        if self.orig_text is not None:
            if strip_ansi:
                trimmed, _, _ = extract_color(self.orig_text, None)
                return trimmed
            return self.orig_text
        return self.text