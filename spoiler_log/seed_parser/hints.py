"""Hint section decoding.

Spoiler logs come with two hint layouts. Newer logs group hints under
``Foolish:``, ``Specific Hints:`` and ``Regional Hints:`` headers, with the
columns of each hint separated by runs of spaces. Older logs list one
``Location: hint text`` per line and carry no category at all, so the type is
guessed from words in the hint.
"""
from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from .scalars import iter_lines

logger = logging.getLogger(__name__)

COLUMN_SPLIT_RE = re.compile(r"\s{2,}")
FLAT_HINT_RE = re.compile(r"^(.*?):\s*(.*)$")

CATEGORY_HEADERS: dict[str, str] = {
    "Foolish:": "foolish",
    "Specific Hints:": "specific",
    "Regional Hints:": "regional",
}

CATEGORY_COLORS: dict[str, str] = {
    "foolish": "default",
    "specific": "purple",
    "regional": "green",
}

UNKNOWN_LOCATION = "Unknown"
GENERAL = "general"


@dataclass(frozen=True)
class HintEntry:
    location: str
    hint: str
    type: str | None = None
    color: str | None = None

    def to_dict(self) -> dict[str, object]:
        return {
            "location": self.location,
            "hint": self.hint,
            "type": self.type,
            "color": self.color,
        }


def _contains_any(text: str, cues: Iterable[str]) -> bool:
    return any(cue in text for cue in cues)


def _hint_has(*cues: str) -> Callable[[str, str], bool]:
    return lambda location, hint: _contains_any(hint, cues)


def _location_has(*cues: str) -> Callable[[str, str], bool]:
    return lambda location, hint: _contains_any(location, cues)


# Evaluated top to bottom against lowercased text; the first match wins.
# The location rule comes first so a gossip stone keeps its type whatever
# the rumour mentions.
CLASSIFICATION_RULES: list[tuple[str, Callable[[str, str], bool]]] = [
    ("gossip", _location_has("gossip", "stone")),
    ("foolish", _hint_has("foolish", "fool", "nothing", "useless", "no way", "not the way")),
    ("hero", _hint_has("way of the hero", "hero", "path of the hero", "heroic")),
    ("path", _hint_has("on the way", "path", "leads to", "points to", "road to", "journey")),
    ("gossip", _hint_has("sometimes", "they say", "it is said", "rumor")),
    ("hero", _hint_has("woth", "way of the")),
    ("foolish", _hint_has("barren", "nothing")),
]


def classify_hint(location: str, hint: str) -> str:
    lowered_location = location.lower()
    lowered_hint = hint.lower()
    for tag, predicate in CLASSIFICATION_RULES:
        if predicate(lowered_location, lowered_hint):
            return tag
    return GENERAL


def has_category_headers(block: str) -> bool:
    return any(line.strip() in CATEGORY_HEADERS for line in iter_lines(block))


def decode_hints(block: str) -> list[HintEntry]:
    """Decode the ``Hints`` section in whichever layout it uses."""
    if has_category_headers(block):
        return decode_categorized_hints(block)
    return decode_flat_hints(block)


def _categorized_entry(category: str, parts: list[str]) -> HintEntry | None:
    color = CATEGORY_COLORS[category]
    if category == "foolish" and len(parts) >= 2:
        return HintEntry(parts[0], parts[1], category, color)
    if category == "specific":
        if len(parts) >= 3:
            return HintEntry(parts[0], f"{parts[1]} - {parts[2]}", category, color)
        if len(parts) == 2:
            return HintEntry(parts[0], parts[1], category, color)
    if category == "regional" and len(parts) >= 3:
        return HintEntry(parts[0], f"{parts[1]} has {parts[2]}", category, color)
    return None


def decode_categorized_hints(block: str) -> list[HintEntry]:
    hints: list[HintEntry] = []
    category: str | None = None
    for raw_line in iter_lines(block):
        line = raw_line.strip()
        if line in CATEGORY_HEADERS:
            category = CATEGORY_HEADERS[line]
            continue
        if category is None:
            continue
        parts = [part.strip() for part in COLUMN_SPLIT_RE.split(line)]
        entry = _categorized_entry(category, parts)
        if entry is None:
            logger.debug("Dropping %s hint with %d column(s): %r", category, len(parts), line)
            continue
        hints.append(entry)
    return hints


def decode_flat_hints(block: str) -> list[HintEntry]:
    hints: list[HintEntry] = []
    for raw_line in iter_lines(block):
        line = raw_line.strip()
        match = FLAT_HINT_RE.match(line)
        if not match:
            hints.append(HintEntry(UNKNOWN_LOCATION, line, GENERAL))
            continue
        location = match.group(1).strip()
        hint = match.group(2).strip()
        hints.append(HintEntry(location, hint, classify_hint(location, hint)))
    return hints
