"""Section boundaries of an OOTMM spoiler log."""
from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

HINTS_SEPARATOR = "=" * 75

# (field, start label, end label) in document order. An empty end label runs to
# the end of the text.
SECTION_BOUNDARIES: list[tuple[str, str, str]] = [
    ("settings", "Settings", "Special Conditions"),
    ("special_conditions", "Special Conditions", "Tricks"),
    ("tricks", "Tricks", "Starting Items"),
    ("starting_items", "Starting Items", "Junk Locations"),
    ("junk_locations", "Junk Locations", "World Flags"),
    ("world_flags", "World Flags", "Entrances"),
    ("entrances", "Entrances", "Hints"),
    ("hints", "Hints", HINTS_SEPARATOR),
    ("locations", "Location List", ""),
]


def extract_block(text: str, start: str, end: str = "") -> str:
    """Return the trimmed text between ``start`` and the next ``end``.

    Both labels are matched literally anywhere in the text, not only at line
    starts, so a label that recurs as a substring ends the block early. A
    missing ``start`` or a missing ``end`` yields an empty string.
    """
    start_index = text.find(start)
    if start_index == -1:
        logger.debug("Section label %r not found", start)
        return ""
    body_index = start_index + len(start)
    if not end:
        return text[body_index:].strip()
    end_index = text.find(end, body_index)
    if end_index == -1:
        logger.debug("End label %r not found after %r", end, start)
        return ""
    return text[body_index:end_index].strip()


def iter_sections(text: str) -> list[tuple[str, str]]:
    return [
        (name, extract_block(text, start, end))
        for name, start, end in SECTION_BOUNDARIES
    ]
