"""Parse OOTMM spoiler logs into a structured record."""
from __future__ import annotations

import codecs
import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from bs4 import BeautifulSoup

from .blocks import iter_sections
from .hints import HintEntry, decode_hints
from .scalars import Scalar, normalize_newlines
from .sections import (
    EntranceEntry,
    GroupValue,
    LocationEntry,
    RegionEntry,
    decode_entrances,
    decode_flat,
    decode_lines,
    decode_locations,
    decode_nested,
)

logger = logging.getLogger(__name__)

SEED_RE = re.compile(r"Seed:\s+(\w+)")
SETTINGS_STRING_RE = re.compile(r"SettingsString:\s+(.+)")

DEFAULT_ENCODING = "utf-8"
TEXT_SUFFIXES = {"", ".txt", ".log"}
HTML_SUFFIXES = {".html", ".htm"}


class UnsupportedSpoilerFormat(ValueError):
    """Raised for spoiler log files in a container we cannot read."""


@dataclass(frozen=True)
class ParsedSeedLog:
    seed: str | None = None
    settings_string: str | None = None
    settings: dict[str, Scalar] = field(default_factory=dict)
    special_conditions: dict[str, GroupValue] = field(default_factory=dict)
    tricks: list[str] = field(default_factory=list)
    starting_items: dict[str, Scalar] = field(default_factory=dict)
    junk_locations: list[str] = field(default_factory=list)
    world_flags: dict[str, GroupValue] = field(default_factory=dict)
    entrances: list[EntranceEntry] = field(default_factory=list)
    hints: list[HintEntry] = field(default_factory=list)
    locations: list[RegionEntry] = field(default_factory=list)

    def to_dict(self) -> dict[str, object]:
        return {
            "seed": self.seed,
            "settingsString": self.settings_string,
            "settings": dict(self.settings),
            "specialConditions": dict(self.special_conditions),
            "tricks": list(self.tricks),
            "startingItems": dict(self.starting_items),
            "junkLocations": list(self.junk_locations),
            "worldFlags": dict(self.world_flags),
            "entrances": [entrance.to_dict() for entrance in self.entrances],
            "hints": [hint.to_dict() for hint in self.hints],
            "locations": [region.to_dict() for region in self.locations],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ParsedSeedLog:
        return cls(
            seed=data.get("seed"),
            settings_string=data.get("settingsString"),
            settings=dict(data.get("settings") or {}),
            special_conditions=dict(data.get("specialConditions") or {}),
            tricks=list(data.get("tricks") or []),
            starting_items=dict(data.get("startingItems") or {}),
            junk_locations=list(data.get("junkLocations") or []),
            world_flags=dict(data.get("worldFlags") or {}),
            entrances=[
                EntranceEntry(from_=entry["from"], to=entry["to"])
                for entry in data.get("entrances") or []
            ],
            hints=[
                HintEntry(
                    location=entry["location"],
                    hint=entry["hint"],
                    type=entry.get("type"),
                    color=entry.get("color"),
                )
                for entry in data.get("hints") or []
            ],
            locations=[
                RegionEntry(
                    region=entry["region"],
                    count=int(entry["count"]),
                    locations=[
                        LocationEntry(name=location["name"], item=location["item"])
                        for location in entry.get("locations") or []
                    ],
                )
                for entry in data.get("locations") or []
            ],
        )

    def location_count(self) -> int:
        return sum(len(region.locations) for region in self.locations)

    def is_empty(self) -> bool:
        """True when nothing in the text resembled a spoiler log."""
        if self.seed is not None:
            return False
        collections = [
            self.settings,
            self.special_conditions,
            self.tricks,
            self.starting_items,
            self.junk_locations,
            self.world_flags,
            self.entrances,
            self.hints,
            self.locations,
        ]
        return not any(collections)


def parse_seed_log(text: str) -> ParsedSeedLog:
    """Decode every known section of ``text``.

    Sections are located independently of each other; a missing or
    malformed section only leaves its own field empty.
    """
    seed_match = SEED_RE.search(text)
    settings_string_match = SETTINGS_STRING_RE.search(text)
    blocks = dict(iter_sections(text))
    parsed = ParsedSeedLog(
        seed=seed_match.group(1) if seed_match else None,
        settings_string=settings_string_match.group(1).strip() if settings_string_match else None,
        settings=decode_flat(blocks["settings"]),
        special_conditions=decode_nested(blocks["special_conditions"]),
        tricks=decode_lines(blocks["tricks"]),
        starting_items=decode_flat(blocks["starting_items"], allow_boolean=False),
        junk_locations=decode_lines(blocks["junk_locations"]),
        world_flags=decode_nested(blocks["world_flags"]),
        entrances=decode_entrances(blocks["entrances"]),
        hints=decode_hints(blocks["hints"]),
        locations=decode_locations(blocks["locations"]),
    )
    empty_sections = [name for name, block in blocks.items() if not block]
    if empty_sections:
        logger.debug("Empty sections: %s", ", ".join(empty_sections))
    logger.debug(
        "Parsed seed %s: %d hints, %d entrances, %d regions",
        parsed.seed,
        len(parsed.hints),
        len(parsed.entrances),
        len(parsed.locations),
    )
    return parsed


def resolve_encoding(value: str | None) -> str:
    if value:
        return value
    env_value = os.environ.get("SPOILER_LOG_ENCODING")
    if env_value:
        try:
            codecs.lookup(env_value)
        except LookupError:
            logger.debug("Invalid SPOILER_LOG_ENCODING value: %s", env_value)
        else:
            return env_value
    return DEFAULT_ENCODING


def extract_html_text(markup: str) -> str:
    soup = BeautifulSoup(markup, "lxml")
    pre = soup.find("pre")
    if pre is not None:
        return pre.get_text()
    return soup.get_text("\n")


def load_spoiler_text(path: Path, *, encoding: str | None = None) -> str:
    suffix = path.suffix.lower()
    if suffix not in TEXT_SUFFIXES and suffix not in HTML_SUFFIXES:
        raise UnsupportedSpoilerFormat(f"Unsupported spoiler log format: {path.name}")
    text = path.read_text(encoding=resolve_encoding(encoding), errors="ignore")
    if suffix in HTML_SUFFIXES:
        text = extract_html_text(text)
    return normalize_newlines(text)


def parse_file(path: Path, *, encoding: str | None = None) -> ParsedSeedLog:
    logger.debug("Parsing %s", path)
    return parse_seed_log(load_spoiler_text(path, encoding=encoding))
