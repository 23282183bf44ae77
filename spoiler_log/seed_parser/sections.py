"""Decoders for the key/value, list, location and entrance sections."""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from .scalars import Scalar, coerce_scalar, iter_lines

logger = logging.getLogger(__name__)

FLAT_FIELD_RE = re.compile(r"^([\w()'\". -]+):\s+(.+)$")
GROUP_HEADER_RE = re.compile(r"^(\w+):")
GROUP_FIELD_RE = re.compile(r"^(\w+):\s+(.+)$")
GROUP_ITEM_RE = re.compile(r"^- (.+)$")
REGION_HEADER_RE = re.compile(r"^([\w' \-]+)\s+\((\d+)\):$")
LOCATION_RE = re.compile(r"^(.*?):\s+(.+)$")
ARROW_RE = re.compile(r"^(.*?)\s*->\s*(.+)$")
COLON_RE = re.compile(r"^(.*?):\s*(.+)$")

INDENT = "  "

GroupValue = dict[str, Scalar] | list[str]


@dataclass(frozen=True)
class LocationEntry:
    name: str
    item: str

    def to_dict(self) -> dict[str, object]:
        return {"name": self.name, "item": self.item}


@dataclass(frozen=True)
class RegionEntry:
    """A ``Location List`` region; ``count`` is the declared header value."""

    region: str
    count: int
    locations: list[LocationEntry] = field(default_factory=list)

    def to_dict(self) -> dict[str, object]:
        return {
            "region": self.region,
            "count": self.count,
            "locations": [location.to_dict() for location in self.locations],
        }


@dataclass(frozen=True)
class EntranceEntry:
    from_: str
    to: str

    def to_dict(self) -> dict[str, object]:
        return {"from": self.from_, "to": self.to}


def decode_flat(block: str, allow_boolean: bool = True) -> dict[str, Scalar]:
    """Decode ``Key: value`` lines; non-matching lines are skipped."""
    result: dict[str, Scalar] = {}
    for raw_line in iter_lines(block):
        match = FLAT_FIELD_RE.match(raw_line.strip())
        if not match:
            logger.debug("Skipping line without a field: %r", raw_line)
            continue
        key, value = match.group(1), match.group(2)
        result[key] = coerce_scalar(value, allow_boolean=allow_boolean)
    return result


def decode_lines(block: str) -> list[str]:
    return [line.strip() for line in iter_lines(block)]


class _Group:
    """Group value that starts as a mapping and turns into a list on its first item."""

    def __init__(self) -> None:
        self.fields: dict[str, Scalar] = {}
        self.items: list[str] = []
        self.shape: str | None = None

    def set_field(self, key: str, value: Scalar) -> bool:
        if self.shape == "list":
            return False
        self.shape = "mapping"
        self.fields[key] = value
        return True

    def append(self, item: str) -> list[str]:
        """Append ``item`` and return the fields discarded by the conversion."""
        discarded = list(self.fields)
        self.fields = {}
        self.shape = "list"
        self.items.append(item)
        return discarded

    def value(self) -> GroupValue:
        if self.shape == "list":
            return list(self.items)
        return dict(self.fields)


def decode_nested(block: str) -> dict[str, GroupValue]:
    """Decode top-level ``group:`` headers with indented fields or ``- item`` lines.

    A group starts as a mapping of its fields. The first ``- item`` line turns
    it into a list, discarding any fields seen so far; fields after that are
    dropped.
    """
    groups: dict[str, _Group] = {}
    current: str | None = None
    for raw_line in iter_lines(block):
        if not raw_line.startswith(INDENT):
            header = GROUP_HEADER_RE.match(raw_line)
            if header:
                current = header.group(1)
                groups[current] = _Group()
            continue
        if current is None:
            continue
        line = raw_line.strip()
        field_match = GROUP_FIELD_RE.match(line)
        if field_match:
            key, value = field_match.group(1), field_match.group(2)
            if not groups[current].set_field(key, coerce_scalar(value)):
                logger.debug("Dropping field %r from list group %r", key, current)
            continue
        item_match = GROUP_ITEM_RE.match(line)
        if item_match:
            discarded = groups[current].append(item_match.group(1))
            if discarded:
                logger.debug("Group %r became a list, discarding %s", current, discarded)
    return {name: group.value() for name, group in groups.items()}


def decode_locations(block: str) -> list[RegionEntry]:
    """Decode ``Region (N):`` headers followed by ``Location: Item`` lines."""
    regions: list[RegionEntry] = []
    current: RegionEntry | None = None
    for raw_line in iter_lines(block):
        line = raw_line.strip()
        header = REGION_HEADER_RE.match(line)
        if header:
            if current is not None:
                regions.append(current)
            current = RegionEntry(region=header.group(1), count=int(header.group(2)))
            continue
        if current is None:
            continue
        match = LOCATION_RE.match(line)
        if match:
            current.locations.append(LocationEntry(name=match.group(1), item=match.group(2)))
    if current is not None:
        regions.append(current)
    return regions


def decode_entrances(block: str) -> list[EntranceEntry]:
    """Decode ``From -> To`` lines, falling back to ``From: To``."""
    entrances: list[EntranceEntry] = []
    for raw_line in iter_lines(block):
        match = ARROW_RE.match(raw_line)
        if not match and ":" in raw_line:
            match = COLON_RE.match(raw_line)
        if not match:
            logger.debug("Skipping entrance line: %r", raw_line)
            continue
        entrances.append(
            EntranceEntry(from_=match.group(1).strip(), to=match.group(2).strip())
        )
    return entrances
