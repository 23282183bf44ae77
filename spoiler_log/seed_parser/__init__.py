"""OOTMM spoiler log parser package."""
from __future__ import annotations

from pathlib import Path

from . import blocks, export, hints, parser, renderer, scalars, sections
from .blocks import extract_block
from .hints import HintEntry, classify_hint, decode_hints
from .parser import ParsedSeedLog, UnsupportedSpoilerFormat, parse_seed_log
from .scalars import coerce_scalar
from .sections import (
    EntranceEntry,
    LocationEntry,
    RegionEntry,
    decode_entrances,
    decode_flat,
    decode_lines,
    decode_locations,
    decode_nested,
)

__all__ = [
    "blocks",
    "export",
    "hints",
    "parser",
    "renderer",
    "scalars",
    "sections",
    "EntranceEntry",
    "HintEntry",
    "LocationEntry",
    "ParsedSeedLog",
    "RegionEntry",
    "UnsupportedSpoilerFormat",
    "classify_hint",
    "coerce_scalar",
    "decode_entrances",
    "decode_flat",
    "decode_hints",
    "decode_lines",
    "decode_locations",
    "decode_nested",
    "extract_block",
    "parse_seed_log",
    "parse_file",
]


def parse_file(path: Path, *, encoding: str | None = None) -> ParsedSeedLog:
    """Convenience wrapper to parse the spoiler log at ``path``."""
    from .parser import parse_file

    return parse_file(path, encoding=encoding)
