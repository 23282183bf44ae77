"""Scalar coercion and line helpers shared by the section decoders."""
from __future__ import annotations

import re
from collections.abc import Iterator

DIGITS_RE = re.compile(r"[0-9]+")

Scalar = bool | int | str


def coerce_scalar(raw: str, *, allow_boolean: bool = True) -> Scalar:
    """Turn a raw token into a bool, int or the unchanged string.

    ``"true"``/``"false"`` (any case) become booleans unless ``allow_boolean``
    is false; strings made only of ASCII digits become integers.
    """
    if allow_boolean:
        lowered = raw.lower()
        if lowered == "true":
            return True
        if lowered == "false":
            return False
    if DIGITS_RE.fullmatch(raw):
        return int(raw)
    return raw


def iter_lines(block: str) -> Iterator[str]:
    """Yield the raw non-blank lines of ``block``."""
    for raw_line in block.split("\n"):
        if raw_line.strip():
            yield raw_line


def normalize_newlines(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n")
