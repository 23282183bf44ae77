"""Markdown summary of a parsed spoiler log."""
from __future__ import annotations

from collections import Counter
from datetime import UTC, datetime
from pathlib import Path

from .parser import ParsedSeedLog
from .sections import RegionEntry


def now_iso() -> str:
    return datetime.now(UTC).replace(microsecond=0).isoformat()


def render_summary(
    parsed: ParsedSeedLog,
    *,
    source: str | None = None,
    reveal_items: bool = False,
) -> str:
    lines = ["# Spoiler Log Summary", "", f"_Generated: {now_iso()}_", ""]
    if source:
        lines.append(f"**Source:** {escape_cell(source)}")
    lines.append(f"**Seed:** {parsed.seed or 'unknown'}")
    if parsed.settings_string:
        lines.append(f"**Settings string:** `{parsed.settings_string}`")
    lines.append("")
    lines.append(
        f"**Sections:** settings ({len(parsed.settings)}), "
        f"tricks ({len(parsed.tricks)}), "
        f"starting items ({len(parsed.starting_items)}), "
        f"junk locations ({len(parsed.junk_locations)}), "
        f"entrances ({len(parsed.entrances)}), "
        f"hints ({len(parsed.hints)}), "
        f"regions ({len(parsed.locations)})"
    )
    lines.append("")
    hint_types: Counter[str] = Counter(hint.type or "general" for hint in parsed.hints)
    if hint_types:
        summary = ", ".join(f"{typ} ({count})" for typ, count in sorted(hint_types.items()))
        lines.append(f"**Hints by type:** {summary}")
        lines.append("")
    lines.append("## Hints")
    lines.append("")
    if not parsed.hints:
        lines.append("_No hints recorded._")
    else:
        lines.append("| Location | Hint | Type |")
        lines.append("| --- | --- | --- |")
        for hint in parsed.hints:
            lines.append(
                f"| {escape_cell(hint.location)} | {escape_cell(hint.hint)} | "
                f"{escape_cell(hint.type or '')} |"
            )
    lines.append("")
    lines.append("## Regions")
    lines.append("")
    if not parsed.locations:
        lines.append("_No locations recorded._")
    else:
        lines.append("| Region | Declared | Decoded |")
        lines.append("| --- | --- | --- |")
        for region in parsed.locations:
            lines.append(
                f"| {escape_cell(region.region)} | {region.count} | {len(region.locations)} |"
            )
        if reveal_items:
            lines.append("")
            for region in parsed.locations:
                lines.extend(format_region(region))
    lines.append("")
    return "\n".join(lines)


def format_region(region: RegionEntry) -> list[str]:
    lines = [f"### {region.region}", ""]
    for location in region.locations:
        lines.append(f"- {location.name}: {location.item}")
    lines.append("")
    return lines


def escape_cell(value: str) -> str:
    return value.replace("|", "\\|")


def write_summary(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
