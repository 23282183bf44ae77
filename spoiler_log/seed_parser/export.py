"""JSON persistence for parsed spoiler logs."""
from __future__ import annotations

import json
from collections.abc import Iterable
from pathlib import Path
from typing import Any, cast

from .parser import ParsedSeedLog


def dump_parsed_log(parsed: ParsedSeedLog) -> str:
    return json.dumps(parsed.to_dict(), indent=2, ensure_ascii=False)


def save_parsed_log(path: Path, parsed: ParsedSeedLog) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as fh:
        fh.write(dump_parsed_log(parsed))
        fh.write("\n")


def load_parsed_log(path: Path) -> ParsedSeedLog:
    with path.open("r", encoding="utf-8") as fh:
        data = cast(dict[str, Any], json.load(fh))
    return ParsedSeedLog.from_dict(data)


def write_jsonl(path: Path, logs: Iterable[ParsedSeedLog]) -> int:
    path.parent.mkdir(parents=True, exist_ok=True)
    count = 0
    with path.open("w", encoding="utf-8") as fh:
        for parsed in logs:
            fh.write(json.dumps(parsed.to_dict(), ensure_ascii=False))
            fh.write("\n")
            count += 1
    return count
