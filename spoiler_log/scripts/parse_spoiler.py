#!/usr/bin/env python3
"""CLI entrypoint for the spoiler log parser."""
from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass
from pathlib import Path

from spoiler_log.seed_parser import export, parser, renderer
from spoiler_log.seed_parser.parser import ParsedSeedLog, UnsupportedSpoilerFormat

logger = logging.getLogger("spoiler_log.seed_parser.cli")


@dataclass
class CheckResult:
    file: str
    status: str
    seed: str | None = None
    settings: int = 0
    hints: int = 0
    entrances: int = 0
    regions: int = 0
    locations: int = 0

    @classmethod
    def from_parsed(cls, file: str, parsed: ParsedSeedLog) -> CheckResult:
        return cls(
            file=file,
            status="empty" if parsed.is_empty() else "ok",
            seed=parsed.seed,
            settings=len(parsed.settings),
            hints=len(parsed.hints),
            entrances=len(parsed.entrances),
            regions=len(parsed.locations),
            locations=parsed.location_count(),
        )


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="[%(levelname)s] %(message)s",
    )


def resolve_input(path: str) -> Path:
    resolved = Path(path).expanduser().resolve()
    if not resolved.is_file():
        raise SystemExit(f"Spoiler log not found: {resolved}")
    return resolved


def load_or_exit(path: Path, encoding: str | None) -> ParsedSeedLog:
    try:
        return parser.parse_file(path, encoding=encoding)
    except (UnsupportedSpoilerFormat, LookupError) as exc:
        raise SystemExit(str(exc)) from exc


def emit(content: str, output: str | None) -> None:
    if output:
        output_path = Path(output).expanduser()
        renderer.write_summary(output_path, content)
        logger.info("Wrote %s (%d characters)", output_path, len(content))
    else:
        sys.stdout.write(content)
        if not content.endswith("\n"):
            sys.stdout.write("\n")


def command_parse(args: argparse.Namespace) -> None:
    path = resolve_input(args.input)
    logger.info("Parsing %s", path)
    parsed = load_or_exit(path, args.encoding)
    if parsed.is_empty():
        logger.warning("%s does not look like a spoiler log", path)
    if args.output:
        output_path = Path(args.output).expanduser()
        export.save_parsed_log(output_path, parsed)
        logger.info("Wrote %s", output_path)
    else:
        emit(export.dump_parsed_log(parsed), None)


def command_render(args: argparse.Namespace) -> None:
    path = resolve_input(args.input)
    parsed = load_or_exit(path, args.encoding)
    content = renderer.render_summary(
        parsed, source=path.name, reveal_items=args.reveal_items
    )
    emit(content, args.output)


def check_file(path: Path, encoding: str | None) -> CheckResult:
    try:
        parsed = parser.parse_file(path, encoding=encoding)
    except (OSError, UnsupportedSpoilerFormat, LookupError) as exc:
        logger.error("Failed to read %s: %s", path, exc)
        return CheckResult(file=str(path), status="error")
    return CheckResult.from_parsed(str(path), parsed)


def command_check(args: argparse.Namespace) -> None:
    results = [
        check_file(Path(value).expanduser(), args.encoding) for value in args.inputs
    ]
    print_status_table(results)


def print_status_table(results: list[CheckResult]) -> None:
    print(
        "File".ljust(50),
        "Status".ljust(8),
        "Seed".ljust(14),
        "Settings".rjust(8),
        "Hints".rjust(6),
        "Entrances".rjust(9),
        "Regions".rjust(7),
        "Locations".rjust(9),
    )
    print("-" * 118)
    for result in results:
        print(
            result.file.ljust(50),
            result.status.ljust(8),
            (result.seed or "-").ljust(14),
            str(result.settings).rjust(8),
            str(result.hints).rjust(6),
            str(result.entrances).rjust(9),
            str(result.regions).rjust(7),
            str(result.locations).rjust(9),
        )
    failures = sum(1 for result in results if result.status != "ok")
    print(f"\n{len(results)} file(s), {failures} not ok")


def build_parser() -> argparse.ArgumentParser:
    parser_obj = argparse.ArgumentParser(description="Parse OOTMM spoiler logs")
    parser_obj.add_argument("--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser_obj.add_subparsers(dest="command")

    parse_parser = subparsers.add_parser("parse", help="Convert a spoiler log to JSON")
    parse_parser.add_argument("input", help="Spoiler log file")
    parse_parser.add_argument("--output", help="Write JSON here instead of stdout")
    parse_parser.add_argument(
        "--encoding", help="Text encoding of the log (overrides SPOILER_LOG_ENCODING)"
    )
    parse_parser.set_defaults(func=command_parse)

    render_parser = subparsers.add_parser("render", help="Render a Markdown summary")
    render_parser.add_argument("input", help="Spoiler log file")
    render_parser.add_argument("--output", help="Write Markdown here instead of stdout")
    render_parser.add_argument(
        "--reveal-items", action="store_true", help="Include item placements per region"
    )
    render_parser.add_argument(
        "--encoding", help="Text encoding of the log (overrides SPOILER_LOG_ENCODING)"
    )
    render_parser.set_defaults(func=command_render)

    check_parser = subparsers.add_parser("check", help="Print a status table for logs")
    check_parser.add_argument("inputs", nargs="+", help="Spoiler log files")
    check_parser.add_argument(
        "--encoding", help="Text encoding of the logs (overrides SPOILER_LOG_ENCODING)"
    )
    check_parser.set_defaults(func=command_check)

    return parser_obj


def main(argv: list[str] | None = None) -> None:
    parser_obj = build_parser()
    args = parser_obj.parse_args(argv)
    if not getattr(args, "command", None):
        parser_obj.print_help()
        return
    configure_logging(args.verbose)
    args.func(args)


if __name__ == "__main__":
    main()
