from __future__ import annotations

from pathlib import Path

import pytest

from spoiler_log import seed_parser
from spoiler_log.seed_parser import parser
from spoiler_log.seed_parser.hints import HintEntry
from spoiler_log.seed_parser.parser import (
    ParsedSeedLog,
    UnsupportedSpoilerFormat,
    parse_seed_log,
)
from spoiler_log.seed_parser.sections import EntranceEntry, LocationEntry


def test_parse_sample_log(sample_text: str) -> None:
    parsed = parse_seed_log(sample_text)
    assert parsed.seed == "Abc123XyZ"
    assert parsed.settings_string == "eJztVktu2zAQvYsWXUqW7aaIF0bRRYFeoKsCAUFRI4k1RRJDyo4b5O4dSrItO3HSbroqsggzn"
    assert parsed.settings["mode"] == "single"
    assert parsed.settings["hintImportance"] is True
    assert parsed.settings["priceOotShops"] == 0
    assert parsed.settings["trapsQuantity"] == 10
    assert parsed.special_conditions == {
        "BRIDGE": {"count": 6, "stones": True, "medallions": True},
        "MOON": {"count": 4, "remains": True},
    }
    assert parsed.tricks == ["OOT_LENS", "OOT_TUNICS", "MM_LENS"]
    assert parsed.starting_items == {
        "OOT_SWORD": 1,
        "MM_OCARINA": 1,
        "OOT_SHIELD_DEKU": "true",
    }
    assert parsed.junk_locations == ["OOT Skulltula House 10 Tokens", "MM Bank Reward 3"]
    assert parsed.world_flags == {
        "ganonTrials": ["Light", "Shadow"],
        "dungeonRewards": {"DekuTree": "Emerald", "Woodfall": "Odolwa"},
    }
    assert parsed.entrances == [
        EntranceEntry("OOT Kokiri Forest", "OOT Lost Woods"),
        EntranceEntry("MM Clock Town", "MM Termina Field"),
    ]
    assert parsed.hints == [
        HintEntry("OOT Gerudo Valley", "Nothing of value", "foolish", "default"),
        HintEntry("OOT Zora's Fountain", "OOT Gerudo Valley - Bow", "specific", "purple"),
        HintEntry("OOT Temple of Time", "Light Arrows", "specific", "purple"),
        HintEntry("MM Clock Town", "MM Woodfall has Deku Mask", "regional", "green"),
    ]
    assert [(region.region, region.count) for region in parsed.locations] == [
        ("Kokiri Forest", 2),
        ("Clock Town", 1),
    ]
    assert len(parsed.locations[0].locations) == 3
    assert parsed.locations[1].locations == [
        LocationEntry("MM Clock Town Bomber", "Bomber's Notebook")
    ]
    assert parsed.location_count() == 4
    assert not parsed.is_empty()


def test_settings_block_starts_inside_settings_string(sample_text: str) -> None:
    parsed = parse_seed_log(sample_text)
    assert parsed.settings["String"] == parsed.settings_string


def test_seed_and_settings_string_lookup() -> None:
    parsed = parse_seed_log("Seed: ABCD1234\nSettingsString: foo\n")
    assert parsed.seed == "ABCD1234"
    assert parsed.settings_string == "foo"


def test_missing_hints_section_yields_empty_list(sample_text: str) -> None:
    text = sample_text.replace("Hints", "Clues")
    parsed = parse_seed_log(text)
    assert parsed.hints == []
    # Entrances ran up to the hints label, so it loses its end marker too.
    assert parsed.entrances == []
    assert parsed.locations


def test_unrelated_text_parses_to_empty_record() -> None:
    parsed = parse_seed_log("just some notes\nnothing to see\n")
    assert parsed == ParsedSeedLog()
    assert parsed.is_empty()
    data = parsed.to_dict()
    assert data["seed"] is None
    assert data["settingsString"] is None
    assert data["hints"] == []
    assert data["settings"] == {}


def test_to_dict_uses_wire_names(sample_text: str) -> None:
    data = parse_seed_log(sample_text).to_dict()
    assert list(data) == [
        "seed",
        "settingsString",
        "settings",
        "specialConditions",
        "tricks",
        "startingItems",
        "junkLocations",
        "worldFlags",
        "entrances",
        "hints",
        "locations",
    ]
    assert data["entrances"][0] == {"from": "OOT Kokiri Forest", "to": "OOT Lost Woods"}
    assert ParsedSeedLog.from_dict(data) == parse_seed_log(sample_text)


def test_load_text_normalizes_line_endings(tmp_path: Path, sample_text: str) -> None:
    path = tmp_path / "spoiler.log"
    path.write_bytes(sample_text.replace("\n", "\r\n").encode("utf-8"))
    assert parser.parse_file(path) == parse_seed_log(sample_text)


def test_load_html_uses_pre_block(tmp_path: Path) -> None:
    path = tmp_path / "spoiler.html"
    path.write_text(
        "<html><body><h1>Spoiler</h1><pre>Seed: HtmlSeed\n"
        "Tricks\n  OOT_LENS\nStarting Items\n  OOT_SWORD: 1\n"
        "Junk Locations\n</pre></body></html>",
        encoding="utf-8",
    )
    parsed = parser.parse_file(path)
    assert parsed.seed == "HtmlSeed"
    assert parsed.tricks == ["OOT_LENS"]
    assert parsed.starting_items == {"OOT_SWORD": 1}


def test_load_rejects_unsupported_suffix(tmp_path: Path) -> None:
    path = tmp_path / "spoiler.pdf"
    path.write_bytes(b"%PDF-1.4")
    with pytest.raises(UnsupportedSpoilerFormat):
        parser.load_spoiler_text(path)


def test_resolve_encoding(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("SPOILER_LOG_ENCODING", raising=False)
    assert parser.resolve_encoding(None) == "utf-8"
    monkeypatch.setenv("SPOILER_LOG_ENCODING", "latin-1")
    assert parser.resolve_encoding(None) == "latin-1"
    assert parser.resolve_encoding("cp1252") == "cp1252"
    monkeypatch.setenv("SPOILER_LOG_ENCODING", "not-a-codec")
    assert parser.resolve_encoding(None) == "utf-8"


def test_package_parse_file_forwards_encoding(tmp_path: Path) -> None:
    path = tmp_path / "spoiler.txt"
    path.write_bytes("Tricks\n  Épona\nStarting Items\n".encode("latin-1"))
    assert seed_parser.parse_file(path, encoding="latin-1").tricks == ["Épona"]
    assert seed_parser.parse_file(path, encoding="utf-8").tricks == ["pona"]


def test_to_dict_returns_fresh_containers(sample_text: str) -> None:
    parsed = parse_seed_log(sample_text)
    data = parsed.to_dict()
    data["tricks"].append("OOT_EXTRA")
    data["settings"]["mode"] = "multi"
    assert parsed.tricks == ["OOT_LENS", "OOT_TUNICS", "MM_LENS"]
    assert parsed.settings["mode"] == "single"
    with pytest.raises(AttributeError):
        parsed.seed = "other"  # type: ignore[misc]
