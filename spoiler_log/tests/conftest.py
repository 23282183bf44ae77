from __future__ import annotations

from pathlib import Path

import pytest

DATA_DIR = Path(__file__).resolve().parent / "data"


@pytest.fixture()
def sample_path() -> Path:
    return DATA_DIR / "sample_spoiler.txt"


@pytest.fixture()
def sample_text(sample_path: Path) -> str:
    return sample_path.read_text(encoding="utf-8")
