from __future__ import annotations

from pathlib import Path

import pytest

from watchfloor.roster.contract import RosterSnapshot
from watchfloor.roster.io import load_roster

EXAMPLES = Path(__file__).resolve().parents[1] / "examples"


@pytest.fixture
def central_path() -> Path:
    return EXAMPLES / "central" / "roster.yaml"


@pytest.fixture
def central(central_path: Path) -> RosterSnapshot:
    return load_roster(central_path)
