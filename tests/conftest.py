"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import os

import pytest

from cairn.config import Settings
from cairn.graph import PyramidGraph, build_pyramid
from cairn.models import SlotId

# Four rows, seeded as in the classic puzzle:
#
#              ?
#          60      ?
#       ?      36      ?
#   625     ?      ?     1296
FOUR_ROW_SEEDS: dict[SlotId, float] = {
    SlotId(1, 0): 60.0,
    SlotId(2, 1): 36.0,
    SlotId(3, 0): 625.0,
    SlotId(3, 3): 1296.0,
}


@pytest.fixture(autouse=True)
def default_settings(monkeypatch: pytest.MonkeyPatch) -> Settings:
    """Replace the global settings with defaults, ignoring CAIRN_* variables."""
    for key in list(os.environ):
        if key.startswith("CAIRN_"):
            monkeypatch.delenv(key)
    fresh = Settings(_env_file=None)
    monkeypatch.setattr("cairn.config.settings", fresh)
    return fresh


@pytest.fixture
def four_row_seeds() -> dict[SlotId, float]:
    """Seeds of the four-row worked example."""
    return dict(FOUR_ROW_SEEDS)


@pytest.fixture
def four_row_graph(four_row_seeds: dict[SlotId, float]) -> PyramidGraph:
    """Unsolved four-row worked example."""
    return build_pyramid(4, four_row_seeds)
