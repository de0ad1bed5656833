"""Base types shared by the pyramid graph and the propagation engine."""

from __future__ import annotations

from enum import Enum
from typing import Any, NamedTuple


class SlotId(NamedTuple):
    """Stable identity of a slot: its row and its column within that row."""

    row: int
    column: int

    @property
    def index(self) -> int:
        """Flat arena index, counting top-to-bottom and left-to-right."""
        return flat_index(self.row, self.column)

    def __str__(self) -> str:
        return f"({self.row}, {self.column})"


class SweepDirection(str, Enum):
    """Order in which a sweep visits the slots."""

    TOP_DOWN = "top_down"  # Row 0 first, each row left to right
    BOTTOM_UP = "bottom_up"  # Exact reverse of TOP_DOWN

    def reversed(self) -> SweepDirection:
        """Direction of the next sweep."""
        if self is SweepDirection.TOP_DOWN:
            return SweepDirection.BOTTOM_UP
        return SweepDirection.TOP_DOWN


def flat_index(row: int, column: int) -> int:
    """Position of (row, column) in a pyramid stored row by row."""
    return row * (row + 1) // 2 + column


def slot_count(row_count: int) -> int:
    """Number of slots in a pyramid with the given number of rows."""
    return row_count * (row_count + 1) // 2


def coerce_slot_id(identity: Any) -> SlotId | None:
    """Turn a SlotId or (row, column) pair into a SlotId.

    Returns None when the value is not a pair of integers. Range checks are
    left to the graph, which knows its row count.
    """
    if isinstance(identity, SlotId):
        return identity
    if not isinstance(identity, tuple) or len(identity) != 2:
        return None
    row, column = identity
    for part in (row, column):
        if isinstance(part, bool) or not isinstance(part, int):
            return None
    return SlotId(row, column)
