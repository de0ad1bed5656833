"""Data models for Cairn.

Core Types:
    - SlotId: (row, column) identity of a slot
    - Slot: One value position, linked to its children and parents by arena index
    - SweepDirection: Traversal order of a propagation sweep
"""

from .base import SlotId, SweepDirection, coerce_slot_id, flat_index, slot_count
from .slot import Slot

__all__ = [
    "Slot",
    "SlotId",
    "SweepDirection",
    "coerce_slot_id",
    "flat_index",
    "slot_count",
]
