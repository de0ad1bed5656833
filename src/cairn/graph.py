"""Pyramid graph: a layered DAG of slots stored in a flat arena.

Row ``k`` holds ``k + 1`` slots. Slot ``(k, j)`` has children ``(k + 1, j)``
and ``(k + 1, j + 1)``, so every interior slot below row 1 is shared by two
parents. Links are arena indices in both directions; the graph owns all
slots and its shape never changes after construction.

Example:
    ```python
    from cairn.graph import build_pyramid

    graph = build_pyramid(3, {(0, 0): 6.0, (2, 0): 4.0})
    graph.value((2, 0))  # 4.0
    graph.value((1, 0))  # None
    ```
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterator, Mapping
from numbers import Real
from typing import Any, NamedTuple

from cairn.exceptions import InvalidSeedValueError, InvalidTopologyError, SlotNotFoundError
from cairn.models import Slot, SlotId, SweepDirection, coerce_slot_id, flat_index, slot_count

logger = logging.getLogger(__name__)

SeedValues = Mapping[SlotId | tuple[int, int], float]


class Triple(NamedTuple):
    """A parent slot and its two children, the unit the solver works on."""

    parent: Slot
    left: Slot
    right: Slot

    @property
    def known_count(self) -> int:
        return sum(1 for slot in self if slot.value is not None)


class PyramidGraph:
    """Fixed-shape pyramid of slots.

    Use :meth:`build` (or :func:`build_pyramid`) rather than the constructor.
    The only mutation surface is :meth:`Slot.assign`, normally driven by the
    propagation engine.
    """

    def __init__(self, row_count: int, slots: list[Slot]) -> None:
        self._row_count = row_count
        self._slots = slots

    @classmethod
    def build(
        cls,
        row_count: int,
        initial_values: SeedValues | None = None,
    ) -> PyramidGraph:
        """Build a pyramid and seed it with known values.

        Args:
            row_count: Number of rows, at least 1.
            initial_values: Known values keyed by SlotId or (row, column).

        Returns:
            A new graph with parent and child links set on both sides.

        Raises:
            InvalidTopologyError: If row_count is not a positive integer or a
                seed names a slot outside the pyramid.
            InvalidSeedValueError: If a seed value is not a finite real number.
        """
        if isinstance(row_count, bool) or not isinstance(row_count, int) or row_count < 1:
            raise InvalidTopologyError(f"row_count must be a positive integer, got {row_count!r}")

        seeds = _validate_seeds(row_count, initial_values or {})

        slots: list[Slot] = []
        for row in range(row_count):
            for column in range(row + 1):
                children = None
                if row + 1 < row_count:
                    children = (flat_index(row + 1, column), flat_index(row + 1, column + 1))

                parents: list[int] = []
                if row > 0:
                    if column > 0:
                        parents.append(flat_index(row - 1, column - 1))
                    if column < row:
                        parents.append(flat_index(row - 1, column))

                slot_id = SlotId(row, column)
                slots.append(
                    Slot(
                        id=slot_id,
                        index=len(slots),
                        value=seeds.get(slot_id),
                        children=children,
                        parents=tuple(parents),
                    )
                )

        logger.debug(
            "Built pyramid: %d rows, %d slots, %d seeded",
            row_count,
            len(slots),
            len(seeds),
        )
        return cls(row_count, slots)

    @property
    def row_count(self) -> int:
        return self._row_count

    def __len__(self) -> int:
        return len(self._slots)

    def __iter__(self) -> Iterator[Slot]:
        return iter(self._slots)

    def __contains__(self, identity: object) -> bool:
        return self._index_of(identity) is not None

    def __repr__(self) -> str:
        return f"PyramidGraph(rows={self._row_count}, known={self.known_count}/{len(self)})"

    def _index_of(self, identity: Any) -> int | None:
        slot_id = coerce_slot_id(identity)
        if slot_id is None or not _in_range(slot_id, self._row_count):
            return None
        return slot_id.index

    def slot(self, identity: SlotId | tuple[int, int]) -> Slot:
        """Look up a slot by identity.

        Raises:
            SlotNotFoundError: If no such slot exists.
        """
        index = self._index_of(identity)
        if index is None:
            raise SlotNotFoundError(identity)
        return self._slots[index]

    def value(self, identity: SlotId | tuple[int, int]) -> float | None:
        """Current value of a slot, None while unknown."""
        return self.slot(identity).value

    def at(self, index: int) -> Slot:
        """Slot at an arena index."""
        return self._slots[index]

    def owns(self, slot: Slot) -> bool:
        """True if ``slot`` is this graph's own slot object, not a copy."""
        return 0 <= slot.index < len(self._slots) and self._slots[slot.index] is slot

    def children_of(self, slot: Slot) -> tuple[Slot, Slot] | None:
        if slot.children is None:
            return None
        left, right = slot.children
        return self._slots[left], self._slots[right]

    def parents_of(self, slot: Slot) -> tuple[Slot, ...]:
        return tuple(self._slots[index] for index in slot.parents)

    def triple(self, slot: Slot) -> Triple | None:
        """Parent/children view rooted at ``slot``; None for bottom-row slots."""
        children = self.children_of(slot)
        if children is None:
            return None
        return Triple(slot, *children)

    def triples(self) -> Iterator[Triple]:
        """Every triple in the pyramid, top to bottom."""
        for slot in self._slots:
            triple = self.triple(slot)
            if triple is not None:
                yield triple

    def rows(self) -> list[list[Slot]]:
        """Slots grouped by row, root row first."""
        return [
            self._slots[flat_index(row, 0) : flat_index(row, 0) + row + 1]
            for row in range(self._row_count)
        ]

    def top_down(self) -> list[Slot]:
        """All slots, row 0 first, each row left to right."""
        return list(self._slots)

    def bottom_up(self) -> list[Slot]:
        """All slots in exact reverse of :meth:`top_down`."""
        return self._slots[::-1]

    def order(self, direction: SweepDirection) -> list[Slot]:
        if direction is SweepDirection.TOP_DOWN:
            return self.top_down()
        return self.bottom_up()

    @property
    def known_count(self) -> int:
        return sum(1 for slot in self._slots if slot.value is not None)

    def unknown_slots(self) -> list[SlotId]:
        return [slot.id for slot in self._slots if slot.value is None]

    def is_solved(self) -> bool:
        """True when every slot holds a value."""
        return all(slot.value is not None for slot in self._slots)

    def snapshot(self) -> dict[SlotId, float | None]:
        """Value of every slot keyed by identity."""
        return {slot.id: slot.value for slot in self._slots}

    def row_values(self) -> list[list[float | None]]:
        """Values laid out row by row, for renderers."""
        return [[slot.value for slot in row] for row in self.rows()]

    def copy(self) -> PyramidGraph:
        """Independent graph with the same shape and current values."""
        return PyramidGraph(self._row_count, [slot.model_copy() for slot in self._slots])


def build_pyramid(
    row_count: int,
    initial_values: SeedValues | None = None,
) -> PyramidGraph:
    """Build a pyramid graph. See :meth:`PyramidGraph.build`."""
    return PyramidGraph.build(row_count, initial_values)


def inspect(graph: PyramidGraph, identity: SlotId | tuple[int, int]) -> float | None:
    """Read-only accessor for one slot's value."""
    return graph.value(identity)


def _in_range(slot_id: SlotId, row_count: int) -> bool:
    return 0 <= slot_id.row < row_count and 0 <= slot_id.column <= slot_id.row


def _validate_seeds(row_count: int, initial_values: SeedValues) -> dict[SlotId, float]:
    seeds: dict[SlotId, float] = {}
    for identity, raw in initial_values.items():
        slot_id = coerce_slot_id(identity)
        if slot_id is None or not _in_range(slot_id, row_count):
            raise InvalidTopologyError(
                f"no slot {identity!r} in a pyramid of {row_count} rows "
                f"({slot_count(row_count)} slots)",
                identity=slot_id,
            )
        if isinstance(raw, bool) or not isinstance(raw, Real):
            raise InvalidSeedValueError(str(slot_id), f"expected a number, got {raw!r}")
        value = float(raw)
        if not math.isfinite(value):
            raise InvalidSeedValueError(str(slot_id), f"expected a finite number, got {raw!r}")
        seeds[slot_id] = value
    return seeds
