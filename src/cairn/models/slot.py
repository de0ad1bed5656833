"""Slot model: one value position in the pyramid."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from cairn.exceptions import SlotAlreadyKnownError

from .base import SlotId


class Slot(BaseModel):
    """A single value position in the pyramid.

    Links to other slots are flat indices into the owning graph's arena,
    never references to Slot objects. The graph owns every slot; only
    ``value`` changes after construction, and only from unknown to known.

    Attributes:
        id: Row and column of the slot.
        index: Position in the graph's arena.
        value: Known value, or None while unknown.
        children: Arena indices of the left and right child; None in the bottom row.
        parents: Arena indices of the one or two parents; empty for the root.
    """

    model_config = ConfigDict(extra="forbid")

    id: SlotId = Field(description="Row and column of the slot")
    index: int = Field(ge=0, description="Position in the graph's arena")
    value: float | None = Field(default=None, description="Known value, None if unknown")
    children: tuple[int, int] | None = Field(
        default=None, description="Arena indices of the left and right child"
    )
    parents: tuple[int, ...] = Field(
        default=(), max_length=2, description="Arena indices of the parents"
    )

    @property
    def is_known(self) -> bool:
        return self.value is not None

    @property
    def is_leaf(self) -> bool:
        return self.children is None

    @property
    def is_root(self) -> bool:
        return not self.parents

    def assign(self, value: float) -> None:
        """Set the value of an unknown slot.

        Raises:
            SlotAlreadyKnownError: If the slot already holds a value.
        """
        if self.value is not None:
            raise SlotAlreadyKnownError(self.id, self.value, value)
        self.value = value

    def __str__(self) -> str:
        shown = "?" if self.value is None else f"{self.value:g}"
        return f"Slot{self.id}={shown}"
