"""Square-root-of-product propagation over a pyramid graph.

Every parent/children triple obeys:

    parent = sqrt(left * right)
    left = parent**2 / right
    right = parent**2 / left

so any two known values of a triple determine the third. The engine applies
that rule slot by slot in alternating top-down and bottom-up sweeps until a
full sweep assigns nothing.

Design principles:
1. Values are monotonic: a slot goes from unknown to known exactly once
2. One triple-solve mutates at most one slot
3. A top-down sweep lets each solved parent unlock a child in the same pass;
   a bottom-up sweep lets each solved child unlock its parent
4. A fixed point is reached in at most N sweeps for N slots, since every
   sweep but the last assigns at least one slot
5. A partial fixed point is a valid result, not an error
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

from pydantic import BaseModel, ConfigDict, Field

from cairn import config as cairn_config
from cairn.exceptions import ConfigurationError, NumericDomainError, SlotNotFoundError
from cairn.logging import get_logger, propagation_context
from cairn.models import Slot, SlotId, SweepDirection

if TYPE_CHECKING:
    from cairn.config import Settings
    from cairn.graph import PyramidGraph

logger = logging.getLogger(__name__)
run_logger = get_logger(__name__)


NumericPolicy = Literal["raise", "nonfinite"]

DEFAULT_START_DIRECTION = SweepDirection.TOP_DOWN
DEFAULT_NUMERIC_POLICY: NumericPolicy = "raise"
DEFAULT_REL_TOL = 1e-9


@dataclass
class PropagationConfig:
    """Configuration for pyramid propagation.

    Attributes:
        max_sweeps: Maximum sweeps per run. None means the slot count, which
            always reaches a fixed point.
        start_direction: Order of the first sweep; later sweeps alternate.
        numeric_policy: "raise" NumericDomainError when a triple has no real
            solution, or store the "nonfinite" IEEE result (nan / inf).
        rel_tol: Relative tolerance used by consistency checks.

    Raises:
        ConfigurationError: If a field holds a value the engine cannot use.
    """

    max_sweeps: int | None = None
    start_direction: SweepDirection = DEFAULT_START_DIRECTION
    numeric_policy: NumericPolicy = DEFAULT_NUMERIC_POLICY
    rel_tol: float = DEFAULT_REL_TOL

    def __post_init__(self) -> None:
        try:
            self.start_direction = SweepDirection(self.start_direction)
        except ValueError as e:
            raise ConfigurationError(f"unknown start_direction: {self.start_direction!r}") from e
        if self.numeric_policy not in ("raise", "nonfinite"):
            raise ConfigurationError(f"unknown numeric_policy: {self.numeric_policy!r}")
        if self.max_sweeps is not None and self.max_sweeps < 1:
            raise ConfigurationError(f"max_sweeps must be at least 1, got {self.max_sweeps}")
        if not 0.0 < self.rel_tol < 1.0:
            raise ConfigurationError(f"rel_tol must be in (0, 1), got {self.rel_tol}")

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> PropagationConfig:
        """Build a config from application settings.

        Args:
            settings: Settings to read. Defaults to the global CAIRN_* settings.
        """
        if settings is None:
            settings = cairn_config.settings
        return cls(
            max_sweeps=settings.max_sweeps,
            start_direction=SweepDirection(settings.start_direction),
            numeric_policy=settings.numeric_policy,
            rel_tol=settings.consistency_rel_tol,
        )


class PropagationResult(BaseModel):
    """Result of running propagation to a fixed point.

    Attributes:
        sweeps: Number of sweeps performed, including the final stable one.
        slots_assigned: Number of slots that went from unknown to known.
        converged: Whether the last sweep assigned nothing.
        solved: Whether every slot is known.
        unknown_remaining: Slots still unknown after the run.
        inconsistencies: Fully known triples that break the square-root rule
            at the configured tolerance, usually from conflicting seeds.
        assignments_per_sweep: Slots assigned in each sweep, in order.
        assigned: Identities of assigned slots, in assignment order.
    """

    model_config = ConfigDict(extra="forbid")

    sweeps: int = Field(default=0, ge=0)
    slots_assigned: int = Field(default=0, ge=0)
    converged: bool = Field(default=False)
    solved: bool = Field(default=False)
    unknown_remaining: int = Field(default=0, ge=0)
    inconsistencies: int = Field(default=0, ge=0)
    assignments_per_sweep: list[int] = Field(default_factory=list)
    assigned: list[SlotId] = Field(default_factory=list)


class Inconsistency(BaseModel):
    """A fully known triple whose parent is not sqrt(left * right).

    Attributes:
        parent: Identity of the triple's parent slot.
        actual: Value stored in the parent.
        expected: sqrt(left * right) computed from the children.
    """

    model_config = ConfigDict(extra="forbid")

    parent: SlotId
    actual: float
    expected: float


def solve_triple(
    graph: PyramidGraph,
    slot: Slot | SlotId | tuple[int, int],
    numeric_policy: NumericPolicy = DEFAULT_NUMERIC_POLICY,
) -> SlotId | None:
    """Fill in the missing value of a triple when exactly two are known.

    Bottom-row slots have no children and are never solved through their
    own triple; they are only ever solved as someone else's child.

    Args:
        graph: Graph that owns the slot.
        slot: Parent slot of the triple, or its identity.
        numeric_policy: How to handle a triple with no real solution.

    Returns:
        Identity of the slot that was assigned, or None if nothing changed.

    Raises:
        NumericDomainError: Under the "raise" policy, when the product under
            the root is negative or the known sibling is zero.
        SlotNotFoundError: If the slot does not belong to ``graph``.
        ConfigurationError: If numeric_policy is not "raise" or "nonfinite".
    """
    if numeric_policy not in ("raise", "nonfinite"):
        raise ConfigurationError(f"unknown numeric_policy: {numeric_policy!r}")

    if isinstance(slot, Slot):
        if not graph.owns(slot):
            raise SlotNotFoundError(slot.id)
        parent = slot
    else:
        parent = graph.slot(slot)
    triple = graph.triple(parent)
    if triple is None or triple.known_count != 2:
        return None

    _, left, right = triple
    if parent.value is None:
        target = parent
        value = _root_of_product(parent.id, left.value, right.value, numeric_policy)
    elif left.value is None:
        target = left
        value = _square_over(left.id, parent.value, right.value, numeric_policy)
    else:
        target = right
        value = _square_over(right.id, parent.value, left.value, numeric_policy)

    target.assign(value)
    logger.debug("Solved slot %s = %r via triple at %s", target.id, value, parent.id)
    return target.id


def _root_of_product(
    target: SlotId,
    left: float,
    right: float,
    numeric_policy: NumericPolicy,
) -> float:
    product = left * right
    if product < 0:
        if numeric_policy == "raise":
            raise NumericDomainError(
                target, f"square root of negative product {left!r} * {right!r}"
            )
        return math.nan
    return math.sqrt(product)


def _square_over(
    target: SlotId,
    parent: float,
    sibling: float,
    numeric_policy: NumericPolicy,
) -> float:
    squared = parent * parent
    if sibling == 0:
        if numeric_policy == "raise":
            raise NumericDomainError(target, f"division of {squared!r} by zero sibling")
        if squared == 0 or math.isnan(squared):
            return math.nan
        return math.copysign(math.inf, sibling)
    return squared / sibling


def run_sweep(
    graph: PyramidGraph,
    direction: SweepDirection = DEFAULT_START_DIRECTION,
    numeric_policy: NumericPolicy = DEFAULT_NUMERIC_POLICY,
) -> list[SlotId]:
    """Apply the triple-solver once to every slot in the given order.

    Args:
        graph: Graph to mutate in place.
        direction: Traversal order.
        numeric_policy: How to handle a triple with no real solution.

    Returns:
        Identities assigned during this sweep, in assignment order.
    """
    assigned: list[SlotId] = []
    for slot in graph.order(direction):
        solved = solve_triple(graph, slot, numeric_policy)
        if solved is not None:
            assigned.append(solved)
    return assigned


def propagate(
    graph: PyramidGraph,
    config: PropagationConfig | None = None,
) -> PropagationResult:
    """Sweep the graph in alternating directions until a fixed point.

    Args:
        graph: Graph to mutate in place.
        config: Propagation configuration. Defaults to the CAIRN_* settings.

    Returns:
        PropagationResult with statistics.

    Raises:
        NumericDomainError: Under the "raise" policy, when a triple has no
            real solution. Slots assigned before the failing triple, including
            earlier ones in the same sweep, keep their values.
    """
    if config is None:
        config = PropagationConfig.from_settings()

    max_sweeps = config.max_sweeps if config.max_sweeps is not None else len(graph)

    result = PropagationResult()
    direction = config.start_direction

    with propagation_context(rows=graph.row_count, slots=len(graph)):
        for _ in range(max_sweeps):
            assigned = run_sweep(graph, direction, config.numeric_policy)

            result.sweeps += 1
            result.assignments_per_sweep.append(len(assigned))
            result.assigned.extend(assigned)

            logger.debug(
                "Sweep %d (%s): %d slots assigned",
                result.sweeps,
                direction.value,
                len(assigned),
            )

            if not assigned:
                result.converged = True
                break

            direction = direction.reversed()

        result.slots_assigned = len(result.assigned)
        result.unknown_remaining = len(graph) - graph.known_count
        result.solved = result.unknown_remaining == 0
        result.inconsistencies = len(check_consistency(graph, config=config))

        if not result.converged:
            run_logger.warning(
                "Propagation stopped before a fixed point",
                sweeps=result.sweeps,
            )
        if result.inconsistencies:
            run_logger.warning(
                "Pyramid holds inconsistent triples",
                inconsistencies=result.inconsistencies,
                rel_tol=config.rel_tol,
            )

        run_logger.info(
            "Pyramid propagation complete",
            sweeps=result.sweeps,
            slots_assigned=result.slots_assigned,
            converged=result.converged,
            solved=result.solved,
        )

    return result


def solve(
    graph: PyramidGraph,
    config: PropagationConfig | None = None,
) -> PyramidGraph:
    """Propagate to a fixed point and hand back the same, now fuller, graph.

    A graph with too few known values comes back partially solved; use
    :meth:`PyramidGraph.is_solved` to tell the two apart.
    """
    propagate(graph, config)
    return graph


def check_consistency(
    graph: PyramidGraph,
    rel_tol: float | None = None,
    config: PropagationConfig | None = None,
) -> list[Inconsistency]:
    """Find fully known triples that break parent = sqrt(left * right).

    Triples with an unknown member are skipped. Seeds are never validated
    against each other during propagation, so this is how callers detect
    over-constrained input.

    Args:
        graph: Graph to check.
        rel_tol: Relative tolerance passed to math.isclose. Overrides config.
        config: Source of the tolerance when rel_tol is None. Defaults to the
            CAIRN_* settings.

    Returns:
        One Inconsistency per violating triple, top to bottom.
    """
    if rel_tol is None:
        if config is None:
            config = PropagationConfig.from_settings()
        rel_tol = config.rel_tol

    violations: list[Inconsistency] = []
    for parent, left, right in graph.triples():
        if parent.value is None or left.value is None or right.value is None:
            continue
        product = left.value * right.value
        expected = math.sqrt(product) if product >= 0 else math.nan
        if not math.isclose(parent.value, expected, rel_tol=rel_tol):
            violations.append(
                Inconsistency(parent=parent.id, actual=parent.value, expected=expected)
            )
    return violations
