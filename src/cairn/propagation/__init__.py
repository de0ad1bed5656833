"""Value propagation through a square-root-of-product pyramid.

Each parent slot equals the square root of the product of its two children,
so any two known values in a parent/children triple fix the third. The
engine sweeps the pyramid in alternating directions, solving triples, until
a sweep changes nothing.

Design principles:
- Slot values only move from unknown to known
- A single triple-solve mutates at most one slot
- Convergence is a fixed point, not necessarily a complete solution
- Seeds are never cross-checked during propagation; use check_consistency

Example:
    ```python
    from cairn.graph import build_pyramid
    from cairn.propagation import PropagationConfig, propagate

    graph = build_pyramid(3, {(1, 0): 6.0, (2, 0): 4.0, (2, 2): 16.0})
    result = propagate(graph, PropagationConfig())
    print(f"Assigned {result.slots_assigned} slots in {result.sweeps} sweeps")
    ```
"""

from .algorithms import (
    DEFAULT_NUMERIC_POLICY,
    DEFAULT_REL_TOL,
    DEFAULT_START_DIRECTION,
    Inconsistency,
    NumericPolicy,
    PropagationConfig,
    PropagationResult,
    check_consistency,
    propagate,
    run_sweep,
    solve,
    solve_triple,
)

__all__ = [
    # Config
    "NumericPolicy",
    "PropagationConfig",
    "PropagationResult",
    "Inconsistency",
    # Functions
    "check_consistency",
    "propagate",
    "run_sweep",
    "solve",
    "solve_triple",
    # Constants
    "DEFAULT_NUMERIC_POLICY",
    "DEFAULT_REL_TOL",
    "DEFAULT_START_DIRECTION",
]
