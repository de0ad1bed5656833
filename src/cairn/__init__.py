"""Cairn: solve square-root pyramids by local propagation.

A pyramid of value slots where every slot above the bottom row holds the
square root of the product of the two slots beneath it. Seed a few values,
and Cairn deduces the rest, one parent/children triple at a time.

Quick Start:
    from cairn import build_pyramid, inspect, solve

    graph = build_pyramid(
        4,
        {(1, 0): 60, (2, 1): 36, (3, 0): 625, (3, 3): 1296},
    )
    solve(graph)
    inspect(graph, (0, 0))  # 80.498...
    graph.is_solved()  # True

Components:
    - PyramidGraph: Fixed-shape layered DAG; interior slots have two parents
    - solve_triple: Deduce the third value of a triple from the other two
    - propagate / solve: Alternate top-down and bottom-up sweeps to a fixed point
"""

__version__ = "0.1.0"

# Configuration
from .config import Settings, settings

# Exceptions
from .exceptions import (
    CairnError,
    ConfigurationError,
    InvalidSeedValueError,
    InvalidTopologyError,
    NumericDomainError,
    SlotAlreadyKnownError,
    SlotNotFoundError,
    ValidationError,
)

# Graph
from .graph import PyramidGraph, Triple, build_pyramid, inspect

# Logging
from .logging import (
    bind_context,
    configure_logging,
    get_logger,
    propagation_context,
    unbind_context,
)

# Models
from .models import Slot, SlotId, SweepDirection

# Propagation
from .propagation import (
    Inconsistency,
    PropagationConfig,
    PropagationResult,
    check_consistency,
    propagate,
    run_sweep,
    solve,
    solve_triple,
)

__all__ = [
    # Version
    "__version__",
    # Configuration
    "Settings",
    "settings",
    # Exceptions
    "CairnError",
    "ConfigurationError",
    "InvalidSeedValueError",
    "InvalidTopologyError",
    "NumericDomainError",
    "SlotAlreadyKnownError",
    "SlotNotFoundError",
    "ValidationError",
    # Graph
    "PyramidGraph",
    "Triple",
    "build_pyramid",
    "inspect",
    # Logging
    "bind_context",
    "configure_logging",
    "get_logger",
    "propagation_context",
    "unbind_context",
    # Models
    "Slot",
    "SlotId",
    "SweepDirection",
    # Propagation
    "Inconsistency",
    "PropagationConfig",
    "PropagationResult",
    "check_consistency",
    "propagate",
    "run_sweep",
    "solve",
    "solve_triple",
]
