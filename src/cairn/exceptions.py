"""Cairn exception hierarchy.

Provides structured exceptions for error handling throughout the codebase.
All exceptions inherit from CairnError for easy catching.
"""

from __future__ import annotations

from typing import Any


class CairnError(Exception):
    """Base exception for all Cairn errors.

    All custom exceptions in Cairn inherit from this class,
    allowing callers to catch all Cairn-related errors with
    a single except clause.

    Attributes:
        message: Human-readable error description.
        code: Machine-readable error code.
    """

    code: str = "cairn_error"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def to_dict(self) -> dict[str, object]:
        """Convert exception to a serializable dictionary."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
            }
        }


class InvalidTopologyError(CairnError):
    """Pyramid shape or seed data does not describe a valid pyramid.

    Raised at construction time when the row count is not positive or an
    initial value names a slot that does not exist. Construction aborts.

    Attributes:
        identity: The offending slot identity, if any.
    """

    code: str = "invalid_topology"

    def __init__(self, message: str, identity: Any = None) -> None:
        self.identity = identity
        super().__init__(message)

    def to_dict(self) -> dict[str, object]:
        """Convert exception to a serializable dictionary."""
        error: dict[str, object] = {
            "code": self.code,
            "message": self.message,
        }
        if self.identity is not None:
            error["identity"] = list(self.identity)
        return {"error": error}


class ValidationError(CairnError):
    """Invalid input provided.

    Attributes:
        field: The field that failed validation.
        message: Description of the validation failure.
    """

    code: str = "validation_error"

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        super().__init__(f"{field}: {message}")

    def to_dict(self) -> dict[str, object]:
        """Convert exception to a serializable dictionary."""
        return {
            "error": {
                "code": self.code,
                "field": self.field,
                "message": self.message,
            }
        }


class InvalidSeedValueError(ValidationError):
    """A seed value is not a finite real number."""

    code: str = "invalid_seed_value"


class SlotNotFoundError(CairnError):
    """Requested slot does not exist in the pyramid.

    Attributes:
        identity: The (row, column) that was looked up.
    """

    code: str = "slot_not_found"

    def __init__(self, identity: Any) -> None:
        self.identity = identity
        super().__init__(f"slot not found: {identity!r}")


class SlotAlreadyKnownError(CairnError):
    """Attempted to overwrite a slot that already holds a value.

    Slot values only move from unknown to known, never back.
    """

    code: str = "slot_already_known"

    def __init__(self, identity: Any, current: float, attempted: float) -> None:
        self.identity = identity
        self.current = current
        self.attempted = attempted
        super().__init__(
            f"slot {tuple(identity)} already holds {current!r}, refusing {attempted!r}"
        )


class NumericDomainError(CairnError):
    """A triple cannot be solved over the reals.

    Raised for a negative product under the square root or a division by a
    zero sibling when the numeric policy is "raise".

    Attributes:
        identity: The slot whose value could not be computed.
    """

    code: str = "numeric_domain_error"

    def __init__(self, identity: Any, message: str) -> None:
        self.identity = identity
        super().__init__(f"slot {tuple(identity)}: {message}")

    def to_dict(self) -> dict[str, object]:
        """Convert exception to a serializable dictionary."""
        return {
            "error": {
                "code": self.code,
                "identity": list(self.identity),
                "message": self.message,
            }
        }


class ConfigurationError(CairnError):
    """Configuration error.

    Raised when configuration is missing or invalid.
    """

    code: str = "configuration_error"
