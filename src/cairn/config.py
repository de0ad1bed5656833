"""Configuration management for Cairn."""

import logging
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Cairn configuration loaded from environment variables.

    All settings can be overridden via environment variables with
    the CAIRN_ prefix. For example:
        CAIRN_NUMERIC_POLICY=nonfinite
        CAIRN_START_DIRECTION=bottom_up
    """

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    log_format: Literal["json", "text"] = Field(
        default="json",
        description="Log output format: 'json' for production, 'text' for development",
    )

    # Propagation
    max_sweeps: int | None = Field(
        default=None,
        ge=1,
        description=(
            "Upper bound on sweeps per solve. None means the slot count, which "
            "always suffices to reach a fixed point."
        ),
    )
    start_direction: Literal["top_down", "bottom_up"] = Field(
        default="top_down",
        description="Traversal order of the first sweep; later sweeps alternate",
    )
    numeric_policy: Literal["raise", "nonfinite"] = Field(
        default="raise",
        description=(
            "What to do when a triple has no real solution (negative product, "
            "zero divisor): 'raise' NumericDomainError or store the 'nonfinite' "
            "IEEE result"
        ),
    )
    consistency_rel_tol: float = Field(
        default=1e-9,
        gt=0.0,
        lt=1.0,
        description="Relative tolerance when checking parent == sqrt(left * right)",
    )

    model_config = {
        "env_prefix": "CAIRN_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        """Upper-case the level and reject names stdlib logging does not know."""
        level = value.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"unknown log level: {value}")
        return level


# Global settings instance
settings = Settings()
