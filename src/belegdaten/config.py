"""
belegdaten.config
~~~~~~~~~~~~~~~~~
Central configuration for the belegdaten library.

All values have sensible defaults that work out of the box for euro
invoices.  Override any field via a ``.env`` file or environment variables;
pydantic-settings picks them up automatically.

Usage::

    from belegdaten.config import cfg

    print(cfg.currency_symbol_pattern)   # "\\p{Sc}|EUR"
    print(cfg.max_amounts)               # 50
"""

from __future__ import annotations

import logging

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError
from .patterns import check_pattern


DEFAULT_CURRENCY_SYMBOL_PATTERN = r"\p{Sc}|EUR"
DEFAULT_DECIMAL_NUMBER_PATTERN = r"\d+([,.]\d{1,2})?"

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class Config(BaseSettings):
    """
    Runtime configuration for belegdaten.

    Reads from (in priority order):
      1. Environment variables (prefixed with ``BELEGDATEN_``)
      2. A ``.env`` file in the working directory
      3. The defaults defined below
    """

    model_config = SettingsConfigDict(
        env_prefix="BELEGDATEN_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ------------------------------------------------------------------
    # Patterns
    # ------------------------------------------------------------------

    currency_symbol_pattern: str = Field(
        default=DEFAULT_CURRENCY_SYMBOL_PATTERN,
        description=(
            "Regex recognising a currency symbol. Matched case-insensitively. "
            "Supports \\p{..} Unicode category escapes outside character classes."
        ),
    )
    decimal_number_pattern: str = Field(
        default=DEFAULT_DECIMAL_NUMBER_PATTERN,
        description="Regex recognising the numeric part of an amount.",
    )

    # ------------------------------------------------------------------
    # Categorisation
    # ------------------------------------------------------------------

    max_amounts: int = Field(
        default=50,
        ge=3,
        le=1000,
        description=(
            "Maximum number of distinct amounts searched for a total/net/VAT "
            "triple. Larger sets are cut down to the biggest values first."
        ),
    )
    min_percentage: float = Field(
        default=0.0,
        ge=0.0,
        description="Smallest percentage accepted as a VAT rate candidate.",
    )
    max_percentage: float = Field(
        default=100.0,
        le=100.0,
        description="Largest percentage accepted as a VAT rate candidate.",
    )

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------

    log_level: str = Field(
        default="WARNING",
        description="Default log level used by the command-line interface.",
    )

    # ------------------------------------------------------------------
    # Validators
    # ------------------------------------------------------------------

    @field_validator("currency_symbol_pattern", "decimal_number_pattern")
    @classmethod
    def _validate_pattern(cls, v: str) -> str:
        if not v:
            raise ValueError("pattern must not be empty.")
        try:
            check_pattern(v)
        except ConfigurationError as exc:
            raise ValueError(str(exc)) from exc
        return v

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}.")
        return level

    @model_validator(mode="after")
    def _check_percentage_range(self) -> "Config":
        if self.min_percentage > self.max_percentage:
            raise ValueError("min_percentage must not exceed max_percentage.")
        return self

    # ------------------------------------------------------------------
    # Helper methods
    # ------------------------------------------------------------------

    def get_log_level(self) -> int:
        """Return ``log_level`` as a :mod:`logging` level number."""
        return logging.getLevelName(self.log_level)


# ---------------------------------------------------------------------------
# Module-level singleton
# ---------------------------------------------------------------------------

cfg = Config()

__all__ = [
    "Config",
    "cfg",
    "DEFAULT_CURRENCY_SYMBOL_PATTERN",
    "DEFAULT_DECIMAL_NUMBER_PATTERN",
]
