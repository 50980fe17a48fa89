"""Type definitions, shared helpers and exceptions for the simulator.

This module defines common type aliases, the numeric coercion helpers every
stat read goes through, the validation result container, and the exception
hierarchy.

Example:
    >>> from nba_sim.types import parse_or_default, clamp
    >>> parse_or_default("nan")
    0.0
    >>> clamp(51.0, 0.0, 45.0)
    45.0
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, TypedDict

# =============================================================================
# Type Aliases
# =============================================================================

PlayerName = str
TeamName = str
EraLabel = str
DraftSlot = str


# =============================================================================
# Numeric Helpers
# =============================================================================


def parse_or_default(value: Any, default: float = 0.0) -> float:
    """Coerce an upstream stat value to a finite float.

    Missing, non-numeric and non-finite values fall back to ``default``.

    Args:
        value: Raw value (number, numeric string, None, NaN...).
        default: Value returned when coercion fails.

    Returns:
        Finite float.
    """
    if value is None or isinstance(value, bool):
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    return number if math.isfinite(number) else default


def clamp(value: float, lo: float, hi: float) -> float:
    """Clamp value into the closed interval [lo, hi]."""
    return max(lo, min(hi, value))


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounded up.

    ``round()`` uses banker's rounding; simulation constants were tuned with
    half-up rounding (2.5 -> 3).
    """
    return math.floor(value + 0.5)


# =============================================================================
# TypedDicts for Structured Data
# =============================================================================


class KeyFactor(TypedDict):
    """A stat differential called out in a match narrative."""

    label: str
    stat: str
    diff: float
    favors: str


# =============================================================================
# Validation
# =============================================================================


@dataclass
class ValidationResult:
    """Result of request validation.

    Attributes:
        valid: Whether validation passed.
        errors: Human-readable reasons the request was rejected.
    """

    valid: bool = True
    errors: list[str] = field(default_factory=list)

    def add_error(self, message: str) -> None:
        """Add an error and mark as invalid."""
        self.errors.append(message)
        self.valid = False

    def merge(self, other: ValidationResult) -> None:
        """Merge another validation result into this one."""
        if not other.valid:
            self.valid = False
        self.errors.extend(other.errors)

    def raise_if_invalid(self) -> None:
        """Raise InvalidRequestError carrying every collected error."""
        if not self.valid:
            raise InvalidRequestError(self.errors)


# =============================================================================
# Exceptions
# =============================================================================


class NBASimError(Exception):
    """Base exception for simulator errors."""


class InvalidRequestError(NBASimError):
    """Simulation request rejected before any computation ran."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = list(errors)
        super().__init__("; ".join(self.errors) or "Invalid simulation request")


class RosterLoadError(NBASimError):
    """Roster feed could not be read."""


class PlayerNotFoundError(NBASimError):
    """Requested player is not in the roster."""
