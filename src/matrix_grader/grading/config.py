"""
Module: grading.config

Purpose:
    Configuration dataclass for the grading engine. Immutable
    configuration with validation on construction.

Key Classes:
    - GradingConfig: Tunables not carried by the question itself

Dependencies:
    - dataclasses (std)

Used By:
    - grading.scoring: grade_response, classify_fraction
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GradingConfig:
    """
    Configuration for grading (immutable).

    Attributes:
        ungraded_fraction: Fraction awarded by the NONE method, whose rows
            never contribute. 1.0 treats any answer to a Likert-style
            question as acceptable.
        state_tolerance: Width of the band around 0 and 1 that still maps
            to WRONG / CORRECT. 0.0 means exact boundaries.

    Invariants:
        - 0 <= ungraded_fraction <= 1
        - 0 <= state_tolerance < 0.5

    Example:
        >>> config = GradingConfig(state_tolerance=0.01)
        >>> config.correct_threshold
        0.99
    """

    ungraded_fraction: float = 1.0
    state_tolerance: float = 0.0

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if not (0.0 <= self.ungraded_fraction <= 1.0):
            raise ValueError(
                f"ungraded_fraction must be within [0, 1]: {self.ungraded_fraction}"
            )
        if not (0.0 <= self.state_tolerance < 0.5):
            raise ValueError(
                f"state_tolerance must be within [0, 0.5): {self.state_tolerance}"
            )

    @property
    def correct_threshold(self) -> float:
        """Lowest fraction graded CORRECT."""
        return 1.0 - self.state_tolerance

    @property
    def wrong_threshold(self) -> float:
        """Highest fraction graded WRONG."""
        return self.state_tolerance


DEFAULT_CONFIG = GradingConfig()
