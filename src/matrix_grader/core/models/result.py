"""
Module: result

Purpose:
    Provides the grading output types: GradeState, RowGrade (per-row
    diagnostics) and GradeResult (question-level fraction and state).

Key Functions:
    - RowGrade.missed / RowGrade.wrong: Per-cell diagnostics
    - GradeResult.pair: (fraction, state) as returned by Moodle-style APIs
    - GradeResult.rows_right: Count of rows graded fully right

Dependencies:
    - dataclasses (std)
    - enum (std)

Used By:
    - grading.scoring
    - core.utils.serialization
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Optional, Tuple

from .grid import Identity


class GradeState(str, Enum):
    """Qualitative outcome of a graded response."""
    CORRECT = "correct"
    PARTIAL = "partial"
    WRONG = "wrong"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class RowGrade:
    """
    Diagnostics for one row (immutable).

    Attributes:
        row_id: Graded row
        fraction: Row fraction in [0, 1], or None when the row does not
            contribute (no grading, or no authored cells)
        selected: Selected columns that carry an authored cell
        correct: Columns whose cell earns credit
        feedback: Authored feedback of the row
    """

    row_id: Identity
    fraction: Optional[float]
    selected: FrozenSet[Identity] = frozenset()
    correct: FrozenSet[Identity] = frozenset()
    feedback: str = ""

    @property
    def is_graded(self) -> bool:
        """True when the row contributes to the question grade."""
        return self.fraction is not None

    @property
    def is_right(self) -> bool:
        """True when the row earned full credit."""
        return self.fraction == 1.0

    @property
    def missed(self) -> FrozenSet[Identity]:
        """Correct columns that were not selected."""
        return self.correct - self.selected

    @property
    def wrong(self) -> FrozenSet[Identity]:
        """Selected columns that earn no credit."""
        return self.selected - self.correct


@dataclass(frozen=True)
class GradeResult:
    """
    Question-level grade (immutable).

    Produced fresh by every grading call, never cached.

    Attributes:
        fraction: Overall fraction in [0, 1]
        state: Qualitative state derived from fraction
        rows: Per-row diagnostics in row display order

    Example:
        >>> result.pair
        (0.5, <GradeState.PARTIAL: 'partial'>)
    """

    fraction: float
    state: GradeState
    rows: Tuple[RowGrade, ...] = ()

    def __post_init__(self) -> None:
        """Validate result on construction."""
        if not (0.0 <= self.fraction <= 1.0):
            raise ValueError(f"fraction must be within [0, 1]: {self.fraction}")

    @property
    def pair(self) -> Tuple[float, GradeState]:
        """(fraction, state) tuple."""
        return (self.fraction, self.state)

    @property
    def rows_right(self) -> int:
        """Number of graded rows with full credit."""
        return sum(1 for r in self.rows if r.is_graded and r.is_right)

    @property
    def rows_graded(self) -> int:
        """Number of rows that contributed to the grade."""
        return sum(1 for r in self.rows if r.is_graded)

    def get_row(self, row_id: Identity) -> Optional[RowGrade]:
        """Find the diagnostics of one row."""
        for row in self.rows:
            if row.row_id == row_id:
                return row
        return None

    def __repr__(self) -> str:
        """Concise representation for debugging."""
        return (
            f"GradeResult({self.fraction:.4g}, {self.state.value}, "
            f"rows={self.rows_right}/{self.rows_graded})"
        )
