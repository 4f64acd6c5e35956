"""
Module: grading.scoring

Purpose:
    Row scoring and question-level aggregation for every grading method.

    One row scorer per GradingMethod is registered in _ROW_SCORERS; every
    code path that needs a row grade goes through score_row(), so the
    method is dispatched in exactly one place. Aggregation is the mean of
    authored rows, except KPRIME (conjunction) and NONE (fixed fraction).

Key Functions:
    - score_row(): Fraction of one row under the question's method
    - grade_rows(): Per-row diagnostics for a response
    - grade_response(): Question-level GradeResult
    - classify_fraction(): Map a fraction to a GradeState
    - count_rows_right(): (rows right, rows graded)

Dependencies:
    - core.models: MatrixQuestion, Response, RowGrade, GradeResult
    - grading.config: GradingConfig

Used By:
    - matrix_grader (public API)
    - scripts/grade_response.py
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, FrozenSet, Optional, Tuple

from ..core.models import (
    Cell,
    GradeResult,
    GradeState,
    GradingMethod,
    Identity,
    MatrixQuestion,
    Response,
    RowGrade,
)
from .config import DEFAULT_CONFIG, GradingConfig

logger = logging.getLogger(__name__)

RowScorer = Callable[[Tuple[Cell, ...], FrozenSet[Identity]], Optional[float]]


# ─────────────────────────────────────────────────────────────────────────────
# Row Scorers
# ─────────────────────────────────────────────────────────────────────────────

def _score_none(cells: Tuple[Cell, ...], selected: FrozenSet[Identity]) -> Optional[float]:
    return None


def _score_any(cells: Tuple[Cell, ...], selected: FrozenSet[Identity]) -> Optional[float]:
    picked = [c for c in cells if c.column_id in selected]
    if any(c.is_correct for c in picked) and all(c.is_correct for c in picked):
        return 1.0
    return 0.0


def _score_all(cells: Tuple[Cell, ...], selected: FrozenSet[Identity]) -> Optional[float]:
    for cell in cells:
        if cell.is_correct != (cell.column_id in selected):
            return 0.0
    return 1.0


def _score_weighted(cells: Tuple[Cell, ...], selected: FrozenSet[Identity]) -> Optional[float]:
    # Row sums are not re-validated here; a malformed row is clamped.
    # Rounding absorbs float drift from decimal weights (0.1 + 65.24 + 34.66).
    total = round(sum(c.weight for c in cells if c.column_id in selected), 9)
    return min(1.0, max(0.0, total / 100.0))


_ROW_SCORERS: Dict[GradingMethod, RowScorer] = {
    GradingMethod.NONE: _score_none,
    GradingMethod.ANY: _score_any,
    GradingMethod.ALL: _score_all,
    GradingMethod.KPRIME: _score_all,
    GradingMethod.WEIGHTED: _score_weighted,
}


def score_row(
    question: MatrixQuestion,
    row_id: Identity,
    selected: FrozenSet[Identity],
) -> Optional[float]:
    """
    Score one row under the question's grading method.

    Selections on cells that were never authored earn nothing and are not
    counted as wrong.

    Args:
        question: Question definition
        row_id: Row to score
        selected: Column ids selected in that row

    Returns:
        Fraction in [0, 1], or None when the row does not contribute
        (NONE method, or a row without authored cells)
    """
    cells = question.row_cells(row_id)
    if not cells:
        return None
    return _ROW_SCORERS[question.grading_method](cells, selected)


# ─────────────────────────────────────────────────────────────────────────────
# Aggregation
# ─────────────────────────────────────────────────────────────────────────────

def grade_rows(question: MatrixQuestion, response: Response) -> Tuple[RowGrade, ...]:
    """
    Per-row diagnostics in row display order.

    Args:
        question: Question definition
        response: Candidate response (selections outside the grid ignored)

    Returns:
        One RowGrade per row of the question
    """
    restricted = question.restrict(response)
    grades = []
    for row in question.rows:
        selected = restricted.selected(row.id)
        if not question.allows_multiple and len(selected) > 1:
            logger.warning(
                f"Question {question.id!r}: single-select row {row.id!r} "
                f"has {len(selected)} selections"
            )
        authored = frozenset(
            c.column_id for c in question.row_cells(row.id) if c.column_id in selected
        )
        grades.append(RowGrade(
            row_id=row.id,
            fraction=score_row(question, row.id, selected),
            selected=authored,
            correct=question.correct_columns(row.id),
            feedback=row.feedback,
        ))
    return tuple(grades)


def classify_fraction(fraction: float, config: GradingConfig = DEFAULT_CONFIG) -> GradeState:
    """
    Map a fraction to a qualitative state.

    Args:
        fraction: Grade fraction in [0, 1]
        config: Supplies the tolerance band (exact boundaries by default)

    Returns:
        CORRECT at the top, WRONG at the bottom, PARTIAL in between
    """
    if fraction >= config.correct_threshold:
        return GradeState.CORRECT
    if fraction <= config.wrong_threshold:
        return GradeState.WRONG
    return GradeState.PARTIAL


def _aggregate(
    question: MatrixQuestion,
    rows: Tuple[RowGrade, ...],
    config: GradingConfig,
) -> float:
    if question.grading_method is GradingMethod.NONE:
        return config.ungraded_fraction

    graded = [r.fraction for r in rows if r.fraction is not None]
    if not graded:
        logger.warning(f"Question {question.id!r} has no authored rows; grading 0")
        return 0.0

    if question.is_kprime:
        return 1.0 if all(f == 1.0 for f in graded) else 0.0
    return sum(graded) / len(graded)


def grade_response(
    question: MatrixQuestion,
    response: Response,
    *,
    config: GradingConfig = DEFAULT_CONFIG,
) -> GradeResult:
    """
    Grade a response.

    Args:
        question: Question definition
        response: Candidate response
        config: Grading tunables

    Returns:
        GradeResult with fraction, state and per-row diagnostics

    Example:
        >>> grade_response(question, correct_response(question)).pair
        (1.0, <GradeState.CORRECT: 'correct'>)
    """
    rows = grade_rows(question, response)
    fraction = _aggregate(question, rows, config)
    state = classify_fraction(fraction, config)
    logger.debug(
        f"Graded {question.id!r} ({question.grading_method.value}): "
        f"{fraction:.4f} {state.value}"
    )
    return GradeResult(fraction=fraction, state=state, rows=rows)


def count_rows_right(question: MatrixQuestion, response: Response) -> Tuple[int, int]:
    """
    Count fully right rows.

    Returns:
        (rows with full credit, rows that contribute to the grade)
    """
    result = grade_response(question, response)
    return result.rows_right, result.rows_graded
