"""
Module: grading

Purpose:
    Pure grading engine for matrix questions: completeness, row scoring,
    aggregation, correct-response derivation and summaries. Every function
    takes a MatrixQuestion and (usually) a Response and has no side
    effects besides logging.

Key Functions:
    - is_complete(): Completeness per selection mode
    - grade_response(): Fraction, state and per-row diagnostics
    - correct_response(): Canonical correct Response
    - same_response(), summarize_response(): Review helpers

Key Classes:
    - GradingConfig: Tunables for the NONE method and state thresholds
"""

from ..core.errors import (
    AmbiguousCorrectAnswerError,
    IncompleteResponseError,
    MatrixGradingError,
    UnknownCellError,
)
from .config import GradingConfig, DEFAULT_CONFIG
from .completeness import (
    is_complete,
    missing_rows,
    validation_error,
    ensure_complete,
    is_gradable,
)
from .scoring import (
    score_row,
    grade_rows,
    grade_response,
    classify_fraction,
    count_rows_right,
)
from .correct import correct_response
from .summary import same_response, summarize_response, summarize_question, EMPTY_MARKER

__all__ = [
    "MatrixGradingError",
    "IncompleteResponseError",
    "UnknownCellError",
    "AmbiguousCorrectAnswerError",
    "GradingConfig",
    "DEFAULT_CONFIG",
    "is_complete",
    "missing_rows",
    "validation_error",
    "ensure_complete",
    "is_gradable",
    "score_row",
    "grade_rows",
    "grade_response",
    "classify_fraction",
    "count_rows_right",
    "correct_response",
    "same_response",
    "summarize_response",
    "summarize_question",
    "EMPTY_MARKER",
]
