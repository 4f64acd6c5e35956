"""
Module: grading.completeness

Purpose:
    Decide whether a response is complete enough to submit, and whether
    it is gradable at all.

    Multi-select rows may legitimately stay empty ("none of these
    statements apply"), so multi-select responses are always complete.
    Single-select rows need exactly one answer each.

Key Functions:
    - is_complete(): Total completeness predicate
    - missing_rows(): Rows lacking a valid single-select answer
    - validation_error(): Message for the submitter, or None
    - ensure_complete(): Raise IncompleteResponseError when incomplete
    - is_gradable(): At least one selection inside the grid

Used By:
    - matrix_grader (public API)
    - scripts/grade_response.py
"""

from __future__ import annotations

import logging
from typing import Optional, Tuple

from ..core.errors import IncompleteResponseError
from ..core.models import Identity, MatrixQuestion, Response

logger = logging.getLogger(__name__)

ANSWER_EACH_ROW_MESSAGE = "You must provide an answer for each row"


def missing_rows(question: MatrixQuestion, response: Response) -> Tuple[Identity, ...]:
    """
    Rows that block completeness.

    Args:
        question: Question definition
        response: Candidate response

    Returns:
        Row ids (display order) without exactly one in-grid selection.
        Always empty for multi-select questions.
    """
    if question.allows_multiple:
        return ()
    restricted = question.restrict(response)
    return tuple(
        row_id for row_id in question.row_ids
        if len(restricted.selected(row_id)) != 1
    )


def is_complete(question: MatrixQuestion, response: Response) -> bool:
    """
    Check response completeness. Never raises.

    Returns:
        True for any multi-select response; for single-select, True iff
        every row has exactly one selected column.
    """
    return not missing_rows(question, response)


def validation_error(question: MatrixQuestion, response: Response) -> Optional[str]:
    """Message explaining why the response is incomplete, or None."""
    if is_complete(question, response):
        return None
    return ANSWER_EACH_ROW_MESSAGE


def ensure_complete(question: MatrixQuestion, response: Response) -> None:
    """
    Raise when the response is incomplete.

    Raises:
        IncompleteResponseError: Carrying the unanswered row ids
    """
    missing = missing_rows(question, response)
    if missing:
        logger.debug(f"Question {question.id!r}: rows {list(missing)} unanswered")
        raise IncompleteResponseError(missing, ANSWER_EACH_ROW_MESSAGE)


def is_gradable(question: MatrixQuestion, response: Response) -> bool:
    """True when at least one selection lies inside the grid."""
    return not question.restrict(response).is_empty
