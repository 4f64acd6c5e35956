"""
Module: grading.correct

Purpose:
    Derive the canonical correct response of a question: for each row,
    exactly the columns whose cell earns credit (flag set, or strictly
    positive weight).

Key Functions:
    - correct_response(): Canonical correct Response

Used By:
    - matrix_grader (public API)
    - scripts/grade_response.py (--correct)
"""

from __future__ import annotations

from ..core.errors import AmbiguousCorrectAnswerError
from ..core.models import MatrixQuestion, Response


def correct_response(question: MatrixQuestion) -> Response:
    """
    Build the correct response.

    Args:
        question: Question definition

    Returns:
        Response selecting every correct cell

    Raises:
        AmbiguousCorrectAnswerError: If a single-select row has zero or
            several correct columns
    """
    selections = {}
    for row_id in question.row_ids:
        columns = question.correct_columns(row_id)
        if not question.allows_multiple and len(columns) != 1:
            raise AmbiguousCorrectAnswerError(row_id, len(columns))
        selections[row_id] = columns
    return Response.multiple(selections)
