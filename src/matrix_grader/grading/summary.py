"""
Module: grading.summary

Purpose:
    Response equivalence and plain-text summaries for review and
    regrading. Summaries only render the response against the question;
    no grading happens here.

Key Functions:
    - same_response(): Equivalence of two responses
    - summarize_response(): One "<row>: <columns>" line per row
    - summarize_question(): Stem plus row and column labels

Used By:
    - matrix_grader (public API)
    - scripts/grade_response.py
"""

from __future__ import annotations

from ..core.models import MatrixQuestion, Response

EMPTY_MARKER = "-"
COLUMN_SEPARATOR = ", "


def same_response(a: Response, b: Response) -> bool:
    """
    Check whether two responses select the same cells.

    Order-independent; rows without selection are ignored on both sides.
    """
    return a.selections == b.selections


def summarize_response(question: MatrixQuestion, response: Response) -> str:
    """
    Render a response as text.

    Every row of the question yields exactly one line, in display order.
    Columns are listed in column order; unanswered rows show EMPTY_MARKER.
    Selections outside the grid are not rendered.

    Example:
        >>> print(summarize_response(question, Response.single({0: 0})))
        Water boils at 100°C: True
        Ice sinks: -
    """
    restricted = question.restrict(response)
    lines = []
    for row in question.rows:
        selected = restricted.selected(row.id)
        labels = [c.label for c in question.columns if c.id in selected]
        lines.append(f"{row.label}: {COLUMN_SEPARATOR.join(labels) or EMPTY_MARKER}")
    return "\n".join(lines)


def summarize_question(question: MatrixQuestion) -> str:
    """Render the question stem followed by its row and column labels."""
    lines = [question.text] if question.text else []
    lines.append("Rows: " + "; ".join(r.label for r in question.rows))
    lines.append("Columns: " + "; ".join(c.label for c in question.columns))
    return "\n".join(lines)
