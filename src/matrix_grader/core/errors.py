"""Domain exceptions for matrix grading.

Only ``AmbiguousCorrectAnswerError`` is a hard failure during grading.
Incomplete responses are reported as booleans or messages unless a caller
asks for an exception, and selections outside the grid are ignored.
"""

from __future__ import annotations

from typing import Sequence, Union

Identity = Union[int, str]


class MatrixGradingError(Exception):
    """Base class for matrix grading errors."""


class IncompleteResponseError(MatrixGradingError):
    """A single-select response leaves one or more rows unanswered.

    Recoverable: the caller shows a validation message and lets the
    test-taker answer the missing rows.
    """

    def __init__(self, row_ids: Sequence[Identity], message: str = "") -> None:
        self.row_ids = tuple(row_ids)
        super().__init__(message or f"No answer for rows: {list(self.row_ids)}")


class UnknownCellError(MatrixGradingError, KeyError):
    """A (row, column) pair was never authored for the question."""

    def __init__(self, row_id: Identity, column_id: Identity) -> None:
        self.row_id = row_id
        self.column_id = column_id
        super().__init__(f"No cell authored at row {row_id!r}, column {column_id!r}")

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return str(self.args[0])


class AmbiguousCorrectAnswerError(MatrixGradingError):
    """A single-select row has zero or several correct columns.

    This is an authoring defect; there is no safe canonical answer.
    """

    def __init__(self, row_id: Identity, count: int) -> None:
        self.row_id = row_id
        self.count = count
        super().__init__(
            f"Single-select row {row_id!r} has {count} correct columns (expected 1)"
        )
