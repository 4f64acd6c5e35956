"""
Module: grading_method

Purpose:
    Enum selecting how a matrix question is graded.

Key Classes:
    - GradingMethod: Closed set of the five grading methods

Used By:
    - core.models.question.MatrixQuestion
    - grading.scoring: Row scorer dispatch
    - core.schemas.validator
"""

from enum import Enum


class GradingMethod(str, Enum):
    """
    How rows are scored and combined into a question grade.

    Attributes:
        NONE: No grading (Likert scales). The question gets the configured
              ungraded fraction, rows never contribute.
        ANY: A row is right when at least one correct cell and no
             incorrect cell is selected.
        ALL: A row is right when exactly the correct cells are selected.
        KPRIME: ALL per row, but every row must be right for any credit.
        WEIGHTED: A row earns the sum of its selected weights, in percent.

    Example:
        >>> GradingMethod("kprime") is GradingMethod.KPRIME
        True
    """

    NONE = "none"
    ANY = "any"
    ALL = "all"
    KPRIME = "kprime"
    WEIGHTED = "weighted"

    def __str__(self) -> str:
        return self.value

