"""
Core Models Package

Immutable data models for matrix questions and their grading.

All models in this package are frozen dataclasses. A question is built
once and then read by any number of grading calls, possibly from several
threads, without locking.
"""

from .grid import Row, Column, Cell, Identity, cell_key
from .grading_method import GradingMethod
from .response import Response
from .question import MatrixQuestion
from .result import GradeState, RowGrade, GradeResult

__all__ = [
    "Row",
    "Column",
    "Cell",
    "Identity",
    "cell_key",
    "GradingMethod",
    "Response",
    "MatrixQuestion",
    "GradeState",
    "RowGrade",
    "GradeResult",
]
