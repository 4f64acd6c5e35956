"""
Matrix Grader Core Package

Shared data models, exceptions, schemas and serialization for the
grading engine.

**DESIGN NOTES:**

1. **Immutable Data Models**
   - Frozen dataclasses; a question is built once and read by many
     grading calls without locking

2. **Two-level Responses**
   - Responses map row id -> set of column ids
   - Flat "cell{row}_{column}" keys exist only at the form boundary

3. **One Weight per Cell**
   - Boolean methods read a positive weight as "correct"
   - The weighted method reads it as percent credit
"""

from .models import (
    Row,
    Column,
    Cell,
    cell_key,
    GradingMethod,
    Response,
    MatrixQuestion,
    GradeState,
    RowGrade,
    GradeResult,
)
from .errors import (
    MatrixGradingError,
    IncompleteResponseError,
    UnknownCellError,
    AmbiguousCorrectAnswerError,
)

__all__ = [
    "Row",
    "Column",
    "Cell",
    "cell_key",
    "GradingMethod",
    "Response",
    "MatrixQuestion",
    "GradeState",
    "RowGrade",
    "GradeResult",
    "MatrixGradingError",
    "IncompleteResponseError",
    "UnknownCellError",
    "AmbiguousCorrectAnswerError",
]
