"""Top-level package for the matrix question grader.

Provides subpackages:
- matrix_grader.core - immutable question/response/result models, schemas
  and serialization
- matrix_grader.grading - the grading engine (completeness, scoring,
  correct response, summaries)

The most used entry points are re-exported here.
"""

def _get_version() -> str:
    """Get version from pyproject.toml (dev) or importlib.metadata (installed)."""
    from pathlib import Path

    # In dev mode, read directly from pyproject.toml
    pyproject = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        for line in pyproject.read_text().splitlines():
            if line.strip().startswith("version"):
                # Parse: version = "0.1.0"
                return line.split("=")[1].strip().strip('"').strip("'")

    # Fallback to importlib.metadata for installed package
    from importlib.metadata import PackageNotFoundError, version as pkg_version
    try:
        return pkg_version("matrix-grader")
    except PackageNotFoundError:
        return "0.0.0"


__version__ = _get_version()

from .core import (  # noqa: E402
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
    MatrixGradingError,
    IncompleteResponseError,
    UnknownCellError,
    AmbiguousCorrectAnswerError,
)
from .grading import (  # noqa: E402
    GradingConfig,
    is_complete,
    validation_error,
    ensure_complete,
    is_gradable,
    grade_response,
    count_rows_right,
    correct_response,
    same_response,
    summarize_response,
    summarize_question,
)

__all__: list[str] = [
    "__version__",
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
    "GradingConfig",
    "is_complete",
    "validation_error",
    "ensure_complete",
    "is_gradable",
    "grade_response",
    "count_rows_right",
    "correct_response",
    "same_response",
    "summarize_response",
    "summarize_question",
]
