import pytest
import sys
from pathlib import Path

# Add src to sys.path so we can import matrix_grader
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from matrix_grader.core.models import (  # noqa: E402
    Cell,
    Column,
    GradingMethod,
    MatrixQuestion,
    Response,
    Row,
)


def _build_question(
    method: GradingMethod = GradingMethod.KPRIME,
    multiple: bool = False,
    rows: int = 4,
    columns: int = 4,
) -> MatrixQuestion:
    """4 x 4 grid whose column 0 is the only correct column of every row."""
    weighted = method is GradingMethod.WEIGHTED
    cells = []
    for r in range(rows):
        for c in range(columns):
            if weighted:
                cells.append(Cell.weighted(r, c, 100 if c == 0 else 0))
            else:
                cells.append(Cell.flag(r, c, c == 0))
    return MatrixQuestion(
        id=f"matrix-{method.value}",
        rows=tuple(Row(r, f"Statement {r}", feedback=f"Feedback {r}", position=r) for r in range(rows)),
        columns=tuple(Column(c, f"Option {c}", position=c) for c in range(columns)),
        cells=tuple(cells),
        grading_method=method,
        multiple=multiple,
        text="Judge each statement.",
    )


def _answer(question: MatrixQuestion, pick) -> Response:
    """Select column pick(row_id) in every row."""
    return Response.multiple({row_id: [pick(row_id)] for row_id in question.row_ids})


# Common test fixtures
@pytest.fixture
def make_question():
    """Factory for the standard 4 x 4 test question."""
    return _build_question


@pytest.fixture
def answer_correct():
    """Column 0 in every row."""
    return lambda question: _answer(question, lambda row_id: 0)


@pytest.fixture
def answer_incorrect():
    """Column 3 in every row."""
    return lambda question: _answer(question, lambda row_id: 3)


@pytest.fixture
def answer_partial():
    """Rows 0-1 right (column 0), rows 2-3 wrong (column 3)."""
    return lambda question: _answer(question, lambda row_id: 0 if row_id < 2 else 3)


@pytest.fixture
def true_false_question() -> MatrixQuestion:
    """Small single-select Kprime question with string ids."""
    return MatrixQuestion(
        id="tf",
        rows=(
            Row("boil", "Water boils at 100°C", position=0),
            Row("ice", "Ice sinks in water", position=1),
        ),
        columns=(Column("t", "True", position=0), Column("f", "False", position=1)),
        cells=(
            Cell.flag("boil", "t", True),
            Cell.flag("boil", "f", False),
            Cell.flag("ice", "t", False),
            Cell.flag("ice", "f", True),
        ),
        grading_method=GradingMethod.KPRIME,
        multiple=False,
        text="True or false?",
    )
