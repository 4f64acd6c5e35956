"""
Unit Tests for Correct-Response Derivation
"""

import pytest

from matrix_grader.core.errors import AmbiguousCorrectAnswerError
from matrix_grader.core.models import Cell, Column, GradingMethod, MatrixQuestion, Response, Row
from matrix_grader.grading.correct import correct_response


def _question(cells, method=GradingMethod.ALL, multiple=False):
    return MatrixQuestion(
        id="derive",
        rows=(Row(0, "A"), Row(1, "B", position=1)),
        columns=(Column(0, "X"), Column(1, "Y", position=1), Column(2, "Z", position=2)),
        cells=cells,
        grading_method=method,
        multiple=multiple,
    )


class TestCorrectResponse:
    """Tests for correct_response."""

    def test_correct_when_single_select_then_one_column_per_row(self, true_false_question):
        assert correct_response(true_false_question) == Response.single({"boil": "t", "ice": "f"})

    def test_correct_when_multi_select_then_all_correct_columns(self):
        q = _question(
            (Cell.flag(0, 0, True), Cell.flag(0, 2, True), Cell.flag(1, 1, True)),
            multiple=True,
        )
        assert correct_response(q) == Response.multiple({0: [0, 2], 1: [1]})

    def test_correct_when_weighted_then_positive_weights_only(self):
        q = _question(
            (
                Cell.weighted(0, 0, 40), Cell.weighted(0, 1, 60), Cell.weighted(0, 2, -30),
                Cell.weighted(1, 2, 100), Cell.weighted(1, 0, 0),
            ),
            method=GradingMethod.WEIGHTED,
            multiple=True,
        )
        assert correct_response(q) == Response.multiple({0: [0, 1], 1: [2]})

    def test_correct_when_multi_select_row_without_correct_then_empty_row(self):
        q = _question((Cell.flag(0, 0, True), Cell.flag(1, 0, False)), multiple=True)
        assert correct_response(q).selected(1) == frozenset()

    def test_correct_when_single_select_two_correct_then_raises(self):
        q = _question((Cell.flag(0, 0, True), Cell.flag(0, 1, True), Cell.flag(1, 0, True)))
        with pytest.raises(AmbiguousCorrectAnswerError) as excinfo:
            correct_response(q)
        assert excinfo.value.row_id == 0
        assert excinfo.value.count == 2

    def test_correct_when_single_select_no_correct_then_raises(self):
        q = _question((Cell.flag(0, 0, True), Cell.flag(1, 0, False)))
        with pytest.raises(AmbiguousCorrectAnswerError, match="row 1 has 0 correct"):
            correct_response(q)
