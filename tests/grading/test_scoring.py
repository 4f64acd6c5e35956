"""
Unit Tests for Row Scoring and Aggregation
"""

import pytest

from matrix_grader.core.models import (
    Cell,
    Column,
    GradeState,
    GradingMethod,
    MatrixQuestion,
    Response,
    Row,
)
from matrix_grader.grading.config import GradingConfig
from matrix_grader.grading.scoring import (
    classify_fraction,
    count_rows_right,
    grade_response,
    grade_rows,
    score_row,
)


def _one_row(method, cells, multiple=True):
    """Single-row question over columns 0..3."""
    return MatrixQuestion(
        id="row",
        rows=(Row(0, "Statement"),),
        columns=tuple(Column(c, f"C{c}", position=c) for c in range(4)),
        cells=cells,
        grading_method=method,
        multiple=multiple,
    )


TWO_CORRECT = tuple(Cell.flag(0, c, c in (0, 1)) for c in range(4))


class TestRowScorers:
    """Per-row predicates for each grading method."""

    @pytest.mark.parametrize("selected, expected", [
        ({0}, 1.0),
        ({0, 1}, 1.0),
        ({0, 2}, 0.0),
        ({2}, 0.0),
        (set(), 0.0),
    ])
    def test_any_when_selection_then_expected(self, selected, expected):
        q = _one_row(GradingMethod.ANY, TWO_CORRECT)
        assert score_row(q, 0, frozenset(selected)) == expected

    @pytest.mark.parametrize("selected, expected", [
        ({0, 1}, 1.0),
        ({0}, 0.0),
        ({0, 1, 2}, 0.0),
        (set(), 0.0),
    ])
    def test_all_when_selection_then_expected(self, selected, expected):
        q = _one_row(GradingMethod.ALL, TWO_CORRECT)
        assert score_row(q, 0, frozenset(selected)) == expected

    def test_all_when_row_has_no_correct_cells_then_empty_is_right(self):
        """Selecting nothing is the right answer when no cell is correct."""
        q = _one_row(GradingMethod.ALL, tuple(Cell.flag(0, c, False) for c in range(4)))
        assert score_row(q, 0, frozenset()) == 1.0
        assert score_row(q, 0, frozenset({1})) == 0.0

    def test_kprime_when_selection_then_uses_all_predicate(self):
        q = _one_row(GradingMethod.KPRIME, TWO_CORRECT)
        assert score_row(q, 0, frozenset({0, 1})) == 1.0
        assert score_row(q, 0, frozenset({0})) == 0.0

    def test_none_when_any_selection_then_no_row_fraction(self):
        q = _one_row(GradingMethod.NONE, TWO_CORRECT)
        assert score_row(q, 0, frozenset({0})) is None

    def test_weighted_when_partial_selection_then_weight_fraction(self):
        cells = (Cell.weighted(0, 0, 40), Cell.weighted(0, 1, 60), Cell.weighted(0, 2, -50))
        q = _one_row(GradingMethod.WEIGHTED, cells)
        assert score_row(q, 0, frozenset({0})) == pytest.approx(0.40)
        assert score_row(q, 0, frozenset({0, 1})) == pytest.approx(1.0)
        assert score_row(q, 0, frozenset({1, 2})) == pytest.approx(0.10)

    def test_weighted_when_negative_total_then_clamped_to_zero(self):
        cells = (Cell.weighted(0, 0, 100), Cell.weighted(0, 1, -100))
        q = _one_row(GradingMethod.WEIGHTED, cells)
        assert score_row(q, 0, frozenset({1})) == 0.0

    def test_weighted_when_malformed_sum_then_clamped_to_one(self):
        """Positive weights over 100 are tolerated, not fixed."""
        cells = (Cell.weighted(0, 0, 80), Cell.weighted(0, 1, 70))
        q = _one_row(GradingMethod.WEIGHTED, cells)
        assert score_row(q, 0, frozenset({0, 1})) == 1.0
        assert score_row(q, 0, frozenset({1})) == pytest.approx(0.70)

    def test_weighted_when_decimal_weights_then_exact_full_credit(self):
        """0.1 + 65.24 + 34.66 is 99.99999999999999 in binary floating point."""
        cells = (
            Cell.weighted(0, 0, 0.1), Cell.weighted(0, 1, 65.24),
            Cell.weighted(0, 2, 34.66), Cell.weighted(0, 3, -25),
        )
        q = _one_row(GradingMethod.WEIGHTED, cells)
        assert score_row(q, 0, frozenset({0, 1, 2})) == 1.0
        assert grade_response(q, Response.multiple({0: [0, 1, 2]})).pair == (1.0, GradeState.CORRECT)

    def test_score_row_when_unauthored_cell_selected_then_ignored(self):
        """Sparse grids: an unauthored cell is neither credit nor error."""
        cells = (Cell.flag(0, 0, True), Cell.flag(0, 1, False))
        q = _one_row(GradingMethod.ANY, cells)
        assert score_row(q, 0, frozenset({0, 3})) == 1.0
        assert score_row(q, 0, frozenset({3})) == 0.0

    def test_score_row_when_row_has_no_cells_then_none(self):
        q = _one_row(GradingMethod.ALL, ())
        assert score_row(q, 0, frozenset({0})) is None


class TestAggregation:
    """Question-level aggregation."""

    @pytest.mark.parametrize("method", [GradingMethod.ANY, GradingMethod.ALL, GradingMethod.WEIGHTED])
    def test_grade_when_half_rows_right_then_half(self, make_question, answer_partial, method):
        q = make_question(method, multiple=True)
        result = grade_response(q, answer_partial(q))
        assert result.pair == (0.5, GradeState.PARTIAL)

    @pytest.mark.parametrize("multiple", [True, False])
    def test_kprime_when_one_row_wrong_then_zero(self, make_question, multiple):
        q = make_question(GradingMethod.KPRIME, multiple=multiple)
        response = Response.multiple({0: [0], 1: [0], 2: [0], 3: [1]})
        assert grade_response(q, response).pair == (0.0, GradeState.WRONG)

    def test_kprime_when_all_rows_right_then_one(self, make_question, answer_correct):
        q = make_question(GradingMethod.KPRIME)
        assert grade_response(q, answer_correct(q)).pair == (1.0, GradeState.CORRECT)

    def test_grade_when_unauthored_row_then_excluded_from_mean(self):
        q = MatrixQuestion(
            id="sparse",
            rows=(Row(0, "A"), Row(1, "B"), Row(2, "Unauthored")),
            columns=(Column(0, "Yes"), Column(1, "No")),
            cells=(
                Cell.flag(0, 0, True), Cell.flag(0, 1, False),
                Cell.flag(1, 0, True), Cell.flag(1, 1, False),
            ),
            grading_method=GradingMethod.ALL,
            multiple=False,
        )
        result = grade_response(q, Response.single({0: 0, 1: 1, 2: 0}))
        assert result.fraction == 0.5
        assert result.rows_graded == 2
        assert result.get_row(2).fraction is None

    def test_grade_when_no_authored_rows_then_zero(self, caplog):
        q = _one_row(GradingMethod.ALL, ())
        result = grade_response(q, Response.single({0: 0}))
        assert result.pair == (0.0, GradeState.WRONG)
        assert "no authored rows" in caplog.text

    def test_none_when_graded_then_configured_fraction(self, make_question, answer_incorrect):
        q = make_question(GradingMethod.NONE, multiple=True)
        assert grade_response(q, answer_incorrect(q)).pair == (1.0, GradeState.CORRECT)

        config = GradingConfig(ungraded_fraction=0.0)
        assert grade_response(q, answer_incorrect(q), config=config).pair == (0.0, GradeState.WRONG)

    def test_grade_when_unknown_selections_then_ignored(self, make_question, answer_correct):
        q = make_question(GradingMethod.ALL, multiple=True)
        response = Response.multiple({**answer_correct(q).selections, 7: frozenset({0})})
        assert grade_response(q, response).fraction == 1.0

    def test_grade_when_called_twice_then_fresh_equal_results(self, make_question, answer_partial):
        q = make_question(GradingMethod.ANY, multiple=True)
        first = grade_response(q, answer_partial(q))
        second = grade_response(q, answer_partial(q))
        assert first == second
        assert first is not second


class TestGradeRows:
    """Per-row diagnostics."""

    def test_grade_rows_when_wrong_selection_then_missed_and_wrong(self, make_question):
        q = make_question(GradingMethod.ALL, multiple=True)
        rows = grade_rows(q, Response.multiple({0: [0, 2]}))

        assert [r.row_id for r in rows] == [0, 1, 2, 3]
        assert rows[0].wrong == frozenset({2})
        assert rows[1].missed == frozenset({0})
        assert rows[0].feedback == "Feedback 0"

    def test_grade_rows_when_single_select_multiple_choices_then_warns(self, make_question, caplog):
        q = make_question(GradingMethod.ALL, multiple=False)
        rows = grade_rows(q, Response.multiple({0: [0, 1]}))
        assert rows[0].fraction == 0.0
        assert "single-select row 0" in caplog.text


class TestClassifyFraction:
    """Fraction -> state mapping."""

    @pytest.mark.parametrize("fraction, state", [
        (1.0, GradeState.CORRECT),
        (0.0, GradeState.WRONG),
        (0.5, GradeState.PARTIAL),
        (0.999, GradeState.PARTIAL),
        (0.001, GradeState.PARTIAL),
    ])
    def test_classify_when_default_config_then_exact_boundaries(self, fraction, state):
        assert classify_fraction(fraction) is state

    def test_classify_when_tolerance_then_band_applies(self):
        config = GradingConfig(state_tolerance=0.01)
        assert classify_fraction(0.995, config) is GradeState.CORRECT
        assert classify_fraction(0.005, config) is GradeState.WRONG
        assert classify_fraction(0.5, config) is GradeState.PARTIAL


class TestCountRowsRight:
    """Tests for count_rows_right."""

    def test_count_when_partial_then_right_and_total(self, make_question, answer_partial):
        q = make_question(GradingMethod.KPRIME)
        assert count_rows_right(q, answer_partial(q)) == (2, 4)

    def test_count_when_none_method_then_no_graded_rows(self, make_question, answer_correct):
        q = make_question(GradingMethod.NONE, multiple=True)
        assert count_rows_right(q, answer_correct(q)) == (0, 0)
