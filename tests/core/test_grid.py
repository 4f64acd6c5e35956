"""
Unit Tests for Grid Models

Tests for Row, Column, Cell and cell_key.
"""

import pytest

from matrix_grader.core.models.grid import Cell, Column, Row, cell_key, validate_identity


class TestCellKey:
    """Tests for cell_key function."""

    def test_cell_key_when_ints_then_formats_row_and_column(self):
        """Integer ids produce cell{row}_{column}."""
        assert cell_key(2, 0) == "cell2_0"

    def test_cell_key_when_same_pair_then_stable(self):
        """Same pair yields the same key every time."""
        assert cell_key("a", 1) == cell_key("a", 1)

    def test_cell_key_when_pairs_differ_then_keys_differ(self):
        """Swapped or different pairs never collide."""
        keys = {cell_key(r, c) for r in (1, 12, "x-1") for c in (1, 21, "y")}
        assert len(keys) == 9

    def test_cell_key_when_cell_then_matches_property(self):
        """Cell.key delegates to cell_key."""
        assert Cell.flag(3, 1, True).key == "cell3_1"


class TestIdentity:
    """Tests for validate_identity."""

    @pytest.mark.parametrize("value", [0, 7, -1, "row-1", "A2"])
    def test_validate_identity_when_valid_then_passes(self, value):
        validate_identity(value, "row")

    @pytest.mark.parametrize("value", ["a_b", "", "with space", 1.5, None, True])
    def test_validate_identity_when_invalid_then_raises(self, value):
        with pytest.raises(ValueError, match="row id"):
            validate_identity(value, "row")

    def test_row_when_underscore_id_then_raises(self):
        """Underscores would make cell keys ambiguous."""
        with pytest.raises(ValueError):
            Row("a_b", "Statement")


class TestRowAndColumn:
    """Tests for Row and Column dataclasses."""

    def test_label_when_short_text_then_uses_short_text(self):
        assert Row(0, "Short", long_text="Long form").label == "Short"

    def test_label_when_no_short_text_then_falls_back_to_long(self):
        assert Column(0, "", long_text="Long form").label == "Long form"

    def test_init_when_frozen_then_immutable(self):
        row = Row(0, "Statement")
        with pytest.raises(AttributeError):
            row.short_text = "Changed"  # type: ignore


class TestCell:
    """Tests for Cell dataclass."""

    def test_flag_when_correct_then_positive_weight(self):
        cell = Cell.flag(0, 0, True)
        assert cell.weight == 1.0
        assert cell.is_correct

    def test_flag_when_incorrect_then_zero_weight(self):
        cell = Cell.flag(0, 1, False)
        assert cell.weight == 0.0
        assert not cell.is_correct

    def test_weighted_when_negative_then_not_correct(self):
        assert not Cell.weighted(0, 2, -25).is_correct

    def test_weighted_when_positive_then_correct(self):
        assert Cell.weighted(0, 2, 40).is_correct

    @pytest.mark.parametrize("weight", [-100.5, 101, 250])
    def test_init_when_weight_out_of_range_then_raises(self, weight):
        with pytest.raises(ValueError, match="Cell weight"):
            Cell.weighted(0, 0, weight)

    @pytest.mark.parametrize("weight", [-100, 0, 100])
    def test_init_when_weight_on_bounds_then_creates_cell(self, weight):
        assert Cell.weighted(0, 0, weight).weight == float(weight)
