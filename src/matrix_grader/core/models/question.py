"""
Module: question

Purpose:
    Provides the MatrixQuestion dataclass - the authored grid (rows,
    columns, cells) plus the grading method and the multiple-selection
    flag. Immutable after construction; lookup indexes are cached
    properties derived from the frozen fields.

Key Functions:
    - MatrixQuestion.cell(row_id, column_id): O(1) cell lookup
    - MatrixQuestion.cell_key(row_id, column_id): Flat cell key
    - MatrixQuestion.correct_columns(row_id): Columns earning credit
    - MatrixQuestion.restrict(response): Drop selections outside the grid
    - MatrixQuestion.is_weighted / is_kprime / allows_multiple

Dependencies:
    - dataclasses (std)
    - functools (std)
    - .grid, .grading_method, .response
    - ..errors.UnknownCellError

Used By:
    - grading (all modules)
    - core.utils.serialization
    - core.schemas.validator
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import cached_property
from typing import Dict, FrozenSet, Optional, Tuple

from ..errors import UnknownCellError
from .grading_method import GradingMethod
from .grid import Cell, Column, Identity, Row, cell_key
from .response import Response

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MatrixQuestion:
    """
    Matrix question definition (immutable).

    The question exclusively owns its rows, columns and cells. Rows and
    columns are stored sorted by position; cells are stored as given and
    indexed by (row_id, column_id) on first use.

    Attributes:
        id: Question identifier
        rows: Statement rows
        columns: Response columns shared by all rows
        cells: Authored cells (a grid may be sparse)
        grading_method: How rows are scored and combined
        multiple: Whether a row may have more than one selected column
        text: Optional question stem

    Invariants:
        - Row ids are unique, also in their string form (same for columns)
        - Every cell references a known row and column, at most once
        - grading_method WEIGHTED implies multiple

    Example:
        >>> q = MatrixQuestion(
        ...     id="q1",
        ...     rows=(Row(0, "Water boils at 100°C"),),
        ...     columns=(Column(0, "True"), Column(1, "False")),
        ...     cells=(Cell.flag(0, 0, True), Cell.flag(0, 1, False)),
        ...     grading_method=GradingMethod.KPRIME,
        ...     multiple=False,
        ... )
        >>> q.correct_columns(0)
        frozenset({0})
    """

    id: str
    rows: Tuple[Row, ...]
    columns: Tuple[Column, ...]
    cells: Tuple[Cell, ...] = ()
    grading_method: GradingMethod = GradingMethod.KPRIME
    multiple: bool = False
    text: str = ""

    def __post_init__(self) -> None:
        """Validate and order the grid on construction."""
        object.__setattr__(self, "grading_method", GradingMethod(self.grading_method))
        object.__setattr__(
            self, "rows", tuple(sorted(self.rows, key=lambda r: r.position))
        )
        object.__setattr__(
            self, "columns", tuple(sorted(self.columns, key=lambda c: c.position))
        )
        object.__setattr__(self, "cells", tuple(self.cells))

        _check_unique([r.id for r in self.rows], "row", self.id)
        _check_unique([c.id for c in self.columns], "column", self.id)

        row_ids = {r.id for r in self.rows}
        column_ids = {c.id for c in self.columns}
        seen = set()
        for cell in self.cells:
            if cell.row_id not in row_ids or cell.column_id not in column_ids:
                raise ValueError(
                    f"Cell ({cell.row_id!r}, {cell.column_id!r}) is outside the "
                    f"grid of question {self.id!r}"
                )
            pair = (cell.row_id, cell.column_id)
            if pair in seen:
                raise ValueError(f"Duplicate cell {pair!r} in question {self.id!r}")
            seen.add(pair)

        if self.grading_method is GradingMethod.WEIGHTED and not self.multiple:
            raise ValueError(
                f"Question {self.id!r}: weighted grading requires multiple answers"
            )

    # ─────────────────────────────────────────────────────────────────────────
    # Policy Queries
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def is_weighted(self) -> bool:
        """True for the weighted grading method."""
        return self.grading_method is GradingMethod.WEIGHTED

    @property
    def is_kprime(self) -> bool:
        """True for the Kprime all-or-nothing method."""
        return self.grading_method is GradingMethod.KPRIME

    @property
    def allows_multiple(self) -> bool:
        """True when rows accept several selected columns."""
        return self.multiple

    # ─────────────────────────────────────────────────────────────────────────
    # Cached Indexes (derived from frozen fields)
    # ─────────────────────────────────────────────────────────────────────────

    @cached_property
    def _cell_index(self) -> Dict[Tuple[Identity, Identity], Cell]:
        return {(c.row_id, c.column_id): c for c in self.cells}

    @cached_property
    def _row_index(self) -> Dict[Identity, Row]:
        return {r.id: r for r in self.rows}

    @cached_property
    def _column_index(self) -> Dict[Identity, Column]:
        return {c.id: c for c in self.columns}

    @cached_property
    def _cells_by_row(self) -> Dict[Identity, Tuple[Cell, ...]]:
        grouped: Dict[Identity, list] = {r.id: [] for r in self.rows}
        for cell in self.cells:
            grouped[cell.row_id].append(cell)
        return {row_id: tuple(cells) for row_id, cells in grouped.items()}

    @cached_property
    def row_ids(self) -> Tuple[Identity, ...]:
        """Row ids in display order."""
        return tuple(r.id for r in self.rows)

    @cached_property
    def column_ids(self) -> Tuple[Identity, ...]:
        """Column ids in display order."""
        return tuple(c.id for c in self.columns)

    # ─────────────────────────────────────────────────────────────────────────
    # Query Methods
    # ─────────────────────────────────────────────────────────────────────────

    @staticmethod
    def cell_key(row_id: Identity, column_id: Identity) -> str:
        """Flat key of a cell, see grid.cell_key()."""
        return cell_key(row_id, column_id)

    def cell(self, row_id: Identity, column_id: Identity) -> Cell:
        """
        Look up an authored cell.

        Raises:
            UnknownCellError: If the pair was never authored
        """
        try:
            return self._cell_index[(row_id, column_id)]
        except KeyError:
            raise UnknownCellError(row_id, column_id) from None

    def find_cell(self, row_id: Identity, column_id: Identity) -> Optional[Cell]:
        """Look up an authored cell, None if absent."""
        return self._cell_index.get((row_id, column_id))

    def get_row(self, row_id: Identity) -> Optional[Row]:
        """Find a row by id."""
        return self._row_index.get(row_id)

    def get_column(self, column_id: Identity) -> Optional[Column]:
        """Find a column by id."""
        return self._column_index.get(column_id)

    def in_grid(self, row_id: Identity, column_id: Identity) -> bool:
        """True when both ids belong to this question (authored or not)."""
        return row_id in self._row_index and column_id in self._column_index

    def row_cells(self, row_id: Identity) -> Tuple[Cell, ...]:
        """Authored cells of a row, in authoring order."""
        return self._cells_by_row.get(row_id, ())

    def has_cells(self, row_id: Identity) -> bool:
        """True when at least one cell of the row was authored."""
        return bool(self._cells_by_row.get(row_id))

    def correct_columns(self, row_id: Identity) -> FrozenSet[Identity]:
        """Columns whose cell earns credit in this row."""
        return frozenset(c.column_id for c in self.row_cells(row_id) if c.is_correct)

    def restrict(self, response: Response) -> Response:
        """
        Drop selections that reference rows or columns outside the grid.

        Stale client data must not break grading, so unknown selections are
        ignored and logged rather than raised.

        Args:
            response: Candidate response

        Returns:
            Response containing only in-grid selections
        """
        kept: Dict[Identity, set] = {}
        for row_id, column_id in response.iter_cells():
            if self.in_grid(row_id, column_id):
                kept.setdefault(row_id, set()).add(column_id)
            else:
                logger.debug(
                    f"Ignoring selection ({row_id!r}, {column_id!r}) "
                    f"outside question {self.id!r}"
                )
        return Response.multiple(kept)

    def __repr__(self) -> str:
        """Concise representation for debugging."""
        return (
            f"MatrixQuestion({self.id!r}, {len(self.rows)}x{len(self.columns)}, "
            f"method={self.grading_method.value}, multiple={self.multiple})"
        )


def _check_unique(ids: list, what: str, question_id: str) -> None:
    """Reject duplicate ids, including ids that collide as strings (1 vs "1")."""
    if len(set(ids)) != len(ids):
        raise ValueError(f"Duplicate {what} ids in question {question_id!r}: {ids}")
    as_text = [str(i) for i in ids]
    if len(set(as_text)) != len(as_text):
        raise ValueError(
            f"{what.capitalize()} ids of question {question_id!r} collide "
            f"as text: {ids}"
        )
