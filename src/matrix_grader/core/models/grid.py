"""
Module: grid

Purpose:
    Provides the Row, Column and Cell dataclasses - the authored building
    blocks of a matrix question. Rows are statements being judged, columns
    are response options shared by every row, and cells carry the
    correctness/weight data at each (row, column) intersection.

Key Functions:
    - cell_key(row_id, column_id): Flat identifier for one grid cell
    - validate_identity(value, what): Check a row/column id is usable
    - Cell.flag(row_id, column_id, correct): Boolean-style cell
    - Cell.weighted(row_id, column_id, weight): Weighted cell

Dependencies:
    - dataclasses (std)
    - re (std)

Used By:
    - core.models.question.MatrixQuestion
    - core.utils.serialization
    - grading (all modules)
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Union

Identity = Union[int, str]

MIN_WEIGHT = -100.0
MAX_WEIGHT = 100.0

# Letters, digits and "-" only: keeps "cell{row}_{column}" unambiguous.
_TOKEN_RE = re.compile(r"^[A-Za-z0-9-]+$")


def validate_identity(value: Identity, what: str) -> None:
    """
    Validate a row or column identity.

    Args:
        value: Integer id or token string
        what: Name used in the error message ("row", "column")

    Raises:
        ValueError: If the id is neither an int nor a plain token
    """
    if isinstance(value, bool):
        raise ValueError(f"{what} id must not be a bool: {value!r}")
    if isinstance(value, int):
        return
    if isinstance(value, str) and _TOKEN_RE.match(value):
        return
    raise ValueError(
        f"{what} id must be an int or a token of letters, digits and '-': {value!r}"
    )


def cell_key(row_id: Identity, column_id: Identity) -> str:
    """
    Build the flat key addressing one cell.

    Stable for the same pair and distinct for distinct pairs, because ids
    never contain "_".

    Example:
        >>> cell_key(2, 0)
        'cell2_0'
    """
    return f"cell{row_id}_{column_id}"


@dataclass(frozen=True, slots=True)
class Row:
    """
    One statement of the matrix (immutable).

    Attributes:
        id: Stable identity, int or token string
        short_text: Label used in summaries
        long_text: Optional longer description
        feedback: Optional feedback shown for this row after grading
        position: Relative display order
    """

    id: Identity
    short_text: str
    long_text: str = ""
    feedback: str = ""
    position: int = 0

    def __post_init__(self) -> None:
        validate_identity(self.id, "row")

    @property
    def label(self) -> str:
        """Short text, falling back to the long form."""
        return self.short_text or self.long_text


@dataclass(frozen=True, slots=True)
class Column:
    """
    One response option shared by every row (immutable).

    Attributes:
        id: Stable identity, int or token string
        short_text: Label used in summaries
        long_text: Optional longer description
        position: Relative display order
    """

    id: Identity
    short_text: str
    long_text: str = ""
    position: int = 0

    def __post_init__(self) -> None:
        validate_identity(self.id, "column")

    @property
    def label(self) -> str:
        """Short text, falling back to the long form."""
        return self.short_text or self.long_text


@dataclass(frozen=True, slots=True)
class Cell:
    """
    Authored data for one (row, column) intersection.

    A single signed weight serves every grading method. Boolean methods
    (none/any/all/kprime) read it as a flag: a cell is correct iff its
    weight is strictly positive. The weighted method uses the weight as
    the credit, in percent of the row.

    Attributes:
        row_id: Owning row
        column_id: Owning column
        weight: Signed weight in [-100, 100]

    Invariants:
        - MIN_WEIGHT <= weight <= MAX_WEIGHT
        - Row sums are NOT checked here (see schemas.validator.check_authoring)

    Example:
        >>> Cell.flag(0, 1, True).is_correct
        True
        >>> Cell.weighted(0, 2, -25).is_correct
        False
    """

    row_id: Identity
    column_id: Identity
    weight: float = 0.0

    def __post_init__(self) -> None:
        """Validate cell on construction."""
        if not (MIN_WEIGHT <= self.weight <= MAX_WEIGHT):
            raise ValueError(
                f"Cell weight must be within [{MIN_WEIGHT:g}, {MAX_WEIGHT:g}]: "
                f"{self.weight} at ({self.row_id}, {self.column_id})"
            )

    # ─────────────────────────────────────────────────────────────────────────
    # Factory Methods
    # ─────────────────────────────────────────────────────────────────────────

    @classmethod
    def flag(cls, row_id: Identity, column_id: Identity, correct: bool) -> Cell:
        """Create a boolean cell (weight 1 when correct, 0 otherwise)."""
        return cls(row_id=row_id, column_id=column_id, weight=1.0 if correct else 0.0)

    @classmethod
    def weighted(cls, row_id: Identity, column_id: Identity, weight: float) -> Cell:
        """Create a weighted cell."""
        return cls(row_id=row_id, column_id=column_id, weight=float(weight))

    @property
    def is_correct(self) -> bool:
        """True when selecting this cell earns credit."""
        return self.weight > 0

    @property
    def key(self) -> str:
        """Flat key of this cell, see cell_key()."""
        return cell_key(self.row_id, self.column_id)
