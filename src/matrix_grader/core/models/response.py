"""
Module: response

Purpose:
    Provides the Response dataclass - one grading attempt's selected cells,
    held as a two-level mapping from row id to the set of selected column
    ids. Flat "cell{row}_{column}" keys exist only at the form boundary
    (see core.utils.serialization).

Key Functions:
    - Response.multiple(mapping): Build from row -> iterable of columns
    - Response.single(mapping): Build from row -> one column
    - Response.selected(row_id): Selected columns of a row
    - Response.choice(row_id): The single selected column, if exactly one

Dependencies:
    - dataclasses (std)
    - typing (std)

Used By:
    - core.models.question.MatrixQuestion.restrict
    - grading (all modules)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import FrozenSet, Iterable, Iterator, Mapping, Optional, Tuple

from .grid import Identity


@dataclass(frozen=True)
class Response:
    """
    Selected cells of one attempt (immutable).

    Rows with no selection are dropped on construction, so a response
    that lists a row with an empty set equals one that omits the row.
    Equality is therefore order-independent and ignores empty rows.

    Attributes:
        selections: Row id -> frozenset of selected column ids

    Example:
        >>> r = Response.multiple({0: [0, 1], 1: []})
        >>> r.selected(0)
        frozenset({0, 1})
        >>> r == Response.multiple({0: {1, 0}})
        True
    """

    selections: Mapping[Identity, FrozenSet[Identity]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Normalise selections to a read-only map of non-empty frozensets."""
        normalised = {
            row_id: frozenset(columns)
            for row_id, columns in self.selections.items()
            if columns
        }
        object.__setattr__(self, "selections", MappingProxyType(normalised))

    def __hash__(self) -> int:
        return hash(frozenset(self.selections.items()))

    # ─────────────────────────────────────────────────────────────────────────
    # Factory Methods
    # ─────────────────────────────────────────────────────────────────────────

    @classmethod
    def empty(cls) -> Response:
        """Response with nothing selected."""
        return cls()

    @classmethod
    def multiple(cls, mapping: Mapping[Identity, Iterable[Identity]]) -> Response:
        """
        Build a multi-select response.

        Args:
            mapping: Row id -> iterable of selected column ids

        Returns:
            Response with the given selections
        """
        return cls({row_id: frozenset(columns) for row_id, columns in mapping.items()})

    @classmethod
    def single(cls, mapping: Mapping[Identity, Optional[Identity]]) -> Response:
        """
        Build a single-select response.

        Args:
            mapping: Row id -> selected column id (None for no answer)

        Returns:
            Response with singleton selections
        """
        return cls({
            row_id: frozenset([column_id])
            for row_id, column_id in mapping.items()
            if column_id is not None
        })

    # ─────────────────────────────────────────────────────────────────────────
    # Query Methods
    # ─────────────────────────────────────────────────────────────────────────

    def selected(self, row_id: Identity) -> FrozenSet[Identity]:
        """Selected column ids for a row (empty when unanswered)."""
        return self.selections.get(row_id, frozenset())

    def choice(self, row_id: Identity) -> Optional[Identity]:
        """
        Single selected column of a row.

        Returns:
            The column id when exactly one is selected, else None
        """
        columns = self.selections.get(row_id, frozenset())
        if len(columns) == 1:
            return next(iter(columns))
        return None

    def is_selected(self, row_id: Identity, column_id: Identity) -> bool:
        """Check whether one cell is selected."""
        return column_id in self.selections.get(row_id, frozenset())

    def iter_cells(self) -> Iterator[Tuple[Identity, Identity]]:
        """Iterate over selected (row_id, column_id) pairs."""
        for row_id, columns in self.selections.items():
            for column_id in columns:
                yield row_id, column_id

    @property
    def row_ids(self) -> FrozenSet[Identity]:
        """Rows with at least one selection."""
        return frozenset(self.selections)

    @property
    def is_empty(self) -> bool:
        """True when nothing is selected."""
        return not self.selections

    def __len__(self) -> int:
        """Number of selected cells."""
        return sum(len(columns) for columns in self.selections.values())

    def __repr__(self) -> str:
        """Concise representation for debugging."""
        rows = ", ".join(
            f"{row_id!r}: {sorted(map(str, columns))}"
            for row_id, columns in self.selections.items()
        )
        return f"Response({{{rows}}})"
