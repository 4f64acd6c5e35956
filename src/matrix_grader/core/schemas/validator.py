"""
Schema Validation Utilities

Validates authored matrix question data before it reaches the grading
engine.

Two layers:
- `validate_question()` checks the dict/JSON form: required fields,
  types, the weighted/multiple rule and cell references. With
  ``strict=True`` the data is also checked against question.schema.json
  using jsonschema.
- `check_authoring()` / `validate_authoring()` check a built
  MatrixQuestion for authoring defects the engine tolerates but students
  should never see: an empty grid, weighted rows not adding up to 100%,
  single-select rows without exactly one correct column, authored
  multi-select rows with no correct column.
"""

from __future__ import annotations

import json
import math
from pathlib import Path
from typing import Any

import jsonschema

from ..models.grading_method import GradingMethod
from ..models.grid import validate_identity
from ..models.question import MatrixQuestion


# Schema version constants
QUESTION_SCHEMA_VERSION = 1

WEIGHT_SUM_TARGET = 100.0

_SCHEMAS: dict[str, dict] = {}


def _load_schema(name: str) -> dict:
    """Load a schema from the schemas directory."""
    if name not in _SCHEMAS:
        schema_path = Path(__file__).parent / f"{name}.schema.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")
        with open(schema_path, "r", encoding="utf-8") as f:
            _SCHEMAS[name] = json.load(f)
    return _SCHEMAS[name]


class ValidationError(Exception):
    """Raised when question data fails validation."""

    def __init__(self, message: str, path: str = "", errors: list[str] | None = None):
        super().__init__(message)
        self.path = path
        self.errors = errors or []


# ─────────────────────────────────────────────────────────────────────────────
# Dict / JSON Validation
# ─────────────────────────────────────────────────────────────────────────────

def validate_question(data: dict[str, Any], *, strict: bool = False) -> None:
    """
    Validate question data in dict form.

    Args:
        data: Question dictionary to validate
        strict: If True, also validate against the JSON schema

    Raises:
        ValidationError: If data is invalid
    """
    required = ["schema_version", "id", "grading_method", "multiple", "rows", "columns"]
    missing = [f for f in required if f not in data]
    if missing:
        raise ValidationError(
            f"Missing required fields: {missing}",
            path="",
            errors=[f"Missing field: {f}" for f in missing]
        )

    version = data.get("schema_version")
    if version != QUESTION_SCHEMA_VERSION:
        raise ValidationError(
            f"Unsupported question schema version: {version} (expected {QUESTION_SCHEMA_VERSION})",
            path="schema_version"
        )

    method = data.get("grading_method")
    if method not in {m.value for m in GradingMethod}:
        raise ValidationError(
            f"Invalid grading_method: {method!r}",
            path="grading_method"
        )

    multiple = data.get("multiple")
    if not isinstance(multiple, bool):
        raise ValidationError(
            f"multiple must be a boolean: {multiple!r}",
            path="multiple"
        )
    if method == GradingMethod.WEIGHTED.value and not multiple:
        raise ValidationError(
            "Weighted grading requires multiple answers to be allowed",
            path="multiple"
        )

    row_ids = _validate_entries(data.get("rows"), "rows")
    column_ids = _validate_entries(data.get("columns"), "columns")
    _validate_cells(data.get("cells", []), row_ids, column_ids)

    if strict:
        schema = _load_schema("question")
        try:
            jsonschema.validate(data, schema)
        except jsonschema.ValidationError as e:
            raise ValidationError(
                f"Schema validation failed: {e.message}",
                path=".".join(str(p) for p in e.absolute_path),
                errors=[e.message]
            )


def _validate_entries(entries: Any, path: str) -> set:
    """Validate the rows or columns list and return its ids."""
    if not isinstance(entries, list):
        raise ValidationError(f"{path} must be a list", path=path)

    ids = set()
    for i, entry in enumerate(entries):
        entry_path = f"{path}[{i}]"
        if not isinstance(entry, dict) or "id" not in entry:
            raise ValidationError(f"{entry_path} must be a dict with an id", path=entry_path)
        try:
            validate_identity(entry["id"], path.rstrip("s"))
        except ValueError as e:
            raise ValidationError(str(e), path=f"{entry_path}.id")
        if not isinstance(entry.get("short_text", ""), str):
            raise ValidationError("short_text must be a string", path=f"{entry_path}.short_text")
        if entry["id"] in ids:
            raise ValidationError(f"Duplicate id {entry['id']!r}", path=f"{entry_path}.id")
        ids.add(entry["id"])
    return ids


def _validate_cells(cells: Any, row_ids: set, column_ids: set) -> None:
    """Validate cell entries against the known row and column ids."""
    if not isinstance(cells, list):
        raise ValidationError("cells must be a list", path="cells")

    for i, cell in enumerate(cells):
        path = f"cells[{i}]"
        if not isinstance(cell, dict):
            raise ValidationError(f"{path} must be a dict", path=path)
        missing = [f for f in ("row", "column", "weight") if f not in cell]
        if missing:
            raise ValidationError(
                f"Cell missing required fields: {missing}",
                path=path,
                errors=[f"Missing field: {f}" for f in missing]
            )
        if cell["row"] not in row_ids:
            raise ValidationError(f"Unknown row {cell['row']!r}", path=f"{path}.row")
        if cell["column"] not in column_ids:
            raise ValidationError(f"Unknown column {cell['column']!r}", path=f"{path}.column")
        weight = cell["weight"]
        if isinstance(weight, bool) or not isinstance(weight, (int, float)) or not -100 <= weight <= 100:
            raise ValidationError(
                f"Invalid weight: {weight!r} (must be a number in [-100, 100])",
                path=f"{path}.weight"
            )


# ─────────────────────────────────────────────────────────────────────────────
# Authoring Checks
# ─────────────────────────────────────────────────────────────────────────────

def check_authoring(question: MatrixQuestion) -> list[str]:
    """
    List authoring defects of a question.

    The grading engine tolerates all of these; this check is for the
    authoring side, before a question is published.

    Args:
        question: Question to inspect

    Returns:
        Human-readable issues, empty when the question is sound
    """
    issues = []
    if not question.rows or not question.columns:
        issues.append("You must define at least a 1 x 1 matrix")
        return issues

    for row in question.rows:
        count = len(question.correct_columns(row.id))
        if question.is_weighted:
            positive = sum(c.weight for c in question.row_cells(row.id) if c.weight > 0)
            if not math.isclose(positive, WEIGHT_SUM_TARGET):
                issues.append(
                    f"Row {row.id!r}: positive weights add up to {positive:g}%, not 100%"
                )
        elif not question.allows_multiple:
            # Also for NONE: correct_response() needs one column per row.
            if count != 1:
                issues.append(
                    f"Row {row.id!r}: single-select row has {count} correct columns"
                )
        elif (
            question.grading_method is not GradingMethod.NONE
            and question.has_cells(row.id)
            and count == 0
        ):
            issues.append(f"Row {row.id!r}: no correct column marked")
    return issues


def validate_authoring(question: MatrixQuestion) -> None:
    """
    Raise when a question has authoring defects.

    Raises:
        ValidationError: With every issue from check_authoring() in errors
    """
    issues = check_authoring(question)
    if issues:
        raise ValidationError(
            f"Question {question.id!r} has {len(issues)} authoring issue(s)",
            path=question.id,
            errors=issues,
        )
