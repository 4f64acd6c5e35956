"""
Serialization Utilities

Converts matrix models to and from the plain data exchanged with the
collaborators around the engine: the source of authored questions, the
form that submits responses, and the sink that displays or stores grades.

- `serialize_question` / `deserialize_question`: dict form of a question,
  validated by core.schemas before building the model
- `load_question`: read a question from a JSON file
- `response_to_form` / `response_from_form`: flat "cell{row}_{column}"
  form mapping, the only place flat keys are used
- `grade_result_to_dict`: JSON-ready grade result
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Mapping, Optional

from ..models.grading_method import GradingMethod
from ..models.grid import Cell, Column, Identity, Row, cell_key
from ..models.question import MatrixQuestion
from ..models.response import Response
from ..models.result import GradeResult
from ..schemas.validator import QUESTION_SCHEMA_VERSION, validate_question

logger = logging.getLogger(__name__)

CHECKED_VALUES = (True, 1, "1", "on", "true", "yes")


# ─────────────────────────────────────────────────────────────────────────────
# Question Serialization
# ─────────────────────────────────────────────────────────────────────────────

def serialize_question(question: MatrixQuestion) -> dict[str, Any]:
    """
    Serialize a MatrixQuestion to a dictionary.

    The output can be written to JSON and will pass schema validation.
    """
    data: dict[str, Any] = {
        "schema_version": QUESTION_SCHEMA_VERSION,
        "id": question.id,
        "grading_method": question.grading_method.value,
        "multiple": question.multiple,
        "rows": [
            {
                "id": r.id,
                "short_text": r.short_text,
                "long_text": r.long_text,
                "feedback": r.feedback,
                "position": r.position,
            }
            for r in question.rows
        ],
        "columns": [
            {
                "id": c.id,
                "short_text": c.short_text,
                "long_text": c.long_text,
                "position": c.position,
            }
            for c in question.columns
        ],
        "cells": [
            {"row": c.row_id, "column": c.column_id, "weight": c.weight}
            for c in question.cells
        ],
    }
    if question.text:
        data["text"] = question.text
    return data


def deserialize_question(
    data: dict[str, Any],
    *,
    validate: bool = True,
    strict: bool = False,
) -> MatrixQuestion:
    """
    Deserialize a MatrixQuestion from a dictionary.

    Missing positions default to list order.

    Args:
        data: Dictionary from JSON
        validate: Whether to validate the dict first
        strict: Also validate against the JSON schema

    Returns:
        MatrixQuestion instance

    Raises:
        ValidationError: If validate=True and data is invalid
        ValueError: If the model rejects the data
    """
    if validate:
        validate_question(data, strict=strict)

    rows = tuple(
        Row(
            id=r["id"],
            short_text=r.get("short_text", ""),
            long_text=r.get("long_text", ""),
            feedback=r.get("feedback", ""),
            position=r.get("position", i),
        )
        for i, r in enumerate(data["rows"])
    )
    columns = tuple(
        Column(
            id=c["id"],
            short_text=c.get("short_text", ""),
            long_text=c.get("long_text", ""),
            position=c.get("position", i),
        )
        for i, c in enumerate(data["columns"])
    )
    cells = tuple(
        Cell(row_id=c["row"], column_id=c["column"], weight=float(c["weight"]))
        for c in data.get("cells", [])
    )
    return MatrixQuestion(
        id=data["id"],
        rows=rows,
        columns=columns,
        cells=cells,
        grading_method=GradingMethod(data["grading_method"]),
        multiple=data["multiple"],
        text=data.get("text", ""),
    )


def load_question(path: Path, *, strict: bool = True) -> MatrixQuestion:
    """
    Load a question definition from a JSON file.

    Args:
        path: JSON file path
        strict: Validate against the JSON schema as well

    Returns:
        MatrixQuestion instance
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    question = deserialize_question(data, strict=strict)
    logger.debug(f"Loaded {question!r} from {path}")
    return question


# ─────────────────────────────────────────────────────────────────────────────
# Response Form Mapping
# ─────────────────────────────────────────────────────────────────────────────

def response_to_form(question: MatrixQuestion, response: Response) -> dict[str, str]:
    """
    Flatten a response into form data.

    Every in-grid selection becomes ``{cell_key(row, column): "on"}``.
    """
    restricted = question.restrict(response)
    return {
        cell_key(row_id, column_id): "on"
        for row_id in question.row_ids
        for column_id in question.column_ids
        if restricted.is_selected(row_id, column_id)
    }


def response_from_form(question: MatrixQuestion, form: Mapping[str, Any]) -> Response:
    """
    Build a response from flat form data.

    Accepts ``cell{row}_{column}`` keys with a checked value ("on", True,
    1, ...), and for single-select questions also ``cell{row}`` keys whose
    value is the selected column id. Keys that do not resolve against the
    question are logged and ignored.

    Args:
        question: Question the form was rendered for
        form: Submitted key/value pairs

    Returns:
        Response with the resolved selections
    """
    rows_by_text = {str(row_id): row_id for row_id in question.row_ids}
    columns_by_text = {str(column_id): column_id for column_id in question.column_ids}

    selections: dict[Identity, set] = {}
    for key, value in form.items():
        pair = _resolve_form_entry(key, value, rows_by_text, columns_by_text, question.multiple)
        if pair is None:
            logger.warning(f"Ignoring form entry {key!r}={value!r} for question {question.id!r}")
            continue
        if pair is _UNCHECKED:
            continue
        row_id, column_id = pair
        selections.setdefault(row_id, set()).add(column_id)
    return Response.multiple(selections)


_UNCHECKED = object()


def _resolve_form_entry(
    key: str,
    value: Any,
    rows_by_text: dict[str, Identity],
    columns_by_text: dict[str, Identity],
    multiple: bool,
) -> Optional[Any]:
    """Resolve one form entry to (row_id, column_id), _UNCHECKED or None."""
    if not key.startswith("cell"):
        return None
    rest = key[len("cell"):]

    if "_" in rest:
        row_text, column_text = rest.split("_", 1)
        if row_text not in rows_by_text or column_text not in columns_by_text:
            return None
        if value not in CHECKED_VALUES:
            return _UNCHECKED
        return rows_by_text[row_text], columns_by_text[column_text]

    if multiple or rest not in rows_by_text:
        return None
    if value is None or value == "":
        return _UNCHECKED
    column_text = str(value)
    if column_text not in columns_by_text:
        return None
    return rows_by_text[rest], columns_by_text[column_text]


# ─────────────────────────────────────────────────────────────────────────────
# Grade Results
# ─────────────────────────────────────────────────────────────────────────────

def grade_result_to_dict(result: GradeResult) -> dict[str, Any]:
    """Serialize a GradeResult for a display/storage sink."""
    return {
        "fraction": result.fraction,
        "state": result.state.value,
        "rows": [
            {
                "row": r.row_id,
                "fraction": r.fraction,
                "selected": sorted(r.selected, key=str),
                "correct": sorted(r.correct, key=str),
                "missed": sorted(r.missed, key=str),
                "wrong": sorted(r.wrong, key=str),
                "feedback": r.feedback,
            }
            for r in result.rows
        ],
    }
