"""
Utils Package

Serialization helpers for matrix models.
"""

from .serialization import (
    serialize_question,
    deserialize_question,
    load_question,
    response_to_form,
    response_from_form,
    grade_result_to_dict,
)

__all__ = [
    "serialize_question",
    "deserialize_question",
    "load_question",
    "response_to_form",
    "response_from_form",
    "grade_result_to_dict",
]
