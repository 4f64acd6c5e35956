"""
Schemas Package

JSON schema definition and validation utilities for authored questions.
"""

from .validator import (
    validate_question,
    check_authoring,
    validate_authoring,
    ValidationError,
    QUESTION_SCHEMA_VERSION,
)

__all__ = [
    "validate_question",
    "check_authoring",
    "validate_authoring",
    "ValidationError",
    "QUESTION_SCHEMA_VERSION",
]
