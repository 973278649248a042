"""
Ingestion Record Validation

Validates student-export records before they reach the chart pipeline.

A record must carry a ``student`` object and an ``assessments`` list. Any
record failing these checks is rejected here, so the chart core never sees
malformed input. Individual assessment fields are all optional and are not
checked beyond their container types.
"""

from __future__ import annotations

from typing import Any


REQUIRED_RECORD_FIELDS = ("student", "assessments")
OPTIONAL_ASSESSMENT_BLOCKS = ("celeration", "performance", "prosody")


class ValidationError(Exception):
    """Raised when an ingestion record fails validation."""

    def __init__(self, message: str, path: str = "", errors: list[str] | None = None):
        super().__init__(message)
        self.path = path
        self.errors = errors or []


def validate_student_record(data: Any) -> None:
    """
    Validate a student-export record.

    Args:
        data: Parsed JSON payload

    Raises:
        ValidationError: If the record is not a dict, lacks ``student`` or
            ``assessments``, or has blocks of the wrong container type
    """
    if not isinstance(data, dict):
        raise ValidationError(
            f"Record must be an object, got {type(data).__name__}",
            path="",
        )

    missing = [f for f in REQUIRED_RECORD_FIELDS if data.get(f) is None]
    if missing:
        raise ValidationError(
            f"Missing required fields: {missing}",
            path="",
            errors=[f"Missing field: {f}" for f in missing],
        )

    student = data["student"]
    if not isinstance(student, dict):
        raise ValidationError("student must be an object", path="student")

    name = student.get("name")
    if name is not None and not isinstance(name, str):
        raise ValidationError(f"Invalid student name: {name!r}", path="student.name")

    assessments = data["assessments"]
    if not isinstance(assessments, list):
        raise ValidationError("assessments must be a list", path="assessments")

    errors: list[str] = []
    for i, assessment in enumerate(assessments):
        _validate_assessment(assessment, f"assessments[{i}]", errors)
    if errors:
        raise ValidationError(
            f"Invalid assessments: {errors[0]}" + (f" (+{len(errors) - 1} more)" if len(errors) > 1 else ""),
            path="assessments",
            errors=errors,
        )

    summary = data.get("summary")
    if summary is not None and not isinstance(summary, dict):
        raise ValidationError("summary must be an object", path="summary")


def _validate_assessment(data: Any, path: str, errors: list[str]) -> None:
    """Collect container-type errors for one assessment."""
    if not isinstance(data, dict):
        errors.append(f"{path} must be an object")
        return
    for block in OPTIONAL_ASSESSMENT_BLOCKS:
        value = data.get(block)
        if value is not None and not isinstance(value, dict):
            errors.append(f"{path}.{block} must be an object")
