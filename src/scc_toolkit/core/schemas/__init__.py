"""
Schemas Package

Validation for ingested student-export records.
"""

from .validator import validate_student_record, ValidationError

__all__ = [
    "validate_student_record",
    "ValidationError",
]
