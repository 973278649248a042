"""
Serialization Utilities

Converts student-export JSON records to and from the core models, and loads
export files from disk.

Validation runs before deserialization, so any record that makes it into a
Student has a ``student`` object and an ``assessments`` list. Assessments
are kept in file order; nothing here sorts or deduplicates them.
"""

from __future__ import annotations

import json
import logging
import time
from pathlib import Path
from typing import Any, Callable, Iterable, List, Optional

from ..models.assessments import Assessment
from ..models.students import Student, StudentSummary
from ..schemas.validator import validate_student_record, ValidationError

logger = logging.getLogger(__name__)


class LoaderError(Exception):
    """Error reading a student-export file."""
    pass


def _generated_student_id() -> str:
    """Fallback id for records without one (``student-<epoch ms>``)."""
    return f"student-{int(time.time() * 1000)}"


# ─────────────────────────────────────────────────────────────────────────────
# Student Serialization
# ─────────────────────────────────────────────────────────────────────────────

def serialize_student(student: Student) -> dict[str, Any]:
    """
    Serialize a Student back to the export format.

    Color is a display concern of the roster and is not exported.

    Args:
        student: Student to serialize

    Returns:
        Dictionary suitable for JSON serialization
    """
    d: dict[str, Any] = {
        "student": {"id": student.id, "name": student.name},
        "assessments": [a.to_dict() for a in student.assessments],
    }
    if student.summary is not None:
        d["summary"] = student.summary.to_dict()
    return d


def deserialize_student(
    data: dict[str, Any],
    *,
    validate: bool = True,
    id_factory: Optional[Callable[[], str]] = None,
) -> Student:
    """
    Deserialize a Student from an export record.

    Args:
        data: Parsed JSON record
        validate: Whether to validate the record first
        id_factory: Produces an id when the record has none
            (default ``student-<epoch ms>``)

    Returns:
        Student with default color; the roster assigns the real one

    Raises:
        ValidationError: If validate=True and the record is malformed
    """
    if validate:
        validate_student_record(data)

    raw_student = data["student"]
    student_id = raw_student.get("id")
    if student_id in (None, ""):
        student_id = (id_factory or _generated_student_id)()
        logger.warning(f"Record has no student id, using {student_id}")

    raw_summary = data.get("summary")
    summary = StudentSummary.from_dict(raw_summary) if isinstance(raw_summary, dict) else None

    return Student(
        id=str(student_id),
        name=raw_student.get("name") or str(student_id),
        assessments=tuple(Assessment.from_dict(a) for a in data["assessments"]),
        summary=summary,
    )


# ─────────────────────────────────────────────────────────────────────────────
# File Loading
# ─────────────────────────────────────────────────────────────────────────────

def load_student_file(path: Path) -> Student:
    """
    Load one student-export JSON file.

    Args:
        path: Path to the JSON file

    Returns:
        Deserialized Student

    Raises:
        LoaderError: If the file cannot be read or is not valid JSON
        ValidationError: If the record is malformed
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise LoaderError(f"Cannot read {path}: {e}") from e
    except UnicodeDecodeError as e:
        raise LoaderError(f"{path} is not UTF-8 text: {e}") from e
    except json.JSONDecodeError as e:
        raise LoaderError(f"Invalid JSON in {path}: {e}") from e

    student = deserialize_student(data)
    logger.info(f"Loaded {student.name} ({student.assessment_count} assessments) from {path.name}")
    return student


def load_student_files(paths: Iterable[Path]) -> List[Student]:
    """
    Load several export files, in order.

    Args:
        paths: Files to load

    Returns:
        Students in the order given

    Raises:
        LoaderError: On the first unreadable file
        ValidationError: On the first malformed record
    """
    return [load_student_file(Path(p)) for p in paths]


__all__ = [
    "LoaderError",
    "ValidationError",
    "serialize_student",
    "deserialize_student",
    "load_student_file",
    "load_student_files",
]
