import json
import os
import pytest
import sys
from pathlib import Path

# Run Qt headless when no display is available.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

# Add src to sys.path so we can import scc_toolkit
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from scc_toolkit.core.models import (  # noqa: E402
    Assessment,
    CelerationData,
    PerformanceData,
    ProsodyData,
    Student,
    StudentSummary,
)


def _assessment(
    day,
    correct=None,
    errors=None,
    counting_time=None,
    *,
    wpm=None,
    accuracy=None,
    prosody=None,
    date=None,
    celeration=True,
):
    return Assessment(
        calendar_day=day,
        date=date,
        celeration=CelerationData(correct, errors, counting_time) if celeration else None,
        performance=PerformanceData(wpm, accuracy) if (wpm is not None or accuracy is not None) else None,
        prosody=ProsodyData(prosody) if prosody is not None else None,
    )


def _student(student_id="s1", name=None, assessments=(), summary=None, color="#06b6d4"):
    return Student(
        id=student_id,
        name=name or student_id.upper(),
        assessments=tuple(assessments),
        color=color,
        summary=summary,
    )


# Common test fixtures
@pytest.fixture
def make_assessment():
    """Factory for assessments: make_assessment(day, correct, errors, counting_time, ...)."""
    return _assessment


@pytest.fixture
def make_student():
    """Factory for students: make_student(id, name, assessments, summary)."""
    return _student


@pytest.fixture
def doubling_student():
    """Correct/min doubles every week: days [10, 17, 24], values [2, 4, 8]."""
    return _student(
        "ana",
        "Ana",
        [
            _assessment(10, 2.0, 1.0, 1.0, date="2024-01-10"),
            _assessment(17, 4.0, 0.5, 1.0, date="2024-01-17"),
            _assessment(24, 8.0, 0.25, 1.0, date="2024-01-24"),
        ],
        summary=StudentSummary(average_accuracy=92, average_wpm=110),
    )


@pytest.fixture
def student_record():
    """A valid export record as produced by the reading analyzer."""
    return {
        "student": {"id": "ana", "name": "Ana"},
        "assessments": [
            {
                "celeration": {
                    "calendarDay": 10,
                    "date": "2024-01-10",
                    "correctPerMinute": 2,
                    "errorsPerMinute": 1,
                    "countingTimeMin": 1,
                },
                "performance": {"wpm": 95, "accuracy": 90},
                "prosody": {"score": 3},
            },
            {
                "celeration": {
                    "calendarDay": 17,
                    "date": "2024-01-17",
                    "correctPerMinute": 4,
                    "errorsPerMinute": 0.5,
                    "countingTimeMin": 1,
                },
                "performance": {"wpm": 105, "accuracy": 94},
            },
        ],
        "summary": {"averages": {"accuracy": 92, "wpm": 100}},
    }


@pytest.fixture
def write_record(tmp_path: Path):
    """Write a record to a JSON file under tmp_path and return its path."""
    def _write(record, name="student.json"):
        path = tmp_path / name
        path.write_text(json.dumps(record), encoding="utf-8")
        return path
    return _write
