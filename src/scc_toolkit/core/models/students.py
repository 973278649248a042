"""
Module: students

Purpose:
    Provides the Student dataclass - identity, display color, the raw
    assessment list (ingestion order), and the opaque summary supplied by
    the upstream producer.

Key Classes:
    - StudentSummary: Precomputed averages (display only, never recomputed)
    - Student: One charted student

Dependencies:
    - dataclasses (std)
    - .assessments.Assessment

Used By:
    - chart.state: Roster management
    - chart.series: Series extraction
    - chart.panels: Stats panel
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .assessments import Assessment


@dataclass(frozen=True)
class StudentSummary:
    """
    Averages supplied by the producer of the export (immutable).

    Values are kept exactly as exported (number or string) because they are
    only ever displayed.

    Attributes:
        average_accuracy: ``summary.averages.accuracy``
        average_wpm: ``summary.averages.wpm``
    """

    average_accuracy: Any = None
    average_wpm: Any = None

    def to_dict(self) -> dict:
        return {"averages": {"accuracy": self.average_accuracy, "wpm": self.average_wpm}}

    @classmethod
    def from_dict(cls, data: dict) -> StudentSummary:
        averages = data.get("averages") or {}
        if not isinstance(averages, dict):
            averages = {}
        return cls(
            average_accuracy=averages.get("accuracy"),
            average_wpm=averages.get("wpm"),
        )


@dataclass(frozen=True)
class Student:
    """
    A charted student (immutable).

    Attributes:
        id: Stable identifier (merge key for re-ingestion)
        name: Display name
        assessments: Assessments in ingestion order (NOT temporal order)
        color: Display color, assigned once at first ingestion
        summary: Opaque summary from the export, or None

    Example:
        >>> s = Student(id="s1", name="Ada", assessments=(), color="#06b6d4")
        >>> s.assessment_count
        0
    """

    id: str
    name: str
    assessments: tuple[Assessment, ...] = ()
    color: str = "#06b6d4"
    summary: Optional[StudentSummary] = None

    def __post_init__(self) -> None:
        """Validate student on construction."""
        if not self.id:
            raise ValueError("Student id must be non-empty")

    @property
    def assessment_count(self) -> int:
        """Number of ingested assessments."""
        return len(self.assessments)
