"""
Module: assessments

Purpose:
    Provides the Assessment dataclass - one measurement event for a student,
    as exported by the upstream reading analyzer. Each measurement block
    (celeration, performance, prosody) is optional and every numeric field
    inside a block is optional.

Key Classes:
    - CelerationData: Per-minute counts and observation duration
    - PerformanceData: Words per minute and accuracy
    - ProsodyData: Prosody score on a 0-5 scale
    - Assessment: One timed observation

Dependencies:
    - dataclasses (std)

Used By:
    - core.models.students.Student
    - core.utils.serialization
    - chart.series: Series extraction
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Optional


def _number(value: Any) -> Optional[float]:
    """Coerce a JSON value to float, treating missing/invalid values as None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _day(value: Any) -> Optional[int]:
    """Coerce a calendar day to int (days since an arbitrary epoch)."""
    number = _number(value)
    if number is None or not math.isfinite(number):
        return None
    return int(number)


@dataclass(frozen=True)
class CelerationData:
    """
    Per-minute counts for a timed observation (immutable).

    Attributes:
        correct_per_minute: Correct responses per minute
        errors_per_minute: Errors per minute
        counting_time_min: Observation duration in minutes (record floor source)
    """

    correct_per_minute: Optional[float] = None
    errors_per_minute: Optional[float] = None
    counting_time_min: Optional[float] = None

    def to_dict(self) -> dict:
        d: dict = {}
        if self.correct_per_minute is not None:
            d["correctPerMinute"] = self.correct_per_minute
        if self.errors_per_minute is not None:
            d["errorsPerMinute"] = self.errors_per_minute
        if self.counting_time_min is not None:
            d["countingTimeMin"] = self.counting_time_min
        return d

    @classmethod
    def from_dict(cls, data: dict) -> CelerationData:
        return cls(
            correct_per_minute=_number(data.get("correctPerMinute")),
            errors_per_minute=_number(data.get("errorsPerMinute")),
            counting_time_min=_number(data.get("countingTimeMin")),
        )


@dataclass(frozen=True)
class PerformanceData:
    """
    Reading performance for an assessment (immutable).

    Attributes:
        wpm: Words per minute
        accuracy: Percent accuracy (0-100)
    """

    wpm: Optional[float] = None
    accuracy: Optional[float] = None

    def to_dict(self) -> dict:
        d: dict = {}
        if self.wpm is not None:
            d["wpm"] = self.wpm
        if self.accuracy is not None:
            d["accuracy"] = self.accuracy
        return d

    @classmethod
    def from_dict(cls, data: dict) -> PerformanceData:
        return cls(wpm=_number(data.get("wpm")), accuracy=_number(data.get("accuracy")))


@dataclass(frozen=True)
class ProsodyData:
    """Prosody rating on a 0-5 scale (immutable)."""

    score: Optional[float] = None

    def to_dict(self) -> dict:
        return {"score": self.score} if self.score is not None else {}

    @classmethod
    def from_dict(cls, data: dict) -> ProsodyData:
        return cls(score=_number(data.get("score")))


@dataclass(frozen=True)
class Assessment:
    """
    One measurement event (immutable).

    The export format nests ``calendarDay`` and ``date`` inside the
    ``celeration`` block. A top-level ``calendarDay``/``date`` is accepted
    when the block does not carry them.

    Attributes:
        calendar_day: Absolute day index (NOT normalized); None if unknown
        date: Display date string
        celeration: Per-minute counts, or None when the assessment has none
        performance: WPM/accuracy block, or None
        prosody: Prosody block, or None

    Invariants:
        - calendar_day is the sole temporal key
        - Assessments for a student are not guaranteed to be sorted

    Example:
        >>> a = Assessment.from_dict({
        ...     "celeration": {"calendarDay": 10, "correctPerMinute": 2},
        ... })
        >>> a.calendar_day, a.has_celeration
        (10, True)
    """

    calendar_day: Optional[int] = None
    date: Optional[str] = None
    celeration: Optional[CelerationData] = None
    performance: Optional[PerformanceData] = None
    prosody: Optional[ProsodyData] = None

    @property
    def has_celeration(self) -> bool:
        """True when the assessment carries a celeration block."""
        return self.celeration is not None

    @property
    def counting_time_min(self) -> Optional[float]:
        """Observation duration in minutes, if recorded."""
        return self.celeration.counting_time_min if self.celeration else None

    def to_dict(self) -> dict:
        """
        Serialize to the export format.

        Returns:
            Dict with ``calendarDay``/``date`` nested in ``celeration``
            (top-level when there is no celeration block)
        """
        d: dict = {}
        temporal: dict = {}
        if self.calendar_day is not None:
            temporal["calendarDay"] = self.calendar_day
        if self.date is not None:
            temporal["date"] = self.date

        if self.celeration is not None:
            d["celeration"] = {**self.celeration.to_dict(), **temporal}
        else:
            d.update(temporal)
        if self.performance is not None:
            d["performance"] = self.performance.to_dict()
        if self.prosody is not None:
            d["prosody"] = self.prosody.to_dict()
        return d

    @classmethod
    def from_dict(cls, data: dict) -> Assessment:
        """
        Deserialize from the export format.

        Args:
            data: Assessment dictionary

        Returns:
            Assessment instance
        """
        raw_celeration = data.get("celeration")
        raw_performance = data.get("performance")
        raw_prosody = data.get("prosody")

        celeration_block = raw_celeration if isinstance(raw_celeration, dict) else None

        calendar_day = None
        date = None
        if celeration_block is not None:
            calendar_day = _day(celeration_block.get("calendarDay"))
            date = celeration_block.get("date")
        if calendar_day is None:
            calendar_day = _day(data.get("calendarDay"))
        if date is None:
            date = data.get("date")

        return cls(
            calendar_day=calendar_day,
            date=str(date) if date is not None else None,
            celeration=CelerationData.from_dict(celeration_block) if celeration_block is not None else None,
            performance=PerformanceData.from_dict(raw_performance) if isinstance(raw_performance, dict) else None,
            prosody=ProsodyData.from_dict(raw_prosody) if isinstance(raw_prosody, dict) else None,
        )
