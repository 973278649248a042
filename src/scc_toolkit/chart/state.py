"""
Module: chart.state

Purpose:
    Immutable dashboard state: the student roster plus the active student
    selection, active metrics, zoom and display options. Every change
    returns a new DashboardState, so a snapshot handed to compose or
    hit-test never changes underneath it.

Key Classes:
    - DashboardState: Roster and selection snapshot

Dependencies:
    - dataclasses (std)
    - chart.config, chart.metrics
    - chart.layout, chart.hit_test

Used By:
    - chart.controller: Render pipeline
    - gui.main_window: Owns the current snapshot
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Optional

from scc_toolkit.core.models import Student

from .config import (
    ChartConfig,
    DEFAULT_ZOOM_DAYS,
    DisplayOptions,
    STUDENT_PALETTE,
    ZoomWindow,
    resolve_zoom,
)
from .hit_test import HitResult, nearest_point
from .layout import ChartPlan, compose_chart
from .metrics import DEFAULT_ACTIVE_METRICS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DashboardState:
    """
    Roster and selection snapshot (immutable).

    Attributes:
        students: Roster in registration order
        active_student_ids: Selected students, in selection order
        active_metrics: Selected metrics
        zoom_days: Requested zoom span (unknown spans resolve to the largest)
        display_options: Drawing toggles

    Example:
        >>> state = DashboardState().ingest(student)
        >>> state.active_student_ids
        ('s1',)
    """

    students: tuple[Student, ...] = ()
    active_student_ids: tuple[str, ...] = ()
    active_metrics: tuple[str, ...] = DEFAULT_ACTIVE_METRICS
    zoom_days: int = DEFAULT_ZOOM_DAYS
    display_options: DisplayOptions = field(default_factory=DisplayOptions)

    # ─────────────────────────────────────────────────────────────────────────
    # Queries
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def zoom(self) -> ZoomWindow:
        """Resolved zoom window."""
        return resolve_zoom(self.zoom_days)

    def get_student(self, student_id: str) -> Optional[Student]:
        """Find a roster student by id."""
        for student in self.students:
            if student.id == student_id:
                return student
        return None

    def is_active(self, student_id: str) -> bool:
        return student_id in self.active_student_ids

    @property
    def active_students(self) -> tuple[Student, ...]:
        """Selected students that are in the roster, in selection order."""
        roster = {s.id: s for s in self.students}
        return tuple(roster[i] for i in self.active_student_ids if i in roster)

    # ─────────────────────────────────────────────────────────────────────────
    # Roster
    # ─────────────────────────────────────────────────────────────────────────

    def ingest(self, student: Student) -> DashboardState:
        """
        Add or merge a student.

        A new id gets the next palette color (cycled by roster size) and is
        selected. A known id keeps its color and selection; its name,
        assessments and summary are replaced.

        Args:
            student: Deserialized student (its color is ignored)

        Returns:
            New DashboardState
        """
        existing = self.get_student(student.id)
        if existing is not None:
            merged = replace(
                existing,
                name=student.name,
                assessments=student.assessments,
                summary=student.summary,
            )
            logger.info(f"Updated {student.id} with {merged.assessment_count} assessments")
            return replace(
                self,
                students=tuple(merged if s.id == student.id else s for s in self.students),
            )

        color = STUDENT_PALETTE[len(self.students) % len(STUDENT_PALETTE)]
        added = replace(student, color=color)
        logger.info(f"Added {student.id} ({student.name}) with {added.assessment_count} assessments")
        return replace(
            self,
            students=self.students + (added,),
            active_student_ids=self.active_student_ids + (student.id,),
        )

    def remove_student(self, student_id: str) -> DashboardState:
        """Remove a student from the roster and the selection."""
        return replace(
            self,
            students=tuple(s for s in self.students if s.id != student_id),
            active_student_ids=tuple(i for i in self.active_student_ids if i != student_id),
        )

    # ─────────────────────────────────────────────────────────────────────────
    # Selection
    # ─────────────────────────────────────────────────────────────────────────

    def toggle_student(self, student_id: str) -> DashboardState:
        """Select or deselect a roster student (unknown ids are ignored)."""
        if self.get_student(student_id) is None:
            return self
        if self.is_active(student_id):
            ids = tuple(i for i in self.active_student_ids if i != student_id)
        else:
            ids = self.active_student_ids + (student_id,)
        return replace(self, active_student_ids=ids)

    def set_metric(self, metric: str, enabled: bool) -> DashboardState:
        """Enable or disable a metric."""
        if enabled:
            if metric in self.active_metrics:
                return self
            return replace(self, active_metrics=self.active_metrics + (metric,))
        return replace(self, active_metrics=tuple(m for m in self.active_metrics if m != metric))

    def set_zoom(self, days: int) -> DashboardState:
        return replace(self, zoom_days=days)

    def with_display_options(self, **changes: bool) -> DashboardState:
        """
        Change display options by name.

        Example:
            >>> state.with_display_options(show_record_floor=True)
        """
        return replace(self, display_options=replace(self.display_options, **changes))

    # ─────────────────────────────────────────────────────────────────────────
    # Pipeline
    # ─────────────────────────────────────────────────────────────────────────

    def compose(self, config: ChartConfig = ChartConfig()) -> ChartPlan:
        """Compose the chart for this snapshot."""
        return compose_chart(
            self.students,
            self.active_student_ids,
            self.active_metrics,
            self.zoom,
            self.display_options,
            config,
        )

    def hit_test(self, x: float, y: float, config: ChartConfig = ChartConfig()) -> Optional[HitResult]:
        """Find the point under a canvas position for this snapshot."""
        return nearest_point(
            x, y,
            self.students,
            self.active_student_ids,
            self.active_metrics,
            self.zoom,
            config,
        )
