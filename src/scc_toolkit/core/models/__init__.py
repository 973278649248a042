"""
Core Models Package

Immutable data models for students and their assessments.

All models in this package are frozen dataclasses. Roster changes create
new instances (``dataclasses.replace``) instead of mutating in place, so a
snapshot handed to the chart pipeline never changes underneath it.
"""

from .assessments import Assessment, CelerationData, PerformanceData, ProsodyData
from .students import Student, StudentSummary

__all__ = [
    "Assessment",
    "CelerationData",
    "PerformanceData",
    "ProsodyData",
    "Student",
    "StudentSummary",
]
