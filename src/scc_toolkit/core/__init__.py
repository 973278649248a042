"""
SCC Toolkit Core Package

Shared data models, ingestion validation and JSON loading. Nothing in this
package knows about charts or pixels.
"""

from .models import Assessment, CelerationData, PerformanceData, ProsodyData, Student, StudentSummary

__all__ = [
    "Assessment",
    "CelerationData",
    "PerformanceData",
    "ProsodyData",
    "Student",
    "StudentSummary",
]
