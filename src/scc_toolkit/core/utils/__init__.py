"""Utilities for loading and saving student-export records."""

from .serialization import (
    LoaderError,
    deserialize_student,
    load_student_file,
    load_student_files,
    serialize_student,
)

__all__ = [
    "LoaderError",
    "deserialize_student",
    "load_student_file",
    "load_student_files",
    "serialize_student",
]
