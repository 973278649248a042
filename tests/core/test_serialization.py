"""
Unit Tests for Serialization Utilities

Tests for deserialization and export file loading.
"""

import pytest

from scc_toolkit.core.schemas.validator import ValidationError
from scc_toolkit.core.utils.serialization import (
    LoaderError,
    deserialize_student,
    load_student_file,
    load_student_files,
    serialize_student,
)


class TestDeserializeStudent:
    """Tests for deserialize_student."""

    def test_deserialize_when_valid_record_then_returns_student(self, student_record):
        student = deserialize_student(student_record)

        assert student.id == "ana"
        assert student.name == "Ana"
        assert student.assessment_count == 2
        assert student.summary.average_accuracy == 92

    def test_deserialize_when_assessments_unsorted_then_order_kept(self, student_record):
        student_record["assessments"].reverse()

        student = deserialize_student(student_record)

        assert [a.calendar_day for a in student.assessments] == [17, 10]

    def test_deserialize_when_id_missing_then_uses_factory(self, student_record):
        del student_record["student"]["id"]

        student = deserialize_student(student_record, id_factory=lambda: "student-123")

        assert student.id == "student-123"
        assert student.name == "Ana"

    def test_deserialize_when_id_missing_then_generated_id_has_prefix(self, student_record):
        del student_record["student"]["id"]

        student = deserialize_student(student_record)

        assert student.id.startswith("student-")

    def test_deserialize_when_name_missing_then_name_is_id(self, student_record):
        del student_record["student"]["name"]

        student = deserialize_student(student_record)

        assert student.name == "ana"

    def test_deserialize_when_invalid_then_raises_validation_error(self):
        with pytest.raises(ValidationError):
            deserialize_student({"student": {"id": "x"}})

    def test_serialize_when_roundtrip_then_preserves_days_and_values(self, student_record):
        student = deserialize_student(student_record)

        restored = deserialize_student(serialize_student(student))

        assert restored.assessments == student.assessments
        assert restored.summary == student.summary


class TestLoadStudentFile:
    """Tests for load_student_file and load_student_files."""

    def test_load_when_valid_file_then_returns_student(self, student_record, write_record):
        path = write_record(student_record)

        student = load_student_file(path)

        assert student.id == "ana"

    def test_load_when_file_missing_then_raises_loader_error(self, tmp_path):
        with pytest.raises(LoaderError) as exc_info:
            load_student_file(tmp_path / "missing.json")

        assert isinstance(exc_info.value.__cause__, OSError)

    def test_load_when_invalid_json_then_raises_loader_error(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(LoaderError, match="Invalid JSON"):
            load_student_file(path)

    def test_load_when_not_utf8_then_raises_loader_error(self, tmp_path):
        path = tmp_path / "latin1.json"
        path.write_bytes(b'{"student": {"id": "\xff\xfe"}, "assessments": []}')

        with pytest.raises(LoaderError, match="not UTF-8") as exc_info:
            load_student_file(path)

        assert isinstance(exc_info.value.__cause__, UnicodeDecodeError)

    @pytest.mark.parametrize("raw_day", ["NaN", "Infinity", "1e400"])
    def test_load_when_day_not_finite_then_day_is_none(self, tmp_path, raw_day):
        path = tmp_path / "odd_day.json"
        path.write_text(
            '{"student": {"id": "a"}, "assessments": ['
            '{"celeration": {"calendarDay": ' + raw_day + ', "correctPerMinute": 3}}]}',
            encoding="utf-8",
        )

        student = load_student_file(path)

        assert student.assessments[0].calendar_day is None

    def test_load_when_record_malformed_then_raises_validation_error(self, write_record):
        path = write_record({"assessments": []})

        with pytest.raises(ValidationError):
            load_student_file(path)

    def test_load_many_when_several_files_then_keeps_order(self, student_record, write_record):
        first = write_record(student_record, "a.json")
        student_record["student"] = {"id": "ben", "name": "Ben"}
        second = write_record(student_record, "b.json")

        students = load_student_files([second, first])

        assert [s.id for s in students] == ["ben", "ana"]
