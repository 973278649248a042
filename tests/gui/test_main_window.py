"""Integration tests for the main window."""

import logging

import pytest

from scc_toolkit.gui.main_window import MainWindow
from scc_toolkit.gui.utils.logging_utils import QueueLogHandler


@pytest.fixture
def window(qtbot):
    win = MainWindow()
    qtbot.addWidget(win)
    return win


class TestMainWindow:
    """Tests for MainWindow."""

    def test_init_when_created_then_empty_roster_and_default_view(self, window):
        assert window.state.students == ()
        assert window.subtitle_label.text() == "View: 1 Week (7 days)"
        assert window.stats_panel.value_labels == {}
        assert len(window.legend_panel.entry_labels) == 2

    def test_load_when_valid_file_then_student_listed_and_charted(self, window, student_record, write_record):
        # Act
        loaded = window.load_files([write_record(student_record)])

        # Assert
        assert loaded == 1
        assert window.student_list.student_ids() == ["ana"]
        assert window.canvas.state is window.state
        assert window.stats_panel.value_labels["Student"].text() == "Ana"

    def test_load_when_bad_file_then_skipped_and_logged(self, window, student_record, write_record, tmp_path, caplog):
        broken = tmp_path / "broken.json"
        broken.write_text("{", encoding="utf-8")

        with caplog.at_level(logging.ERROR, logger="scc_toolkit"):
            loaded = window.load_files([broken, write_record(student_record)])

        assert loaded == 1
        assert "broken.json" in caplog.text

    def test_load_when_file_not_utf8_then_skipped(self, window, student_record, write_record, tmp_path):
        latin1 = tmp_path / "latin1.json"
        latin1.write_bytes(b'{"student": {"id": "\xff"}, "assessments": []}')

        loaded = window.load_files([latin1, write_record(student_record)])

        assert loaded == 1
        assert window.student_list.student_ids() == ["ana"]

    def test_toggle_when_student_unchecked_then_state_deselects(self, window, student_record, write_record):
        window.load_files([write_record(student_record)])

        window.student_list.studentToggled.emit("ana")

        assert window.state.active_student_ids == ()
        assert window.stats_panel.value_labels == {}

    def test_remove_when_requested_then_roster_empty(self, window, student_record, write_record):
        window.load_files([write_record(student_record)])

        window.student_list.removeRequested.emit("ana")

        assert window.student_list.student_ids() == []

    def test_zoom_when_button_clicked_then_subtitle_updates(self, window):
        window.controls.zoom_buttons[90].click()

        assert window.state.zoom_days == 90
        assert window.subtitle_label.text() == "View: 3 Months (90 days)"

    def test_metric_when_enabled_then_legend_grows(self, window):
        window.controls.metric_boxes["wpm"].setChecked(True)

        assert "wpm" in window.state.active_metrics
        assert len(window.legend_panel.entry_labels) == 3

    def test_display_option_when_toggled_then_state_updated(self, window):
        window.controls.option_boxes["show_record_floor"].setChecked(True)

        assert window.state.display_options.show_record_floor

    def test_log_when_message_drained_then_shown_in_status_bar(self, window):
        logging.getLogger("scc_toolkit.test").warning("Something odd")

        window._drain_log_queue()

        assert window.status_bar.currentMessage() == "Something odd"

    def test_close_when_window_closed_then_handler_detached(self, window):
        window.show()

        window.close()

        handlers = logging.getLogger("scc_toolkit").handlers
        assert isinstance(window._log_handler, QueueLogHandler)
        assert window._log_handler not in handlers
        assert not window.log_timer.isActive()
