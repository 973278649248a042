"""
Entry point for the PySide6 chart viewer.
"""
from __future__ import annotations

import sys
from pathlib import Path
from typing import Iterable, Optional

APP_NAME = "SCC Toolkit"


def run(paths: Optional[Iterable[Path]] = None) -> int:
    """
    Main entry point for the GUI application.

    Args:
        paths: Student-export files to load on startup

    Returns:
        Qt event loop exit code
    """
    from PySide6.QtWidgets import QApplication
    from scc_toolkit.gui.main_window import MainWindow
    from scc_toolkit.gui.styles.theme import apply_global_stylesheet

    app = QApplication.instance() or QApplication(sys.argv)
    app.setApplicationName(APP_NAME)
    app.setApplicationDisplayName(APP_NAME)
    apply_global_stylesheet(app)

    window = MainWindow()
    if paths:
        window.load_files(paths)
    window.show()

    return app.exec()


if __name__ == "__main__":
    sys.exit(run(Path(p) for p in sys.argv[1:]))
