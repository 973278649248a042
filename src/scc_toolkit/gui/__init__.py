"""PySide6 viewer for Standard Celeration Charts."""
