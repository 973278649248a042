"""Viewer colors, fonts and stylesheet."""
