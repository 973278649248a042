"""Viewer widgets."""
