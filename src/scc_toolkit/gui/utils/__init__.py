"""Viewer helpers."""
