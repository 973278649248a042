"""
Chart output backends.

- raster: PNG via Pillow
- pdf: Vector PDF via ReportLab
"""

from .pdf import render_to_pdf
from .raster import render_to_image, render_to_png

__all__ = ["render_to_image", "render_to_pdf", "render_to_png"]
