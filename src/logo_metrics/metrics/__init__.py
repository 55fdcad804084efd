"""Pixel metrics extraction."""

from logo_metrics.metrics.extractor import (
    PixelAnalysis,
    calculate_visual_center,
    content_mask,
    detect_content_box,
    detect_mode,
    estimate_background,
    extract_metrics,
    inspect_pixels,
    measure_pixel_density,
)

__all__ = [
    "PixelAnalysis",
    "calculate_visual_center",
    "content_mask",
    "detect_content_box",
    "detect_mode",
    "estimate_background",
    "extract_metrics",
    "inspect_pixels",
    "measure_pixel_density",
]
