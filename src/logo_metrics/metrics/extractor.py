"""Content box, visual center and pixel density measurement.

All passes share one classification predicate, :func:`content_mask`, so the
bounding box, centroid and density never disagree about what counts as
content. The detection mode and background are decided once per image and
passed down explicitly.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from logo_metrics.config.schema import CONTRAST_THRESHOLD
from logo_metrics.data import (
    RGB,
    WHITE,
    BufferLike,
    ContentBox,
    DetectionMode,
    Metrics,
    PixelBuffer,
)

# Any alpha below this marks the image as carrying real transparency.
_OPAQUE_ALPHA = 250


@dataclass(frozen=True)
class PixelAnalysis:
    """Intermediate results for one image, kept for diagnostics."""

    mode: DetectionMode
    background: RGB
    content_box: ContentBox
    center_offset: Tuple[float, float]
    metrics: Metrics


def content_mask(
    rgba: np.ndarray,
    threshold: int,
    mode: DetectionMode,
    background: RGB,
) -> np.ndarray:
    """Classify pixels as content.

    ``rgba`` may be a single pixel of shape ``(4,)`` or any ``(..., 4)``
    array. A pixel is content when its alpha exceeds ``threshold`` and, in
    colour mode, at least one channel differs from ``background`` by more
    than ``threshold``.
    """

    values = np.asarray(rgba).astype(np.int32, copy=False)
    visible = values[..., 3] > threshold
    if mode is DetectionMode.ALPHA:
        return visible
    diff = np.abs(values[..., :3] - background.as_array())
    return visible & np.any(diff > threshold, axis=-1)


def detect_mode(rgba: np.ndarray) -> DetectionMode:
    """Pick alpha mode when any pixel is noticeably transparent."""

    if np.any(rgba[..., 3] < _OPAQUE_ALPHA):
        return DetectionMode.ALPHA
    return DetectionMode.COLOR


def estimate_background(rgba: np.ndarray) -> RGB:
    """Average the RGB of the four corner pixels, rounding half up."""

    corners = rgba[[0, 0, -1, -1], [0, -1, 0, -1], :3].astype(np.int64)
    r, g, b = ((corners.sum(axis=0) + 2) // 4).tolist()
    return RGB(int(r), int(g), int(b))


def detect_content_box(
    rgba: np.ndarray,
    threshold: int,
    mode: DetectionMode,
    background: RGB,
) -> ContentBox:
    """Return the tight box around all content pixels.

    An image without content yields a zero-sized box.
    """

    mask = content_mask(rgba, threshold, mode, background)
    rows = np.flatnonzero(mask.any(axis=1))
    cols = np.flatnonzero(mask.any(axis=0))
    if rows.size == 0 or cols.size == 0:
        return ContentBox(x=0, y=0, width=0, height=0)
    y0, y1 = int(rows[0]), int(rows[-1])
    x0, x1 = int(cols[0]), int(cols[-1])
    return ContentBox(x=x0, y=y0, width=x1 - x0 + 1, height=y1 - y0 + 1)


def _crop(rgba: np.ndarray, box: ContentBox) -> np.ndarray:
    return rgba[box.y : box.y + box.height, box.x : box.x + box.width]


def calculate_visual_center(
    rgba: np.ndarray,
    box: ContentBox,
    threshold: int,
    mode: DetectionMode,
    background: RGB,
) -> Tuple[float, float]:
    """Weighted centroid of the content, as a pixel offset from the box center.

    In colour mode each pixel is weighted by the square root of its colour
    distance to the background, so a handful of high-contrast pixels cannot
    dominate the result.
    """

    region = _crop(rgba, box)
    mask = content_mask(region, threshold, mode, background)
    opacity = region[..., 3].astype(np.float64) / 255.0
    if mode is DetectionMode.ALPHA:
        weights = opacity
    else:
        delta = region[..., :3].astype(np.float64) - background.as_array()
        distance = np.sqrt(np.sum(delta * delta, axis=-1))
        weights = np.sqrt(distance) * opacity
    weights = np.where(mask, weights, 0.0)

    total = float(weights.sum())
    if total == 0.0:
        return 0.0, 0.0

    xs = np.arange(box.width, dtype=np.float64) + 0.5
    ys = np.arange(box.height, dtype=np.float64) + 0.5
    center_x = float(np.dot(weights.sum(axis=0), xs)) / total
    center_y = float(np.dot(weights.sum(axis=1), ys)) / total
    return center_x - box.width / 2, center_y - box.height / 2


def measure_pixel_density(
    rgba: np.ndarray,
    box: ContentBox,
    threshold: int,
    mode: DetectionMode,
) -> float:
    """Opacity-weighted fraction of the box covered by content.

    Pixels are classified against pure white here, not the estimated
    background.
    """

    total_pixels = box.area
    if total_pixels == 0:
        return 0.5

    region = _crop(rgba, box)
    mask = content_mask(region, threshold, mode, WHITE)
    filled = int(mask.sum())
    if filled == 0:
        return 0.0

    total_opacity = float(region[..., 3][mask].astype(np.float64).sum()) / 255.0
    return (filled / total_pixels) * (total_opacity / filled)


def inspect_pixels(rgba: np.ndarray, contrast_threshold: int = CONTRAST_THRESHOLD) -> Optional[PixelAnalysis]:
    """Run every measurement pass over an ``(h, w, 4)`` uint8 array."""

    if rgba.size == 0:
        return None

    mode = detect_mode(rgba)
    background = estimate_background(rgba) if mode is DetectionMode.COLOR else WHITE

    box = detect_content_box(rgba, contrast_threshold, mode, background)
    if box.is_empty:
        return None

    offset_x, offset_y = calculate_visual_center(rgba, box, contrast_threshold, mode, background)
    density = measure_pixel_density(rgba, box, contrast_threshold, mode)

    metrics = Metrics(
        content_ratio=box.width / box.height,
        pixel_density=density,
        visual_center_x=offset_x / box.width,
        visual_center_y=offset_y / box.height,
    )
    return PixelAnalysis(
        mode=mode,
        background=background,
        content_box=box,
        center_offset=(offset_x, offset_y),
        metrics=metrics,
    )


def extract_metrics(
    pixels: BufferLike,
    width: int,
    height: int,
    contrast_threshold: int = CONTRAST_THRESHOLD,
) -> Optional[Metrics]:
    """Measure a flat RGBA buffer; ``None`` means no content was found."""

    rgba = PixelBuffer(data=pixels, width=width, height=height).as_array()
    analysis = inspect_pixels(rgba, contrast_threshold)
    return analysis.metrics if analysis else None
