"""Convert raw metrics into display dimensions."""

from __future__ import annotations

import math
from typing import Optional

from logo_metrics.config.schema import NormalizeConfig
from logo_metrics.data import Metrics, NormalizedDimensions

_MIN_DENSITY_SCALE = 0.5
_MAX_DENSITY_SCALE = 2.0


def _round_half_up(value: float, digits: int = 0) -> float:
    """Round like ``Math.round``: halves go towards positive infinity."""

    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


def density_scale(pixel_density: float, config: NormalizeConfig) -> float:
    """Scale applied to both axes to compensate for how filled a logo is.

    Denser content is shrunk and sparser content enlarged, anchored at
    ``reference_density``. Returns 1.0 when compensation is disabled.
    """

    if config.density_factor <= 0 or pixel_density <= 0:
        return 1.0
    density_ratio = pixel_density / config.reference_density
    scale = (1.0 / density_ratio) ** (config.density_factor * config.density_dampening)
    return max(_MIN_DENSITY_SCALE, min(_MAX_DENSITY_SCALE, scale))


def normalize(metrics: Metrics, config: Optional[NormalizeConfig] = None) -> NormalizedDimensions:
    """Compute the display size and centering offset for one logo.

    Width follows ``ratio ** scale_factor * base_size`` so extreme aspect
    ratios are compressed, then density compensation scales both axes by the
    same factor.
    """

    config = config or NormalizeConfig()
    ratio = metrics.content_ratio

    width = ratio**config.scale_factor * config.base_size
    height = width / ratio

    scale = density_scale(metrics.pixel_density, config)
    width *= scale
    height *= scale

    # Offsets move the optical center back onto the geometric one.
    return NormalizedDimensions(
        width=max(1, int(_round_half_up(width))),
        height=max(1, int(_round_half_up(height))),
        offset_x=_round_half_up(-metrics.visual_center_x * width, 1),
        offset_y=_round_half_up(-metrics.visual_center_y * height, 1),
    )
