"""Image I/O utilities."""

from logo_metrics.io.images import (
    decode_image,
    decode_pixels,
    load_pixels,
)

__all__ = ["decode_image", "decode_pixels", "load_pixels"]
