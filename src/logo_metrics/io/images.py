"""Image loading and resampling."""

from __future__ import annotations

import io
from pathlib import Path
from typing import Tuple

import numpy as np
from PIL import Image

from logo_metrics.config.schema import SAMPLE_MAX_SIZE
from logo_metrics.data import PixelBuffer

# Resolution used when rasterizing SVG documents.
SVG_DPI = 96


def _fit_inside(width: int, height: int, max_size: int) -> Tuple[int, int]:
    """Scale (up or down) so the longer side equals ``max_size``."""

    scale = max_size / max(width, height)
    return max(1, round(width * scale)), max(1, round(height * scale))


def _render_svg(raw: bytes, max_size: int) -> Image.Image:
    """Rasterize an SVG at 96 dpi, re-rendering at the sample size."""

    # cairosvg needs the system Cairo library, so only SVG decoding pulls it in.
    import cairosvg

    png = cairosvg.svg2png(bytestring=raw, dpi=SVG_DPI)
    with Image.open(io.BytesIO(png)) as native:
        size = _fit_inside(native.width, native.height, max_size)
        if size == native.size:
            return native.convert("RGBA")
    png = cairosvg.svg2png(bytestring=raw, dpi=SVG_DPI, output_width=size[0], output_height=size[1])
    with Image.open(io.BytesIO(png)) as rendered:
        return rendered.convert("RGBA")


def _resample(image: Image.Image, max_size: int) -> Image.Image:
    """Force an alpha channel and fit the image inside ``max_size``."""

    rgba = image.convert("RGBA")
    size = _fit_inside(rgba.width, rgba.height, max_size)
    if size == rgba.size:
        return rgba
    return rgba.resize(size, resample=Image.LANCZOS)


def decode_image(raw: bytes, sample_max_size: int = SAMPLE_MAX_SIZE, is_svg: bool = False) -> Image.Image:
    """Decode raster or SVG bytes into an RGBA image at the sample size."""

    if is_svg:
        return _render_svg(raw, sample_max_size)
    with Image.open(io.BytesIO(raw)) as image:
        image.load()
        return _resample(image, sample_max_size)


def decode_pixels(raw: bytes, sample_max_size: int = SAMPLE_MAX_SIZE, is_svg: bool = False) -> PixelBuffer:
    """Decode in-memory bytes into a straight-alpha RGBA pixel buffer."""

    image = decode_image(raw, sample_max_size, is_svg)
    return PixelBuffer.from_array(np.asarray(image, dtype=np.uint8))


def load_pixels(path: Path, sample_max_size: int = SAMPLE_MAX_SIZE) -> PixelBuffer:
    """Decode a file into a straight-alpha RGBA pixel buffer."""

    path = Path(path)
    return decode_pixels(path.read_bytes(), sample_max_size, is_svg=path.suffix.lower() == ".svg")
