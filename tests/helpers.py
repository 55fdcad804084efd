"""Builders for in-memory test images."""

from __future__ import annotations

import io
import struct
import zlib
from pathlib import Path
from typing import Tuple

import numpy as np
from PIL import Image

Color = Tuple[int, int, int, int]

TRANSPARENT: Color = (0, 0, 0, 0)
WHITE: Color = (255, 255, 255, 255)
BLACK: Color = (0, 0, 0, 255)


def canvas(width: int, height: int, fill: Color = TRANSPARENT) -> np.ndarray:
    """Return an ``(height, width, 4)`` uint8 array filled with one colour."""

    rgba = np.zeros((height, width, 4), dtype=np.uint8)
    rgba[...] = fill
    return rgba


def with_block(rgba: np.ndarray, x: int, y: int, width: int, height: int, fill: Color = BLACK) -> np.ndarray:
    """Paint a filled rectangle onto a copy of ``rgba``."""

    painted = rgba.copy()
    painted[y : y + height, x : x + width] = fill
    return painted


def png_bytes(rgba: np.ndarray) -> bytes:
    buffer = io.BytesIO()
    Image.fromarray(rgba).save(buffer, format="PNG")
    return buffer.getvalue()


def write_png(path: Path, rgba: np.ndarray) -> Path:
    path.write_bytes(png_bytes(rgba))
    return path


def header_only_png(width: int, height: int) -> bytes:
    """A PNG signature and IHDR chunk declaring ``width`` x ``height``, no pixel data."""

    ihdr = struct.pack(">IIBBBBB", width, height, 8, 6, 0, 0, 0)
    chunk = b"IHDR" + ihdr
    return b"\x89PNG\r\n\x1a\n" + struct.pack(">I", len(ihdr)) + chunk + struct.pack(">I", zlib.crc32(chunk))
