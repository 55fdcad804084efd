"""Core data structures used throughout the pipeline."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Dict, Union

import numpy as np

BufferLike = Union[bytes, bytearray, memoryview, np.ndarray]


class DetectionMode(enum.Enum):
    """How content pixels are told apart from the background."""

    ALPHA = "alpha"
    COLOR = "color"


@dataclass(frozen=True)
class RGB:
    """An 8-bit RGB colour."""

    r: int
    g: int
    b: int

    def as_array(self) -> np.ndarray:
        return np.array([self.r, self.g, self.b], dtype=np.int32)


WHITE = RGB(255, 255, 255)


@dataclass(frozen=True)
class PixelBuffer:
    """Decoded straight-alpha RGBA pixels, 4 bytes per pixel, row-major."""

    data: BufferLike
    width: int
    height: int

    def as_array(self) -> np.ndarray:
        """Return the pixels as a read-only ``(height, width, 4)`` uint8 array."""

        if isinstance(self.data, np.ndarray):
            flat = np.ascontiguousarray(self.data, dtype=np.uint8).reshape(-1)
        else:
            flat = np.frombuffer(self.data, dtype=np.uint8)
        expected = self.width * self.height * 4
        if self.width < 0 or self.height < 0 or flat.size != expected:
            raise ValueError(
                f"Pixel buffer holds {flat.size} bytes, expected {expected} "
                f"for {self.width}x{self.height} RGBA."
            )
        view = flat.reshape(self.height, self.width, 4)
        view.flags.writeable = False
        return view

    @classmethod
    def from_array(cls, rgba: np.ndarray) -> "PixelBuffer":
        """Wrap an ``(height, width, 4)`` uint8 array."""

        if rgba.ndim != 3 or rgba.shape[2] != 4:
            raise ValueError(f"Expected an (h, w, 4) RGBA array, got shape {rgba.shape}.")
        height, width = rgba.shape[:2]
        return cls(data=np.ascontiguousarray(rgba, dtype=np.uint8), width=width, height=height)


@dataclass(frozen=True)
class ContentBox:
    """Tight bounding box around the content pixels, in buffer coordinates."""

    x: int
    y: int
    width: int
    height: int

    @property
    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    @property
    def area(self) -> int:
        return self.width * self.height


@dataclass(frozen=True)
class Metrics:
    """Raw measurements of a single logo image."""

    content_ratio: float
    pixel_density: float
    visual_center_x: float
    visual_center_y: float

    def to_dict(self) -> Dict[str, float]:
        return {
            "contentRatio": self.content_ratio,
            "pixelDensity": self.pixel_density,
            "visualCenterX": self.visual_center_x,
            "visualCenterY": self.visual_center_y,
        }


@dataclass(frozen=True)
class NormalizedDimensions:
    """Display size and optical-centering translation for a logo."""

    width: int
    height: int
    offset_x: float
    offset_y: float

    def to_dict(self) -> Dict[str, Union[int, float]]:
        return {
            "width": self.width,
            "height": self.height,
            "offsetX": self.offset_x,
            "offsetY": self.offset_y,
        }
