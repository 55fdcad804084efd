"""Perceptually balanced display sizes for sets of logos."""

from logo_metrics.analysis import (
    analyze_directory,
    analyze_file,
    analyze_pixels,
    iter_image_files,
    normalize_directory,
)
from logo_metrics.config import (
    BASE_SIZE,
    CONTRAST_THRESHOLD,
    DEFAULT_EXTENSIONS,
    DENSITY_DAMPENING,
    DENSITY_FACTOR,
    REFERENCE_DENSITY,
    SAMPLE_MAX_SIZE,
    SCALE_FACTOR,
    AnalyzeConfig,
    Config,
    NormalizeConfig,
    load_config,
)
from logo_metrics.data import (
    RGB,
    ContentBox,
    DetectionMode,
    Metrics,
    NormalizedDimensions,
    PixelBuffer,
)
from logo_metrics.metrics import extract_metrics
from logo_metrics.normalize import normalize

__version__ = "0.1.0"

__all__ = [
    "AnalyzeConfig",
    "BASE_SIZE",
    "CONTRAST_THRESHOLD",
    "Config",
    "ContentBox",
    "DEFAULT_EXTENSIONS",
    "DENSITY_DAMPENING",
    "DENSITY_FACTOR",
    "DetectionMode",
    "Metrics",
    "NormalizeConfig",
    "NormalizedDimensions",
    "PixelBuffer",
    "REFERENCE_DENSITY",
    "RGB",
    "SAMPLE_MAX_SIZE",
    "SCALE_FACTOR",
    "analyze_directory",
    "analyze_file",
    "analyze_pixels",
    "extract_metrics",
    "iter_image_files",
    "load_config",
    "normalize",
    "normalize_directory",
]
