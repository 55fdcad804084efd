"""Configuration loading and defaults."""

from logo_metrics.config.schema import (
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
    normalize_extensions,
)

__all__ = [
    "AnalyzeConfig",
    "BASE_SIZE",
    "CONTRAST_THRESHOLD",
    "Config",
    "DEFAULT_EXTENSIONS",
    "DENSITY_DAMPENING",
    "DENSITY_FACTOR",
    "NormalizeConfig",
    "REFERENCE_DENSITY",
    "SAMPLE_MAX_SIZE",
    "SCALE_FACTOR",
    "load_config",
    "normalize_extensions",
]
