"""Configuration schema and loading utilities."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

# Maximum dimension for the resampled image used during analysis.
SAMPLE_MAX_SIZE = 200
# Minimum contrast (and alpha) a pixel needs to count as content.
CONTRAST_THRESHOLD = 10
# Base size in pixels for the normalized output.
BASE_SIZE = 48
# Aspect ratio normalization exponent (0-1).
SCALE_FACTOR = 0.5
# Density compensation strength (0-1).
DENSITY_FACTOR = 0.5
# Dampening applied to the density compensation exponent.
DENSITY_DAMPENING = 0.5
# Density at which no compensation is applied.
REFERENCE_DENSITY = 0.35
# File extensions scanned by default, without the dot.
DEFAULT_EXTENSIONS = ["svg", "png"]
DEFAULT_OUTPUT = Path("logo-metrics.json")


@dataclass(frozen=True)
class AnalyzeConfig:
    """Settings for decoding and pixel analysis."""

    sample_max_size: int = SAMPLE_MAX_SIZE
    contrast_threshold: int = CONTRAST_THRESHOLD


@dataclass(frozen=True)
class NormalizeConfig:
    """Settings for converting metrics into display dimensions."""

    base_size: float = BASE_SIZE
    scale_factor: float = SCALE_FACTOR
    density_factor: float = DENSITY_FACTOR
    density_dampening: float = DENSITY_DAMPENING
    reference_density: float = REFERENCE_DENSITY


@dataclass(frozen=True)
class Config:
    """Top-level configuration for a batch run."""

    analyze: AnalyzeConfig = field(default_factory=AnalyzeConfig)
    normalize: NormalizeConfig = field(default_factory=NormalizeConfig)
    extensions: List[str] = field(default_factory=lambda: list(DEFAULT_EXTENSIONS))
    output: Path = DEFAULT_OUTPUT
    workers: int = 1
    profile_output: Optional[Path] = None
    debug_output_dir: Optional[Path] = None


_SECTION_KEYS = {
    "analyze": ("sample_max_size", "contrast_threshold"),
    "normalize": (
        "base_size",
        "scale_factor",
        "density_factor",
        "density_dampening",
        "reference_density",
    ),
}
_TOP_LEVEL_KEYS = ("extensions", "output", "workers", "profile_output", "debug_output_dir")


def _merge_dict(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Merge overrides into base without mutating either input."""

    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge_dict(merged[key], value)
        else:
            merged[key] = value
    return merged


def _check_keys(raw: Dict[str, Any]) -> None:
    allowed = set(_SECTION_KEYS) | set(_TOP_LEVEL_KEYS)
    unknown = sorted(set(raw) - allowed)
    if unknown:
        raise ValueError(f"Unknown config keys: {', '.join(unknown)}")
    for section, keys in _SECTION_KEYS.items():
        values = raw.get(section) or {}
        if not isinstance(values, dict):
            raise ValueError(f"Config section '{section}' must be an object.")
        unknown = sorted(set(values) - set(keys))
        if unknown:
            raise ValueError(f"Unknown '{section}' config keys: {', '.join(unknown)}")


def normalize_extensions(extensions: List[str]) -> List[str]:
    """Lower-case extensions and strip leading dots and whitespace."""

    cleaned = [ext.strip().lower().lstrip(".") for ext in extensions]
    return [ext for ext in cleaned if ext]


def load_config(path: Optional[Path] = None, overrides: Optional[Dict[str, Any]] = None) -> Config:
    """Load configuration from JSON, apply overrides and fill in defaults.

    Both the file and ``overrides`` use the same shape: top-level run keys plus
    nested ``analyze`` and ``normalize`` sections. ``None`` values in
    ``overrides`` are ignored so that unset CLI flags keep file/default values.
    """

    base: Dict[str, Any] = {
        "analyze": {
            "sample_max_size": SAMPLE_MAX_SIZE,
            "contrast_threshold": CONTRAST_THRESHOLD,
        },
        "normalize": {
            "base_size": BASE_SIZE,
            "scale_factor": SCALE_FACTOR,
            "density_factor": DENSITY_FACTOR,
            "density_dampening": DENSITY_DAMPENING,
            "reference_density": REFERENCE_DENSITY,
        },
        "extensions": list(DEFAULT_EXTENSIONS),
        "output": str(DEFAULT_OUTPUT),
        "workers": 1,
        "profile_output": None,
        "debug_output_dir": None,
    }

    merged = base
    if path:
        raw = json.loads(Path(path).read_text())
        if not isinstance(raw, dict):
            raise ValueError("Config file must contain a JSON object.")
        _check_keys(raw)
        merged = _merge_dict(merged, raw)
    if overrides:
        _check_keys(overrides)
        cleaned = {
            key: ({k: v for k, v in value.items() if v is not None} if isinstance(value, dict) else value)
            for key, value in overrides.items()
            if value is not None
        }
        merged = _merge_dict(merged, cleaned)

    analyze = merged["analyze"]
    normalize = merged["normalize"]
    extensions = merged["extensions"]
    if isinstance(extensions, str):
        extensions = extensions.split(",")

    return Config(
        analyze=AnalyzeConfig(
            sample_max_size=int(analyze["sample_max_size"]),
            contrast_threshold=int(analyze["contrast_threshold"]),
        ),
        normalize=NormalizeConfig(
            base_size=float(normalize["base_size"]),
            scale_factor=float(normalize["scale_factor"]),
            density_factor=float(normalize["density_factor"]),
            density_dampening=float(normalize["density_dampening"]),
            reference_density=float(normalize["reference_density"]),
        ),
        extensions=normalize_extensions(list(extensions)),
        output=Path(merged["output"]),
        workers=max(1, int(merged["workers"])),
        profile_output=Path(merged["profile_output"]) if merged.get("profile_output") else None,
        debug_output_dir=Path(merged["debug_output_dir"]) if merged.get("debug_output_dir") else None,
    )
