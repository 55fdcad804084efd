"""Single-image and directory-level analysis."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple
from xml.etree.ElementTree import ParseError

from PIL import Image, UnidentifiedImageError

from logo_metrics.config.schema import AnalyzeConfig, Config, normalize_extensions
from logo_metrics.data import Metrics, NormalizedDimensions, PixelBuffer
from logo_metrics.diagnostics import DiagnosticsTracker, Timer
from logo_metrics.io import load_pixels
from logo_metrics.metrics import inspect_pixels
from logo_metrics.normalize import normalize

logger = logging.getLogger(__name__)

# Errors that mean "this one file could not be read", not "the run is broken".
_SKIPPABLE_ERRORS = (
    OSError,
    ValueError,
    UnidentifiedImageError,
    ParseError,
    Image.DecompressionBombError,
)


def analyze_pixels(buffer: PixelBuffer, config: Optional[AnalyzeConfig] = None) -> Optional[Metrics]:
    """Measure an already decoded buffer; ``None`` when nothing is drawn."""

    config = config or AnalyzeConfig()
    analysis = inspect_pixels(buffer.as_array(), config.contrast_threshold)
    return analysis.metrics if analysis else None


def _analyze_path(
    path: Path,
    config: AnalyzeConfig,
    tracker: Optional[DiagnosticsTracker],
) -> Optional[Metrics]:
    with Timer() as decode_timer:
        buffer = load_pixels(path, config.sample_max_size)
    with Timer() as analyze_timer:
        rgba = buffer.as_array()
        analysis = inspect_pixels(rgba, config.contrast_threshold)

    if tracker is not None and tracker.enabled:
        tracker.track_file(
            name=path.name,
            sample_size=(buffer.width, buffer.height),
            decode_s=decode_timer.elapsed,
            analyze_s=analyze_timer.elapsed,
            content_found=analysis is not None,
        )
        tracker.save_overlay(path.name, rgba, analysis)
    return analysis.metrics if analysis else None


def analyze_file(
    path: Path,
    config: Optional[AnalyzeConfig] = None,
    tracker: Optional[DiagnosticsTracker] = None,
) -> Optional[Metrics]:
    """Decode and measure one file. Decoding errors propagate."""

    return _analyze_path(Path(path), config or AnalyzeConfig(), tracker)


def iter_image_files(directory: Path, extensions: Iterable[str]) -> List[Path]:
    """List files in ``directory`` whose extension is in ``extensions``."""

    wanted = set(normalize_extensions(list(extensions)))
    return [
        path
        for path in sorted(Path(directory).iterdir())
        if path.is_file() and path.suffix[1:].lower() in wanted
    ]


def _try_analyze(
    path: Path,
    config: AnalyzeConfig,
    tracker: Optional[DiagnosticsTracker],
) -> Tuple[str, Optional[Metrics]]:
    try:
        metrics = _analyze_path(path, config, tracker)
    except _SKIPPABLE_ERRORS as exc:
        logger.warning("Skipping %s: %s", path.name, exc)
        return path.name, None
    if metrics is None:
        logger.info("Skipping %s: no content detected", path.name)
    else:
        logger.debug("Analyzed %s: %s", path.name, metrics)
    return path.name, metrics


def analyze_directory(
    directory: Path,
    config: Optional[AnalyzeConfig] = None,
    extensions: Optional[Iterable[str]] = None,
    workers: int = 1,
    tracker: Optional[DiagnosticsTracker] = None,
) -> Dict[str, Metrics]:
    """Measure every eligible file in ``directory``, keyed by bare filename.

    Files that cannot be decoded or have no content are left out. With
    ``workers > 1`` files are processed on a thread pool; results are merged
    here in filename order.
    """

    config = config or AnalyzeConfig()
    files = iter_image_files(directory, extensions if extensions is not None else Config().extensions)

    if workers > 1 and len(files) > 1:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            outcomes = list(pool.map(lambda path: _try_analyze(path, config, tracker), files))
    else:
        outcomes = [_try_analyze(path, config, tracker) for path in files]

    results: Dict[str, Metrics] = {}
    for name, metrics in outcomes:
        if metrics is not None:
            results[name] = metrics
    return results


def normalize_directory(
    directory: Path,
    config: Optional[Config] = None,
    tracker: Optional[DiagnosticsTracker] = None,
) -> Dict[str, NormalizedDimensions]:
    """Analyze a directory and turn every result into display dimensions."""

    config = config or Config()
    metrics_map = analyze_directory(
        directory,
        config=config.analyze,
        extensions=config.extensions,
        workers=config.workers,
        tracker=tracker,
    )
    return {name: normalize(metrics, config.normalize) for name, metrics in metrics_map.items()}
