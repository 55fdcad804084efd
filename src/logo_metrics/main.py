"""Command-line entry point: analyze a directory of logos and write JSON."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Dict, List, Optional

from logo_metrics.analysis import normalize_directory
from logo_metrics.config import (
    BASE_SIZE,
    CONTRAST_THRESHOLD,
    DEFAULT_EXTENSIONS,
    DENSITY_DAMPENING,
    DENSITY_FACTOR,
    REFERENCE_DENSITY,
    SAMPLE_MAX_SIZE,
    SCALE_FACTOR,
    Config,
    load_config,
)
from logo_metrics.data import NormalizedDimensions
from logo_metrics.diagnostics import DiagnosticsTracker


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="logo-metrics",
        description="Compute perceptually balanced display sizes for a directory of logos",
    )
    parser.add_argument("dir", type=Path, help="Directory containing logo images")
    parser.add_argument("-o", "--output", type=Path, help="Output JSON file path (default: logo-metrics.json)")
    parser.add_argument("--config", type=Path, help="Optional JSON config path")
    parser.add_argument("--base-size", type=float, help=f"Base size for normalization in px (default: {BASE_SIZE})")
    parser.add_argument("--scale-factor", type=float, help=f"Aspect ratio normalization 0-1 (default: {SCALE_FACTOR})")
    parser.add_argument("--density-factor", type=float, help=f"Density compensation 0-1 (default: {DENSITY_FACTOR})")
    parser.add_argument(
        "--density-dampening",
        type=float,
        help=f"Dampening of the density compensation exponent (default: {DENSITY_DAMPENING})",
    )
    parser.add_argument(
        "--reference-density",
        type=float,
        help=f"Density that receives no compensation (default: {REFERENCE_DENSITY})",
    )
    parser.add_argument(
        "--sample-max-size",
        type=int,
        help=f"Longest side of the resampled analysis image (default: {SAMPLE_MAX_SIZE})",
    )
    parser.add_argument(
        "--contrast-threshold",
        type=int,
        help=f"Minimum alpha/colour difference for content pixels (default: {CONTRAST_THRESHOLD})",
    )
    parser.add_argument(
        "-e",
        "--extensions",
        type=str,
        help=f'Comma-separated file extensions (default: "{",".join(DEFAULT_EXTENSIONS)}")',
    )
    parser.add_argument("--workers", type=int, help="Number of files analysed in parallel")
    parser.add_argument("--profile-output", type=Path, help="Write per-file timings to JSON/CSV")
    parser.add_argument("--debug-output-dir", type=Path, help="Write content box overlays to this directory")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def _config_from_args(args: argparse.Namespace) -> Config:
    overrides = {
        "analyze": {
            "sample_max_size": args.sample_max_size,
            "contrast_threshold": args.contrast_threshold,
        },
        "normalize": {
            "base_size": args.base_size,
            "scale_factor": args.scale_factor,
            "density_factor": args.density_factor,
            "density_dampening": args.density_dampening,
            "reference_density": args.reference_density,
        },
        "extensions": args.extensions.split(",") if args.extensions else None,
        "output": str(args.output) if args.output else None,
        "workers": args.workers,
        "profile_output": str(args.profile_output) if args.profile_output else None,
        "debug_output_dir": str(args.debug_output_dir) if args.debug_output_dir else None,
    }
    return load_config(args.config, overrides)


def write_results(path: Path, results: Dict[str, NormalizedDimensions]) -> None:
    """Write the filename -> dimensions mapping as pretty-printed JSON."""

    path.parent.mkdir(parents=True, exist_ok=True)
    payload = {name: dimensions.to_dict() for name, dimensions in results.items()}
    path.write_text(json.dumps(payload, indent=2, ensure_ascii=False) + "\n")


def main(argv: Optional[List[str]] = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = _config_from_args(args)
    except ValueError as exc:
        parser.error(str(exc))

    directory = args.dir.resolve()
    if not directory.exists():
        raise SystemExit(f"Directory not found: {directory}")
    if not directory.is_dir():
        raise SystemExit(f"Not a directory: {directory}")

    print(f"Analyzing logos in {directory}")
    tracker = DiagnosticsTracker(
        profile_output=config.profile_output,
        debug_output_dir=config.debug_output_dir,
    )
    results = normalize_directory(directory, config, tracker=tracker)
    for name, dimensions in results.items():
        print(f"  {name} → {dimensions.width}×{dimensions.height}px")

    output_path = config.output.resolve()
    write_results(output_path, results)
    tracker.export()
    print(f"Wrote {len(results)} entries to {output_path}")


if __name__ == "__main__":
    main()
