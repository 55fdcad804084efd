"""Flask service exposing logo analysis over HTTP."""

from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, Optional
from xml.etree.ElementTree import ParseError

from flask import Flask, jsonify, request
from PIL import Image, UnidentifiedImageError

from logo_metrics.analysis import analyze_pixels, normalize_directory
from logo_metrics.config import Config, NormalizeConfig, normalize_extensions
from logo_metrics.io import decode_pixels
from logo_metrics.normalize import normalize

logger = logging.getLogger(__name__)

_NORMALIZE_FIELDS = (
    "base_size",
    "scale_factor",
    "density_factor",
    "density_dampening",
    "reference_density",
)


def _normalize_overrides(base: NormalizeConfig, form: Dict[str, Any]) -> NormalizeConfig:
    """Apply numeric form fields on top of the service defaults."""

    values = {}
    for name in _NORMALIZE_FIELDS:
        raw = form.get(name)
        if raw in (None, ""):
            continue
        try:
            values[name] = float(raw)
        except (TypeError, ValueError):
            raise ValueError(f"Invalid value for {name}: {raw!r} (expected a number)") from None
    return replace(base, **values)


def create_app(config: Optional[Config] = None, directory_root: Optional[Path] = None) -> Flask:
    """Build the service.

    ``/analyze-directory`` reads directories on the server host and has no
    authentication; pass ``directory_root`` to confine it to one tree.
    """

    app = Flask(__name__)
    settings = config or Config()
    root = Path(directory_root).expanduser().resolve() if directory_root else None

    @app.route("/health")
    def health():
        return jsonify({"status": "ok"})

    @app.route("/analyze", methods=["POST"])
    def analyze():
        upload = request.files.get("image")
        if upload is None:
            return jsonify({"error": "Missing 'image' upload"}), 400
        try:
            normalize_config = _normalize_overrides(settings.normalize, request.form)
            is_svg = (upload.filename or "").lower().endswith(".svg")
            buffer = decode_pixels(upload.read(), settings.analyze.sample_max_size, is_svg=is_svg)
        except (UnidentifiedImageError, Image.DecompressionBombError, ParseError, ValueError) as exc:
            return jsonify({"error": str(exc)}), 400

        metrics = analyze_pixels(buffer, settings.analyze)
        if metrics is None:
            return jsonify({"error": "No content detected"}), 422
        dimensions = normalize(metrics, normalize_config)
        logger.debug("Analyzed upload %s: %s", upload.filename, dimensions)
        return jsonify({"metrics": metrics.to_dict(), "dimensions": dimensions.to_dict()})

    @app.route("/analyze-directory", methods=["POST"])
    def analyze_directory():
        payload = request.get_json(silent=True) or {}
        directory = payload.get("directory")
        if not directory:
            return jsonify({"error": "Missing 'directory'"}), 400
        path = Path(directory).expanduser().resolve()
        if root is not None and path != root and root not in path.parents:
            return jsonify({"error": f"Directory outside allowed root: {path}"}), 403
        if not path.is_dir():
            return jsonify({"error": f"Directory not found: {path}"}), 404

        run_config = settings
        if payload.get("extensions"):
            run_config = replace(run_config, extensions=normalize_extensions(list(payload["extensions"])))
        results = normalize_directory(path, run_config)
        return jsonify({name: dimensions.to_dict() for name, dimensions in results.items()})

    return app
