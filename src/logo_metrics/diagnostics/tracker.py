"""Profiling and diagnostics tracking for batch analysis."""

from __future__ import annotations

import csv
import json
import threading
import time
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import List, Optional

import numpy as np
from PIL import Image, ImageDraw

from logo_metrics.metrics.extractor import PixelAnalysis


@dataclass
class TimingRecord:
    """Timing metrics for a single analysed file."""

    name: str
    sample_width: int
    sample_height: int
    decode_ms: float
    analyze_ms: float
    total_ms: float
    content_found: bool


@dataclass
class DiagnosticsTracker:
    """Collects per-file timings and writes debug overlays."""

    profile_output: Optional[Path] = None
    debug_output_dir: Optional[Path] = None
    records: List[TimingRecord] = field(default_factory=list)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    @property
    def enabled(self) -> bool:
        return self.profile_output is not None or self.debug_output_dir is not None

    def track_file(
        self,
        name: str,
        sample_size: tuple[int, int],
        decode_s: float,
        analyze_s: float,
        content_found: bool,
    ) -> None:
        if self.profile_output is None:
            return
        record = TimingRecord(
            name=name,
            sample_width=sample_size[0],
            sample_height=sample_size[1],
            decode_ms=decode_s * 1000.0,
            analyze_ms=analyze_s * 1000.0,
            total_ms=(decode_s + analyze_s) * 1000.0,
            content_found=content_found,
        )
        with self._lock:
            self.records.append(record)

    def export(self) -> None:
        """Export timing records to JSON and a sibling CSV if configured."""

        if not self.records or not self.profile_output:
            return

        with self._lock:
            records = sorted(self.records, key=lambda record: record.name)

        self.profile_output.parent.mkdir(parents=True, exist_ok=True)
        payload = [asdict(record) for record in records]
        self.profile_output.write_text(json.dumps(payload, indent=2))

        csv_path = self.profile_output.with_suffix(".csv")
        with csv_path.open("w", newline="") as handle:
            writer = csv.DictWriter(handle, fieldnames=list(payload[0].keys()))
            writer.writeheader()
            for row in payload:
                writer.writerow(row)

    def save_overlay(self, name: str, rgba: np.ndarray, analysis: Optional[PixelAnalysis]) -> Optional[Path]:
        """Draw the content box and visual center over the sampled image."""

        if not self.debug_output_dir:
            return None
        self.debug_output_dir.mkdir(parents=True, exist_ok=True)
        image = Image.fromarray(np.ascontiguousarray(rgba, dtype=np.uint8)).convert("RGBA")
        if analysis is not None:
            draw = ImageDraw.Draw(image)
            box = analysis.content_box
            draw.rectangle(
                (box.x, box.y, box.x + box.width - 1, box.y + box.height - 1),
                outline=(255, 0, 0, 255),
                width=1,
            )
            center_x = box.x + box.width / 2 + analysis.center_offset[0]
            center_y = box.y + box.height / 2 + analysis.center_offset[1]
            draw.ellipse(
                (center_x - 2, center_y - 2, center_x + 2, center_y + 2),
                outline=(0, 160, 255, 255),
                width=1,
            )
        output = self.debug_output_dir / f"{Path(name).stem}_overlay.png"
        image.save(output)
        return output


class Timer:
    """Simple context timer for profiling blocks."""

    def __init__(self) -> None:
        self.start = 0.0
        self.elapsed = 0.0

    def __enter__(self) -> "Timer":
        self.start = time.perf_counter()
        return self

    def __exit__(self, *_exc: object) -> None:
        self.elapsed = time.perf_counter() - self.start
