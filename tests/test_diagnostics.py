import numpy as np
import pytest
from PIL import Image

from logo_metrics.diagnostics import DiagnosticsTracker, Timer
from logo_metrics.metrics import inspect_pixels
from tests.helpers import canvas, with_block


def test_disabled_tracker_records_nothing(tmp_path):
    tracker = DiagnosticsTracker()

    assert not tracker.enabled
    tracker.track_file("a.png", (10, 10), 0.001, 0.002, True)
    tracker.export()
    assert tracker.records == []
    assert tracker.save_overlay("a.png", canvas(4, 4), None) is None


def test_track_file_converts_to_milliseconds(tmp_path):
    tracker = DiagnosticsTracker(profile_output=tmp_path / "profile.json")

    tracker.track_file("a.png", (20, 10), 0.001, 0.002, False)

    record = tracker.records[0]
    assert record.sample_width == 20 and record.sample_height == 10
    assert record.total_ms == pytest.approx(3.0)
    assert record.content_found is False


def test_overlay_marks_content_box(tmp_path):
    rgba = with_block(canvas(12, 12), 3, 4, 6, 5)
    tracker = DiagnosticsTracker(debug_output_dir=tmp_path)

    output = tracker.save_overlay("logo.svg", rgba, inspect_pixels(rgba, 10))

    assert output == tmp_path / "logo_overlay.png"
    with Image.open(output) as image:
        drawn = np.asarray(image.convert("RGBA"))
    assert tuple(drawn[4, 3]) == (255, 0, 0, 255)
    assert tuple(drawn[8, 3]) == (255, 0, 0, 255)


def test_timer_measures_elapsed():
    with Timer() as timer:
        sum(range(1000))
    assert timer.elapsed >= 0.0
