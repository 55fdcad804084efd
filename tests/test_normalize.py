import pytest

from logo_metrics.config import NormalizeConfig
from logo_metrics.data import Metrics
from logo_metrics.normalize import density_scale, normalize


def make_metrics(**overrides):
    values = {
        "content_ratio": 1.0,
        "pixel_density": 0.35,
        "visual_center_x": 0.0,
        "visual_center_y": 0.0,
    }
    values.update(overrides)
    return Metrics(**values)


def test_reference_density_square_keeps_base_size():
    config = NormalizeConfig(base_size=48, scale_factor=0.5, density_factor=0.5, reference_density=0.35)

    result = normalize(make_metrics(), config)

    assert (result.width, result.height) == (48, 48)
    assert result.offset_x == 0
    assert result.offset_y == 0


def test_returns_integer_width_and_height():
    result = normalize(make_metrics(content_ratio=2.0))
    assert isinstance(result.width, int)
    assert isinstance(result.height, int)
    assert result.to_dict() == {
        "width": result.width,
        "height": result.height,
        "offsetX": result.offset_x,
        "offsetY": result.offset_y,
    }


def test_width_grows_strictly_with_ratio():
    widths = [normalize(make_metrics(content_ratio=ratio)).width for ratio in (0.25, 0.5, 1, 2, 4, 8)]
    assert widths == sorted(widths)
    assert len(set(widths)) == len(widths)


def test_scale_factor_extremes():
    flat = NormalizeConfig(scale_factor=0.0)
    result = normalize(make_metrics(content_ratio=2.0), flat)
    assert (result.width, result.height) == (48, 24)

    true_aspect = NormalizeConfig(scale_factor=1.0)
    result = normalize(make_metrics(content_ratio=2.0), true_aspect)
    assert (result.width, result.height) == (96, 48)


def test_respects_custom_base_size():
    small = normalize(make_metrics(), NormalizeConfig(base_size=24))
    large = normalize(make_metrics(), NormalizeConfig(base_size=96))
    assert large.width > small.width


def test_dense_logos_shrink_and_sparse_logos_grow():
    reference = normalize(make_metrics())
    dense = normalize(make_metrics(pixel_density=0.7))
    sparse = normalize(make_metrics(pixel_density=0.1))

    assert dense.width < reference.width
    assert dense.height < reference.height
    assert sparse.width > reference.width


def test_density_scale_is_clamped():
    config = NormalizeConfig(density_factor=1.0, density_dampening=1.0)
    assert density_scale(100.0, config) == 0.5
    assert density_scale(1e-6, config) == 2.0

    assert normalize(make_metrics(pixel_density=100.0), config).width == 24
    assert normalize(make_metrics(pixel_density=1e-6), config).width == 96


def test_density_compensation_disabled():
    assert normalize(make_metrics(pixel_density=0.0)).width == 48
    no_density = NormalizeConfig(density_factor=0.0)
    assert normalize(make_metrics(pixel_density=0.9), no_density).width == 48


def test_offsets_invert_visual_center():
    result = normalize(make_metrics(visual_center_x=0.1, visual_center_y=-0.05))
    assert result.offset_x == pytest.approx(-4.8)
    assert result.offset_y == pytest.approx(2.4)


def test_dimensions_stay_positive_for_tiny_logos():
    result = normalize(make_metrics(content_ratio=1e-6), NormalizeConfig(base_size=1))
    assert result.width >= 1
    assert result.height >= 1
