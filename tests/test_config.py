import json
from pathlib import Path

import pytest

from logo_metrics.config import (
    BASE_SIZE,
    DEFAULT_EXTENSIONS,
    AnalyzeConfig,
    Config,
    NormalizeConfig,
    load_config,
)


def test_defaults():
    config = load_config()

    assert config == Config()
    assert config.analyze == AnalyzeConfig(sample_max_size=200, contrast_threshold=10)
    assert config.normalize.base_size == BASE_SIZE == 48
    assert config.normalize == NormalizeConfig(
        base_size=48,
        scale_factor=0.5,
        density_factor=0.5,
        density_dampening=0.5,
        reference_density=0.35,
    )
    assert config.extensions == DEFAULT_EXTENSIONS
    assert config.output == Path("logo-metrics.json")


def test_file_values_merge_with_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps(
            {
                "normalize": {"base_size": 64},
                "analyze": {"contrast_threshold": 20},
                "extensions": [".PNG", " svg "],
                "workers": 3,
            }
        )
    )

    config = load_config(path)

    assert config.normalize.base_size == 64
    assert config.normalize.scale_factor == 0.5
    assert config.analyze.contrast_threshold == 20
    assert config.analyze.sample_max_size == 200
    assert config.extensions == ["png", "svg"]
    assert config.workers == 3


def test_overrides_win_and_none_is_ignored(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"normalize": {"base_size": 64, "density_factor": 0.2}}))

    config = load_config(
        path,
        {
            "normalize": {"base_size": 32, "density_factor": None},
            "output": None,
            "extensions": "png,webp",
        },
    )

    assert config.normalize.base_size == 32
    assert config.normalize.density_factor == 0.2
    assert config.output == Path("logo-metrics.json")
    assert config.extensions == ["png", "webp"]


def test_unknown_keys_are_rejected(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"normalize": {"base_sise": 64}}))
    with pytest.raises(ValueError, match="base_sise"):
        load_config(path)

    with pytest.raises(ValueError, match="colour"):
        load_config(overrides={"colour": "red"})


def test_configs_are_frozen():
    config = Config()
    with pytest.raises(AttributeError):
        config.normalize.base_size = 10
