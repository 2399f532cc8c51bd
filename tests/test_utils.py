"""Tests for configuration loading and logging setup."""
from __future__ import annotations

import json
import logging

import pytest

from utils import DEFAULT_CONFIG, load_config, merge_config, setup_logging, validate_config


def write_config(tmp_path, data) -> str:
    path = tmp_path / "config.json"
    path.write_text(json.dumps(data))
    return str(path)


def test_partial_config_is_merged_over_defaults(tmp_path):
    path = write_config(tmp_path, {"simulation_parameters": {"seed": 9, "initial_speed": 2.0}})
    config = load_config(path)
    assert config["simulation_parameters"]["seed"] == 9
    assert config["simulation_parameters"]["initial_speed"] == 2.0
    assert config["simulation_parameters"]["force_strength"] == 150.0
    assert config["run_control"]["tick_interval_ms"] == 16
    assert config["run_control"]["hold_interval_ms"] == 100


def test_merge_does_not_touch_defaults():
    merged = merge_config({"visualization": {"fps": 30}})
    assert merged["visualization"]["fps"] == 30
    assert DEFAULT_CONFIG["visualization"]["fps"] == 60


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / "absent.json"))


def test_malformed_json_raises(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json")
    with pytest.raises(json.JSONDecodeError):
        load_config(str(path))


@pytest.mark.parametrize(
    "section, key, value",
    [
        ("simulation_parameters", "body_count_min", 0),
        ("simulation_parameters", "body_count_max", 10),
        ("simulation_parameters", "body_width_range", [0, 10]),
        ("simulation_parameters", "body_height_range", [30, 20]),
        ("simulation_parameters", "pointer_size", [25, 0]),
        ("simulation_parameters", "min_distance", 0),
        ("run_control", "tick_interval_ms", 0),
        ("run_control", "hold_interval_ms", -5),
        ("run_control", "log_throttle_frames", 0),
        ("visualization", "canvas_width", 0),
    ],
)
def test_invalid_values_rejected(section, key, value, caplog):
    config = merge_config({section: {key: value}})
    with caplog.at_level(logging.CRITICAL):
        with pytest.raises(ValueError):
            validate_config(config)
    assert any(record.levelno == logging.CRITICAL for record in caplog.records)


def test_default_config_is_valid():
    validate_config(merge_config({}))


def test_setup_logging_installs_console_and_file(tmp_path, restore_root_logger):
    log_file = tmp_path / "logs" / "animation.log"
    setup_logging({"logging": {"level": "debug", "log_file": str(log_file)}})

    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert len(root.handlers) == 2
    assert log_file.parent.is_dir()

    logging.info("hello from the test")
    for handler in root.handlers:
        handler.flush()
    assert "hello from the test" in log_file.read_text()
