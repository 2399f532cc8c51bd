"""End-to-end run of the entry point under the SDL dummy driver."""
from __future__ import annotations

import json

import main


def test_main_runs_a_few_frames_and_reports(tmp_path, restore_root_logger):
    log_file = tmp_path / "logs" / "run.log"
    config = {
        "simulation_parameters": {"seed": 3},
        "run_control": {"max_frames": 3, "log_throttle_frames": 1, "profile": True},
        "visualization": {
            "canvas_width": 320,
            "canvas_height": 240,
            "window_width": 160,
            "window_height": 120,
        },
        "logging": {"level": "DEBUG", "log_file": str(log_file)},
    }
    path = tmp_path / "config.json"
    path.write_text(json.dumps(config))

    main.main(str(path))

    text = log_file.read_text()
    assert "World initialized with" in text
    assert "Frame 1 | Ticks:" in text
    assert "Average Speed" in text
    assert "Reached max_frames (3)" in text
    assert "--- Performance Profile ---" in text
    assert "Shutting Down" in text


def test_main_reports_a_missing_config(tmp_path, capsys):
    main.main(str(tmp_path / "absent.json"))
    assert "FATAL" in capsys.readouterr().out
