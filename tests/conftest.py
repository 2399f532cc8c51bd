"""Shared fakes for the drawing surface and the millisecond clock."""
from __future__ import annotations

import copy
import logging
import os

# Must be set before pygame opens a display.
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import numpy as np
import pytest

from input_adapter import InputAdapter
from utils import DEFAULT_CONFIG


class RecordingCanvas:
    """Drawing surface that records every primitive call."""

    def __init__(self, width: int = 800, height: int = 600, displayed_size=None) -> None:
        self.width = width
        self.height = height
        self.displayed_size = displayed_size or (width, height)
        self.calls: list[tuple] = []

    def clear(self) -> None:
        self.calls.append(("clear",))

    def fill_rect(self, x, y, w, h, color) -> None:
        self.calls.append(("fill_rect", x, y, w, h, color))


class ManualClock:
    """Millisecond clock advanced by hand."""

    def __init__(self, now: float = 0.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms


@pytest.fixture
def sim_params() -> dict:
    params = copy.deepcopy(DEFAULT_CONFIG["simulation_parameters"])
    params["seed"] = 1234
    return params


@pytest.fixture
def run_params() -> dict:
    return copy.deepcopy(DEFAULT_CONFIG["run_control"])


@pytest.fixture
def canvas() -> RecordingCanvas:
    return RecordingCanvas()


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def input_adapter(canvas, sim_params) -> InputAdapter:
    return InputAdapter(canvas, sim_params["pointer_size"])


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(42)


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
