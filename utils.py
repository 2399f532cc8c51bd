# utils.py
"""
Utility functions for the animation framework.

This module provides helper functions, such as logging setup and config
loading, that are used across different parts of the application but do
not belong to a specific domain like physics or rendering.
"""
import copy
import logging
import logging.handlers
import json
import os
from typing import Dict, Any

import constants

# --- Data Contracts ---
#
# setup_logging(config: Dict[str, Any]) -> None:
#   - Inputs:
#     - config: A dictionary containing a "logging" key with "level",
#       "format", and "log_file" sub-keys.
#   - Outputs: None
#   - Side Effects: Configures the root Python logger. Creates a log
#     directory if it doesn't exist. Sets up a console handler and a
#     rotating file handler.
#
# load_config(path: str) -> Dict[str, Any]:
#   - Outputs: The file's sections merged over DEFAULT_CONFIG.
#   - Invariants: The returned config has passed validate_config().

DEFAULT_CONFIG: Dict[str, Any] = {
    "simulation_parameters": {
        "seed": None,
        "body_count_min": constants.BODY_COUNT_MIN,
        "body_count_max": constants.BODY_COUNT_MAX,
        "body_width_range": list(constants.BODY_WIDTH_RANGE),
        "body_height_range": list(constants.BODY_HEIGHT_RANGE),
        "initial_speed": constants.INITIAL_SPEED,
        "body_color": constants.BODY_COLOR,
        "collided_color": constants.COLLIDED_COLOR,
        "pointer_size": list(constants.POINTER_SIZE),
        "pointer_color": constants.POINTER_COLOR,
        "force_strength": constants.FORCE_STRENGTH,
        "attraction_exponent": constants.ATTRACTION_EXPONENT,
        "min_distance": constants.MIN_DISTANCE,
    },
    "run_control": {
        "tick_interval_ms": constants.TICK_INTERVAL_MS,
        "hold_interval_ms": constants.HOLD_INTERVAL_MS,
        "max_frames": 0,
        "log_throttle_frames": 300,
        "profile": False,
    },
    "visualization": {
        "canvas_width": constants.CANVAS_WIDTH,
        "canvas_height": constants.CANVAS_HEIGHT,
        "window_width": constants.CANVAS_WIDTH,
        "window_height": constants.CANVAS_HEIGHT,
        "fps": constants.FPS,
        "background_color": list(constants.BACKGROUND_COLOR),
        "title": constants.WINDOW_TITLE,
    },
    "logging": {
        "level": "INFO",
        "format": "%(asctime)s - %(levelname)s - %(message)s",
        "log_file": "logs/animation.log",
    },
}


def setup_logging(config: Dict[str, Any]) -> None:
    """
    Configures the logging system from a configuration dictionary.

    Sets up logging to both the console and a rotating file.
    """
    log_config = config.get('logging', {})
    log_level = log_config.get('level', 'INFO').upper()
    log_format = log_config.get('format', '%(asctime)s - %(levelname)s - %(message)s')
    log_file_path = log_config.get('log_file', 'logs/animation.log')

    # Ensure the log directory exists
    log_dir = os.path.dirname(log_file_path)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

    logger = logging.getLogger()
    logger.setLevel(log_level)

    # Clear existing handlers to avoid duplication
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(log_format)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # Rotates when the log reaches 1MB, keeps 5 backup logs.
    file_handler = logging.handlers.RotatingFileHandler(
        log_file_path, maxBytes=1024*1024, backupCount=5
    )
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    logging.info("Logging system initialized.")
    logging.debug(f"Log level set to {log_level}.")
    logging.debug(f"Log file path: {log_file_path}")


def merge_config(overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Returns DEFAULT_CONFIG with each section updated from `overrides`."""
    merged = copy.deepcopy(DEFAULT_CONFIG)
    for section, values in overrides.items():
        if isinstance(values, dict) and section in merged:
            merged[section].update(values)
        else:
            merged[section] = values
    return merged


def _fail(msg: str) -> None:
    logging.critical(f"Configuration error: {msg}")
    raise ValueError(f"Configuration error: {msg}")


def validate_config(config: Dict[str, Any]) -> None:
    """
    Checks the values the physics and scheduling code relies on.

    Raises:
        ValueError: If any value would break a body or timer invariant.
    """
    sim = config['simulation_parameters']
    run = config['run_control']
    vis = config['visualization']

    if sim['body_count_min'] < 1 or sim['body_count_max'] < sim['body_count_min']:
        _fail(
            f"body count range [{sim['body_count_min']}, {sim['body_count_max']}] "
            "must satisfy 1 <= min <= max."
        )
    for key in ('body_width_range', 'body_height_range'):
        low, high = sim[key]
        if low <= 0 or high < low:
            _fail(f"{key} {sim[key]} must be positive with low <= high.")
    if min(sim['pointer_size']) <= 0:
        _fail(f"pointer_size {sim['pointer_size']} must be positive.")
    if sim['min_distance'] <= 0:
        _fail(f"min_distance must be positive, got {sim['min_distance']}.")
    if run['log_throttle_frames'] < 1:
        _fail(f"log_throttle_frames must be at least 1, got {run['log_throttle_frames']}.")
    for key in ('tick_interval_ms', 'hold_interval_ms'):
        if run[key] <= 0:
            _fail(f"{key} must be positive, got {run[key]}.")
    for key in ('canvas_width', 'canvas_height', 'window_width', 'window_height', 'fps'):
        if vis[key] <= 0:
            _fail(f"{key} must be positive, got {vis[key]}.")


def load_config(path: str) -> Dict[str, Any]:
    """Loads a JSON configuration file and fills in defaults."""
    logging.info(f"Loading configuration from {path}...")
    try:
        with open(path, 'r') as f:
            raw = json.load(f)
    except FileNotFoundError:
        logging.error(f"Configuration file not found at {path}.")
        raise
    except json.JSONDecodeError:
        logging.error(f"Error decoding JSON from {path}.")
        raise

    config = merge_config(raw)
    validate_config(config)
    logging.info("Configuration loaded successfully.")
    return config
