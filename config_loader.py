# config_loader.py

"""
Loads and validates config.json.

Data Contract:
- load_config(path) -> dict:
    - Inputs: path (str) to a JSON file.
    - Outputs: The parsed configuration, with every missing key of the
      'simulation' and 'logging' sections filled from the defaults below.
    - Raises: ConfigError if the file is missing, is not valid JSON, or holds
      out-of-range values.
"""

import json
import logging
from typing import Any, Dict

import constants

logger = logging.getLogger("particle_sim")

DEFAULT_LOGGING = {
    "level": "INFO",
    "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
}

DEFAULT_SIMULATION = {
    "spawn_probability": constants.SPAWN_PROBABILITY,
    "updates_per_second": constants.UPDATES_PER_SECOND,
    "refresh_limit": constants.REFRESH_LIMIT,
    "width": constants.WIDTH,
    "height": constants.HEIGHT,
    "pixel_scale": constants.PIXEL_SCALE,
    "log_throttle_ticks": 100,
    "max_ticks": None,
    "profile": False,
}


class ConfigError(ValueError):
    """Raised when config.json cannot be used to start a run."""


def _validate(config: Dict[str, Any]) -> None:
    sim = config["simulation"]

    probability = sim["spawn_probability"]
    if not isinstance(probability, (int, float)) or not 0.0 <= probability <= 1.0:
        raise ConfigError(f"simulation.spawn_probability must be within [0, 1], got {probability!r}")

    for key in ("updates_per_second", "refresh_limit", "width", "height", "pixel_scale", "log_throttle_ticks"):
        value = sim[key]
        if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
            raise ConfigError(f"simulation.{key} must be a positive integer, got {value!r}")

    max_ticks = sim["max_ticks"]
    if max_ticks is not None and (not isinstance(max_ticks, int) or max_ticks <= 0):
        raise ConfigError(f"simulation.max_ticks must be a positive integer or null, got {max_ticks!r}")

    seed = config["master_seed"]
    if seed is not None and not isinstance(seed, int):
        raise ConfigError(f"master_seed must be an integer or null, got {seed!r}")


def load_config(path: str) -> Dict[str, Any]:
    """Loads a JSON configuration file and fills in defaults."""
    logger.info(f"Loading configuration from {path}...")
    try:
        with open(path, 'r') as f:
            config = json.load(f)
    except FileNotFoundError as e:
        raise ConfigError(f"Configuration file not found at {path}.") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Error decoding JSON from {path}: {e}") from e

    if not isinstance(config, dict):
        raise ConfigError(f"Configuration in {path} must be a JSON object.")

    config.setdefault("run_id", "default")
    config.setdefault("master_seed", None)
    config["logging"] = {**DEFAULT_LOGGING, **config.get("logging", {})}
    config["simulation"] = {**DEFAULT_SIMULATION, **config.get("simulation", {})}

    _validate(config)
    logger.info("Configuration loaded successfully.")
    return config
