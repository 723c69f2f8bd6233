"""Local persistence for the workout configuration."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, fields
from pathlib import Path

from interval_timer.workout.model import ConfigError, WorkoutConfig
from interval_timer.workout.presets import default_config

logger = logging.getLogger(__name__)

HOME_ENV_VAR = "INTERVAL_TIMER_HOME"


def _default_config_path() -> Path:
    override = os.environ.get(HOME_ENV_VAR)
    root = Path(override) if override else Path.home() / ".interval-timer"
    return root / "config.json"


def encode_config(config: WorkoutConfig) -> dict[str, int]:
    return asdict(config)


def decode_config(data: object) -> WorkoutConfig:
    if not isinstance(data, dict):
        raise ConfigError("Config JSON must be an object")

    values: dict[str, int] = {}
    for field in fields(WorkoutConfig):
        if field.name not in data:
            raise ConfigError(f"Config field '{field.name}' is missing")
        values[field.name] = data[field.name]
    return WorkoutConfig(**values)


def save_config(config: WorkoutConfig, path: Path | None = None) -> Path:
    target = path or _default_config_path()
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(
        json.dumps(encode_config(config), ensure_ascii=True, indent=2),
        encoding="utf-8",
    )
    return target


def load_config(path: Path | None = None) -> WorkoutConfig:
    target = path or _default_config_path()
    if not target.exists():
        return default_config()

    try:
        return decode_config(json.loads(target.read_text(encoding="utf-8")))
    except (OSError, ValueError) as exc:
        logger.warning("Ignoring unreadable config %s (%s); using defaults", target, exc)
        return default_config()
