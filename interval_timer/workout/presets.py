"""Built-in interval presets."""

from __future__ import annotations

from dataclasses import dataclass

from interval_timer.workout.model import WorkoutConfig


@dataclass(frozen=True)
class WorkoutPreset:
    key: str
    name: str
    description: str
    config: WorkoutConfig


PRESETS: tuple[WorkoutPreset, ...] = (
    WorkoutPreset(
        key="tabata_classic",
        name="Tabata Classic",
        description="20s hard / 10s easy, 8 rounds (4 min)",
        config=WorkoutConfig(
            prep_seconds=10,
            work_seconds=20,
            rest_seconds=10,
            rounds=8,
            cooldown_seconds=30,
        ),
    ),
    WorkoutPreset(
        key="hiit_standard",
        name="HIIT Standard",
        description="Longer 40/20 intervals, 6 rounds",
        config=WorkoutConfig(
            prep_seconds=10,
            work_seconds=40,
            rest_seconds=20,
            rounds=6,
            cooldown_seconds=60,
        ),
    ),
    WorkoutPreset(
        key="beginner",
        name="Beginner",
        description="Even 20/20 intervals, 4 rounds",
        config=WorkoutConfig(
            prep_seconds=15,
            work_seconds=20,
            rest_seconds=20,
            rounds=4,
            cooldown_seconds=60,
        ),
    ),
    WorkoutPreset(
        key="advanced",
        name="Advanced",
        description="45/15 intervals, 10 rounds",
        config=WorkoutConfig(
            prep_seconds=5,
            work_seconds=45,
            rest_seconds=15,
            rounds=10,
            cooldown_seconds=30,
        ),
    ),
)

DEFAULT_PRESET_KEY = "tabata_classic"


def list_presets() -> list[WorkoutPreset]:
    return list(PRESETS)


def get_preset(key: str) -> WorkoutPreset:
    for preset in PRESETS:
        if preset.key == key:
            return preset
    raise KeyError(f"Unknown preset: {key}")


def default_config() -> WorkoutConfig:
    return get_preset(DEFAULT_PRESET_KEY).config
