"""Workout configuration model."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace

from interval_timer.core.state import Phase


class ConfigError(ValueError):
    """Raised when a workout configuration is invalid."""


@dataclass(frozen=True)
class WorkoutConfig:
    prep_seconds: int
    work_seconds: int
    rest_seconds: int
    rounds: int
    cooldown_seconds: int

    def __post_init__(self) -> None:
        for field in fields(self):
            value = getattr(self, field.name)
            # bool is an int subclass, but True rounds is never meant.
            if not isinstance(value, int) or isinstance(value, bool):
                raise ConfigError(f"{field.name} must be an integer, got {value!r}")
            if value < 0:
                raise ConfigError(f"{field.name} must be >= 0")
        if self.rounds < 1:
            raise ConfigError("rounds must be >= 1")

    @property
    def total_duration(self) -> int:
        return (
            self.prep_seconds
            + self.work_seconds * self.rounds
            + self.rest_seconds * max(0, self.rounds - 1)
            + self.cooldown_seconds
        )

    def phase_seconds(self, phase: Phase) -> int:
        if phase is Phase.PREP:
            return self.prep_seconds
        if phase is Phase.WORK:
            return self.work_seconds
        if phase is Phase.REST:
            return self.rest_seconds
        if phase is Phase.COOLDOWN:
            return self.cooldown_seconds
        return 0

    def with_changes(self, **changes: int) -> WorkoutConfig:
        return replace(self, **changes)

    @property
    def prep_display(self) -> str:
        return format_seconds(self.prep_seconds)

    @property
    def work_display(self) -> str:
        return format_seconds(self.work_seconds)

    @property
    def rest_display(self) -> str:
        return format_seconds(self.rest_seconds)

    @property
    def rounds_display(self) -> str:
        return str(self.rounds)

    @property
    def cooldown_display(self) -> str:
        if self.cooldown_seconds == 0:
            return "None"
        return format_seconds(self.cooldown_seconds)

    @property
    def total_duration_display(self) -> str:
        return format_seconds(self.total_duration)


def format_seconds(seconds: int) -> str:
    if seconds < 60:
        return f"{seconds} s"
    minutes, secs = divmod(seconds, 60)
    if secs == 0:
        return f"{minutes} min"
    return f"{minutes:d}:{secs:02d}"


def format_clock(seconds: int) -> str:
    minutes, secs = divmod(max(0, seconds), 60)
    return f"{minutes:02d}:{secs:02d}"
