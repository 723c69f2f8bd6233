"""Phase and run-state types shared by the engine and its hosts."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Phase(Enum):
    PREP = "prep"
    WORK = "work"
    REST = "rest"
    COOLDOWN = "cooldown"
    DONE = "done"

    @property
    def display_name(self) -> str:
        return _PHASE_DISPLAY[self]

    @property
    def cue(self) -> str | None:
        """Name of the sound/haptic cue played when this phase is entered.

        Prep is only entered by start or reset, which raise no transition.
        """
        return _PHASE_CUES.get(self)


_PHASE_DISPLAY: dict[Phase, str] = {
    Phase.PREP: "Get ready",
    Phase.WORK: "Work",
    Phase.REST: "Rest",
    Phase.COOLDOWN: "Cool down",
    Phase.DONE: "Done",
}

_PHASE_CUES: dict[Phase, str] = {
    Phase.WORK: "start",
    Phase.REST: "rest",
    Phase.COOLDOWN: "cooldown",
    Phase.DONE: "finish",
}


class RunState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    FINISHED = "finished"


@dataclass(frozen=True)
class EngineSnapshot:
    phase: Phase
    remaining_seconds: int
    current_round: int
    run_state: RunState
