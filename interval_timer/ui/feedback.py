"""Terminal cues for engine signals (stand-in for audio and haptics)."""

from __future__ import annotations

from interval_timer.core.engine import PhaseEngine
from interval_timer.core.state import Phase

BELL = "\a"


class TerminalFeedback:
    def __init__(self, bell: bool = True) -> None:
        self._bell = bell
        self.cues: list[str] = []

    def attach(self, engine: PhaseEngine) -> None:
        engine.on_phase_transition = self.on_phase_transition
        engine.on_countdown_warning = self.on_countdown_warning
        engine.on_workout_complete = self.on_workout_complete

    def on_phase_transition(self, phase: Phase) -> None:
        self._cue(phase.cue)
        print(f"\n>> {phase.display_name.upper()}")

    def on_countdown_warning(self, seconds_left: int) -> None:
        self.cues.append(f"countdown:{seconds_left}")
        print(f"   {seconds_left}...")

    def on_workout_complete(self) -> None:
        self._cue(Phase.DONE.cue)
        print("\n>> WORKOUT COMPLETE")

    def _cue(self, name: str | None) -> None:
        if name is None:
            return
        self.cues.append(name)
        if self._bell:
            print(BELL, end="", flush=True)


def status_line(engine: PhaseEngine) -> str:
    return (
        f"{engine.phase.display_name:<10} {engine.formatted_time} | "
        f"{engine.round_display} | {engine.run_state.value}"
    )
