"""Interval workout phase engine.

The engine owns the live countdown state and nothing else: it never reads a
clock, never sleeps and never plays sounds. A host delivers one ``tick()`` per
second while the engine is running and, after a suspension during which no
ticks were delivered, hands the elapsed whole seconds to ``reconcile()``.

Collaborators (audio, haptics, UI) subscribe to three signals:

* ``on_phase_transition(phase)`` when a new phase is entered by ticking,
* ``on_countdown_warning(seconds_left)`` for the last three seconds of a phase,
* ``on_workout_complete()`` once the workout is over.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from interval_timer.core.state import EngineSnapshot, Phase, RunState
from interval_timer.workout.model import WorkoutConfig, format_clock

logger = logging.getLogger(__name__)

PhaseCallback = Callable[[Phase], None]
CompleteCallback = Callable[[], None]
CountdownCallback = Callable[[int], None]

COUNTDOWN_WARNING_SECONDS = 3


class PhaseEngine:
    def __init__(
        self,
        config: WorkoutConfig,
        *,
        on_phase_transition: Optional[PhaseCallback] = None,
        on_workout_complete: Optional[CompleteCallback] = None,
        on_countdown_warning: Optional[CountdownCallback] = None,
    ) -> None:
        self._config = config
        self.on_phase_transition = on_phase_transition
        self.on_workout_complete = on_workout_complete
        self.on_countdown_warning = on_countdown_warning

        self._phase = Phase.PREP
        self._remaining_seconds = config.prep_seconds
        self._current_round = 1
        self._run_state = RunState.IDLE
        self._suspended_at: float | None = None
        self._remaining_at_suspend = 0

    # -- observable state -------------------------------------------------

    @property
    def config(self) -> WorkoutConfig:
        return self._config

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def remaining_seconds(self) -> int:
        return self._remaining_seconds

    @property
    def current_round(self) -> int:
        return self._current_round

    @property
    def run_state(self) -> RunState:
        return self._run_state

    @property
    def suspended_at(self) -> float | None:
        return self._suspended_at

    @property
    def remaining_at_suspend(self) -> int:
        return self._remaining_at_suspend

    @property
    def total_rounds(self) -> int:
        return self._config.rounds

    @property
    def phase_duration(self) -> int:
        return self._config.phase_seconds(self._phase)

    @property
    def progress(self) -> float:
        """Fraction of the current phase already elapsed."""
        total = self.phase_duration
        if total <= 0:
            return 0.0
        return (total - self._remaining_seconds) / total

    @property
    def formatted_time(self) -> str:
        return format_clock(self._remaining_seconds)

    @property
    def round_display(self) -> str:
        return f"Round {self._current_round} of {self.total_rounds}"

    @property
    def is_running(self) -> bool:
        return self._run_state is RunState.RUNNING

    @property
    def is_paused(self) -> bool:
        return self._run_state is RunState.PAUSED

    @property
    def is_finished(self) -> bool:
        return self._run_state is RunState.FINISHED

    @property
    def can_start(self) -> bool:
        return self._run_state in (RunState.IDLE, RunState.FINISHED)

    def snapshot(self) -> EngineSnapshot:
        return EngineSnapshot(
            phase=self._phase,
            remaining_seconds=self._remaining_seconds,
            current_round=self._current_round,
            run_state=self._run_state,
        )

    # -- controls ---------------------------------------------------------
    # Illegal calls are no-ops and return False; hosts may call speculatively.

    def start(self) -> bool:
        if not self.can_start:
            return False
        if self._run_state is RunState.FINISHED:
            self._restore_initial()
        self._run_state = RunState.RUNNING
        logger.info(
            "Workout started: %d rounds, %ds total",
            self._config.rounds,
            self._config.total_duration,
        )
        self._skip_empty_phases(notify=True)
        return True

    def pause(self) -> bool:
        if self._run_state is not RunState.RUNNING:
            return False
        self._run_state = RunState.PAUSED
        self._clear_suspension()
        logger.debug("Paused in %s with %ds left", self._phase.value, self._remaining_seconds)
        return True

    def resume(self) -> bool:
        if self._run_state is not RunState.PAUSED:
            return False
        self._run_state = RunState.RUNNING
        return True

    def reset(self) -> bool:
        self._restore_initial()
        self._run_state = RunState.IDLE
        return True

    def toggle(self) -> bool:
        if self._run_state is RunState.RUNNING:
            return self.pause()
        if self._run_state is RunState.PAUSED:
            return self.resume()
        return self.start()

    def update_config(self, config: WorkoutConfig) -> bool:
        """Swap the configuration; only accepted while idle or finished."""
        if self._run_state in (RunState.RUNNING, RunState.PAUSED):
            return False
        self._config = config
        if self._run_state is RunState.IDLE:
            self._restore_initial()
        return True

    # -- time -------------------------------------------------------------

    def tick(self) -> bool:
        if self._run_state is not RunState.RUNNING:
            return False

        if 0 < self._remaining_seconds <= COUNTDOWN_WARNING_SECONDS:
            self._emit_countdown(self._remaining_seconds)

        self._remaining_seconds -= 1
        if self._remaining_seconds <= 0:
            self._remaining_seconds = 0
            self._advance(notify=True)
            self._skip_empty_phases(notify=True)
        return True

    def mark_suspended(self, at: float) -> bool:
        """Record the suspension point; the tick source must already be stopped."""
        if self._run_state is not RunState.RUNNING:
            return False
        self._suspended_at = at
        self._remaining_at_suspend = self._remaining_seconds
        return True

    def reconcile_since(self, now: float) -> bool:
        if self._suspended_at is None:
            return False
        elapsed = int(now - self._suspended_at)
        return self.reconcile(elapsed)

    def reconcile(self, elapsed_seconds: int) -> bool:
        """Fast-forward by ``elapsed_seconds`` as if each second had ticked.

        The loop runs once per phase boundary crossed, so the cost depends on
        the number of phases left, not on how long the host was suspended.
        Time left over after the workout finishes is discarded.
        """
        if self._run_state is not RunState.RUNNING:
            return False

        if self._suspended_at is not None:
            cursor = self._remaining_at_suspend
        else:
            cursor = self._remaining_seconds
        self._clear_suspension()

        # A clock stepped backwards yields no time.
        elapsed = max(0, int(elapsed_seconds))
        transitions = 0
        while self._run_state is RunState.RUNNING and elapsed >= cursor:
            elapsed -= cursor
            self._advance(notify=False)
            cursor = self._remaining_seconds
            transitions += 1

        if self._run_state is RunState.RUNNING:
            self._remaining_seconds = cursor - elapsed

        logger.debug(
            "Reconciled %ss over %d transition(s): %s, round %d, %ds left",
            elapsed_seconds,
            transitions,
            self._phase.value,
            self._current_round,
            self._remaining_seconds,
        )
        return True

    # -- transitions ------------------------------------------------------

    def _advance(self, *, notify: bool) -> None:
        phase = self._phase
        if phase is Phase.PREP:
            self._enter(Phase.WORK, notify=notify)
        elif phase is Phase.WORK:
            if self._current_round < self._config.rounds:
                self._enter(Phase.REST, notify=notify)
            elif self._config.cooldown_seconds > 0:
                self._enter(Phase.COOLDOWN, notify=notify)
            else:
                self._finish()
        elif phase is Phase.REST:
            self._current_round += 1
            self._enter(Phase.WORK, notify=notify)
        elif phase is Phase.COOLDOWN:
            self._finish()

    def _skip_empty_phases(self, *, notify: bool) -> None:
        # A zero-second phase is left as soon as it is entered.
        while self._run_state is RunState.RUNNING and self._remaining_seconds == 0:
            self._advance(notify=notify)

    def _enter(self, phase: Phase, *, notify: bool) -> None:
        self._phase = phase
        self._remaining_seconds = self._config.phase_seconds(phase)
        logger.debug(
            "Entered %s (round %d/%d, %ds)",
            phase.value,
            self._current_round,
            self._config.rounds,
            self._remaining_seconds,
        )
        if notify and self.on_phase_transition is not None:
            self.on_phase_transition(phase)

    def _finish(self) -> None:
        self._phase = Phase.DONE
        self._run_state = RunState.FINISHED
        self._remaining_seconds = 0
        self._clear_suspension()
        logger.info("Workout complete after %d rounds", self._current_round)
        if self.on_workout_complete is not None:
            self.on_workout_complete()

    def _emit_countdown(self, seconds_left: int) -> None:
        if self.on_countdown_warning is not None:
            self.on_countdown_warning(seconds_left)

    def _restore_initial(self) -> None:
        self._phase = Phase.PREP
        self._current_round = 1
        self._remaining_seconds = self._config.prep_seconds
        self._clear_suspension()

    def _clear_suspension(self) -> None:
        self._suspended_at = None
        self._remaining_at_suspend = 0
