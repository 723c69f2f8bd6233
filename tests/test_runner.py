from __future__ import annotations

import asyncio

from interval_timer.core.engine import PhaseEngine
from interval_timer.core.state import EngineSnapshot, Phase, RunState
from interval_timer.workout.model import WorkoutConfig
from interval_timer.workout.runner import TimerRunner

TWOS = WorkoutConfig(2, 2, 2, 2, 2)


class _FakeClock:
    def __init__(self, now: float = 0.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


def _ticked(config: WorkoutConfig, ticks: int) -> EngineSnapshot:
    engine = PhaseEngine(config)
    engine.start()
    for _ in range(ticks):
        engine.tick()
    return engine.snapshot()


def test_runner_ticks_workout_to_completion() -> None:
    async def _run() -> None:
        completions: list[bool] = []
        updates: list[EngineSnapshot] = []
        engine = PhaseEngine(
            WorkoutConfig(1, 1, 1, 2, 1),
            on_workout_complete=lambda: completions.append(True),
        )
        runner = TimerRunner(engine, tick_interval_sec=0.01, on_update=updates.append)

        assert await runner.start()
        assert runner.is_running
        await asyncio.wait_for(runner.join(), timeout=5.0)

        assert not runner.is_running
        assert engine.snapshot() == EngineSnapshot(Phase.DONE, 0, 2, RunState.FINISHED)
        assert completions == [True]
        assert updates[0].run_state is RunState.RUNNING
        assert updates[-1].phase is Phase.DONE

    asyncio.run(_run())


def test_runner_start_twice_is_noop() -> None:
    async def _run() -> None:
        runner = TimerRunner(PhaseEngine(TWOS), clock=_FakeClock())
        assert await runner.start()
        assert await runner.start() is False
        await runner.stop()

    asyncio.run(_run())


def test_suspend_then_resume_reconciles_elapsed_time() -> None:
    async def _run() -> None:
        clock = _FakeClock(100.0)
        engine = PhaseEngine(TWOS)
        runner = TimerRunner(engine, clock=clock)

        await runner.start()
        assert await runner.suspend()
        assert not runner.is_running
        assert engine.suspended_at == 100.0

        clock.now = 107.0
        assert await runner.resume_after_suspend()

        assert engine.snapshot() == _ticked(TWOS, 7)
        assert runner.is_running
        await runner.stop()

    asyncio.run(_run())


def test_resume_after_suspend_that_finishes_workout_does_not_restart_ticks() -> None:
    async def _run() -> None:
        clock = _FakeClock(0.0)
        engine = PhaseEngine(TWOS)
        runner = TimerRunner(engine, clock=clock)

        await runner.start()
        await runner.suspend()
        clock.now = 3600.0
        await runner.resume_after_suspend()

        assert engine.is_finished
        assert not runner.is_running

    asyncio.run(_run())


def test_short_lag_is_replayed_with_cues() -> None:
    async def _run() -> None:
        clock = _FakeClock(0.0)
        transitions: list[Phase] = []
        warnings: list[int] = []
        updates: list[EngineSnapshot] = []
        engine = PhaseEngine(
            TWOS,
            on_phase_transition=transitions.append,
            on_countdown_warning=warnings.append,
        )
        runner = TimerRunner(
            engine, tick_interval_sec=0.25, clock=clock, on_update=updates.append
        )

        await runner.start()
        await asyncio.sleep(0)
        # Three intervals pass on the clock during a single wait, across the
        # prep -> work boundary.
        clock.now = 0.75
        await asyncio.sleep(0.4)

        assert engine.snapshot() == _ticked(TWOS, 3)
        assert updates[-1] == _ticked(TWOS, 3)
        assert transitions == [Phase.WORK]
        assert warnings == [2, 1, 2]
        await runner.stop()

    asyncio.run(_run())


def test_long_stall_catches_up_with_reconcile() -> None:
    async def _run() -> None:
        clock = _FakeClock(0.0)
        transitions: list[Phase] = []
        completions: list[bool] = []
        engine = PhaseEngine(
            TWOS,
            on_phase_transition=transitions.append,
            on_workout_complete=lambda: completions.append(True),
        )
        runner = TimerRunner(engine, tick_interval_sec=0.25, clock=clock)

        await runner.start()
        await asyncio.sleep(0)
        clock.now = 2.5
        await asyncio.wait_for(runner.join(), timeout=5.0)

        assert engine.snapshot() == _ticked(TWOS, 10)
        assert transitions == []
        assert completions == [True]

    asyncio.run(_run())


def test_resume_publishes_running_state() -> None:
    async def _run() -> None:
        updates: list[EngineSnapshot] = []
        engine = PhaseEngine(TWOS)
        runner = TimerRunner(engine, clock=_FakeClock(), on_update=updates.append)

        await runner.start()
        await runner.pause()
        assert updates[-1].run_state is RunState.PAUSED

        assert await runner.resume()
        assert updates[-1].run_state is RunState.RUNNING
        await runner.stop()

    asyncio.run(_run())


def test_pause_resume_reset_control_the_tick_task() -> None:
    async def _run() -> None:
        engine = PhaseEngine(TWOS)
        runner = TimerRunner(engine, clock=_FakeClock())

        await runner.toggle()
        assert engine.run_state is RunState.RUNNING
        assert runner.is_running

        assert await runner.pause()
        assert engine.run_state is RunState.PAUSED
        assert not runner.is_running

        assert await runner.toggle()
        assert engine.run_state is RunState.RUNNING
        assert runner.is_running

        assert await runner.reset()
        assert engine.snapshot() == EngineSnapshot(Phase.PREP, 2, 1, RunState.IDLE)
        assert not runner.is_running

        assert await runner.resume() is False

    asyncio.run(_run())
