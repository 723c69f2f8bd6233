"""Asyncio tick source driving a PhaseEngine once per second."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Callable, Optional

from interval_timer.core.engine import PhaseEngine
from interval_timer.core.state import EngineSnapshot, RunState

logger = logging.getLogger(__name__)

Clock = Callable[[], float]
UpdateCallback = Callable[[EngineSnapshot], None]

# Short lags are replayed tick by tick so phase and countdown cues still fire.
MAX_REPLAYED_TICKS = 5


class TimerRunner:
    """Owns the tick task of one engine.

    The task is always stopped before the engine is suspended, paused or reset
    and only restarted after ``reconcile`` returns, so ticks and
    reconciliation never interleave.
    """

    def __init__(
        self,
        engine: PhaseEngine,
        *,
        tick_interval_sec: float = 1.0,
        clock: Clock = time.monotonic,
        on_update: Optional[UpdateCallback] = None,
    ) -> None:
        self._engine = engine
        self._tick_interval_sec = tick_interval_sec
        self._clock = clock
        self._on_update = on_update
        self._task: Optional[asyncio.Task[None]] = None
        self._stop_event = asyncio.Event()

    @property
    def engine(self) -> PhaseEngine:
        return self._engine

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self) -> bool:
        if not self._engine.start():
            return False
        self._notify()
        self._launch()
        return True

    async def pause(self) -> bool:
        await self.stop()
        changed = self._engine.pause()
        self._notify()
        return changed

    async def resume(self) -> bool:
        if not self._engine.resume():
            return False
        self._notify()
        self._launch()
        return True

    async def reset(self) -> bool:
        await self.stop()
        changed = self._engine.reset()
        self._notify()
        return changed

    async def toggle(self) -> bool:
        state = self._engine.run_state
        if state is RunState.RUNNING:
            return await self.pause()
        if state is RunState.PAUSED:
            return await self.resume()
        return await self.start()

    async def suspend(self) -> bool:
        """Stop ticking and remember when, e.g. when the host goes to background."""
        await self.stop()
        return self._engine.mark_suspended(self._clock())

    async def resume_after_suspend(self) -> bool:
        if not self._engine.reconcile_since(self._clock()):
            return False
        self._notify()
        if self._engine.is_running:
            self._launch()
        return True

    async def stop(self) -> None:
        if not self.is_running:
            return

        self._stop_event.set()
        assert self._task is not None
        await self._task
        self._task = None

    async def join(self) -> None:
        """Wait until the tick task ends (workout finished or stopped)."""
        if self._task is not None:
            await self._task

    def _launch(self) -> None:
        if self.is_running or not self._engine.is_running:
            return
        self._stop_event = asyncio.Event()
        self._task = asyncio.create_task(self._run())

    async def _run(self) -> None:
        anchor = self._clock()
        delivered = 0
        while not self._stop_event.is_set() and self._engine.is_running:
            next_due = anchor + (delivered + 1) * self._tick_interval_sec
            delay = max(0.0, next_due - self._clock())
            try:
                await asyncio.wait_for(self._stop_event.wait(), timeout=delay)
                return
            except asyncio.TimeoutError:
                pass

            due = int((self._clock() - anchor) / self._tick_interval_sec) - delivered
            if due <= 0:
                continue
            if due <= MAX_REPLAYED_TICKS:
                for _ in range(due):
                    self._engine.tick()
            else:
                logger.warning("Tick source fell %d intervals behind, reconciling", due)
                self._engine.reconcile(due)
            delivered += due
            self._notify()

    def _notify(self) -> None:
        if self._on_update is not None:
            self._on_update(self._engine.snapshot())
