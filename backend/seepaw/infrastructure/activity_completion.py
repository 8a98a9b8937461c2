"""Activity Completion Scheduler — background sweep that completes finished activities
and reminds users and shelter admins of activities starting or ending soon.

Invariants:
    - One sweep = one session = CompleteFinishedActivities then SendActivityReminders
      via the Mediator
    - interval_seconds <= 0 disables the scheduler (start() is a no-op)
    - A failing sweep is logged and retried on the next tick; it never kills the loop
    - stop() cancels the task and waits for it, so shutdown never leaves a sweep mid-commit

Design Decisions:
    - asyncio task started from the FastAPI lifespan instead of an external cron:
      single-process deployment, nothing else to operate
    - Session factory injected: tests run run_once() against their own engine
"""

import asyncio
import logging
from contextlib import AbstractAsyncContextManager
from typing import Callable

from sqlalchemy.ext.asyncio import AsyncSession

from seepaw.config import Settings
from seepaw.services.mediator import Mediator
from seepaw.services.messages import CompleteFinishedActivities, SendActivityReminders

logger = logging.getLogger(__name__)


class ActivityCompletionScheduler:
    """Runs the completion and reminder sweep every `interval_seconds`."""

    def __init__(
        self,
        session_factory: Callable[[], AbstractAsyncContextManager[AsyncSession]],
        settings: Settings,
        interval_seconds: int | None = None,
    ):
        self._session_factory = session_factory
        self._settings = settings
        self.interval_seconds = (
            settings.activity_completion_interval_seconds
            if interval_seconds is None else interval_seconds
        )
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def run_once(self) -> int:
        """One sweep: complete finished activities, then send due reminders.

        Returns how many activities were completed.
        """
        async with self._session_factory() as db:
            mediator = Mediator(db, self._settings)
            result = await mediator.send(CompleteFinishedActivities())
            reminders = await mediator.send(SendActivityReminders())
        if not reminders.is_success:
            logger.error(f"Activity reminders failed: {reminders.error}")
        return result.value or 0

    def start(self) -> None:
        if self.interval_seconds <= 0:
            logger.info("Activity completion scheduler disabled")
            return
        if self.running:
            return
        self._task = asyncio.create_task(self._run_loop())
        logger.info(f"Activity completion scheduler started, every {self.interval_seconds}s")

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("Activity completion scheduler stopped")

    async def _run_loop(self) -> None:
        while True:
            try:
                await self.run_once()
            except Exception as e:
                logger.error(f"Activity completion sweep failed: {e}", exc_info=True)
            await asyncio.sleep(self.interval_seconds)
