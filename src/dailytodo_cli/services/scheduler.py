"""Scheduler driving the today-set synchronization.

On start the sync is force-run once, then an asyncio task re-runs it every
``interval_seconds``. The sync itself is a no-op until the calendar day
changes, so a short interval is cheap.

One scheduler exists per process. :func:`start_scheduler` replaces any
running instance; to stop it, call :func:`stop_scheduler` (or cancel the
owning event loop).
"""

from __future__ import annotations

import asyncio
import logging

from dailytodo_cli.services.today_sync_service import TodaySyncService

logger = logging.getLogger(__name__)


class TodaySyncScheduler:
    """Owns the periodic sync loop through an explicit asyncio task handle."""

    def __init__(
        self,
        sync_service: TodaySyncService,
        interval_seconds: float = 60.0,
        *,
        force_on_start: bool = True,
    ):
        self.sync_service = sync_service
        self.interval_seconds = max(0.01, float(interval_seconds))
        self.force_on_start = force_on_start
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self) -> None:
        """Force-run the sync once, then start the periodic loop."""
        if self.running:
            return

        if self.force_on_start:
            await self._tick(force=True)

        self._task = asyncio.create_task(self._run(), name="today-sync-scheduler")
        logger.info("today-set scheduler started (every %ss)", self.interval_seconds)

    async def stop(self) -> None:
        """Cancel the loop and wait for it to finish."""
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            # Only the loop's own cancellation is expected here
            current = asyncio.current_task()
            if current is not None and current.cancelling():
                raise
        logger.info("today-set scheduler stopped")

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval_seconds)
            await self._tick(force=False)

    async def _tick(self, *, force: bool) -> None:
        try:
            await self.sync_service.run_today_sync(force=force)
        except Exception:
            # A failed tick leaves the marker untouched, so the next one retries
            logger.exception("today-set sync failed")


_scheduler: TodaySyncScheduler | None = None


async def start_scheduler(
    sync_service: TodaySyncService,
    interval_seconds: float = 60.0,
    *,
    force_on_start: bool = True,
) -> TodaySyncScheduler:
    """Start the process-wide scheduler, replacing any existing one.

    Returns:
        The running scheduler handle
    """
    global _scheduler
    if _scheduler is not None:
        logger.info("stopping existing scheduler")
        await _scheduler.stop()
        _scheduler = None

    scheduler = TodaySyncScheduler(
        sync_service, interval_seconds, force_on_start=force_on_start
    )
    await scheduler.start()
    _scheduler = scheduler
    return scheduler


async def stop_scheduler() -> None:
    """Stop the process-wide scheduler if one is running."""
    global _scheduler
    if _scheduler is None:
        return
    scheduler, _scheduler = _scheduler, None
    await scheduler.stop()


def get_scheduler() -> TodaySyncScheduler | None:
    """Return the current scheduler handle, or None."""
    return _scheduler
