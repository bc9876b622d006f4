"""Today-set synchronization.

Once per calendar day the ``is_today`` flag is reconciled against due dates:
every flagged task is cleared, then every task due today is flagged. The
last-refresh marker makes repeated runs on the same day a no-op unless forced.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from dailytodo_cli.models import TaskFilters, TaskUpdate, TodaySyncResult
from dailytodo_cli.repositories import TaskRepository
from dailytodo_cli.utils.dates import is_same_day

logger = logging.getLogger(__name__)


class TodaySyncService:
    """Reconciles the today-set with due dates."""

    def __init__(
        self,
        task_repository: TaskRepository,
        clock: Callable[[], datetime] | None = None,
    ):
        """Initialize the sync service.

        Args:
            task_repository: TaskRepository implementation for data access
            clock: Returns the current time; defaults to ``datetime.now``
        """
        self.repository = task_repository
        self.clock = clock or datetime.now

    async def run_today_sync(self, force: bool = False) -> TodaySyncResult:
        """Run one reconciliation pass.

        Args:
            force: Run even if the marker says today was already refreshed

        Returns:
            Counts of cleared and newly flagged tasks, or ``skipped=True``

        Raises:
            StoreUnavailableError: If the store fails; the marker is left untouched
        """
        now = self.clock()

        if not force:
            last_refreshed = await self.repository.get_last_refresh_marker()
            if last_refreshed is not None and is_same_day(last_refreshed, now):
                logger.debug("today-set already refreshed at %s", last_refreshed)
                return TodaySyncResult(skipped=True)

        cleared_count = 0
        for task in await self.repository.list_all(TaskFilters(is_today=True)):
            await self.repository.update(task.id, TaskUpdate(is_today=False))
            cleared_count += 1

        set_count = 0
        for task in await self.repository.list_all(TaskFilters(has_due_date=True)):
            if task.due_date is not None and is_same_day(task.due_date, now):
                await self.repository.update(task.id, TaskUpdate(is_today=True))
                set_count += 1

        await self.repository.upsert_last_refresh_marker(now)

        logger.info(
            "refreshed today-set: to false: %d. to true: %d", cleared_count, set_count
        )
        return TodaySyncResult(cleared_count=cleared_count, set_count=set_count)
