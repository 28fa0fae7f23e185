"""Midnight rollover scheduling."""

import logging
from datetime import datetime
from zoneinfo import ZoneInfo

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from fitcore.services.ledgers import LedgerService

ROLLOVER_JOB_ID = "midnight-rollover"

_logger = logging.getLogger(__name__)


class MidnightRolloverScheduler:
    """Fires a ledger rollover at local midnight every day.

    The job coroutine runs on the application's event loop, so it never
    interleaves with request handlers mid-operation.
    """

    def __init__(self, ledger_service: LedgerService, timezone_name: str) -> None:
        self.ledger_service = ledger_service
        self.timezone = ZoneInfo(timezone_name)
        self.trigger = CronTrigger(hour=0, minute=0, timezone=self.timezone)
        self.scheduler: AsyncIOScheduler | None = None

    def start(self) -> None:
        """Create the scheduler and register the rollover job."""
        if self.scheduler is not None:
            _logger.warning("Rollover scheduler already started")
            return
        self.scheduler = AsyncIOScheduler(
            timezone=self.timezone,
            job_defaults={
                "coalesce": True,
                "max_instances": 1,
                "misfire_grace_time": 3600,
            },
        )
        self.scheduler.add_job(
            self.run,
            trigger=self.trigger,
            id=ROLLOVER_JOB_ID,
            name="Midnight ledger rollover",
            replace_existing=True,
        )
        self.scheduler.start()
        _logger.info("Rollover scheduler started (timezone=%s)", self.timezone)

    def shutdown(self) -> None:
        """Stop firing; an in-progress rollover is left to finish."""
        if self.scheduler is None:
            return
        self.scheduler.shutdown(wait=False)
        self.scheduler = None
        _logger.info("Rollover scheduler stopped")

    def next_fire_time(self, now: datetime) -> datetime | None:
        """Return the next local midnight after ``now``."""
        return self.trigger.get_next_fire_time(None, now.astimezone(self.timezone))

    async def run(self) -> int:
        """Roll every ledger to the current local day."""
        day = self.ledger_service.today()
        advanced = self.ledger_service.rollover_all(day)
        _logger.info("Midnight rollover to %s complete (%s ledgers)", day, advanced)
        return advanced
