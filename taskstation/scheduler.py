"""Periodic PENDING -> OVERDUE sweep.

The sweep is off by default; it runs only when
``overdue_sweep_interval_minutes`` is positive.
"""

import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from taskstation.database import async_session_maker
from taskstation.repositories.task import SqlAlchemyTaskRepository
from taskstation.services.task import TaskService

logger = logging.getLogger(__name__)

SWEEP_JOB_ID = "overdue-sweep"


async def run_overdue_sweep(
    session_maker: async_sessionmaker[AsyncSession] = async_session_maker,
) -> int:
    """Run one sweep in its own session and commit it.

    Returns:
        Number of tasks marked OVERDUE.
    """
    async with session_maker() as session:
        service = TaskService(SqlAlchemyTaskRepository(session))
        count = await service.sweep_overdue()
        await session.commit()
    return count


def create_scheduler(interval_minutes: int) -> AsyncIOScheduler:
    """Build a scheduler that runs the overdue sweep every ``interval_minutes``."""
    scheduler = AsyncIOScheduler(
        job_defaults={
            "coalesce": True,  # Combine missed runs into one
            "max_instances": 1,  # Prevent overlapping sweeps
            "misfire_grace_time": 30,
        },
        timezone="UTC",
    )
    scheduler.add_job(
        run_overdue_sweep,
        IntervalTrigger(minutes=interval_minutes),
        id=SWEEP_JOB_ID,
        name="Overdue sweep",
        replace_existing=True,
    )
    logger.info("Overdue sweep scheduled every %d minute(s)", interval_minutes)
    return scheduler
