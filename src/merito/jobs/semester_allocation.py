"""Background scheduler for the semester coin allowance."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from fastapi import FastAPI

from ..core.database import SessionLocal
from ..services.allocation_service import run_semester_allocation

logger = logging.getLogger(__name__)

_scheduler = AsyncIOScheduler(timezone="UTC")


async def _execute_semester_allocation() -> None:
    session = SessionLocal()
    try:
        summary = run_semester_allocation(session, current_time=datetime.now(timezone.utc))
        session.commit()
        logger.info("semester allocation completed: %s", summary)
    except Exception:  # pragma: no cover - safeguard for background job
        session.rollback()
        logger.exception("semester allocation job failed")
        raise
    finally:
        session.close()


@_scheduler.scheduled_job(
    "cron", month="1,7", day="1", hour=0, minute=5, id="semester_allocation", misfire_grace_time=86400
)
async def _scheduled_job() -> None:
    await _execute_semester_allocation()


def register_scheduler(app: FastAPI) -> None:
    """Attach APScheduler lifecycle hooks to the FastAPI app."""

    @app.on_event("startup")
    async def start_scheduler() -> None:
        if not _scheduler.running:
            _scheduler.start()
            logger.info("semester allocation scheduler started")

    @app.on_event("shutdown")
    async def shutdown_scheduler() -> None:
        if _scheduler.running:
            _scheduler.shutdown(wait=False)
            logger.info("semester allocation scheduler stopped")


def run_allocation_once(current_time: datetime | None = None) -> dict[str, int]:
    """Run the allocation synchronously, e.g. right after seeding professors."""

    session = SessionLocal()
    try:
        summary = run_semester_allocation(session, current_time=current_time)
        session.commit()
        return summary
    finally:
        session.close()
