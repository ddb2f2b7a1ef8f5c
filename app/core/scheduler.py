"""Background job scheduler for login state cleanup."""
import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger
from sqlmodel import Session

from app.auth.login_state import purge_expired_login_states
from app.core.config import settings
from app.core.database import engine

logger = logging.getLogger(__name__)

scheduler = AsyncIOScheduler()


def purge_job():
    """Remove login states that can no longer be consumed."""
    try:
        with Session(engine) as session:
            removed = purge_expired_login_states(session)
            logger.info(f"Purged {removed} expired login states")
    except Exception as e:
        logger.error(f"Login state purge failed: {e}")


def start_scheduler():
    """Start the background scheduler."""
    scheduler.add_job(
        purge_job,
        trigger=IntervalTrigger(minutes=settings.login_state_purge_interval_minutes),
        id="login_state_purge",
        replace_existing=True,
    )
    scheduler.start()
    logger.info(
        f"Scheduler started, purging login states every "
        f"{settings.login_state_purge_interval_minutes} minutes"
    )


def shutdown_scheduler():
    """Graceful shutdown."""
    scheduler.shutdown(wait=False)
    logger.info("Scheduler shut down")
