"""arq worker configuration for the taxonomy remap auto-reseed phase.

This module configures the arq worker with:
    - auto_reseed_task: Manual/operator auto-reseed runs
    - auto_reseed_on_decision_task: Reseed attempts after review decisions
    - scheduled_auto_reseed_task: Cron job at TAXONOMY_REMAP_AUTO_RESEED_CRON_INTERVAL_MINUTES
"""
from arq.connections import RedisSettings
from arq import cron
from typing import Any, Dict
import structlog
from reclassifier.config import settings, reseed_settings, configure_logging
from reclassifier.db.base import engine
from reclassifier.services.classification.evidence_index import TaxonomyIndex
from reclassifier.services.taxonomy.base import build_base_taxonomy

from reclassifier.tasks.reseed_tasks import (
    auto_reseed_task,
    auto_reseed_on_decision_task,
    scheduled_auto_reseed_task,
)

# Configure logging
configure_logging(settings.log_level)
logger = structlog.get_logger(__name__)


def get_cron_schedule(interval_minutes: int) -> Dict[str, Any]:
    """Translate an interval in minutes into arq cron fields.

    Sub-hour intervals run on minute multiples; longer ones on hour
    multiples at minute 0. Intervals that would leave uneven gaps are
    rejected.
    """
    if interval_minutes < 60:
        if 60 % interval_minutes:
            raise ValueError(f"Interval {interval_minutes} does not divide an hour")
        return {"minute": set(range(0, 60, interval_minutes))}
    if interval_minutes % 60 or 1440 % interval_minutes:
        raise ValueError(f"Interval {interval_minutes} is not a whole-hour divisor of a day")
    hours = interval_minutes // 60
    return {"hour": set(range(0, 24, hours)), "minute": 0}


async def startup(ctx: Dict[str, Any]) -> None:
    """Build the taxonomy index once per worker process."""
    index = TaxonomyIndex.build(build_base_taxonomy())
    ctx["taxonomy_index"] = index
    logger.info(
        "worker_started",
        categories=len(index.categories),
        auto_reseed_enabled=reseed_settings.enabled,
    )


async def shutdown(ctx: Dict[str, Any]) -> None:
    await engine.dispose()
    logger.info("worker_stopped")


class WorkerSettings:
    """arq worker configuration settings.

    This class is imported by arq CLI: `python -m arq reclassifier.worker.WorkerSettings`

    Registered Tasks:
        - auto_reseed_task: Manual auto-reseed runs
        - auto_reseed_on_decision_task: Reseed attempts after review decisions

    Cron Jobs:
        - scheduled_auto_reseed_task: Every CRON_INTERVAL_MINUTES (default 30)
    """

    redis_settings = RedisSettings.from_dsn(settings.redis_url)
    queue_name = settings.queue_name
    max_jobs = settings.max_workers
    job_timeout = settings.job_timeout
    keep_result = 3600  # Keep results for 1 hour
    max_tries = 1  # Runs are never retried; the next trigger tries again

    functions = [
        auto_reseed_task,
        auto_reseed_on_decision_task,
    ]

    on_startup = startup
    on_shutdown = shutdown

    cron_jobs = [
        cron(
            scheduled_auto_reseed_task,
            **get_cron_schedule(reseed_settings.cron_interval_minutes),
            unique=True,
            run_at_startup=False,
        ),
    ]
