"""
Auto-reseed Tasks

arq entry points for the taxonomy remap auto-reseed phase:
    - auto_reseed_task: manual/operator invocation
    - auto_reseed_on_decision_task: after a reviewer accepts/rejects a proposal
    - scheduled_auto_reseed_task: cron wrapper

Every task returns a plain dict (the AutoReseedResult plus metrics) and
never raises for admission outcomes or run failures.
"""

import time
import structlog
from dataclasses import dataclass
from typing import Any, Dict, Optional

from redis.asyncio import Redis

from reclassifier.config import reseed_settings
from reclassifier.db.models.auto_reseed_run import AutoReseedTrigger
from reclassifier.models.reseed import AutoReseedResult, ReseedMode
from reclassifier.services.reseed.batch import run_auto_reseed_batch
from reclassifier.services.reseed.status_cache import store_last_result

logger = structlog.get_logger(__name__)


# =============================================================================
# Metrics
# =============================================================================


def emit_metric(metric_name: str, value: float, labels: Dict[str, str] = None) -> None:
    """Emit a metric event for observability.

    Metrics are structured log events that log aggregation can turn into
    dashboards.

    Args:
        metric_name: Name of the metric (e.g., "auto_reseed_proposed_total")
        value: Numeric value of the metric
        labels: Optional labels/tags for the metric
    """
    labels = labels or {}
    logger.info(
        "metric",
        metric_name=metric_name,
        metric_value=value,
        **labels,
    )


@dataclass
class ReseedMetrics:
    """Metrics collected during one auto-reseed task execution."""
    scanned: int = 0
    proposed: int = 0
    enqueued: int = 0
    failed_products: int = 0
    duration_seconds: float = 0.0

    @classmethod
    def from_result(cls, result: AutoReseedResult, duration_seconds: float) -> "ReseedMetrics":
        return cls(
            scanned=result.scanned,
            proposed=result.proposed,
            enqueued=result.enqueued,
            failed_products=result.failed_products,
            duration_seconds=duration_seconds,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging/response."""
        return {
            "scanned": self.scanned,
            "proposed": self.proposed,
            "enqueued": self.enqueued,
            "failed_products": self.failed_products,
            "duration_seconds": round(self.duration_seconds, 3),
        }


def _emit_run_metrics(trigger: str, result: AutoReseedResult, metrics: ReseedMetrics) -> None:
    labels = {"trigger": trigger, "reason": result.reason.value}
    emit_metric("auto_reseed_runs_total", 1, labels)
    if result.execution_id is None:
        return
    emit_metric("auto_reseed_scanned_total", metrics.scanned, labels)
    emit_metric("auto_reseed_proposed_total", metrics.proposed, labels)
    emit_metric("auto_reseed_failed_products_total", metrics.failed_products, labels)
    emit_metric("auto_reseed_duration_seconds", round(metrics.duration_seconds, 3), labels)


# =============================================================================
# Tasks
# =============================================================================


async def _run(
    ctx: Dict[str, Any],
    trigger: AutoReseedTrigger,
    force: bool = False,
    limit: Optional[int] = None,
    mode: str = ReseedMode.DEFAULT.value,
) -> Dict[str, Any]:
    start = time.monotonic()
    result = await run_auto_reseed_batch(
        trigger=trigger,
        force=force,
        limit=limit,
        mode=mode,
        index=ctx.get("taxonomy_index"),
    )
    metrics = ReseedMetrics.from_result(result, time.monotonic() - start)
    _emit_run_metrics(trigger.value, result, metrics)

    redis: Optional[Redis] = ctx.get("redis")
    if redis is not None:
        await store_last_result(redis, result)

    response = result.to_dict()
    response["metrics"] = metrics.to_dict()
    return response


async def auto_reseed_task(
    ctx: Dict[str, Any],
    trigger: str = AutoReseedTrigger.MANUAL.value,
    force: bool = False,
    limit: Optional[int] = None,
    mode: str = ReseedMode.DEFAULT.value,
    **kwargs
) -> Dict[str, Any]:
    """Run an auto-reseed batch on demand.

    Args:
        ctx: Worker context (contains Redis connection)
        trigger: decision, cron or manual
        force: Bypass threshold/cooldown and pre-empt slow runs
        limit: Candidate limit override
        mode: default or refresh_pending

    Returns:
        AutoReseedResult as a dict, plus metrics
    """
    log = logger.bind(job_id=ctx.get("job_id"), trigger=trigger, force=force, mode=mode)
    log.info("auto_reseed_task_started", limit=limit)
    try:
        trigger_value = AutoReseedTrigger(trigger)
        mode_value = ReseedMode(mode)
    except ValueError as e:
        log.error("auto_reseed_task_invalid_arguments", error=str(e))
        return {"triggered": False, "reason": "error", "error": str(e)}

    response = await _run(ctx, trigger_value, force=force, limit=limit, mode=mode_value.value)
    log.info("auto_reseed_task_completed", reason=response["reason"], **response["metrics"])
    return response


async def auto_reseed_on_decision_task(
    ctx: Dict[str, Any],
    review_id: Optional[str] = None,
    **kwargs
) -> Dict[str, Any]:
    """Try a reseed after a reviewer decided a proposal.

    Admission still applies, so most decisions end as
    ``pending_above_threshold`` or ``cooldown_active``.
    """
    logger.info("auto_reseed_on_decision", review_id=review_id)
    return await _run(ctx, AutoReseedTrigger.DECISION)


async def scheduled_auto_reseed_task(
    ctx: Dict[str, Any],
    **kwargs
) -> Dict[str, Any]:
    """Cron wrapper for scheduled auto-reseed."""
    logger.info("scheduled_auto_reseed_task_started", enabled=reseed_settings.enabled)
    return await _run(ctx, AutoReseedTrigger.CRON)
