"""Auto-reseed run audit rows and their state machine.

    running ──► completed | skipped | failed

A run row is inserted with ``status = running``. The partial unique index
``taxonomy_remap_auto_reseed_runs_running_unique_idx`` allows at most one
such row, so a conflicting insert means another execution holds the phase.
There is no reservation step and no in-process lock.

Abandoned rows are recovered by the watchdog (``stale_running_timeout``)
at the start of every admission attempt, and by forced manual runs after a
shorter grace period (``forced_timeout_recovery``).
"""
from datetime import datetime, timedelta
from typing import Optional
import uuid

import structlog
from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from reclassifier.db.base import utc_now, as_utc
from reclassifier.db.models.auto_reseed_run import (
    AutoReseedRun,
    AutoReseedRunStatus,
    AutoReseedTrigger,
    RUNNING_UNIQUE_INDEX,
)
from reclassifier.errors.exceptions import DatabaseError, RunAlreadyActiveError
from reclassifier.models.reseed import AutoReseedPhaseState
from reclassifier.services.reseed.proposal_store import (
    SessionFactory,
    count_pending,
    count_reviewed_since,
    get_last_auto_reseed_meta,
)

logger = structlog.get_logger(__name__)

STALE_RUNNING_REASON = "stale_running_timeout"
FORCED_RECOVERY_REASON = "forced_timeout_recovery"

MIN_REQUESTED_LIMIT = 100
NON_MANUAL_LIMIT_CAP = 2000

UNIQUE_VIOLATION_SQLSTATE = "23505"


def make_run_key(now: datetime) -> str:
    """UTC timestamp key, e.g. ``20240131_154502``."""
    return now.strftime("%Y%m%d_%H%M%S")


def make_source(trigger: AutoReseedTrigger, run_key: str) -> str:
    return f"auto_reseed_{trigger.value}_{run_key}"


def resolve_requested_limit(
    trigger: AutoReseedTrigger,
    limit: Optional[int],
    auto_limit: int,
) -> int:
    """Candidate limit for a run.

    Explicit limits win. Otherwise manual runs use the configured limit and
    cron/decision runs are capped at 2000. Never below 100.
    """
    if limit:
        requested = limit
    elif trigger == AutoReseedTrigger.MANUAL:
        requested = auto_limit
    else:
        requested = min(NON_MANUAL_LIMIT_CAP, auto_limit)
    return max(MIN_REQUESTED_LIMIT, int(requested))


def truncate_error(message: Optional[str], max_length: int) -> Optional[str]:
    if message is None:
        return None
    return message[:max_length]


def is_running_conflict(exc: IntegrityError) -> bool:
    """True when an insert failed on the single-running-row index."""
    orig = getattr(exc, "orig", None)
    for attr in ("sqlstate", "pgcode"):
        if getattr(orig, attr, None) == UNIQUE_VIOLATION_SQLSTATE:
            return True
    message = str(orig if orig is not None else exc)
    return RUNNING_UNIQUE_INDEX in message or "UNIQUE constraint failed" in message


async def _fail_running_older_than(
    session_factory: SessionFactory,
    cutoff: datetime,
    reason: str,
    now: datetime,
) -> int:
    async with session_factory() as session:
        async with session.begin():
            result = await session.execute(
                update(AutoReseedRun)
                .where(AutoReseedRun.status == AutoReseedRunStatus.RUNNING)
                .where(AutoReseedRun.started_at < cutoff)
                .values(
                    status=AutoReseedRunStatus.FAILED,
                    reason=reason,
                    error=reason,
                    completed_at=now,
                    updated_at=now,
                )
            )
            return max(result.rowcount or 0, 0)


async def mark_stale_runs(
    session_factory: SessionFactory,
    stale_minutes: int,
    now: Optional[datetime] = None,
) -> int:
    """Watchdog: fail running rows older than the staleness window.

    Returns:
        Number of runs flipped to failed
    """
    now = now or utc_now()
    recovered = await _fail_running_older_than(
        session_factory,
        cutoff=now - timedelta(minutes=stale_minutes),
        reason=STALE_RUNNING_REASON,
        now=now,
    )
    if recovered:
        logger.warning("auto_reseed_stale_runs_failed", count=recovered, stale_minutes=stale_minutes)
    return recovered


async def force_recover_runs(
    session_factory: SessionFactory,
    force_recover_minutes: int,
    now: Optional[datetime] = None,
) -> int:
    """Let a forced run pre-empt a slow run after a shorter grace period."""
    now = now or utc_now()
    recovered = await _fail_running_older_than(
        session_factory,
        cutoff=now - timedelta(minutes=force_recover_minutes),
        reason=FORCED_RECOVERY_REASON,
        now=now,
    )
    if recovered:
        logger.warning(
            "auto_reseed_running_force_recovered",
            count=recovered,
            force_recover_minutes=force_recover_minutes,
        )
    return recovered


async def create_run(
    session_factory: SessionFactory,
    trigger: AutoReseedTrigger,
    force: bool,
    requested_limit: int,
    pending_count: int,
    pending_threshold: int,
    source: str,
    run_key: str,
    now: Optional[datetime] = None,
) -> uuid.UUID:
    """Insert the running row for a new execution.

    Returns:
        Id of the new run

    Raises:
        RunAlreadyActiveError: Another execution holds the running row
        DatabaseError: Any other integrity failure
    """
    now = now or utc_now()
    run = AutoReseedRun(
        id=uuid.uuid4(),
        trigger=trigger,
        status=AutoReseedRunStatus.RUNNING,
        force=force,
        requested_limit=requested_limit,
        started_at=now,
        pending_count=pending_count,
        pending_threshold=pending_threshold,
        source=source,
        run_key=run_key,
    )
    try:
        async with session_factory() as session:
            async with session.begin():
                session.add(run)
    except IntegrityError as e:
        if is_running_conflict(e):
            raise RunAlreadyActiveError() from e
        raise DatabaseError(f"Failed to create auto-reseed run: {e}") from e

    logger.info(
        "auto_reseed_run_created",
        run_id=str(run.id),
        trigger=trigger.value,
        force=force,
        requested_limit=requested_limit,
    )
    return run.id


async def finalize_run(
    session_factory: SessionFactory,
    run_id: uuid.UUID,
    status: AutoReseedRunStatus,
    reason: str,
    scanned: int = 0,
    proposed: int = 0,
    enqueued: int = 0,
    failed_products: int = 0,
    error: Optional[str] = None,
    error_max_length: int = 1000,
    now: Optional[datetime] = None,
) -> bool:
    """Move a running row to its terminal state.

    Only a row that is still ``running`` is updated, so a run the watchdog
    already failed keeps that outcome.

    Returns:
        True if the row was finalized by this call
    """
    now = now or utc_now()
    async with session_factory() as session:
        async with session.begin():
            result = await session.execute(
                update(AutoReseedRun)
                .where(AutoReseedRun.id == run_id)
                .where(AutoReseedRun.status == AutoReseedRunStatus.RUNNING)
                .values(
                    status=status,
                    reason=reason,
                    scanned=scanned,
                    proposed=proposed,
                    enqueued=enqueued,
                    failed_products=failed_products,
                    error=truncate_error(error, error_max_length),
                    completed_at=now,
                    updated_at=now,
                )
            )
            finalized = (result.rowcount or 0) > 0

    if not finalized:
        logger.warning("auto_reseed_finalize_skipped", run_id=str(run_id), status=status.value)
    return finalized


async def get_active_run(session: AsyncSession) -> Optional[AutoReseedRun]:
    result = await session.execute(
        select(AutoReseedRun)
        .where(AutoReseedRun.status == AutoReseedRunStatus.RUNNING)
        .limit(1)
    )
    return result.scalar_one_or_none()


async def get_latest_run(session: AsyncSession) -> Optional[AutoReseedRun]:
    result = await session.execute(
        select(AutoReseedRun)
        .order_by(AutoReseedRun.started_at.desc())
        .limit(1)
    )
    return result.scalar_one_or_none()


async def get_phase_state(
    session_factory: SessionFactory,
    settings,
    now: Optional[datetime] = None,
) -> AutoReseedPhaseState:
    """Report the auto-reseed phase for admin panels.

    Runs the watchdog first so a crashed run is not reported as active.

    Args:
        session_factory: Async session factory
        settings: ReseedSettings
        now: Override for the current time

    Returns:
        AutoReseedPhaseState snapshot
    """
    now = now or utc_now()
    await mark_stale_runs(session_factory, settings.running_stale_minutes, now)

    async with session_factory() as session:
        active = await get_active_run(session)
        latest = await get_latest_run(session)
        pending = await count_pending(session)
        last = await get_last_auto_reseed_meta(session)
        reviewed = await count_reviewed_since(session, last.created_at) if last else 0

    cooling_down = bool(
        last and now - as_utc(last.created_at) < timedelta(minutes=settings.cooldown_minutes)
    )
    remaining = max(0, pending - settings.threshold)

    return AutoReseedPhaseState(
        enabled=settings.enabled,
        running=active is not None,
        running_execution_id=active.id if active else None,
        running_trigger=active.trigger.value if active else None,
        running_since=as_utc(active.started_at) if active else None,
        pending_threshold=settings.threshold,
        auto_limit=settings.limit,
        cooldown_minutes=settings.cooldown_minutes,
        pending_count=pending,
        remaining_to_trigger=remaining,
        ready_to_trigger=(
            settings.enabled and active is None and remaining == 0 and not cooling_down
        ),
        last_auto_reseed_at=last.created_at if last else None,
        last_auto_reseed_source=last.source if last else None,
        last_auto_reseed_run_key=last.run_key if last else None,
        last_auto_reseed_created=last.created if last else 0,
        last_auto_reseed_pending_now=last.pending_now if last else 0,
        reviewed_since_last_auto=reviewed,
        last_run_status=latest.status.value if latest else None,
        last_run_reason=latest.reason if latest else None,
    )
