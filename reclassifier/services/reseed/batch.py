"""Auto-reseed batch: admission, scoring and proposal writes for one run.

Flow:
1. Watchdog: fail running rows older than the staleness window
2. Admission against fresh state (enabled, pending threshold, cooldown)
3. Forced runs pre-empt slow running rows
4. Insert the running row (unique index = mutual exclusion)
5. Score candidates product by product, delete stale pending proposals,
   write new proposals in chunks
6. Finalize the run row exactly once

Admission outcomes and run-body failures are returned as an
``AutoReseedResult``; this function never raises for them.
"""
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from functools import lru_cache
from typing import List, Optional, Union
import time
import uuid

import structlog
from pydantic import ValidationError as PydanticValidationError

from reclassifier.config import ReseedSettings, reseed_settings
from reclassifier.db.base import async_session_maker, as_utc, utc_now
from reclassifier.db.models.auto_reseed_run import AutoReseedRunStatus, AutoReseedTrigger
from reclassifier.errors.exceptions import RunAlreadyActiveError, ValidationError
from reclassifier.models.product_snapshot import ProductSnapshot
from reclassifier.models.reseed import AutoReseedResult, ReseedMode, ReseedReason
from reclassifier.services.classification.decision import (
    DecisionEngine,
    DecisionPolicy,
    ProposalDraft,
    ScoringResult,
)
from reclassifier.services.classification.evidence_index import TaxonomyIndex
from reclassifier.services.classification.harvester import SignalHarvester
from reclassifier.services.reseed import run_lifecycle
from reclassifier.services.reseed.proposal_store import (
    SessionFactory,
    count_pending,
    delete_stale_pending,
    get_last_auto_reseed_meta,
    select_candidates,
    write_proposals,
)
from reclassifier.services.taxonomy.base import build_base_taxonomy

logger = structlog.get_logger(__name__)


@lru_cache(maxsize=1)
def default_index() -> TaxonomyIndex:
    """Index for the built-in taxonomy, built on first use."""
    return TaxonomyIndex.build(build_base_taxonomy())


@dataclass
class BatchOutcome:
    scanned: int = 0
    proposed: int = 0
    enqueued: int = 0
    failed_products: int = 0
    stale_deleted: int = 0
    drafts: List[ProposalDraft] = field(default_factory=list)


def score_product(
    harvester: SignalHarvester,
    engine: DecisionEngine,
    product,
    has_pending: bool = False,
) -> ScoringResult:
    """Harvest and decide for one product row, capturing any failure."""
    product_id = getattr(product, "id", None)
    try:
        snapshot = ProductSnapshot.from_row(product, has_pending=has_pending)
    except PydanticValidationError as e:
        error = ValidationError(
            f"Malformed product record {product_id}: {e.error_count()} invalid field(s)"
        )
        return ScoringResult.failure(product_id, error)
    try:
        signal = harvester.harvest(snapshot)
        return ScoringResult.success(snapshot.id, engine.decide(snapshot, signal))
    except Exception as e:
        return ScoringResult.failure(product_id, e)


async def _execute_batch(
    session_factory: SessionFactory,
    index: TaxonomyIndex,
    settings: ReseedSettings,
    requested_limit: int,
    mode: ReseedMode,
    source: str,
    run_key: str,
    log,
) -> BatchOutcome:
    async with session_factory() as session:
        candidates = await select_candidates(session, requested_limit, mode)

    harvester = SignalHarvester(index)
    engine = DecisionEngine(index, DecisionPolicy.from_settings(settings))
    outcome = BatchOutcome(scanned=len(candidates))
    stale_ids: List[uuid.UUID] = []

    for product, has_pending in candidates:
        result = score_product(harvester, engine, product, has_pending)
        if not result.ok:
            outcome.failed_products += 1
            log.warning(
                "auto_reseed_product_failed",
                product_id=str(result.product_id) if result.product_id else None,
                error=result.error,
                error_type=result.error_type,
            )
            continue
        if result.draft is not None:
            outcome.drafts.append(result.draft)
        elif has_pending:
            stale_ids.append(result.product_id)

    outcome.proposed = len(outcome.drafts)
    if stale_ids:
        outcome.stale_deleted = await delete_stale_pending(
            session_factory, stale_ids, settings.chunk_size
        )
    if outcome.drafts:
        outcome.enqueued = await write_proposals(
            session_factory,
            outcome.drafts,
            source=source,
            run_key=run_key,
            chunk_size=settings.chunk_size,
        )
    return outcome


async def run_auto_reseed_batch(
    trigger: Union[AutoReseedTrigger, str],
    force: bool = False,
    limit: Optional[int] = None,
    mode: Union[ReseedMode, str] = ReseedMode.DEFAULT,
    session_factory: Optional[SessionFactory] = None,
    index: Optional[TaxonomyIndex] = None,
    settings: Optional[ReseedSettings] = None,
    now: Optional[datetime] = None,
) -> AutoReseedResult:
    """Run one auto-reseed execution.

    Args:
        trigger: decision, cron or manual
        force: Bypass pending threshold and cooldown, pre-empt slow runs
        limit: Candidate limit override
        mode: Candidate selection mode
        session_factory: Async session factory (defaults to the app's)
        index: Taxonomy index (defaults to the built-in taxonomy)
        settings: Phase settings (defaults to environment)
        now: Override for the current time

    Returns:
        AutoReseedResult describing the outcome
    """
    trigger = AutoReseedTrigger(trigger)
    mode = ReseedMode(mode)
    session_factory = session_factory or async_session_maker
    settings = settings or reseed_settings
    now = now or utc_now()
    started = time.monotonic()

    log = logger.bind(trigger=trigger.value, force=force, mode=mode.value)

    await run_lifecycle.mark_stale_runs(session_factory, settings.running_stale_minutes, now)

    async with session_factory() as session:
        pending_count = await count_pending(session)
        last = await get_last_auto_reseed_meta(session)

    threshold = settings.threshold

    def skipped(reason: ReseedReason) -> AutoReseedResult:
        log.info("auto_reseed_skipped", reason=reason.value, pending_count=pending_count)
        return AutoReseedResult(
            reason=reason,
            pending_count=pending_count,
            pending_threshold=threshold,
        )

    if not settings.enabled:
        return skipped(ReseedReason.DISABLED)
    if not force and mode != ReseedMode.REFRESH_PENDING and pending_count > threshold:
        return skipped(ReseedReason.PENDING_ABOVE_THRESHOLD)
    if (
        not force
        and last is not None
        and now - as_utc(last.created_at) < timedelta(minutes=settings.cooldown_minutes)
    ):
        return skipped(ReseedReason.COOLDOWN_ACTIVE)

    if force:
        await run_lifecycle.force_recover_runs(session_factory, settings.force_recover_minutes, now)

    requested_limit = run_lifecycle.resolve_requested_limit(trigger, limit, settings.limit)
    run_key = run_lifecycle.make_run_key(now)
    source = run_lifecycle.make_source(trigger, run_key)

    try:
        run_id = await run_lifecycle.create_run(
            session_factory,
            trigger=trigger,
            force=force,
            requested_limit=requested_limit,
            pending_count=pending_count,
            pending_threshold=threshold,
            source=source,
            run_key=run_key,
            now=now,
        )
    except RunAlreadyActiveError:
        return skipped(ReseedReason.ALREADY_RUNNING)

    log = log.bind(run_id=str(run_id), run_key=run_key)
    log.info("auto_reseed_started", requested_limit=requested_limit, pending_count=pending_count)

    try:
        outcome = await _execute_batch(
            session_factory,
            index or default_index(),
            settings,
            requested_limit,
            mode,
            source,
            run_key,
            log,
        )
        if outcome.proposed > 0:
            status, reason = AutoReseedRunStatus.COMPLETED, ReseedReason.TRIGGERED
        else:
            status, reason = AutoReseedRunStatus.SKIPPED, ReseedReason.NO_CANDIDATES
        await run_lifecycle.finalize_run(
            session_factory,
            run_id,
            status,
            reason.value,
            scanned=outcome.scanned,
            proposed=outcome.proposed,
            enqueued=outcome.enqueued,
            failed_products=outcome.failed_products,
            error_max_length=settings.error_max_length,
        )
    except Exception as e:
        error = run_lifecycle.truncate_error(str(e) or type(e).__name__, settings.error_max_length)
        log.error("auto_reseed_failed", error=error, error_type=type(e).__name__)
        try:
            await run_lifecycle.finalize_run(
                session_factory,
                run_id,
                AutoReseedRunStatus.FAILED,
                ReseedReason.ERROR.value,
                error=error,
                error_max_length=settings.error_max_length,
            )
        except Exception as finalize_error:
            # The watchdog fails the row once it goes stale
            log.error("auto_reseed_finalize_failed", error=str(finalize_error))
        return AutoReseedResult(
            reason=ReseedReason.ERROR,
            pending_count=pending_count,
            pending_threshold=threshold,
            execution_id=run_id,
            source=source,
            run_key=run_key,
            error=error,
        )

    log.info(
        "auto_reseed_finished",
        status=status.value,
        reason=reason.value,
        scanned=outcome.scanned,
        proposed=outcome.proposed,
        enqueued=outcome.enqueued,
        failed_products=outcome.failed_products,
        stale_deleted=outcome.stale_deleted,
        duration_seconds=round(time.monotonic() - started, 3),
    )

    return AutoReseedResult(
        triggered=outcome.proposed > 0,
        reason=reason,
        pending_count=pending_count,
        pending_threshold=threshold,
        scanned=outcome.scanned,
        proposed=outcome.proposed,
        enqueued=outcome.enqueued,
        failed_products=outcome.failed_products,
        execution_id=run_id,
        source=source,
        run_key=run_key,
    )
