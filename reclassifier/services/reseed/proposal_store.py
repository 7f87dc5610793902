"""Persistence of taxonomy remap proposals.

Candidate selection, chunked pending-proposal writes and the read queries
the admission checks rely on. Writes go through a session factory so each
chunk commits in its own transaction.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Iterator, List, Optional, Sequence, Tuple
import uuid

import structlog
from sqlalchemy import select, delete, func, case
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from reclassifier.db.base import utc_now, as_utc
from reclassifier.db.models.product import Product
from reclassifier.db.models.taxonomy_remap_review import TaxonomyRemapReview, RemapReviewStatus
from reclassifier.errors.exceptions import DatabaseError
from reclassifier.models.reseed import ReseedMode
from reclassifier.services.classification.decision import ProposalDraft

logger = structlog.get_logger(__name__)

AUTO_RESEED_SOURCE_PREFIX = "auto_reseed_"
DEFAULT_CHUNK_SIZE = 400

DECIDED_STATUSES = (RemapReviewStatus.ACCEPTED, RemapReviewStatus.REJECTED)

SessionFactory = Callable[[], AsyncSession]


@dataclass
class LastAutoReseedMeta:
    """Latest auto-reseed proposal batch, identified by its source tag."""
    source: str
    run_key: Optional[str]
    created_at: datetime
    created: int
    pending_now: int


def _chunks(items: Sequence, size: int) -> Iterator[Sequence]:
    for start in range(0, len(items), size):
        yield items[start:start + size]


def _insert_for(session: AsyncSession):
    """Dialect-specific INSERT construct that supports ON CONFLICT."""
    dialect = session.get_bind().dialect.name
    if dialect == "postgresql":
        return pg_insert
    if dialect == "sqlite":
        return sqlite_insert
    raise DatabaseError(f"Unsupported database dialect for proposal writes: {dialect}")


async def select_candidates(
    session: AsyncSession,
    limit: int,
    mode: ReseedMode = ReseedMode.DEFAULT,
) -> List[Tuple[Product, bool]]:
    """Select enriched products eligible for reclassification.

    Products with an accepted or rejected proposal are excluded. Products
    that already carry a pending proposal come first, then the most
    recently updated.

    Args:
        session: Async database session
        limit: Maximum number of products
        mode: ``refresh_pending`` restricts to products with a pending proposal

    Returns:
        List of (product, has_pending) tuples
    """
    review = TaxonomyRemapReview
    pending = (
        select(review.id)
        .where(review.product_id == Product.id)
        .where(review.status == RemapReviewStatus.PENDING)
        .exists()
    )
    decided = (
        select(review.id)
        .where(review.product_id == Product.id)
        .where(review.status.in_(DECIDED_STATUSES))
        .exists()
    )
    has_pending = pending.label("has_pending")

    stmt = (
        select(Product, has_pending)
        .where(Product.meta["enrichment"].as_string().isnot(None))
        .where(~decided)
    )
    if mode == ReseedMode.REFRESH_PENDING:
        stmt = stmt.where(pending)
    stmt = stmt.order_by(has_pending.desc(), Product.updated_at.desc(), Product.id).limit(limit)

    result = await session.execute(stmt)
    rows = [(product, bool(flag)) for product, flag in result.all()]
    logger.debug("auto_reseed_candidates_selected", count=len(rows), limit=limit, mode=mode.value)
    return rows


async def write_proposals(
    session_factory: SessionFactory,
    drafts: Sequence[ProposalDraft],
    source: str,
    run_key: str,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> int:
    """Replace pending proposals for the drafts' products, chunk by chunk.

    Each chunk is one transaction: pending rows for the chunk's products
    are deleted, then the new rows are inserted skipping conflicts. A crash
    leaves earlier chunks committed.

    Args:
        session_factory: Async session factory
        drafts: Proposal drafts to persist
        source: Provenance tag (``auto_reseed_<trigger>_<run_key>``)
        run_key: Run key of the triggering execution
        chunk_size: Products per transaction

    Returns:
        Number of proposal rows inserted
    """
    inserted = 0
    for index, chunk in enumerate(_chunks(list(drafts), max(1, chunk_size))):
        product_ids = [draft.product_id for draft in chunk]
        now = utc_now()
        rows = []
        for draft in chunk:
            row = draft.to_row(source, run_key)
            row.update(
                id=uuid.uuid4(),
                status=RemapReviewStatus.PENDING,
                created_at=now,
                updated_at=now,
            )
            rows.append(row)

        async with session_factory() as session:
            async with session.begin():
                await session.execute(
                    delete(TaxonomyRemapReview)
                    .where(TaxonomyRemapReview.status == RemapReviewStatus.PENDING)
                    .where(TaxonomyRemapReview.product_id.in_(product_ids))
                )
                insert = _insert_for(session)
                stmt = insert(TaxonomyRemapReview).values(rows).on_conflict_do_nothing()
                result = await session.execute(stmt)
                chunk_inserted = max(result.rowcount or 0, 0)

        inserted += chunk_inserted
        logger.debug(
            "auto_reseed_chunk_written",
            chunk=index,
            size=len(chunk),
            inserted=chunk_inserted,
            source=source,
        )
    return inserted


async def delete_stale_pending(
    session_factory: SessionFactory,
    product_ids: Sequence[uuid.UUID],
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> int:
    """Delete pending proposals current evidence no longer supports.

    Returns:
        Number of deleted rows
    """
    deleted = 0
    for chunk in _chunks(list(product_ids), max(1, chunk_size)):
        async with session_factory() as session:
            async with session.begin():
                result = await session.execute(
                    delete(TaxonomyRemapReview)
                    .where(TaxonomyRemapReview.status == RemapReviewStatus.PENDING)
                    .where(TaxonomyRemapReview.product_id.in_(list(chunk)))
                )
                deleted += max(result.rowcount or 0, 0)
    if deleted:
        logger.info("auto_reseed_stale_pending_deleted", deleted=deleted)
    return deleted


async def count_pending(session: AsyncSession) -> int:
    result = await session.execute(
        select(func.count(TaxonomyRemapReview.id))
        .where(TaxonomyRemapReview.status == RemapReviewStatus.PENDING)
    )
    return int(result.scalar_one() or 0)


async def get_last_auto_reseed_meta(session: AsyncSession) -> Optional[LastAutoReseedMeta]:
    """Latest auto-reseed proposal batch, or None when there never was one."""
    review = TaxonomyRemapReview
    latest = await session.execute(
        select(review.source, review.run_key, review.created_at)
        .where(review.source.startswith(AUTO_RESEED_SOURCE_PREFIX, autoescape=True))
        .order_by(review.created_at.desc())
        .limit(1)
    )
    row = latest.first()
    if row is None:
        return None
    source, run_key, created_at = row

    counts = await session.execute(
        select(
            func.count(review.id),
            func.sum(case((review.status == RemapReviewStatus.PENDING, 1), else_=0)),
        ).where(review.source == source)
    )
    created, pending_now = counts.one()
    return LastAutoReseedMeta(
        source=source,
        run_key=run_key,
        created_at=as_utc(created_at),
        created=int(created or 0),
        pending_now=int(pending_now or 0),
    )


async def count_reviewed_since(session: AsyncSession, since: datetime) -> int:
    """Proposals accepted or rejected at or after ``since``."""
    result = await session.execute(
        select(func.count(TaxonomyRemapReview.id))
        .where(TaxonomyRemapReview.status.in_(DECIDED_STATUSES))
        .where(TaxonomyRemapReview.decided_at >= since)
    )
    return int(result.scalar_one() or 0)
