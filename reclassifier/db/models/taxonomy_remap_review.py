"""TaxonomyRemapReview ORM model for category/subcategory/gender proposals."""
from sqlalchemy import String, ForeignKey, DateTime, Float, Integer, Text, Index, text
from sqlalchemy import Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column
from reclassifier.db.base import Base, UUIDMixin, TimestampMixin, JSONType
from datetime import datetime
from typing import Any, Dict, List, Optional
from enum import Enum as PyEnum
import uuid


class RemapReviewStatus(PyEnum):
    """Status of a taxonomy remap proposal.

    States:
        - pending: Awaiting human review
        - accepted: Applied by a reviewer
        - rejected: Dismissed by a reviewer
    """
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class TaxonomyRemapReview(Base, UUIDMixin, TimestampMixin):
    """Proposed taxonomy correction for a single product.

    Rows are written by the auto-reseed batch in ``pending`` state and moved
    to ``accepted``/``rejected`` by the review UI. At most one pending row
    exists per product (partial unique index).

    Attributes:
        product_id: Product the proposal applies to
        status: Review status
        source: Batch label, e.g. ``auto_reseed_cron_20260101_120000``
        run_key: Batch key ``YYYYMMDD_HHMMSS``
        from_category/from_subcategory/from_gender: Values at proposal time
        to_category/to_subcategory/to_gender: Proposed values
        confidence: Highest confidence among the changed fields
        reasons: Ordered rule identifiers, including ``blocked:*`` entries
        field_scores: Per-field confidence/support/margin
        seo_category_hints: First SEO tags, shown to reviewers
        source_count: Number of non-empty evidence sources
        score_support: Highest support among the changed fields
        margin_ratio: Highest margin among the changed fields
        decided_at: When a reviewer accepted or rejected the row
    """

    __tablename__ = "taxonomy_remap_reviews"
    __table_args__ = (
        Index(
            "taxonomy_remap_reviews_pending_product_unique_idx",
            "product_id",
            unique=True,
            postgresql_where=text("status = 'pending'"),
            sqlite_where=text("status = 'pending'"),
        ),
        Index("taxonomy_remap_reviews_status_created_idx", "status", "created_at"),
        Index("taxonomy_remap_reviews_source_idx", "source"),
    )

    product_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        doc="Product the proposal applies to"
    )
    status: Mapped[RemapReviewStatus] = mapped_column(
        SQLEnum(
            RemapReviewStatus,
            name="taxonomy_remap_review_status",
            create_constraint=False,
            values_callable=lambda x: [e.value for e in x]
        ),
        nullable=False,
        default=RemapReviewStatus.PENDING,
        server_default=RemapReviewStatus.PENDING.value,
        doc="Current review status"
    )
    source: Mapped[Optional[str]] = mapped_column(String(120), nullable=True)
    run_key: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)

    from_category: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    from_subcategory: Mapped[Optional[str]] = mapped_column(String(150), nullable=True)
    from_gender: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    to_category: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    to_subcategory: Mapped[Optional[str]] = mapped_column(String(150), nullable=True)
    to_gender: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    confidence: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    reasons: Mapped[List[str]] = mapped_column(
        JSONType,
        nullable=False,
        default=list,
        doc="Ordered rule identifiers that fired"
    )
    field_scores: Mapped[Dict[str, Any]] = mapped_column(
        JSONType,
        nullable=False,
        default=dict,
        doc="Per-field {confidence, support, margin} snapshots"
    )
    seo_category_hints: Mapped[List[str]] = mapped_column(JSONType, nullable=False, default=list)
    source_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    score_support: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    margin_ratio: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    image_cover_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    source_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    decided_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        doc="When a reviewer accepted or rejected the proposal"
    )

    def __repr__(self) -> str:
        return (
            f"<TaxonomyRemapReview(id={self.id}, product_id={self.product_id}, "
            f"status='{self.status.value}')>"
        )
