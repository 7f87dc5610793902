"""AutoReseedRun ORM model: audit row for one auto-reseed batch."""
from sqlalchemy import String, DateTime, Integer, Boolean, Text, Index, text
from sqlalchemy import Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column
from reclassifier.db.base import Base, UUIDMixin, TimestampMixin, utc_now
from datetime import datetime
from typing import Optional
from enum import Enum as PyEnum


RUNNING_UNIQUE_INDEX = "taxonomy_remap_auto_reseed_runs_running_unique_idx"


class AutoReseedTrigger(PyEnum):
    """What started a run."""
    DECISION = "decision"
    CRON = "cron"
    MANUAL = "manual"


class AutoReseedRunStatus(PyEnum):
    """Run lifecycle status.

    State Transitions:
        - running → completed (at least one proposal written)
        - running → skipped (no qualifying candidates)
        - running → failed (exception, watchdog or forced recovery)
    """
    RUNNING = "running"
    COMPLETED = "completed"
    SKIPPED = "skipped"
    FAILED = "failed"


class AutoReseedRun(Base, UUIDMixin, TimestampMixin):
    """Audit row for a single auto-reseed execution.

    The partial unique index on ``status`` where ``status = 'running'`` is the
    mutual-exclusion point: inserting a second running row fails with a
    unique violation.
    """

    __tablename__ = "taxonomy_remap_auto_reseed_runs"
    __table_args__ = (
        Index(
            RUNNING_UNIQUE_INDEX,
            "status",
            unique=True,
            postgresql_where=text("status = 'running'"),
            sqlite_where=text("status = 'running'"),
        ),
        Index("taxonomy_remap_auto_reseed_runs_started_idx", "started_at"),
    )

    trigger: Mapped[AutoReseedTrigger] = mapped_column(
        SQLEnum(
            AutoReseedTrigger,
            name="taxonomy_remap_auto_reseed_trigger",
            create_constraint=False,
            values_callable=lambda x: [e.value for e in x]
        ),
        nullable=False,
    )
    status: Mapped[AutoReseedRunStatus] = mapped_column(
        SQLEnum(
            AutoReseedRunStatus,
            name="taxonomy_remap_auto_reseed_status",
            create_constraint=False,
            values_callable=lambda x: [e.value for e in x]
        ),
        nullable=False,
        default=AutoReseedRunStatus.RUNNING,
    )
    reason: Mapped[Optional[str]] = mapped_column(String(80), nullable=True)
    force: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    requested_limit: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    started_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
    )
    completed_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    pending_count: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    pending_threshold: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    scanned: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    proposed: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    enqueued: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    failed_products: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    source: Mapped[Optional[str]] = mapped_column(String(120), nullable=True)
    run_key: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    error: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<AutoReseedRun(id={self.id}, trigger='{self.trigger.value}', status='{self.status.value}')>"
