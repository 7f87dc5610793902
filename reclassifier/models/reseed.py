"""Pydantic models for auto-reseed results and phase state."""
from pydantic import BaseModel, Field
from typing import Any, Dict, Optional
from uuid import UUID
from datetime import datetime
from enum import Enum


class ReseedReason(str, Enum):
    """Outcome reason reported by an auto-reseed attempt."""
    TRIGGERED = "triggered"
    DISABLED = "disabled"
    PENDING_ABOVE_THRESHOLD = "pending_above_threshold"
    COOLDOWN_ACTIVE = "cooldown_active"
    ALREADY_RUNNING = "already_running"
    NO_CANDIDATES = "no_candidates"
    ERROR = "error"


class ReseedMode(str, Enum):
    """Candidate selection mode.

    - default: enriched products without an accepted/rejected decision
    - refresh_pending: only products that already carry a pending proposal
    """
    DEFAULT = "default"
    REFRESH_PENDING = "refresh_pending"


class AutoReseedResult(BaseModel):
    """Result of one auto-reseed attempt, returned instead of raising."""

    triggered: bool = False
    reason: ReseedReason
    pending_count: int = Field(default=0, ge=0)
    pending_threshold: int = Field(default=0, ge=0)
    scanned: int = Field(default=0, ge=0)
    proposed: int = Field(default=0, ge=0)
    enqueued: int = Field(default=0, ge=0)
    failed_products: int = Field(default=0, ge=0)
    execution_id: Optional[UUID] = None
    source: Optional[str] = None
    run_key: Optional[str] = None
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-safe dictionary for task results and logs."""
        return self.model_dump(mode="json")


class AutoReseedPhaseState(BaseModel):
    """Snapshot of the auto-reseed phase for admin panels."""

    enabled: bool
    running: bool = False
    running_execution_id: Optional[UUID] = None
    running_trigger: Optional[str] = None
    running_since: Optional[datetime] = None
    pending_threshold: int
    auto_limit: int
    cooldown_minutes: int
    pending_count: int = 0
    remaining_to_trigger: int = 0
    ready_to_trigger: bool = False
    last_auto_reseed_at: Optional[datetime] = None
    last_auto_reseed_source: Optional[str] = None
    last_auto_reseed_run_key: Optional[str] = None
    last_auto_reseed_created: int = 0
    last_auto_reseed_pending_now: int = 0
    reviewed_since_last_auto: int = 0
    last_run_status: Optional[str] = None
    last_run_reason: Optional[str] = None
