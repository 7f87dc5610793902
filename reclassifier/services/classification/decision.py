"""Decision engine: (current state, signal) → proposal draft or nothing.

Pure and I/O free. Each field (category, subcategory, gender) is decided
independently:

* evidence gate: a move into a category/subcategory needs at least one of
  the target's required-evidence keywords in the evidence text
* move threshold: lower when the field is empty, higher when it would
  overwrite a stored value, raised further for risky gender moves
* cross-field consistency: a subcategory never outlives a category change
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from uuid import UUID

from reclassifier.models.product_snapshot import ProductSnapshot
from reclassifier.services.classification.evidence_index import TaxonomyIndex
from reclassifier.services.classification.harvester import Signal, SignalStrength
from reclassifier.services.taxonomy.base import (
    CHILD_UNLIKELY_CATEGORIES,
    GENDER_NEUTRAL_CATEGORIES,
)


UNISEX = "no_binario_unisex"
CHILD = "infantil"

BASE_CONFIDENCE = {
    SignalStrength.STRONG: 0.90,
    SignalStrength.MODERATE: 0.80,
    SignalStrength.WEAK: 0.62,
}
SUBCATEGORY_CONFIDENCE_PENALTY = 0.04
GENDER_FALLBACK_PENALTY = 0.05

MAX_REASONS = 12
MAX_KEYWORD_REASONS_PER_FIELD = 4
SEO_HINTS_LIMIT = 5


@dataclass(frozen=True)
class DecisionPolicy:
    """Thresholds and switches for the decision engine."""

    require_name_backed_subcategory: bool = True

    category_threshold_empty: float = 0.68
    category_threshold_set: float = 0.84
    subcategory_threshold_empty: float = 0.64
    subcategory_threshold_set: float = 0.78
    gender_threshold_empty: float = 0.64
    gender_threshold_set: float = 0.79

    gender_leave_unisex: float = 0.87
    gender_into_child: float = 0.90
    gender_neutral_category: float = 0.90
    gender_child_unlikely_category: float = 0.92
    gender_low_support: float = 0.86

    @classmethod
    def from_settings(cls, settings) -> "DecisionPolicy":
        return cls(require_name_backed_subcategory=settings.require_name_backed_subcategory)

    def gender_threshold(
        self,
        current: Optional[str],
        target: str,
        category: Optional[str],
        support: int,
    ) -> float:
        """Move threshold for a gender change, including risk raises."""
        threshold = self.gender_threshold_empty if current is None else self.gender_threshold_set
        if current == UNISEX and target != UNISEX:
            threshold = max(threshold, self.gender_leave_unisex)
        if target == CHILD and current is not None and current != CHILD:
            threshold = max(threshold, self.gender_into_child)
        if category in GENDER_NEUTRAL_CATEGORIES and target != UNISEX:
            threshold = max(threshold, self.gender_neutral_category)
        if target == CHILD and category in CHILD_UNLIKELY_CATEGORIES:
            threshold = max(threshold, self.gender_child_unlikely_category)
        if current is not None and support < 2:
            threshold = max(threshold, self.gender_low_support)
        return threshold


@dataclass
class FieldChange:
    value: Optional[str]
    confidence: float = 0.0
    support: int = 0
    margin: float = 0.0
    reset: bool = False

    def to_dict(self) -> Dict[str, Any]:
        if self.reset:
            return {"value": self.value, "reset": True}
        return {
            "value": self.value,
            "confidence": round(self.confidence, 4),
            "support": self.support,
            "margin": round(self.margin, 4),
        }


@dataclass
class ProposalDraft:
    """Proposed change for one product, not yet persisted."""

    product_id: UUID
    from_category: Optional[str]
    from_subcategory: Optional[str]
    from_gender: Optional[str]
    to_category: Optional[str]
    to_subcategory: Optional[str]
    to_gender: Optional[str]
    confidence: float
    score_support: int
    margin_ratio: float
    source_count: int
    reasons: List[str] = field(default_factory=list)
    field_scores: Dict[str, Any] = field(default_factory=dict)
    seo_category_hints: List[str] = field(default_factory=list)
    image_cover_url: Optional[str] = None
    source_url: Optional[str] = None

    @property
    def changed_fields(self) -> List[str]:
        return list(self.field_scores.keys())

    def to_row(self, source: str, run_key: str) -> Dict[str, Any]:
        """Column values for a pending ``taxonomy_remap_reviews`` row."""
        return {
            "product_id": self.product_id,
            "source": source,
            "run_key": run_key,
            "from_category": self.from_category,
            "from_subcategory": self.from_subcategory,
            "from_gender": self.from_gender,
            "to_category": self.to_category,
            "to_subcategory": self.to_subcategory,
            "to_gender": self.to_gender,
            "confidence": self.confidence,
            "reasons": list(self.reasons),
            "field_scores": dict(self.field_scores),
            "seo_category_hints": list(self.seo_category_hints),
            "source_count": self.source_count,
            "score_support": self.score_support,
            "margin_ratio": self.margin_ratio,
            "image_cover_url": self.image_cover_url,
            "source_url": self.source_url,
        }


class _Reasons:
    def __init__(self):
        self._items: List[str] = []

    def add(self, reason: str) -> None:
        if reason not in self._items:
            self._items.append(reason)

    def extend(self, reasons) -> None:
        for reason in reasons:
            self.add(reason)

    def as_list(self) -> List[str]:
        return self._items[:MAX_REASONS]


class DecisionEngine:
    """Turns a ``Signal`` into a ``ProposalDraft`` (or ``None``)."""

    def __init__(self, index: TaxonomyIndex, policy: Optional[DecisionPolicy] = None):
        self.index = index
        self.policy = policy or DecisionPolicy()

    @staticmethod
    def passes_gate(required, signal: Signal) -> bool:
        """True when the evidence text carries any required keyword."""
        return bool(required) and signal.evidence.contains_any(required)

    def decide(self, product: ProductSnapshot, signal: Signal) -> Optional[ProposalDraft]:
        """Decide which fields, if any, should be proposed for change.

        Args:
            product: Current stored classification and evidence fields
            signal: Harvested signal for the same product

        Returns:
            ProposalDraft when at least one field cleared its gate and
            threshold, else None
        """
        index = self.index
        policy = self.policy
        current_category = index.normalize_category(product.category)
        current_subcategory = index.normalize_subcategory(current_category, product.subcategory)
        current_gender = index.normalize_gender(product.gender)

        base = BASE_CONFIDENCE[signal.signal_strength]
        reasons = _Reasons()
        reasons.add(f"signal:{signal.signal_strength.value}")
        changes: Dict[str, FieldChange] = {}

        # Category
        final_category = current_category
        target = signal.inferred_category
        if target and target != current_category:
            threshold = (
                policy.category_threshold_empty
                if current_category is None
                else policy.category_threshold_set
            )
            if not self.passes_gate(index.required_category_evidence(target), signal):
                reasons.add(f"blocked:category:{target}")
            elif base >= threshold:
                final_category = target
                changes["category"] = FieldChange(
                    value=target,
                    confidence=base,
                    support=signal.category_support,
                    margin=signal.category_margin,
                )
                reasons.extend(
                    f"kw:category:{keyword}"
                    for keyword in signal.category_keywords[:MAX_KEYWORD_REASONS_PER_FIELD]
                )

        # Subcategory
        final_subcategory = current_subcategory
        target = signal.inferred_subcategory
        if target and target != current_subcategory:
            confidence = base - SUBCATEGORY_CONFIDENCE_PENALTY
            threshold = (
                policy.subcategory_threshold_empty
                if current_subcategory is None
                else policy.subcategory_threshold_set
            )
            if not index.is_valid_subcategory(final_category, target):
                reasons.add(f"blocked:subcategory_category_mismatch:{target}")
            elif not self.passes_gate(index.required_subcategory_evidence(target), signal):
                reasons.add(f"blocked:subcategory:{target}")
            elif policy.require_name_backed_subcategory and not signal.subcategory_name_backed:
                reasons.add(f"blocked:subcategory_not_name_backed:{target}")
            elif confidence >= threshold:
                final_subcategory = target
                changes["subcategory"] = FieldChange(
                    value=target,
                    confidence=confidence,
                    support=signal.subcategory_support,
                    margin=signal.subcategory_margin,
                )
                reasons.extend(
                    f"kw:subcategory:{keyword}"
                    for keyword in signal.subcategory_keywords[:MAX_KEYWORD_REASONS_PER_FIELD]
                )

        if final_subcategory and not index.is_valid_subcategory(final_category, final_subcategory):
            final_subcategory = None
            changes["subcategory"] = FieldChange(value=None, reset=True)
            reasons.add("reset:subcategory_category_mismatch")

        # Gender
        final_gender = current_gender
        target = signal.inferred_gender
        if target and target != current_gender:
            confidence = signal.gender_confidence or (base - GENDER_FALLBACK_PENALTY)
            threshold = policy.gender_threshold(
                current_gender, target, final_category, signal.gender_support
            )
            if confidence >= threshold:
                final_gender = target
                changes["gender"] = FieldChange(
                    value=target,
                    confidence=confidence,
                    support=signal.gender_support,
                    margin=signal.gender_margin,
                )
                reasons.extend(signal.gender_reasons)

        scored = [change for change in changes.values() if not change.reset]
        if not scored:
            return None

        return ProposalDraft(
            product_id=product.id,
            from_category=current_category,
            from_subcategory=current_subcategory,
            from_gender=current_gender,
            to_category=final_category,
            to_subcategory=final_subcategory,
            to_gender=final_gender,
            confidence=round(max(change.confidence for change in scored), 4),
            score_support=max(change.support for change in scored),
            margin_ratio=round(max(change.margin for change in scored), 4),
            source_count=signal.source_count,
            reasons=reasons.as_list(),
            field_scores={name: change.to_dict() for name, change in changes.items()},
            seo_category_hints=list(product.seo_tags[:SEO_HINTS_LIMIT]),
            image_cover_url=product.image_cover_url,
            source_url=product.source_url,
        )


@dataclass
class ScoringResult:
    """Outcome of scoring one product: a draft, no change, or an error."""

    product_id: Optional[UUID]
    draft: Optional[ProposalDraft] = None
    error: Optional[str] = None
    error_type: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, product_id: UUID, draft: Optional[ProposalDraft]) -> "ScoringResult":
        return cls(product_id=product_id, draft=draft)

    @classmethod
    def failure(cls, product_id: Optional[UUID], exc: Exception) -> "ScoringResult":
        return cls(product_id=product_id, error=str(exc), error_type=type(exc).__name__)
