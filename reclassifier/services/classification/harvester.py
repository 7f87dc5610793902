"""Signal harvester: product text → category/subcategory/gender candidates.

Strategy:
1. Normalize each evidence source (name, best description, SEO title,
   description and tags, source URL path, vendor metadata)
2. Category: score the concatenated evidence against every category,
   skipping keywords a cross-category guard rules out for this text
3. Subcategory: rank within the current or inferred category and check
   whether the product name alone picks the same winner (name-backed)
4. Gender: weighted per-source cue words plus light category priors
5. Strength: how many independent sources agree with the winning category

No evidence at all is not an error: it yields an empty, weak signal.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple
from urllib.parse import urlparse

import structlog

from reclassifier.models.product_snapshot import ProductSnapshot
from reclassifier.services.classification import dictionaries as kw
from reclassifier.services.classification.evidence_index import Candidate, TaxonomyIndex
from reclassifier.services.classification.text import NormalizedText, normalize_keywords

logger = structlog.get_logger(__name__)


NO_RUNNER_UP_MARGIN = 99.0

SOURCE_NAMES = ("name", "description", "seo_title", "seo_description", "seo_tags", "url", "vendor")

_FEMALE = normalize_keywords(kw.GENDER_FEMALE_KEYWORDS)
_MALE = normalize_keywords(kw.GENDER_MALE_KEYWORDS)
_UNISEX = normalize_keywords(kw.GENDER_UNISEX_KEYWORDS)
_CHILD_STRICT = normalize_keywords(kw.GENDER_CHILD_STRICT_KEYWORDS)
_CHILD_NAME = normalize_keywords(kw.GENDER_CHILD_NAME_KEYWORDS)
_CHILD_BABY = normalize_keywords(kw.GENDER_CHILD_BABY_KEYWORDS)
_CHILD_COLOR = normalize_keywords(kw.GENDER_CHILD_COLOR_KEYWORDS)
_CHILD_ADULT_FALSE_POSITIVES = normalize_keywords(kw.GENDER_CHILD_ADULT_FALSE_POSITIVES)
_FEMALE_PRODUCT = normalize_keywords(kw.GENDER_FEMALE_PRODUCT_KEYWORDS)
_MALE_PRODUCT = normalize_keywords(kw.GENDER_MALE_PRODUCT_KEYWORDS)


class SignalStrength(str, Enum):
    """Qualitative robustness of the category evidence."""
    STRONG = "strong"
    MODERATE = "moderate"
    WEAK = "weak"


@dataclass
class Signal:
    """Harvested evidence summary for one product.

    Created fresh per product per run and discarded after the decision.
    Margins are best/runner-up score ratios (99.0 when there is no
    runner-up, 0.0 when there is no candidate).
    """
    inferred_category: Optional[str] = None
    inferred_subcategory: Optional[str] = None
    inferred_gender: Optional[str] = None
    signal_strength: SignalStrength = SignalStrength.WEAK

    category_support: int = 0
    category_margin: float = 0.0
    category_keywords: Tuple[str, ...] = ()

    subcategory_support: int = 0
    subcategory_margin: float = 0.0
    subcategory_keywords: Tuple[str, ...] = ()
    subcategory_name_backed: bool = False
    name_subcategory: Optional[str] = None
    description_subcategory: Optional[str] = None

    gender_support: int = 0
    gender_margin: float = 0.0
    gender_confidence: float = 0.0
    gender_reasons: Tuple[str, ...] = ()

    agreeing_sources: Tuple[str, ...] = ()
    conflicting_categories: Tuple[str, ...] = ()
    source_count: int = 0
    evidence: NormalizedText = field(default_factory=NormalizedText.of)

    @property
    def has_opinion(self) -> bool:
        return any((self.inferred_category, self.inferred_subcategory, self.inferred_gender))


@dataclass
class _GenderBucket:
    score: float = 0.0
    sources: set = field(default_factory=set)
    reasons: List[str] = field(default_factory=list)

    def add(self, amount: float, reason: str, source: Optional[str] = None) -> None:
        self.score += amount
        if reason not in self.reasons:
            self.reasons.append(reason)
        if source is not None:
            self.sources.add(source)
            src_reason = f"src:{source}"
            if src_reason not in self.reasons:
                self.reasons.append(src_reason)


def _margin(best: float, runner_up: float) -> float:
    if best <= 0:
        return 0.0
    if runner_up <= 0:
        return NO_RUNNER_UP_MARGIN
    return round(best / runner_up, 4)


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


class SignalHarvester:
    """Builds a ``Signal`` for a product from a ``TaxonomyIndex``.

    Attributes:
        index: Keyword evidence index for the active taxonomy
    """

    def __init__(self, index: TaxonomyIndex):
        self.index = index
        self._log = logger.bind(component="SignalHarvester")

    # ------------------------------------------------------------------
    # Sources
    # ------------------------------------------------------------------

    def collect_sources(self, product: ProductSnapshot) -> Dict[str, NormalizedText]:
        """Normalized, non-empty evidence sources keyed by source name."""
        vendor = product.vendor_signals
        vendor_parts = [vendor.get("product_type"), vendor.get("category")]
        tags = vendor.get("tags")
        if isinstance(tags, (list, tuple)):
            vendor_parts.extend(str(tag) for tag in tags)
        elif isinstance(tags, str):
            vendor_parts.append(tags)

        raw = {
            "name": NormalizedText.of(product.name),
            "description": NormalizedText.of(product.best_description),
            "seo_title": NormalizedText.of(product.seo_title),
            "seo_description": NormalizedText.of(product.seo_description),
            "seo_tags": NormalizedText.of(*product.seo_tags),
            "url": NormalizedText.of(self._url_path(product.source_url)),
            "vendor": NormalizedText.of(*[part for part in vendor_parts if isinstance(part, str)]),
        }
        return {name: text for name, text in raw.items() if text}

    @staticmethod
    def _url_path(url: Optional[str]) -> Optional[str]:
        if not url:
            return None
        try:
            return urlparse(url).path
        except ValueError:
            return None

    def _vendor_category(self, product: ProductSnapshot) -> Optional[str]:
        vendor = product.vendor_signals
        for key in ("product_type", "category"):
            value = vendor.get(key)
            if isinstance(value, str):
                resolved = self.index.resolve_category(value)
                if resolved:
                    return resolved
        return None

    # ------------------------------------------------------------------
    # Harvest
    # ------------------------------------------------------------------

    def harvest(self, product: ProductSnapshot) -> Signal:
        """Compute the signal for one product.

        Args:
            product: Validated product snapshot

        Returns:
            Signal with candidates, support/margin and strength
        """
        sources = self.collect_sources(product)
        if not sources:
            return Signal()

        evidence = NormalizedText.of(*[text.text for text in sources.values()])
        matched = self.index.match_keywords(evidence)
        signal = Signal(evidence=evidence, source_count=len(sources))

        current_category = self.index.normalize_category(product.category)
        current_subcategory = self.index.normalize_subcategory(current_category, product.subcategory)

        ranked = self.index.rank_categories(evidence, matched)
        best = ranked[0] if ranked else None
        if best is not None:
            signal.inferred_category = best.key
            signal.category_support = best.support
            signal.category_margin = _margin(best.score, ranked[1].score if len(ranked) > 1 else 0)
            signal.category_keywords = best.matched
            self._vote(signal, product, sources, best.key)
        signal.signal_strength = self._strength(signal, best)

        scope = current_category
        if signal.inferred_category and signal.inferred_category != current_category:
            scope = signal.inferred_category
        if scope:
            self._infer_subcategory(signal, sources, scope, evidence, matched)

        self._infer_gender(
            signal,
            sources,
            category=signal.inferred_category or current_category,
            subcategory=signal.inferred_subcategory or current_subcategory,
        )
        return signal

    def _vote(
        self,
        signal: Signal,
        product: ProductSnapshot,
        sources: Dict[str, NormalizedText],
        winner: str,
    ) -> None:
        """Per-source category winners: which sources agree with ``winner``."""
        agreeing = []
        conflicting = set()
        for name, text in sources.items():
            vote = None
            if name == "vendor":
                vote = self._vendor_category(product)
            if vote is None:
                per_source = self.index.rank_categories(text)
                vote = per_source[0].key if per_source else None
            if vote is None:
                continue
            if vote == winner:
                agreeing.append(name)
            else:
                conflicting.add(vote)
        signal.agreeing_sources = tuple(agreeing)
        signal.conflicting_categories = tuple(sorted(conflicting))

    @staticmethod
    def _strength(signal: Signal, best: Optional[Candidate]) -> SignalStrength:
        if best is None:
            return SignalStrength.WEAK
        agreeing = len(signal.agreeing_sources)
        conflicts = len(signal.conflicting_categories)
        if best.specific_score == 0 and best.support <= 1:
            return SignalStrength.WEAK
        if agreeing >= 2 and conflicts == 0:
            return SignalStrength.STRONG
        if best.support >= 3 and signal.category_margin >= 1.5 and conflicts == 0:
            return SignalStrength.STRONG
        if agreeing >= 1 and conflicts <= 1:
            return SignalStrength.MODERATE
        return SignalStrength.WEAK

    def _infer_subcategory(
        self,
        signal: Signal,
        sources: Dict[str, NormalizedText],
        scope: str,
        evidence: NormalizedText,
        matched,
    ) -> None:
        ranked = self.index.rank_subcategories(scope, evidence, matched)
        if not ranked:
            return
        best = ranked[0]
        runner_up = ranked[1] if len(ranked) > 1 else None
        signal.inferred_subcategory = best.key
        signal.subcategory_support = best.support
        signal.subcategory_keywords = best.matched
        if best.specific_score > 0:
            signal.subcategory_margin = _margin(best.specific_score, runner_up.specific_score if runner_up else 0)
        else:
            signal.subcategory_margin = _margin(best.score, runner_up.score if runner_up else 0)

        name = sources.get("name")
        if name:
            by_name = self.index.rank_subcategories(scope, name)
            signal.name_subcategory = by_name[0].key if by_name else None
        signal.subcategory_name_backed = signal.name_subcategory == best.key

        rest = NormalizedText.of(*[t.text for n, t in sources.items() if n != "name"])
        if rest:
            by_rest = self.index.rank_subcategories(scope, rest)
            signal.description_subcategory = by_rest[0].key if by_rest else None

    def _infer_gender(
        self,
        signal: Signal,
        sources: Dict[str, NormalizedText],
        category: Optional[str],
        subcategory: Optional[str],
    ) -> None:
        genders = self.index.genders
        buckets: Dict[str, _GenderBucket] = {}

        def add(gender: str, amount: float, reason: str, source: Optional[str] = None) -> None:
            if gender not in genders:
                return
            buckets.setdefault(gender, _GenderBucket()).add(amount, reason, source)

        explicit_unisex = False
        mixed_binary = False
        for source in SOURCE_NAMES:
            text = sources.get(source)
            if not text:
                continue
            weight = kw.GENDER_SOURCE_WEIGHTS.get(source, 1.0)
            has_female = text.contains_any(_FEMALE)
            has_male = text.contains_any(_MALE)
            child_strict = text.contains_any(_CHILD_STRICT)
            child_baby = (
                text.contains_any(_CHILD_BABY)
                and not text.contains_any(_CHILD_ADULT_FALSE_POSITIVES)
                and not (not child_strict and text.contains_any(_CHILD_COLOR))
            )
            if has_female:
                add("femenino", weight, "kw:gender_female", source)
            if has_male:
                add("masculino", weight, "kw:gender_male", source)
            if text.contains_any(_FEMALE_PRODUCT):
                add("femenino", weight * 0.55, "kw:gender_female_product", source)
            if text.contains_any(_MALE_PRODUCT):
                add("masculino", weight * 0.55, "kw:gender_male_product", source)
            if child_strict:
                add("infantil", weight * 1.25, "kw:gender_child_strict", source)
            if text.contains_any(_CHILD_NAME):
                add("infantil", weight * 0.85, "kw:gender_child_name", source)
            if child_baby:
                add("infantil", weight * 0.78, "kw:gender_child_baby", source)
            if text.contains_any(_UNISEX):
                explicit_unisex = True
                add("no_binario_unisex", weight * 1.35, "kw:gender_unisex", source)
            if has_female and has_male:
                mixed_binary = True
                add("no_binario_unisex", weight * 1.5, "kw:gender_mixed_binary", source)

        sub_tokens = set((subcategory or "").split("_"))
        if "bebe" in sub_tokens:
            add("infantil", 2.5, "cat:gender_child")
        if category in kw.FEMININE_PRIOR_CATEGORIES or (
            category == "ropa_interior_basica" and subcategory != "boxer"
        ):
            add("femenino", 0.9, "cat:gender_feminine_prior")
        if category == "trajes_de_bano_y_playa" and subcategory in ("bikini", "vestido_de_bano_entero"):
            add("femenino", 0.9, "cat:gender_feminine_swim")
        if category == "trajes_de_bano_y_playa" and subcategory == "bermuda_boxer_de_bano":
            add("masculino", 0.7, "cat:gender_masculine_swim")
        if category in kw.NEUTRAL_PRIOR_CATEGORIES:
            add("no_binario_unisex", 0.7, "cat:gender_neutral")

        female = buckets.get("femenino")
        male = buckets.get("masculino")
        if female and male and female.score > 0 and male.score > 0:
            mixed_binary = True
            add("no_binario_unisex", min(female.score, male.score) * 0.7, "rule:gender_dual_binary_overlap")

        if not buckets:
            return

        order = {gender: position for position, gender in enumerate(genders)}
        ranked = sorted(buckets.items(), key=lambda item: (-item[1].score, order[item[0]]))
        top_gender, top = ranked[0]
        second = ranked[1][1].score if len(ranked) > 1 else 0.0
        total = sum(bucket.score for _, bucket in ranked)
        share = top.score / max(total, 0.0001)
        support = len(top.sources)
        margin = _margin(top.score, second)

        confidence = 0.5 + share * 0.32 + min(0.12, max(0, support - 1) * 0.04)
        if support >= 2:
            if margin >= 1.7:
                confidence += 0.1
            elif margin >= 1.4:
                confidence += 0.05
        if margin < 1.2:
            confidence -= 0.08
        if explicit_unisex and top_gender == "no_binario_unisex":
            confidence += 0.08
        if mixed_binary and top_gender == "no_binario_unisex":
            confidence += 0.06
        if "cat:gender_child" in top.reasons:
            confidence += 0.05

        signal.inferred_gender = top_gender
        signal.gender_support = support
        signal.gender_margin = margin
        signal.gender_confidence = round(_clamp(confidence, 0.45, 0.97), 4)
        signal.gender_reasons = tuple(top.reasons)
