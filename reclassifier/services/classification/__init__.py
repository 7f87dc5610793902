"""Product taxonomy classification.

Deterministic keyword/phrase scoring of catalog products against a taxonomy:

Key Components:
    - TaxonomyIndex: Keyword evidence built once per taxonomy
    - SignalHarvester: Per-product category/subcategory/gender candidates
    - DecisionEngine: Gates and thresholds that turn a signal into a proposal
"""
from reclassifier.services.classification.evidence_index import (
    TaxonomyIndex,
    Candidate,
    CrossCategoryGuard,
    CROSS_CATEGORY_GUARDS,
)
from reclassifier.services.classification.harvester import (
    SignalHarvester,
    Signal,
    SignalStrength,
)
from reclassifier.services.classification.decision import (
    DecisionEngine,
    DecisionPolicy,
    ProposalDraft,
    ScoringResult,
)
from reclassifier.services.classification.text import NormalizedText, normalize_text

__all__ = [
    "TaxonomyIndex",
    "Candidate",
    "CrossCategoryGuard",
    "CROSS_CATEGORY_GUARDS",
    "SignalHarvester",
    "Signal",
    "SignalStrength",
    "DecisionEngine",
    "DecisionPolicy",
    "ProposalDraft",
    "ScoringResult",
    "NormalizedText",
    "normalize_text",
]
