"""Database models for the taxonomy reclassifier."""
from reclassifier.db.models.product import Product
from reclassifier.db.models.taxonomy_remap_review import TaxonomyRemapReview, RemapReviewStatus
from reclassifier.db.models.auto_reseed_run import (
    AutoReseedRun,
    AutoReseedRunStatus,
    AutoReseedTrigger,
    RUNNING_UNIQUE_INDEX,
)

__all__ = [
    # Catalog (read-only)
    "Product",
    # Review proposals
    "TaxonomyRemapReview",
    "RemapReviewStatus",
    # Run audit
    "AutoReseedRun",
    "AutoReseedRunStatus",
    "AutoReseedTrigger",
    "RUNNING_UNIQUE_INDEX",
]
