"""Pydantic models for taxonomy input, product snapshots and run results."""
from reclassifier.models.taxonomy import (
    Taxonomy,
    CategoryDefinition,
    SubcategoryDefinition,
    DEFAULT_GENDERS,
)
from reclassifier.models.product_snapshot import ProductSnapshot
from reclassifier.models.reseed import (
    AutoReseedResult,
    AutoReseedPhaseState,
    ReseedMode,
    ReseedReason,
)

__all__ = [
    # Taxonomy
    "Taxonomy",
    "CategoryDefinition",
    "SubcategoryDefinition",
    "DEFAULT_GENDERS",
    # Products
    "ProductSnapshot",
    # Runs
    "AutoReseedResult",
    "AutoReseedPhaseState",
    "ReseedMode",
    "ReseedReason",
]
