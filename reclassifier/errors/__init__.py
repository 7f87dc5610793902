"""Error handling module."""
from reclassifier.errors.exceptions import (
    ReclassifierError,
    ValidationError,
    DatabaseError,
    TaxonomyError,
    RunAlreadyActiveError,
)

__all__ = [
    "ReclassifierError",
    "ValidationError",
    "DatabaseError",
    "TaxonomyError",
    "RunAlreadyActiveError",
]
