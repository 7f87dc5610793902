"""Built-in taxonomy definitions."""
from reclassifier.services.taxonomy.base import (
    build_base_taxonomy,
    BASE_CATEGORIES,
    GENDER_NEUTRAL_CATEGORIES,
    CHILD_UNLIKELY_CATEGORIES,
)

__all__ = [
    "build_base_taxonomy",
    "BASE_CATEGORIES",
    "GENDER_NEUTRAL_CATEGORIES",
    "CHILD_UNLIKELY_CATEGORIES",
]
