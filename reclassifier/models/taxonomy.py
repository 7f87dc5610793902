"""Pydantic models describing a catalog taxonomy.

The taxonomy is an input: a list of categories, each with an ordered list of
subcategories, plus the flat set of valid genders. Declaration order matters
because it breaks ties between equally scored candidates.
"""
from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Dict, List, Mapping, Optional, Sequence


DEFAULT_GENDERS = ["masculino", "femenino", "no_binario_unisex", "infantil"]

SLUG_PATTERN = r"^[a-z0-9]+(_[a-z0-9]+)*$"


class SubcategoryDefinition(BaseModel):
    """A subcategory slug with optional human label and extra synonyms."""

    key: str = Field(..., min_length=1, max_length=150, pattern=SLUG_PATTERN)
    label: Optional[str] = Field(default=None, max_length=200)
    synonyms: List[str] = Field(default_factory=list)

    @property
    def display_label(self) -> str:
        return self.label or self.key.replace("_", " ")


class CategoryDefinition(BaseModel):
    """A category slug with its ordered subcategories."""

    key: str = Field(..., min_length=1, max_length=100, pattern=SLUG_PATTERN)
    label: Optional[str] = Field(default=None, max_length=200)
    synonyms: List[str] = Field(default_factory=list)
    subcategories: List[SubcategoryDefinition] = Field(default_factory=list)

    @property
    def display_label(self) -> str:
        return self.label or self.key.replace("_", " ")

    @property
    def subcategory_keys(self) -> List[str]:
        return [sub.key for sub in self.subcategories]


class Taxonomy(BaseModel):
    """Category → subcategory mapping plus the valid gender values.

    Attributes:
        categories: Categories in declaration order
        genders: Flat list of valid gender slugs
    """

    categories: List[CategoryDefinition]
    genders: List[str] = Field(default_factory=lambda: list(DEFAULT_GENDERS))

    @field_validator("genders")
    @classmethod
    def validate_genders(cls, v: List[str]) -> List[str]:
        """Reject empty or duplicated gender lists."""
        if not v:
            raise ValueError("Taxonomy needs at least one gender")
        if len(set(v)) != len(v):
            raise ValueError("Duplicate gender values")
        return v

    @model_validator(mode="after")
    def validate_unique_keys(self) -> "Taxonomy":
        """Category keys and subcategory keys must each be globally unique."""
        seen_categories = set()
        seen_subcategories: Dict[str, str] = {}
        for category in self.categories:
            if category.key in seen_categories:
                raise ValueError(f"Duplicate category '{category.key}'")
            seen_categories.add(category.key)
            for sub in category.subcategories:
                owner = seen_subcategories.get(sub.key)
                if owner is not None:
                    raise ValueError(
                        f"Subcategory '{sub.key}' declared in both '{owner}' and '{category.key}'"
                    )
                seen_subcategories[sub.key] = category.key
        return self

    @classmethod
    def from_mapping(
        cls,
        mapping: Mapping[str, Sequence[str]],
        genders: Optional[Sequence[str]] = None,
    ) -> "Taxonomy":
        """Build a taxonomy from a plain ``{category: [subcategory, ...]}`` mapping."""
        categories = [
            CategoryDefinition(
                key=category,
                subcategories=[SubcategoryDefinition(key=sub) for sub in subs],
            )
            for category, subs in mapping.items()
        ]
        if genders is None:
            return cls(categories=categories)
        return cls(categories=categories, genders=list(genders))

    def category_keys(self) -> List[str]:
        return [category.key for category in self.categories]
