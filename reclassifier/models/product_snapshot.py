"""Pydantic model for the product fields the classifier reads."""
from pydantic import BaseModel, Field, field_validator
from typing import Any, Dict, List, Optional
from uuid import UUID


class ProductSnapshot(BaseModel):
    """Validated, read-only view of a catalog product.

    Built from a ``products`` row at the start of scoring. Records that fail
    validation are skipped by the batch rather than raised.
    """

    id: UUID
    name: str = Field(default="", max_length=2000)
    description: Optional[str] = None
    category: Optional[str] = None
    subcategory: Optional[str] = None
    gender: Optional[str] = None
    seo_title: Optional[str] = None
    seo_description: Optional[str] = None
    seo_tags: List[str] = Field(default_factory=list)
    source_url: Optional[str] = None
    image_cover_url: Optional[str] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)
    has_pending: bool = False

    @field_validator("name", mode="before")
    @classmethod
    def coerce_name(cls, v: Any) -> str:
        if v is None:
            return ""
        return str(v)

    @field_validator("seo_tags", mode="before")
    @classmethod
    def coerce_seo_tags(cls, v: Any) -> List[str]:
        """Accept a list of tags or a comma-separated string.

        Args:
            v: Raw tag value from the database

        Returns:
            List of non-empty tag strings
        """
        if v is None:
            return []
        if isinstance(v, str):
            return [part.strip() for part in v.split(",") if part.strip()]
        if isinstance(v, (list, tuple)):
            return [str(item).strip() for item in v if item is not None and str(item).strip()]
        raise ValueError("seo_tags must be a list or a comma-separated string")

    @field_validator("metadata", mode="before")
    @classmethod
    def coerce_metadata(cls, v: Any) -> Dict[str, Any]:
        if isinstance(v, dict):
            return v
        return {}

    @classmethod
    def from_row(cls, product: Any, has_pending: bool = False) -> "ProductSnapshot":
        """Build a snapshot from a ``Product`` ORM row."""
        return cls(
            id=product.id,
            name=product.name,
            description=product.description,
            category=product.category,
            subcategory=product.subcategory,
            gender=product.gender,
            seo_title=product.seo_title,
            seo_description=product.seo_description,
            seo_tags=product.seo_tags,
            source_url=product.source_url,
            image_cover_url=product.image_cover_url,
            metadata=product.meta,
            has_pending=has_pending,
        )

    @property
    def enrichment(self) -> Dict[str, Any]:
        value = self.metadata.get("enrichment")
        return value if isinstance(value, dict) else {}

    @property
    def original_description(self) -> Optional[str]:
        value = self.enrichment.get("original_description")
        if isinstance(value, str) and value.strip():
            return value
        return None

    @property
    def best_description(self) -> Optional[str]:
        """Pre-enrichment description when preserved, else the current one."""
        return self.original_description or self.description

    @property
    def vendor_signals(self) -> Dict[str, Any]:
        """Vendor-provided classification hints.

        Enriched products keep the vendor's own signals under
        ``enrichment.original_vendor_signals``; older rows carry them at the
        top level of the metadata.
        """
        preserved = self.enrichment.get("original_vendor_signals")
        if isinstance(preserved, dict):
            return preserved
        return self.metadata
