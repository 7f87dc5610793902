"""Product ORM model (catalog rows owned by the storefront)."""
from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column
from reclassifier.db.base import Base, UUIDMixin, TimestampMixin, JSONType
from typing import Any, Dict, List, Optional


class Product(Base, UUIDMixin, TimestampMixin):
    """Catalog product as read by the reclassifier.

    The table is owned by the storefront; this service only reads it. Only
    the columns that feed classification are mapped.

    Attributes:
        name: Product display name
        description: Current (possibly enriched) description
        category: Current taxonomy category key
        subcategory: Current taxonomy subcategory key
        gender: Current gender key
        seo_title: SEO title
        seo_description: SEO meta description
        seo_tags: SEO tag list
        source_url: Product page on the vendor store
        image_cover_url: Cover image used in review screens
        meta: Opaque metadata; ``meta["enrichment"]`` marks enriched products
    """

    __tablename__ = "products"

    name: Mapped[str] = mapped_column(String(500), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    category: Mapped[Optional[str]] = mapped_column(String(100), nullable=True, index=True)
    subcategory: Mapped[Optional[str]] = mapped_column(String(150), nullable=True)
    gender: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    seo_title: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    seo_description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    seo_tags: Mapped[Optional[List[str]]] = mapped_column(JSONType, nullable=True)
    source_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    image_cover_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    # Python attribute renamed; "metadata" is reserved on declarative classes
    meta: Mapped[Optional[Dict[str, Any]]] = mapped_column(
        "metadata",
        JSONType,
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<Product(id={self.id}, category='{self.category}', subcategory='{self.subcategory}')>"
