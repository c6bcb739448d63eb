"""
Product Model Module

Products form the shared phone catalog. They are global: every client sees
the same products.
"""
from datetime import datetime
from decimal import Decimal
from typing import Dict, Optional

from sqlalchemy import JSON, Column, DateTime, Index, Text
from sqlmodel import Field, SQLModel

from catalog_api.models.client import utcnow


def format_price(price: Decimal) -> str:
    """Render a price as ``1 199,99 €``."""
    return f"{Decimal(price):,.2f}".replace(",", " ").replace(".", ",") + " €"


class Product(SQLModel, table=True):
    """
    Product model representing a catalog entry.

    Attributes:
        id: Auto-incrementing primary key
        name: Commercial name, e.g. "iPhone 15 Pro Max"
        brand: Manufacturer, used by the brand filter (indexed)
        model: Manufacturer model reference
        price: Price in euros, NUMERIC(10, 2)
        description: Optional long description (up to 5000 characters)
        specifications: Free-form key -> value technical sheet
        created_at: UTC timestamp set when the object is constructed
        updated_at: UTC timestamp re-stamped by every mutation
    """
    __tablename__ = "products"
    __table_args__ = (
        Index("idx_product_brand", "brand"),
        Index("idx_product_name", "name"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=255, nullable=False)
    brand: str = Field(max_length=100, nullable=False)
    model: str = Field(max_length=100, nullable=False)
    price: Decimal = Field(max_digits=10, decimal_places=2, nullable=False)
    description: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))

    # Technical sheet stored as a JSON object
    specifications: Dict[str, str] = Field(default_factory=dict, sa_column=Column(JSON, nullable=True))

    created_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
    updated_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )

    @property
    def formatted_price(self) -> str:
        return format_price(self.price)

    def touch(self) -> None:
        """Mark the product as modified now."""
        self.updated_at = utcnow()

    def __str__(self) -> str:
        return f"{self.brand} {self.name}"
