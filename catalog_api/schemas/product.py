from datetime import datetime
from decimal import Decimal
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from catalog_api.schemas.common import CamelModel, as_utc


# Properties to receive on creation (seeding / administration scripts)
class ProductCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=2, max_length=255)
    brand: str = Field(min_length=2, max_length=100)
    model: str = Field(min_length=2, max_length=100)
    price: Decimal = Field(ge=0, lt=100000, max_digits=10, decimal_places=2)
    description: Optional[str] = Field(default=None, max_length=5000)
    specifications: Dict[str, str] = Field(default_factory=dict)


# Properties to receive on update; only provided fields are applied
class ProductUpdate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: Optional[str] = Field(default=None, min_length=2, max_length=255)
    brand: Optional[str] = Field(default=None, min_length=2, max_length=100)
    model: Optional[str] = Field(default=None, min_length=2, max_length=100)
    price: Optional[Decimal] = Field(default=None, ge=0, lt=100000, max_digits=10, decimal_places=2)
    description: Optional[str] = Field(default=None, max_length=5000)
    specifications: Optional[Dict[str, str]] = None


# Shape of a product inside a paginated list
class ProductListItem(CamelModel):
    id: int
    name: str
    brand: str
    model: str
    price: Decimal
    formatted_price: str


# Full product representation
class ProductRead(ProductListItem):
    description: Optional[str] = None
    specifications: Dict[str, str] = Field(default_factory=dict)
    created_at: datetime
    updated_at: datetime

    @field_validator("specifications", mode="before")
    @classmethod
    def _null_specifications(cls, value):
        return value or {}

    @field_serializer("created_at", "updated_at")
    def _serialize_timestamp(self, value: datetime) -> Optional[str]:
        return as_utc(value)
