# catalog_admin/schemas/product.py
from pydantic import BaseModel, Field, field_validator
from typing import List, Optional
from datetime import datetime

from catalog_admin.db.models.product import Gender
from catalog_admin.schemas.brand import BrandRef
from catalog_admin.schemas.category import CategoryRef
from catalog_admin.utils.formatters import parse_brand_ids, split_tags


class ProductBase(BaseModel):
    """Base Pydantic model for Product data"""

    name: str = Field(..., max_length=255)
    description: Optional[str] = None
    old_price: float = Field(..., ge=0, description="Price before discount")
    discount: float = Field(0, ge=0, le=100, description="Discount percent")
    image_url: Optional[str] = Field(None, max_length=500)
    gender: Gender
    colors: Optional[str] = Field(None, description="Comma-joined colors")
    rating: float = Field(0.0, ge=0, le=5)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("product name is required")
        return v


class ProductCreate(ProductBase):
    """
    Schema for creating a Product.

    brand_ids also accepts the legacy wire form, a JSON-encoded array string
    such as '["1", "4"]'. occasions accepts a list or a comma-joined string.
    """

    category_ids: List[int] = Field(default_factory=list)
    brand_ids: List[int] = Field(default_factory=list)
    occasions: List[str] = Field(default_factory=list)

    @field_validator("brand_ids", mode="before")
    @classmethod
    def parse_legacy_brands(cls, v):
        if v is None:
            return []
        if isinstance(v, str):
            parsed = parse_brand_ids(v)
            if parsed is None:
                raise ValueError("brand_ids must be a list of ids or a JSON-encoded array")
            return parsed
        return v

    @field_validator("occasions", mode="before")
    @classmethod
    def parse_occasions(cls, v):
        return split_tags(v)

    @field_validator("category_ids", "brand_ids")
    @classmethod
    def dedupe_ids(cls, v):
        return list(dict.fromkeys(v))


class ProductUpdate(ProductCreate):
    """Schema for a full-record Product update"""

    pass


class ProductInDB(ProductBase):
    """Schema for Product as stored in DB (includes DB fields)"""

    id: int
    price: float
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    categories: List[CategoryRef] = []
    brands: List[BrandRef] = []
    occasions: List[str] = []

    @field_validator("occasions", mode="before")
    @classmethod
    def occasion_values(cls, v):
        return [getattr(item, "occasion", item) for item in (v or [])]

    model_config = {"from_attributes": True}


class ProductResponse(ProductInDB):
    """Schema for API responses"""

    pass
