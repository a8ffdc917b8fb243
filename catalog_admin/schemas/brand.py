# catalog_admin/schemas/brand.py
from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import datetime


def _normalize_website(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    if not value:
        return None
    if not value.startswith("http"):
        return f"http://{value}"
    return value


class BrandBase(BaseModel):
    """Base Pydantic model for Brand data"""

    name: str = Field(..., max_length=255, description="Display name of the brand")
    website: Optional[str] = Field(None, max_length=500, description="Brand website URL")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("brand name is required")
        return v

    @field_validator("website")
    @classmethod
    def validate_website(cls, v):
        return _normalize_website(v)


class BrandCreate(BrandBase):
    """Schema for creating a new Brand"""

    pass


class BrandUpdate(BaseModel):
    """Schema for updating a Brand (all fields optional)"""

    name: Optional[str] = Field(None, max_length=255)
    website: Optional[str] = Field(None, max_length=500)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        # Only runs when a name was sent; an omitted name leaves the brand unchanged
        if v is None or not v.strip():
            raise ValueError("brand name cannot be empty")
        return v.strip()

    @field_validator("website")
    @classmethod
    def validate_website(cls, v):
        return _normalize_website(v)


class BrandRef(BaseModel):
    """Brand reference embedded in product responses"""

    id: int
    name: str

    model_config = {"from_attributes": True}


class BrandInDB(BrandBase):
    """Schema for Brand as stored in DB (includes DB fields)"""

    id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class BrandResponse(BrandInDB):
    """Schema for API responses"""

    pass
