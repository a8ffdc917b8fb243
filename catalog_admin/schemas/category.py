# catalog_admin/schemas/category.py
from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import Optional, List
from datetime import datetime


class CategoryBase(BaseModel):
    """Base Pydantic model for Category data"""
    name: str = Field(..., max_length=255, description="Display name of the category")
    parent_id: Optional[int] = Field(None, description="Parent category ID for nested categories")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("category name is required")
        return v


class CategoryCreate(CategoryBase):
    """Schema for creating a new Category"""
    pass


class CategoryUpdate(BaseModel):
    """Schema for updating a Category (all fields optional)"""
    name: Optional[str] = Field(None, max_length=255)
    parent_id: Optional[int] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        # Only runs when a name was sent; an omitted name leaves the category unchanged
        if v is None or not v.strip():
            raise ValueError("category name cannot be empty")
        return v.strip()


class CategoryRef(BaseModel):
    """Category id/name pair embedded in product responses"""
    id: int
    name: str

    model_config = {"from_attributes": True}


class CategoryInDB(CategoryBase):
    """Schema for Category as stored in DB (includes DB fields)"""
    id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class CategoryResponse(CategoryInDB):
    """Schema for API responses"""
    pass


class CategoryTreeNode(BaseModel):
    """A category with its nested subcategories"""
    id: int
    name: str
    parent_id: Optional[int] = None
    sub_categories: List["CategoryTreeNode"] = Field(default_factory=list, alias="subCategories")

    model_config = ConfigDict(populate_by_name=True)


CategoryTreeNode.model_rebuild()
