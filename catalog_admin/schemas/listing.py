"""Product listing filter, sort and page schemas"""
import enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from catalog_admin.db.models.product import Gender
from catalog_admin.schemas.product import ProductResponse


class ValueRange(BaseModel):
    """Inclusive numeric range; both bounds are required"""

    min: float
    max: float

    @model_validator(mode="after")
    def check_bounds(self):
        if self.min > self.max:
            raise ValueError("range minimum cannot be greater than maximum")
        return self


class ProductFilters(BaseModel):
    """Optional filter set for the product listing. Empty fields do not constrain."""

    category_ids: List[int] = Field(default_factory=list)
    brand_ids: List[int] = Field(default_factory=list)
    price_range: Optional[ValueRange] = None
    discount_range: Optional[ValueRange] = None
    occasions: List[str] = Field(default_factory=list)
    gender: Optional[Gender] = None

    @property
    def is_empty(self) -> bool:
        return not (
            self.category_ids
            or self.brand_ids
            or self.price_range
            or self.discount_range
            or self.occasions
            or self.gender
        )


class SortField(str, enum.Enum):
    PRICE = "price"
    RATING = "rating"
    CREATED_AT = "created_at"
    NAME = "name"
    DISCOUNT = "discount"


class SortDirection(str, enum.Enum):
    ASC = "asc"
    DESC = "desc"


class SortSpec(BaseModel):
    """Sort field and direction, restricted to the allowed columns"""

    field: SortField = SortField.CREATED_AT
    direction: SortDirection = SortDirection.DESC

    @classmethod
    def parse(cls, value: Optional[str]) -> "SortSpec":
        """
        Parse the `field-direction` wire form, e.g. "price-asc" or
        "created_at-desc". An empty value gives the default sort.

        Raises:
            ValueError: if the field or direction is not allowed
        """
        if not value or not value.strip():
            return cls()
        field, sep, direction = value.strip().rpartition("-")
        if not sep or not field:
            raise ValueError(f"Invalid sort '{value}', expected 'field-direction'")
        try:
            return cls(field=SortField(field), direction=SortDirection(direction.lower()))
        except ValueError:
            allowed = ", ".join(f.value for f in SortField)
            raise ValueError(
                f"Invalid sort '{value}'. Allowed fields: {allowed}; directions: asc, desc"
            )

    def __str__(self) -> str:
        return f"{self.field.value}-{self.direction.value}"


class ProductListResult(BaseModel):
    """One page of the product listing"""

    items: List[ProductResponse]
    total_count: int = Field(..., alias="totalCount")
    total_pages: int = Field(..., alias="totalPages")
    count_on_page: int = Field(..., alias="countOnPage")

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def empty(cls, total_count: int = 0, total_pages: int = 0) -> "ProductListResult":
        return cls(items=[], total_count=total_count, total_pages=total_pages, count_on_page=0)
