"""Parsing of the product listing query string into filter and page values"""
from typing import Iterable, List, Optional

from catalog_admin.core.config import settings
from catalog_admin.schemas.listing import ProductFilters, ValueRange


def split_values(values: Optional[Iterable[str]]) -> List[str]:
    """
    Flatten repeated and comma-separated parameters:
    ?categoryId=1,2&categoryId=3 -> ["1", "2", "3"]
    """
    result: List[str] = []
    for value in values or []:
        result.extend(part.strip() for part in value.split(",") if part.strip())
    return result


def parse_ids(values: Optional[Iterable[str]], name: str) -> List[int]:
    """Parse id parameters; anything that is not an integer is rejected"""
    ids = []
    for value in split_values(values):
        try:
            ids.append(int(value))
        except ValueError:
            raise ValueError(f"{name} must contain integer ids, got '{value}'")
    return list(dict.fromkeys(ids))


def build_range(minimum: Optional[float], maximum: Optional[float]) -> Optional[ValueRange]:
    """A range exists only when both bounds are given"""
    if minimum is None or maximum is None:
        return None
    return ValueRange(min=minimum, max=maximum)


def clamp_page(page: Optional[int]) -> int:
    return max(1, page or 1)


def clamp_page_size(page_size: Optional[int]) -> int:
    return min(settings.MAX_PAGE_SIZE, max(1, page_size or settings.DEFAULT_PAGE_SIZE))


def build_filters(
    category_id: Optional[List[str]] = None,
    brand_id: Optional[List[str]] = None,
    occasion: Optional[List[str]] = None,
    min_price: Optional[float] = None,
    max_price: Optional[float] = None,
    min_discount: Optional[float] = None,
    max_discount: Optional[float] = None,
    gender: Optional[str] = None,
) -> ProductFilters:
    """
    Build the filter set from raw listing parameters.

    Raises:
        ValueError: on malformed ids, an inverted range or an unknown gender
    """
    return ProductFilters(
        category_ids=parse_ids(category_id, "categoryId"),
        brand_ids=parse_ids(brand_id, "brandId"),
        occasions=list(dict.fromkeys(split_values(occasion))),
        price_range=build_range(min_price, max_price),
        discount_range=build_range(min_discount, max_discount),
        gender=gender.strip().lower() if gender and gender.strip() else None,
    )
