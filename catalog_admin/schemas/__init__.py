# catalog_admin/schemas/__init__.py
from catalog_admin.schemas.category import (
    CategoryBase,
    CategoryCreate,
    CategoryUpdate,
    CategoryInDB,
    CategoryResponse,
    CategoryRef,
    CategoryTreeNode,
)
from catalog_admin.schemas.brand import (
    BrandBase,
    BrandCreate,
    BrandUpdate,
    BrandInDB,
    BrandResponse,
    BrandRef,
)
from catalog_admin.schemas.product import (
    ProductBase,
    ProductCreate,
    ProductUpdate,
    ProductInDB,
    ProductResponse,
)
from catalog_admin.schemas.listing import (
    ValueRange,
    ProductFilters,
    SortField,
    SortDirection,
    SortSpec,
    ProductListResult,
)
