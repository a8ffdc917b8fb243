"""
Product listing for the admin console.

A listing runs in up to three phases against the store:

1. COUNT(DISTINCT products.id) over the filtered products/category join.
2. One page of distinct product IDs, grouped by ID and sorted.
3. Detail rows for exactly those IDs, re-joined to their categories.

Deduplication happens before LIMIT, so a product with several categories
never takes more than one slot on a page. The detail rows are then folded
into one record per product and put back into the order of phase 2.
"""
import math
from typing import Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError

from catalog_admin.core.config import settings
from catalog_admin.core.logging import get_logger
from catalog_admin.db.models.product import Product
from catalog_admin.db.repositories.product_repository import ProductRepository
from catalog_admin.schemas.brand import BrandRef
from catalog_admin.schemas.category import CategoryRef
from catalog_admin.schemas.listing import ProductFilters, ProductListResult, SortSpec
from catalog_admin.schemas.product import ProductResponse

logger = get_logger(__name__)


class CatalogQueryError(Exception):
    """A storage failure aborted a product listing; no partial page exists"""


def to_product_response(product: Product, categories: List[CategoryRef]) -> ProductResponse:
    """Build a listing record from a product row and its regrouped categories"""
    return ProductResponse(
        id=product.id,
        name=product.name,
        description=product.description,
        price=product.price,
        old_price=product.old_price,
        discount=product.discount,
        image_url=product.image_url,
        gender=product.gender,
        colors=product.colors,
        rating=product.rating,
        created_at=product.created_at,
        updated_at=product.updated_at,
        categories=categories,
        brands=[BrandRef(id=brand.id, name=brand.name) for brand in product.brands],
        occasions=[item.occasion for item in product.occasions],
    )


def regroup_rows(rows) -> Dict[int, ProductResponse]:
    """
    Fold (Product, category_id, category_name) rows into one record per
    product. A product without categories gets an empty list.
    """
    products: Dict[int, Product] = {}
    categories: Dict[int, List[CategoryRef]] = {}
    for row in rows:
        product = row[0]
        if product.id not in products:
            products[product.id] = product
            categories[product.id] = []
        if row.category_id is not None:
            categories[product.id].append(
                CategoryRef(id=row.category_id, name=row.category_name)
            )
    return {
        product_id: to_product_response(product, categories[product_id])
        for product_id, product in products.items()
    }


def order_by_ids(records: Dict[int, ProductResponse], ids: List[int]) -> List[ProductResponse]:
    """Records in the order of ids; ids without a record are skipped"""
    return [records[product_id] for product_id in ids if product_id in records]


class CatalogQueryService:
    """Filtered, sorted and paginated product listing"""

    def __init__(self, db_session, max_page_size: Optional[int] = None):
        self.product_repo = ProductRepository(db_session)
        self.max_page_size = max_page_size or settings.MAX_PAGE_SIZE

    def list_products(
        self,
        page: int = 1,
        page_size: Optional[int] = None,
        filters: Optional[ProductFilters] = None,
        sort: Optional[SortSpec] = None,
    ) -> ProductListResult:
        """
        List one page of products.

        Args:
            page: 1-based page number
            page_size: Products per page, 1..max_page_size
            filters: Optional filter set; None lists the whole catalog
            sort: Sort field and direction; defaults to newest first

        Returns:
            ProductListResult with items, totalCount, totalPages, countOnPage

        Raises:
            ValueError: If page or page_size is out of range
            CatalogQueryError: If any storage phase fails
        """
        if page_size is None:
            page_size = settings.DEFAULT_PAGE_SIZE
        filters = filters or ProductFilters()
        sort = sort or SortSpec()
        self._validate_page(page, page_size)

        summary = "none" if filters.is_empty else filters.model_dump(exclude_defaults=True)
        logger.info(
            f"Listing products page={page} page_size={page_size} sort={sort} filters={summary}"
        )

        try:
            total_count = self.product_repo.count_distinct(filters)
            if total_count == 0:
                return ProductListResult.empty()
            total_pages = math.ceil(total_count / page_size)

            page_ids = self.product_repo.list_page_ids(
                filters, sort, offset=(page - 1) * page_size, limit=page_size
            )
            if not page_ids:
                return ProductListResult.empty(total_count, total_pages)

            rows = self.product_repo.list_with_categories(page_ids)
        except SQLAlchemyError as e:
            logger.error(f"Product listing failed: {str(e)}", exc_info=True)
            raise CatalogQueryError("Product listing failed") from e

        items = order_by_ids(regroup_rows(rows), page_ids)
        if len(items) != len(page_ids):
            logger.warning(
                f"{len(page_ids) - len(items)} product(s) disappeared between ID and detail fetch"
            )

        logger.info(f"Listed {len(items)} of {total_count} products (page {page}/{total_pages})")
        return ProductListResult(
            items=items,
            total_count=total_count,
            total_pages=total_pages,
            count_on_page=len(items),
        )

    def _validate_page(self, page: int, page_size: int):
        if page < 1:
            raise ValueError("page must be 1 or greater")
        if page_size < 1 or page_size > self.max_page_size:
            raise ValueError(f"pageSize must be between 1 and {self.max_page_size}")
