# catalog_admin/db/repositories/product_repository.py
from typing import List, Optional, Dict, Any, Iterable
from sqlalchemy import select, func, distinct
from sqlalchemy.orm import Session, Query, selectinload
from sqlalchemy.exc import SQLAlchemyError
from catalog_admin.db.base import commit_session
from catalog_admin.db.models.product import Product, ProductOccasion
from catalog_admin.db.models.category import Category
from catalog_admin.db.models.brand import Brand
from catalog_admin.db.models.associations import product_categories, product_brands
from catalog_admin.schemas.listing import ProductFilters, SortSpec, SortField, SortDirection


# Allowed sort fields mapped to their columns; nothing else reaches ORDER BY
SORT_COLUMNS = {
    SortField.PRICE: Product.price,
    SortField.RATING: Product.rating,
    SortField.CREATED_AT: Product.created_at,
    SortField.NAME: Product.name,
    SortField.DISCOUNT: Product.discount,
}


class ProductRepository:
    """Repository for CRUD operations and listing queries on Product model"""

    def __init__(self, db_session: Session):
        self.db_session = db_session

    def get_by_id(self, product_id: int) -> Optional[Product]:
        """Get product by ID with its categories, brands and occasions"""
        return (
            self.db_session.query(Product)
            .options(
                selectinload(Product.categories),
                selectinload(Product.brands),
                selectinload(Product.occasions),
            )
            .filter(Product.id == product_id)
            .first()
        )

    def create(
        self,
        product_data: Dict[str, Any],
        categories: List[Category],
        brands: List[Brand],
        occasions: List[str],
    ) -> Product:
        """Create a new product with its associations"""
        db_product = Product(**product_data)
        db_product.categories = categories
        db_product.brands = brands
        db_product.occasions = [ProductOccasion(occasion=tag) for tag in occasions]

        self.db_session.add(db_product)
        self._commit()
        self.db_session.refresh(db_product)
        return db_product

    def update(
        self,
        product_id: int,
        product_data: Dict[str, Any],
        categories: List[Category],
        brands: List[Brand],
        occasions: List[str],
    ) -> Optional[Product]:
        """Replace all fields and associations of an existing product"""
        db_product = self.get_by_id(product_id)
        if not db_product:
            return None

        for key, value in product_data.items():
            setattr(db_product, key, value)
        db_product.categories = categories
        db_product.brands = brands

        # Keep rows for unchanged tags so the flush never re-inserts an existing key
        existing = {item.occasion: item for item in db_product.occasions}
        db_product.occasions = [
            existing.get(tag) or ProductOccasion(occasion=tag) for tag in occasions
        ]

        self._commit()
        self.db_session.refresh(db_product)
        return db_product

    def delete(self, product_id: int) -> bool:
        """Delete a product by ID together with its association rows"""
        db_product = self.get_by_id(product_id)

        if not db_product:
            return False

        self.db_session.delete(db_product)
        self._commit()
        return True

    def get_categories(self, product_id: int) -> List[Any]:
        """Return (id, name) rows of the categories a product belongs to"""
        return (
            self.db_session.query(Category.id, Category.name)
            .join(product_categories, product_categories.c.category_id == Category.id)
            .filter(product_categories.c.product_id == product_id)
            .order_by(Category.id)
            .all()
        )

    # Listing queries

    def _listing_query(self, *entities) -> Query:
        """Products left-joined to their category associations"""
        return (
            self.db_session.query(*entities)
            .select_from(Product)
            .outerjoin(product_categories, product_categories.c.product_id == Product.id)
        )

    def apply_filters(self, query: Query, filters: ProductFilters) -> Query:
        """
        AND together every filter present in the set.

        Brand and occasion membership use sub-selects over their own
        association tables so they do not add join fan-out.
        """
        if filters.category_ids:
            query = query.filter(product_categories.c.category_id.in_(filters.category_ids))

        if filters.brand_ids:
            brand_match = select(product_brands.c.product_id).where(
                product_brands.c.brand_id.in_(filters.brand_ids)
            )
            query = query.filter(Product.id.in_(brand_match))

        if filters.price_range is not None:
            query = query.filter(
                Product.price.between(filters.price_range.min, filters.price_range.max)
            )

        if filters.discount_range is not None:
            query = query.filter(
                Product.discount.between(filters.discount_range.min, filters.discount_range.max)
            )

        if filters.occasions:
            occasion_match = select(ProductOccasion.product_id).where(
                ProductOccasion.occasion.in_(filters.occasions)
            )
            query = query.filter(Product.id.in_(occasion_match))

        if filters.gender is not None:
            query = query.filter(Product.gender == filters.gender.value)

        return query

    def count_distinct(self, filters: ProductFilters) -> int:
        """COUNT(DISTINCT products.id) over the filtered listing query"""
        query = self._listing_query(func.count(distinct(Product.id)))
        return self.apply_filters(query, filters).scalar() or 0

    def list_page_ids(
        self, filters: ProductFilters, sort: SortSpec, offset: int, limit: int
    ) -> List[int]:
        """One page of distinct product IDs in sort order"""
        column = SORT_COLUMNS[sort.field]
        if sort.direction == SortDirection.ASC:
            order_by = (column.asc(), Product.id.asc())
        else:
            order_by = (column.desc(), Product.id.desc())

        query = self.apply_filters(self._listing_query(Product.id), filters)
        rows = (
            query.group_by(Product.id)
            .order_by(*order_by)
            .offset(offset)
            .limit(limit)
            .all()
        )
        return [row.id for row in rows]

    def list_with_categories(self, product_ids: Iterable[int]) -> List[Any]:
        """
        Detail rows for the given product IDs: one (Product, category_id,
        category_name) row per category association, or a single row with
        null category columns for a product without categories.
        """
        product_ids = list(product_ids)
        if not product_ids:
            return []
        return (
            self.db_session.query(
                Product,
                Category.id.label("category_id"),
                Category.name.label("category_name"),
            )
            .outerjoin(product_categories, product_categories.c.product_id == Product.id)
            .outerjoin(Category, Category.id == product_categories.c.category_id)
            .options(selectinload(Product.brands), selectinload(Product.occasions))
            .filter(Product.id.in_(product_ids))
            .order_by(Product.id, Category.id)
            .all()
        )

    def _commit(self):
        try:
            commit_session(self.db_session)
        except SQLAlchemyError:
            self.db_session.rollback()
            raise
