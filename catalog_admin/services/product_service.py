# catalog_admin/services/product_service.py
from typing import Any, Dict, List, Optional, Tuple
from catalog_admin.core.logging import get_logger
from catalog_admin.db.models.brand import Brand
from catalog_admin.db.models.category import Category
from catalog_admin.db.repositories.brand_repository import BrandRepository
from catalog_admin.db.repositories.category_repository import CategoryRepository
from catalog_admin.db.repositories.product_repository import ProductRepository
from catalog_admin.schemas.category import CategoryRef
from catalog_admin.schemas.product import ProductCreate, ProductUpdate, ProductInDB

logger = get_logger(__name__)


def derive_price(old_price: float, discount: float) -> float:
    """Selling price after a percentage discount, rounded to cents"""
    return round(old_price * (1 - (discount or 0) / 100), 2)


class ProductService:
    """Service for product-related business logic"""

    def __init__(self, db_session):
        self.db_session = db_session
        self.product_repo = ProductRepository(db_session)
        self.category_repo = CategoryRepository(db_session)
        self.brand_repo = BrandRepository(db_session)

    def get_product(self, product_id: int) -> Optional[ProductInDB]:
        """Get product by ID"""
        product = self.product_repo.get_by_id(product_id)
        if not product:
            return None
        return ProductInDB.model_validate(product)

    def get_product_categories(self, product_id: int) -> List[CategoryRef]:
        """Categories of one product as id/name pairs"""
        rows = self.product_repo.get_categories(product_id)
        return [CategoryRef(id=row.id, name=row.name) for row in rows]

    def create_product(self, product_data: ProductCreate) -> ProductInDB:
        """
        Create a product. The stored price is derived from old_price and
        discount; category and brand IDs must all exist.
        """
        categories, brands = self._resolve_associations(product_data)
        product = self.product_repo.create(
            self._product_fields(product_data),
            categories,
            brands,
            product_data.occasions,
        )
        logger.info(
            f"Created product '{product.name}' with ID {product.id} "
            f"({len(categories)} categories, {len(brands)} brands)"
        )
        return ProductInDB.model_validate(product)

    def update_product(
        self, product_id: int, product_data: ProductUpdate
    ) -> Optional[ProductInDB]:
        """Replace a product record and its associations"""
        if not self.product_repo.get_by_id(product_id):
            return None

        categories, brands = self._resolve_associations(product_data)
        product = self.product_repo.update(
            product_id,
            self._product_fields(product_data),
            categories,
            brands,
            product_data.occasions,
        )
        logger.info(f"Updated product {product_id}")
        return ProductInDB.model_validate(product)

    def delete_product(self, product_id: int) -> bool:
        """Delete a product by ID"""
        deleted = self.product_repo.delete(product_id)
        if deleted:
            logger.info(f"Deleted product {product_id}")
        return deleted

    def _product_fields(self, product_data: ProductCreate) -> Dict[str, Any]:
        fields = product_data.model_dump(exclude={"category_ids", "brand_ids", "occasions"})
        fields["gender"] = product_data.gender.value
        fields["price"] = derive_price(product_data.old_price, product_data.discount)
        return fields

    def _resolve_associations(
        self, product_data: ProductCreate
    ) -> Tuple[List[Category], List[Brand]]:
        categories = self.category_repo.get_by_ids(product_data.category_ids)
        missing = set(product_data.category_ids) - {c.id for c in categories}
        if missing:
            raise ValueError(f"Unknown category id(s): {sorted(missing)}")

        brands = self.brand_repo.get_by_ids(product_data.brand_ids)
        missing = set(product_data.brand_ids) - {b.id for b in brands}
        if missing:
            raise ValueError(f"Unknown brand id(s): {sorted(missing)}")

        return categories, brands
