from catalog_admin.db.repositories.brand_repository import BrandRepository
from catalog_admin.db.repositories.category_repository import CategoryRepository
from catalog_admin.db.repositories.product_repository import ProductRepository

__all__ = [
    "BrandRepository",
    "CategoryRepository",
    "ProductRepository",
]
