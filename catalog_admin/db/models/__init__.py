# catalog_admin/db/models/__init__.py
from catalog_admin.db.models.category import Category
from catalog_admin.db.models.brand import Brand
from catalog_admin.db.models.product import Product, ProductOccasion, Gender
from catalog_admin.db.models.associations import product_categories, product_brands

__all__ = [
    "Category",
    "Brand",
    "Product",
    "ProductOccasion",
    "Gender",
    "product_categories",
    "product_brands",
]
