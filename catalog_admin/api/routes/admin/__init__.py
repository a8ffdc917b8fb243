from .products import products_admin_router
from .brands import brands_admin_router
from .categories import categories_admin_router

admin_routers = [
    ("products", products_admin_router),
    ("brands", brands_admin_router),
    ("categories", categories_admin_router),
]

__all__ = ["admin_routers"]
