# Admin routers (catalog CRUD and listing)
from .routes.admin import admin_routers

# Public routers
from .routes import public_routers

__all__ = ["admin_routers", "public_routers"]
