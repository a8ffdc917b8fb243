from .health import health_router

public_routers = [
    ("health", health_router),
]

__all__ = ["public_routers"]
