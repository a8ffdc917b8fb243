# Standard library
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone
import uuid

# Third party
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from sqlalchemy import text

# Local imports
from catalog_admin.core.logging import get_logger
import catalog_admin.api as api


logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI application startup and shutdown events"""
    # Startup
    logger.info("Catalog admin API starting up...")

    # Test database connection
    try:
        from catalog_admin.db.base import SessionLocal

        session = SessionLocal()
        try:
            session.execute(text("SELECT 1")).fetchone()
        finally:
            session.close()
        logger.info("Database connection successful")
    except Exception as e:
        logger.error(f"Database connection failed: {e}")
        raise

    yield  # This is where FastAPI serves the application

    # Shutdown
    logger.info("Catalog admin API shutting down...")


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""

    app = FastAPI(
        title="Catalog Admin",
        description="Administrative API for managing products, brands and categories of a product catalog.",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
        default_response_class=JSONResponse,
    )

    # Mount Admin APIs (catalog CRUD and listing)
    for name, router in api.admin_routers:
        app.include_router(
            router,
            prefix="/api/v1/admin",
            tags=[f"admin-{name}"],
        )

    # Mount Public APIs
    for name, router in api.public_routers:
        app.include_router(router, prefix="/api", tags=[name])

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure properly for production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Request logging middleware
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        request_id = str(uuid.uuid4())
        logger.info(f"[{request_id}] {request.method} {request.url}")
        if request.query_params:
            logger.info(f"[{request_id}] Query Params: {dict(request.query_params)}")

        start_time = time.time()
        try:
            response = await call_next(request)
        except Exception as e:
            process_time = time.time() - start_time
            logger.error(
                f"[{request_id}] Request failed after {process_time:.4f}s: {str(e)}",
                exc_info=True,
            )
            raise

        process_time = time.time() - start_time
        response.headers["X-Process-Time"] = str(process_time)
        response.headers["X-Request-ID"] = request_id
        logger.info(
            f"[{request_id}] Status Code: {response.status_code} "
            f"Process Time: {process_time:.4f}s"
        )
        return response

    # Health check endpoint
    @app.get("/health")
    async def health_check():
        """Health check endpoint for load balancers and monitoring"""
        return {
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    @app.get("/openapi.yaml")
    async def get_openapi_yaml():
        """Serve full OpenAPI specification in YAML format"""
        from fastapi.openapi.utils import get_openapi
        from yaml import dump

        openapi_schema = get_openapi(
            title=app.title,
            version=app.version,
            description=app.description,
            routes=app.routes,
        )

        yaml_content = dump(openapi_schema, default_flow_style=False, sort_keys=False)
        return Response(content=yaml_content, media_type="application/x-yaml")

    return app


app = create_app()
