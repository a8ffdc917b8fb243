import json

import click
import yaml
import uvicorn
from sqlalchemy.exc import SQLAlchemyError

from catalog_admin.core.logging import get_logger
from catalog_admin.db.base import Base, SessionLocal, engine

logger = get_logger(__name__)


@click.group()
def cli():
    """Catalog admin CLI"""
    pass


@cli.command()
@click.option("--host", default="0.0.0.0")
@click.option("--port", default=8000)
@click.option("--workers", default=1)
@click.option("--production", is_flag=True, help="Run in production mode")
def serve(host, port, workers, production):
    """Start the API server"""
    reload = not production  # Auto-reload unless production mode

    uvicorn.run(
        "catalog_admin.api.web_app:app",
        host=host,
        port=port,
        reload=reload,
        workers=workers if production else 1,
        log_level="info" if production else "debug",
    )


@cli.command()
def init_db():
    """Create all tables (use alembic migrations for existing databases)"""
    import catalog_admin.db.models  # noqa: F401 register models

    Base.metadata.create_all(bind=engine)
    click.echo(f"Created tables: {', '.join(sorted(Base.metadata.tables))}")


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
def load_catalog(path):
    """
    Load brands, categories and products from a YAML file.

    Categories name their parent and products name their categories and
    brands; names must appear earlier in the same file. The file loads in a
    single transaction: any error leaves the catalog untouched.
    """
    from catalog_admin.schemas import BrandCreate, CategoryCreate, ProductCreate
    from catalog_admin.services.brand_service import BrandService
    from catalog_admin.services.category_service import CategoryService
    from catalog_admin.services.product_service import ProductService

    with open(path, "r") as f:
        data = yaml.safe_load(f) or {}

    session = SessionLocal()
    # Repositories flush instead of committing; the commit below covers the whole file
    session.info["atomic"] = True
    try:
        brand_ids = {}
        for item in data.get("brands", []):
            brand = BrandService(session).create_brand(BrandCreate(**item))
            brand_ids[brand.name] = brand.id

        category_ids = {}
        category_service = CategoryService(session)
        for item in data.get("categories", []):
            parent = item.get("parent")
            category = category_service.create_category(
                CategoryCreate(name=item["name"], parent_id=category_ids[parent] if parent else None)
            )
            category_ids[category.name] = category.id

        product_service = ProductService(session)
        for item in data.get("products", []):
            item = dict(item)
            item["category_ids"] = [category_ids[name] for name in item.pop("categories", [])]
            item["brand_ids"] = [brand_ids[name] for name in item.pop("brands", [])]
            product_service.create_product(ProductCreate(**item))

        session.commit()
    except (KeyError, ValueError, SQLAlchemyError) as e:
        session.rollback()
        logger.error(f"Catalog load failed, nothing was loaded: {e}")
        raise click.ClickException(f"Catalog load failed, nothing was loaded: {e}")
    finally:
        session.close()

    click.echo(
        f"Loaded {len(brand_ids)} brands, {len(category_ids)} categories, "
        f"{len(data.get('products', []))} products"
    )


@cli.command()
@click.option("--page", default=1)
@click.option("--page-size", default=10)
@click.option("--sort-by", default="created_at-desc", help="field-direction, e.g. price-asc")
@click.option("--category-id", multiple=True, type=int)
@click.option("--brand-id", multiple=True, type=int)
@click.option("--gender", default=None)
def list_products(page, page_size, sort_by, category_id, brand_id, gender):
    """Print one page of the product listing as JSON"""
    from catalog_admin.schemas import ProductFilters, SortSpec
    from catalog_admin.services.catalog_query_service import (
        CatalogQueryError,
        CatalogQueryService,
    )

    session = SessionLocal()
    try:
        result = CatalogQueryService(session).list_products(
            page=page,
            page_size=page_size,
            filters=ProductFilters(
                category_ids=list(category_id), brand_ids=list(brand_id), gender=gender
            ),
            sort=SortSpec.parse(sort_by),
        )
        click.echo(json.dumps(result.model_dump(mode="json", by_alias=True), indent=2))
    except (ValueError, CatalogQueryError) as e:
        raise click.ClickException(str(e))
    finally:
        session.close()


if __name__ == "__main__":
    cli()
