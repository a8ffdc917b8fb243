"""Admin API for listing and managing products"""
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional

from catalog_admin.core.logging import get_logger
from catalog_admin.db.base import get_db_session
from catalog_admin.schemas.category import CategoryRef
from catalog_admin.schemas.listing import ProductListResult, SortSpec
from catalog_admin.schemas.product import ProductCreate, ProductUpdate, ProductResponse
from catalog_admin.services.catalog_query_service import CatalogQueryService, CatalogQueryError
from catalog_admin.services.product_service import ProductService
from catalog_admin.utils.query_params import build_filters, clamp_page, clamp_page_size

logger = get_logger(__name__)

products_admin_router = APIRouter(
    responses={
        404: {"description": "Product not found"},
        500: {"description": "Internal server error"},
    },
)


@products_admin_router.get(
    "/products",
    response_model=ProductListResult,
    status_code=status.HTTP_200_OK,
    summary="List products",
    description="Filtered, sorted and paginated product listing with each product's categories.",
    responses={
        400: {
            "description": "Invalid filter, sort or page parameters",
            "content": {
                "application/json": {
                    "example": {"detail": "Invalid sort 'stock-asc'. Allowed fields: price, rating, created_at, name, discount; directions: asc, desc"}
                }
            },
        },
    },
)
def list_products(
    page: Optional[int] = Query(1, description="1-based page number"),
    pageSize: Optional[int] = Query(None, description="Products per page (1-50)"),
    sortBy: Optional[str] = Query(None, description="Sort as field-direction", examples=["price-asc"]),
    categoryId: Optional[List[str]] = Query(None, description="Category ids, comma-separated or repeated"),
    brandId: Optional[List[str]] = Query(None, description="Brand ids, comma-separated or repeated"),
    occasion: Optional[List[str]] = Query(None, description="Occasion tags, comma-separated or repeated"),
    minPrice: Optional[float] = Query(None, description="Applied together with maxPrice"),
    maxPrice: Optional[float] = Query(None, description="Applied together with minPrice"),
    minDiscount: Optional[float] = Query(None, description="Applied together with maxDiscount"),
    maxDiscount: Optional[float] = Query(None, description="Applied together with minDiscount"),
    gender: Optional[str] = Query(None, description="men, women, boy or girl"),
    db: Session = Depends(get_db_session),
) -> ProductListResult:
    """
    List products.

    - **categoryId**: products with at least one of these categories
    - **brandId**: products carrying at least one of these brands
    - **minPrice/maxPrice**, **minDiscount/maxDiscount**: inclusive ranges, ignored unless both bounds are set
    - **occasion**: products tagged with at least one of these occasions
    - **gender**: exact match
    - **sortBy**: price, rating, created_at, name or discount, with -asc or -desc (default created_at-desc)
    """
    try:
        filters = build_filters(
            category_id=categoryId,
            brand_id=brandId,
            occasion=occasion,
            min_price=minPrice,
            max_price=maxPrice,
            min_discount=minDiscount,
            max_discount=maxDiscount,
            gender=gender,
        )
        sort = SortSpec.parse(sortBy)
        return CatalogQueryService(db).list_products(
            page=clamp_page(page),
            page_size=clamp_page_size(pageSize),
            filters=filters,
            sort=sort,
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except CatalogQueryError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Product listing failed",
        )


@products_admin_router.post(
    "/products",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a product",
)
def create_product(product: ProductCreate, db: Session = Depends(get_db_session)):
    """Create a product; price is derived from old_price and discount."""
    try:
        return ProductService(db).create_product(product)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.error(f"Error creating product: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create product",
        )


@products_admin_router.get("/products/{product_id}", response_model=ProductResponse)
def get_product(product_id: int, db: Session = Depends(get_db_session)):
    product = ProductService(db).get_product(product_id)
    if not product:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Could not find the product")
    return product


@products_admin_router.get("/products/{product_id}/categories", response_model=List[CategoryRef])
def get_product_categories(product_id: int, db: Session = Depends(get_db_session)):
    service = ProductService(db)
    if not service.get_product(product_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Could not find the product")
    return service.get_product_categories(product_id)


@products_admin_router.put("/products/{product_id}", response_model=ProductResponse)
def update_product(product_id: int, product: ProductUpdate, db: Session = Depends(get_db_session)):
    """Replace a product and its category, brand and occasion associations."""
    try:
        updated = ProductService(db).update_product(product_id, product)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.error(f"Error updating product {product_id}: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update product",
        )
    if not updated:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Could not find the product")
    return updated


@products_admin_router.delete("/products/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_product(product_id: int, db: Session = Depends(get_db_session)):
    if not ProductService(db).delete_product(product_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Could not find the product")
