"""Admin API for brands"""
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from typing import Dict, List, Optional

from catalog_admin.db.base import get_db_session
from catalog_admin.schemas.brand import BrandCreate, BrandUpdate, BrandResponse
from catalog_admin.services.brand_service import BrandService
from catalog_admin.utils.query_params import parse_ids

brands_admin_router = APIRouter()


@brands_admin_router.get("/brands", response_model=List[BrandResponse])
def list_brands(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
    db: Session = Depends(get_db_session),
):
    return BrandService(db).list_brands(skip, limit)


@brands_admin_router.post("/brands", response_model=BrandResponse, status_code=status.HTTP_201_CREATED)
def create_brand(brand: BrandCreate, db: Session = Depends(get_db_session)):
    return BrandService(db).create_brand(brand)


@brands_admin_router.get("/brands/names", response_model=Dict[int, Optional[str]])
def get_brand_names(
    ids: List[str] = Query(..., description="Brand ids, comma-separated or repeated"),
    db: Session = Depends(get_db_session),
):
    """Map brand ids to names; ids without a brand map to null."""
    try:
        brand_ids = parse_ids(ids, "ids")
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return BrandService(db).get_brand_names(brand_ids)


@brands_admin_router.get("/brands/{brand_id}", response_model=BrandResponse)
def get_brand(brand_id: int, db: Session = Depends(get_db_session)):
    brand = BrandService(db).get_brand(brand_id)
    if not brand:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Brand not found")
    return brand


@brands_admin_router.put("/brands/{brand_id}", response_model=BrandResponse)
def update_brand(brand_id: int, brand: BrandUpdate, db: Session = Depends(get_db_session)):
    updated = BrandService(db).update_brand(brand_id, brand)
    if not updated:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Brand not found")
    return updated


@brands_admin_router.delete("/brands/{brand_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_brand(brand_id: int, db: Session = Depends(get_db_session)):
    if not BrandService(db).delete_brand(brand_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Brand not found")
