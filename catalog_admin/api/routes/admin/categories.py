"""Admin API for categories"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List

from catalog_admin.db.base import get_db_session
from catalog_admin.schemas.category import (
    CategoryCreate,
    CategoryUpdate,
    CategoryResponse,
    CategoryTreeNode,
)
from catalog_admin.services.category_service import CategoryService

categories_admin_router = APIRouter()


@categories_admin_router.get("/categories", response_model=List[CategoryResponse])
def list_categories(db: Session = Depends(get_db_session)):
    """Flat category list; each entry carries its parent_id."""
    return CategoryService(db).list_categories()


@categories_admin_router.get("/categories/tree", response_model=List[CategoryTreeNode])
def get_category_tree(db: Session = Depends(get_db_session)):
    """Root categories with their subCategories nested below them."""
    return CategoryService(db).get_category_tree()


@categories_admin_router.post(
    "/categories", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED
)
def create_category(category: CategoryCreate, db: Session = Depends(get_db_session)):
    try:
        return CategoryService(db).create_category(category)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@categories_admin_router.get("/categories/{category_id}", response_model=CategoryResponse)
def get_category(category_id: int, db: Session = Depends(get_db_session)):
    category = CategoryService(db).get_category(category_id)
    if not category:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Category not found")
    return category


@categories_admin_router.put("/categories/{category_id}", response_model=CategoryResponse)
def update_category(
    category_id: int, category: CategoryUpdate, db: Session = Depends(get_db_session)
):
    try:
        updated = CategoryService(db).update_category(category_id, category)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    if not updated:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Category not found")
    return updated


@categories_admin_router.delete("/categories/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_category(category_id: int, db: Session = Depends(get_db_session)):
    if not CategoryService(db).delete_category(category_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Category not found")
