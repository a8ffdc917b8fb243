# catalog_admin/db/repositories/category_repository.py
from typing import List, Optional, Iterable
from sqlalchemy import func
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from catalog_admin.db.base import commit_session
from catalog_admin.db.models.category import Category
from catalog_admin.schemas.category import CategoryCreate, CategoryUpdate


class CategoryRepository:
    """Repository for CRUD operations on Category model"""

    def __init__(self, db_session: Session):
        self.db_session = db_session

    def get_by_id(self, category_id: int) -> Optional[Category]:
        """Get category by ID"""
        return self.db_session.query(Category).filter(Category.id == category_id).first()

    def get_by_ids(self, category_ids: Iterable[int]) -> List[Category]:
        """Get all categories whose ID is in category_ids"""
        category_ids = list(category_ids)
        if not category_ids:
            return []
        return self.db_session.query(Category).filter(Category.id.in_(category_ids)).all()

    def get_by_name(self, name: str) -> Optional[Category]:
        """Get category by name (case-insensitive, space-stripped comparison)"""
        if not name:
            return None

        normalized_name = name.strip().lower()
        return self.db_session.query(Category).filter(
            func.lower(func.trim(Category.name)) == normalized_name
        ).first()

    def list(self, skip: int = 0, limit: int = 1000) -> List[Category]:
        """List categories in creation order"""
        return (
            self.db_session.query(Category)
            .order_by(Category.id)
            .offset(skip)
            .limit(limit)
            .all()
        )

    def get_parent_id(self, category_id: int) -> Optional[int]:
        """Return the parent ID of a category without loading the row"""
        row = (
            self.db_session.query(Category.parent_id)
            .filter(Category.id == category_id)
            .first()
        )
        return row.parent_id if row else None

    def create(self, category_data: CategoryCreate) -> Category:
        """Create a new category"""
        db_category = Category(**category_data.model_dump())
        self.db_session.add(db_category)
        self._commit()
        self.db_session.refresh(db_category)
        return db_category

    def update(self, category_id: int, category_data: CategoryUpdate) -> Optional[Category]:
        """Update an existing category"""
        db_category = self.get_by_id(category_id)

        if not db_category:
            return None

        for key, value in category_data.model_dump(exclude_unset=True).items():
            setattr(db_category, key, value)

        self._commit()
        self.db_session.refresh(db_category)
        return db_category

    def delete(self, category_id: int) -> bool:
        """Delete a category by ID, detaching its subcategories first"""
        db_category = self.get_by_id(category_id)

        if not db_category:
            return False

        self.db_session.query(Category).filter(Category.parent_id == category_id).update(
            {Category.parent_id: None}, synchronize_session="fetch"
        )
        self.db_session.delete(db_category)
        self._commit()
        return True

    def _commit(self):
        try:
            commit_session(self.db_session)
        except SQLAlchemyError:
            self.db_session.rollback()
            raise
