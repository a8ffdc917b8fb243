# catalog_admin/db/repositories/brand_repository.py
from typing import List, Optional, Iterable
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from catalog_admin.db.base import commit_session
from catalog_admin.db.models.brand import Brand
from catalog_admin.schemas.brand import BrandCreate, BrandUpdate


class BrandRepository:
    """Repository for CRUD operations on Brand model"""

    def __init__(self, db_session: Session):
        self.db_session = db_session

    def get_by_id(self, brand_id: int) -> Optional[Brand]:
        """Get brand by ID"""
        return self.db_session.query(Brand).filter(Brand.id == brand_id).first()

    def get_by_ids(self, brand_ids: Iterable[int]) -> List[Brand]:
        """Get all brands whose ID is in brand_ids"""
        brand_ids = list(brand_ids)
        if not brand_ids:
            return []
        return self.db_session.query(Brand).filter(Brand.id.in_(brand_ids)).all()

    def list(self, skip: int = 0, limit: int = 100) -> List[Brand]:
        """List brands ordered by name"""
        return (
            self.db_session.query(Brand)
            .order_by(Brand.name, Brand.id)
            .offset(skip)
            .limit(limit)
            .all()
        )

    def create(self, brand_data: BrandCreate) -> Brand:
        """Create a new brand"""
        db_brand = Brand(**brand_data.model_dump())
        self.db_session.add(db_brand)
        self._commit()
        self.db_session.refresh(db_brand)
        return db_brand

    def update(self, brand_id: int, brand_data: BrandUpdate) -> Optional[Brand]:
        """Update an existing brand"""
        db_brand = self.get_by_id(brand_id)

        if not db_brand:
            return None

        for key, value in brand_data.model_dump(exclude_unset=True).items():
            setattr(db_brand, key, value)

        self._commit()
        self.db_session.refresh(db_brand)
        return db_brand

    def delete(self, brand_id: int) -> bool:
        """Delete a brand by ID; its product associations go with it"""
        db_brand = self.get_by_id(brand_id)

        if not db_brand:
            return False

        self.db_session.delete(db_brand)
        self._commit()
        return True

    def _commit(self):
        try:
            commit_session(self.db_session)
        except SQLAlchemyError:
            self.db_session.rollback()
            raise
