# catalog_admin/services/brand_service.py
from typing import Dict, Iterable, List, Optional
from catalog_admin.core.logging import get_logger
from catalog_admin.db.repositories.brand_repository import BrandRepository
from catalog_admin.schemas.brand import BrandCreate, BrandUpdate, BrandInDB

logger = get_logger(__name__)


class BrandService:
    """Service for brand-related business logic"""

    def __init__(self, db_session):
        self.brand_repo = BrandRepository(db_session)

    def get_brand(self, brand_id: int) -> Optional[BrandInDB]:
        """Get brand by ID"""
        brand = self.brand_repo.get_by_id(brand_id)
        if not brand:
            return None
        return BrandInDB.model_validate(brand)

    def list_brands(self, skip: int = 0, limit: int = 100) -> List[BrandInDB]:
        """List brands with pagination"""
        brands = self.brand_repo.list(skip, limit)
        return [BrandInDB.model_validate(brand) for brand in brands]

    def create_brand(self, brand_data: BrandCreate) -> BrandInDB:
        """Create a new brand"""
        brand = self.brand_repo.create(brand_data)
        logger.info(f"Created brand '{brand.name}' with ID {brand.id}")
        return BrandInDB.model_validate(brand)

    def update_brand(
        self, brand_id: int, brand_data: BrandUpdate
    ) -> Optional[BrandInDB]:
        """Update an existing brand"""
        brand = self.brand_repo.update(brand_id, brand_data)
        if not brand:
            return None
        logger.info(f"Updated brand {brand_id}")
        return BrandInDB.model_validate(brand)

    def delete_brand(self, brand_id: int) -> bool:
        """Delete a brand by ID"""
        deleted = self.brand_repo.delete(brand_id)
        if deleted:
            logger.info(f"Deleted brand {brand_id}")
        return deleted

    def get_brand_names(self, brand_ids: Iterable[int]) -> Dict[int, Optional[str]]:
        """
        Map brand IDs to names. IDs without a brand map to None so the caller
        can show them as unknown.
        """
        brand_ids = list(dict.fromkeys(brand_ids))
        names = {brand.id: brand.name for brand in self.brand_repo.get_by_ids(brand_ids)}
        return {brand_id: names.get(brand_id) for brand_id in brand_ids}
