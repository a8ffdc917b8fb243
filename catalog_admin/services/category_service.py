# catalog_admin/services/category_service.py
from typing import Any, Dict, Iterable, List, Optional
from catalog_admin.core.logging import get_logger
from catalog_admin.db.repositories.category_repository import CategoryRepository
from catalog_admin.schemas.category import (
    CategoryCreate,
    CategoryUpdate,
    CategoryInDB,
    CategoryTreeNode,
)

logger = get_logger(__name__)


def _field(item: Any, name: str):
    if isinstance(item, dict):
        return item.get(name)
    return getattr(item, name, None)


def build_category_tree(categories: Iterable[Any]) -> List[CategoryTreeNode]:
    """
    Convert a flat list of categories (objects or dicts with id, name and
    parent_id) into nested nodes, keeping the input order among siblings.

    A category whose parent is missing from the list is a root. Categories
    that sit on a parent cycle are returned as roots so none is lost.
    """
    nodes: Dict[int, CategoryTreeNode] = {}
    for category in categories:
        node = CategoryTreeNode(
            id=_field(category, "id"),
            name=_field(category, "name"),
            parent_id=_field(category, "parent_id"),
        )
        nodes[node.id] = node

    parents = {
        node.id: node.parent_id
        for node in nodes.values()
        if node.parent_id is not None and node.parent_id in nodes
    }

    def on_cycle(node_id: int) -> bool:
        seen = set()
        current = parents.get(node_id)
        while current is not None and current not in seen:
            if current == node_id:
                return True
            seen.add(current)
            current = parents.get(current)
        return False

    roots: List[CategoryTreeNode] = []
    for node in nodes.values():
        parent_id = parents.get(node.id)
        if parent_id is None or on_cycle(node.id):
            roots.append(node)
        else:
            nodes[parent_id].sub_categories.append(node)
    return roots


class CategoryService:
    """Service for category-related business logic"""

    def __init__(self, db_session):
        self.category_repo = CategoryRepository(db_session)

    def get_category(self, category_id: int) -> Optional[CategoryInDB]:
        """Get category by ID"""
        category = self.category_repo.get_by_id(category_id)
        if not category:
            return None
        return CategoryInDB.model_validate(category)

    def list_categories(self, skip: int = 0, limit: int = 1000) -> List[CategoryInDB]:
        """List categories as a flat, parent-indexed list"""
        categories = self.category_repo.list(skip, limit)
        return [CategoryInDB.model_validate(category) for category in categories]

    def get_category_tree(self) -> List[CategoryTreeNode]:
        """All categories nested under their parents"""
        return build_category_tree(self.category_repo.list())

    def create_category(self, category_data: CategoryCreate) -> CategoryInDB:
        """Create a new category"""
        if self.category_repo.get_by_name(category_data.name):
            raise ValueError("Duplicate category name")

        if category_data.parent_id is not None:
            self._check_parent_exists(category_data.parent_id)

        category = self.category_repo.create(category_data)
        logger.info(f"Created category '{category.name}' with ID {category.id}")
        return CategoryInDB.model_validate(category)

    def update_category(
        self, category_id: int, category_data: CategoryUpdate
    ) -> Optional[CategoryInDB]:
        """Update an existing category"""
        if not self.category_repo.get_by_id(category_id):
            return None

        if category_data.name:
            existing = self.category_repo.get_by_name(category_data.name)
            if existing and existing.id != category_id:
                raise ValueError("Duplicate category name")

        if category_data.parent_id is not None:
            self._check_parent_exists(category_data.parent_id)
            if self._creates_cycle(category_id, category_data.parent_id):
                raise ValueError(
                    f"Category {category_data.parent_id} cannot be the parent of category "
                    f"{category_id}: it would create a cycle"
                )

        category = self.category_repo.update(category_id, category_data)
        logger.info(f"Updated category {category_id}")
        return CategoryInDB.model_validate(category)

    def delete_category(self, category_id: int) -> bool:
        """Delete a category by ID"""
        deleted = self.category_repo.delete(category_id)
        if deleted:
            logger.info(f"Deleted category {category_id}")
        return deleted

    def _check_parent_exists(self, parent_id: int):
        if not self.category_repo.get_by_id(parent_id):
            raise ValueError(f"Parent category {parent_id} not found")

    def _creates_cycle(self, category_id: int, parent_id: int) -> bool:
        """True if parent_id is the category itself or one of its descendants"""
        seen = set()
        current = parent_id
        while current is not None and current not in seen:
            if current == category_id:
                return True
            seen.add(current)
            current = self.category_repo.get_parent_id(current)
        return False
