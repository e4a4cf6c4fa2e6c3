"""Category management.

Categories are identified by a slug derived from their name.  The manager
enforces the rules that keep records pointing at real categories:

* names are unique ignoring case and surrounding whitespace,
* a category used by any record cannot be deleted,
* at least one category always remains.
"""

from __future__ import annotations

import logging
from typing import List

from .models import Category, CategoryConflictError, CategoryValidationError, slugify
from .reporting import category_name
from .store import TrackerStore

logger = logging.getLogger(__name__)


class CategoryManager:
    """Manages the stored category list."""

    def __init__(self, store: TrackerStore):
        self.store = store

    def list_categories(self) -> List[Category]:
        return self.store.load_categories()

    def name_for(self, category_id: str) -> str:
        return category_name(self.store.load_categories(), category_id)

    def add_category(self, name: str) -> Category:
        """Create a category from a display name.

        Raises:
            CategoryValidationError: if the name is empty, has no usable
                characters, or duplicates an existing category.
        """
        name = (name or "").strip()
        if not name:
            raise CategoryValidationError("Category name cannot be empty.")

        category_id = slugify(name)
        if not category_id:
            raise CategoryValidationError("Category name is invalid.")

        categories = self.store.load_categories()
        lowered = name.lower()
        if any(c.id == category_id or c.name.strip().lower() == lowered for c in categories):
            raise CategoryValidationError("Category already exists.")

        category = Category(id=category_id, name=name)
        categories.append(category)
        self.store.save_categories(categories)
        logger.info("Added category %s", category_id)
        return category

    def is_in_use(self, category_id: str) -> bool:
        return any(r.category == category_id for r in self.store.load_records())

    def delete_category(self, category_id: str) -> None:
        """Delete a category.

        Raises:
            CategoryConflictError: if a record uses the category or it is the
                last one left. The stored list is left untouched.
        """
        if self.is_in_use(category_id):
            raise CategoryConflictError("Cannot delete: this category is used by existing records.")

        categories = self.store.load_categories()
        remaining = [c for c in categories if c.id != category_id]
        if not remaining:
            raise CategoryConflictError("You must keep at least one category.")
        if len(remaining) == len(categories):
            return

        self.store.save_categories(remaining)
        logger.info("Deleted category %s", category_id)
