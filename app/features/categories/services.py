import logging
from typing import List, Optional, Sequence

from app.db.models.categories import Category
from app.db.models.todos import Todo
from app.db.repositories.categories import CategoryRepository
from app.features.categories.schemas import CategoryOut
from app.utils.text import require_text

logger = logging.getLogger(__name__)


class CategoryService:
    """
    Logique métier des catégories et de leur appartenance many-to-many avec les todos.
    - Nom obligatoire (non vide) à la création et au renommage ; unicité garantie par le repo (ConflictError).
    - Catégorie introuvable → None.
    - add_todos / remove_todos : todo_ids obligatoire ; liste vide = aucun effet ;
      ids de todos inconnus ignorés (seuls les todos existants sont renvoyés).
    """

    def __init__(self, repo: CategoryRepository):
        self.repo = repo

    # -------- Reads --------

    def list(self) -> Sequence[Category]:
        return self.repo.list_with_todos()

    def get(self, category_id: int) -> Optional[Category]:
        return self.repo.get(category_id)

    # -------- Writes --------

    def create(self, name: str) -> Category:
        name = require_text(name, "name")
        category = self.repo.create(name=name)
        logger.info("Created category %s (%r)", category.id, category.name)
        return category

    def rename(self, category_id: int, name: str) -> Optional[Category]:
        name = require_text(name, "name")
        category = self.repo.get(category_id)
        if not category:
            return None
        return self.repo.update(category, name=name)

    def delete_by_id(self, category_id: int) -> Optional[CategoryOut]:
        return self._delete(self.repo.get(category_id))

    def delete_by_name(self, name: str) -> Optional[CategoryOut]:
        return self._delete(self.repo.get_by_name(name))

    def add_todos(self, category_id: int, todo_ids: Optional[List[int]]) -> Optional[Sequence[Todo]]:
        ids = self._require_ids(todo_ids)
        category = self.repo.get(category_id)
        if not category:
            return None
        if not ids:
            return []
        todos = self.repo.connect_todos(category, ids)
        if todos is None:
            return None
        self._warn_skipped(category_id, ids, todos)
        return todos

    def remove_todos(self, category_id: int, todo_ids: Optional[List[int]]) -> Optional[Sequence[Todo]]:
        ids = self._require_ids(todo_ids)
        category = self.repo.get(category_id)
        if not category:
            return None
        if not ids:
            return []
        todos = self.repo.disconnect_todos(category, ids)
        self._warn_skipped(category_id, ids, todos)
        return todos

    # -------- Helpers --------

    def _delete(self, category: Optional[Category]) -> Optional[CategoryOut]:
        if not category:
            return None
        snapshot = CategoryOut.model_validate(category)
        if not self.repo.delete(category):
            return None
        logger.info("Deleted category %s (%r)", snapshot.id, snapshot.name)
        return snapshot

    @staticmethod
    def _require_ids(todo_ids: Optional[List[int]]) -> List[int]:
        if todo_ids is None:
            raise ValueError("todoIds must be an array")
        return list(todo_ids)

    @staticmethod
    def _warn_skipped(category_id: int, requested: List[int], todos: Sequence[Todo]) -> None:
        skipped = sorted(set(requested) - {t.id for t in todos})
        if skipped:
            logger.warning("Category %s: unknown todo ids skipped: %s", category_id, skipped)
