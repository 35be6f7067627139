"""
➡️ But : Encapsuler toutes les opérations de base de données sur les catégories.

CategoryRepository : CRUD sur la table categories + gestion de l'association
many-to-many avec les todos (connect / disconnect).

Ne contient aucune logique métier, juste de la persistance.
"""

from typing import Iterable, List, Optional, Sequence

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import selectinload
from sqlmodel import select

from app.db.repositories.base import BaseRepository, ConflictError
from app.db.models.categories import Category
from app.db.models.todos import Todo


class CategoryRepository(BaseRepository[Category]):
    model = Category

    def create(self, *, name: str) -> Category:
        return super().create(name=name)

    def get_by_name(self, name: str) -> Optional[Category]:
        """Retourne une catégorie par son nom (unique), ou None."""
        statement = select(Category).where(Category.name == name)
        return self.session.exec(statement).first()

    def list_with_todos(self) -> Sequence[Category]:
        """Toutes les catégories avec leurs todos chargés en une requête de plus."""
        statement = (
            select(Category)
            .options(selectinload(Category.todos))
            .order_by(Category.id)
        )
        return self.session.exec(statement).all()

    # ---------- ASSOCIATION TODOS ----------

    def connect_todos(self, category: Category, todo_ids: Iterable[int]) -> Optional[Sequence[Todo]]:
        """
        Rattache chaque todo existant de `todo_ids` à la catégorie.
        Les ids inconnus sont ignorés ; retourne les todos concernés (avec leurs catégories),
        ou None si la catégorie a disparu entre-temps.
        """
        ids = list(dict.fromkeys(todo_ids))
        category_id = category.id
        try:
            self._link(category, ids)
        except (IntegrityError, ConflictError):
            # un todo (ou la catégorie) supprimé, ou le même lien posé, par une autre session depuis la lecture
            self.session.rollback()
            category = self.get(category_id)
            if category is None:
                return None
            self._link(category, ids)
        return self._existing_todos(ids)

    def disconnect_todos(self, category: Category, todo_ids: Iterable[int]) -> Sequence[Todo]:
        """Inverse de connect_todos."""
        ids = list(dict.fromkeys(todo_ids))
        todos = self._existing_todos(ids)
        for todo in todos:
            if todo in category.todos:
                category.todos.remove(todo)
        self.session.add(category)
        self._commit()
        return self._existing_todos(ids)

    def _link(self, category: Category, ids: List[int]) -> None:
        for todo in self._existing_todos(ids):
            if todo not in category.todos:
                category.todos.append(todo)
        self.session.add(category)
        self._commit()

    def _existing_todos(self, ids: List[int]) -> Sequence[Todo]:
        if not ids:
            return []
        statement = (
            select(Todo)
            .where(Todo.id.in_(ids))
            .options(selectinload(Todo.categories))
            .order_by(Todo.id)
        )
        return self.session.exec(statement).all()
