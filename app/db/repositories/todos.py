"""
➡️ But : Encapsuler toutes les opérations de base de données sur les todos.

TodoRepository : CRUD (create, read, update, delete) sur la table todos.

Ne contient aucune logique métier, juste de la persistance.

🔹 Avantages :

Réutilisable (les services n'ont pas à savoir comment la DB fonctionne).

Testable indépendamment (MemoryTodoRepository expose la même interface).
"""

from typing import Optional, Sequence

from sqlalchemy.orm import selectinload
from sqlmodel import select

from app.db.repositories.base import BaseRepository
from app.db.models.todos import Todo


class TodoRepository(BaseRepository[Todo]):
    model = Todo

    def list_all(self) -> Sequence[Todo]:
        # catégories chargées en une requête (évite le N+1 à la sérialisation)
        statement = select(Todo).options(selectinload(Todo.categories)).order_by(Todo.id)
        return self.session.exec(statement).all()

    def create(self, *, title: str, description: str) -> Todo:
        return super().create(title=title, description=description, done=False)

    def toggle_done(self, todo: Todo) -> Optional[Todo]:
        return self.update(todo, done=not todo.done)
