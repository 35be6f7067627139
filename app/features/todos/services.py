"""
➡️ But : Contenir la logique métier des todos : orchestrer le repository, appliquer les règles.

TodoService : valide les champs texte, vérifie l'existence avant update / delete / toggle.

Un todo introuvable est signalé par None (la route le traduit en 404) ;
un champ invalide par ValueError (400).

🔹 Avantages :

Code métier découplé du web.

Test unitaire possible sans passer par FastAPI (et sans base, avec MemoryTodoRepository).
"""

import logging
from typing import Optional, Sequence

from app.db.models.todos import Todo
from app.db.repositories.todos import TodoRepository
from app.features.todos.schemas import TodoOut
from app.utils.text import require_text

logger = logging.getLogger(__name__)


class TodoService:
    def __init__(self, repo: TodoRepository):
        self.repo = repo

    def list(self) -> Sequence[Todo]:
        return self.repo.list_all()

    def get(self, todo_id: int) -> Optional[Todo]:
        return self.repo.get(todo_id)

    def create(self, title: str, description: str) -> Todo:
        title = require_text(title, "title")
        description = require_text(description, "description")
        todo = self.repo.create(title=title, description=description)
        logger.info("Created todo %s", todo.id)
        return todo

    def update(
        self,
        todo_id: int,
        *,
        title: Optional[str] = None,
        description: Optional[str] = None,
        done: Optional[bool] = None,
    ) -> Optional[Todo]:
        todo = self.repo.get(todo_id)
        if not todo:
            return None
        changes = {}
        if title is not None:
            changes["title"] = require_text(title, "title")
        if description is not None:
            changes["description"] = require_text(description, "description")
        if done is not None:
            changes["done"] = done
        return self.repo.update(todo, **changes)

    def toggle_status(self, todo_id: int) -> Optional[Todo]:
        todo = self.repo.get(todo_id)
        if not todo:
            return None
        return self.repo.toggle_done(todo)

    def delete(self, todo_id: int) -> Optional[TodoOut]:
        """Supprime le todo et renvoie son état juste avant suppression (None si introuvable)."""
        todo = self.repo.get(todo_id)
        if not todo:
            return None
        snapshot = TodoOut.model_validate(todo)
        if not self.repo.delete(todo):
            return None
        logger.info("Deleted todo %s", todo_id)
        return snapshot
