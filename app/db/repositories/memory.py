"""
➡️ But : Backend de stockage en mémoire (STORE_BACKEND=memory), interchangeable avec les repositories SQL.

MemoryStore : les données (todos, catégories, liens) + les compteurs d'id, pour la durée de vie de l'app.

MemoryTodoRepository / MemoryCategoryRepository : même interface que TodoRepository / CategoryRepository.

Les entités renvoyées sont des copies : les modifier ne modifie pas le store,
il faut passer par update().

🔹 Avantages :

Démarrage sans base de données (démo, tests).

Les services ne voient aucune différence avec le backend SQL.
"""

import itertools
import threading
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple

from app.db.models.base import utc_now
from app.db.repositories.base import ConflictError


@dataclass
class TodoRecord:
    id: int
    title: str
    description: str
    done: bool = False
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)
    categories: List["CategoryRecord"] = field(default_factory=list)


@dataclass
class CategoryRecord:
    id: int
    name: str
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)
    todos: List[TodoRecord] = field(default_factory=list)


class MemoryStore:
    """Lignes stockées sans relations ; les liens vivent dans `links` (todo_id, category_id)."""

    def __init__(self):
        self.lock = threading.RLock()
        self.todos: Dict[int, TodoRecord] = {}
        self.categories: Dict[int, CategoryRecord] = {}
        self.links: Set[Tuple[int, int]] = set()
        # ids jamais réutilisés, même après suppression
        self._todo_ids = itertools.count(1)
        self._category_ids = itertools.count(1)

    def next_todo_id(self) -> int:
        return next(self._todo_ids)

    def next_category_id(self) -> int:
        return next(self._category_ids)

    # ---------- VUES (copies avec relations) ----------

    def todo_view(self, todo_id: int) -> TodoRecord:
        row = self.todos[todo_id]
        categories = [
            replace(self.categories[c_id], todos=[])
            for (t_id, c_id) in sorted(self.links, key=lambda link: link[1])
            if t_id == todo_id
        ]
        return replace(row, categories=categories)

    def category_view(self, category_id: int) -> CategoryRecord:
        row = self.categories[category_id]
        todos = [
            replace(self.todos[t_id], categories=[])
            for (t_id, c_id) in sorted(self.links)
            if c_id == category_id
        ]
        return replace(row, todos=todos)


class MemoryTodoRepository:
    def __init__(self, store: MemoryStore):
        self.store = store

    def list_all(self) -> Sequence[TodoRecord]:
        with self.store.lock:
            return [self.store.todo_view(todo_id) for todo_id in sorted(self.store.todos)]

    def get(self, todo_id: int) -> Optional[TodoRecord]:
        with self.store.lock:
            if todo_id not in self.store.todos:
                return None
            return self.store.todo_view(todo_id)

    def create(self, *, title: str, description: str) -> TodoRecord:
        with self.store.lock:
            row = TodoRecord(id=self.store.next_todo_id(), title=title, description=description)
            self.store.todos[row.id] = row
            return self.store.todo_view(row.id)

    def update(self, todo: TodoRecord, **changes) -> Optional[TodoRecord]:
        with self.store.lock:
            row = self.store.todos.get(todo.id)
            if row is None:
                # supprimé entre-temps par une autre requête
                return None
            for key, value in changes.items():
                setattr(row, key, value)
            row.updated_at = utc_now()
            return self.store.todo_view(row.id)

    def toggle_done(self, todo: TodoRecord) -> Optional[TodoRecord]:
        with self.store.lock:
            row = self.store.todos.get(todo.id)
            if row is None:
                return None
            return self.update(todo, done=not row.done)

    def delete(self, todo: TodoRecord) -> bool:
        with self.store.lock:
            if self.store.todos.pop(todo.id, None) is None:
                return False
            self.store.links = {link for link in self.store.links if link[0] != todo.id}
            return True


class MemoryCategoryRepository:
    def __init__(self, store: MemoryStore):
        self.store = store

    def list_with_todos(self) -> Sequence[CategoryRecord]:
        with self.store.lock:
            return [self.store.category_view(c_id) for c_id in sorted(self.store.categories)]

    def get(self, category_id: int) -> Optional[CategoryRecord]:
        with self.store.lock:
            if category_id not in self.store.categories:
                return None
            return self.store.category_view(category_id)

    def get_by_name(self, name: str) -> Optional[CategoryRecord]:
        with self.store.lock:
            for row in self.store.categories.values():
                if row.name == name:
                    return self.store.category_view(row.id)
            return None

    def create(self, *, name: str) -> CategoryRecord:
        with self.store.lock:
            self._assert_name_free(name)
            row = CategoryRecord(id=self.store.next_category_id(), name=name)
            self.store.categories[row.id] = row
            return self.store.category_view(row.id)

    def update(self, category: CategoryRecord, **changes) -> Optional[CategoryRecord]:
        with self.store.lock:
            row = self.store.categories.get(category.id)
            if row is None:
                return None
            if "name" in changes:
                self._assert_name_free(changes["name"], exclude_id=row.id)
            for key, value in changes.items():
                setattr(row, key, value)
            row.updated_at = utc_now()
            return self.store.category_view(row.id)

    def delete(self, category: CategoryRecord) -> bool:
        with self.store.lock:
            if self.store.categories.pop(category.id, None) is None:
                return False
            self.store.links = {link for link in self.store.links if link[1] != category.id}
            return True

    # ---------- ASSOCIATION TODOS ----------

    def connect_todos(self, category: CategoryRecord, todo_ids: Iterable[int]) -> Optional[Sequence[TodoRecord]]:
        with self.store.lock:
            if category.id not in self.store.categories:
                return None
            ids = self._existing_todo_ids(todo_ids)
            self.store.links.update((todo_id, category.id) for todo_id in ids)
            return [self.store.todo_view(todo_id) for todo_id in ids]

    def disconnect_todos(self, category: CategoryRecord, todo_ids: Iterable[int]) -> Sequence[TodoRecord]:
        with self.store.lock:
            ids = self._existing_todo_ids(todo_ids)
            self.store.links.difference_update((todo_id, category.id) for todo_id in ids)
            return [self.store.todo_view(todo_id) for todo_id in ids]

    # ---------- HELPERS ----------

    def _existing_todo_ids(self, todo_ids: Iterable[int]) -> List[int]:
        return sorted(set(todo_ids) & set(self.store.todos))

    def _assert_name_free(self, name: str, exclude_id: Optional[int] = None) -> None:
        for row in self.store.categories.values():
            if row.name == name and row.id != exclude_id:
                raise ConflictError("Category: unique constraint violated")
