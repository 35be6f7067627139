"""
➡️ But : Centraliser les dépendances réutilisables des routes.

Exemples :

get_todo_service() : crée un TodoService à partir du backend de stockage configuré.

get_category_service() : idem pour les catégories.

🔹 Avantages :

Routes plus propres (pas de code dupliqué).

Backend interchangeable : si l'app porte un MemoryStore (app.state.memory_store),
les repositories mémoire remplacent les repositories SQL, sans toucher aux services.
La session SQL n'est ouverte que pour le backend sql (moteur : app.state.engine).
"""

from typing import Optional

from fastapi import Depends, Request

from app.db.session import open_session

from app.db.repositories.memory import MemoryStore, MemoryTodoRepository, MemoryCategoryRepository
from app.db.repositories.todos import TodoRepository
from app.db.repositories.categories import CategoryRepository

from app.features.todos.services import TodoService
from app.features.categories.services import CategoryService


def get_memory_store(request: Request) -> Optional[MemoryStore]:
    return getattr(request.app.state, "memory_store", None)


# -----------------------------
# Repositories
# -----------------------------
def get_todo_repository(request: Request):
    store = get_memory_store(request)
    if store is not None:
        yield MemoryTodoRepository(store)
        return
    with open_session(request.app.state.engine) as session:
        yield TodoRepository(session)

def get_category_repository(request: Request):
    store = get_memory_store(request)
    if store is not None:
        yield MemoryCategoryRepository(store)
        return
    with open_session(request.app.state.engine) as session:
        yield CategoryRepository(session)


# -----------------------------
# Services
# -----------------------------
def get_todo_service(repo=Depends(get_todo_repository)) -> TodoService:
    return TodoService(repo)

def get_category_service(repo=Depends(get_category_repository)) -> CategoryService:
    return CategoryService(repo)
