from datetime import datetime
from typing import List, Optional

from pydantic import Field

from app.features.schemas import CamelModel, EntityId
from app.features.todos.schemas import TodoOut, TodoSummary


# ---------- IN / UPDATE ----------

class CategoryCreateIn(CamelModel):
    name: str = Field(..., description="Nom de la catégorie", examples=["Travail"])


class CategoryRenameIn(CamelModel):
    name: str = Field(..., description="Nouveau nom", examples=["Maison"])


class TodoIdsIn(CamelModel):
    # None = clé absente → 400 ; [] accepté (aucun effet)
    todo_ids: Optional[List[EntityId]] = Field(None, examples=[[1, 2]])


# ---------- OUT ----------

class CategoryOut(CamelModel):
    id: int
    name: str
    created_at: datetime
    updated_at: datetime
    todos: List[TodoSummary] = []


class CategoryListOut(CamelModel):
    items: List[CategoryOut] = Field(alias="list")


class CategoryEnvelopeOut(CamelModel):
    category: CategoryOut


class CategoryUpdatedOut(CamelModel):
    updated_category: CategoryOut


class CategoryDeletedOut(CamelModel):
    deleted_category: CategoryOut


class CategoryTodosOut(CamelModel):
    todos: List[TodoOut]
