from typing import TYPE_CHECKING, List

from sqlmodel import Field, Relationship

from .base import BaseModelDB
from .links import TodoCategoryLink

if TYPE_CHECKING:
    from .categories import Category


class Todo(BaseModelDB, table=True):
    """Tâche : titre, description et statut (fait / pas fait)."""

    __tablename__ = "todos"
    # AUTOINCREMENT : un id supprimé n'est jamais réattribué (SQLite)
    __table_args__ = {"sqlite_autoincrement": True}

    title: str = Field(index=True, description="Titre de la tâche")
    description: str = Field(description="Description de la tâche")
    done: bool = Field(default=False, description="La tâche est-elle terminée ?")

    # Relation ORM (many-to-many)
    categories: List["Category"] = Relationship(back_populates="todos", link_model=TodoCategoryLink)
