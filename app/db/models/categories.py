from typing import TYPE_CHECKING, List

from sqlmodel import Field, Relationship

from .base import BaseModelDB
from .links import TodoCategoryLink

if TYPE_CHECKING:
    from .todos import Todo


class Category(BaseModelDB, table=True):
    """Catégories regroupant des todos (many-to-many)."""

    __tablename__ = "categories"
    __table_args__ = {"sqlite_autoincrement": True}

    name: str = Field(index=True, unique=True, description="Nom de la catégorie (ex: 'Travail', 'Maison', etc.)")

    # Relation ORM
    todos: List["Todo"] = Relationship(back_populates="categories", link_model=TodoCategoryLink)
