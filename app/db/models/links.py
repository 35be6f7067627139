"""Table d'association many-to-many Todo ↔ Category."""

from typing import Optional

from sqlmodel import SQLModel, Field


class TodoCategoryLink(SQLModel, table=True):
    __tablename__ = "todo_category_link"

    todo_id: Optional[int] = Field(
        default=None, foreign_key="todos.id", primary_key=True, ondelete="CASCADE"
    )
    category_id: Optional[int] = Field(
        default=None, foreign_key="categories.id", primary_key=True, ondelete="CASCADE"
    )
