"""
➡️ But : Définir les formats d'entrée/sortie de l'API todos (couche validation).

TodoCreateIn → corps de requête POST

TodoUpdateIn → corps PUT (champs absents = inchangés)

TodoOut → un todo avec ses catégories ; les enveloppes ({todo}, {list}...) autour.

🔹 Avantages :

Validation automatique.

Documente les champs dans Swagger (types, exemples...).
"""

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from app.features.schemas import CamelModel


# ---------- IN ----------

class TodoCreateIn(CamelModel):
    title: str = Field(..., examples=["Acheter du lait"])
    description: str = Field(..., examples=["Lait, pain, oeufs"])


class TodoUpdateIn(CamelModel):
    title: Optional[str] = Field(None, examples=["Aller courir"])
    description: Optional[str] = Field(None, examples=["5 km autour du parc"])
    done: Optional[bool] = Field(None, examples=[True])


# ---------- OUT ----------

class CategoryRef(CamelModel):
    id: int
    name: str


class TodoSummary(CamelModel):
    id: int
    title: str
    description: str
    done: bool
    created_at: datetime
    updated_at: datetime


class TodoOut(TodoSummary):
    categories: List[CategoryRef] = []


class TodoListOut(CamelModel):
    items: List[TodoOut] = Field(alias="list")


class TodoEnvelopeOut(CamelModel):
    todo: TodoOut


class TodoUpdatedOut(CamelModel):
    updated_todo: TodoOut


class TodoDeletedOut(CamelModel):
    deleted_todo: TodoOut
