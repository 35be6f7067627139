"""
➡️ But : Définir la structure des tables de la base (ORM).

Contient les classes héritant de SQLModel.

Représente les objets persistés. Ici on représente les propriétés communes de toutes les tables.

Chaque champ = une colonne SQL (avec type, index, clé primaire...).

🔹 Avantages :

Tu manipules des objets Python, pas du SQL brut.

Facile à migrer vers PostgreSQL ou MySQL plus tard.
"""

from datetime import datetime, timezone
from typing import Optional

from sqlmodel import SQLModel, Field


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class BaseModelDB(SQLModel, table=False):
    id: Optional[int] = Field(default=None, primary_key=True)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
