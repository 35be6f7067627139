from typing import Any, Generic, Optional, Type, TypeVar

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm.exc import StaleDataError
from sqlmodel import SQLModel, Session

from app.db.models.base import utc_now

# Type générique pour le modèle (Todo, Category, etc.)
ModelT = TypeVar("ModelT", bound=SQLModel)


class ConflictError(Exception):
    """Violation d'unicité (ex: nom de catégorie déjà utilisé)."""


class BaseRepository(Generic[ModelT]):
    """
    Repository de base pour les opérations CRUD standards.

    👉 Ne contient aucune logique métier.
    👉 Gère la persistance générique : create, read, update, delete, list.
    👉 Les repositories concrets définissent `model = MaClasseSQLModel`.
    👉 Chaque écriture est une transaction (commit) : pas d'état partagé entre requêtes.
    """

    model: Type[ModelT]

    def __init__(self, session: Session):
        self.session = session

    # ---------- READ ----------

    def get(self, id_: Any) -> Optional[ModelT]:
        """Retourne un enregistrement par son identifiant, ou None."""
        return self.session.get(self.model, id_)

    # ---------- CREATE ----------

    def create(self, **fields) -> ModelT:
        """Crée et persiste un nouvel enregistrement."""
        entity = self.model(**fields)
        self.session.add(entity)
        self._commit()
        self.session.refresh(entity)
        return entity

    # ---------- UPDATE ----------

    def update(self, entity: ModelT, **changes) -> Optional[ModelT]:
        """
        Met à jour un enregistrement existant (updated_at rafraîchi).
        Retourne None si la ligne a été supprimée entre-temps par une autre session.
        """
        for key, value in changes.items():
            setattr(entity, key, value)
        if hasattr(entity, "updated_at"):
            entity.updated_at = utc_now()
        self.session.add(entity)
        try:
            self._commit()
        except StaleDataError:
            self.session.rollback()
            return None
        self.session.refresh(entity)
        return entity

    # ---------- DELETE ----------

    def delete(self, entity: ModelT) -> bool:
        """
        Supprime un enregistrement (et ses lignes d'association many-to-many).
        Retourne False si une autre session l'a déjà supprimé.
        """
        self.session.delete(entity)
        try:
            self._commit()
        except StaleDataError:
            self.session.rollback()
            return False
        return True

    # ---------- HELPERS ----------

    def _commit(self) -> None:
        try:
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            if is_unique_violation(e):
                raise ConflictError(f"{self.model.__name__}: unique constraint violated") from e
            raise


def is_unique_violation(error: IntegrityError) -> bool:
    """UNIQUE (SQLite : "UNIQUE constraint failed", Postgres : SQLSTATE 23505) ; pas une clé étrangère."""
    if getattr(error.orig, "pgcode", None) == "23505":
        return True
    return "unique" in str(error.orig).lower()
