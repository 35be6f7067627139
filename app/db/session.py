"""
➡️ But : Configurer la base SQL et gérer les sessions de base de données.

engine : connexion à la base (sqlite:///todo.db par défaut).

init_db() : crée les tables à partir des modèles SQLModel.

open_session() : ouvre une session (une par requête côté API), fermée proprement par le `with`.

🔹 Avantages :

Un seul endroit pour gérer les connexions DB.

Réutilisable par injection (voir app/api/v1/dependencies.py).
"""

from typing import Any, Dict, Optional

from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlmodel import SQLModel, create_engine, Session

# Import all models for creating all tables
from app.db.models.links import TodoCategoryLink
from app.db.models.todos import Todo
from app.db.models.categories import Category

from app.core.config import settings


def _enable_sqlite_foreign_keys(dbapi_connection, _connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(url: Optional[str] = None, **kwargs: Any) -> Engine:
    url = url or settings.DATABASE_URL
    assert url, "DATABASE_URL must be set"

    is_sqlite = url.startswith("sqlite:")

    connect_args: Dict[str, Any] = {}
    if is_sqlite:
        # Requis pour SQLite quand utilisé dans un app serveur (multi-threads)
        connect_args["check_same_thread"] = False

    # echo seulement en dev pour ne pas polluer les logs en prod
    engine = create_engine(
        url,
        echo=bool(settings.SQL_ECHO),
        connect_args=connect_args,
        pool_pre_ping=not is_sqlite,  # ping utile pour Postgres/MySQL ; inutile pour SQLite
        **kwargs,
    )
    if is_sqlite:
        # SQLite n'applique les ON DELETE CASCADE de la table d'association que si foreign_keys=ON
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine

engine: Engine = build_engine()

def init_db(bind: Optional[Engine] = None) -> None:
    """
    Crée les tables si elles n'existent pas (usage dev/demo).
    En prod avec Alembic, préfère des migrations.
    """
    SQLModel.metadata.create_all(bind or engine)


def open_session(bind: Optional[Engine] = None) -> Session:
    """
    Ouvre une session sur `bind` (moteur global par défaut), à utiliser avec `with`.
    Les dépendances de l'API en ouvrent une par requête :
        with open_session(request.app.state.engine) as session:
            ...
    """
    return Session(bind or engine)
