"""
➡️ But : Centraliser tous les paramètres configurables (nom d'app, backend de stockage, chemin DB, logs...)

Utilise pydantic-settings pour charger automatiquement les variables d'environnement (.env, variables système…).

Fournit un objet settings unique, que tu importes ailleurs :

from app.core.config import settings
print(settings.APP_NAME)


🔹 Avantages :

Plus propre que des constantes éparpillées dans le code.

Facilite le passage entre environnements (dev / prod / test) et entre backends (sql / memory).
"""

from typing import List, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # -----------------------------
    # App
    # -----------------------------
    APP_NAME: str = "Todo-Back"
    ENV: str = "dev"  # dev | prod | test
    API_PREFIX: str = "/api"

    # -----------------------------
    # Serveur
    # -----------------------------
    HOST: str = "127.0.0.1"
    PORT: int = 3000
    CORS_ORIGINS: List[str] = ["*"]

    # -----------------------------
    # Stockage
    # -----------------------------
    STORE_BACKEND: str = "sql"  # sql | memory

    SQLITE_PATH: str = "todo.db"  # fichier SQLite
    # Si tu veux forcer une URL différente (ex: Postgres), définis DATABASE_URL dans l'env.
    DATABASE_URL: Optional[str] = None
    SQL_ECHO: Optional[bool] = None  # auto selon ENV si None

    SEED_PATH: str = "app/db/seed_data.yaml"

    # -----------------------------
    # Logs
    # -----------------------------
    LOG_LEVEL: str = "INFO"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
    }

    # -----------------------------
    # Post-process values
    # -----------------------------
    def model_post_init(self, __context): # appelée automatiquement
        # DATABASE_URL par défaut depuis SQLITE_PATH si non fourni
        if not self.DATABASE_URL:
            object.__setattr__(self, "DATABASE_URL", f"sqlite:///{self.SQLITE_PATH}")

        # echo SQL seulement en dev si non spécifié
        if self.SQL_ECHO is None:
            object.__setattr__(self, "SQL_ECHO", self.ENV == "dev")

        if self.STORE_BACKEND not in ("sql", "memory"):
            raise ValueError(f"STORE_BACKEND inconnu: {self.STORE_BACKEND!r} (attendu: sql | memory)")


# Instance globale importable partout
settings = Settings()
