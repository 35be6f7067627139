"""
➡️ But : assembler toutes les pièces du puzzle.

create_app() crée l'instance FastAPI et configure :

les logs,

CORS (autorisations de qui peut appeler ces API)

titre, version, tags

schéma OpenAPI personnalisé

les gestionnaires d'erreurs ({"error": ...})

Inclut les routers (ex : /api/todo, /api/category).

Choisit le backend de stockage : tables SQL créées au démarrage (lifespan),
ou MemoryStore attaché à l'app (app.state.memory_store).

🔹 Avantages :

Centralise la configuration du serveur HTTP.

Point unique d'exécution : uvicorn app.main:app --reload.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.core.config import settings
from app.core.logging import setup_logging
from app.core.openapi import custom_openapi
from app.api.errors import register_exception_handlers
from app.db.repositories.memory import MemoryStore
from app.db.session import engine, init_db

from app.api.v1.routers import todos, categories, health

import uvicorn

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if app.state.memory_store is None:
        init_db(app.state.engine)
    logger.info("%s started (store=%s)", app.title, app.state.store_backend)
    yield
    logger.info("%s stopped", app.title)


def create_app(store_backend: Optional[str] = None) -> FastAPI:
    setup_logging(settings.LOG_LEVEL)
    backend = store_backend or settings.STORE_BACKEND

    app = FastAPI(
        title=settings.APP_NAME,
        version="1.0.0",
        openapi_tags=[
            {"name": "todos", "description": "Opérations liées aux todos"},
            {"name": "categories", "description": "Opérations liées aux catégories et à leurs todos"},
            {"name": "health", "description": "Disponibilité de l'API"},
        ],
        lifespan=lifespan,
    )

    # Stockage : la durée de vie du MemoryStore est celle de l'app
    app.state.store_backend = backend
    app.state.memory_store = MemoryStore() if backend == "memory" else None
    app.state.engine = engine if backend == "sql" else None

    # CORS (ajustez selon vos besoins)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS, allow_credentials=True,
        allow_methods=["*"], allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Routers
    app.include_router(todos.router, prefix=settings.API_PREFIX)
    app.include_router(categories.router, prefix=settings.API_PREFIX)
    app.include_router(health.router)

    # Génération du schéma OpenAPI custom
    app.openapi = lambda: custom_openapi(app)

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run("app.main:app", host=settings.HOST, port=settings.PORT, reload=(settings.ENV == "dev"))
