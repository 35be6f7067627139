"""
➡️ But : Personnaliser la documentation Swagger/OpenAPI.

custom_openapi(app) modifie le schéma généré par FastAPI pour :

ajouter un titre, une description détaillée,

centraliser la personnalisation du Swagger.

🔹 Avantages :

La doc est toujours complète et cohérente.

Tu peux y ajouter des conventions d'API (formats, codes d'erreur, etc.).
"""

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi


def custom_openapi(app: FastAPI):
    if app.openapi_schema:
        return app.openapi_schema
    openapi_schema = get_openapi(
        title=app.title,
        version=app.version,
        description=(
            "API de gestion de todos et de catégories (FastAPI + SQLModel).\n\n"
            "### Conventions\n"
            "- Toutes les heures sont en UTC.\n"
            "- Les clés JSON sont en camelCase (`createdAt`, `todoIds`...).\n"
            "- Les erreurs sont renvoyées sous la forme `{\"error\": \"...\"}`.\n"
            "- Une suppression renvoie l'entité telle qu'elle était avant suppression.\n"
        ),
        routes=app.routes,
        tags=app.openapi_tags,
    )
    app.openapi_schema = openapi_schema
    return app.openapi_schema
