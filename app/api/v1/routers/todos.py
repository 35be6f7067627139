"""
➡️ But : Définir les endpoints de l'API todos.

C'est la couche la plus proche du web :

Réceptionne les requêtes HTTP (GET, POST, PUT, DELETE…)

Appelle le service correspondant

Traduit les résultats : None → 404, ValueError → 400

Retourne les schémas de sortie (response_model)

🔹 Avantages :

Automatiquement documentée dans Swagger.

Isolation totale du reste du code : les routes ne contiennent ni SQL ni logique métier.
"""

from typing import Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Path, status

from app.api.v1.dependencies import get_todo_service
from app.features.todos.schemas import (
    TodoCreateIn,
    TodoUpdateIn,
    TodoOut,
    TodoListOut,
    TodoEnvelopeOut,
    TodoUpdatedOut,
    TodoDeletedOut,
)
from app.features.todos.services import TodoService
from app.features.schemas import MAX_ID

router = APIRouter(
    prefix="/todo",
    tags=["todos"],
    responses={404: {"description": "Not Found"}},
)

TODO_NOT_FOUND = "Todo not found"


@router.get(
    "",
    summary="Lister les todos",
    description="Retourne tous les todos, avec leurs catégories.",
    response_model=TodoListOut,
)
def list_todos(svc: TodoService = Depends(get_todo_service)):
    return TodoListOut(items=[TodoOut.model_validate(t) for t in svc.list()])

@router.post(
    "",
    summary="Créer un todo",
    status_code=status.HTTP_201_CREATED,
    response_model=TodoEnvelopeOut,
    responses={400: {"description": "Title or description cannot be empty"}},
)
def create_todo(payload: TodoCreateIn, svc: TodoService = Depends(get_todo_service)):
    try:
        todo = svc.create(title=payload.title, description=payload.description)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return TodoEnvelopeOut(todo=TodoOut.model_validate(todo))

@router.put(
    "/toggle_status/{todo_id}",
    summary="Inverser le statut (done) d'un todo",
    response_model=TodoUpdatedOut,
)
def toggle_status(
    todo_id: int = Path(..., ge=1, le=MAX_ID),
    svc: TodoService = Depends(get_todo_service),
):
    todo = svc.toggle_status(todo_id)
    if not todo:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=TODO_NOT_FOUND)
    return TodoUpdatedOut(updated_todo=TodoOut.model_validate(todo))

@router.get(
    "/{todo_id}",
    summary="Récupérer un todo",
    response_model=TodoEnvelopeOut,
)
def get_todo(
    todo_id: int = Path(..., ge=1, le=MAX_ID),
    svc: TodoService = Depends(get_todo_service),
):
    todo = svc.get(todo_id)
    if not todo:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=TODO_NOT_FOUND)
    return TodoEnvelopeOut(todo=TodoOut.model_validate(todo))

@router.put(
    "/{todo_id}",
    summary="Mettre à jour un todo",
    description="Seuls les champs fournis (title, description, done) sont modifiés.",
    response_model=TodoUpdatedOut,
    responses={400: {"description": "Entity todo cannot be null"}},
)
def update_todo(
    todo_id: int = Path(..., ge=1, le=MAX_ID),
    payload: Optional[TodoUpdateIn] = Body(None),
    svc: TodoService = Depends(get_todo_service),
):
    if payload is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Entity todo cannot be null")
    try:
        todo = svc.update(
            todo_id,
            title=payload.title,
            description=payload.description,
            done=payload.done,
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    if not todo:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=TODO_NOT_FOUND)
    return TodoUpdatedOut(updated_todo=TodoOut.model_validate(todo))

@router.delete(
    "/{todo_id}",
    summary="Supprimer un todo",
    description="Renvoie le todo tel qu'il était avant suppression.",
    response_model=TodoDeletedOut,
)
def delete_todo(
    todo_id: int = Path(..., ge=1, le=MAX_ID),
    svc: TodoService = Depends(get_todo_service),
):
    deleted = svc.delete(todo_id)
    if deleted is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=TODO_NOT_FOUND)
    return TodoDeletedOut(deleted_todo=deleted)
