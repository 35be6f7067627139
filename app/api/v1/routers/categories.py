from typing import Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Path, status

from app.api.v1.dependencies import get_category_service
from app.db.repositories.base import ConflictError
from app.features.categories.schemas import (
    CategoryCreateIn,
    CategoryRenameIn,
    TodoIdsIn,
    CategoryOut,
    CategoryListOut,
    CategoryEnvelopeOut,
    CategoryUpdatedOut,
    CategoryDeletedOut,
    CategoryTodosOut,
)
from app.features.categories.services import CategoryService
from app.features.schemas import MAX_ID
from app.features.todos.schemas import TodoOut

router = APIRouter(
    prefix="/category",
    tags=["categories"],
    responses={404: {"description": "Not Found"}},
)

CATEGORY_NOT_FOUND = "Category not found"


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=CATEGORY_NOT_FOUND)


# -----------------------------
# Reads
# -----------------------------
@router.get(
    "",
    summary="Lister les catégories (avec leurs todos)",
    response_model=CategoryListOut,
)
def list_categories(svc: CategoryService = Depends(get_category_service)):
    return CategoryListOut(items=[CategoryOut.model_validate(c) for c in svc.list()])

@router.get(
    "/{category_id}",
    summary="Récupérer une catégorie",
    response_model=CategoryEnvelopeOut,
)
def get_category(
    category_id: int = Path(..., ge=1, le=MAX_ID),
    svc: CategoryService = Depends(get_category_service),
):
    category = svc.get(category_id)
    if not category:
        raise _not_found()
    return CategoryEnvelopeOut(category=CategoryOut.model_validate(category))

# -----------------------------
# Writes
# -----------------------------
@router.post(
    "",
    summary="Créer une catégorie (sans todos)",
    status_code=status.HTTP_201_CREATED,
    response_model=CategoryEnvelopeOut,
    responses={400: {"description": "Name cannot be empty"}, 409: {"description": "Name already used"}},
)
def create_category(payload: CategoryCreateIn, svc: CategoryService = Depends(get_category_service)):
    try:
        category = svc.create(payload.name)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except ConflictError:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Category name already exists")
    return CategoryEnvelopeOut(category=CategoryOut.model_validate(category))

@router.delete(
    "/name/{name}",
    summary="Supprimer une catégorie par son nom",
    response_model=CategoryDeletedOut,
)
def delete_category_by_name(name: str, svc: CategoryService = Depends(get_category_service)):
    deleted = svc.delete_by_name(name)
    if deleted is None:
        raise _not_found()
    return CategoryDeletedOut(deleted_category=deleted)

@router.delete(
    "/{category_id}",
    summary="Supprimer une catégorie par son id",
    response_model=CategoryDeletedOut,
)
def delete_category_by_id(
    category_id: int = Path(..., ge=1, le=MAX_ID),
    svc: CategoryService = Depends(get_category_service),
):
    deleted = svc.delete_by_id(category_id)
    if deleted is None:
        raise _not_found()
    return CategoryDeletedOut(deleted_category=deleted)

@router.put(
    "/changeName/{category_id}",
    summary="Renommer une catégorie",
    response_model=CategoryUpdatedOut,
    responses={400: {"description": "Name cannot be empty"}, 409: {"description": "Name already used"}},
)
def change_category_name(
    payload: CategoryRenameIn,
    category_id: int = Path(..., ge=1, le=MAX_ID),
    svc: CategoryService = Depends(get_category_service),
):
    try:
        category = svc.rename(category_id, payload.name)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except ConflictError:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Category name already exists")
    if not category:
        raise _not_found()
    return CategoryUpdatedOut(updated_category=CategoryOut.model_validate(category))

# -----------------------------
# Todos de la catégorie
# -----------------------------
@router.put(
    "/{category_id}/addTodos",
    summary="Ajouter des todos à une catégorie",
    description="Les ids de todos inconnus sont ignorés ; seuls les todos existants sont renvoyés.",
    response_model=CategoryTodosOut,
    responses={400: {"description": "todoIds must be an array"}},
)
def add_todos(
    category_id: int = Path(..., ge=1, le=MAX_ID),
    payload: Optional[TodoIdsIn] = Body(None),
    svc: CategoryService = Depends(get_category_service),
):
    try:
        todos = svc.add_todos(category_id, payload.todo_ids if payload is not None else None)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    if todos is None:
        raise _not_found()
    return CategoryTodosOut(todos=[TodoOut.model_validate(t) for t in todos])

@router.put(
    "/{category_id}/deleteTodos",
    summary="Retirer des todos d'une catégorie",
    response_model=CategoryTodosOut,
    responses={400: {"description": "todoIds must be an array"}},
)
def delete_todos(
    category_id: int = Path(..., ge=1, le=MAX_ID),
    payload: Optional[TodoIdsIn] = Body(None),
    svc: CategoryService = Depends(get_category_service),
):
    try:
        todos = svc.remove_todos(category_id, payload.todo_ids if payload is not None else None)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    if todos is None:
        raise _not_found()
    return CategoryTodosOut(todos=[TodoOut.model_validate(t) for t in todos])
