from fastapi import APIRouter

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", summary="Vérifier que l'API répond")
def health():
    return {"status": "ok"}
