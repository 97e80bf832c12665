from fastapi import APIRouter

from app.api.auth import router as auth_router
from app.api.client import router as client_router


router = APIRouter()  # Sem tag padrão - cada router define sua própria tag
router.include_router(auth_router)
router.include_router(client_router)

# Fora do prefixo da API (montado direto no app)
system_router = APIRouter(tags=["System"])


@system_router.get("/health")
def health():
    """Health check endpoint."""
    return {"status": "ok"}
