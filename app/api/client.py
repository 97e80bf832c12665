import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session

from app.auth.dependencies import AuthenticatedPrincipal, get_current_principal
from app.db.session import get_session
from app.schemas.base import MessageResponse
from app.schemas.client import (
    ClientCreate,
    ClientListResponse,
    ClientRead,
    ClientStats,
    ClientUpdate,
)
from app.services import client_service
from app.services.cache import Cache, get_cache

router = APIRouter(prefix="/clients", tags=["Client"])


@router.post("", response_model=ClientRead, status_code=status.HTTP_201_CREATED)
def create_client(
    body: ClientCreate,
    principal: AuthenticatedPrincipal = Depends(get_current_principal),
    session: Session = Depends(get_session),
    cache: Cache = Depends(get_cache),
):
    """Cria um cliente; o dono é sempre a conta autenticada."""
    return client_service.create_client(session, principal.account_id, body, cache)


@router.get("", response_model=ClientListResponse)
def list_clients(
    principal: AuthenticatedPrincipal = Depends(get_current_principal),
    session: Session = Depends(get_session),
    cache: Cache = Depends(get_cache),
    page: int = Query(1, ge=1, description="Página (1-based)"),
    limit: int = Query(client_service.DEFAULT_PAGE_SIZE, ge=1, le=client_service.MAX_PAGE_SIZE),
    search: Optional[str] = Query(None, max_length=255, description="Filtro por nome"),
):
    return client_service.list_clients(
        session, principal.account_id, page=page, limit=limit, search=search, cache=cache
    )


# Precisa vir antes de /{client_id}
@router.get("/stats", response_model=ClientStats)
def client_stats(
    principal: AuthenticatedPrincipal = Depends(get_current_principal),
    session: Session = Depends(get_session),
    cache: Cache = Depends(get_cache),
):
    return client_service.client_stats(session, principal.account_id, cache)


@router.get("/{client_id}", response_model=ClientRead)
def get_client(
    client_id: uuid.UUID,
    principal: AuthenticatedPrincipal = Depends(get_current_principal),
    session: Session = Depends(get_session),
    cache: Cache = Depends(get_cache),
):
    return client_service.get_client(session, client_id, principal.account_id, cache)


@router.put("/{client_id}", response_model=ClientRead)
def update_client(
    client_id: uuid.UUID,
    body: ClientUpdate,
    principal: AuthenticatedPrincipal = Depends(get_current_principal),
    session: Session = Depends(get_session),
    cache: Cache = Depends(get_cache),
):
    return client_service.update_client(session, client_id, principal.account_id, body, cache)


@router.delete("/{client_id}", response_model=MessageResponse)
def delete_client(
    client_id: uuid.UUID,
    principal: AuthenticatedPrincipal = Depends(get_current_principal),
    session: Session = Depends(get_session),
    cache: Cache = Depends(get_cache),
):
    client_service.delete_client(session, client_id, principal.account_id, cache)
    return MessageResponse(message="Client deleted successfully")
