"""
CRUD de clientes com fronteira de posse.

Toda consulta filtra por ``Client.admin_id == owner_id``; nunca só pelo id do
registro.  Cliente inexistente e cliente de outra conta produzem o mesmo
``NotFoundError``.
"""
import logging
import math
import uuid
from datetime import timedelta
from typing import Optional

from sqlalchemy import func
from sqlmodel import Session, select

from app.errors import BadRequestError, NotFoundError, UnauthorizedError
from app.model.account import Account
from app.model.base import utc_now
from app.model.client import Client
from app.schemas.client import (
    ClientCreate,
    ClientListResponse,
    ClientRead,
    ClientStats,
    ClientUpdate,
    Pagination,
)
from app.services.cache import Cache, NullCache

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 50
MAX_PAGE_SIZE = 100
RECENT_WINDOW = timedelta(days=30)
CLIENT_NOT_FOUND = "Client not found"


def _cache_prefix(owner_id: uuid.UUID) -> str:
    return f"client:{owner_id}:"


def invalidate_owner_cache(cache: Cache | None, owner_id: uuid.UUID) -> None:
    """Descarta tudo que estiver em cache para o dono (listas, registros e stats)."""
    if cache is not None:
        cache.delete_prefix(_cache_prefix(owner_id))


def _owned(owner_id: uuid.UUID):
    return Client.admin_id == owner_id


def _search_filter(search: Optional[str]):
    if not search:
        return None
    escaped = search.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return Client.name.ilike(f"%{escaped}%", escape="\\")


def _get_owned(session: Session, client_id: uuid.UUID, owner_id: uuid.UUID) -> Client:
    client = session.exec(
        select(Client).where(Client.id == client_id, _owned(owner_id))
    ).first()
    if client is None:
        raise NotFoundError(CLIENT_NOT_FOUND)
    return client


def create_client(
    session: Session, owner_id: uuid.UUID, data: ClientCreate, cache: Cache | None = None
) -> ClientRead:
    cache = cache or NullCache()
    # Token ainda válido de uma conta já removida
    if session.get(Account, owner_id) is None:
        raise UnauthorizedError("Invalid token")

    client = Client(
        name=data.name,
        phone=data.phone,
        email=str(data.email).lower(),
        gender=data.gender,
        admin_id=owner_id,
    )
    session.add(client)
    session.commit()
    session.refresh(client)
    invalidate_owner_cache(cache, owner_id)
    logger.info(f"Cliente criado: id={client.id}, admin_id={owner_id}")
    return ClientRead.model_validate(client)


def list_clients(
    session: Session,
    owner_id: uuid.UUID,
    *,
    page: int = 1,
    limit: int = DEFAULT_PAGE_SIZE,
    search: Optional[str] = None,
    cache: Cache | None = None,
) -> ClientListResponse:
    cache = cache or NullCache()
    page = max(page, 1)
    limit = min(max(limit, 1), MAX_PAGE_SIZE)
    search = search.strip() if search else None

    cache_key = f"{_cache_prefix(owner_id)}list:{page}:{limit}:{search or ''}"
    cached = cache.get(cache_key)
    if cached is not None:
        return cached

    conditions = [_owned(owner_id)]
    name_filter = _search_filter(search)
    if name_filter is not None:
        conditions.append(name_filter)

    total = session.exec(select(func.count(Client.id)).where(*conditions)).one()
    items = session.exec(
        select(Client)
        .where(*conditions)
        .order_by(Client.created_at.desc())
        .offset((page - 1) * limit)
        .limit(limit)
    ).all()

    result = ClientListResponse(
        items=[ClientRead.model_validate(c) for c in items],
        pagination=Pagination(
            page=page,
            limit=limit,
            total=total,
            pages=math.ceil(total / limit) if total else 0,
        ),
    )
    cache.set(cache_key, result)
    return result


def get_client(
    session: Session, client_id: uuid.UUID, owner_id: uuid.UUID, cache: Cache | None = None
) -> ClientRead:
    cache = cache or NullCache()
    cache_key = f"{_cache_prefix(owner_id)}single:{client_id}"
    cached = cache.get(cache_key)
    if cached is not None:
        return cached

    result = ClientRead.model_validate(_get_owned(session, client_id, owner_id))
    cache.set(cache_key, result)
    return result


def update_client(
    session: Session,
    client_id: uuid.UUID,
    owner_id: uuid.UUID,
    data: ClientUpdate,
    cache: Cache | None = None,
) -> ClientRead:
    cache = cache or NullCache()
    updates = data.model_dump(exclude_unset=True, exclude_none=True)
    if not updates:
        raise BadRequestError("Invalid update parameters")

    client = _get_owned(session, client_id, owner_id)
    for field, value in updates.items():
        if field == "email":
            value = str(value).lower()
        setattr(client, field, value)
    client.updated_at = utc_now()

    session.add(client)
    session.commit()
    session.refresh(client)
    invalidate_owner_cache(cache, owner_id)
    logger.info(f"Cliente atualizado: id={client_id}, admin_id={owner_id}, campos={sorted(updates)}")
    return ClientRead.model_validate(client)


def delete_client(
    session: Session, client_id: uuid.UUID, owner_id: uuid.UUID, cache: Cache | None = None
) -> None:
    cache = cache or NullCache()
    client = _get_owned(session, client_id, owner_id)
    session.delete(client)
    session.commit()
    invalidate_owner_cache(cache, owner_id)
    logger.info(f"Cliente removido: id={client_id}, admin_id={owner_id}")


def client_stats(session: Session, owner_id: uuid.UUID, cache: Cache | None = None) -> ClientStats:
    """Total, criados nos últimos 30 dias e crescimento (% com uma casa decimal)."""
    cache = cache or NullCache()
    cache_key = f"{_cache_prefix(owner_id)}stats"
    cached = cache.get(cache_key)
    if cached is not None:
        return cached

    total = session.exec(select(func.count(Client.id)).where(_owned(owner_id))).one()
    recent = session.exec(
        select(func.count(Client.id)).where(
            _owned(owner_id),
            Client.created_at >= utc_now() - RECENT_WINDOW,
        )
    ).one()
    growth = f"{recent / total * 100:.1f}" if total > 0 else "0"

    result = ClientStats(total=total, recent=recent, growth=growth)
    cache.set(cache_key, result)
    return result
