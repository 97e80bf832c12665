from __future__ import annotations

import logging
import time
import uuid
from typing import Any, Awaitable, Callable

from fastapi import Request

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


async def request_context_middleware(
    request: Request,
    call_next: Callable[[Request], Awaitable[Any]],
):
    """
    Middleware de contexto (não-enforcement):

    - Reaproveita X-Request-ID do cliente ou gera um novo
    - Coloca request_id em request.state e devolve no header da resposta
    - Loga método, path, status e duração
    """
    request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
    request.state.request_id = request_id

    started = time.perf_counter()
    response = await call_next(request)
    duration_ms = (time.perf_counter() - started) * 1000

    response.headers[REQUEST_ID_HEADER] = request_id
    logger.info(
        f"{request.method} {request.url.path} -> {response.status_code} "
        f"({duration_ms:.1f}ms) request_id={request_id}"
    )
    return response


def get_request_id(request: Request) -> str | None:
    return getattr(request.state, "request_id", None)
