import logging

from fastapi import FastAPI
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.route import router, system_router
from app.config import get_settings
from app.errors import ServiceError
from app.logging_config import setup_logging
from app.middleware.request_context import get_request_id, request_context_middleware

settings = get_settings()
setup_logging(settings.log_level)

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Fittingz API",
    description="API de contas de negócio e clientes para estilistas",
    version="1.0.0"
)

# Origens permitidas via CORS_ORIGINS (separado por vírgula).
# allow_credentials é necessário para o cookie de autenticação.
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def _request_context(request: Request, call_next):
    return await request_context_middleware(request, call_next)


app.include_router(router, prefix=settings.api_prefix)
app.include_router(system_router)


def _error_payload(*, code: str, message: str, details: object | None = None) -> dict:
    payload: dict = {"error": {"code": code, "message": message}}
    if details is not None:
        payload["error"]["details"] = details
    return payload


def _validation_details(exc: RequestValidationError) -> list[dict]:
    details = []
    for err in exc.errors():
        # loc vem como ("body", "email") / ("query", "limit"); o primeiro item é a origem
        loc = [str(part) for part in err.get("loc", ())]
        if len(loc) > 1 and loc[0] in ("body", "query", "path", "header", "cookie"):
            loc = loc[1:]
        details.append({"field": ".".join(loc), "message": err.get("msg", "Invalid value")})
    return details


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError):
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_payload(code=exc.code, message=exc.message, details=exc.details),
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    # Normaliza erros HTTP do FastAPI/Starlette para um payload consistente.
    code = f"HTTP_{exc.status_code}"
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_payload(code=code, message=message),
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=422,
        content=_error_payload(
            code="VALIDATION_ERROR",
            message="Invalid request",
            details=_validation_details(exc),
        ),
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(f"Erro não tratado (request_id={get_request_id(request)}): {exc}", exc_info=True)

    # Fora de development a mensagem nunca expõe detalhes internos
    error_message = "Internal server error"
    if settings.is_development and str(exc):
        error_message = str(exc)
        max_message_length = 500
        if len(error_message) > max_message_length:
            error_message = error_message[:max_message_length] + "..."

    return JSONResponse(
        status_code=500,
        content=_error_payload(code="INTERNAL_ERROR", message=error_message),
    )
