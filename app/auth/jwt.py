import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import jwt, JWTError

from app.config import get_settings
from app.errors import UnauthorizedError

logger = logging.getLogger(__name__)

JWT_ALGORITHM = "HS256"
PASSWORD_RESET_PURPOSE = "password_reset"


def _encode(claims: Dict[str, Any], *, secret: str, expires_delta: timedelta) -> str:
    settings = get_settings()
    now = datetime.now(timezone.utc)
    payload: Dict[str, Any] = {
        **claims,
        "iat": int(now.timestamp()),
        "exp": int((now + expires_delta).timestamp()),
        "iss": settings.jwt_issuer,
    }
    return jwt.encode(payload, secret, algorithm=JWT_ALGORITHM)


def _decode(token: str, *, secret: str) -> Dict[str, Any]:
    try:
        return jwt.decode(
            token,
            secret,
            algorithms=[JWT_ALGORITHM],
            issuer=get_settings().jwt_issuer,
        )
    except JWTError as e:
        logger.debug(f"Token rejeitado: {e}")
        raise UnauthorizedError("Invalid token")


def create_access_token(
    account_id: uuid.UUID,
    email: str,
    role: str,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Cria o token de sessão (bearer/cookie) com a identidade da conta.

    Args:
        account_id: ID da conta no banco
        email: Email da conta
        role: Role da conta (business, super_admin)
        expires_delta: Validade; padrão JWT_EXPIRATION_HOURS

    Returns:
        Token JWT codificado
    """
    settings = get_settings()
    return _encode(
        {"sub": str(account_id), "email": email, "role": role},
        secret=settings.jwt_secret,
        expires_delta=expires_delta or timedelta(hours=settings.jwt_expiration_hours),
    )


def create_reset_token(
    account_id: uuid.UUID,
    email: str,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """Token curto (5 min) que só serve para concluir o reset de senha."""
    settings = get_settings()
    return _encode(
        {"sub": str(account_id), "email": email, "purpose": PASSWORD_RESET_PURPOSE},
        secret=settings.jwt_reset_secret,
        expires_delta=expires_delta or timedelta(minutes=settings.reset_token_minutes),
    )


def verify_token(token: str) -> Dict[str, Any]:
    """
    Verifica e decodifica um token de sessão.

    Raises:
        UnauthorizedError: Se o token for inválido, expirado ou tiver purpose
    """
    payload = _decode(token, secret=get_settings().jwt_secret)
    # Tokens com purpose (ex.: reset de senha) não valem como sessão.
    if payload.get("purpose") is not None or not payload.get("sub"):
        raise UnauthorizedError("Invalid token")
    return payload


def verify_reset_token(token: str) -> Dict[str, Any]:
    """
    Verifica o token de reset: assinatura, expiração e purpose == password_reset.

    Raises:
        UnauthorizedError: Em qualquer falha (mensagem genérica)
    """
    payload = _decode(token, secret=get_settings().jwt_reset_secret)
    if payload.get("purpose") != PASSWORD_RESET_PURPOSE:
        logger.warning(f"Token de reset com purpose inválido: sub={payload.get('sub')}")
        raise UnauthorizedError("Invalid token")
    if not payload.get("sub"):
        raise UnauthorizedError("Invalid token")
    return payload
