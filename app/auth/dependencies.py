import uuid
from dataclasses import dataclass
from typing import Any

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.auth.jwt import verify_token
from app.config import get_settings
from app.errors import UnauthorizedError
from app.model.account import AccountRole

bearer = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class AuthenticatedPrincipal:
    """Identidade autenticada da request, construída a partir do token verificado."""

    account_id: uuid.UUID
    email: str
    role: AccountRole

    @classmethod
    def from_claims(cls, claims: dict[str, Any]) -> "AuthenticatedPrincipal":
        try:
            return cls(
                account_id=uuid.UUID(str(claims["sub"])),
                email=str(claims.get("email") or ""),
                role=AccountRole(claims.get("role", AccountRole.BUSINESS.value)),
            )
        except (KeyError, ValueError):
            raise UnauthorizedError("Invalid token")


def extract_token(request: Request, credentials: HTTPAuthorizationCredentials | None) -> str | None:
    """Bearer tem prioridade; cookie HTTP-only é o fallback."""
    if credentials and credentials.credentials:
        return credentials.credentials
    return request.cookies.get(get_settings().auth_cookie_name) or None


def get_current_principal(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer),
) -> AuthenticatedPrincipal:
    """Dependency que exige autenticação e anexa o principal em request.state."""
    token = extract_token(request, credentials)
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Access token required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    principal = AuthenticatedPrincipal.from_claims(verify_token(token))
    request.state.principal = principal
    return principal
