from fastapi import Response

from app.config import get_settings


def set_auth_cookie(response: Response, token: str) -> None:
    """Cookie de sessão: HTTP-only, SameSite=strict, Secure em produção."""
    settings = get_settings()
    response.set_cookie(
        key=settings.auth_cookie_name,
        value=token,
        max_age=settings.jwt_expiration_hours * 60 * 60,
        httponly=True,
        secure=settings.auth_cookie_secure,
        samesite="strict",
    )


def clear_auth_cookie(response: Response) -> None:
    settings = get_settings()
    response.delete_cookie(
        key=settings.auth_cookie_name,
        httponly=True,
        secure=settings.auth_cookie_secure,
        samesite="strict",
    )
