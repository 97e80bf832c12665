from app.auth.jwt import create_access_token, create_reset_token, verify_token, verify_reset_token
from app.auth.password import hash_password, verify_password
from app.auth.dependencies import AuthenticatedPrincipal, get_current_principal

__all__ = [
    "create_access_token",
    "create_reset_token",
    "verify_token",
    "verify_reset_token",
    "hash_password",
    "verify_password",
    "AuthenticatedPrincipal",
    "get_current_principal",
]
