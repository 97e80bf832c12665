"""
Erros tipados da camada de serviço.

Os serviços levantam estas exceções; o mapeamento para status HTTP e para o
payload ``{"error": {...}}`` acontece apenas na borda (``app.main``).
"""

from typing import Any


class ServiceError(Exception):
    """Base dos erros de serviço com status HTTP e código estável."""

    status_code: int = 500
    code: str = "INTERNAL_ERROR"
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None, details: dict[str, Any] | None = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


class BadRequestError(ServiceError):
    status_code = 400
    code = "BAD_REQUEST"
    default_message = "Bad request"


class InvalidCodeError(ServiceError):
    """Código inexistente, divergente ou expirado. Mensagem sempre genérica."""

    status_code = 400
    code = "INVALID_CODE"
    default_message = "Invalid or expired verification code"


class UnauthorizedError(ServiceError):
    status_code = 401
    code = "UNAUTHORIZED"
    default_message = "Unauthorized"


class VerificationRequiredError(ServiceError):
    status_code = 403
    code = "EMAIL_NOT_VERIFIED"
    default_message = "Please verify your email before logging in"

    def __init__(self, email: str):
        super().__init__(details={"requiresVerification": True, "email": email})


class NotFoundError(ServiceError):
    status_code = 404
    code = "NOT_FOUND"
    default_message = "Resource not found"


class ConflictError(ServiceError):
    status_code = 409
    code = "CONFLICT"
    default_message = "Resource conflict"
