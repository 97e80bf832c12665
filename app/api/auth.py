from fastapi import APIRouter, BackgroundTasks, Depends, Response, status
from sqlmodel import Session

from app.auth.cookies import clear_auth_cookie, set_auth_cookie
from app.auth.dependencies import AuthenticatedPrincipal, get_current_principal
from app.db.session import get_session
from app.schemas.account import (
    AccountRead,
    AuthResponse,
    EmailPayload,
    LoginRequest,
    RegisterRequest,
    ResendVerificationResponse,
    ResetPasswordRequest,
    ResetTokenResponse,
    UpdateProfileRequest,
    UserResponse,
    VerifyCodeRequest,
)
from app.schemas.base import MessageResponse
from app.services import account_service
from app.services.cache import Cache, get_cache
from app.services.notifier import Notifier

router = APIRouter(prefix="/auth", tags=["Auth"])


def get_notifier(background_tasks: BackgroundTasks) -> Notifier:
    """Notificações rodam depois da resposta (best-effort)."""
    return Notifier(background_tasks)


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    body: RegisterRequest,
    response: Response,
    session: Session = Depends(get_session),
    notifier: Notifier = Depends(get_notifier),
):
    """
    Cadastra uma conta de negócio.

    A conta nasce ativa e não verificada; o código de verificação (6 dígitos,
    10 minutos) e o email de boas-vindas são enviados em background.
    """
    account, token = account_service.register(session, body, notifier)
    set_auth_cookie(response, token)
    return AuthResponse(
        message="User registered successfully",
        user=AccountRead.model_validate(account),
        access_token=token,
    )


@router.post("/login", response_model=AuthResponse)
def login(
    body: LoginRequest,
    response: Response,
    session: Session = Depends(get_session),
):
    """Login por email/senha. 401 genérico; 403 com requiresVerification se o email não foi verificado."""
    account, token = account_service.login(session, body.email, body.password)
    set_auth_cookie(response, token)
    return AuthResponse(
        message="Login successful",
        user=AccountRead.model_validate(account),
        access_token=token,
    )


@router.post("/logout", response_model=MessageResponse)
def logout(response: Response):
    clear_auth_cookie(response)
    return MessageResponse(message="Logout successful")


@router.get("/profile", response_model=UserResponse)
def get_profile(
    principal: AuthenticatedPrincipal = Depends(get_current_principal),
    session: Session = Depends(get_session),
):
    account = account_service.get_profile(session, principal.account_id)
    return UserResponse(user=AccountRead.model_validate(account))


@router.put("/profile", response_model=UserResponse)
def update_profile(
    body: UpdateProfileRequest,
    principal: AuthenticatedPrincipal = Depends(get_current_principal),
    session: Session = Depends(get_session),
):
    account = account_service.update_profile(session, principal.account_id, body)
    return UserResponse(user=AccountRead.model_validate(account))


@router.delete("/account", response_model=MessageResponse)
def delete_account(
    response: Response,
    principal: AuthenticatedPrincipal = Depends(get_current_principal),
    session: Session = Depends(get_session),
    cache: Cache = Depends(get_cache),
):
    """Remove a conta autenticada e todos os seus clientes."""
    account_service.delete_account(session, principal.account_id, cache)
    clear_auth_cookie(response)
    return MessageResponse(message="Account deleted successfully")


@router.post("/verify-email", response_model=MessageResponse)
def verify_email(body: VerifyCodeRequest, session: Session = Depends(get_session)):
    account_service.verify_email(session, body.email, body.code)
    return MessageResponse(message="Email verified successfully")


@router.post("/resend-verification", response_model=ResendVerificationResponse)
def resend_verification(
    body: EmailPayload,
    session: Session = Depends(get_session),
    notifier: Notifier = Depends(get_notifier),
):
    """Sempre 200. Email inexistente recebe a mesma resposta de um envio real."""
    outcome = account_service.resend_verification(session, body.email, notifier)
    return ResendVerificationResponse(message=outcome.message, sent=outcome.sent)


@router.post("/forgot-password", response_model=MessageResponse)
def forgot_password(
    body: EmailPayload,
    session: Session = Depends(get_session),
    notifier: Notifier = Depends(get_notifier),
):
    """Sempre 200 com corpo idêntico, exista ou não a conta."""
    message = account_service.request_password_reset(session, body.email, notifier)
    return MessageResponse(message=message)


@router.post("/verify-reset-code", response_model=ResetTokenResponse)
def verify_reset_code(body: VerifyCodeRequest, session: Session = Depends(get_session)):
    reset_token = account_service.verify_reset_code(session, body.email, body.code)
    return ResetTokenResponse(
        message="Code verified. You can now set your new password.",
        reset_token=reset_token,
    )


@router.post("/reset-password", response_model=MessageResponse)
def reset_password(body: ResetPasswordRequest, session: Session = Depends(get_session)):
    account_service.reset_password(session, body.reset_token, body.new_password)
    return MessageResponse(message="Password reset successfully")
