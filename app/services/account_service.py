"""
Fluxos de conta: cadastro, login, verificação de email e reset de senha.

Duas máquinas de estado independentes vivem na mesma linha ``account``:

- verificação de email: ``Unverified{code?}`` -> ``Verified`` (terminal);
- reset de senha: ``Idle`` -> ``CodeIssued`` -> (token de reset) -> ``Idle``.

Cada transição é um único read-modify-write da conta.  Falhas de código são
sempre genéricas para o chamador; a causa específica fica apenas no log.
"""
import logging
import uuid
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from app.auth import jwt as token_issuer
from app.auth.password import hash_password, verify_password
from app.errors import (
    ConflictError,
    InvalidCodeError,
    NotFoundError,
    UnauthorizedError,
    VerificationRequiredError,
)
from app.model.account import Account, AccountRole
from app.model.base import as_utc, utc_now
from app.schemas.account import RegisterRequest, UpdateProfileRequest
from app.services import client_service, code_service
from app.services.cache import Cache
from app.services.notifier import Notifier

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"
INVALID_VERIFICATION_CODE = "Invalid or expired verification code"
INVALID_RESET_CODE = "Invalid or expired reset code"
INVALID_RESET_TOKEN = "Invalid or expired reset token"
RESEND_GENERIC = "If the email exists, a verification code has been sent"
RESET_GENERIC = "If the email exists, a reset code has been sent"
ALREADY_VERIFIED = "Email is already verified"


@dataclass(frozen=True)
class ResendOutcome:
    sent: bool
    message: str


def normalize_email(email: str) -> str:
    return email.strip().lower()


def find_account_by_email(session: Session, email: str) -> Optional[Account]:
    return session.exec(
        select(Account).where(Account.email == normalize_email(email))
    ).first()


def _save(session: Session, account: Account) -> Account:
    account.updated_at = utc_now()
    session.add(account)
    session.commit()
    session.refresh(account)
    return account


def _issue_session_token(account: Account) -> str:
    return token_issuer.create_access_token(
        account_id=account.id,
        email=account.email,
        role=account.role.value,
    )


def _code_is_valid(
    account: Optional[Account],
    *,
    kind: str,
    submitted: str,
    stored: Optional[str],
    expires_at,
) -> bool:
    """
    Regras comuns de conferência de código (verificação e reset).

    Conta ausente, sem código, código divergente ou expirado -> False.
    Divergência é logada como tentativa suspeita (com o id da conta).
    """
    if account is None:
        logger.info(f"[{kind}] Código submetido para email inexistente")
        return False
    if not stored or expires_at is None:
        logger.info(f"[{kind}] Nenhum código ativo para account_id={account.id}")
        return False
    if not code_service.code_matches(stored, submitted):
        logger.warning(f"[{kind}] Tentativa com código inválido para account_id={account.id}")
        return False
    if utc_now() > as_utc(expires_at):
        logger.info(f"[{kind}] Código expirado para account_id={account.id}")
        return False
    return True


# ---------------------------------------------------------------------------
# Cadastro / login
# ---------------------------------------------------------------------------

def register(session: Session, data: RegisterRequest, notifier: Notifier) -> tuple[Account, str]:
    """
    Cria a conta (ativa, não verificada), emite o primeiro código de verificação
    e retorna (conta, token de sessão).

    Raises:
        ConflictError: Email já cadastrado (comparação case-insensitive)
    """
    email = normalize_email(data.email)
    if find_account_by_email(session, email):
        raise ConflictError("Email already registered")

    code, expires_at = code_service.issue_code(code_service.VERIFICATION_CODE_TTL)
    account = Account(
        business_name=data.business_name,
        email=email,
        password_hash=hash_password(data.password),
        contact_number=data.contact_number,
        address=data.address,
        role=AccountRole.BUSINESS,
        is_active=True,
        is_email_verified=False,
    )
    account.set_verification_code(code, expires_at)

    session.add(account)
    try:
        session.commit()
    except IntegrityError as e:
        # Corrida entre dois cadastros com o mesmo email
        session.rollback()
        raise ConflictError("Email already registered") from e
    session.refresh(account)

    notifier.verification_code(account.email, account.business_name, code)
    notifier.welcome(account.email, account.business_name)

    logger.info(f"Conta registrada: account_id={account.id}")
    return account, _issue_session_token(account)


def login(session: Session, email: str, password: str) -> tuple[Account, str]:
    """
    Autentica por email/senha.

    Raises:
        UnauthorizedError: Conta inexistente, inativa, sem senha ou senha errada
        VerificationRequiredError: Senha correta mas email não verificado
    """
    account = find_account_by_email(session, email)
    if account is None or not verify_password(password, account.password_hash):
        raise UnauthorizedError(INVALID_CREDENTIALS)
    if not account.is_active:
        logger.info(f"Login negado para conta inativa: account_id={account.id}")
        raise UnauthorizedError(INVALID_CREDENTIALS)
    if not account.is_email_verified:
        raise VerificationRequiredError(account.email)

    account.last_login_at = utc_now()
    account = _save(session, account)

    logger.info(f"Login realizado: account_id={account.id}")
    return account, _issue_session_token(account)


def verify_token(token: str) -> dict:
    return token_issuer.verify_token(token)


# ---------------------------------------------------------------------------
# Verificação de email
# ---------------------------------------------------------------------------

def verify_email(session: Session, email: str, code: str) -> Account:
    """
    Confere o código e marca o email como verificado (estado terminal).

    Raises:
        InvalidCodeError: Mensagem genérica para qualquer falha
    """
    account = find_account_by_email(session, email)
    if not _code_is_valid(
        account,
        kind="verify-email",
        submitted=code,
        stored=account.email_verification_code if account else None,
        expires_at=account.email_verification_expires_at if account else None,
    ):
        raise InvalidCodeError(INVALID_VERIFICATION_CODE)

    account.is_email_verified = True
    account.set_verification_code(None, None)
    account = _save(session, account)

    logger.info(f"Email verificado: account_id={account.id}")
    return account


def resend_verification(session: Session, email: str, notifier: Notifier) -> ResendOutcome:
    """Emite novo código (10 min), sobrescrevendo o anterior."""
    account = find_account_by_email(session, email)
    if account is None:
        return ResendOutcome(sent=True, message=RESEND_GENERIC)
    if account.is_email_verified:
        return ResendOutcome(sent=False, message=ALREADY_VERIFIED)

    code, expires_at = code_service.issue_code(code_service.VERIFICATION_CODE_TTL)
    account.set_verification_code(code, expires_at)
    account = _save(session, account)

    notifier.verification_code(account.email, account.business_name, code)
    logger.info(f"Código de verificação reenviado: account_id={account.id}")
    return ResendOutcome(sent=True, message=RESEND_GENERIC)


# ---------------------------------------------------------------------------
# Reset de senha
# ---------------------------------------------------------------------------

def request_password_reset(session: Session, email: str, notifier: Notifier) -> str:
    """Sempre retorna a mesma mensagem; só altera estado se a conta existir."""
    account = find_account_by_email(session, email)
    if account is None:
        return RESET_GENERIC

    code, expires_at = code_service.issue_code(code_service.RESET_CODE_TTL)
    account.set_reset_code(code, expires_at)
    account = _save(session, account)

    notifier.password_reset_code(account.email, account.business_name, code)
    logger.info(f"Reset de senha solicitado: account_id={account.id}")
    return RESET_GENERIC


def verify_reset_code(session: Session, email: str, code: str) -> str:
    """
    Confere o código de reset e retorna um token de reset de 5 minutos.

    O código é consumido na primeira conferência bem-sucedida, então não
    pode ser usado para emitir um segundo token.

    Raises:
        InvalidCodeError: Mensagem genérica para qualquer falha
    """
    account = find_account_by_email(session, email)
    if not _code_is_valid(
        account,
        kind="verify-reset-code",
        submitted=code,
        stored=account.password_reset_code if account else None,
        expires_at=account.password_reset_expires_at if account else None,
    ):
        raise InvalidCodeError(INVALID_RESET_CODE)

    account.set_reset_code(None, None)
    account = _save(session, account)

    logger.info(f"Código de reset conferido: account_id={account.id}")
    return token_issuer.create_reset_token(account_id=account.id, email=account.email)


def reset_password(session: Session, reset_token: str, new_password: str) -> Account:
    """
    Troca a senha usando o token de reset e limpa o código de reset.

    Raises:
        InvalidCodeError: Token inválido, expirado, com purpose errado ou conta ausente
    """
    try:
        claims = token_issuer.verify_reset_token(reset_token)
        account_id = uuid.UUID(str(claims["sub"]))
    except (UnauthorizedError, ValueError):
        raise InvalidCodeError(INVALID_RESET_TOKEN)

    account = session.get(Account, account_id)
    if account is None:
        logger.warning(f"Token de reset para conta inexistente: account_id={account_id}")
        raise InvalidCodeError(INVALID_RESET_TOKEN)

    account.password_hash = hash_password(new_password)
    account.set_reset_code(None, None)
    account = _save(session, account)

    logger.info(f"Senha redefinida: account_id={account.id}")
    return account


# ---------------------------------------------------------------------------
# Perfil
# ---------------------------------------------------------------------------

def get_profile(session: Session, account_id: uuid.UUID) -> Account:
    account = session.get(Account, account_id)
    if account is None:
        raise NotFoundError("User not found")
    return account


def update_profile(session: Session, account_id: uuid.UUID, data: UpdateProfileRequest) -> Account:
    account = get_profile(session, account_id)
    updates = data.model_dump(exclude_unset=True, exclude_none=True)
    for field, value in updates.items():
        setattr(account, field, value)
    return _save(session, account)


def delete_account(session: Session, account_id: uuid.UUID, cache: Optional[Cache] = None) -> None:
    """
    Remove a conta; clientes são removidos em cascata (FK ON DELETE CASCADE).

    O cache do dono é descartado junto, senão leituras continuariam
    devolvendo clientes que não existem mais.
    """
    account = get_profile(session, account_id)
    session.delete(account)
    session.commit()
    client_service.invalidate_owner_cache(cache, account_id)
    logger.info(f"Conta removida: account_id={account_id}")


def create_super_admin(session: Session, *, email: str, password: str, business_name: str) -> tuple[Account, bool]:
    """
    Cria (idempotente) uma conta super_admin já verificada.

    Returns:
        (conta, created); created=False quando o email já existia
    """
    existing = find_account_by_email(session, email)
    if existing:
        return existing, False

    account = Account(
        business_name=business_name,
        email=normalize_email(email),
        password_hash=hash_password(password),
        role=AccountRole.SUPER_ADMIN,
        is_active=True,
        is_email_verified=True,
    )
    session.add(account)
    session.commit()
    session.refresh(account)
    logger.info(f"Super admin criado: account_id={account.id}")
    return account, True
