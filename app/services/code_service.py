import hmac
import secrets
from datetime import datetime, timedelta

from app.model.base import utc_now

CODE_LENGTH = 6
VERIFICATION_CODE_TTL = timedelta(minutes=10)
RESET_CODE_TTL = timedelta(minutes=15)


def generate_code() -> str:
    """Código numérico uniforme em 000000–999999, com zeros à esquerda."""
    return f"{secrets.randbelow(10 ** CODE_LENGTH):0{CODE_LENGTH}d}"


def issue_code(ttl: timedelta, now: datetime | None = None) -> tuple[str, datetime]:
    """Gera (código, expira_em) com expiração exatamente now + ttl."""
    issued_at = now or utc_now()
    return generate_code(), issued_at + ttl


def code_matches(stored: str | None, submitted: str) -> bool:
    if not stored:
        return False
    return hmac.compare_digest(stored.encode("utf-8"), submitted.encode("utf-8"))
