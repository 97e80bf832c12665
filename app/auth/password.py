import logging

import bcrypt

from app.config import get_settings

logger = logging.getLogger(__name__)

_BCRYPT_MAX_BYTES = 72


def hash_password(password: str) -> str:
    """Hash adaptativo (bcrypt) com custo BCRYPT_ROUNDS."""
    salt = bcrypt.gensalt(rounds=get_settings().bcrypt_rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, hashed: str | None) -> bool:
    """Compara senha e hash; hash ausente ou malformado nunca confere."""
    if not hashed:
        return False
    # bcrypt só considera 72 bytes; senhas maiores nunca foram aceitas no cadastro
    if len(password.encode("utf-8")) > _BCRYPT_MAX_BYTES:
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError as e:
        logger.error(f"Hash de senha inválido: {e}")
        return False
