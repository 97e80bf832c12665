import logging
import uuid
from datetime import timedelta

import pytest
from jose import jwt

from app.auth import jwt as token_issuer
from app.auth.password import hash_password, verify_password
from app.config import get_settings
from app.errors import UnauthorizedError


def test_access_token_round_trip_carries_identity():
    account_id = uuid.uuid4()
    token = token_issuer.create_access_token(account_id, "ana@fittingz.io", "business")
    claims = token_issuer.verify_token(token)
    assert claims["sub"] == str(account_id)
    assert claims["email"] == "ana@fittingz.io"
    assert claims["role"] == "business"
    assert claims["iss"] == get_settings().jwt_issuer


def test_expired_access_token_is_rejected():
    token = token_issuer.create_access_token(
        uuid.uuid4(), "ana@fittingz.io", "business", expires_delta=timedelta(seconds=-1)
    )
    with pytest.raises(UnauthorizedError):
        token_issuer.verify_token(token)


def test_tampered_token_is_rejected():
    token = token_issuer.create_access_token(uuid.uuid4(), "ana@fittingz.io", "business")
    forged = jwt.encode(
        jwt.get_unverified_claims(token) | {"role": "super_admin"},
        "wrong-secret",
        algorithm=token_issuer.JWT_ALGORITHM,
    )
    with pytest.raises(UnauthorizedError):
        token_issuer.verify_token(forged)


def test_reset_token_is_not_a_session_token():
    reset = token_issuer.create_reset_token(uuid.uuid4(), "ana@fittingz.io")
    with pytest.raises(UnauthorizedError):
        token_issuer.verify_token(reset)


def test_session_token_is_not_a_reset_token():
    session_token = token_issuer.create_access_token(uuid.uuid4(), "ana@fittingz.io", "business")
    with pytest.raises(UnauthorizedError):
        token_issuer.verify_reset_token(session_token)


def test_reset_token_with_wrong_purpose_is_rejected():
    settings = get_settings()
    token = token_issuer._encode(
        {"sub": str(uuid.uuid4()), "purpose": "email_change"},
        secret=settings.jwt_reset_secret,
        expires_delta=timedelta(minutes=5),
    )
    with pytest.raises(UnauthorizedError):
        token_issuer.verify_reset_token(token)


def test_expired_reset_token_is_rejected():
    token = token_issuer.create_reset_token(
        uuid.uuid4(), "ana@fittingz.io", expires_delta=timedelta(seconds=-1)
    )
    with pytest.raises(UnauthorizedError):
        token_issuer.verify_reset_token(token)


def test_password_hash_and_verify():
    hashed = hash_password("Sup3rSecret")
    assert hashed != "Sup3rSecret"
    assert verify_password("Sup3rSecret", hashed)
    assert not verify_password("sup3rsecret", hashed)
    assert not verify_password("Sup3rSecret", None)
    assert not verify_password("Sup3rSecret", "not-a-bcrypt-hash")


def test_verify_password_over_bcrypt_limit_is_false_without_error_log(caplog):
    hashed = hash_password("Sup3rSecret")
    with caplog.at_level(logging.ERROR, logger="app.auth.password"):
        assert not verify_password("A1" + "x" * 100, hashed)
    assert caplog.records == []
