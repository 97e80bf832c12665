from datetime import timedelta

from sqlmodel import select

from app.auth import jwt as token_issuer
from app.model.account import Account
from app.model.base import utc_now
from tests.conftest import FIXED_CODE, STRONG_PASSWORD, registration_payload

API = "/api/v1/auth"


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}
    assert r.headers.get("X-Request-ID")


def test_request_id_is_echoed(client):
    r = client.get("/health", headers={"X-Request-ID": "abc-123"})
    assert r.headers["X-Request-ID"] == "abc-123"


def test_register_returns_camel_case_user_token_and_cookie(client, fixed_code):
    r = client.post(f"{API}/register", json=registration_payload("ada@fittingz.io"))
    assert r.status_code == 201
    body = r.json()
    assert body["message"] == "User registered successfully"
    assert body["tokenType"] == "bearer"
    user = body["user"]
    assert user["businessName"] == "Atelier Ada"
    assert user["isEmailVerified"] is False
    assert user["role"] == "business"
    assert "passwordHash" not in user
    assert "emailVerificationCode" not in user
    assert token_issuer.verify_token(body["accessToken"])["sub"] == user["id"]
    assert "auth_token" in r.cookies


def test_register_duplicate_is_409(client):
    assert client.post(f"{API}/register", json=registration_payload("ada@fittingz.io")).status_code == 201
    r = client.post(f"{API}/register", json=registration_payload("Ada@FITTINGZ.io"))
    assert r.status_code == 409
    assert r.json()["error"]["code"] == "CONFLICT"


def test_register_validation_errors_are_per_field(client):
    r = client.post(
        f"{API}/register",
        json=registration_payload("not-an-email", password="weak", businessName="A"),
    )
    assert r.status_code == 422
    error = r.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    fields = {d["field"] for d in error["details"]}
    assert {"email", "password", "businessName"} <= fields


def test_login_unverified_is_403_and_wrong_password_is_401(client):
    client.post(f"{API}/register", json=registration_payload("ada@fittingz.io"))

    r = client.post(f"{API}/login", json={"email": "ada@fittingz.io", "password": STRONG_PASSWORD})
    assert r.status_code == 403
    error = r.json()["error"]
    assert error["code"] == "EMAIL_NOT_VERIFIED"
    assert error["details"] == {"requiresVerification": True, "email": "ada@fittingz.io"}

    wrong = client.post(f"{API}/login", json={"email": "ada@fittingz.io", "password": "Wr0ngPass"})
    unknown = client.post(f"{API}/login", json={"email": "ghost@fittingz.io", "password": "Wr0ngPass"})
    assert wrong.status_code == unknown.status_code == 401
    assert wrong.json() == unknown.json()


def test_register_wrong_code_right_code_login(client, fixed_code):
    client.post(f"{API}/register", json=registration_payload("ada@fittingz.io"))

    r = client.post(f"{API}/verify-email", json={"email": "ada@fittingz.io", "code": "654321"})
    assert r.status_code == 400
    assert r.json()["error"]["message"] == "Invalid or expired verification code"

    r = client.post(f"{API}/verify-email", json={"email": "ada@fittingz.io", "code": fixed_code})
    assert r.status_code == 200
    assert r.json() == {"message": "Email verified successfully"}

    r = client.post(f"{API}/login", json={"email": "ada@fittingz.io", "password": STRONG_PASSWORD})
    assert r.status_code == 200
    body = r.json()
    assert body["message"] == "Login successful"
    assert body["user"]["isEmailVerified"] is True
    assert body["user"]["lastLoginAt"] is not None


def test_verify_email_code_must_be_six_digits(client):
    r = client.post(f"{API}/verify-email", json={"email": "ada@fittingz.io", "code": "12ab56"})
    assert r.status_code == 422


def test_verify_email_expired_code(client, session, fixed_code):
    client.post(f"{API}/register", json=registration_payload("ada@fittingz.io"))
    account = session.exec(select(Account)).one()
    account.set_verification_code(fixed_code, utc_now() - timedelta(minutes=1))
    session.add(account)
    session.commit()

    r = client.post(f"{API}/verify-email", json={"email": "ada@fittingz.io", "code": fixed_code})
    assert r.status_code == 400


def test_resend_verification_always_200(client, fixed_code):
    unknown = client.post(f"{API}/resend-verification", json={"email": "ghost@fittingz.io"})
    assert unknown.status_code == 200
    assert unknown.json()["sent"] is True

    client.post(f"{API}/register", json=registration_payload("ada@fittingz.io"))
    known = client.post(f"{API}/resend-verification", json={"email": "ada@fittingz.io"})
    assert known.status_code == 200
    assert known.json() == unknown.json()

    client.post(f"{API}/verify-email", json={"email": "ada@fittingz.io", "code": fixed_code})
    verified = client.post(f"{API}/resend-verification", json={"email": "ada@fittingz.io"})
    assert verified.status_code == 200
    assert verified.json() == {"message": "Email is already verified", "sent": False}


def test_forgot_password_identical_for_known_and_unknown(client, session):
    client.post(f"{API}/register", json=registration_payload("ada@fittingz.io"))

    known = client.post(f"{API}/forgot-password", json={"email": "ada@fittingz.io"})
    unknown = client.post(f"{API}/forgot-password", json={"email": "ghost@fittingz.io"})
    assert known.status_code == unknown.status_code == 200
    assert known.json() == unknown.json()

    emails = [a.email for a in session.exec(select(Account)).all()]
    assert emails == ["ada@fittingz.io"]


def test_full_password_reset_over_http(client, verified_account, fixed_code):
    verified_account("ada@fittingz.io")

    client.post(f"{API}/forgot-password", json={"email": "ada@fittingz.io"})
    r = client.post(f"{API}/verify-reset-code", json={"email": "ada@fittingz.io", "code": fixed_code})
    assert r.status_code == 200
    reset_token = r.json()["resetToken"]

    # Token de reset não vale como sessão
    client.cookies.clear()
    r = client.get(f"{API}/profile", headers={"Authorization": f"Bearer {reset_token}"})
    assert r.status_code == 401

    r = client.post(f"{API}/reset-password", json={"resetToken": reset_token, "newPassword": "N3wPassword"})
    assert r.status_code == 200
    assert r.json() == {"message": "Password reset successfully"}

    assert client.post(f"{API}/login", json={"email": "ada@fittingz.io", "password": "N3wPassword"}).status_code == 200
    assert client.post(f"{API}/login", json={"email": "ada@fittingz.io", "password": STRONG_PASSWORD}).status_code == 401


def test_reset_password_rejects_bad_tokens_and_weak_passwords(client):
    r = client.post(f"{API}/reset-password", json={"resetToken": "garbage", "newPassword": "N3wPassword"})
    assert r.status_code == 400
    assert r.json()["error"]["message"] == "Invalid or expired reset token"

    r = client.post(f"{API}/reset-password", json={"resetToken": "garbage", "newPassword": "weak"})
    assert r.status_code == 422


def test_profile_requires_token(client):
    client.cookies.clear()
    r = client.get(f"{API}/profile")
    assert r.status_code == 401
    assert r.json()["error"]["message"] == "Access token required"


def test_profile_via_cookie_update_and_logout(client, verified_account):
    verified_account("ada@fittingz.io")

    # Cookie do login autentica sem header
    r = client.get(f"{API}/profile")
    assert r.status_code == 200
    assert r.json()["user"]["email"] == "ada@fittingz.io"

    r = client.put(f"{API}/profile", json={"businessName": "Ada Couture"})
    assert r.status_code == 200
    assert r.json()["user"]["businessName"] == "Ada Couture"
    assert r.json()["user"]["address"] == "12 Marina Road, Lagos"

    r = client.post(f"{API}/logout")
    assert r.status_code == 200
    assert client.get(f"{API}/profile").status_code == 401


def test_delete_account_removes_it(client, session, verified_account):
    _, headers = verified_account("ada@fittingz.io")

    r = client.delete(f"{API}/account", headers=headers)
    assert r.status_code == 200
    assert session.exec(select(Account)).all() == []

    # Token ainda assinado, mas a conta não existe mais
    assert client.get(f"{API}/profile", headers=headers).status_code == 404


def test_login_with_very_long_password_is_plain_401(client, verified_account):
    verified_account("ada@fittingz.io")
    r = client.post(f"{API}/login", json={"email": "ada@fittingz.io", "password": "A1" + "x" * 200})
    assert r.status_code == 401
    assert r.json()["error"]["message"] == "Invalid credentials"
