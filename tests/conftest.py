# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# Variáveis de ambiente precisam existir ANTES de importar app.config, que
# lê o ambiente uma única vez (get_settings em cache).
# =============================================================================

import os

os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-jwt-secret"
os.environ["JWT_RESET_SECRET"] = "test-jwt-reset-secret"
os.environ["BCRYPT_ROUNDS"] = "10"
os.environ["CACHE_BACKEND"] = "none"
# Sem chave: emails ficam em modo simulação (sobrescreve um .env local)
os.environ["RESEND_API_KEY"] = ""
os.environ["EMAIL_FROM"] = ""

import pytest
from fastapi.testclient import TestClient

from app.db.session import create_tables, drop_tables, engine
from app.main import app
from app.services import code_service
from sqlmodel import Session

FIXED_CODE = "123456"
STRONG_PASSWORD = "Sup3rSecret"


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture(autouse=True)
def _database():
    """Banco SQLite em memória recriado a cada teste."""
    drop_tables()
    create_tables()
    yield
    drop_tables()


@pytest.fixture
def session():
    with Session(engine) as s:
        yield s


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def fixed_code(monkeypatch):
    """Torna o gerador determinístico: todo código emitido é FIXED_CODE."""
    monkeypatch.setattr(code_service, "generate_code", lambda: FIXED_CODE)
    return FIXED_CODE


def registration_payload(email: str, **overrides) -> dict:
    payload = {
        "businessName": "Atelier Ada",
        "email": email,
        "password": STRONG_PASSWORD,
        "contactNumber": "+2348012345678",
        "address": "12 Marina Road, Lagos",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def verified_account(client, fixed_code):
    """
    Registra, verifica e faz login; retorna uma função que devolve
    (account_id, headers) para o email informado.
    """

    def _make(email: str = "owner@fittingz.io") -> tuple[str, dict]:
        r = client.post("/api/v1/auth/register", json=registration_payload(email))
        assert r.status_code == 201, r.text
        r = client.post("/api/v1/auth/verify-email", json={"email": email, "code": fixed_code})
        assert r.status_code == 200, r.text
        r = client.post("/api/v1/auth/login", json={"email": email, "password": STRONG_PASSWORD})
        assert r.status_code == 200, r.text
        body = r.json()
        return body["user"]["id"], {"Authorization": f"Bearer {body['accessToken']}"}

    return _make
