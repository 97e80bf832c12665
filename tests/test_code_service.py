from datetime import datetime, timezone

from app.services import code_service


def test_generate_code_is_six_digits():
    for _ in range(200):
        code = code_service.generate_code()
        assert len(code) == 6
        assert code.isdigit()


def test_generate_code_keeps_leading_zeros(monkeypatch):
    monkeypatch.setattr(code_service.secrets, "randbelow", lambda n: 42)
    assert code_service.generate_code() == "000042"


def test_issue_code_expiry_is_exactly_now_plus_ttl():
    now = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)
    _, expires_at = code_service.issue_code(code_service.VERIFICATION_CODE_TTL, now=now)
    assert expires_at == datetime(2026, 1, 1, 12, 10, tzinfo=timezone.utc)

    _, expires_at = code_service.issue_code(code_service.RESET_CODE_TTL, now=now)
    assert expires_at == datetime(2026, 1, 1, 12, 15, tzinfo=timezone.utc)


def test_code_matches_is_exact():
    assert code_service.code_matches("123456", "123456")
    assert not code_service.code_matches("123456", "123457")
    assert not code_service.code_matches("123456", " 123456")
    assert not code_service.code_matches(None, "123456")
    assert not code_service.code_matches("", "")
