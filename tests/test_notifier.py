import logging

from fastapi import BackgroundTasks

from app.services import email_service
from app.services.notifier import Notifier


def test_send_email_without_api_key_is_simulated(caplog):
    with caplog.at_level(logging.INFO, logger="app.services.email_service"):
        success, error = email_service.send_verification_email("ada@fittingz.io", "Atelier Ada", "123456")
    assert success is False
    assert error
    assert "[EMAIL SIMULATION]" in caplog.text


def test_templates_include_code_and_expiry():
    subject, html, text = email_service.build_verification_email("Atelier Ada", "654321")
    assert "Verification" in subject
    assert "654321" in html and "654321" in text
    assert "10 minutes" in text

    _, html, text = email_service.build_password_reset_email("Atelier Ada", "111222")
    assert "111222" in html and "15 minutes" in text


def test_notifier_swallows_delivery_exceptions(monkeypatch, caplog):
    def boom(*args):
        raise RuntimeError("provider down")

    monkeypatch.setattr(email_service, "send_verification_email", boom)
    with caplog.at_level(logging.ERROR, logger="app.services.notifier"):
        Notifier().verification_code("ada@fittingz.io", "Atelier Ada", "123456")
    assert "provider down" in caplog.text


def test_notifier_schedules_background_task(monkeypatch):
    calls = []
    monkeypatch.setattr(
        email_service, "send_welcome_email", lambda to, name: calls.append((to, name)) or (True, "")
    )
    tasks = BackgroundTasks()
    Notifier(tasks).welcome("ada@fittingz.io", "Atelier Ada")

    assert calls == []
    assert len(tasks.tasks) == 1
    task = tasks.tasks[0]
    task.func(*task.args, **task.kwargs)
    assert calls == [("ada@fittingz.io", "Atelier Ada")]


def test_templates_escape_business_name():
    name = '<script>alert("x")</script> & Co'
    for subject, html_body, text in (
        email_service.build_verification_email(name, "123456"),
        email_service.build_password_reset_email(name, "123456"),
        email_service.build_welcome_email(name),
    ):
        assert "<script>" not in html_body
        assert "&lt;script&gt;" in html_body
        assert "&amp; Co" in html_body
        assert name in text
