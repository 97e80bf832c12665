"""
Despacho best-effort de notificações (emails) disparadas pelos fluxos de conta.

Com um ``BackgroundTasks`` do FastAPI o envio roda depois da resposta; sem ele
roda inline.  Em ambos os casos falhas são logadas e nunca chegam ao chamador.
"""
import logging
from typing import Callable, Optional, Tuple

from fastapi import BackgroundTasks

from app.services import email_service

logger = logging.getLogger(__name__)

SendFn = Callable[..., Tuple[bool, str]]


def _deliver(kind: str, to_email: str, send: SendFn, *args) -> None:
    try:
        success, error_message = send(to_email, *args)
    except Exception as e:
        logger.error(f"[NOTIFY] Falha inesperada ao enviar '{kind}' para {to_email}: {e}", exc_info=True)
        return
    if not success:
        logger.warning(f"[NOTIFY] '{kind}' não entregue para {to_email}: {error_message}")


class Notifier:
    def __init__(self, background_tasks: Optional[BackgroundTasks] = None):
        self.background_tasks = background_tasks

    def _dispatch(self, kind: str, to_email: str, send: SendFn, *args) -> None:
        if self.background_tasks is not None:
            self.background_tasks.add_task(_deliver, kind, to_email, send, *args)
        else:
            _deliver(kind, to_email, send, *args)

    def verification_code(self, to_email: str, business_name: str, code: str) -> None:
        self._dispatch("verification", to_email, email_service.send_verification_email, business_name, code)

    def password_reset_code(self, to_email: str, business_name: str, code: str) -> None:
        self._dispatch("password_reset", to_email, email_service.send_password_reset_email, business_name, code)

    def welcome(self, to_email: str, business_name: str) -> None:
        self._dispatch("welcome", to_email, email_service.send_welcome_email, business_name)
