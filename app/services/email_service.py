"""
Serviço de envio de emails usando Resend.
Faz fallback para modo "log" (simulação) quando RESEND_API_KEY/EMAIL_FROM não estão configurados.
"""
import html
import logging
from typing import Tuple

import resend

from app.config import get_settings

logger = logging.getLogger(__name__)


def _wrap_html(app_name: str, title: str, body: str) -> str:
    return f"""
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{title}</title>
</head>
<body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333; max-width: 600px; margin: 0 auto; padding: 20px;">
    <h1 style="color: #333;">{title}</h1>
    {body}
    <p>Best regards,<br><strong>The {app_name} Team</strong></p>
    <div style="border-top: 1px solid #dee2e6; padding-top: 20px; margin-top: 30px; font-size: 12px; color: #6c757d;">
        <p style="margin: 0;">This is an automated message from {app_name}. Please do not reply.</p>
    </div>
</body>
</html>
    """.strip()


def _code_block(code: str, color: str, background: str) -> str:
    return f"""
    <div style="text-align: center; margin: 30px 0;">
        <div style="background-color: {background}; border: 2px dashed {color}; padding: 20px; border-radius: 10px; display: inline-block;">
            <span style="font-size: 32px; font-weight: bold; color: {color}; letter-spacing: 8px;">{code}</span>
        </div>
    </div>"""


def build_verification_email(business_name: str, code: str) -> Tuple[str, str, str]:
    """Retorna (assunto, html, texto) do email com o código de verificação."""
    app_name = get_settings().app_name
    safe_name = html.escape(business_name)
    subject = f"Your {app_name} Verification Code"
    html_body = _wrap_html(
        app_name,
        "Verify Your Email",
        f"""
    <p>Hi {safe_name},</p>
    <p>Please use the following 6-digit code to verify your email address:</p>
    {_code_block(code, "#007bff", "#f8f9fa")}
    <p><small>This code expires in 10 minutes for security.</small></p>
    <p>If you didn't request this verification, please ignore this email.</p>""",
    )
    text = (
        f"Hi {business_name},\n\n"
        f"Your verification code is: {code}\n\n"
        "This code expires in 10 minutes.\n"
        "If you didn't request this verification, please ignore this email."
    )
    return subject, html_body, text


def build_password_reset_email(business_name: str, code: str) -> Tuple[str, str, str]:
    """Retorna (assunto, html, texto) do email com o código de reset de senha."""
    app_name = get_settings().app_name
    safe_name = html.escape(business_name)
    subject = f"Reset Your {app_name} Password"
    html_body = _wrap_html(
        app_name,
        "Password Reset Request",
        f"""
    <p>Hi {safe_name},</p>
    <p>You requested to reset your password. Use the following 6-digit code:</p>
    {_code_block(code, "#856404", "#fff3cd")}
    <p><small>This code expires in 15 minutes for security.</small></p>
    <p><strong>If you didn't request this, please ignore this email and your password will remain unchanged.</strong></p>""",
    )
    text = (
        f"Hi {business_name},\n\n"
        f"Your password reset code is: {code}\n\n"
        "This code expires in 15 minutes.\n"
        "If you didn't request this, your password will remain unchanged."
    )
    return subject, html_body, text


def build_welcome_email(business_name: str) -> Tuple[str, str, str]:
    settings = get_settings()
    safe_name = html.escape(business_name)
    subject = f"Welcome to {settings.app_name}!"
    html_body = _wrap_html(
        settings.app_name,
        f"Welcome to {settings.app_name}, {safe_name}!",
        f"""
    <p>Thank you for joining our platform for fashion designers.</p>
    <p>You can now start managing your clients, measurements, and orders.</p>
    <div style="margin: 20px 0; padding: 15px; background-color: #f8f9fa; border-radius: 5px;">
        <p><strong>Next Steps:</strong></p>
        <ul>
            <li>Complete your profile setup</li>
            <li>Add your first client</li>
            <li>Start taking measurements</li>
        </ul>
    </div>
    <p><a href="{settings.app_url}">{settings.app_url}</a></p>""",
    )
    text = (
        f"Welcome to {settings.app_name}, {business_name}!\n\n"
        "You can now start managing your clients, measurements, and orders.\n"
        f"{settings.app_url}"
    )
    return subject, html_body, text


def send_email(to_email: str, subject: str, html_body: str, text_body: str) -> Tuple[bool, str]:
    """
    Envia um email via Resend.

    Returns:
        Tupla (success, error_message). Sem configuração, o envio é simulado:
        o email é logado e retorna (False, motivo), nunca sucesso silencioso.
    """
    settings = get_settings()

    if not settings.resend_api_key:
        logger.info(f"[EMAIL SIMULATION] To: {to_email}, Subject: {subject}")
        return False, "RESEND_API_KEY não configurada; email apenas logado."

    if not settings.email_from:
        logger.error(f"[EMAIL] EMAIL_FROM não configurado. Email NÃO enviado para {to_email}")
        return False, "EMAIL_FROM não configurado."

    resend.api_key = settings.resend_api_key
    params = {
        "from": settings.email_from,
        "to": [to_email],
        "subject": subject,
        "html": html_body,
        "text": text_body,
    }
    try:
        email_response = resend.Emails.send(params)
    except Exception as resend_error:
        error_msg = str(resend_error)
        # Remover possíveis vazamentos de API key
        if settings.resend_api_key in error_msg:
            error_msg = error_msg.replace(settings.resend_api_key, "***REDACTED***")
        logger.error(f"[EMAIL] FALHA ao enviar email via Resend para {to_email}: {error_msg}")
        return False, f"Erro ao enviar email: {error_msg[:100]}"

    # Resend retorna um dict (ou objeto) com 'id' quando bem-sucedido
    email_id = None
    if isinstance(email_response, dict):
        email_id = email_response.get("id")
    elif email_response is not None:
        email_id = getattr(email_response, "id", None)

    if email_id:
        logger.info(f"[EMAIL] Enviado para {to_email} (id={email_id})")
        return True, ""

    logger.error(f"[EMAIL] Resposta inesperada do serviço de email para {to_email}: {email_response}")
    return False, "Resposta inesperada do serviço de email"


def send_verification_email(to_email: str, business_name: str, code: str) -> Tuple[bool, str]:
    subject, html_body, text = build_verification_email(business_name, code)
    return send_email(to_email, subject, html_body, text)


def send_password_reset_email(to_email: str, business_name: str, code: str) -> Tuple[bool, str]:
    subject, html_body, text = build_password_reset_email(business_name, code)
    return send_email(to_email, subject, html_body, text)


def send_welcome_email(to_email: str, business_name: str) -> Tuple[bool, str]:
    subject, html_body, text = build_welcome_email(business_name)
    return send_email(to_email, subject, html_body, text)
