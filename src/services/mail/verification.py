import html
import smtplib
from concurrent.futures import Future, ThreadPoolExecutor
from email.message import EmailMessage
from typing import Optional
from src.core.configs import settings
from src.utils.logging import get_logger

logger = get_logger(__name__)

SUBJECT = "Verify Your Email - Animal Management System"

_executor = ThreadPoolExecutor(
    max_workers=settings.mail_workers, thread_name_prefix="mail"
)


def verification_url(token: str) -> str:
    return f"{settings.frontend_url.rstrip('/')}/verify-email/{token}"


def build_verification_message(email: str, token: str, name: str) -> EmailMessage:
    url = verification_url(token)
    safe_name = html.escape(name)

    message = EmailMessage()
    message["Subject"] = SUBJECT
    message["From"] = settings.email_user or "no-reply@localhost"
    message["To"] = email
    message.set_content(
        f"Welcome {name}!\n\n"
        f"Please verify your email address by opening this link:\n{url}\n\n"
        "This link will expire in 24 hours."
    )
    message.add_alternative(
        f"""
        <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
          <h2>Welcome {safe_name}!</h2>
          <p>Thank you for registering with Animal Management System.</p>
          <p>Please click the link below to verify your email address:</p>
          <a href="{url}" style="display: inline-block; padding: 10px 20px; background-color: #4CAF50; color: white; text-decoration: none; border-radius: 5px; margin: 20px 0;">
            Verify Email
          </a>
          <p>Or copy and paste this URL into your browser:</p>
          <p style="word-break: break-all;">{url}</p>
          <p>This link will expire in {settings.verification_token_expire_hours} hours.</p>
        </div>
        """,
        subtype="html",
    )
    return message


def deliver(message: EmailMessage) -> None:
    with smtplib.SMTP(settings.email_host, settings.email_port, timeout=30) as smtp:
        if settings.email_use_tls:
            smtp.starttls()
        if settings.email_user and settings.email_pass:
            smtp.login(settings.email_user, settings.email_pass)
        smtp.send_message(message)


def _log_outcome(future: Future, email: str) -> None:
    error = future.exception()
    if error is not None:
        logger.error(f"Error sending verification email to {email}: {error}")
    else:
        logger.info(f"Verification email sent to {email}")


def send_verification_email(email: str, token: str, name: str) -> Optional[Future]:
    """
    Queue the verification e-mail and return immediately.

    Delivery runs on a small worker pool; failures are logged and never
    reach the caller.

    Returns:
        Future or None: None when SMTP is not configured or the app is
            shutting down, so nothing was queued
    """
    if not settings.email_user:
        logger.warning(f"SMTP not configured, skipping verification email to {email}")
        return None

    message = build_verification_message(email, token, name)
    try:
        future = _executor.submit(deliver, message)
    except RuntimeError:
        logger.warning(f"Mail executor is shut down, dropping verification email to {email}")
        return None
    future.add_done_callback(lambda done: _log_outcome(done, email))
    return future


def shutdown_mail_executor() -> None:
    """Stop accepting mail and drop anything still queued; called on app shutdown."""
    _executor.shutdown(wait=False, cancel_futures=True)
