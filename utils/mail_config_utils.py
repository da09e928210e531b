import logging
import smtplib
from email.message import EmailMessage
from typing import Optional
from fastapi_mail import ConnectionConfig
from pydantic import ValidationError
from Schema.leave_management_schema import LeaveApplicationCreate, WIRE_DATE_SUFFIX
from utils.app_config import MailSettings
from utils.exceptions import MailConfigurationError

logger = logging.getLogger(__name__)

MAIL_SUBJECT = "Leaves"
SMTP_TIMEOUT = 30


def build_connection_config(settings: MailSettings) -> ConnectionConfig:
    try:
        return ConnectionConfig(
            MAIL_USERNAME=settings.username,
            MAIL_PASSWORD=settings.password,
            MAIL_FROM=settings.mail_from,
            MAIL_PORT=settings.port,
            MAIL_SERVER=settings.server,
            MAIL_STARTTLS=settings.starttls,
            MAIL_SSL_TLS=settings.ssl_tls,
            USE_CREDENTIALS=True,
            VALIDATE_CERTS=True,
        )
    except ValidationError as exc:
        raise MailConfigurationError(f"Invalid email configuration: {exc}") from exc


def leave_submitted_message(draft: LeaveApplicationCreate) -> str:
    return (
        "Leave application submitted successfully.\n\n"
        f"Start Date: {draft.start_date.isoformat()}{WIRE_DATE_SUFFIX}\n"
        f"End Date: {draft.end_date.isoformat()}{WIRE_DATE_SUFFIX}\n"
        f"Leave Type: {draft.leave_type}\n"
        f"Reason: {draft.reason}\n"
        f"Status: {draft.status}\n"
    )


def leave_decision_message(status: str, custom_message: str = "") -> str:
    return f"Leave has been {status} by your manager.\n\n{custom_message}"


def send_leave_email(settings: Optional[MailSettings], body: str) -> bool:
    """Send a plain-text notification. Failures are logged and reported as False, never raised."""
    if settings is None:
        logger.info("Email notifications are disabled; skipping message")
        return False

    recipient = settings.mail_to
    try:
        conf = build_connection_config(settings)
    except MailConfigurationError:
        logger.exception("Cannot send email")
        return False

    msg = EmailMessage()
    msg['Subject'] = MAIL_SUBJECT
    msg['From'] = str(conf.MAIL_FROM)
    msg['To'] = recipient
    msg.set_content(body + "\n")

    smtp_class = smtplib.SMTP_SSL if conf.MAIL_SSL_TLS else smtplib.SMTP
    try:
        logger.info("Sending mail", extra={"recipient": recipient})
        with smtp_class(conf.MAIL_SERVER, conf.MAIL_PORT, timeout=SMTP_TIMEOUT) as smtp:
            if conf.MAIL_STARTTLS and not conf.MAIL_SSL_TLS:
                smtp.starttls()
            if conf.USE_CREDENTIALS:
                smtp.login(conf.MAIL_USERNAME, conf.MAIL_PASSWORD.get_secret_value())
            smtp.send_message(msg)
    except (smtplib.SMTPException, OSError):
        logger.exception("Failed to send email", extra={"recipient": recipient})
        return False

    logger.info("Sent message successfully", extra={"recipient": recipient})
    return True
