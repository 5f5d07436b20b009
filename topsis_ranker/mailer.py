import logging
import re
import smtplib
from email.message import EmailMessage

from .errors import EmailDeliveryError

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[\w\.\+-]+@[\w\.-]+\.\w+$")
SUBJECT = "TOPSIS Analysis Complete"


def is_valid_email(email):
    return bool(email) and EMAIL_PATTERN.match(email) is not None


def _deliver(msg, config):
    sender_email = config.get("SENDER_EMAIL")
    sender_password = config.get("SENDER_PASSWORD")
    if not sender_email or not sender_password:
        raise EmailDeliveryError("Email is not configured. Set SENDER_EMAIL and SENDER_PASSWORD.")

    msg["From"] = sender_email
    try:
        with smtplib.SMTP_SSL(config["SMTP_HOST"], config["SMTP_PORT"]) as server:
            server.login(sender_email, sender_password)
            server.send_message(msg)
    except (smtplib.SMTPException, OSError) as exc:
        raise EmailDeliveryError(f"Failed to send email: {exc}") from exc
    logger.info("Sent %r to %s", msg["Subject"], msg["To"])


def send_result_email(to_email, csv_text, config, best=None, filename="topsis_results.csv"):
    """Mail the ranked CSV as an attachment."""
    msg = EmailMessage()
    msg["Subject"] = SUBJECT
    msg["To"] = to_email

    body = "Your TOPSIS analysis is complete. The ranked result file is attached."
    if best is not None:
        body += f"\n\nTop ranked alternative: {best}"
    msg.set_content(body)
    msg.add_attachment(
        csv_text.encode("utf-8"),
        maintype="text",
        subtype="csv",
        filename=filename,
    )
    _deliver(msg, config)


def send_html_email(to_email, html, config):
    msg = EmailMessage()
    msg["Subject"] = SUBJECT
    msg["To"] = to_email
    msg.set_content("Your TOPSIS analysis is complete.")
    msg.add_alternative(html, subtype="html")
    _deliver(msg, config)
