"""Gmail API client for sending the digest and reminder emails."""

import base64
import logging
from email.mime.text import MIMEText

from googleapiclient.discovery import build

from .google_auth import get_credentials

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/gmail.send"]


def build_message(to: str, subject: str, body: str) -> dict[str, str]:
    """Encode a plain-text email in the shape the Gmail API expects."""
    message = MIMEText(body, "plain", "utf-8")
    message["to"] = to
    message["subject"] = subject
    raw = base64.urlsafe_b64encode(message.as_bytes()).decode("ascii")
    return {"raw": raw}


def send_email(to: str, subject: str, body: str, service=None) -> str:
    """Send an email from the authorized account, returning the message id."""
    if service is None:
        service = build("gmail", "v1", credentials=get_credentials(SCOPES, "token.json", "Gmail"))

    sent = (
        service.users()
        .messages()
        .send(userId="me", body=build_message(to, subject, body))
        .execute()
    )
    logger.info(f"Sent email '{subject}' to {to}")
    return sent.get("id", "")
