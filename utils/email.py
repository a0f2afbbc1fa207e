# utils/email.py
import html
import logging
import os

import requests

logger = logging.getLogger(__name__)

BREVO_URL = "https://api.brevo.com/v3/smtp/email"
BREVO_KEY = os.getenv("BREVO_API_KEY")
SENDER_NAME = os.getenv("NOTICE_SENDER_NAME", "Property Management")
SENDER_EMAIL = os.getenv("NOTICE_SENDER_EMAIL", "noreply@example.com")


def send_notice_email(to_email: str, subject: str, content: str):
     """Deliver a generated notice through Brevo's transactional e-mail API."""
     if not BREVO_KEY:
          raise RuntimeError("BREVO_API_KEY is not set")

     body = html.escape(content).replace("\n", "<br>")
     response = requests.post(
          BREVO_URL,
          headers={
               "api-key": BREVO_KEY,
               "Content-Type": "application/json",
          },
          json={
               "sender": {"name": SENDER_NAME, "email": SENDER_EMAIL},
               "to": [{"email": to_email}],
               "subject": subject,
               "htmlContent": f"<div style=\"font-family:serif\">{body}</div>",
          },
          timeout=10,
     )
     if response.status_code not in (200, 201, 202):
          raise RuntimeError(f"Brevo error: {response.text}")
     logger.info("Notice e-mail sent to %s", to_email)
