# utils/email.py
import os
from html import escape

import requests

BREVO_URL = "https://api.brevo.com/v3/smtp/email"
SENDER = {"name": "RentLedger", "email": "noreply@rentledger.app"}


def _brevo_key():
     return os.getenv("BREVO_API_KEY")


def email_delivery_enabled() -> bool:
     return bool(_brevo_key())


def send_notification_email(to_email: str, sender_name: str, sender_email: str, message: str):
     brevo_key = _brevo_key()
     if not brevo_key:
          raise RuntimeError("BREVO_API_KEY is not set")

     response = requests.post(
          BREVO_URL,
          headers={
               "api-key": brevo_key,
               "Content-Type": "application/json",
          },
          json={
               "sender": SENDER,
               "to": [{"email": to_email}],
               "replyTo": {"email": sender_email, "name": sender_name},
               "subject": f"New message from {sender_name}",
               "htmlContent": f"""
                    <h2>{escape(sender_name)} sent you a message</h2>
                    <p>{escape(message)}</p>
                    <p style="color:#888">Reply to {escape(sender_email)}.</p>
               """,
          },
          timeout=10,
     )
     if response.status_code not in (200, 201, 202):
          raise RuntimeError(f"Brevo error: {response.text}")
