"""
Outbound SMS, WhatsApp and email.
Twilio and Resend are called over their REST APIs with httpx.
"""
from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

import httpx
from fastapi import Depends
from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup

from kurstakip.config import Settings, settings as default_settings
from kurstakip.errors import ProviderError, ProviderNotConfigured
from kurstakip.logging_config import sanitize

logger = logging.getLogger(__name__)

templates = Environment(
    loader=FileSystemLoader(Path(__file__).resolve().parent.parent / "templates"),
    autoescape=select_autoescape(["html"]),
)

NAME_PLACEHOLDER = "{{ogrenci_adi}}"
DEFAULT_RECIPIENT_NAME = "Değerli Öğrenci"


def personalize(message: str, name: Optional[str]) -> str:
    return message.replace(NAME_PLACEHOLDER, name or DEFAULT_RECIPIENT_NAME)


def render_email(message: str, student_name: Optional[str], institute_name: str) -> str:
    safe_name = student_name.replace("<", "").replace(">", "") if student_name else None
    safe_message = message.replace("<", "&lt;").replace(">", "&gt;").replace("\n", "<br>")
    return templates.get_template("email.html").render(
        institute_name=institute_name,
        student_name=safe_name,
        message=Markup(safe_message),
        year=datetime.now().year,
    )


class Messenger:
    def __init__(self, config: Settings = default_settings, timeout: float = 15.0):
        self.config = config
        self.timeout = timeout

    # --- configuration -----------------------------------------------------

    @property
    def twilio_ready(self) -> bool:
        return bool(self.config.twilio_account_sid and self.config.twilio_auth_token)

    def require_twilio(self, channel: str) -> None:
        if not self.twilio_ready:
            raise ProviderNotConfigured("Twilio")
        if channel == "sms" and not self.config.twilio_phone_number:
            raise ProviderNotConfigured("Twilio SMS number")

    def require_resend(self) -> None:
        if not self.config.resend_api_key:
            raise ProviderNotConfigured("Resend")

    def sender_for(self, channel: str) -> str:
        sender = (
            self.config.twilio_whatsapp_number if channel == "whatsapp"
            else self.config.twilio_phone_number
        )
        if not sender:
            raise ProviderNotConfigured(f"{channel} number")
        return sender

    # --- sending -----------------------------------------------------------

    async def send_text(self, channel: str, to: str, body: str) -> Dict[str, Any]:
        """Sends one SMS or WhatsApp message; `to` must already be in international form."""
        self.require_twilio(channel)
        sender = self.sender_for(channel)
        if channel == "whatsapp":
            to = f"whatsapp:{to}"
            if not sender.startswith("whatsapp:"):
                sender = f"whatsapp:{sender}"

        url = f"{self.config.twilio_api_url}/Accounts/{self.config.twilio_account_sid}/Messages.json"
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            try:
                response = await client.post(
                    url,
                    data={"To": to, "From": sender, "Body": body},
                    auth=(self.config.twilio_account_sid, self.config.twilio_auth_token),
                )
            except httpx.HTTPError as exc:
                logger.error("Twilio request failed: %s", exc)
                raise ProviderError(f"{channel} message could not be sent") from exc

        data = _json(response)
        if response.status_code >= 400:
            logger.error("Twilio rejected %s message: %s", channel, sanitize(data))
            raise ProviderError(data.get("message") or f"{channel} message could not be sent")
        return {"message_id": data.get("sid"), "status": data.get("status")}

    async def send_email(
        self, to: str, subject: Optional[str], message: str, student_name: Optional[str] = None
    ) -> Dict[str, Any]:
        self.require_resend()
        html = render_email(message, student_name, self.config.institute_name)
        payload = {
            "from": self.config.email_from,
            "to": [to],
            "subject": subject or f"{self.config.institute_name} Bilgilendirme",
            "html": html,
        }
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            try:
                response = await client.post(
                    self.config.resend_api_url,
                    json=payload,
                    headers={"Authorization": f"Bearer {self.config.resend_api_key}"},
                )
            except httpx.HTTPError as exc:
                logger.error("Resend request failed: %s", exc)
                raise ProviderError("Email could not be sent") from exc

        data = _json(response)
        if response.status_code >= 400:
            logger.error("Resend rejected email: %s", sanitize(data))
            raise ProviderError(data.get("message") or "Email could not be sent")
        return {"message_id": data.get("id"), "status": "sent"}


def _json(response: httpx.Response) -> Dict[str, Any]:
    try:
        return response.json()
    except ValueError:
        return {}


def get_messenger() -> Messenger:
    return Messenger()


def twilio_messenger(channel: str):
    """Dependency that rejects the request early when Twilio cannot send on `channel`."""
    def dependency(messenger: Messenger = Depends(get_messenger)) -> Messenger:
        messenger.require_twilio(channel)
        return messenger
    return dependency


def resend_messenger(messenger: Messenger = Depends(get_messenger)) -> Messenger:
    messenger.require_resend()
    return messenger
