"""Outbound WhatsApp messages through the Twilio REST API."""
import logging
from typing import Callable, Optional

import requests

from errors import ConfigurationError
from settings import Settings


logger = logging.getLogger(__name__)

TWILIO_API_URL = "https://api.twilio.com/2010-04-01"
WHATSAPP_PREFIX = "whatsapp:"


def with_whatsapp_prefix(address: str) -> str:
    address = address.strip()
    return address if address.startswith(WHATSAPP_PREFIX) else f"{WHATSAPP_PREFIX}{address}"


def strip_whatsapp_prefix(address: Optional[str]) -> str:
    address = (address or "").strip()
    if address.startswith(WHATSAPP_PREFIX):
        return address[len(WHATSAPP_PREFIX):]
    return address


class TwilioMessenger:
    """Sends text messages from the configured WhatsApp sender number.

    Each send opens its own session, so one messenger can serve the
    webhook's worker threads.
    """

    def __init__(
        self,
        settings: Settings,
        session_factory: Callable[[], requests.Session] = requests.Session,
    ):
        missing = [
            name
            for name, value in (
                ("TWILIO_ACCOUNT_SID", settings.twilio_account_sid),
                ("TWILIO_AUTH_TOKEN", settings.twilio_auth_token),
                ("TWILIO_WHATSAPP_NUMBER", settings.twilio_whatsapp_number),
            )
            if not value
        ]
        if missing:
            raise ConfigurationError(f"Twilio not configured; missing: {', '.join(missing)}")

        self.account_sid = settings.twilio_account_sid
        self.auth = (settings.twilio_account_sid, settings.twilio_auth_token)
        self.from_number = with_whatsapp_prefix(settings.twilio_whatsapp_number)
        self.timeout = settings.twilio_timeout
        self._session_factory = session_factory

    @property
    def messages_url(self) -> str:
        return f"{TWILIO_API_URL}/Accounts/{self.account_sid}/Messages.json"

    def send(self, to: str, body: str) -> bool:
        """Send `body` to `to`. Returns False (after logging) on any failure."""
        to_number = with_whatsapp_prefix(to)
        session = self._session_factory()
        session.auth = self.auth
        try:
            response = session.post(
                self.messages_url,
                data={"From": self.from_number, "To": to_number, "Body": body},
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.error(f"Failed to send WhatsApp message to {to_number}: {exc}")
            return False
        finally:
            session.close()

        if not response.ok:
            logger.error(
                f"Failed to send WhatsApp message to {to_number}: "
                f"{response.status_code} {response.text[:200]}"
            )
            return False

        logger.info(f"WhatsApp message sent to {to_number}")
        return True


__all__ = ["TwilioMessenger", "with_whatsapp_prefix", "strip_whatsapp_prefix"]
