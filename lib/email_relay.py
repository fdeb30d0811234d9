"""Client for the third-party email relay used to deliver notifications."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests

from lib.settings import DEFAULT_EMAIL_RELAY_URL, DEFAULT_REQUEST_TIMEOUT, AppSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EmailMessage:
    """A single notification addressed to one recipient."""

    to: str
    subject: str
    message: str


@dataclass
class EmailRelay:
    """Thin wrapper around the relay's JSON submit endpoint."""

    access_key: str
    api_url: str = DEFAULT_EMAIL_RELAY_URL
    timeout: Optional[float] = DEFAULT_REQUEST_TIMEOUT

    @classmethod
    def from_settings(cls, settings: AppSettings) -> "EmailRelay":
        return cls(
            access_key=settings.email_relay_access_key,
            api_url=settings.email_relay_url,
            timeout=settings.request_timeout,
        )

    def _headers(self) -> Dict[str, str]:
        """Build request headers for the relay API."""

        return {
            "Accept": "application/json",
            "Content-Type": "application/json",
        }

    def _payload(self, email: EmailMessage) -> Dict[str, Any]:
        return {
            "access_key": self.access_key,
            "to": email.to,
            "subject": email.subject,
            "message": email.message,
        }

    def send(self, email: EmailMessage) -> bool:
        """POST ``email`` to the relay and return ``True`` on an HTTP OK response."""

        try:
            response = requests.post(
                self.api_url,
                headers=self._headers(),
                json=self._payload(email),
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.warning("Email relay request for %r failed: %s", email.subject, exc)
            return False

        if not response.ok:
            logger.warning(
                "Email relay rejected %r with HTTP %s", email.subject, response.status_code
            )
            return False

        logger.info("Email relay accepted %r", email.subject)
        return True
