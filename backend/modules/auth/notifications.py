"""
Outbound email through the Resend HTTP API.

The channel is optional: without an API key it reports itself as not
configured and the OTP issuer falls back to logging the code.
"""

import logging

import httpx

from .exceptions import NotificationDeliveryError

logger = logging.getLogger(__name__)

RESEND_API_URL = "https://api.resend.com/emails"


class ResendEmailChannel:
    """Sends HTML email via Resend."""

    def __init__(
        self,
        api_key: str,
        sender: str,
        timeout: float = 10.0,
        api_url: str = RESEND_API_URL,
    ):
        self._api_key = api_key
        self._sender = sender
        self._timeout = timeout
        self._api_url = api_url

    @property
    def is_configured(self) -> bool:
        return bool(self._api_key and self._sender)

    async def send(self, to: str, subject: str, html: str) -> None:
        """
        Send a single email.

        Raises:
            NotificationDeliveryError: On network errors or non-2xx responses
        """
        payload = {
            "from": self._sender,
            "to": [to],
            "subject": subject,
            "html": html,
        }
        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.post(self._api_url, json=payload, headers=headers)
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.warning(f"Resend rejected email: HTTP {e.response.status_code}")
            raise NotificationDeliveryError(f"HTTP {e.response.status_code}")
        except httpx.HTTPError as e:
            logger.warning(f"Resend request failed: {type(e).__name__}")
            raise NotificationDeliveryError(type(e).__name__)
