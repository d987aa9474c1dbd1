"""
Status Email Client

HTTP client that hands notification emails to a mail relay webhook.
Used when notifications.email.enabled is set in config.yaml.
"""

import logging

import httpx

logger = logging.getLogger(__name__)


class StatusMailer:
    """
    HTTP client for the mail relay.

    Sends are best-effort: send() reports success as a bool and never raises
    on transport or relay errors.
    """

    def __init__(self, webhook_url: str, timeout: int = 10):
        """
        Initialize the mailer.

        Args:
            webhook_url: Relay endpoint that accepts a JSON message
            timeout: Request timeout in seconds
        """
        self.webhook_url = webhook_url
        self.timeout = timeout
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client"""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=httpx.Timeout(self.timeout))
        return self._client

    async def close(self) -> None:
        """Close the HTTP client"""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def send(self, to: str, subject: str, body: str, link: str | None = None) -> bool:
        """
        Send one email through the relay.

        Returns:
            True if the relay accepted the message, False otherwise
        """
        payload = {"to": to, "subject": subject, "body": body}
        if link:
            payload["link"] = link

        try:
            client = await self._get_client()
            response = await client.post(self.webhook_url, json=payload)
            response.raise_for_status()
            return True
        except httpx.TimeoutException:
            logger.warning("Mail relay timed out after %ss sending to %s", self.timeout, to)
        except httpx.HTTPStatusError as e:
            logger.warning("Mail relay returned %s for %s", e.response.status_code, to)
        except httpx.HTTPError as e:
            logger.warning("Cannot reach mail relay at %s: %s", self.webhook_url, e)
        return False
