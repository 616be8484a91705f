import httpx
from app.core.errors import UpstreamError
from typing import List, Optional
import logging

logger = logging.getLogger(__name__)


class ResendEmailClient:
    """Thin async client for the Resend transactional email API. No retries."""

    def __init__(
        self,
        api_key: str,
        api_url: str = "https://api.resend.com/emails",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.api_url = api_url
        self.timeout = timeout
        self.transport = transport

    async def send(self, sender: str, to: List[str], subject: str, html: str) -> Optional[str]:
        """Send one email and return the provider message id"""
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(
                    self.api_url,
                    json={"from": sender, "to": to, "subject": subject, "html": html},
                    headers={"Authorization": f"Bearer {self.api_key}"},
                )
        except httpx.HTTPError as e:
            logger.error(f"Email provider unreachable: {e}")
            raise UpstreamError(f"Email provider request failed: {e}")

        if response.status_code >= 400:
            message = _provider_message(response)
            logger.error(f"Email provider rejected message ({response.status_code}): {message}")
            raise UpstreamError(message)

        try:
            body = response.json()
        except ValueError:
            logger.warning(f"Email accepted ({response.status_code}) without a readable id")
            return None
        return body.get("id") if isinstance(body, dict) else None


def _provider_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if not isinstance(body, dict):
        return response.text or f"Email provider returned {response.status_code}"
    return body.get("message") or body.get("error") or f"Email provider returned {response.status_code}"
