"""
Delivery clients for browser web push and legacy FCM.

Each delivery is independent and best effort: a failed or expired target is
reported in its DeliveryResult and never aborts the other deliveries.
"""

import asyncio
import httpx
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional
import json
import logging

logger = logging.getLogger(__name__)

# FCM error codes meaning the token will never work again
FCM_EXPIRED_ERRORS = {"NotRegistered", "InvalidRegistration", "MismatchSenderId"}


class DeliveryOutcome(str, Enum):
    DELIVERED = "delivered"
    EXPIRED = "expired"
    FAILED = "failed"


@dataclass
class DeliveryResult:
    target_id: Optional[str]
    outcome: DeliveryOutcome
    status_code: Optional[int] = None
    error: str = ""

    @property
    def delivered(self) -> bool:
        return self.outcome == DeliveryOutcome.DELIVERED


def classify_push_status(status_code: int) -> DeliveryOutcome:
    if 200 <= status_code < 300:
        return DeliveryOutcome.DELIVERED
    if status_code in (404, 410):
        return DeliveryOutcome.EXPIRED
    return DeliveryOutcome.FAILED


def _short(endpoint: str) -> str:
    return endpoint[:60] + "..." if len(endpoint) > 60 else endpoint


class WebPushClient:
    def __init__(
        self,
        ttl_seconds: int = 86400,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.ttl_seconds = ttl_seconds
        self.timeout = timeout
        self.transport = transport

    async def send_all(self, subscriptions: List[Dict[str, Any]], notification: Dict[str, Any]) -> List[DeliveryResult]:
        """POST the notification to every subscription endpoint concurrently"""
        if not subscriptions:
            return []
        payload = json.dumps(notification)
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            return list(await asyncio.gather(
                *(self._deliver(client, sub, payload) for sub in subscriptions)
            ))

    async def _deliver(self, client: httpx.AsyncClient, subscription: Dict[str, Any], payload: str) -> DeliveryResult:
        endpoint = subscription["endpoint"]
        try:
            response = await client.post(
                endpoint,
                content=payload,
                headers={
                    "TTL": str(self.ttl_seconds),
                    "Content-Type": "text/plain",
                    "Urgency": "normal",
                },
            )
        except Exception as e:
            logger.warning(f"Push to {_short(endpoint)} failed: {e}")
            return DeliveryResult(subscription.get("id"), DeliveryOutcome.FAILED, error=str(e))

        outcome = classify_push_status(response.status_code)
        if outcome == DeliveryOutcome.EXPIRED:
            logger.info(f"Push subscription expired or invalid: {_short(endpoint)}")
        elif outcome == DeliveryOutcome.FAILED:
            logger.warning(f"Push to {_short(endpoint)} failed: {response.status_code} {response.text}")
        return DeliveryResult(
            subscription.get("id"),
            outcome,
            status_code=response.status_code,
            error="" if outcome == DeliveryOutcome.DELIVERED else response.text,
        )


class FcmClient:
    """Legacy FCM HTTP API (server key auth)."""

    def __init__(
        self,
        server_key: str,
        api_url: str = "https://fcm.googleapis.com/fcm/send",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.server_key = server_key
        self.api_url = api_url
        self.timeout = timeout
        self.transport = transport

    async def send_all(self, tokens: List[Dict[str, Any]], notification: Dict[str, Any]) -> List[DeliveryResult]:
        if not tokens:
            return []
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            return list(await asyncio.gather(
                *(self._deliver(client, token, notification) for token in tokens)
            ))

    async def _deliver(self, client: httpx.AsyncClient, token: Dict[str, Any], notification: Dict[str, Any]) -> DeliveryResult:
        message = {
            "to": token["fcm_token"],
            "notification": {"title": notification["title"], "body": notification["body"]},
            "data": {"url": notification.get("url") or "/"},
        }
        try:
            response = await client.post(
                self.api_url,
                json=message,
                headers={"Authorization": f"key={self.server_key}"},
            )
        except Exception as e:
            logger.warning(f"FCM delivery failed: {e}")
            return DeliveryResult(token.get("id"), DeliveryOutcome.FAILED, error=str(e))

        if response.status_code >= 300:
            logger.warning(f"FCM delivery failed: {response.status_code} {response.text}")
            return DeliveryResult(token.get("id"), DeliveryOutcome.FAILED, response.status_code, response.text)

        try:
            body = response.json()
        except ValueError:
            body = None
        if not isinstance(body, dict):
            logger.warning(f"FCM returned an unreadable body: {response.text[:200]}")
            return DeliveryResult(token.get("id"), DeliveryOutcome.FAILED, response.status_code, response.text)
        if body.get("success"):
            return DeliveryResult(token.get("id"), DeliveryOutcome.DELIVERED, response.status_code)
        errors = [r.get("error") for r in body.get("results", []) if r.get("error")]
        outcome = DeliveryOutcome.EXPIRED if FCM_EXPIRED_ERRORS.intersection(errors) else DeliveryOutcome.FAILED
        return DeliveryResult(token.get("id"), outcome, response.status_code, ", ".join(errors))
