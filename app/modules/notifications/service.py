import asyncio
from dataclasses import dataclass, field
from supabase import Client
from app.config.settings import Settings
from app.core.dependencies import get_admin_user_ids
from app.core.errors import UpstreamError
from app.modules.checkout.service import fetch_profile
from app.modules.notifications.push_client import DeliveryOutcome, DeliveryResult
from app.modules.notifications.schemas import (
    PushMessage, PushNotificationRequest, PushNotificationResponse,
    CartNotificationRequest, CartEmailResponse, CartFcmResponse,
)
from app.modules.notifications.templates import CustomerInfo, local_timestamp, render_cart_activity_email
from typing import Any, Dict, List, Optional
import logging

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PushTarget:
    """A single user, or every holder of the admin role."""
    kind: str
    user_id: Optional[str] = None

    @classmethod
    def user(cls, user_id: str) -> "PushTarget":
        return cls("user", user_id)

    @classmethod
    def admins(cls) -> "PushTarget":
        return cls("admin")


@dataclass
class BroadcastResult:
    results: List[DeliveryResult] = field(default_factory=list)

    @property
    def sent(self) -> bool:
        return any(r.delivered for r in self.results)

    @property
    def expired(self) -> List[DeliveryResult]:
        return [r for r in self.results if r.outcome == DeliveryOutcome.EXPIRED]


class PushNotificationService:
    def __init__(self, supabase: Client, push_client, settings: Settings):
        self.supabase = supabase
        self.push_client = push_client
        self.settings = settings

    def resolve_targets(self, target: PushTarget) -> List[Dict[str, Any]]:
        """Push subscription rows for the target set"""
        try:
            if target.kind == "admin":
                user_ids = get_admin_user_ids(self.supabase)
                if not user_ids:
                    return []
                query = self.supabase.table("push_subscriptions").select("*").in_("user_id", user_ids)
            else:
                query = self.supabase.table("push_subscriptions").select("*").eq("user_id", target.user_id)
            result = query.execute()
        except Exception as e:
            logger.error(f"Error loading push subscriptions for {target.kind}: {e}")
            raise UpstreamError("Failed to load push subscriptions")
        return result.data or []

    async def broadcast(self, target: PushTarget, message: PushMessage) -> BroadcastResult:
        """Deliver to one target class; a failed lookup reports nothing sent for that class only"""
        try:
            subscriptions = self.resolve_targets(target)
        except UpstreamError:
            return BroadcastResult()
        if not subscriptions:
            logger.info(f"No push subscriptions for {target.kind} target")
            return BroadcastResult()
        results = await self.push_client.send_all(subscriptions, message.model_dump(exclude_none=True))
        outcome = BroadcastResult(results)
        logger.info(
            "Push broadcast to %s: %d/%d delivered, %d expired",
            target.kind, sum(r.delivered for r in results), len(results), len(outcome.expired),
        )
        if outcome.expired and self.settings.prune_expired_subscriptions:
            self.prune(outcome.expired)
        return outcome

    def prune(self, expired: List[DeliveryResult]) -> None:
        ids = [r.target_id for r in expired if r.target_id]
        if not ids:
            return
        try:
            self.supabase.table("push_subscriptions").delete().in_("id", ids).execute()
            logger.info(f"Pruned {len(ids)} expired push subscriptions")
        except Exception as e:
            logger.error(f"Error pruning expired push subscriptions: {e}")

    async def send(self, request: PushNotificationRequest) -> PushNotificationResponse:
        """Fan out the user and admin notifications; per-class success flags"""
        jobs = {}
        if request.user_notification:
            jobs["user"] = self.broadcast(PushTarget.user(request.user_id), request.user_notification)
        if request.notify_admin and request.admin_notification:
            jobs["admin"] = self.broadcast(PushTarget.admins(), request.admin_notification)
        outcomes = dict(zip(jobs.keys(), await asyncio.gather(*jobs.values())))
        return PushNotificationResponse(
            success=True,
            user_notification_sent="user" in outcomes and outcomes["user"].sent,
            admin_notification_sent="admin" in outcomes and outcomes["admin"].sent,
        )


class CartNotificationService:
    def __init__(self, supabase: Client, settings: Settings, email_client=None, fcm_client=None):
        self.supabase = supabase
        self.settings = settings
        self.email_client = email_client
        self.fcm_client = fcm_client

    def _customer(self, user_id: str) -> CustomerInfo:
        return CustomerInfo.from_profile(fetch_profile(self.supabase, user_id, "email, full_name"))

    async def notify_by_email(self, request: CartNotificationRequest) -> CartEmailResponse:
        """Email the admin about new cart activity"""
        logger.info("Sending cart notification email: user=%s quantity=%d", request.user_id, request.quantity)
        subject, html = render_cart_activity_email(
            self._customer(request.user_id),
            request.product_title,
            request.quantity,
            local_timestamp(self.settings.store_timezone),
        )
        email_id = await self.email_client.send(
            sender=self.settings.cart_email_sender,
            to=[self.settings.admin_email],
            subject=subject,
            html=html,
        )
        return CartEmailResponse(success=True, email_id=email_id)

    async def notify_by_fcm(self, request: CartNotificationRequest) -> CartFcmResponse:
        """Push new cart activity to every registered admin device"""
        try:
            result = self.supabase.table("admin_fcm_tokens").select("*").execute()
        except Exception as e:
            logger.error(f"Error loading admin FCM tokens: {e}")
            raise UpstreamError("Failed to load admin FCM tokens")
        tokens = result.data or []
        if not tokens:
            logger.info("No admin FCM tokens registered")
            return CartFcmResponse(success=True, notification_sent=False)
        customer = self._customer(request.user_id)
        notification = {
            "title": "\U0001f6d2 New Cart Activity",
            "body": f"{customer.name} added {request.quantity} x {request.product_title} to their cart",
            "url": "/admin",
        }
        results = await self.fcm_client.send_all(tokens, notification)
        return CartFcmResponse(success=True, notification_sent=any(r.delivered for r in results))
