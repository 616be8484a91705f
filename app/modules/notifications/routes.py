from fastapi import APIRouter, Body, Depends
from app.config import get_settings, Settings
from app.database.supabase_client import get_service_supabase
from app.core.dependencies import get_current_user, ensure_payload_user
from app.core.validation import require_valid
from app.modules.notifications.dependencies import get_email_client, get_push_client, get_fcm_client
from app.modules.notifications.email_client import ResendEmailClient
from app.modules.notifications.push_client import WebPushClient, FcmClient
from app.modules.notifications.schemas import (
    PushNotificationRequest, PushNotificationResponse,
    CartNotificationRequest, CartEmailResponse, CartFcmResponse,
)
from app.modules.notifications.service import PushNotificationService, CartNotificationService
from supabase import Client
from typing import Any, Dict

router = APIRouter(tags=["notifications"])
legacy_router = APIRouter(prefix="/legacy", tags=["notifications", "legacy"])


def get_push_service(
    settings: Settings = Depends(get_settings),
    supabase: Client = Depends(get_service_supabase),
    push_client: WebPushClient = Depends(get_push_client),
) -> PushNotificationService:
    return PushNotificationService(supabase, push_client, settings)


def get_cart_email_service(
    settings: Settings = Depends(get_settings),
    supabase: Client = Depends(get_service_supabase),
    email_client: ResendEmailClient = Depends(get_email_client),
) -> CartNotificationService:
    settings.require("admin_email")
    return CartNotificationService(supabase, settings, email_client=email_client)


def get_cart_fcm_service(
    settings: Settings = Depends(get_settings),
    supabase: Client = Depends(get_service_supabase),
    fcm_client: FcmClient = Depends(get_fcm_client),
) -> CartNotificationService:
    return CartNotificationService(supabase, settings, fcm_client=fcm_client)


@router.post("/send-push-notification", response_model=PushNotificationResponse)
async def send_push_notification(
    payload: Any = Body(None),
    user_data: Dict = Depends(get_current_user),
    service: PushNotificationService = Depends(get_push_service),
):
    """Push to the caller's devices and, optionally, to every admin"""
    ensure_payload_user(user_data, payload, "send notifications")
    request = require_valid(PushNotificationRequest, payload)
    return await service.send(request)


@legacy_router.post("/send-push-notification", response_model=PushNotificationResponse)
async def send_push_notification_legacy(
    payload: Any = Body(None),
    service: PushNotificationService = Depends(get_push_service),
):
    """Unauthenticated revision kept for older storefront builds"""
    request = require_valid(PushNotificationRequest, payload)
    return await service.send(request)


@router.post("/send-cart-notification", response_model=CartEmailResponse)
async def send_cart_notification(
    payload: Any = Body(None),
    user_data: Dict = Depends(get_current_user),
    service: CartNotificationService = Depends(get_cart_email_service),
):
    """Email the admin when the caller adds a product to their cart"""
    ensure_payload_user(user_data, payload, "send notifications")
    request = require_valid(CartNotificationRequest, payload)
    return await service.notify_by_email(request)


@router.post("/send-cart-notification/fcm", response_model=CartFcmResponse)
async def send_cart_notification_fcm(
    payload: Any = Body(None),
    user_data: Dict = Depends(get_current_user),
    service: CartNotificationService = Depends(get_cart_fcm_service),
):
    """FCM revision of the cart notification, delivered to admin devices"""
    ensure_payload_user(user_data, payload, "send notifications")
    request = require_valid(CartNotificationRequest, payload)
    return await service.notify_by_fcm(request)
