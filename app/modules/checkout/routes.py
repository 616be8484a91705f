from fastapi import APIRouter, Body, Depends
from app.config import get_settings, Settings
from app.database.supabase_client import get_service_supabase
from app.core.dependencies import get_current_user, ensure_payload_user, ensure_payload_email
from app.core.validation import require_valid
from app.modules.checkout.schemas import (
    CheckoutNotificationRequest, CheckoutConfirmationRequest, CheckoutResponse
)
from app.modules.checkout.service import CheckoutService
from app.modules.notifications.dependencies import get_email_client
from app.modules.notifications.email_client import ResendEmailClient
from supabase import Client
from typing import Any, Dict

router = APIRouter(tags=["checkout"])
legacy_router = APIRouter(prefix="/legacy", tags=["checkout", "legacy"])


def get_checkout_service(
    settings: Settings = Depends(get_settings),
    supabase: Client = Depends(get_service_supabase),
    email_client: ResendEmailClient = Depends(get_email_client),
) -> CheckoutService:
    return CheckoutService(supabase, email_client, settings)


def get_admin_checkout_service(
    settings: Settings = Depends(get_settings),
    service: CheckoutService = Depends(get_checkout_service),
) -> CheckoutService:
    settings.require("admin_email")
    return service


@router.post("/checkout-notification", response_model=CheckoutResponse)
async def checkout_notification(
    payload: Any = Body(None),
    user_data: Dict = Depends(get_current_user),
    service: CheckoutService = Depends(get_admin_checkout_service),
):
    """Notify the admin of a completed checkout and clear the caller's cart"""
    ensure_payload_user(user_data, payload, "checkout")
    request = require_valid(CheckoutNotificationRequest, payload)
    return await service.notify_admin(request)


@router.post("/send-checkout-confirmation", response_model=CheckoutResponse)
async def send_checkout_confirmation(
    payload: Any = Body(None),
    user_data: Dict = Depends(get_current_user),
    service: CheckoutService = Depends(get_checkout_service),
):
    """Send the order confirmation to the caller's own address"""
    ensure_payload_email(user_data, payload, "send a confirmation")
    request = require_valid(CheckoutConfirmationRequest, payload)
    return await service.send_confirmation(request)


@legacy_router.post("/send-checkout-confirmation", response_model=CheckoutResponse)
async def send_checkout_confirmation_legacy(
    payload: Any = Body(None),
    service: CheckoutService = Depends(get_checkout_service),
):
    """Unauthenticated revision kept for older storefront builds"""
    request = require_valid(CheckoutConfirmationRequest, payload)
    return await service.send_confirmation(request)
