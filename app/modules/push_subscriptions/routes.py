from fastapi import APIRouter, Depends, Query
from app.config import get_settings, Settings
from app.database.supabase_client import get_service_supabase
from app.modules.push_subscriptions.schemas import (
    PushSubscriptionCreate, PushSubscriptionResponse, VapidKeyResponse
)
from app.modules.push_subscriptions.service import PushSubscriptionService
from app.core.dependencies import get_current_user
from supabase import Client
from typing import Dict, List

router = APIRouter(prefix="/push-subscriptions", tags=["push-subscriptions"])


def get_subscription_service(supabase: Client = Depends(get_service_supabase)) -> PushSubscriptionService:
    return PushSubscriptionService(supabase)


@router.get("/vapid-public-key", response_model=VapidKeyResponse)
async def get_vapid_public_key(settings: Settings = Depends(get_settings)):
    """Application server key the browser subscribes with"""
    settings.require("vapid_public_key")
    return VapidKeyResponse(public_key=settings.vapid_public_key)


@router.get("", response_model=List[PushSubscriptionResponse])
async def list_subscriptions(
    user_data: Dict = Depends(get_current_user),
    service: PushSubscriptionService = Depends(get_subscription_service)
):
    """List the caller's subscribed browsers"""
    return service.list_for_user(user_data["id"])


@router.post("", response_model=PushSubscriptionResponse, status_code=201)
async def subscribe(
    subscription: PushSubscriptionCreate,
    user_data: Dict = Depends(get_current_user),
    service: PushSubscriptionService = Depends(get_subscription_service)
):
    """Save the caller's browser push subscription"""
    return service.subscribe(user_data["id"], subscription)


@router.delete("", status_code=204)
async def unsubscribe(
    endpoint: str = Query(..., max_length=2048),
    user_data: Dict = Depends(get_current_user),
    service: PushSubscriptionService = Depends(get_subscription_service)
):
    """Remove one of the caller's subscriptions by endpoint"""
    service.unsubscribe(user_data["id"], endpoint)
    return None
