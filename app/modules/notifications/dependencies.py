"""
Providers for the outbound notification clients.

Each provider checks its secrets first, so a handler missing configuration
fails with a ConfigurationError before any business logic runs. Tests swap
these out through ``app.dependency_overrides``.
"""

from fastapi import Depends
from app.config import get_settings, Settings
from app.modules.notifications.email_client import ResendEmailClient
from app.modules.notifications.push_client import WebPushClient, FcmClient


def get_email_client(settings: Settings = Depends(get_settings)) -> ResendEmailClient:
    settings.require("resend_api_key")
    return ResendEmailClient(
        api_key=settings.resend_api_key,
        api_url=settings.resend_api_url,
        timeout=settings.http_timeout_seconds,
    )


def get_push_client(settings: Settings = Depends(get_settings)) -> WebPushClient:
    settings.require("vapid_public_key", "vapid_private_key")
    return WebPushClient(
        ttl_seconds=settings.push_ttl_seconds,
        timeout=settings.http_timeout_seconds,
    )


def get_fcm_client(settings: Settings = Depends(get_settings)) -> FcmClient:
    settings.require("fcm_server_key")
    return FcmClient(
        server_key=settings.fcm_server_key,
        api_url=settings.fcm_api_url,
        timeout=settings.http_timeout_seconds,
    )
