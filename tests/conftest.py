"""Shared fixtures: an app wired to in-memory Supabase and notification fakes."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from app.config import Settings, get_settings
from app.database.supabase_client import get_service_supabase, get_supabase
from app.main import create_app
from app.modules.notifications.dependencies import get_email_client, get_fcm_client, get_push_client
from tests.fakes import FakeEmailClient, FakePushClient, FakeSupabase, FakeUser

CUSTOMER_ID = "3f2b8c1e-6d4a-4b7e-9c2d-1a5e8f0b7c6d"
ADMIN_ID = "7a1c9e2f-3b5d-4e8a-8f1b-2c4d6e8f0a1b"
OTHER_ID = "c0ffee00-1234-4abc-a123-0123456789ab"
PRODUCT_ID = "5b6c7d8e-9f01-4a2b-8c3d-4e5f60718293"
CART_ITEM_ID = "a1b2c3d4-e5f6-4a7b-8c9d-0e1f2a3b4c5d"
OTHER_CART_ITEM_ID = "b2c3d4e5-f6a7-4b8c-9d0e-1f2a3b4c5d6e"

CUSTOMER_EMAIL = "asha@example.com"
ADMIN_EMAIL = "owner@example.com"


def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        _env_file=None,
        supabase_url="http://supabase.test",
        supabase_key="anon-key",
        supabase_service_role_key="service-key",
        resend_api_key="re_test",
        admin_email="orders@luxuryperfumes.test",
        vapid_public_key="BPublicKey",
        vapid_private_key="private-key",
        fcm_server_key="fcm-key",
        rate_limit="1000/minute",
        enable_legacy_endpoints=True,
    )


@pytest.fixture()
def db() -> FakeSupabase:
    fake = FakeSupabase()
    fake.auth.tokens = {
        "customer-token": FakeUser(CUSTOMER_ID, CUSTOMER_EMAIL, {"full_name": "Asha Rao"}),
        "admin-token": FakeUser(ADMIN_ID, ADMIN_EMAIL),
        "other-token": FakeUser(OTHER_ID, "other@example.com"),
    }
    fake.tables = {
        "profiles": [
            {"id": CUSTOMER_ID, "email": CUSTOMER_EMAIL, "full_name": "Asha Rao", "phone_number": "9876543210"},
            {"id": ADMIN_ID, "email": ADMIN_EMAIL, "full_name": "Store Owner", "phone_number": None},
            {"id": OTHER_ID, "email": "other@example.com", "full_name": None, "phone_number": None},
        ],
        "user_roles": [
            {"user_id": ADMIN_ID, "role": "admin"},
            {"user_id": CUSTOMER_ID, "role": "user"},
        ],
        "cart_items": [
            {"id": CART_ITEM_ID, "user_id": CUSTOMER_ID, "product_id": PRODUCT_ID, "quantity": 2,
             "created_at": "2026-01-01T10:00:00+00:00"},
            {"id": OTHER_CART_ITEM_ID, "user_id": OTHER_ID, "product_id": PRODUCT_ID, "quantity": 1,
             "created_at": "2026-01-01T11:00:00+00:00"},
        ],
        "push_subscriptions": [],
        "admin_fcm_tokens": [],
        "reviews": [],
    }
    return fake


@pytest.fixture()
def email_client() -> FakeEmailClient:
    return FakeEmailClient()


@pytest.fixture()
def push_client() -> FakePushClient:
    return FakePushClient()


@pytest.fixture()
def fcm_client() -> FakePushClient:
    return FakePushClient(key="fcm_token")


@pytest.fixture()
def app(settings, db, email_client, push_client, fcm_client):
    application = create_app(settings)
    application.dependency_overrides[get_settings] = lambda: settings
    application.dependency_overrides[get_supabase] = lambda: db
    application.dependency_overrides[get_service_supabase] = lambda: db
    application.dependency_overrides[get_email_client] = lambda: email_client
    application.dependency_overrides[get_push_client] = lambda: push_client
    application.dependency_overrides[get_fcm_client] = lambda: fcm_client
    return application


@pytest.fixture()
def client(app) -> TestClient:
    return TestClient(app)
