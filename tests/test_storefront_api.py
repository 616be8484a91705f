"""Storefront data routes: auth, profiles, catalogue, cart, reviews, subscriptions, admin devices."""

from __future__ import annotations

import pytest

from tests.conftest import (
    ADMIN_ID,
    CART_ITEM_ID,
    CUSTOMER_EMAIL,
    CUSTOMER_ID,
    OTHER_CART_ITEM_ID,
    OTHER_ID,
    PRODUCT_ID,
    auth_header,
)

API = "/api/v1"

SECOND_PRODUCT_ID = "6c7d8e9f-0a1b-4c2d-9e3f-5a6b7c8d9e0f"
REVIEW_ID = "d4e5f6a7-b8c9-4d0e-8f1a-2b3c4d5e6f70"
OTHER_REVIEW_ID = "e5f6a7b8-c9d0-4e1f-9a2b-3c4d5e6f7081"
UNKNOWN_ID = "00000000-0000-4000-8000-000000000000"


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}
        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"

    def test_root(self, client):
        assert client.get("/").json()["message"] == "Welcome to perfume-storefront"


class TestAuth:
    def test_register_then_login(self, client):
        response = client.post(
            f"{API}/auth/register",
            json={"email": "new@example.com", "password": "secret1", "full_name": "New Buyer"},
        )
        assert response.status_code == 201
        assert response.json()["email"] == "new@example.com"

        response = client.post(f"{API}/auth/login", json={"email": "new@example.com", "password": "secret1"})
        assert response.status_code == 200
        token = response.json()["access_token"]

        me = client.get(f"{API}/auth/me", headers=auth_header(token)).json()
        assert me["email"] == "new@example.com"
        assert me["full_name"] == "New Buyer"
        assert me["is_admin"] is False

    def test_duplicate_registration(self, client):
        response = client.post(f"{API}/auth/register", json={"email": CUSTOMER_EMAIL, "password": "secret1"})
        assert response.status_code == 400
        assert response.json()["reason"] == "user_exists"

    def test_short_password_is_400(self, client):
        response = client.post(f"{API}/auth/register", json={"email": "a@example.com", "password": "123"})
        assert response.status_code == 400
        assert response.json()["field"] == "password"

    def test_wrong_password_is_401(self, client):
        response = client.post(f"{API}/auth/login", json={"email": CUSTOMER_EMAIL, "password": "nope"})
        assert response.status_code == 401
        assert response.json() == {"error": "Invalid email or password"}

    def test_me_reports_admin_role(self, client):
        me = client.get(f"{API}/auth/me", headers=auth_header("admin-token")).json()
        assert me["id"] == ADMIN_ID
        assert me["is_admin"] is True


class TestProfiles:
    def test_get_own_profile(self, client):
        response = client.get(f"{API}/profiles/me", headers=auth_header("customer-token"))
        assert response.status_code == 200
        assert response.json() == {
            "id": CUSTOMER_ID,
            "email": CUSTOMER_EMAIL,
            "full_name": "Asha Rao",
            "phone_number": "9876543210",
        }

    def test_update_profile(self, client, db):
        response = client.put(
            f"{API}/profiles/me",
            json={"full_name": "Asha R.", "phone_number": "9123456780"},
            headers=auth_header("customer-token"),
        )
        assert response.status_code == 200
        row = next(p for p in db.rows("profiles") if p["id"] == CUSTOMER_ID)
        assert row["full_name"] == "Asha R."
        assert row["phone_number"] == "9123456780"

    def test_empty_phone_clears_number(self, client, db):
        response = client.put(f"{API}/profiles/me", json={"phone_number": ""}, headers=auth_header("customer-token"))
        assert response.status_code == 200
        assert response.json()["phone_number"] is None
        assert response.json()["full_name"] == "Asha Rao"

    def test_invalid_phone_is_400(self, client):
        response = client.put(f"{API}/profiles/me", json={"phone_number": "12345"}, headers=auth_header("customer-token"))
        assert response.status_code == 400
        assert response.json()["error"] == "Phone number must be exactly 10 digits"

    def test_requires_login(self, client):
        assert client.get(f"{API}/profiles/me").status_code == 401


class TestProducts:
    @pytest.fixture(autouse=True)
    def catalogue(self, db):
        db.tables["products_public"] = [
            {"id": PRODUCT_ID, "title": "Oud Intense", "gender": "unisex", "retail_price": 1500.0,
             "created_at": "2026-01-02T00:00:00+00:00"},
            {"id": SECOND_PRODUCT_ID, "title": "Rose Noir", "gender": "women", "retail_price": 2200.0,
             "created_at": "2026-01-03T00:00:00+00:00"},
        ]

    def test_list_newest_first(self, client):
        titles = [p["title"] for p in client.get(f"{API}/products").json()]
        assert titles == ["Rose Noir", "Oud Intense"]

    def test_filter_by_gender(self, client):
        products = client.get(f"{API}/products", params={"gender": "unisex"}).json()
        assert [p["id"] for p in products] == [PRODUCT_ID]

    def test_wholesale_price_never_exposed(self, client):
        product = client.get(f"{API}/products/{PRODUCT_ID}").json()
        assert "wholesale_price" not in product
        assert product["retail_price"] == 1500.0

    def test_unknown_product_is_404(self, client):
        response = client.get(f"{API}/products/{UNKNOWN_ID}")
        assert response.status_code == 404
        assert response.json() == {"error": "Product not found"}

    def test_malformed_product_id_is_400(self, client, db):
        response = client.get(f"{API}/products/missing")
        assert response.status_code == 400
        assert response.json()["reason"] == "invalid_id"
        assert response.json()["field"] == "product_id"
        assert ("products_public", "select") not in db.calls


class TestCart:
    def test_list_only_own_rows(self, client):
        items = client.get(f"{API}/cart", headers=auth_header("customer-token")).json()
        assert [i["id"] for i in items] == [CART_ITEM_ID]

    def test_adding_existing_product_raises_quantity(self, client, db):
        response = client.post(
            f"{API}/cart/items", json={"product_id": PRODUCT_ID, "quantity": 3}, headers=auth_header("customer-token")
        )
        assert response.status_code == 201
        assert response.json()["quantity"] == 5
        assert len([r for r in db.rows("cart_items") if r["user_id"] == CUSTOMER_ID]) == 1

    def test_quantity_is_capped(self, client):
        response = client.post(
            f"{API}/cart/items", json={"product_id": PRODUCT_ID, "quantity": 100}, headers=auth_header("customer-token")
        )
        assert response.json()["quantity"] == 100

    def test_invalid_product_id_is_400(self, client):
        response = client.post(
            f"{API}/cart/items", json={"product_id": "nope", "quantity": 1}, headers=auth_header("customer-token")
        )
        assert response.status_code == 400
        assert response.json()["reason"] == "invalid_product_id"

    def test_update_own_item(self, client):
        response = client.patch(f"{API}/cart/items/{CART_ITEM_ID}", json={"quantity": 7}, headers=auth_header("customer-token"))
        assert response.status_code == 200
        assert response.json()["quantity"] == 7

    def test_cannot_touch_another_users_item(self, client, db):
        response = client.patch(f"{API}/cart/items/{OTHER_CART_ITEM_ID}", json={"quantity": 7}, headers=auth_header("customer-token"))
        assert response.status_code == 403
        assert next(r for r in db.rows("cart_items") if r["id"] == OTHER_CART_ITEM_ID)["quantity"] == 1

        response = client.delete(f"{API}/cart/items/{OTHER_CART_ITEM_ID}", headers=auth_header("customer-token"))
        assert response.status_code == 403

    def test_missing_item_is_404(self, client):
        response = client.delete(f"{API}/cart/items/{UNKNOWN_ID}", headers=auth_header("customer-token"))
        assert response.status_code == 404

    @pytest.mark.parametrize("item_id", ["abc", f"{CART_ITEM_ID}%0A", CART_ITEM_ID.replace("-4a7b-", "-6a7b-")])
    def test_malformed_item_id_is_400(self, client, db, item_id):
        response = client.patch(f"{API}/cart/items/{item_id}", json={"quantity": 7}, headers=auth_header("customer-token"))
        assert response.status_code == 400
        assert response.json()["reason"] == "invalid_id"

        response = client.delete(f"{API}/cart/items/{item_id}", headers=auth_header("customer-token"))
        assert response.status_code == 400
        assert ("cart_items", "select") not in db.calls
        assert len(db.rows("cart_items")) == 2

    def test_remove_and_clear(self, client, db):
        assert client.delete(f"{API}/cart/items/{CART_ITEM_ID}", headers=auth_header("customer-token")).status_code == 204
        assert client.delete(f"{API}/cart", headers=auth_header("other-token")).status_code == 204
        assert db.rows("cart_items") == []


class TestReviews:
    @pytest.fixture()
    def reviews(self, db):
        db.tables["reviews"] = [
            {"id": REVIEW_ID, "product_id": PRODUCT_ID, "user_id": CUSTOMER_ID, "rating": 5, "comment": "Lovely",
             "created_at": "2026-01-05T00:00:00+00:00"},
            {"id": OTHER_REVIEW_ID, "product_id": PRODUCT_ID, "user_id": OTHER_ID, "rating": 2, "comment": None,
             "created_at": "2026-01-06T00:00:00+00:00"},
        ]
        db.tables["reviews_public"] = [
            {"id": REVIEW_ID, "product_id": PRODUCT_ID, "rating": 5},
            {"id": OTHER_REVIEW_ID, "product_id": PRODUCT_ID, "rating": 2},
        ]
        return db.tables["reviews"]

    def test_public_list_hides_user_ids(self, client, reviews):
        listed = client.get(f"{API}/products/{PRODUCT_ID}/reviews").json()
        assert [r["id"] for r in listed] == [OTHER_REVIEW_ID, REVIEW_ID]
        assert all("user_id" not in r for r in listed)
        assert listed[1]["reviewer_name"] == "Asha Rao"
        assert listed[0]["reviewer_name"] is None

    def test_rating_summary(self, client, reviews):
        summary = client.get(f"{API}/products/{PRODUCT_ID}/rating").json()
        assert summary == {"product_id": PRODUCT_ID, "average_rating": 3.5, "review_count": 2}

    def test_rating_summary_without_reviews(self, client):
        summary = client.get(f"{API}/products/{PRODUCT_ID}/rating").json()
        assert summary == {"product_id": PRODUCT_ID, "average_rating": None, "review_count": 0}

    def test_second_submission_replaces_first(self, client, db, reviews):
        response = client.post(
            f"{API}/products/{PRODUCT_ID}/reviews",
            json={"rating": 4, "comment": "  Grew on me  "},
            headers=auth_header("customer-token"),
        )
        assert response.status_code == 201
        assert response.json()["id"] == REVIEW_ID
        assert response.json()["comment"] == "Grew on me"
        assert len(db.rows("reviews")) == 2

    @pytest.mark.parametrize("rating", [0, 6, "5", 4.5])
    def test_rating_must_be_integer_in_range(self, client, rating):
        response = client.post(
            f"{API}/products/{PRODUCT_ID}/reviews", json={"rating": rating}, headers=auth_header("customer-token")
        )
        assert response.status_code == 400
        assert response.json()["field"] == "rating"

    def test_only_author_can_edit(self, client, reviews):
        response = client.put(f"{API}/reviews/{OTHER_REVIEW_ID}", json={"rating": 5}, headers=auth_header("customer-token"))
        assert response.status_code == 403
        response = client.put(f"{API}/reviews/{REVIEW_ID}", json={"rating": 3}, headers=auth_header("customer-token"))
        assert response.status_code == 200
        assert response.json()["rating"] == 3
        assert response.json()["comment"] == "Lovely"

    def test_admin_can_delete_any_review(self, client, db, reviews):
        assert client.delete(f"{API}/reviews/{REVIEW_ID}", headers=auth_header("other-token")).status_code == 403
        assert client.delete(f"{API}/reviews/{REVIEW_ID}", headers=auth_header("admin-token")).status_code == 204
        assert [r["id"] for r in db.rows("reviews")] == [OTHER_REVIEW_ID]

    def test_malformed_ids_are_400(self, client, db, reviews):
        customer = auth_header("customer-token")
        responses = [
            client.get(f"{API}/products/abc/reviews"),
            client.get(f"{API}/products/abc/rating"),
            client.post(f"{API}/products/abc/reviews", json={"rating": 4}, headers=customer),
            client.put(f"{API}/reviews/abc", json={"rating": 4}, headers=customer),
            client.delete(f"{API}/reviews/abc", headers=auth_header("admin-token")),
        ]
        assert [r.status_code for r in responses] == [400] * 5
        assert all(r.json()["reason"] == "invalid_id" for r in responses)
        assert not any(table in ("reviews", "reviews_public") for table, _ in db.calls)


class TestPushSubscriptions:
    SUBSCRIPTION = {
        "endpoint": "https://fcm.googleapis.com/fcm/send/abc",
        "keys": {"p256dh": "BNcRdreALRFXTkOOUHK1EtK2wtaz5Ry4YfYCA", "auth": "tBHItJI5svbpez7KI4CCXg"},
    }

    def test_vapid_public_key(self, client):
        assert client.get(f"{API}/push-subscriptions/vapid-public-key").json() == {"public_key": "BPublicKey"}

    def test_vapid_public_key_unconfigured(self, client, settings):
        settings.vapid_public_key = None
        response = client.get(f"{API}/push-subscriptions/vapid-public-key")
        assert response.status_code == 500
        assert response.json() == {"error": "VAPID_PUBLIC_KEY is not configured"}

    def test_subscribe_is_idempotent(self, client, db):
        for _ in range(2):
            response = client.post(
                f"{API}/push-subscriptions", json=self.SUBSCRIPTION, headers=auth_header("customer-token")
            )
            assert response.status_code == 201
        assert len(db.rows("push_subscriptions")) == 1
        listed = client.get(f"{API}/push-subscriptions", headers=auth_header("customer-token")).json()
        assert [s["endpoint"] for s in listed] == [self.SUBSCRIPTION["endpoint"]]

    def test_plain_http_endpoint_is_400(self, client):
        payload = dict(self.SUBSCRIPTION, endpoint="http://push.test/abc")
        response = client.post(f"{API}/push-subscriptions", json=payload, headers=auth_header("customer-token"))
        assert response.status_code == 400

    def test_unsubscribe_only_own(self, client, db):
        client.post(f"{API}/push-subscriptions", json=self.SUBSCRIPTION, headers=auth_header("customer-token"))
        params = {"endpoint": self.SUBSCRIPTION["endpoint"]}
        client.delete(f"{API}/push-subscriptions", params=params, headers=auth_header("other-token"))
        assert len(db.rows("push_subscriptions")) == 1
        client.delete(f"{API}/push-subscriptions", params=params, headers=auth_header("customer-token"))
        assert db.rows("push_subscriptions") == []


class TestAdminFcmTokens:
    def test_customers_are_forbidden(self, client):
        response = client.post(f"{API}/admin/fcm-tokens", json={"fcm_token": "t"}, headers=auth_header("customer-token"))
        assert response.status_code == 403
        assert response.json() == {"error": "Admin access required"}

    def test_register_list_delete(self, client, db):
        response = client.post(
            f"{API}/admin/fcm-tokens",
            json={"fcm_token": "device-1", "device_info": "Pixel 8"},
            headers=auth_header("admin-token"),
        )
        assert response.status_code == 201
        token_id = response.json()["id"]

        listed = client.get(f"{API}/admin/fcm-tokens", headers=auth_header("admin-token")).json()
        assert [t["fcm_token"] for t in listed] == ["device-1"]

        assert client.delete(f"{API}/admin/fcm-tokens/{token_id}", headers=auth_header("admin-token")).status_code == 204
        assert db.rows("admin_fcm_tokens") == []

    def test_delete_unknown_token_is_404(self, client):
        response = client.delete(f"{API}/admin/fcm-tokens/{UNKNOWN_ID}", headers=auth_header("admin-token"))
        assert response.status_code == 404

    def test_malformed_token_id_is_400(self, client, db):
        response = client.delete(f"{API}/admin/fcm-tokens/nope", headers=auth_header("admin-token"))
        assert response.status_code == 400
        assert ("admin_fcm_tokens", "delete") not in db.calls
