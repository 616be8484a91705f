from pydantic import EmailStr, field_validator
from typing import Any, Optional
from app.core.validation import (
    CamelModel, check_uuid, check_text, check_quantity,
    MAX_TITLE_LENGTH, MAX_NOTIFICATION_BODY_LENGTH,
)

MAX_URL_LENGTH = 2048


class PushMessage(CamelModel):
    title: str
    body: str
    url: Optional[str] = None

    @field_validator("title", mode="before")
    @classmethod
    def _title(cls, v: Any) -> str:
        return check_text(v, MAX_TITLE_LENGTH, "invalid_notification_title", "Invalid notification title")

    @field_validator("body", mode="before")
    @classmethod
    def _body(cls, v: Any) -> str:
        return check_text(v, MAX_NOTIFICATION_BODY_LENGTH, "invalid_notification_body", "Invalid notification body")

    @field_validator("url", mode="before")
    @classmethod
    def _url(cls, v: Any) -> Optional[str]:
        return check_text(v, MAX_URL_LENGTH, "invalid_notification_url", "Invalid notification url", required=False)


class PushNotificationRequest(CamelModel):
    user_id: str
    user_email: Optional[EmailStr] = None
    notify_admin: bool = False
    user_notification: Optional[PushMessage] = None
    admin_notification: Optional[PushMessage] = None

    @field_validator("user_id", mode="before")
    @classmethod
    def _user_id(cls, v: Any) -> str:
        return check_uuid(v, "invalid_user_id", "Invalid userId format")


class PushNotificationResponse(CamelModel):
    success: bool = True
    user_notification_sent: bool = False
    admin_notification_sent: bool = False


class CartNotificationRequest(CamelModel):
    user_id: str
    product_title: str
    quantity: int

    @field_validator("user_id", mode="before")
    @classmethod
    def _user_id(cls, v: Any) -> str:
        return check_uuid(v, "invalid_user_id", "Invalid userId format")

    @field_validator("product_title", mode="before")
    @classmethod
    def _title(cls, v: Any) -> str:
        return check_text(v, MAX_TITLE_LENGTH, "invalid_product_title", "Invalid product title")

    @field_validator("quantity", mode="before")
    @classmethod
    def _quantity(cls, v: Any) -> int:
        return check_quantity(v)


class CartEmailResponse(CamelModel):
    success: bool = True
    email_id: Optional[str] = None


class CartFcmResponse(CamelModel):
    success: bool = True
    notification_sent: bool = False
