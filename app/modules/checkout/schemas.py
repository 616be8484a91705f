from pydantic import EmailStr, field_validator
from typing import Any, List, Optional
from app.core.validation import (
    CamelModel, check_uuid, check_text, check_quantity, check_amount,
    MAX_TITLE_LENGTH, MAX_NAME_LENGTH, MAX_ITEM_PRICE, MAX_TOTAL_PRICE, MAX_CART_ITEMS,
)
from pydantic_core import PydanticCustomError


class CartItemPayload(CamelModel):
    product_title: str
    quantity: int
    price: float

    @field_validator("product_title", mode="before")
    @classmethod
    def _title(cls, v: Any) -> str:
        return check_text(v, MAX_TITLE_LENGTH, "invalid_product_title", "Invalid product title")

    @field_validator("quantity", mode="before")
    @classmethod
    def _quantity(cls, v: Any) -> int:
        return check_quantity(v)

    @field_validator("price", mode="before")
    @classmethod
    def _price(cls, v: Any) -> float:
        return check_amount(v, MAX_ITEM_PRICE, "invalid_price", "Invalid price")


class _CartPayload(CamelModel):
    cart_items: List[CartItemPayload]
    total_price: float

    @field_validator("cart_items", mode="before")
    @classmethod
    def _cart_items(cls, v: Any) -> Any:
        if not isinstance(v, list) or not 1 <= len(v) <= MAX_CART_ITEMS:
            raise PydanticCustomError(
                "invalid_cart_items",
                "Invalid cartItems: must be array with 1-{max} items",
                {"max": MAX_CART_ITEMS},
            )
        return v

    @field_validator("total_price", mode="before")
    @classmethod
    def _total_price(cls, v: Any) -> float:
        return check_amount(v, MAX_TOTAL_PRICE, "invalid_total_price", "Invalid totalPrice")


class CheckoutNotificationRequest(_CartPayload):
    """Admin order notification, sent by the customer's browser after checkout."""
    user_id: str

    @field_validator("user_id", mode="before")
    @classmethod
    def _user_id(cls, v: Any) -> str:
        return check_uuid(v, "invalid_user_id", "Invalid userId format")


class CheckoutConfirmationRequest(_CartPayload):
    """Order confirmation addressed to the customer."""
    user_email: EmailStr
    user_name: str

    @field_validator("user_name", mode="before")
    @classmethod
    def _user_name(cls, v: Any) -> str:
        return check_text(v, MAX_NAME_LENGTH, "invalid_user_name", "Invalid userName")


class CheckoutResponse(CamelModel):
    success: bool = True
    email_id: Optional[str] = None
