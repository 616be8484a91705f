from pydantic import BaseModel, Field, field_validator
from typing import Any, Optional
from datetime import datetime
from app.core.validation import check_uuid, check_quantity


class CartItemAdd(BaseModel):
    product_id: str
    quantity: int = 1

    @field_validator("product_id", mode="before")
    @classmethod
    def _product_id(cls, v: Any) -> str:
        return check_uuid(v, "invalid_product_id", "Invalid productId format")

    @field_validator("quantity", mode="before")
    @classmethod
    def _quantity(cls, v: Any) -> int:
        return check_quantity(v)


class CartItemUpdate(BaseModel):
    quantity: int

    @field_validator("quantity", mode="before")
    @classmethod
    def _quantity(cls, v: Any) -> int:
        return check_quantity(v)


class CartItemResponse(BaseModel):
    id: str
    user_id: str
    product_id: str
    quantity: int = Field(ge=1)
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
