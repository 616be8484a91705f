from supabase import Client
from app.modules.cart.schemas import CartItemAdd, CartItemUpdate, CartItemResponse
from app.core.errors import NotFoundError, StorefrontError
from app.core.dependencies import ensure_same_user
from app.core.validation import MAX_QUANTITY
from typing import Any, Dict, List
import logging

logger = logging.getLogger(__name__)


class CartService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_items(self, user_id: str) -> List[CartItemResponse]:
        """All cart rows of a user, oldest first"""
        try:
            result = self.supabase.table("cart_items")\
                .select("*")\
                .eq("user_id", user_id)\
                .order("created_at")\
                .execute()
        except Exception as e:
            raise StorefrontError(str(e))
        return [CartItemResponse(**item) for item in (result.data or [])]

    def add_item(self, user_id: str, item_data: CartItemAdd) -> CartItemResponse:
        """Add a product; an existing row for the same product has its quantity raised"""
        try:
            existing = self.supabase.table("cart_items")\
                .select("*")\
                .eq("user_id", user_id)\
                .eq("product_id", item_data.product_id)\
                .execute()
            if existing.data:
                row = existing.data[0]
                quantity = min(row["quantity"] + item_data.quantity, MAX_QUANTITY)
                result = self.supabase.table("cart_items")\
                    .update({"quantity": quantity})\
                    .eq("id", row["id"])\
                    .execute()
            else:
                result = self.supabase.table("cart_items").insert({
                    "user_id": user_id,
                    "product_id": item_data.product_id,
                    "quantity": item_data.quantity,
                }).execute()
        except Exception as e:
            raise StorefrontError(str(e))
        if not result.data:
            raise StorefrontError("Failed to add item to cart")
        return CartItemResponse(**result.data[0])

    def _get_owned_item(self, user_id: str, item_id: str) -> Dict[str, Any]:
        try:
            result = self.supabase.table("cart_items")\
                .select("*")\
                .eq("id", item_id)\
                .maybe_single()\
                .execute()
        except Exception as e:
            raise StorefrontError(str(e))
        if not result or not result.data:
            raise NotFoundError("Cart item not found")
        ensure_same_user({"id": user_id}, result.data["user_id"], "modify a cart")
        return result.data

    def update_item(self, user_id: str, item_id: str, item_data: CartItemUpdate) -> CartItemResponse:
        self._get_owned_item(user_id, item_id)
        try:
            result = self.supabase.table("cart_items")\
                .update({"quantity": item_data.quantity})\
                .eq("id", item_id)\
                .execute()
        except Exception as e:
            raise StorefrontError(str(e))
        if not result.data:
            raise NotFoundError("Cart item not found")
        return CartItemResponse(**result.data[0])

    def remove_item(self, user_id: str, item_id: str) -> bool:
        self._get_owned_item(user_id, item_id)
        try:
            result = self.supabase.table("cart_items")\
                .delete()\
                .eq("id", item_id)\
                .execute()
        except Exception as e:
            raise StorefrontError(str(e))
        return len(result.data or []) > 0

    def clear(self, user_id: str) -> int:
        """Delete every cart row of the user; returns the number removed"""
        try:
            result = self.supabase.table("cart_items")\
                .delete()\
                .eq("user_id", user_id)\
                .execute()
        except Exception as e:
            raise StorefrontError(str(e))
        removed = len(result.data or [])
        logger.info(f"Cleared {removed} cart items for {user_id}")
        return removed
