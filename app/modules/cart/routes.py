from fastapi import APIRouter, Depends
from app.database.supabase_client import get_service_supabase
from app.core.validation import UuidId
from app.modules.cart.schemas import CartItemAdd, CartItemUpdate, CartItemResponse
from app.modules.cart.service import CartService
from app.core.dependencies import get_current_user
from supabase import Client
from typing import Dict, List

router = APIRouter(prefix="/cart", tags=["cart"])


def get_cart_service(supabase: Client = Depends(get_service_supabase)) -> CartService:
    return CartService(supabase)


@router.get("", response_model=List[CartItemResponse])
async def list_cart(
    user_data: Dict = Depends(get_current_user),
    service: CartService = Depends(get_cart_service)
):
    """List the caller's cart"""
    return service.list_items(user_data["id"])


@router.post("/items", response_model=CartItemResponse, status_code=201)
async def add_cart_item(
    item_data: CartItemAdd,
    user_data: Dict = Depends(get_current_user),
    service: CartService = Depends(get_cart_service)
):
    """Add a product to the caller's cart"""
    return service.add_item(user_data["id"], item_data)


@router.patch("/items/{item_id}", response_model=CartItemResponse)
async def update_cart_item(
    item_id: UuidId,
    item_data: CartItemUpdate,
    user_data: Dict = Depends(get_current_user),
    service: CartService = Depends(get_cart_service)
):
    """Change the quantity of one of the caller's cart rows"""
    return service.update_item(user_data["id"], item_id, item_data)


@router.delete("/items/{item_id}", status_code=204)
async def remove_cart_item(
    item_id: UuidId,
    user_data: Dict = Depends(get_current_user),
    service: CartService = Depends(get_cart_service)
):
    """Remove one of the caller's cart rows"""
    service.remove_item(user_data["id"], item_id)
    return None


@router.delete("", status_code=204)
async def clear_cart(
    user_data: Dict = Depends(get_current_user),
    service: CartService = Depends(get_cart_service)
):
    """Empty the caller's cart"""
    service.clear(user_data["id"])
    return None
