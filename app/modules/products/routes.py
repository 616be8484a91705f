from fastapi import APIRouter, Depends, Query
from app.database.supabase_client import get_service_supabase
from app.core.validation import UuidId
from app.modules.products.schemas import ProductResponse
from app.modules.products.service import ProductService
from supabase import Client
from typing import List, Optional

router = APIRouter(prefix="/products", tags=["products"])


def get_product_service(supabase: Client = Depends(get_service_supabase)) -> ProductService:
    return ProductService(supabase)


@router.get("", response_model=List[ProductResponse])
async def list_products(
    gender: Optional[str] = None,
    limit: int = Query(default=50, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    service: ProductService = Depends(get_product_service)
):
    """List products without wholesale pricing"""
    return service.list_products(gender=gender, limit=limit, offset=offset)


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(
    product_id: UuidId,
    service: ProductService = Depends(get_product_service)
):
    """Get one product"""
    return service.get_product(product_id)
