from supabase import Client
from app.modules.products.schemas import ProductResponse
from app.core.errors import NotFoundError, StorefrontError
from typing import List, Optional


class ProductService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_products(self, gender: Optional[str] = None, limit: int = 50, offset: int = 0) -> List[ProductResponse]:
        """Public catalogue, newest first"""
        try:
            query = self.supabase.table("products_public").select("*")
            if gender:
                query = query.eq("gender", gender)
            result = query.order("created_at", desc=True)\
                .range(offset, offset + limit - 1)\
                .execute()
        except Exception as e:
            raise StorefrontError(str(e))
        return [ProductResponse(**p) for p in (result.data or [])]

    def get_product(self, product_id: str) -> ProductResponse:
        try:
            result = self.supabase.table("products_public")\
                .select("*")\
                .eq("id", product_id)\
                .maybe_single()\
                .execute()
        except Exception as e:
            raise StorefrontError(str(e))
        if not result or not result.data:
            raise NotFoundError("Product not found")
        return ProductResponse(**result.data)
