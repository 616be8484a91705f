from fastapi import APIRouter, Depends
from app.database.supabase_client import get_service_supabase
from app.core.validation import UuidId
from app.modules.admin_tokens.schemas import FcmTokenCreate, FcmTokenResponse
from app.modules.admin_tokens.service import AdminTokenService
from app.core.dependencies import require_admin
from supabase import Client
from typing import Dict, List

router = APIRouter(prefix="/admin/fcm-tokens", tags=["admin"])


def get_admin_token_service(supabase: Client = Depends(get_service_supabase)) -> AdminTokenService:
    return AdminTokenService(supabase)


@router.get("", response_model=List[FcmTokenResponse])
async def list_tokens(
    user_data: Dict = Depends(require_admin),
    service: AdminTokenService = Depends(get_admin_token_service)
):
    """List the admin's registered devices"""
    return service.list_for_user(user_data["id"])


@router.post("", response_model=FcmTokenResponse, status_code=201)
async def register_token(
    token_data: FcmTokenCreate,
    user_data: Dict = Depends(require_admin),
    service: AdminTokenService = Depends(get_admin_token_service)
):
    """Register a device for cart activity pushes"""
    return service.register(user_data["id"], token_data)


@router.delete("/{token_id}", status_code=204)
async def delete_token(
    token_id: UuidId,
    user_data: Dict = Depends(require_admin),
    service: AdminTokenService = Depends(get_admin_token_service)
):
    """Unregister one of the admin's devices"""
    service.delete(user_data["id"], token_id)
    return None
