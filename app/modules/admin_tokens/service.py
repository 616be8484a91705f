from supabase import Client
from app.modules.admin_tokens.schemas import FcmTokenCreate, FcmTokenResponse
from app.core.errors import NotFoundError, StorefrontError
from typing import List


class AdminTokenService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def register(self, user_id: str, token_data: FcmTokenCreate) -> FcmTokenResponse:
        """Register an admin device; registering a known token updates its device info"""
        try:
            result = self.supabase.table("admin_fcm_tokens")\
                .upsert({
                    "user_id": user_id,
                    "fcm_token": token_data.fcm_token,
                    "device_info": token_data.device_info,
                }, on_conflict="user_id,fcm_token")\
                .execute()
        except Exception as e:
            raise StorefrontError(str(e))
        if not result.data:
            raise StorefrontError("Failed to register FCM token")
        return FcmTokenResponse(**result.data[0])

    def list_for_user(self, user_id: str) -> List[FcmTokenResponse]:
        try:
            result = self.supabase.table("admin_fcm_tokens")\
                .select("*")\
                .eq("user_id", user_id)\
                .execute()
        except Exception as e:
            raise StorefrontError(str(e))
        return [FcmTokenResponse(**t) for t in (result.data or [])]

    def delete(self, user_id: str, token_id: str) -> bool:
        """Only the admin's own tokens can be removed"""
        try:
            result = self.supabase.table("admin_fcm_tokens")\
                .delete()\
                .eq("id", token_id)\
                .eq("user_id", user_id)\
                .execute()
        except Exception as e:
            raise StorefrontError(str(e))
        if not result.data:
            raise NotFoundError("FCM token not found")
        return True
