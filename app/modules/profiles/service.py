from supabase import Client
from app.modules.profiles.schemas import ProfileUpdate, ProfileResponse
from app.core.errors import NotFoundError, StorefrontError


class ProfileService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_profile(self, user_id: str) -> ProfileResponse:
        """Get profile by user ID"""
        try:
            result = self.supabase.table("profiles")\
                .select("id, email, full_name, phone_number")\
                .eq("id", user_id)\
                .maybe_single()\
                .execute()
        except Exception as e:
            raise StorefrontError(str(e))
        if not result or not result.data:
            raise NotFoundError("Profile not found")
        return ProfileResponse(**result.data)

    def update_profile(self, user_id: str, profile_data: ProfileUpdate) -> ProfileResponse:
        """Update full name and phone number; an empty phone clears it"""
        update_data = {"phone_number": profile_data.phone_number}
        if profile_data.full_name is not None:
            update_data["full_name"] = profile_data.full_name
        try:
            result = self.supabase.table("profiles")\
                .update(update_data)\
                .eq("id", user_id)\
                .execute()
        except Exception as e:
            raise StorefrontError(str(e))
        if not result.data:
            raise NotFoundError("Profile not found")
        return ProfileResponse(**result.data[0])
