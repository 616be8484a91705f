from supabase import Client
from app.modules.push_subscriptions.schemas import PushSubscriptionCreate, PushSubscriptionResponse
from app.core.errors import StorefrontError
from typing import List
import logging

logger = logging.getLogger(__name__)


class PushSubscriptionService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def subscribe(self, user_id: str, subscription: PushSubscriptionCreate) -> PushSubscriptionResponse:
        """Store a browser subscription; re-subscribing the same endpoint refreshes its keys"""
        try:
            result = self.supabase.table("push_subscriptions")\
                .upsert({
                    "user_id": user_id,
                    "endpoint": subscription.endpoint,
                    "p256dh": subscription.keys.p256dh,
                    "auth": subscription.keys.auth,
                }, on_conflict="user_id,endpoint")\
                .execute()
        except Exception as e:
            logger.error(f"Error saving push subscription: {e}")
            raise StorefrontError(str(e))
        if not result.data:
            raise StorefrontError("Failed to save push subscription")
        logger.info(f"Push subscription saved for {user_id}")
        return PushSubscriptionResponse(**result.data[0])

    def unsubscribe(self, user_id: str, endpoint: str) -> bool:
        try:
            result = self.supabase.table("push_subscriptions")\
                .delete()\
                .eq("user_id", user_id)\
                .eq("endpoint", endpoint)\
                .execute()
        except Exception as e:
            raise StorefrontError(str(e))
        return len(result.data or []) > 0

    def list_for_user(self, user_id: str) -> List[PushSubscriptionResponse]:
        try:
            result = self.supabase.table("push_subscriptions")\
                .select("id, user_id, endpoint, created_at")\
                .eq("user_id", user_id)\
                .execute()
        except Exception as e:
            raise StorefrontError(str(e))
        return [PushSubscriptionResponse(**s) for s in (result.data or [])]
