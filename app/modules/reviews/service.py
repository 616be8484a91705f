from supabase import Client
from app.modules.reviews.schemas import (
    ReviewCreate, ReviewUpdate, ReviewResponse, PublicReviewResponse, RatingSummary
)
from app.core.errors import AuthorizationError, NotFoundError, StorefrontError
from typing import Any, Dict, List
import logging

logger = logging.getLogger(__name__)


def _clean_comment(comment):
    if comment is None:
        return None
    return comment.strip() or None


class ReviewService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_for_product(self, product_id: str) -> List[PublicReviewResponse]:
        """Newest first, with reviewer names and without user ids"""
        try:
            result = self.supabase.table("reviews")\
                .select("*")\
                .eq("product_id", product_id)\
                .order("created_at", desc=True)\
                .execute()
            reviews = result.data or []
            names = {}
            user_ids = list({r["user_id"] for r in reviews})
            if user_ids:
                profiles = self.supabase.table("profiles")\
                    .select("id, full_name")\
                    .in_("id", user_ids)\
                    .execute()
                names = {p["id"]: p.get("full_name") for p in (profiles.data or [])}
        except Exception as e:
            raise StorefrontError(str(e))
        return [
            PublicReviewResponse(
                id=r["id"],
                product_id=r["product_id"],
                rating=r["rating"],
                comment=r.get("comment"),
                reviewer_name=names.get(r["user_id"]),
                created_at=r["created_at"],
                updated_at=r.get("updated_at"),
            )
            for r in reviews
        ]

    def rating_summary(self, product_id: str) -> RatingSummary:
        try:
            result = self.supabase.table("reviews_public")\
                .select("rating")\
                .eq("product_id", product_id)\
                .execute()
        except Exception as e:
            raise StorefrontError(str(e))
        ratings = [r["rating"] for r in (result.data or [])]
        if not ratings:
            return RatingSummary(product_id=product_id)
        return RatingSummary(
            product_id=product_id,
            average_rating=round(sum(ratings) / len(ratings), 2),
            review_count=len(ratings),
        )

    def submit_review(self, user_id: str, product_id: str, review_data: ReviewCreate) -> ReviewResponse:
        """Create the caller's review of a product, or replace their existing one"""
        payload = {"rating": review_data.rating, "comment": _clean_comment(review_data.comment)}
        try:
            existing = self.supabase.table("reviews")\
                .select("id")\
                .eq("product_id", product_id)\
                .eq("user_id", user_id)\
                .execute()
            if existing.data:
                result = self.supabase.table("reviews")\
                    .update(payload)\
                    .eq("id", existing.data[0]["id"])\
                    .execute()
            else:
                result = self.supabase.table("reviews")\
                    .insert({**payload, "product_id": product_id, "user_id": user_id})\
                    .execute()
        except Exception as e:
            raise StorefrontError(str(e))
        if not result.data:
            raise StorefrontError("Failed to save review")
        return ReviewResponse(**result.data[0])

    def _get_review(self, review_id: str) -> Dict[str, Any]:
        try:
            result = self.supabase.table("reviews")\
                .select("*")\
                .eq("id", review_id)\
                .maybe_single()\
                .execute()
        except Exception as e:
            raise StorefrontError(str(e))
        if not result or not result.data:
            raise NotFoundError("Review not found")
        return result.data

    def update_review(self, user_id: str, review_id: str, review_data: ReviewUpdate) -> ReviewResponse:
        """Owner only"""
        review = self._get_review(review_id)
        if review["user_id"] != user_id:
            raise AuthorizationError("You can only edit your own reviews")
        update_data = {}
        if review_data.rating is not None:
            update_data["rating"] = review_data.rating
        if "comment" in review_data.model_fields_set:
            update_data["comment"] = _clean_comment(review_data.comment)
        if not update_data:
            return ReviewResponse(**review)
        try:
            result = self.supabase.table("reviews")\
                .update(update_data)\
                .eq("id", review_id)\
                .execute()
        except Exception as e:
            raise StorefrontError(str(e))
        if not result.data:
            raise NotFoundError("Review not found")
        return ReviewResponse(**result.data[0])

    def delete_review(self, user_id: str, review_id: str, is_admin: bool = False) -> bool:
        """Owner or admin"""
        review = self._get_review(review_id)
        if review["user_id"] != user_id and not is_admin:
            raise AuthorizationError("You can only delete your own reviews")
        try:
            result = self.supabase.table("reviews")\
                .delete()\
                .eq("id", review_id)\
                .execute()
        except Exception as e:
            raise StorefrontError(str(e))
        if is_admin and review["user_id"] != user_id:
            logger.info(f"Admin {user_id} removed review {review_id}")
        return len(result.data or []) > 0
