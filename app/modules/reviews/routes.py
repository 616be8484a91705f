from fastapi import APIRouter, Depends
from app.database.supabase_client import get_service_supabase
from app.core.validation import UuidId
from app.modules.reviews.schemas import (
    ReviewCreate, ReviewUpdate, ReviewResponse, PublicReviewResponse, RatingSummary
)
from app.modules.reviews.service import ReviewService
from app.core.dependencies import get_current_user, is_admin
from supabase import Client
from typing import Dict, List

router = APIRouter(tags=["reviews"])


def get_review_service(supabase: Client = Depends(get_service_supabase)) -> ReviewService:
    return ReviewService(supabase)


@router.get("/products/{product_id}/reviews", response_model=List[PublicReviewResponse])
async def list_product_reviews(
    product_id: UuidId,
    service: ReviewService = Depends(get_review_service)
):
    """Public list of a product's reviews"""
    return service.list_for_product(product_id)


@router.get("/products/{product_id}/rating", response_model=RatingSummary)
async def get_product_rating(
    product_id: UuidId,
    service: ReviewService = Depends(get_review_service)
):
    """Average rating and review count"""
    return service.rating_summary(product_id)


@router.post("/products/{product_id}/reviews", response_model=ReviewResponse, status_code=201)
async def submit_review(
    product_id: UuidId,
    review_data: ReviewCreate,
    user_data: Dict = Depends(get_current_user),
    service: ReviewService = Depends(get_review_service)
):
    """Create or replace the caller's review of a product"""
    return service.submit_review(user_data["id"], product_id, review_data)


@router.put("/reviews/{review_id}", response_model=ReviewResponse)
async def update_review(
    review_id: UuidId,
    review_data: ReviewUpdate,
    user_data: Dict = Depends(get_current_user),
    service: ReviewService = Depends(get_review_service)
):
    """Edit one of the caller's reviews"""
    return service.update_review(user_data["id"], review_id, review_data)


@router.delete("/reviews/{review_id}", status_code=204)
async def delete_review(
    review_id: UuidId,
    user_data: Dict = Depends(get_current_user),
    service: ReviewService = Depends(get_review_service),
    supabase: Client = Depends(get_service_supabase)
):
    """Delete a review (author or admin)"""
    service.delete_review(user_data["id"], review_id, is_admin=is_admin(user_data["id"], supabase))
    return None
