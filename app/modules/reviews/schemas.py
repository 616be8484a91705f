from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from app.core.validation import MAX_COMMENT_LENGTH


class ReviewCreate(BaseModel):
    rating: int = Field(ge=1, le=5, strict=True)
    comment: Optional[str] = Field(default=None, max_length=MAX_COMMENT_LENGTH)


class ReviewUpdate(BaseModel):
    rating: Optional[int] = Field(default=None, ge=1, le=5, strict=True)
    comment: Optional[str] = Field(default=None, max_length=MAX_COMMENT_LENGTH)


class ReviewResponse(BaseModel):
    id: str
    product_id: str
    user_id: str
    rating: int
    comment: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class PublicReviewResponse(BaseModel):
    """Review as shown on a product page; never exposes the author's user id."""
    id: str
    product_id: str
    rating: int
    comment: Optional[str] = None
    reviewer_name: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None


class RatingSummary(BaseModel):
    product_id: str
    average_rating: Optional[float] = None
    review_count: int = 0
