from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import datetime


class SubscriptionKeys(BaseModel):
    p256dh: str = Field(min_length=1, max_length=512)
    auth: str = Field(min_length=1, max_length=512)


class PushSubscriptionCreate(BaseModel):
    """Shape of the browser's ``PushSubscription.toJSON()``."""
    endpoint: str = Field(max_length=2048)
    keys: SubscriptionKeys

    @field_validator("endpoint")
    @classmethod
    def validate_endpoint(cls, v: str) -> str:
        if not v.startswith("https://"):
            raise ValueError("Push endpoint must be an https URL")
        return v


class PushSubscriptionResponse(BaseModel):
    id: str
    user_id: str
    endpoint: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class VapidKeyResponse(BaseModel):
    public_key: str
