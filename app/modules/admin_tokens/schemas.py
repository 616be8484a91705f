from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class FcmTokenCreate(BaseModel):
    fcm_token: str = Field(min_length=1, max_length=4096)
    device_info: Optional[str] = Field(default=None, max_length=500)


class FcmTokenResponse(BaseModel):
    id: str
    user_id: str
    fcm_token: str
    device_info: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
