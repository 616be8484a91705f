from pydantic import BaseModel, Field, field_validator
from typing import Optional
import re

PHONE_PATTERN = re.compile(r"^\d{10}$")


class ProfileUpdate(BaseModel):
    full_name: Optional[str] = Field(default=None, max_length=200)
    phone_number: Optional[str] = None

    @field_validator("phone_number")
    @classmethod
    def validate_phone(cls, v: Optional[str]) -> Optional[str]:
        if v is None or v.strip() == "":
            return None
        if not PHONE_PATTERN.match(v):
            raise ValueError("Phone number must be exactly 10 digits")
        return v


class ProfileResponse(BaseModel):
    id: str
    email: Optional[str] = None
    full_name: Optional[str] = None
    phone_number: Optional[str] = None

    class Config:
        from_attributes = True
