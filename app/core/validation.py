"""
Single validation entry point for JSON request bodies.

Handlers accept the raw body and call ``parse_payload`` so that bearer
authentication runs first and validation failures come back as a tagged
result instead of FastAPI's default 422 response.
"""

import math
import re
from dataclasses import dataclass
from typing import Annotated, Any, Generic, Optional, Type, TypeVar, Union

from fastapi.responses import JSONResponse
from pydantic import AfterValidator, BaseModel, ConfigDict, EmailStr, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from app.core.errors import ValidationError

UUID_PATTERN = re.compile(
    r"[0-9a-f]{8}-[0-9a-f]{4}-[1-5][0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}",
    re.IGNORECASE,
)

MAX_TITLE_LENGTH = 200
MAX_NAME_LENGTH = 200
MAX_NOTIFICATION_BODY_LENGTH = 500
MAX_COMMENT_LENGTH = 1000
MAX_ITEM_PRICE = 1_000_000
MAX_TOTAL_PRICE = 10_000_000
MIN_QUANTITY = 1
MAX_QUANTITY = 100
MAX_CART_ITEMS = 50

M = TypeVar("M", bound=BaseModel)


class CamelModel(BaseModel):
    """Request/response model whose JSON keys are camelCase."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


@dataclass(frozen=True)
class Valid(Generic[M]):
    value: M
    ok: bool = True


@dataclass(frozen=True)
class Invalid:
    reason: str
    message: str
    field: Optional[str] = None
    ok: bool = False

    def to_error(self) -> ValidationError:
        return ValidationError(self.message, reason=self.reason, field=self.field)


ValidationResult = Union[Valid, Invalid]


def _field_path(loc) -> Optional[str]:
    parts = [str(p) for p in loc if p not in ("body", "query", "path")]
    return ".".join(parts) or None


def parse_payload(model: Type[M], data: Any) -> ValidationResult:
    """Validate ``data`` against ``model``; never raises for bad input."""
    if not isinstance(data, dict):
        return Invalid(reason="invalid_body", message="Request body must be a JSON object")
    try:
        return Valid(model.model_validate(data))
    except PydanticValidationError as e:
        return invalid_from_errors(e.errors())


def require_valid(model: Type[M], data: Any) -> M:
    result = parse_payload(model, data)
    if not result.ok:
        raise result.to_error()
    return result.value


# Reusable checks for field validators (mode="before"). Each raises a
# PydanticCustomError so the error type doubles as the machine-readable reason.

def check_uuid(value: Any, reason: str, message: str) -> str:
    if not isinstance(value, str) or not UUID_PATTERN.fullmatch(value):
        raise PydanticCustomError(reason, message)
    return value


def _path_uuid(value: str) -> str:
    return check_uuid(value, "invalid_id", "Invalid id format")


# Path parameter type for row ids, rejected before any query runs
UuidId = Annotated[str, AfterValidator(_path_uuid)]


def check_text(value: Any, max_length: int, reason: str, message: str, required: bool = True) -> Optional[str]:
    if value is None and not required:
        return None
    if not isinstance(value, str) or len(value) > max_length or (required and not value.strip()):
        raise PydanticCustomError(reason, message)
    return value


def check_quantity(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise PydanticCustomError("invalid_quantity", "Invalid quantity")
    if isinstance(value, float) and not value.is_integer():
        raise PydanticCustomError("invalid_quantity", "Invalid quantity")
    if not MIN_QUANTITY <= value <= MAX_QUANTITY:
        raise PydanticCustomError("invalid_quantity", "Invalid quantity")
    return int(value)


def check_amount(value: Any, ceiling: float, reason: str, message: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        raise PydanticCustomError(reason, message)
    if value <= 0 or value > ceiling:
        raise PydanticCustomError(reason, message)
    return float(value)


class UserRef(CamelModel):
    """The identifying fields of a request body, checked before the rest of it."""
    user_id: str
    user_email: Optional[EmailStr] = None

    @field_validator("user_id", mode="before")
    @classmethod
    def _user_id(cls, v: Any) -> str:
        return check_uuid(v, "invalid_user_id", "Invalid userId format")


class EmailRef(CamelModel):
    user_email: EmailStr


def invalid_from_errors(errors) -> Invalid:
    first = errors[0] if errors else {}
    field = _field_path(first.get("loc", ()))
    reason = first.get("type", "invalid")
    message = first.get("msg", "Invalid request")
    if reason == "missing":
        message = f"Missing field: {field}"
        reason = "missing_field"
    elif reason == "value_error" and first.get("ctx", {}).get("error"):
        message = str(first["ctx"]["error"])
    return Invalid(reason=reason, message=message, field=field)


async def request_validation_error_handler(request, exc):
    """Render FastAPI body/query validation failures in the same 400 shape."""
    error = invalid_from_errors(exc.errors()).to_error()
    return JSONResponse(status_code=error.status_code, content=error.to_content())
