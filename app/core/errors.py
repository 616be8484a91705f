"""
Error taxonomy for the storefront handlers.

Every error renders as ``{"error": <message>, ...extra}`` so browser callers
see the same shape regardless of which handler failed.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from typing import Any, Dict, Optional
import logging

logger = logging.getLogger(__name__)


class StorefrontError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None, **extra: Any):
        self.message = message or self.default_message
        self.extra = extra
        super().__init__(self.message)

    def to_content(self) -> Dict[str, Any]:
        return {"error": self.message, **self.extra}


class ConfigurationError(StorefrontError):
    """A required secret is missing from the environment."""
    status_code = 500
    default_message = "Server is not configured"


class AuthenticationError(StorefrontError):
    status_code = 401
    default_message = "Unauthorized"


class AuthorizationError(StorefrontError):
    status_code = 403
    default_message = "Forbidden"


class ValidationError(StorefrontError):
    status_code = 400
    default_message = "Invalid request"

    def __init__(self, message: Optional[str] = None, reason: str = "invalid", field: Optional[str] = None):
        super().__init__(message, reason=reason, field=field)
        self.reason = reason
        self.field = field


class NotFoundError(StorefrontError):
    status_code = 404
    default_message = "Not found"


class UpstreamError(StorefrontError):
    """Email / push provider call failed; the provider message is passed through."""
    status_code = 500
    default_message = "Upstream provider error"


async def storefront_error_handler(request: Request, exc: StorefrontError):
    if exc.status_code >= 500:
        logger.error("%s on %s: %s", type(exc).__name__, request.url.path, exc.message)
    else:
        logger.info("%s on %s: %s", type(exc).__name__, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_content())


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StorefrontError, storefront_error_handler)
