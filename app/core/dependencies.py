"""
Core dependencies for route protection and ownership checking.

Data access goes through the service-role client, which bypasses the row
level security policies of the hosted database, so the equivalent checks
(owner only, admin role) live here.
"""

from fastapi import Depends, Security
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from app.database.supabase_client import get_supabase, get_service_supabase
from app.modules.auth.service import AuthService
from app.core.errors import AuthenticationError, AuthorizationError
from app.core.validation import EmailRef, UserRef, require_valid
from supabase import Client
from typing import Optional, Dict, Any
import logging

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)

ADMIN_ROLE = "admin"


def get_auth_service(supabase: Client = Depends(get_supabase)) -> AuthService:
    return AuthService(supabase)


def get_bearer_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(security)
) -> str:
    """Extract the bearer token from the Authorization header"""
    if credentials is None or not credentials.credentials:
        raise AuthenticationError()
    return credentials.credentials


def get_current_user(
    token: str = Depends(get_bearer_token),
    auth_service: AuthService = Depends(get_auth_service)
) -> Dict[str, Any]:
    """Resolve the bearer token to the authenticated principal"""
    return auth_service.get_current_user(token)


def is_admin(user_id: str, supabase: Client) -> bool:
    """Check the user_roles table for the admin role"""
    try:
        result = supabase.table("user_roles")\
            .select("role")\
            .eq("user_id", user_id)\
            .eq("role", ADMIN_ROLE)\
            .execute()
        return bool(result.data)
    except Exception as e:
        logger.error(f"Error checking admin role: {e}")
        return False


def get_admin_user_ids(supabase: Client) -> list:
    result = supabase.table("user_roles")\
        .select("user_id")\
        .eq("role", ADMIN_ROLE)\
        .execute()
    return [r["user_id"] for r in (result.data or [])]


def require_admin(
    user_data: Dict[str, Any] = Depends(get_current_user),
    supabase: Client = Depends(get_service_supabase)
) -> Dict[str, Any]:
    """Dependency allowing only principals holding the admin role"""
    if not is_admin(user_data["id"], supabase):
        raise AuthorizationError("Admin access required")
    return user_data


def ensure_same_user(user_data: Dict[str, Any], user_id: str, action: str = "act") -> None:
    """Reject requests that name a user other than the principal"""
    if user_data.get("id") != user_id:
        raise AuthorizationError(f"Forbidden: Cannot {action} for another user")


def ensure_same_email(user_data: Dict[str, Any], email: str, action: str = "act") -> None:
    principal_email = (user_data.get("email") or "").strip().lower()
    if not principal_email or principal_email != email.strip().lower():
        raise AuthorizationError(f"Forbidden: Cannot {action} for another user")


def ensure_payload_user(user_data: Dict[str, Any], payload: Any, action: str = "act") -> None:
    """Ownership check on a raw body's userId (and userEmail, if sent).

    Runs before the full body is validated, so a caller naming another user
    gets 403 whatever else is wrong with the request.
    """
    ref = require_valid(UserRef, payload)
    ensure_same_user(user_data, ref.user_id, action)
    if ref.user_email:
        ensure_same_email(user_data, ref.user_email, action)


def ensure_payload_email(user_data: Dict[str, Any], payload: Any, action: str = "act") -> None:
    ref = require_valid(EmailRef, payload)
    ensure_same_email(user_data, ref.user_email, action)
