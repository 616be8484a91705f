"""
Grant or revoke the admin role
Admins receive checkout/cart notifications and may moderate reviews.

    python -m app.scripts.grant_admin_role owner@example.com
    python -m app.scripts.grant_admin_role owner@example.com --revoke
"""

import argparse
import sys

from app.core.dependencies import ADMIN_ROLE
from app.database.supabase_client import get_service_supabase
from supabase import Client
import logging

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def find_user_id(supabase: Client, email: str):
    result = supabase.table("profiles")\
        .select("id")\
        .eq("email", email)\
        .execute()
    return result.data[0]["id"] if result.data else None


def grant_admin(supabase: Client, user_id: str) -> bool:
    """Add the admin role; returns False when the user already had it"""
    existing = supabase.table("user_roles")\
        .select("user_id")\
        .eq("user_id", user_id)\
        .eq("role", ADMIN_ROLE)\
        .execute()
    if existing.data:
        return False
    supabase.table("user_roles").insert({"user_id": user_id, "role": ADMIN_ROLE}).execute()
    return True


def revoke_admin(supabase: Client, user_id: str) -> bool:
    result = supabase.table("user_roles")\
        .delete()\
        .eq("user_id", user_id)\
        .eq("role", ADMIN_ROLE)\
        .execute()
    return bool(result.data)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("email")
    parser.add_argument("--revoke", action="store_true")
    args = parser.parse_args(argv)

    try:
        supabase = get_service_supabase()
        user_id = find_user_id(supabase, args.email)
        if not user_id:
            logger.error(f"No profile found for {args.email}")
            return 1
        if args.revoke:
            changed = revoke_admin(supabase, user_id)
            logger.info(f"Admin role {'revoked from' if changed else 'was not held by'} {args.email}")
        else:
            changed = grant_admin(supabase, user_id)
            logger.info(f"Admin role {'granted to' if changed else 'already held by'} {args.email}")
        return 0
    except Exception as e:
        logger.error(f"Error updating admin role: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
