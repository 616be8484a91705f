from supabase import Client
from app.config.settings import Settings
from app.modules.checkout.schemas import (
    CartItemPayload, CheckoutNotificationRequest, CheckoutConfirmationRequest, CheckoutResponse
)
from app.modules.notifications.templates import (
    CustomerInfo, LineItem, local_timestamp,
    render_admin_order_email, render_customer_confirmation_email,
)
from typing import Any, Dict, List, Optional
import logging

logger = logging.getLogger(__name__)


def fetch_profile(supabase: Client, user_id: str, columns: str = "email, full_name, phone_number") -> Optional[Dict[str, Any]]:
    """Profile row for a user, or None when missing or unreadable"""
    try:
        result = supabase.table("profiles")\
            .select(columns)\
            .eq("id", user_id)\
            .maybe_single()\
            .execute()
        return result.data if result else None
    except Exception as e:
        logger.warning(f"Could not load profile for {user_id}: {e}")
        return None


def to_line_items(items: List[CartItemPayload]) -> List[LineItem]:
    return [LineItem(title=i.product_title, quantity=i.quantity, price=i.price) for i in items]


class CheckoutService:
    def __init__(self, supabase: Client, email_client, settings: Settings):
        self.supabase = supabase
        self.email_client = email_client
        self.settings = settings

    async def notify_admin(self, request: CheckoutNotificationRequest) -> CheckoutResponse:
        """Email the order summary to the admin, then clear the customer's cart"""
        logger.info(
            "Processing checkout notification: user=%s items=%d total=%.2f",
            request.user_id, len(request.cart_items), request.total_price,
        )
        customer = CustomerInfo.from_profile(fetch_profile(self.supabase, request.user_id))
        subject, html = render_admin_order_email(
            customer,
            to_line_items(request.cart_items),
            request.total_price,
            local_timestamp(self.settings.store_timezone),
            self.settings.store_name,
        )
        # UpstreamError propagates: no cart clear without a sent email
        email_id = await self.email_client.send(
            sender=self.settings.order_email_sender,
            to=[self.settings.admin_email],
            subject=subject,
            html=html,
        )
        logger.info(f"Checkout email sent: {email_id}")
        self.clear_cart(request.user_id)
        return CheckoutResponse(success=True, email_id=email_id)

    async def send_confirmation(self, request: CheckoutConfirmationRequest) -> CheckoutResponse:
        """Email the order confirmation to the customer"""
        logger.info("Sending checkout confirmation: items=%d total=%.2f", len(request.cart_items), request.total_price)
        subject, html = render_customer_confirmation_email(
            request.user_name,
            to_line_items(request.cart_items),
            request.total_price,
            local_timestamp(self.settings.store_timezone),
            self.settings.store_name,
        )
        email_id = await self.email_client.send(
            sender=self.settings.customer_email_sender,
            to=[request.user_email],
            subject=subject,
            html=html,
        )
        logger.info(f"Checkout confirmation sent: {email_id}")
        return CheckoutResponse(success=True, email_id=email_id)

    def clear_cart(self, user_id: str) -> bool:
        """Delete the user's cart rows. Failures are logged, never raised."""
        try:
            self.supabase.table("cart_items")\
                .delete()\
                .eq("user_id", user_id)\
                .execute()
            return True
        except Exception as e:
            logger.error(f"Error clearing cart for {user_id}: {e}")
            return False
