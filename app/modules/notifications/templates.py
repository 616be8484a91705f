"""
HTML email templates.

Every user-controlled value goes through ``escape`` before it is embedded;
numbers are formatted here and never taken from the request as text.
"""

from dataclasses import dataclass
from datetime import datetime
from html import escape
from typing import Iterable, Optional, Tuple
from zoneinfo import ZoneInfo

CURRENCY = "₹"

CELL = "padding: 10px; border-bottom: 1px solid #e5e7eb; color: #111827;"
GOLD_HEADER = "background: linear-gradient(135deg, #c9a227 0%, #daa520 100%);"
PURPLE_HEADER = "background: linear-gradient(135deg, #667eea 0%, #764ba2 100%);"


@dataclass
class CustomerInfo:
    name: str = "A customer"
    email: str = "Unknown"
    phone: str = "Not provided"

    @classmethod
    def from_profile(cls, profile: Optional[dict]) -> "CustomerInfo":
        profile = profile or {}
        return cls(
            name=profile.get("full_name") or cls.name,
            email=profile.get("email") or cls.email,
            phone=profile.get("phone_number") or cls.phone,
        )


@dataclass
class LineItem:
    title: str
    quantity: int
    price: float


def money(amount: float) -> str:
    return f"{CURRENCY}{amount:.2f}"


def local_timestamp(tz_name: str = "Asia/Kolkata", now: Optional[datetime] = None) -> str:
    now = now or datetime.now(ZoneInfo(tz_name))
    return now.astimezone(ZoneInfo(tz_name)).strftime("%d/%m/%Y, %I:%M:%S %p")


def _item_rows(items: Iterable[LineItem]) -> str:
    return "".join(
        f"""
      <tr>
        <td style="{CELL}">{escape(item.title)}</td>
        <td style="{CELL} text-align: center;">{item.quantity}</td>
        <td style="{CELL} text-align: right;">{money(item.price)}</td>
      </tr>"""
        for item in items
    )


def _items_table(items: Iterable[LineItem], total: float, total_label: str) -> str:
    return f"""
      <table style="width: 100%; border-collapse: collapse;">
        <thead>
          <tr style="background: #f3f4f6;">
            <th style="padding: 10px; text-align: left; color: #374151;">Product</th>
            <th style="padding: 10px; text-align: center; color: #374151;">Qty</th>
            <th style="padding: 10px; text-align: right; color: #374151;">Price</th>
          </tr>
        </thead>
        <tbody>{_item_rows(items)}
        </tbody>
        <tfoot>
          <tr style="background: #c9a227;">
            <td colspan="2" style="padding: 15px; color: white; font-weight: bold;">{total_label}</td>
            <td style="padding: 15px; color: white; font-weight: bold; text-align: right;">{money(total)}</td>
          </tr>
        </tfoot>
      </table>"""


def _layout(header_style: str, heading: str, body: str, footer: str) -> str:
    return f"""
<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto; padding: 20px;">
  <div style="{header_style} padding: 30px; border-radius: 10px 10px 0 0;">
    <h1 style="color: white; margin: 0; font-size: 24px;">{heading}</h1>
  </div>
  <div style="background: #f9fafb; padding: 30px; border: 1px solid #e5e7eb; border-top: none; border-radius: 0 0 10px 10px;">
    {body}
    <p style="color: #9ca3af; font-size: 12px; margin-top: 20px; text-align: center;">{footer}</p>
  </div>
</div>"""


def render_admin_order_email(
    customer: CustomerInfo,
    items: Iterable[LineItem],
    total: float,
    timestamp: str,
    store_name: str = "Luxury Perfumes",
) -> Tuple[str, str]:
    """Order summary sent to the store admin when a customer checks out."""
    name = escape(customer.name)
    body = f"""
    <p style="color: #374151; font-size: 16px; margin-bottom: 20px;">
      <strong>{name}</strong> has completed a checkout.
    </p>
    <div style="background: white; padding: 20px; border-radius: 8px; border: 1px solid #e5e7eb; margin-bottom: 20px;">
      <h3 style="color: #374151; margin: 0 0 15px 0;">Customer Details</h3>
      <p style="margin: 5px 0; color: #6b7280;"><strong>Name:</strong> {name}</p>
      <p style="margin: 5px 0; color: #6b7280;"><strong>Email:</strong> {escape(customer.email)}</p>
      <p style="margin: 5px 0; color: #6b7280;"><strong>Phone:</strong> {escape(customer.phone)}</p>
      <p style="margin: 5px 0; color: #6b7280;"><strong>Time:</strong> {escape(timestamp)}</p>
    </div>
    <div style="background: white; padding: 20px; border-radius: 8px; border: 1px solid #e5e7eb;">
      <h3 style="color: #374151; margin: 0 0 15px 0;">Order Items</h3>{_items_table(items, total, "Total")}
    </div>"""
    subject = f"\U0001f389 New Order from {name} - {money(total)}"
    html = _layout(
        GOLD_HEADER,
        "\U0001f389 New Order Received!",
        body,
        f"This is an automated notification from {escape(store_name)}.",
    )
    return subject, html


def render_customer_confirmation_email(
    user_name: str,
    items: Iterable[LineItem],
    total: float,
    timestamp: str,
    store_name: str = "Luxury Perfumes",
) -> Tuple[str, str]:
    """Order confirmation sent to the customer."""
    store = escape(store_name)
    body = f"""
    <p style="color: #374151; font-size: 16px; margin-bottom: 20px;">Dear <strong>{escape(user_name)}</strong>,</p>
    <p style="color: #6b7280; font-size: 14px; margin-bottom: 20px;">
      We're thrilled to confirm your order from {store}. Here's a summary of your purchase:
    </p>
    <div style="background: white; padding: 20px; border-radius: 8px; margin-bottom: 20px;">{_items_table(items, total, "Total Amount")}
    </div>
    <div style="background: #fef3c7; padding: 15px; border-radius: 8px; margin-bottom: 20px;">
      <p style="color: #92400e; margin: 0; font-size: 14px;">
        <strong>What's Next?</strong><br>
        Our team will contact you shortly to confirm your order and arrange delivery.
      </p>
    </div>
    <p style="color: #6b7280; font-size: 14px; margin-bottom: 10px;"><strong>Order Date:</strong> {escape(timestamp)}</p>"""
    subject = "\U0001f389 Order Confirmed - Thank You for Shopping with Us!"
    html = _layout(
        GOLD_HEADER,
        "Thank You for Your Order!",
        body,
        f"Thank you for choosing {store}!<br>If you have any questions, please contact our support team.",
    )
    return subject, html


def render_cart_activity_email(
    customer: CustomerInfo,
    product_title: str,
    quantity: int,
    timestamp: str,
) -> Tuple[str, str]:
    """Admin alert sent when a customer adds a product to their cart."""
    title = escape(product_title)
    row = '<tr><td style="padding: 10px 0; color: #6b7280; font-size: 14px;">{}</td><td style="padding: 10px 0; color: #111827; font-size: 14px; font-weight: 600;">{}</td></tr>'
    body = f"""
    <p style="color: #374151; font-size: 16px; margin-bottom: 20px;">
      <strong>{escape(customer.name)}</strong> added an item to their cart.
    </p>
    <div style="background: white; padding: 20px; border-radius: 8px; border: 1px solid #e5e7eb;">
      <table style="width: 100%; border-collapse: collapse;">
        {row.format("Product:", title)}
        {row.format("Quantity:", quantity)}
        {row.format("Customer Email:", escape(customer.email))}
        {row.format("Time:", escape(timestamp))}
      </table>
    </div>"""
    subject = f"\U0001f6d2 New Cart Activity - {title}"
    html = _layout(
        PURPLE_HEADER,
        "\U0001f6d2 New Cart Activity!",
        body,
        "This is an automated notification from your store.",
    )
    return subject, html
