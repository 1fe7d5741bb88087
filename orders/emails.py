"""Email utilities for the orders app.

Uses Django's email backend, with links composed from FRONTEND_URL.
"""

from django.conf import settings
from django.core.mail import send_mail


def send_order_confirmation_email(order) -> None:
    """Send an order confirmation to the order's email address.

    Includes a link to view the order on the frontend using `FRONTEND_URL`.
    Silently no-ops if no email is present.
    """
    to_email = order.email or getattr(order.user, "email", None)
    if not to_email:
        return

    reference = order.number or order.id
    subject = f"Your order {reference} is confirmed"
    frontend = getattr(settings, "FRONTEND_URL", "")
    order_url = f"{frontend.rstrip('/')}/order/{order.id}"

    lines = "".join(f"  {item['quantity']} x {item['name']} @ {item['unit_price']}\n" for item in order.order_items)
    body = (
        "Thank you for your purchase!\n\n"
        f"Order: {reference}\n"
        f"{lines}"
        f"Total: {order.total_price}\n"
        f"Ship to: {order.address}, {order.city} {order.postal_code}, {order.country}\n\n"
        f"You can view your order here: {order_url}\n"
    )

    send_mail(
        subject,
        body,
        getattr(settings, "DEFAULT_FROM_EMAIL", None),
        [to_email],
        fail_silently=True,
    )
