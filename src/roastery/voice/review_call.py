"""Starting a voice review call for an order."""

from datetime import datetime

from protean.utils.globals import current_domain

from roastery.order.details import product_names_for
from roastery.order.order import Order
from roastery.voice import get_voice_client
from roastery.voice.port import WebCall


def format_order_date(created_at: datetime | None) -> str:
    """``March 5, 2025`` style date, or a stand-in when the date is unknown."""
    if created_at is None:
        return "your recent order"
    return f"{created_at:%B} {created_at.day}, {created_at.year}"


def start_review_call(order_id) -> WebCall:
    """Ask the voice service for a call about ``order_id``.

    The order id travels in the call's metadata and comes back with the
    call's webhook events, which is how reviews are tied to the order.
    """
    order = current_domain.repository_for(Order).get(order_id)
    return get_voice_client().create_web_call(
        order_id=str(order.id),
        customer_name=order.customer_name,
        product_names=product_names_for(order),
        order_date=format_order_date(order.created_at),
    )
