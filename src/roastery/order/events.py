"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, String, Text

from roastery.domain import roastery


@roastery.event(part_of="Order")
class OrderPlaced:
    """A customer checked out and the order with its line items was stored."""

    __version__ = 1

    order_id = Identifier(required=True)
    customer_name = String(required=True)
    customer_email = String(required=True)
    items = Text(required=True)  # JSON: list of {product_id, quantity, price_at_purchase}
    total_amount = Float(required=True)
    placed_at = DateTime(required=True)
