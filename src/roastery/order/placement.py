"""Order placement — command and handler.

``submit_order`` is the whole write path of checkout. It is shared by the
``PlaceOrder`` handler and cart checkout, so both run it inside the unit of
work of the command being handled: the order and all of its line items are
stored together or not at all.
"""

import json

import structlog
from protean import handle
from protean.fields import Float, String, Text
from protean.utils.globals import current_domain

from roastery.catalogue.product import Product
from roastery.domain import roastery
from roastery.order.order import Order

logger = structlog.get_logger(__name__)


@roastery.command(part_of="Order")
class PlaceOrder:
    customer_name = String(required=True, max_length=255)
    customer_email = String(required=True, max_length=254)
    items = Text(required=True)  # JSON: list of {product_id, quantity, unit_price}
    total_amount = Float()


def submit_order(customer_name, customer_email, items_data, total_amount=None) -> Order:
    """Validate a checkout request and store the resulting order.

    Raises ``ValidationError`` for a malformed request and
    ``ObjectNotFoundError`` when a line refers to a product that does not
    exist. Nothing is written in either case.
    """
    order = Order.place(
        customer_name=customer_name,
        customer_email=customer_email,
        items_data=items_data,
        total_amount=total_amount,
    )

    product_repo = current_domain.repository_for(Product)
    for product_id in order.product_ids:
        product_repo.get(product_id)

    current_domain.repository_for(Order).add(order)
    logger.info(
        "Order placed",
        order_id=str(order.id),
        customer_email=order.customer_email,
        item_count=len(order.items),
        total_amount=order.total_amount,
    )
    return order


@roastery.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        items_data = json.loads(command.items) if isinstance(command.items, str) else command.items
        order = submit_order(
            customer_name=command.customer_name,
            customer_email=command.customer_email,
            items_data=items_data,
            total_amount=command.total_amount,
        )
        return str(order.id)
