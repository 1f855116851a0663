"""Cart checkout — command and handler.

Turns the cart's lines into an order at current catalogue prices and empties
the cart, both in the same unit of work.
"""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from roastery.cart.cart import ShoppingCart
from roastery.cart.pricing import summarize_cart
from roastery.domain import roastery
from roastery.order.placement import submit_order

logger = structlog.get_logger(__name__)


@roastery.command(part_of="ShoppingCart")
class CheckoutCart:
    cart_id = Identifier(required=True)
    customer_name = String(required=True, max_length=255)
    customer_email = String(required=True, max_length=254)


@roastery.command_handler(part_of=ShoppingCart)
class CheckoutCartHandler:
    @handle(CheckoutCart)
    def checkout_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.get(command.cart_id)
        if not cart.items:
            raise ValidationError({"cart": ["Cannot check out an empty cart"]})

        summary = summarize_cart(cart)
        order = submit_order(
            customer_name=command.customer_name,
            customer_email=command.customer_email,
            items_data=summary.checkout_items(),
            total_amount=summary.total_amount,
        )

        cart.clear()
        repo.add(cart)
        logger.info("Cart checked out", cart_id=str(cart.id), order_id=str(order.id))
        return str(order.id)
