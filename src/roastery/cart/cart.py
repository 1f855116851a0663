"""Shopping Cart aggregate (CQRS).

Each cart is its own aggregate, addressed by its id which the client keeps
as a session token. A cart only records which products were picked and how
many of each; prices are looked up from the catalogue whenever totals are
needed (see ``roastery.cart.pricing``).
"""

from datetime import UTC, datetime

from protean.fields import DateTime, HasMany, Identifier, Integer, String

from roastery.cart.events import CartCleared, CartItemAdded, CartItemRemoved, CartQuantityUpdated
from roastery.domain import roastery


@roastery.entity(part_of="ShoppingCart")
class CartItem:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    added_at = DateTime()


@roastery.aggregate
class ShoppingCart:
    session_id = String(max_length=255)  # Optional client-side label
    items = HasMany(CartItem)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(cls, session_id=None):
        now = datetime.now(UTC)
        return cls(session_id=session_id, created_at=now, updated_at=now)

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)

    def line_for(self, product_id):
        return next((i for i in self.items if str(i.product_id) == str(product_id)), None)

    def add_item(self, product_id):
        """Put a product in the cart with quantity one.

        Adding a product that is already in the cart changes nothing; use
        ``update_quantity`` to buy more of it.
        """
        if self.line_for(product_id) is not None:
            return

        now = datetime.now(UTC)
        self.add_items(CartItem(product_id=product_id, quantity=1, added_at=now))
        self.updated_at = now

        self.raise_(CartItemAdded(cart_id=str(self.id), product_id=str(product_id)))

    def update_quantity(self, product_id, new_quantity):
        """Set the quantity of a line. Zero or less removes the line."""
        item = self.line_for(product_id)
        if item is None:
            return

        if new_quantity <= 0:
            self.remove_item(product_id)
            return

        previous_quantity = item.quantity
        item.quantity = new_quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartQuantityUpdated(
                cart_id=str(self.id),
                product_id=str(product_id),
                previous_quantity=previous_quantity,
                new_quantity=new_quantity,
            )
        )

    def remove_item(self, product_id):
        item = self.line_for(product_id)
        if item is None:
            return

        self.remove_items(item)
        self.updated_at = datetime.now(UTC)

        self.raise_(CartItemRemoved(cart_id=str(self.id), product_id=str(product_id)))

    def clear(self):
        if not self.items:
            return

        for item in list(self.items):
            self.remove_items(item)
        now = datetime.now(UTC)
        self.updated_at = now

        self.raise_(CartCleared(cart_id=str(self.id), cleared_at=now))
