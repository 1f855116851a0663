"""Domain events for the ShoppingCart aggregate."""

from protean.fields import DateTime, Identifier, Integer

from roastery.domain import roastery


@roastery.event(part_of="ShoppingCart")
class CartItemAdded:
    """A product was put in the cart with quantity one."""

    __version__ = 1

    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)


@roastery.event(part_of="ShoppingCart")
class CartQuantityUpdated:
    __version__ = 1

    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)


@roastery.event(part_of="ShoppingCart")
class CartItemRemoved:
    __version__ = 1

    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)


@roastery.event(part_of="ShoppingCart")
class CartCleared:
    """All lines were removed, either by the shopper or after checkout."""

    __version__ = 1

    cart_id = Identifier(required=True)
    cleared_at = DateTime(required=True)
