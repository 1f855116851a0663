"""Domain events for the Product aggregate."""

from protean.fields import DateTime, Float, Identifier, String

from roastery.domain import roastery


@roastery.event(part_of="Product")
class ProductAdded:
    """A product was added to the catalogue by the seeding process."""

    __version__ = 1

    product_id = Identifier(required=True)
    name = String(required=True)
    category = String(required=True)
    price = Float(required=True)
    added_at = DateTime(required=True)
