"""Product aggregate: a coffee or brewing-equipment item in the catalogue.

Products are seeded by the management CLI and never change at runtime.
Roast and origin only make sense for coffee.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, String, Text

from roastery.catalogue.events import ProductAdded
from roastery.domain import roastery


class ProductCategory(Enum):
    COFFEE = "coffee"
    EQUIPMENT = "equipment"


class RoastLevel(Enum):
    LIGHT = "light"
    MEDIUM = "medium"
    DARK = "dark"


@roastery.aggregate
class Product:
    name = String(required=True, max_length=255)
    description = Text()
    category = String(required=True, choices=ProductCategory)
    roast = String(choices=RoastLevel)
    origin = String(max_length=100)  # Country name, or "Blend"
    price = Float(required=True, min_value=0.0)
    image_url = String(max_length=500)
    created_at = DateTime()

    @invariant.post
    def only_coffee_has_roast_and_origin(self):
        if self.category == ProductCategory.EQUIPMENT.value and (self.roast or self.origin):
            raise ValidationError({"category": ["Roast and origin apply to coffee only"]})

    @invariant.post
    def name_must_not_be_blank(self):
        if self.name is not None and not self.name.strip():
            raise ValidationError({"name": ["Product name cannot be blank"]})

    @property
    def is_coffee(self) -> bool:
        return self.category == ProductCategory.COFFEE.value

    @classmethod
    def add(cls, name, category, price, description=None, roast=None, origin=None, image_url=None):
        """Add a product to the catalogue."""
        now = datetime.now(UTC)
        product = cls(
            name=name,
            description=description,
            category=category,
            roast=roast,
            origin=origin,
            price=round(price, 2),
            image_url=image_url,
            created_at=now,
        )

        product.raise_(
            ProductAdded(
                product_id=str(product.id),
                name=name,
                category=category,
                price=product.price,
                added_at=now,
            )
        )
        return product
