"""Repository for the Product aggregate."""

from roastery.catalogue.product import Product
from roastery.domain import roastery


@roastery.repository(part_of=Product)
class ProductRepository:
    def list_products(self, category: str | None = None) -> list[Product]:
        """All products, optionally narrowed to one category, sorted by name."""
        if category:
            products = self._dao.query.filter(category=category).all().items
        else:
            products = self._dao.query.all().items
        return sorted(products, key=lambda p: p.name)

