"""Cart totals priced from the current catalogue."""

from dataclasses import dataclass, field

from protean.utils.globals import current_domain

from roastery.cart.cart import ShoppingCart
from roastery.catalogue.product import Product


@dataclass(frozen=True)
class CartLine:
    product_id: str
    name: str
    category: str
    unit_price: float
    quantity: int

    @property
    def line_total(self) -> float:
        return round(self.unit_price * self.quantity, 2)


@dataclass(frozen=True)
class CartSummary:
    cart_id: str
    lines: list[CartLine] = field(default_factory=list)

    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self.lines)

    @property
    def total_amount(self) -> float:
        return round(sum(line.unit_price * line.quantity for line in self.lines), 2)

    def checkout_items(self) -> list[dict]:
        return [
            {"product_id": line.product_id, "quantity": line.quantity, "unit_price": line.unit_price}
            for line in self.lines
        ]


def summarize_cart(cart: ShoppingCart) -> CartSummary:
    """Price every line of ``cart`` at the product's current listed price."""
    product_repo = current_domain.repository_for(Product)
    lines = []
    for item in sorted(cart.items, key=lambda i: i.added_at):
        product = product_repo.get(item.product_id)
        lines.append(
            CartLine(
                product_id=str(item.product_id),
                name=product.name,
                category=product.category,
                unit_price=product.price,
                quantity=item.quantity,
            )
        )
    return CartSummary(cart_id=str(cart.id), lines=lines)
