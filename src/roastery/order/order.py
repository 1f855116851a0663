"""Order aggregate (CQRS).

An order is written once, at checkout, with status ``completed`` and is
never changed afterwards. Its total is always the sum of its line items.
"""

import json
import re
from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String

from roastery.domain import roastery
from roastery.order.events import OrderPlaced

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

# A caller-supplied total may be off by at most half a cent
TOTAL_TOLERANCE = 0.005


class OrderStatus(Enum):
    PENDING = "pending"
    COMPLETED = "completed"


def is_valid_email(value) -> bool:
    return bool(value) and EMAIL_PATTERN.match(value) is not None


@roastery.entity(part_of="Order")
class OrderItem:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    price_at_purchase = Float(required=True, min_value=0.0)

    @property
    def line_total(self) -> float:
        return self.price_at_purchase * self.quantity


@roastery.aggregate
class Order:
    customer_name = String(required=True, max_length=255)
    customer_email = String(required=True, max_length=254)
    status = String(choices=OrderStatus, default=OrderStatus.COMPLETED.value)
    total_amount = Float(required=True, min_value=0.0)
    items = HasMany(OrderItem)
    created_at = DateTime()

    @invariant.post
    def customer_email_must_be_valid(self):
        if not is_valid_email(self.customer_email):
            raise ValidationError({"customer_email": ["Invalid email address"]})

    @invariant.post
    def total_must_match_line_items(self):
        if self.total_amount is None:
            return
        if abs(self.total_amount - self.items_total()) > TOTAL_TOLERANCE:
            raise ValidationError({"total_amount": ["Order total does not match its line items"]})

    def items_total(self) -> float:
        return round(sum(item.line_total for item in self.items), 2)

    @property
    def product_ids(self) -> list[str]:
        """Distinct product ids across line items, in line order."""
        return list(dict.fromkeys(str(item.product_id) for item in self.items))

    @classmethod
    def place(cls, customer_name, customer_email, items_data, total_amount=None):
        """Create a completed order from a checkout request.

        Args:
            customer_name: Name given at checkout.
            customer_email: Contact email, checked for basic format.
            items_data: List of dicts with product_id, quantity, unit_price.
            total_amount: Total the client displayed. Optional; when given it
                must agree with the line items to within half a cent.

        Everything is checked before the aggregate is built, so a rejected
        request never produces a partially formed order.
        """
        customer_name = (customer_name or "").strip()
        customer_email = (customer_email or "").strip()

        errors = {}
        if not customer_name:
            errors["customer_name"] = ["Customer name is required"]
        if not is_valid_email(customer_email):
            errors["customer_email"] = ["Invalid email address"]
        if not items_data:
            errors["items"] = ["Order must contain at least one item"]

        for item in items_data or []:
            if item.get("quantity") is None or item["quantity"] < 1:
                errors.setdefault("items", []).append(f"Quantity must be at least 1 for product {item.get('product_id')}")
            if item.get("unit_price") is None or item["unit_price"] < 0:
                errors.setdefault("items", []).append(f"Price cannot be negative for product {item.get('product_id')}")

        if errors:
            raise ValidationError(errors)

        computed_total = round(sum(item["unit_price"] * item["quantity"] for item in items_data), 2)
        if total_amount is not None and abs(total_amount - computed_total) > TOTAL_TOLERANCE:
            raise ValidationError(
                {"total_amount": [f"Total {total_amount:.2f} does not match line items ({computed_total:.2f})"]}
            )

        now = datetime.now(UTC)
        order = cls(
            customer_name=customer_name,
            customer_email=customer_email,
            status=OrderStatus.COMPLETED.value,
            total_amount=computed_total,
            items=[
                OrderItem(
                    product_id=item["product_id"],
                    quantity=item["quantity"],
                    price_at_purchase=item["unit_price"],
                )
                for item in items_data
            ],
            created_at=now,
        )

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                customer_name=order.customer_name,
                customer_email=order.customer_email,
                items=json.dumps(
                    [
                        {
                            "product_id": str(item.product_id),
                            "quantity": item.quantity,
                            "price_at_purchase": item.price_at_purchase,
                        }
                        for item in order.items
                    ]
                ),
                total_amount=order.total_amount,
                placed_at=now,
            )
        )
        return order
