"""Repository for the Order aggregate."""

from roastery.domain import roastery
from roastery.order.order import Order


@roastery.repository(part_of=Order)
class OrderRepository:
    def recent(self) -> list[Order]:
        """All orders, newest first."""
        orders = self._dao.query.all().items
        return sorted(orders, key=lambda o: o.created_at, reverse=True)
