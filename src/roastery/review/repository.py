"""Repository for the Review aggregate."""

from roastery.domain import roastery
from roastery.review.review import Review


@roastery.repository(part_of=Review)
class ReviewRepository:
    def find_by_call_id(self, call_id) -> list[Review]:
        return self._dao.query.filter(call_id=call_id).all().items

    def find_for_product(self, product_id) -> list[Review]:
        """Reviews of one product, newest first."""
        reviews = self._dao.query.filter(product_id=product_id).all().items
        return sorted(reviews, key=lambda r: r.created_at, reverse=True)

    def latest(self) -> list[Review]:
        """Every review, newest first."""
        return sorted(self._dao.query.all().items, key=lambda r: r.created_at, reverse=True)
