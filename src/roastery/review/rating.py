"""Per-product rating, computed from reviews on every read."""

import math
from dataclasses import dataclass

from protean.utils.globals import current_domain

from roastery.review.review import Review


@dataclass(frozen=True)
class ProductRating:
    average_rating: float | None
    review_count: int

    @property
    def stars(self) -> int | None:
        """Average rounded half-up to whole stars, between 1 and 5."""
        if self.average_rating is None:
            return None
        return max(1, min(5, math.floor(self.average_rating + 0.5)))

    def to_dict(self) -> dict:
        return {"average_rating": self.average_rating, "review_count": self.review_count, "stars": self.stars}


def rate(reviews) -> ProductRating:
    """Average the overall ratings of ``reviews``.

    Every review counts towards ``review_count``; only those with a numeric
    overall rating count towards the average.
    """
    reviews = list(reviews)
    ratings = [r.overall_rating for r in reviews if r.overall_rating is not None]
    average = sum(ratings) / len(ratings) if ratings else None
    if average is not None and not math.isfinite(average):
        # The sum overflowed; scale each rating down first
        average = sum(r / len(ratings) for r in ratings)
    return ProductRating(average_rating=average, review_count=len(reviews))


def rating_for(product_id) -> ProductRating:
    return rate(current_domain.repository_for(Review).find_for_product(product_id))
