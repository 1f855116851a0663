"""Review feed: every review with its customer and product, plus summary stats."""

from protean.utils.globals import current_domain

from roastery.catalogue.product import Product
from roastery.order.order import Order
from roastery.review.rating import rate
from roastery.review.review import Review


def review_entry(review: Review, customer_name=None, product=None) -> dict:
    data = review.analysis_data
    return {
        "id": str(review.id),
        "call_id": review.call_id,
        "order_id": str(review.order_id),
        "product_id": str(review.product_id),
        "product_name": product.name if product else None,
        "category": product.category if product else None,
        "customer_name": customer_name,
        "transcript": review.transcript,
        "summary": review.summary,
        "analysis": data or None,
        "overall_rating": review.overall_rating,
        "created_at": review.created_at,
        "updated_at": review.updated_at,
    }


def customer_names(order_ids) -> dict[str, str]:
    """Customer name of each order, for the ids that still resolve."""
    order_dao = current_domain.repository_for(Order)._dao
    names = {}
    for order_id in set(map(str, order_ids)):
        order = order_dao.query.filter(id=order_id).all().first
        if order is not None:
            names[order_id] = order.customer_name
    return names


def review_feed() -> dict:
    """All reviews newest first, with totals over the whole feed."""
    reviews = current_domain.repository_for(Review).latest()
    products = {str(p.id): p for p in current_domain.repository_for(Product)._dao.query.all().items}
    names = customer_names(r.order_id for r in reviews)

    rating = rate(reviews)
    would_recommend = sum(
        1 for r in reviews if r.overall_rating is not None and r.analysis_data.get("would_recommend") is True
    )

    return {
        "stats": {
            "total_reviews": rating.review_count,
            "average_rating": round(rating.average_rating, 2) if rating.average_rating is not None else None,
            "would_recommend": would_recommend,
        },
        "reviews": [
            review_entry(r, customer_name=names.get(str(r.order_id)), product=products.get(str(r.product_id)))
            for r in reviews
        ],
    }
