"""Catalogue reads: products with their current ratings."""

from protean.utils.globals import current_domain

from roastery.catalogue.product import Product
from roastery.review.feed import customer_names, review_entry
from roastery.review.rating import rate, rating_for
from roastery.review.review import Review


def product_entry(product: Product) -> dict:
    return {
        "id": str(product.id),
        "name": product.name,
        "description": product.description,
        "category": product.category,
        "roast": product.roast,
        "origin": product.origin,
        "price": product.price,
        "image_url": product.image_url,
    }


def list_products(category=None) -> list[dict]:
    products = current_domain.repository_for(Product).list_products(category)
    return [{**product_entry(p), "rating": rating_for(p.id).to_dict()} for p in products]


def product_detail(product_id) -> dict:
    """A product with its reviews, newest first. Unknown ids raise ``ObjectNotFoundError``."""
    product = current_domain.repository_for(Product).get(product_id)
    reviews = current_domain.repository_for(Review).find_for_product(product.id)
    names = customer_names(r.order_id for r in reviews)

    return {
        **product_entry(product),
        "rating": rate(reviews).to_dict(),
        "reviews": [review_entry(r, customer_name=names.get(str(r.order_id)), product=product) for r in reviews],
    }
