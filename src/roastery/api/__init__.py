"""Storefront API package."""

from roastery.api.routes import cart_router, order_router, product_router, review_router, webhook_router

__all__ = ["product_router", "cart_router", "order_router", "review_router", "webhook_router"]
