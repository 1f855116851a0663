"""Read-side helpers for orders: confirmation details and order history."""

from protean.utils.globals import current_domain

from roastery.catalogue.product import Product
from roastery.order.order import Order


def order_details(order_id) -> dict:
    """An order with its line items joined to product name and category.

    Raises ``ObjectNotFoundError`` for an unknown order. A line whose
    product has since disappeared from the catalogue keeps its snapshot
    data and is shown without a name.
    """
    order = current_domain.repository_for(Order).get(order_id)
    product_repo = current_domain.repository_for(Product)
    products = {str(p.id): p for p in product_repo._dao.query.all().items}

    items = []
    for item in order.items:
        product = products.get(str(item.product_id))
        items.append(
            {
                "product_id": str(item.product_id),
                "product_name": product.name if product else None,
                "category": product.category if product else None,
                "quantity": item.quantity,
                "price_at_purchase": item.price_at_purchase,
                "line_total": round(item.line_total, 2),
            }
        )

    return {
        "id": str(order.id),
        "customer_name": order.customer_name,
        "customer_email": order.customer_email,
        "status": order.status,
        "total_amount": order.total_amount,
        "created_at": order.created_at,
        "items": items,
    }


def order_history() -> list[dict]:
    """Every order, newest first, with its item count."""
    return [
        {
            "id": str(order.id),
            "customer_name": order.customer_name,
            "customer_email": order.customer_email,
            "status": order.status,
            "total_amount": order.total_amount,
            "item_count": sum(item.quantity for item in order.items),
            "created_at": order.created_at,
        }
        for order in current_domain.repository_for(Order).recent()
    ]


def product_names_for(order: Order) -> list[str]:
    """Names of the distinct products on an order, in line order."""
    product_repo = current_domain.repository_for(Product)
    return [product_repo.get(product_id).name for product_id in order.product_ids]
