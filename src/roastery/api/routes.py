"""FastAPI routes for the storefront: catalogue, carts, orders, reviews and the Retell webhook."""

import json
from dataclasses import asdict

import structlog
from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import JSONResponse
from protean.utils.globals import current_domain

from roastery.api.schemas import (
    AddToCartRequest,
    CartIdResponse,
    CartSchema,
    CheckoutRequest,
    CreateCartRequest,
    OrderDetailSchema,
    OrderIdResponse,
    OrderSummarySchema,
    PlaceOrderRequest,
    ProductDetailSchema,
    ProductSchema,
    RetellWebhookPayload,
    ReviewFeedSchema,
    UpdateQuantityRequest,
    WebCallResponse,
    WebhookAckResponse,
)
from roastery.cart.cart import ShoppingCart
from roastery.cart.checkout import CheckoutCart
from roastery.cart.management import AddToCart, ClearCart, CreateCart, RemoveFromCart, UpdateCartQuantity
from roastery.cart.pricing import summarize_cart
from roastery.catalogue.listing import list_products, product_detail
from roastery.catalogue.product import ProductCategory
from roastery.order.details import order_details, order_history
from roastery.order.placement import PlaceOrder
from roastery.review.feed import review_feed
from roastery.review.ingestion import AttachCallAnalysis, record_call_transcript
from roastery.voice.port import VoiceConfigurationError, VoiceServiceError
from roastery.voice.review_call import start_review_call

logger = structlog.get_logger(__name__)


# ---------------------------------------------------------------------------
# Product Router
# ---------------------------------------------------------------------------
product_router = APIRouter(prefix="/products", tags=["products"])


@product_router.get("", response_model=list[ProductSchema])
async def get_products(category: str | None = None) -> list[dict]:
    """List the catalogue with each product's current rating."""
    if category is not None and category not in {c.value for c in ProductCategory}:
        raise HTTPException(status_code=400, detail=f"Unknown category: {category}")
    return list_products(category)


@product_router.get("/{product_id}", response_model=ProductDetailSchema)
async def get_product(product_id: str) -> dict:
    return product_detail(product_id)


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/carts", tags=["carts"])


def _cart_view(cart_id: str) -> CartSchema:
    summary = summarize_cart(current_domain.repository_for(ShoppingCart).get(cart_id))
    return CartSchema(
        id=summary.cart_id,
        item_count=summary.item_count,
        total_amount=summary.total_amount,
        items=[{**asdict(line), "line_total": line.line_total} for line in summary.lines],
    )


@cart_router.post("", status_code=201, response_model=CartIdResponse)
async def create_cart(body: CreateCartRequest | None = None) -> CartIdResponse:
    """Open a new cart. The returned id is the client's session token."""
    cart_id = current_domain.process(
        CreateCart(session_id=body.session_id if body else None),
        asynchronous=False,
    )
    return CartIdResponse(cart_id=cart_id)


@cart_router.get("/{cart_id}", response_model=CartSchema)
async def get_cart(cart_id: str) -> CartSchema:
    return _cart_view(cart_id)


@cart_router.post("/{cart_id}/items", response_model=CartSchema)
async def add_to_cart(cart_id: str, body: AddToCartRequest) -> CartSchema:
    current_domain.process(AddToCart(cart_id=cart_id, product_id=body.product_id), asynchronous=False)
    return _cart_view(cart_id)


@cart_router.put("/{cart_id}/items/{product_id}", response_model=CartSchema)
async def update_cart_quantity(cart_id: str, product_id: str, body: UpdateQuantityRequest) -> CartSchema:
    current_domain.process(
        UpdateCartQuantity(cart_id=cart_id, product_id=product_id, new_quantity=body.quantity),
        asynchronous=False,
    )
    return _cart_view(cart_id)


@cart_router.delete("/{cart_id}/items/{product_id}", response_model=CartSchema)
async def remove_from_cart(cart_id: str, product_id: str) -> CartSchema:
    current_domain.process(RemoveFromCart(cart_id=cart_id, product_id=product_id), asynchronous=False)
    return _cart_view(cart_id)


@cart_router.delete("/{cart_id}/items", response_model=CartSchema)
async def clear_cart(cart_id: str) -> CartSchema:
    current_domain.process(ClearCart(cart_id=cart_id), asynchronous=False)
    return _cart_view(cart_id)


@cart_router.post("/{cart_id}/checkout", status_code=201, response_model=OrderIdResponse)
async def checkout_cart(cart_id: str, body: CheckoutRequest) -> OrderIdResponse:
    """Place an order for everything in the cart at current prices, then empty it."""
    order_id = current_domain.process(
        CheckoutCart(cart_id=cart_id, customer_name=body.customer_name, customer_email=body.customer_email),
        asynchronous=False,
    )
    return OrderIdResponse(order_id=order_id)


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.post("", status_code=201, response_model=OrderIdResponse)
async def place_order(body: PlaceOrderRequest) -> OrderIdResponse:
    command = PlaceOrder(
        customer_name=body.customer_name,
        customer_email=body.customer_email,
        items=json.dumps([item.model_dump() for item in body.items]),
        total_amount=body.total_amount,
    )
    order_id = current_domain.process(command, asynchronous=False)
    return OrderIdResponse(order_id=order_id)


@order_router.get("", response_model=list[OrderSummarySchema])
async def list_orders() -> list[dict]:
    return order_history()


@order_router.get("/{order_id}", response_model=OrderDetailSchema)
async def get_order(order_id: str) -> dict:
    return order_details(order_id)


@order_router.post("/{order_id}/review-call", response_model=WebCallResponse)
async def create_review_call(order_id: str) -> WebCallResponse:
    """Start a voice review call about the order's products."""
    try:
        web_call = start_review_call(order_id)
    except VoiceConfigurationError as exc:
        raise HTTPException(status_code=503, detail=exc.message) from exc
    except VoiceServiceError as exc:
        raise HTTPException(
            status_code=502,
            detail={"message": exc.message, "upstream_status": exc.status, "upstream_body": exc.body},
        ) from exc
    return WebCallResponse(call_id=web_call.call_id, access_token=web_call.access_token)


# ---------------------------------------------------------------------------
# Review Router
# ---------------------------------------------------------------------------
review_router = APIRouter(prefix="/reviews", tags=["reviews"])


@review_router.get("", response_model=ReviewFeedSchema)
async def get_reviews() -> dict:
    return review_feed()


# ---------------------------------------------------------------------------
# Webhook Router
# ---------------------------------------------------------------------------
webhook_router = APIRouter(prefix="/webhooks", tags=["webhooks"])


def _dispatch_call_event(payload: RetellWebhookPayload) -> None:
    call = payload.call
    log = logger.bind(webhook_event=payload.event, call_id=call.call_id)

    if payload.event == "call_ended":
        record_call_transcript(
            call_id=call.call_id,
            order_id=call.metadata.order_id if call.metadata else None,
            transcript=call.transcript,
        )
    elif payload.event == "call_analyzed":
        if call.call_analysis is None:
            log.warning("call_analyzed without call_analysis, dropping event")
            return
        analysis = call.call_analysis.custom_analysis_data
        current_domain.process(
            AttachCallAnalysis(
                call_id=call.call_id,
                summary=call.call_analysis.call_summary,
                analysis=json.dumps(analysis) if analysis is not None else None,
            ),
            asynchronous=False,
        )
    else:
        log.debug("Ignoring webhook event")


@webhook_router.post("/retell", response_model=WebhookAckResponse)
async def retell_webhook(request: Request):
    """Receive call lifecycle events from Retell.

    Deliveries that cannot be parsed are acknowledged, so Retell does not
    keep retrying them. Anything that fails while handling a valid event is
    reported as a 500 with the error message.
    """
    try:
        payload = RetellWebhookPayload.model_validate(await request.json())
    except ValueError as exc:
        logger.warning("Malformed Retell webhook ignored", error=str(exc))
        return WebhookAckResponse()

    try:
        _dispatch_call_event(payload)
    except Exception as exc:
        logger.exception("Retell webhook failed", webhook_event=payload.event, call_id=payload.call.call_id)
        return JSONResponse(status_code=500, content={"error": str(exc)})

    return WebhookAckResponse()
