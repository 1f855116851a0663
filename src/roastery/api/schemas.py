"""Pydantic request/response schemas for the storefront API.

These are external contracts (anti-corruption layer) — separate from
internal Protean commands. Business rules (non-empty orders, valid emails,
positive quantities) are left to the domain, which reports them as 400s.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, field_validator


# ---------------------------------------------------------------------------
# Catalogue
# ---------------------------------------------------------------------------
class RatingSchema(BaseModel):
    average_rating: float | None = None
    review_count: int = 0
    stars: int | None = None


class ReviewSchema(BaseModel):
    id: str
    call_id: str
    order_id: str
    product_id: str
    product_name: str | None = None
    category: str | None = None
    customer_name: str | None = None
    transcript: str | None = None
    summary: str | None = None
    analysis: dict[str, Any] | None = None
    overall_rating: float | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ProductSchema(BaseModel):
    id: str
    name: str
    description: str | None = None
    category: str
    roast: str | None = None
    origin: str | None = None
    price: float
    image_url: str | None = None
    rating: RatingSchema


class ProductDetailSchema(ProductSchema):
    reviews: list[ReviewSchema] = []


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
class CreateCartRequest(BaseModel):
    session_id: str | None = Field(default=None, max_length=255)


class AddToCartRequest(BaseModel):
    product_id: str


class UpdateQuantityRequest(BaseModel):
    quantity: int  # Zero or less removes the line


class CheckoutRequest(BaseModel):
    customer_name: str
    customer_email: str


class CartLineSchema(BaseModel):
    product_id: str
    name: str
    category: str
    unit_price: float
    quantity: int
    line_total: float


class CartSchema(BaseModel):
    id: str
    item_count: int
    total_amount: float
    items: list[CartLineSchema]


class CartIdResponse(BaseModel):
    cart_id: str


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
class OrderItemRequest(BaseModel):
    product_id: str
    quantity: int
    unit_price: float


class PlaceOrderRequest(BaseModel):
    customer_name: str
    customer_email: str
    items: list[OrderItemRequest]
    total_amount: float | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "customer_name": "Ada Lovelace",
                    "customer_email": "ada@example.com",
                    "items": [{"product_id": "prod-001", "quantity": 2, "unit_price": 18.99}],
                    "total_amount": 37.98,
                }
            ]
        }
    }


class OrderIdResponse(BaseModel):
    order_id: str


class OrderLineSchema(BaseModel):
    product_id: str
    product_name: str | None = None
    category: str | None = None
    quantity: int
    price_at_purchase: float
    line_total: float


class OrderDetailSchema(BaseModel):
    id: str
    customer_name: str
    customer_email: str
    status: str
    total_amount: float
    created_at: datetime | None = None
    items: list[OrderLineSchema]


class OrderSummarySchema(BaseModel):
    id: str
    customer_name: str
    customer_email: str
    status: str
    total_amount: float
    item_count: int
    created_at: datetime | None = None


class WebCallResponse(BaseModel):
    call_id: str
    access_token: str


# ---------------------------------------------------------------------------
# Reviews
# ---------------------------------------------------------------------------
class ReviewStatsSchema(BaseModel):
    total_reviews: int
    average_rating: float | None = None
    would_recommend: int


class ReviewFeedSchema(BaseModel):
    stats: ReviewStatsSchema
    reviews: list[ReviewSchema]


# ---------------------------------------------------------------------------
# Retell webhook
# ---------------------------------------------------------------------------
class RetellCallMetadata(BaseModel):
    order_id: str | None = None

    @field_validator("order_id", mode="before")
    @classmethod
    def coerce_order_id(cls, value):
        return str(value) if value is not None else None


class RetellCallAnalysis(BaseModel):
    call_summary: str | None = None
    custom_analysis_data: dict[str, Any] | None = None


class RetellCall(BaseModel):
    call_id: str = Field(min_length=1)
    transcript: str | None = None
    metadata: RetellCallMetadata | None = None
    call_analysis: RetellCallAnalysis | None = None


class RetellWebhookPayload(BaseModel):
    """Envelope of every Retell webhook delivery. Unlisted fields are ignored."""

    event: str
    call: RetellCall


class WebhookAckResponse(BaseModel):
    success: bool = True
