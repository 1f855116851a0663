"""Roastery bounded context: Catalogue, Cart, Orders and Voice Reviews.

Handles the coffee/equipment catalogue (seeded, read-only at runtime),
per-session shopping carts, the checkout pipeline that atomically persists
orders with their line items, and ingestion of voice-call webhooks into
product reviews with on-demand rating aggregation.
"""

from dotenv import load_dotenv
from protean.domain import Domain

from roastery.utils.logging import configure_logging, get_logger

# RETELL_* credentials and PROTEAN_ENV may live in a local .env file
load_dotenv()

configure_logging()

logger = get_logger(__name__)

roastery = Domain(name="roastery")
