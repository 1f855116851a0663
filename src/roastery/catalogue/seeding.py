"""Catalogue seeding — command and handler.

The catalogue is read-only at runtime; this command is issued by
``manage.py seed-catalogue`` to load the initial product list.
"""

import json

import structlog
from protean import handle
from protean.fields import Boolean, Text
from protean.utils.globals import current_domain

from roastery.catalogue.product import Product
from roastery.catalogue.seed_data import CATALOGUE
from roastery.domain import roastery

logger = structlog.get_logger(__name__)


@roastery.command(part_of="Product")
class SeedCatalogue:
    """Load products into the catalogue.

    ``products`` is a JSON list of product dicts; the bundled catalogue is
    used when omitted. With ``replace`` set, existing products are deleted
    first, otherwise seeding is skipped when the catalogue is not empty.
    """

    products = Text()
    replace = Boolean(default=False)


@roastery.command_handler(part_of=Product)
class SeedCatalogueHandler:
    @handle(SeedCatalogue)
    def seed_catalogue(self, command):
        repo = current_domain.repository_for(Product)
        existing = repo._dao.query.all().items

        if existing and not command.replace:
            logger.info("Catalogue already seeded, skipping", product_count=len(existing))
            return 0

        for product in existing:
            repo._dao.delete(product)

        products_data = json.loads(command.products) if command.products else CATALOGUE
        for data in products_data:
            product = Product.add(
                name=data["name"],
                category=data["category"],
                price=data["price"],
                description=data.get("description"),
                roast=data.get("roast"),
                origin=data.get("origin"),
                image_url=data.get("image_url"),
            )
            repo.add(product)
            logger.debug("Product added", product_id=str(product.id), name=product.name)

        logger.info("Catalogue seeded", product_count=len(products_data), replaced=len(existing))
        return len(products_data)
