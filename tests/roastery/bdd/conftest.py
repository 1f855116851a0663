"""Shared BDD fixtures and step definitions for the storefront."""

import pytest
from protean import current_domain
from pytest_bdd import given, parsers
from roastery.catalogue.product import Product


@pytest.fixture()
def products():
    """Catalogue products created by the scenario, keyed by name."""
    return {}


@pytest.fixture()
def error():
    """Container for captured validation errors."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('the catalogue lists "{name}" at {price:f}'))
def catalogue_lists(products, name, price):
    product = Product.add(name=name, category="equipment", price=price)
    current_domain.repository_for(Product).add(product)
    products[name] = str(product.id)
