"""Shared BDD fixtures and step definitions for the Storefront."""

import json

import pytest
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError
from pytest_bdd import given, parsers, then
from storefront.cart.management import CreateCart
from storefront.catalogue.management import AddProduct
from storefront.catalogue.product import Product


# ---------------------------------------------------------------------------
# Scalar fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def products():
    """Product ids by title."""
    return {}


@pytest.fixture()
def error():
    """Container for the error a When step ran into."""
    return {"exc": None}


@pytest.fixture()
def attempt(error):
    """Run a step action, keeping a domain error for the Then steps to inspect."""

    def _attempt(action):
        try:
            return action()
        except (ValidationError, ObjectNotFoundError) as exc:
            error["exc"] = exc
            return None

    return _attempt


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a product "{title}" priced {price:f} with {stock:d} in size "{size}"'))
def _(products, title, price, stock, size):
    command = AddProduct(title=title, price=price, category="Test", sizes=json.dumps({size: stock}))
    products[title] = current_domain.process(command, asynchronous=False)


@given(parsers.cfparse('customer "{customer_id}" has a cart'), target_fixture="cart_id")
def _(customer_id):
    return current_domain.process(CreateCart(customer_id=customer_id), asynchronous=False)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('"{title}" has {stock:d} left in size "{size}"'))
def _(products, title, stock, size):
    product = current_domain.repository_for(Product).get(products[title])
    assert product.stock_for(size) == stock


@then(parsers.cfparse("the request is rejected as {kind}"))
def _(error, kind):
    expected = {
        "insufficient stock": "InsufficientStockError",
        "invalid": "ValidationError",
        "not found": "ObjectNotFoundError",
    }[kind]
    assert error["exc"] is not None
    assert type(error["exc"]).__name__ == expected
