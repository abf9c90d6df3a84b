import json

import pytest
from protean import current_domain
from storefront.cart.management import CreateCart
from storefront.catalogue.management import AddProduct
from storefront.catalogue.product import Product

DEFAULT_SIZES = {"xs": 2, "s": 5, "m": 3, "l": 10, "xl": 0}


@pytest.fixture()
def make_product():
    """Factory that persists a product through the catalogue command and returns its id."""

    def _make(title="Casual Cotton T-Shirt", price=19.99, sizes=None, category="Men", image=None):
        command = AddProduct(
            title=title,
            price=price,
            category=category,
            image=image,
            sizes=json.dumps(DEFAULT_SIZES if sizes is None else sizes),
        )
        return current_domain.process(command, asynchronous=False)

    return _make


@pytest.fixture()
def make_cart():
    def _make(customer_id="cust-001"):
        return current_domain.process(CreateCart(customer_id=customer_id), asynchronous=False)

    return _make


@pytest.fixture()
def stock_of():
    def _stock(product_id, size):
        return current_domain.repository_for(Product).get(product_id).stock_for(size)

    return _stock


@pytest.fixture()
def product_id(make_product):
    return make_product()


@pytest.fixture()
def cart_id(make_cart):
    return make_cart()
