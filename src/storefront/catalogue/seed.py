"""Sample catalogue loaded into an empty store."""

import json

from protean.utils.globals import current_domain

from storefront.catalogue.management import AddProduct
from storefront.catalogue.product import Product
from storefront.domain import logger

SAMPLE_PRODUCTS = [
    {
        "title": "Women's 3-in-1 Snowboard Jacket",
        "price": 56.99,
        "category": "Women",
        "image": "https://fakestoreapi.com/img/51Y5NI-I5jL._AC_UX679_.jpg",
        "sizes": {"xs": 5, "s": 10, "m": 15, "l": 8, "xl": 4},
    },
    {
        "title": "Removable Hooded Faux Leather Biker Jacket",
        "price": 29.95,
        "category": "Women",
        "image": "https://fakestoreapi.com/img/81XH0e8fefL._AC_UY879_.jpg",
        "sizes": {"xs": 3, "s": 8, "m": 12, "l": 6, "xl": 2},
    },
    {
        "title": "Striped Windbreaker Rain Jacket",
        "price": 39.99,
        "category": "Women",
        "image": "https://fakestoreapi.com/img/71HblAHs5xL._AC_UY879_-2.jpg",
        "sizes": {"xs": 4, "s": 9, "m": 14, "l": 7, "xl": 3},
    },
    {
        "title": "Casual Cotton T-Shirt",
        "price": 19.99,
        "category": "Men",
        "image": "https://fakestoreapi.com/img/71-3HjGNDUL._AC_SY879._SX._UX._SY._UY_.jpg",
        "sizes": {"xs": 6, "s": 12, "m": 20, "l": 15, "xl": 8},
    },
    {
        "title": "Classic Denim Jeans",
        "price": 59.99,
        "category": "Men",
        "image": "https://fakestoreapi.com/img/71li-ujtlUL._AC_UX679_.jpg",
        "sizes": {"xs": 2, "s": 7, "m": 11, "l": 9, "xl": 5},
    },
    {
        "title": "Unisex Hoodie",
        "price": 44.99,
        "category": "Unisex",
        "image": "https://fakestoreapi.com/img/61U7T1koQqL._AC_SX679_.jpg",
        "sizes": {"xs": 5, "s": 10, "m": 10, "l": 10, "xl": 5},
    },
]


def seed_catalogue(products=None):
    """Add sample products unless the catalogue already holds some.

    Must run inside an active domain context. Returns the ids of the products
    it created.
    """
    existing = current_domain.repository_for(Product)._dao.query.all()
    if existing.total > 0:
        logger.info("catalogue_seed_skipped", existing=existing.total)
        return []

    product_ids = []
    for data in products or SAMPLE_PRODUCTS:
        command = AddProduct(
            title=data["title"],
            price=data["price"],
            category=data.get("category"),
            image=data.get("image"),
            description=data.get("description"),
            sizes=json.dumps(data.get("sizes", {})),
        )
        product_ids.append(current_domain.process(command, asynchronous=False))

    logger.info("catalogue_seeded", count=len(product_ids))
    return product_ids
