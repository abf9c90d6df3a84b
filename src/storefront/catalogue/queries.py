"""Read side of the catalogue."""

from protean.utils.globals import current_domain

from storefront.catalogue.product import Product


def product_payload(product: Product) -> dict:
    return {
        **product.display_fields(),
        "description": product.description,
        "sizes": product.stock_map(),
        "created_at": product.created_at.isoformat() if product.created_at else None,
    }


def get_product(product_id) -> dict:
    return product_payload(current_domain.repository_for(Product).get(product_id))
