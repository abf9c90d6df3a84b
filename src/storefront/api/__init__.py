"""Storefront HTTP API package."""

from storefront.api.errors import register_exception_handlers
from storefront.api.routes import cart_router, order_router, product_router

__all__ = ["cart_router", "order_router", "product_router", "register_exception_handlers"]
