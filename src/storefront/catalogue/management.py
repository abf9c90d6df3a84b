"""Catalogue management — adding products to the catalogue."""

import json

from protean import handle
from protean.fields import Float, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.domain import storefront


@storefront.command(part_of="Product")
class AddProduct:
    title = String(required=True, max_length=255)
    price = Float(required=True, min_value=0.01)
    category = String(max_length=100)
    image = String(max_length=500)
    description = Text()
    sizes = Text()  # JSON: {size: quantity}


@storefront.command_handler(part_of=Product)
class ManageProductHandler:
    @handle(AddProduct)
    def add_product(self, command):
        sizes = json.loads(command.sizes) if isinstance(command.sizes, str) else command.sizes

        product = Product.create(
            title=command.title,
            price=command.price,
            category=command.category,
            image=command.image,
            description=command.description,
            sizes=sizes,
        )
        current_domain.repository_for(Product).add(product)
        return str(product.id)
