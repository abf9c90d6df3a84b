"""Domain events for the Product aggregate."""

from protean.fields import Float, Identifier, Integer, String, Text

from storefront.domain import storefront


@storefront.event(part_of="Product")
class ProductAdded:
    """A product was added to the catalogue."""

    __version__ = "v1"

    product_id = Identifier(required=True)
    title = String(required=True)
    price = Float(required=True)
    category = String()
    sizes = Text(required=True)  # JSON: {size: quantity}


@storefront.event(part_of="Product")
class StockDecremented:
    """Stock for one size was taken by a placed order."""

    __version__ = "v1"

    product_id = Identifier(required=True)
    selected_size = String(required=True)
    quantity = Integer(required=True)
    remaining = Integer(required=True)
    order_id = Identifier()


@storefront.event(part_of="Product")
class StockRestored:
    """Stock for one size was given back by a cancelled order."""

    __version__ = "v1"

    product_id = Identifier(required=True)
    selected_size = String(required=True)
    quantity = Integer(required=True)
    remaining = Integer(required=True)
    order_id = Identifier()
