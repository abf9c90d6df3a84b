"""Application tests for order placement, cancellation and fulfillment commands."""

import json

import pytest
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError
from storefront.cart.cart import ShoppingCart
from storefront.cart.items import AddToCart
from storefront.catalogue.stock import InsufficientStockError
from storefront.order.cancellation import CancelOrder
from storefront.order.creation import CreateOrder
from storefront.order.fulfillment import MarkDelivered, MarkProcessing, MarkShipped
from storefront.order.order import Order, OrderStatus


def _place_order(items, customer_id="cust-001"):
    command = CreateOrder(
        customer_id=customer_id,
        address="Calle Mayor 1, Madrid",
        phone="+34 600 000 000",
        items=json.dumps(items),
    )
    return current_domain.process(command, asynchronous=False)


def _order(order_id):
    return current_domain.repository_for(Order).get(order_id)


def _all_orders():
    return current_domain.repository_for(Order)._dao.query.all().items


class TestCreateOrderCommand:
    def test_order_persists_as_pending(self, make_product):
        product_id = make_product(price=10.00)
        order_id = _place_order([{"product_id": product_id, "selected_size": "m", "quantity": 2, "price": 10.00}])

        order = _order(order_id)
        assert order.status == OrderStatus.PENDING.value
        assert order.customer_id == "cust-001"
        assert order.total_amount == 20.00

    def test_total_for_two_lines(self, make_product):
        shirt = make_product(price=10.00)
        socks = make_product(title="Socks", price=5.50)
        order_id = _place_order(
            [
                {"product_id": shirt, "selected_size": "m", "quantity": 2, "price": 10.00},
                {"product_id": socks, "selected_size": "s", "quantity": 1, "price": 5.50},
            ]
        )
        assert _order(order_id).total_amount == 25.50

    def test_price_comes_from_catalogue(self, make_product):
        product_id = make_product(price=19.99)
        order_id = _place_order([{"product_id": product_id, "selected_size": "s", "quantity": 1, "price": 0.01}])

        order = _order(order_id)
        assert order.items[0].unit_price == 19.99
        assert order.total_amount == 19.99

    def test_stock_is_decremented(self, make_product, stock_of):
        product_id = make_product(sizes={"m": 3, "l": 4})
        _place_order(
            [
                {"product_id": product_id, "selected_size": "m", "quantity": 2},
                {"product_id": product_id, "selected_size": "l", "quantity": 1},
            ]
        )
        assert stock_of(product_id, "m") == 1
        assert stock_of(product_id, "l") == 3

    def test_repeated_lines_draw_from_the_same_stock(self, make_product, stock_of):
        product_id = make_product(sizes={"m": 3})
        with pytest.raises(InsufficientStockError):
            _place_order(
                [
                    {"product_id": product_id, "selected_size": "m", "quantity": 2},
                    {"product_id": product_id, "selected_size": "m", "quantity": 2},
                ]
            )
        assert stock_of(product_id, "m") == 3

    def test_insufficient_stock_aborts_whole_order(self, make_product, stock_of):
        plenty = make_product(sizes={"m": 10})
        scarce = make_product(title="Limited Jacket", sizes={"m": 1})

        with pytest.raises(InsufficientStockError):
            _place_order(
                [
                    {"product_id": plenty, "selected_size": "m", "quantity": 2},
                    {"product_id": scarce, "selected_size": "m", "quantity": 2},
                ]
            )

        assert stock_of(plenty, "m") == 10
        assert stock_of(scarce, "m") == 1
        assert _all_orders() == []

    def test_empty_items_rejected(self):
        with pytest.raises(ValidationError) as exc:
            _place_order([])
        assert exc.value.messages["items"] == ["No items provided for order"]

    def test_unknown_product(self):
        with pytest.raises(ObjectNotFoundError):
            _place_order([{"product_id": "prod-missing", "selected_size": "m", "quantity": 1}])

    @pytest.mark.parametrize(
        "item",
        [
            {"product_id": "prod-any", "quantity": 1},
            {"product_id": "prod-any", "selected_size": "m"},
            {"selected_size": "m", "quantity": 1},
        ],
    )
    def test_incomplete_item_rejected(self, item):
        with pytest.raises(ValidationError) as exc:
            _place_order([item])
        assert "items" in exc.value.messages
        assert _all_orders() == []

    def test_incomplete_item_takes_no_stock(self, make_product, stock_of):
        product_id = make_product()
        with pytest.raises(ValidationError):
            _place_order(
                [
                    {"product_id": product_id, "selected_size": "m", "quantity": 1},
                    {"product_id": product_id, "selected_size": "l"},
                ]
            )
        assert stock_of(product_id, "m") == 3
        assert _all_orders() == []

    def test_order_with_many_lines_keeps_them_all(self, make_product, stock_of):
        product_id = make_product(price=1.00, sizes={"m": 105})
        order_id = _place_order([{"product_id": product_id, "selected_size": "m", "quantity": 1}] * 105)

        order = _order(order_id)

        assert len(order.items) == 105
        assert order.total_amount == 105.0
        assert stock_of(product_id, "m") == 0

    def test_does_not_clear_the_cart(self, make_product, make_cart):
        product_id = make_product()
        cart_id = make_cart()
        current_domain.process(
            AddToCart(cart_id=cart_id, product_id=product_id, selected_size="m", quantity=1),
            asynchronous=False,
        )
        _place_order([{"product_id": product_id, "selected_size": "m", "quantity": 1}])

        assert len(current_domain.repository_for(ShoppingCart).get(cart_id).items) == 1


class TestCancelOrderCommand:
    def test_cancel_own_pending_order(self, make_product):
        product_id = make_product()
        order_id = _place_order([{"product_id": product_id, "selected_size": "m", "quantity": 1}])

        current_domain.process(CancelOrder(order_id=order_id, customer_id="cust-001"), asynchronous=False)

        order = _order(order_id)
        assert order.status == OrderStatus.CANCELLED.value
        assert order.cancelled_at is not None

    def test_cancel_restores_stock(self, make_product, stock_of):
        product_id = make_product(sizes={"m": 3})
        order_id = _place_order([{"product_id": product_id, "selected_size": "m", "quantity": 2}])
        assert stock_of(product_id, "m") == 1

        current_domain.process(CancelOrder(order_id=order_id, customer_id="cust-001"), asynchronous=False)

        assert stock_of(product_id, "m") == 3

    def test_other_customers_order_looks_missing(self, make_product):
        product_id = make_product()
        order_id = _place_order([{"product_id": product_id, "selected_size": "m", "quantity": 1}])

        with pytest.raises(ObjectNotFoundError) as foreign:
            current_domain.process(CancelOrder(order_id=order_id, customer_id="cust-intruder"), asynchronous=False)
        with pytest.raises(ObjectNotFoundError) as missing:
            current_domain.process(CancelOrder(order_id="ord-missing", customer_id="cust-001"), asynchronous=False)

        assert foreign.value.messages == missing.value.messages
        assert _order(order_id).status == OrderStatus.PENDING.value

    def test_cannot_cancel_shipped_order(self, make_product, stock_of):
        product_id = make_product(sizes={"m": 3})
        order_id = _place_order([{"product_id": product_id, "selected_size": "m", "quantity": 1}])
        current_domain.process(MarkProcessing(order_id=order_id), asynchronous=False)
        current_domain.process(MarkShipped(order_id=order_id), asynchronous=False)

        with pytest.raises(ValidationError):
            current_domain.process(CancelOrder(order_id=order_id, customer_id="cust-001"), asynchronous=False)

        assert stock_of(product_id, "m") == 2


class TestFulfillmentCommands:
    def test_order_moves_to_delivered(self, make_product):
        product_id = make_product()
        order_id = _place_order([{"product_id": product_id, "selected_size": "m", "quantity": 1}])

        for command_cls in (MarkProcessing, MarkShipped, MarkDelivered):
            current_domain.process(command_cls(order_id=order_id), asynchronous=False)

        assert _order(order_id).status == OrderStatus.DELIVERED.value

    def test_skipping_a_step_is_rejected(self, make_product):
        product_id = make_product()
        order_id = _place_order([{"product_id": product_id, "selected_size": "m", "quantity": 1}])

        with pytest.raises(ValidationError):
            current_domain.process(MarkDelivered(order_id=order_id), asynchronous=False)
