"""Tests for the ShoppingCart aggregate."""

import pytest
from protean.exceptions import ObjectNotFoundError, ValidationError

from fable.ordering.cart.cart import ShoppingCart
from fable.ordering.cart.events import CartCleared, CartItemAdded, CartItemRemoved, CartQuantityUpdated


def _cart():
    return ShoppingCart.create(customer_id="cust-001")


class TestAddItem:
    def test_new_cart_is_empty(self):
        assert _cart().is_empty

    def test_add_appends_line(self):
        cart = _cart()
        cart.add_item("prod-001", "M", 2)
        assert len(cart.items) == 1
        assert cart.items[0].quantity == 2
        assert isinstance(cart._events[-1], CartItemAdded)

    @pytest.mark.parametrize("q1,q2", [(1, 1), (2, 3), (1, 9)])
    def test_adding_same_pair_sums_quantities(self, q1, q2):
        cart = _cart()
        cart.add_item("prod-001", "M", q1)
        cart.add_item("prod-001", "M", q2)

        assert len(cart.items) == 1
        assert cart.find_item("prod-001", "M").quantity == q1 + q2
        assert cart._events[-1].line_quantity == q1 + q2

    def test_different_sizes_are_separate_lines(self):
        cart = _cart()
        cart.add_item("prod-001", "M")
        cart.add_item("prod-001", "L")
        assert len(cart.items) == 2

    def test_default_quantity_is_one(self):
        cart = _cart()
        cart.add_item("prod-001", "M")
        assert cart.items[0].quantity == 1

    def test_non_positive_quantity_rejected(self):
        cart = _cart()
        with pytest.raises(ValidationError) as exc:
            cart.add_item("prod-001", "M", 0)
        assert "quantity" in exc.value.messages
        assert cart.is_empty

    def test_lines_keep_insertion_order(self):
        cart = _cart()
        cart.add_item("prod-002", "S")
        cart.add_item("prod-001", "M")
        assert [i.product_id for i in cart.ordered_items()] == ["prod-002", "prod-001"]


class TestSetItemQuantity:
    def test_overwrites_quantity(self):
        cart = _cart()
        cart.add_item("prod-001", "M", 2)
        cart.set_item_quantity("prod-001", "M", 5)

        assert cart.find_item("prod-001", "M").quantity == 5
        event = cart._events[-1]
        assert isinstance(event, CartQuantityUpdated)
        assert event.previous_quantity == 2
        assert event.new_quantity == 5

    @pytest.mark.parametrize("quantity", [0, -1])
    def test_below_one_rejected_without_mutation(self, quantity):
        cart = _cart()
        cart.add_item("prod-001", "M", 2)

        with pytest.raises(ValidationError) as exc:
            cart.set_item_quantity("prod-001", "M", quantity)
        assert "quantity" in exc.value.messages
        assert cart.find_item("prod-001", "M").quantity == 2

    def test_missing_line(self):
        cart = _cart()
        with pytest.raises(ObjectNotFoundError):
            cart.set_item_quantity("prod-001", "M", 3)


class TestRemoveAndClear:
    def test_remove_existing_line(self):
        cart = _cart()
        cart.add_item("prod-001", "M")
        assert cart.remove_item("prod-001", "M") is True
        assert cart.is_empty
        assert isinstance(cart._events[-1], CartItemRemoved)

    def test_remove_absent_line_is_noop(self):
        cart = _cart()
        cart.add_item("prod-001", "M")
        assert cart.remove_item("prod-001", "XL") is False
        assert len(cart.items) == 1

    def test_clear_empties_cart(self):
        cart = _cart()
        cart.add_item("prod-001", "M")
        cart.add_item("prod-002", "L", 3)
        cart.clear(order_id="ord-001")

        assert cart.is_empty
        event = cart._events[-1]
        assert isinstance(event, CartCleared)
        assert event.order_id == "ord-001"
