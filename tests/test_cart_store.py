"""
Tests for CartStore
"""

import logging
from decimal import Decimal

import pytest

from storefront.cart import CartStore, NotificationType, cart_storage_key


class TestScenarios:
    """End-to-end flows through the public wrappers."""

    def test_add_twice_merges(self, store):
        """Adding p1/Red twice gives one row of quantity 3 and total 300."""
        store.add_to_cart({"id": "p1", "price": 100, "selectedColor": "Red", "quantity": 1})
        store.add_to_cart({"id": "p1", "price": 100, "selectedColor": "Red", "quantity": 2})

        assert len(store.items) == 1
        assert store.items[0].line_item_key == "p1_Red"
        assert store.items[0].quantity == 3
        assert store.get_cart_total() == 300

    def test_invalid_price_is_added_at_zero(self, store, caplog):
        """Price "abc" is added at 0 with a diagnostic."""
        with caplog.at_level(logging.WARNING):
            store.add_to_cart({"id": "p1", "price": "abc"})

        assert len(store.items) == 1
        assert store.items[0].price == 0
        assert "Invalid catalog price" in caplog.text

    def test_deselected_item_leaves_selected_total(self, store):
        """Toggling the only row off makes the selected total 0."""
        store.add_to_cart({"id": "p1", "price": 50, "quantity": 1, "selected": True})

        store.toggle_select("p1")

        assert store.get_selected_total() == 0
        assert store.get_cart_total() == 50


class TestGetters:
    """Derived totals and counts."""

    @pytest.fixture
    def filled(self, store):
        store.add_to_cart({"id": "a", "price": "19.99", "quantity": 2})
        store.add_to_cart({"id": "b", "price": 5, "quantity": 3})
        store.add_to_cart({"id": "c", "price": "0.10", "quantity": 1})
        store.toggle_select("b")
        return store

    def test_cart_total(self, filled):
        """The cart total covers every row."""
        expected = sum(item.price * item.quantity for item in filled.items)

        assert filled.get_cart_total() == expected == Decimal("55.08")

    def test_selected_total(self, filled):
        """The selected total skips deselected rows."""
        expected = sum(item.price * item.quantity for item in filled.items if item.selected)

        assert filled.get_selected_total() == expected == Decimal("40.08")

    def test_items_count(self, filled):
        """The count sums quantities."""
        assert filled.get_cart_items_count() == 6

    def test_selected_items(self, filled):
        """Only selected rows are returned."""
        assert [item.id for item in filled.get_selected_items()] == ["a", "c"]

    def test_empty_cart(self, store):
        """An empty cart totals 0."""
        assert store.get_cart_total() == 0
        assert store.get_selected_total() == 0
        assert store.get_cart_items_count() == 0
        assert store.get_selected_items() == []


class TestWrappers:
    """Dispatch wrappers on CartStore."""

    def test_update_quantity_and_remove(self, store):
        """Quantity updates and removal by key."""
        store.add_to_cart({"id": "p1"})
        store.add_to_cart({"id": "p2"})

        store.update_quantity("p1", 4)
        store.remove_from_cart("p2")

        assert [(item.id, item.quantity) for item in store.items] == [("p1", 4)]

    def test_update_customization(self, store, phone_product):
        """Customizing re-keys the row."""
        store.add_to_cart(phone_product)

        store.update_customization("phone-1_Black_8GB", {"selectedRam": "12GB"})

        assert store.items[0].line_item_key == "phone-1_Black_12GB"

    def test_select_deselect_clear(self, store):
        """Selection wrappers and clear_cart."""
        store.add_to_cart({"id": "p1"})
        store.deselect_all()
        assert store.get_selected_items() == []

        store.select_all()
        assert len(store.get_selected_items()) == 1

        store.clear_cart()
        assert store.items == ()

    def test_notifications(self, store):
        """Show and hide toasts through the store."""
        store.show_notification("Removed", "error")
        assert store.notification.type == NotificationType.ERROR

        store.hide_notification()
        assert store.notification.show is False


class TestSubscriptions:
    """Store listeners."""

    def test_listener_receives_previous_and_current(self, store):
        """Listeners get the previous and current state."""
        calls = []
        store.subscribe(lambda previous, current: calls.append((previous, current)))

        store.add_to_cart({"id": "p1"})

        assert len(calls) == 1
        previous, current = calls[0]
        assert previous.items == ()
        assert current.items[0].id == "p1"

    def test_noop_actions_do_not_notify(self, store):
        """Actions that change nothing notify nobody."""
        calls = []
        store.subscribe(lambda previous, current: calls.append(current))

        store.remove_from_cart("missing")

        assert calls == []

    def test_unsubscribe(self, store):
        """An unsubscribed listener is not called again."""
        calls = []
        unsubscribe = store.subscribe(lambda previous, current: calls.append(current))

        unsubscribe()
        store.add_to_cart({"id": "p1"})

        assert calls == []


class TestStrictPrice:
    """Opt-in refusal of items whose price could not be read."""

    def test_invalid_price_is_refused(self):
        """Strict mode refuses an unreadable price with an error toast."""
        store = CartStore(reject_invalid_price=True)

        store.add_to_cart({"id": "p1", "price": "abc"})

        assert store.items == ()
        assert store.notification.show is True
        assert store.notification.type == NotificationType.ERROR

    def test_valid_and_missing_prices_still_added(self):
        """Strict mode still accepts valid and absent prices."""
        store = CartStore(reject_invalid_price=True)

        store.add_to_cart({"id": "p1", "price": "10"})
        store.add_to_cart({"id": "p2"})

        assert [item.id for item in store.items] == ["p1", "p2"]


def test_cart_storage_key():
    """Local and per-user cart keys."""
    assert cart_storage_key() == "cartItems"
    assert cart_storage_key("user-42") == "cart:user-42"
