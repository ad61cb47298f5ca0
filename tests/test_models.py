"""Unit tests for cart item models and the persisted wire format."""
import json

import pytest
from pydantic import ValidationError

from pico_cart.exceptions import CorruptCartStateError
from pico_cart.models import CartItem, ProductIn, dump_cart, load_cart


class TestCartItem:
    """Tests for CartItem validation."""

    def test_quantity_defaults_to_one(self):
        item = CartItem(id="p1", title="Shirt", image_url="u", price=10)
        assert item.quantity == 1

    def test_rejects_zero_quantity(self):
        with pytest.raises(ValidationError):
            CartItem(id="p1", title="Shirt", image_url="u", price=10, quantity=0)

    def test_is_frozen(self):
        item = CartItem(id="p1", title="Shirt", image_url="u", price=10)
        with pytest.raises(ValidationError):
            item.quantity = 5

    def test_from_product_sets_quantity(self):
        product = ProductIn(id="p1", title="Shirt", image_url="u", price=10)
        item = CartItem.from_product(product, quantity=3)
        assert item.id == "p1"
        assert item.quantity == 3

    def test_from_product_ignores_existing_quantity(self):
        existing = CartItem(id="p1", title="Shirt", image_url="u", price=10, quantity=7)
        assert CartItem.from_product(existing).quantity == 1


class TestWireFormat:
    """Tests for dump_cart / load_cart."""

    def test_dump_uses_wire_field_names(self):
        state = (CartItem(id="p1", title="Shirt", image_url="u", price=10, quantity=2),)
        payload = json.loads(dump_cart(state))
        assert payload == [{"id": "p1", "title": "Shirt", "image_url": "u", "price": 10.0, "quantity": 2}]

    def test_empty_cart_dumps_empty_array(self):
        assert json.loads(dump_cart(())) == []

    def test_round_trip_keeps_content_and_order(self):
        state = (
            CartItem(id="b", title="Mug", image_url="m", price=4.5, quantity=3),
            CartItem(id="a", title="Shirt", image_url="s", price=10, quantity=1),
        )
        assert load_cart(dump_cart(state)) == state

    def test_loads_seed_data_from_upstream_producers(self):
        raw = '[{"id": "1", "title": "Cadeira", "image_url": "https://x/1.png", "price": 200, "quantity": 2}]'
        (item,) = load_cart(raw)
        assert item.title == "Cadeira"
        assert item.price == 200.0
        assert item.quantity == 2

    @pytest.mark.parametrize(
        "raw",
        [
            "not json",
            '{"id": "p1"}',
            '[{"id": "p1", "title": "Shirt"}]',
            '[{"id": "p1", "title": "Shirt", "image_url": "u", "price": 1, "quantity": 0}]',
        ],
    )
    def test_rejects_malformed_payloads(self, raw):
        with pytest.raises(CorruptCartStateError):
            load_cart(raw)

    def test_rejects_duplicate_ids(self):
        item = {"id": "p1", "title": "Shirt", "image_url": "u", "price": 1, "quantity": 1}
        with pytest.raises(CorruptCartStateError, match="duplicate item id"):
            load_cart(json.dumps([item, item]))
