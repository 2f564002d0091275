"""Unit tests for product values and row snapshots."""

import pytest

from inventory.domain.exceptions import ValidationError
from inventory.domain.model.product import MAX_COUNT, Product, ProductValues, RowSequence


# ── ProductValues ────────────────────────────────────────────────────────────


class TestProductValues:

    def test_only_provided_columns_are_listed(self):
        values = ProductValues(name="Widget", quantity=3)
        assert dict(values.items()) == {"name": "Widget", "quantity": 3}

    def test_empty_values(self):
        assert ProductValues().is_empty()
        assert not ProductValues(price=0).is_empty()

    def test_negative_quantity_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            ProductValues(quantity=-1)

    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            ProductValues(price=-5)

    def test_non_integer_price_rejected(self):
        with pytest.raises(ValidationError, match="must be an integer"):
            ProductValues(price="500")

    def test_bool_quantity_rejected(self):
        with pytest.raises(ValidationError, match="must be an integer"):
            ProductValues(quantity=True)

    def test_count_beyond_storage_range_rejected(self):
        with pytest.raises(ValidationError, match="too large"):
            ProductValues(price=MAX_COUNT + 1)
        assert ProductValues(quantity=MAX_COUNT).quantity == MAX_COUNT

    def test_blank_image_rejected(self):
        with pytest.raises(ValidationError, match="Image reference"):
            ProductValues(image_uri="   ")

    def test_name_must_be_text(self):
        with pytest.raises(ValidationError, match="must be text"):
            ProductValues(name=42)

    def test_default_image_fills_missing_image(self):
        values = ProductValues(name="Widget").with_default_image("res://default")
        assert values.image_uri == "res://default"

    def test_default_image_keeps_chosen_image(self):
        values = ProductValues(image_uri="file://a.png").with_default_image("res://default")
        assert values.image_uri == "file://a.png"


class TestProductValuesParse:

    def test_parses_numeric_text(self):
        values = ProductValues.parse(name=" Widget ", price="500", quantity=" 3 ")
        assert values == ProductValues(name="Widget", price=500, quantity=3)

    def test_blank_numbers_default_to_zero(self):
        values = ProductValues.parse(name="Widget", price="", quantity="  ")
        assert values.price == 0
        assert values.quantity == 0

    def test_missing_fields_stay_unset(self):
        values = ProductValues.parse(quantity="7")
        assert dict(values.items()) == {"quantity": 7}

    def test_non_numeric_price_rejected(self):
        with pytest.raises(ValidationError, match="Invalid price"):
            ProductValues.parse(price="five")

    def test_non_numeric_quantity_rejected(self):
        with pytest.raises(ValidationError, match="Invalid quantity"):
            ProductValues.parse(quantity="3.5")

    def test_negative_text_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            ProductValues.parse(quantity="-2")

    def test_oversized_text_rejected(self):
        with pytest.raises(ValidationError, match="price is too large"):
            ProductValues.parse(price="99999999999999999999")


# ── RowSequence ──────────────────────────────────────────────────────────────


class TestRowSequence:

    def _rows(self):
        return [
            Product(id=1, name="Widget", price=500, quantity=3, image_uri="x"),
            Product(id=2, name="Gadget", price=250, quantity=0, image_uri="y"),
        ]

    def test_iteration_is_restartable(self):
        seq = RowSequence(self._rows())
        assert [p.id for p in seq] == [1, 2]
        assert [p.id for p in seq] == [1, 2]

    def test_snapshot_is_independent_of_source(self):
        source = self._rows()
        seq = RowSequence(source)
        source.clear()
        assert len(seq) == 2

    def test_indexing(self):
        seq = RowSequence(self._rows())
        assert seq[1].name == "Gadget"

    def test_rows_are_immutable(self):
        row = self._rows()[0]
        with pytest.raises(AttributeError):
            row.quantity = 10
