"""Unit tests for resource identifiers."""

import pytest

from inventory.domain.exceptions import ValidationError
from inventory.domain.model.resource import (
    PRODUCTS_URI,
    ResourceKind,
    ResourceUri,
)


class TestResourceUriParse:

    def test_collection(self):
        uri = ResourceUri.parse("products")
        assert uri == PRODUCTS_URI
        assert uri.kind is ResourceKind.COLLECTION

    def test_item(self):
        uri = ResourceUri.parse("products/7")
        assert uri == ResourceUri("products", 7)
        assert uri.kind is ResourceKind.ITEM

    def test_trailing_slash_tolerated(self):
        assert ResourceUri.parse("products/") == PRODUCTS_URI

    def test_round_trips_through_str(self):
        assert str(ResourceUri.parse("products/12")) == "products/12"
        assert str(PRODUCTS_URI) == "products"

    def test_passes_through_existing_identifier(self):
        uri = ResourceUri("products", 3)
        assert ResourceUri.parse(uri) is uri

    @pytest.mark.parametrize("raw", ["", "products/abc", "products/-1", "products/1/2", "/"])
    def test_malformed_rejected(self, raw):
        with pytest.raises(ValidationError):
            ResourceUri.parse(raw)

    def test_negative_id_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            ResourceUri("products", -3)

    @pytest.mark.parametrize("raw", [None, 3, ("products", 1)])
    def test_non_text_rejected(self, raw):
        with pytest.raises(ValidationError, match="must be text"):
            ResourceUri.parse(raw)


class TestResourceUriRelations:

    def test_collection_contains_its_items(self):
        assert PRODUCTS_URI.contains(PRODUCTS_URI.with_id(4))

    def test_item_does_not_contain_collection(self):
        assert not PRODUCTS_URI.with_id(4).contains(PRODUCTS_URI)

    def test_item_contains_only_itself(self):
        item = PRODUCTS_URI.with_id(4)
        assert item.contains(PRODUCTS_URI.with_id(4))
        assert not item.contains(PRODUCTS_URI.with_id(5))

    def test_other_collection_never_contained(self):
        assert not PRODUCTS_URI.contains(ResourceUri("staff", 4))

    def test_overlap_is_symmetric(self):
        item = PRODUCTS_URI.with_id(4)
        assert item.overlaps(PRODUCTS_URI)
        assert PRODUCTS_URI.overlaps(item)
        assert not item.overlaps(PRODUCTS_URI.with_id(5))

    def test_collection_uri_strips_id(self):
        assert PRODUCTS_URI.with_id(9).collection_uri == PRODUCTS_URI
