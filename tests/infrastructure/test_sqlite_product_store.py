"""Integration tests for the SQLite product store."""

import sqlite3
import threading

import pytest

from inventory.domain.exceptions import PersistenceError, ValidationError
from inventory.domain.model.product import Product, ProductValues
from inventory.infrastructure.persistence.sqlite_product_store import SqliteProductStore

IMAGE = "file://widget.png"


@pytest.fixture
def store():
    with SqliteProductStore(":memory:") as s:
        yield s


def _widget(**overrides) -> ProductValues:
    fields = {"name": "Widget", "price": 500, "quantity": 3, "image_uri": IMAGE}
    fields.update(overrides)
    return ProductValues(**fields)


class TestInsert:

    def test_round_trip(self, store):
        product_id = store.insert(_widget())
        assert store.query_one(product_id) == Product(
            id=product_id, name="Widget", price=500, quantity=3, image_uri=IMAGE
        )

    def test_first_id_is_one(self, store):
        assert store.insert(_widget()) == 1

    def test_ids_are_unique(self, store):
        ids = {store.insert(_widget(name=f"P{i}")) for i in range(10)}
        assert len(ids) == 10

    def test_missing_numbers_default_to_zero(self, store):
        product_id = store.insert(ProductValues(name="Bare", image_uri=IMAGE))
        product = store.query_one(product_id)
        assert product.price == 0
        assert product.quantity == 0

    def test_missing_name_defaults_to_empty(self, store):
        product_id = store.insert(ProductValues(image_uri=IMAGE))
        assert store.query_one(product_id).name == ""

    def test_missing_image_rejected(self, store):
        with pytest.raises(ValidationError, match="image reference is required"):
            store.insert(ProductValues(name="No image"))
        assert len(store.query_all()) == 0


class TestQuery:

    def test_query_all_in_insertion_order(self, store):
        for name in ("A", "B", "C"):
            store.insert(_widget(name=name))
        assert [p.name for p in store.query_all()] == ["A", "B", "C"]

    def test_query_all_is_a_snapshot(self, store):
        store.insert(_widget(name="A"))
        snapshot = store.query_all()
        store.insert(_widget(name="B"))
        assert [p.name for p in snapshot] == ["A"]
        assert [p.name for p in snapshot] == ["A"]

    def test_query_one_missing(self, store):
        assert store.query_one(42) is None

    def test_empty_store(self, store):
        assert list(store.query_all()) == []

    def test_read_after_close_is_a_persistence_error(self):
        closed = SqliteProductStore(":memory:")
        closed.insert(_widget())
        closed.close()

        with pytest.raises(PersistenceError, match="Failed to read"):
            closed.query_all()
        with pytest.raises(PersistenceError, match="Failed to read"):
            closed.query_one(1)


class TestUpdate:

    def test_merges_only_given_columns(self, store):
        product_id = store.insert(_widget())
        assert store.update(product_id, ProductValues(quantity=9)) == 1
        assert store.query_one(product_id) == Product(
            id=product_id, name="Widget", price=500, quantity=9, image_uri=IMAGE
        )

    def test_missing_id_returns_zero_and_creates_nothing(self, store):
        assert store.update(99, ProductValues(quantity=5)) == 0
        assert len(store.query_all()) == 0

    def test_empty_values_report_existence(self, store):
        product_id = store.insert(_widget())
        assert store.update(product_id, ProductValues()) == 1
        assert store.update(99, ProductValues()) == 0


class TestDelete:

    def test_delete_twice(self, store):
        product_id = store.insert(_widget())
        assert store.delete(product_id) == 1
        assert store.query_one(product_id) is None
        assert store.delete(product_id) == 0

    def test_ids_not_reused_after_delete(self, store):
        first = store.insert(_widget(name="A"))
        second = store.insert(_widget(name="B"))
        store.delete(second)
        third = store.insert(_widget(name="C"))
        assert third not in (first, second)
        assert third == 3

    def test_reset_rewinds_ids(self, store):
        store.insert(_widget())
        store.insert(_widget())
        store.reset()
        assert len(store.query_all()) == 0
        assert store.insert(_widget()) == 1


class TestDurability:

    def test_rows_survive_reopen(self, tmp_path):
        path = tmp_path / "nested" / "inventory.db"
        with SqliteProductStore(path) as first:
            product_id = first.insert(_widget())
            first.delete(first.insert(_widget(name="Gone")))

        with SqliteProductStore(path) as second:
            assert second.query_one(product_id).name == "Widget"
            assert second.insert(_widget(name="Next")) == 3

    def test_persisted_layout(self, tmp_path):
        path = tmp_path / "inventory.db"
        with SqliteProductStore(path) as s:
            s.insert(_widget())

        connection = sqlite3.connect(path)
        try:
            columns = [row[1] for row in connection.execute("PRAGMA table_info(products)")]
        finally:
            connection.close()
        assert columns == ["_id", "name", "price", "quantity", "imageUri"]


class TestConcurrency:

    def test_parallel_inserts_get_distinct_ids(self, store):
        ids = []
        ids_lock = threading.Lock()

        def add():
            for i in range(25):
                new_id = store.insert(_widget(name=f"P{i}"))
                with ids_lock:
                    ids.append(new_id)

        workers = [threading.Thread(target=add) for _ in range(4)]
        for w in workers:
            w.start()
        for w in workers:
            w.join()

        assert len(set(ids)) == 100
        assert len(store.query_all()) == 100
