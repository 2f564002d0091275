"""SQLite-backed implementation of ProductStore."""

from __future__ import annotations

import logging
import sqlite3
import threading
from pathlib import Path

from inventory.domain.exceptions import PersistenceError, ValidationError
from inventory.domain.model.product import Product, ProductValues, RowSequence
from inventory.domain.repository.product_store import ProductStore

logger = logging.getLogger(__name__)

TABLE_NAME = "products"

# Attribute name -> persisted column name
_COLUMNS = {
    "name": "name",
    "price": "price",
    "quantity": "quantity",
    "image_uri": "imageUri",
}

CREATE_TABLE_SQL = f"""
CREATE TABLE IF NOT EXISTS {TABLE_NAME} (
    _id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL DEFAULT '',
    price INTEGER NOT NULL DEFAULT 0 CHECK (price >= 0),
    quantity INTEGER NOT NULL DEFAULT 0 CHECK (quantity >= 0),
    imageUri TEXT NOT NULL
)
"""

SELECT_SQL = f"SELECT _id, name, price, quantity, imageUri FROM {TABLE_NAME}"


class SqliteProductStore(ProductStore):
    """Stores products in a single SQLite table.

    One lock serialises every statement, so writes never interleave and
    readers never see a half-applied write.  ``AUTOINCREMENT`` keeps ids
    from being reused after deletes.
    """

    def __init__(self, path: str | Path = ":memory:") -> None:
        self._path = str(path)
        self._lock = threading.Lock()
        if self._path != ":memory:":
            Path(self._path).parent.mkdir(parents=True, exist_ok=True)
        self._connection = sqlite3.connect(self._path, check_same_thread=False)
        self._ensure_table()

    # --- ProductStore interface -----------------------------------------------

    def insert(self, values: ProductValues) -> int:
        if values.image_uri is None:
            raise ValidationError("Product image reference is required")

        columns = dict(values.items())
        names = ", ".join(_COLUMNS[c] for c in columns)
        marks = ", ".join("?" for _ in columns)
        sql = f"INSERT INTO {TABLE_NAME} ({names}) VALUES ({marks})"

        with self._lock:
            try:
                with self._connection:
                    cursor = self._connection.execute(sql, tuple(columns.values()))
            except (sqlite3.Error, OverflowError) as exc:
                raise PersistenceError(f"Failed to insert product: {exc}") from exc
        if cursor.lastrowid is None:
            raise PersistenceError("Failed to insert product: no id assigned")
        logger.debug("Inserted row %d into %s", cursor.lastrowid, TABLE_NAME)
        return cursor.lastrowid

    def query_all(self) -> RowSequence:
        with self._lock:
            try:
                rows = self._connection.execute(f"{SELECT_SQL} ORDER BY _id").fetchall()
            except sqlite3.Error as exc:
                raise PersistenceError(f"Failed to read products: {exc}") from exc
        return RowSequence(self._to_domain(raw) for raw in rows)

    def query_one(self, product_id: int) -> Product | None:
        with self._lock:
            try:
                raw = self._connection.execute(
                    f"{SELECT_SQL} WHERE _id = ?", (product_id,)
                ).fetchone()
            except sqlite3.Error as exc:
                raise PersistenceError(f"Failed to read product: {exc}") from exc
        if raw is None:
            return None
        return self._to_domain(raw)

    def update(self, product_id: int, values: ProductValues) -> int:
        columns = dict(values.items())
        with self._lock:
            if not columns:
                try:
                    found = self._connection.execute(
                        f"SELECT 1 FROM {TABLE_NAME} WHERE _id = ?", (product_id,)
                    ).fetchone()
                except sqlite3.Error as exc:
                    raise PersistenceError(f"Failed to read product: {exc}") from exc
                return 0 if found is None else 1

            assignments = ", ".join(f"{_COLUMNS[c]} = ?" for c in columns)
            sql = f"UPDATE {TABLE_NAME} SET {assignments} WHERE _id = ?"
            try:
                with self._connection:
                    cursor = self._connection.execute(
                        sql, (*columns.values(), product_id)
                    )
            except (sqlite3.Error, OverflowError) as exc:
                raise PersistenceError(f"Failed to update product: {exc}") from exc
        return cursor.rowcount

    def delete(self, product_id: int) -> int:
        with self._lock:
            try:
                with self._connection:
                    cursor = self._connection.execute(
                        f"DELETE FROM {TABLE_NAME} WHERE _id = ?", (product_id,)
                    )
            except sqlite3.Error as exc:
                raise PersistenceError(f"Failed to delete product: {exc}") from exc
        return cursor.rowcount

    def reset(self) -> None:
        with self._lock:
            with self._connection:
                self._connection.execute(f"DELETE FROM {TABLE_NAME}")
                self._connection.execute(
                    "DELETE FROM sqlite_sequence WHERE name = ?", (TABLE_NAME,)
                )
        logger.info("Store %s reset", self._path)

    def close(self) -> None:
        with self._lock:
            self._connection.close()

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_domain(raw: tuple) -> Product:
        return Product(
            id=raw[0],
            name=raw[1],
            price=raw[2],
            quantity=raw[3],
            image_uri=raw[4],
        )

    # --- Schema helpers -------------------------------------------------------

    def _ensure_table(self) -> None:
        with self._connection:
            self._connection.execute(CREATE_TABLE_SQL)
        logger.debug("Product table ready in %s", self._path)
