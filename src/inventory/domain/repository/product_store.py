"""Abstract record store for products.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (SQLite, in-memory)
live in the infrastructure layer and the test fakes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from inventory.domain.model.product import Product, ProductValues, RowSequence


class ProductStore(ABC):
    """Owns product rows.

    Implementations must make every operation atomic with respect to
    every other one, and must never hand out an id twice unless
    ``reset()`` is called.
    """

    @abstractmethod
    def insert(self, values: ProductValues) -> int:
        """Store a new row and return its id.

        Missing ``price``/``quantity`` default to 0 and a missing
        ``name`` to the empty string.  ``image_uri`` is required.
        """

    @abstractmethod
    def query_all(self) -> RowSequence:
        """Return a snapshot of every row in insertion order."""

    @abstractmethod
    def query_one(self, product_id: int) -> Product | None:
        """Return a row by its id, or None if not found."""

    @abstractmethod
    def update(self, product_id: int, values: ProductValues) -> int:
        """Merge the provided columns into a row; return rows affected."""

    @abstractmethod
    def delete(self, product_id: int) -> int:
        """Remove a row permanently; return rows affected."""

    @abstractmethod
    def reset(self) -> None:
        """Remove every row and restart id assignment."""

    def close(self) -> None:
        """Release any resources held by the store."""

    def __enter__(self) -> ProductStore:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        self.close()
        return False
