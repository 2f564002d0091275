"""Row projection — what a list row shows and what its buttons do.

``project()`` turns a stored row into a presentation-ready view model.
``ProductRowActions`` binds the sale / +1 / -1 buttons of a row to a
single-column quantity update through the resolver.
"""

from __future__ import annotations

from dataclasses import dataclass

from inventory.application.resolver import ProductResolver
from inventory.domain.model.product import Product, ProductValues
from inventory.domain.model.resource import PRODUCTS_URI


@dataclass(frozen=True)
class ProductViewModel:
    """Output: a single product row as displayed to the user."""

    id: int
    name: str
    price_display: str
    quantity_display: str
    image_uri: str


def project(row: Product) -> ProductViewModel:
    return ProductViewModel(
        id=row.id,
        name=row.name,
        price_display=str(row.price),
        quantity_display=str(row.quantity),
        image_uri=row.image_uri,
    )


class ProductRowActions:
    """Quantity actions for list rows.

    Every action computes the new quantity from the row it is given and
    issues exactly one update.  Selling or decrementing at 0 still
    writes 0.
    """

    def __init__(self, resolver: ProductResolver) -> None:
        self._resolver = resolver

    def sell(self, row: Product) -> int | None:
        """Record one unit sold."""
        return self._set_quantity(row, max(row.quantity - 1, 0))

    def increment(self, row: Product) -> int | None:
        return self._set_quantity(row, row.quantity + 1)

    def decrement(self, row: Product) -> int | None:
        return self._set_quantity(row, max(row.quantity - 1, 0))

    def _set_quantity(self, row: Product, quantity: int) -> int | None:
        return self._resolver.update(
            PRODUCTS_URI.with_id(row.id), ProductValues(quantity=quantity)
        )
