"""Application service: Product List binding.

Keeps a projected copy of every product row and refreshes it whenever
a write under the bound identifier commits.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from inventory.application.resolver import ProductResolver
from inventory.application.row_projection import (
    ProductRowActions,
    ProductViewModel,
    project,
)
from inventory.domain.model.product import RowSequence
from inventory.domain.model.resource import PRODUCTS_URI, ResourceUri
from inventory.domain.service.change_notifier import ChangeNotifier

logger = logging.getLogger(__name__)


class ProductListBinding:

    def __init__(
        self,
        resolver: ProductResolver,
        notifier: ChangeNotifier,
        uri: ResourceUri = PRODUCTS_URI,
        on_change: Callable[[list[ProductViewModel]], None] | None = None,
    ) -> None:
        self._resolver = resolver
        self._notifier = notifier
        self._uri = uri.collection_uri
        self._on_change = on_change
        self._products = RowSequence()
        self._rows: list[ProductViewModel] = []
        self._bound = False

        self.actions = ProductRowActions(resolver)
        self.refresh()
        notifier.subscribe(self._uri, self._handle_change)
        self._bound = True

    @property
    def products(self) -> RowSequence:
        return self._products

    @property
    def rows(self) -> list[ProductViewModel]:
        return list(self._rows)

    def refresh(self) -> None:
        """Re-read every row and re-project it."""
        self._products = self._resolver.query(self._uri)
        self._rows = [project(row) for row in self._products]

    def close(self) -> None:
        if not self._bound:
            return
        self._notifier.unsubscribe(self._uri, self._handle_change)
        self._bound = False

    def __enter__(self) -> ProductListBinding:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        self.close()
        return False

    def _handle_change(self, uri: ResourceUri) -> None:
        logger.debug("List bound to %s refreshing after change on %s", self._uri, uri)
        self.refresh()
        if self._on_change is not None:
            self._on_change(self.rows)
