"""Application service: Product Resolver.

Translates resource identifiers into record-store calls and publishes
a change notification for every write that commits.  This is the only
path through which the rest of the application reads or writes rows.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TypeVar

from inventory.domain.exceptions import UnknownResourceError
from inventory.domain.model.product import (
    DEFAULT_IMAGE_URI,
    Product,
    ProductValues,
    RowSequence,
)
from inventory.domain.model.resource import (
    PRODUCT_ITEM_TYPE,
    PRODUCT_LIST_TYPE,
    PRODUCTS,
    ResourceKind,
    ResourceUri,
)
from inventory.domain.repository.product_store import ProductStore
from inventory.domain.service.change_notifier import ChangeNotifier

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ProductResolver:

    def __init__(
        self,
        store: ProductStore,
        notifier: ChangeNotifier,
        default_image_uri: str = DEFAULT_IMAGE_URI,
    ) -> None:
        self._store = store
        self._notifier = notifier
        self._default_image_uri = default_image_uri

    @property
    def default_image_uri(self) -> str:
        return self._default_image_uri

    # --- Classification -------------------------------------------------------

    def get_type(self, uri: str | ResourceUri) -> str:
        """Return the MIME-equivalent type of *uri*."""
        uri = self._resolve(uri)
        if uri.kind is ResourceKind.COLLECTION:
            return PRODUCT_LIST_TYPE
        return PRODUCT_ITEM_TYPE

    # --- Reads ----------------------------------------------------------------

    def query(self, uri: str | ResourceUri) -> RowSequence | Product | None:
        """Return every row for a collection, or one row (or None) for an item."""
        uri = self._resolve(uri)
        if uri.kind is ResourceKind.COLLECTION:
            return self._store.query_all()
        return self._store.query_one(uri.id)

    # --- Writes ---------------------------------------------------------------
    #
    # A write attempted from inside a change handler is queued on the
    # notifier and replayed after the current dispatch; the call itself
    # then returns None.

    def insert(
        self, uri: str | ResourceUri, values: ProductValues
    ) -> ResourceUri | None:
        """Insert a row and return the identifier of the new item."""
        uri = self._resolve(uri)
        if uri.kind is not ResourceKind.COLLECTION:
            raise UnknownResourceError(f"Insertion is not supported for {uri}")
        return self._write(lambda: self._insert(uri, values), "insert", uri)

    def update(self, uri: str | ResourceUri, values: ProductValues) -> int | None:
        """Merge *values* into one row; return rows affected."""
        uri = self._require_item(uri, "Update")
        return self._write(lambda: self._update(uri, values), "update", uri)

    def delete(self, uri: str | ResourceUri) -> int | None:
        """Delete one row; return rows affected."""
        uri = self._require_item(uri, "Deletion")
        return self._write(lambda: self._delete(uri), "delete", uri)

    # --- Internal helpers -----------------------------------------------------

    def _insert(self, uri: ResourceUri, values: ProductValues) -> ResourceUri:
        values = values.with_default_image(self._default_image_uri)
        new_id = self._store.insert(values)
        item = uri.with_id(new_id)
        logger.info("Inserted %s", item)
        self._notifier.notify(uri)
        return item

    def _update(self, uri: ResourceUri, values: ProductValues) -> int:
        if values.is_empty():
            logger.debug("Update of %s with no values ignored", uri)
            return 0
        rows = self._store.update(uri.id, values)
        if rows == 0:
            logger.warning("Update of %s affected no rows", uri)
            return 0
        logger.info("Updated %s (%s)", uri, ", ".join(c for c, _ in values.items()))
        self._notifier.notify(uri)
        return rows

    def _delete(self, uri: ResourceUri) -> int:
        rows = self._store.delete(uri.id)
        if rows == 0:
            logger.warning("Delete of %s affected no rows", uri)
            return 0
        logger.info("Deleted %s", uri)
        self._notifier.notify(uri)
        return rows

    def _write(self, action: Callable[[], T], verb: str, uri: ResourceUri) -> T | None:
        if self._notifier.dispatching:
            logger.debug("Deferring %s of %s until dispatch completes", verb, uri)
            self._notifier.defer(action)
            return None
        return action()

    @staticmethod
    def _resolve(uri: str | ResourceUri) -> ResourceUri:
        uri = ResourceUri.parse(uri)
        if uri.collection != PRODUCTS:
            raise UnknownResourceError(f"Unknown resource: {uri}")
        return uri

    def _require_item(self, uri: str | ResourceUri, verb: str) -> ResourceUri:
        uri = self._resolve(uri)
        if uri.kind is not ResourceKind.ITEM:
            raise UnknownResourceError(f"{verb} requires a single product, got {uri}")
        return uri
