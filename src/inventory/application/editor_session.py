"""Application service: Editor Session.

Holds the in-progress edits for one product, either a new one
(no target id) or an existing one.  The session tracks whether the
user touched anything, turns the raw field text into one complete
write on save, and decides whether leaving needs a discard prompt.

A session is owned by a single editing surface and is finished by
``save()``, ``delete()`` or ``discard()``; it cannot be reused after.
"""

from __future__ import annotations

import logging
from enum import Enum

from inventory.application.resolver import ProductResolver
from inventory.domain.exceptions import EntityNotFoundError, SessionClosedError
from inventory.domain.model.product import ProductValues
from inventory.domain.model.resource import PRODUCTS_URI, ResourceKind, ResourceUri

logger = logging.getLogger(__name__)


class CloseDecision(Enum):
    CLOSE_NOW = "CLOSE_NOW"
    CONFIRM_DISCARD = "CONFIRM_DISCARD"


class EditorSession:

    def __init__(
        self,
        resolver: ProductResolver,
        target_id: int | None = None,
        default_image_uri: str | None = None,
    ) -> None:
        self._resolver = resolver
        self.target_id = target_id
        self._default_image_uri = default_image_uri or resolver.default_image_uri

        self.dirty = False
        self.pending_image_uri: str | None = None
        self.name = ""
        self.price = ""
        self.quantity = ""
        self._loaded_image_uri: str | None = None
        self._loaded = False
        self._closed = False

    # --- State ----------------------------------------------------------------

    @property
    def is_new(self) -> bool:
        return self.target_id is None

    @property
    def uri(self) -> ResourceUri:
        if self.target_id is None:
            return PRODUCTS_URI
        return PRODUCTS_URI.with_id(self.target_id)

    @property
    def can_delete(self) -> bool:
        """Delete only makes sense for a record that already exists."""
        return self.uri.kind is ResourceKind.ITEM

    @property
    def image_uri(self) -> str:
        """The image that a save would write right now."""
        return self.pending_image_uri or self._loaded_image_uri or self._default_image_uri

    @property
    def closed(self) -> bool:
        return self._closed

    def load(self) -> None:
        """Fill the fields from the stored product (Editing state only).

        Loading is not a user edit, so it leaves ``dirty`` alone.
        Edits and ``save()`` call it first if it has not run yet.
        """
        self._ensure_open()
        if self.is_new:
            return
        product = self._resolver.query(self.uri)
        if product is None:
            raise EntityNotFoundError(f"Product #{self.target_id} not found")
        self.name = product.name
        self.price = str(product.price)
        self.quantity = str(product.quantity)
        self._loaded_image_uri = product.image_uri
        self._loaded = True

    # --- Edits ----------------------------------------------------------------

    def touch(self) -> None:
        self.dirty = True

    def set_name(self, text: str) -> None:
        self._ensure_open()
        self._ensure_loaded()
        self.name = text
        self.touch()

    def set_price(self, text: str) -> None:
        self._ensure_open()
        self._ensure_loaded()
        self.price = text
        self.touch()

    def set_quantity(self, text: str) -> None:
        self._ensure_open()
        self._ensure_loaded()
        self.quantity = text
        self.touch()

    def choose_image(self, image_uri: str) -> None:
        self._ensure_open()
        self._ensure_loaded()
        self.pending_image_uri = image_uri
        self.touch()

    # --- Completion -----------------------------------------------------------

    def save(self) -> int | None:
        """Write the edited product and return its id.

        A new session whose fields are all blank and that has no chosen
        image is dropped silently (returns None, nothing is written).
        Unparseable numbers raise ValidationError before anything is
        written and leave the fields as they are.
        """
        self._ensure_open()
        if self.is_new and self._is_blank():
            logger.debug("Nothing entered; new product not created")
            return None

        self._ensure_loaded()
        values = ProductValues.parse(
            name=self.name,
            price=self.price,
            quantity=self.quantity,
            image_uri=self.image_uri,
        )

        if self.is_new:
            item = self._resolver.insert(PRODUCTS_URI, values)
            product_id = item.id if item is not None else None
        else:
            rows = self._resolver.update(self.uri, values)
            if rows == 0:
                raise EntityNotFoundError(f"Product #{self.target_id} not found")
            product_id = self.target_id

        self._closed = True
        return product_id

    def delete(self) -> int | None:
        """Delete the product being edited; return rows affected."""
        self._ensure_open()
        if not self.can_delete:
            return 0
        rows = self._resolver.delete(self.uri)
        if rows == 0:
            raise EntityNotFoundError(f"Product #{self.target_id} not found")
        self._closed = True
        return rows

    def request_close(self) -> CloseDecision:
        if self.dirty:
            return CloseDecision.CONFIRM_DISCARD
        return CloseDecision.CLOSE_NOW

    def discard(self) -> None:
        self._closed = True

    # --- Internal helpers -----------------------------------------------------

    def _is_blank(self) -> bool:
        return (
            self.pending_image_uri is None
            and not self.name.strip()
            and not self.price.strip()
            and not self.quantity.strip()
        )

    def _ensure_open(self) -> None:
        if self._closed:
            raise SessionClosedError("Editor session is already closed")

    def _ensure_loaded(self) -> None:
        # Edits apply on top of the stored row, never over blank fields.
        if not self.is_new and not self._loaded:
            self.load()
