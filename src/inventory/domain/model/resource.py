"""Resource identifiers — structured addresses for products.

``products`` addresses the whole collection, ``products/<id>`` a single
row.  Identifiers are value objects: compared by value, hashable, and
validated on construction.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from inventory.domain.exceptions import ValidationError

PRODUCTS = "products"

# MIME-equivalent classification of the two identifier kinds.
PRODUCT_LIST_TYPE = f"vnd.inventory.dir/{PRODUCTS}"
PRODUCT_ITEM_TYPE = f"vnd.inventory.item/{PRODUCTS}"


class ResourceKind(Enum):
    COLLECTION = "COLLECTION"
    ITEM = "ITEM"


@dataclass(frozen=True)
class ResourceUri:
    collection: str
    id: int | None = None

    def __post_init__(self) -> None:
        if not self.collection or "/" in self.collection:
            raise ValidationError(f"Invalid collection name: {self.collection!r}")
        if self.id is not None:
            if isinstance(self.id, bool) or not isinstance(self.id, int):
                raise ValidationError(
                    f"Resource id must be an integer, got {type(self.id).__name__}"
                )
            if self.id < 0:
                raise ValidationError(f"Resource id cannot be negative, got {self.id}")

    # --- Classification -------------------------------------------------------

    @property
    def kind(self) -> ResourceKind:
        if self.id is None:
            return ResourceKind.COLLECTION
        return ResourceKind.ITEM

    @property
    def is_item(self) -> bool:
        return self.id is not None

    @property
    def collection_uri(self) -> ResourceUri:
        if self.id is None:
            return self
        return ResourceUri(self.collection)

    def with_id(self, row_id: int) -> ResourceUri:
        return ResourceUri(self.collection, row_id)

    def contains(self, other: ResourceUri) -> bool:
        """True if *other* is this identifier or an item of this collection."""
        if self.collection != other.collection:
            return False
        return self.id is None or self.id == other.id

    def overlaps(self, other: ResourceUri) -> bool:
        return self.contains(other) or other.contains(self)

    # --- Text form ------------------------------------------------------------

    def __str__(self) -> str:
        if self.id is None:
            return self.collection
        return f"{self.collection}/{self.id}"

    @staticmethod
    def parse(raw: str | ResourceUri) -> ResourceUri:
        """Parse ``<collection>`` or ``<collection>/<id>``."""
        if isinstance(raw, ResourceUri):
            return raw
        if not isinstance(raw, str):
            raise ValidationError(
                f"Resource identifier must be text, got {type(raw).__name__}"
            )
        parts = raw.strip().strip("/").split("/")
        if len(parts) == 1 and parts[0]:
            return ResourceUri(parts[0])
        if len(parts) == 2 and parts[0]:
            if not (parts[1].isascii() and parts[1].isdigit()):
                raise ValidationError(f"Invalid resource id in {raw!r}")
            return ResourceUri(parts[0], int(parts[1]))
        raise ValidationError(f"Invalid resource identifier: {raw!r}")


PRODUCTS_URI = ResourceUri(PRODUCTS)
