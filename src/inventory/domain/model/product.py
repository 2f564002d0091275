"""Product rows and the partial values written to them.

A ``Product`` is an immutable snapshot of one stored row.  Writes go
through ``ProductValues``, which carries only the columns the caller
provided and validates each of them on construction.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, fields, replace

from inventory.domain.exceptions import ValidationError

# Stored verbatim when no image was chosen; never re-derived at read time.
DEFAULT_IMAGE_URI = "resource://inventory/drawable/default_product"

# Largest value an SQLite INTEGER column can hold.
MAX_COUNT = 2**63 - 1


@dataclass(frozen=True)
class Product:
    """A product row as read from the store."""

    id: int
    name: str
    price: int  # smallest currency unit
    quantity: int
    image_uri: str


@dataclass(frozen=True)
class ProductValues:
    """A set of column values for an insert or update.

    ``None`` means "column not provided": inserts fall back to the
    column default, updates leave the stored value untouched.
    """

    name: str | None = None
    price: int | None = None
    quantity: int | None = None
    image_uri: str | None = None

    def __post_init__(self) -> None:
        if self.name is not None and not isinstance(self.name, str):
            raise ValidationError(
                f"Product name must be text, got {type(self.name).__name__}"
            )
        _check_count("price", self.price)
        _check_count("quantity", self.quantity)
        if self.image_uri is not None:
            if not isinstance(self.image_uri, str) or not self.image_uri.strip():
                raise ValidationError("Image reference must be a non-empty string")

    # --- Queries --------------------------------------------------------------

    def items(self) -> Iterator[tuple[str, object]]:
        """Yield ``(column, value)`` for every provided column."""
        for f in fields(self):
            value = getattr(self, f.name)
            if value is not None:
                yield f.name, value

    def is_empty(self) -> bool:
        return next(self.items(), None) is None

    def with_default_image(self, image_uri: str) -> ProductValues:
        if self.image_uri is not None:
            return self
        return replace(self, image_uri=image_uri)

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def parse(
        name: str | None = None,
        price: str | None = None,
        quantity: str | None = None,
        image_uri: str | None = None,
    ) -> ProductValues:
        """Build values from raw text as typed into an edit surface.

        Blank numeric text counts as 0.  Anything that is not a
        non-negative whole number is rejected.
        """
        return ProductValues(
            name=name.strip() if name is not None else None,
            price=_parse_count("price", price),
            quantity=_parse_count("quantity", quantity),
            image_uri=image_uri,
        )


class RowSequence(Sequence[Product]):
    """Immutable, restartable sequence over a snapshot of rows.

    Each ``iter()`` starts a fresh pass; the snapshot never changes
    after construction, whatever happens to the store afterwards.
    """

    def __init__(self, rows: Iterable[Product] = ()) -> None:
        self._rows = tuple(rows)

    def __getitem__(self, index):
        return self._rows[index]

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[Product]:
        for row in self._rows:
            yield row

    def __eq__(self, other: object) -> bool:
        if isinstance(other, RowSequence):
            return self._rows == other._rows
        return NotImplemented

    def __repr__(self) -> str:
        return f"RowSequence({list(self._rows)!r})"


# --- Internal helpers ---------------------------------------------------------


def _check_count(column: str, value: object) -> None:
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(
            f"Product {column} must be an integer, got {type(value).__name__}"
        )
    if value < 0:
        raise ValidationError(f"Product {column} cannot be negative, got {value}")
    if value > MAX_COUNT:
        raise ValidationError(f"Product {column} is too large, got {value}")


def _parse_count(column: str, raw: str | None) -> int | None:
    if raw is None:
        return None
    text = raw.strip()
    if not text:
        return 0
    try:
        value = int(text)
    except ValueError as exc:
        raise ValidationError(f"Invalid {column}: {raw!r}") from exc
    if value < 0:
        raise ValidationError(f"Product {column} cannot be negative, got {value}")
    if value > MAX_COUNT:
        raise ValidationError(f"Product {column} is too large, got {value}")
    return value
