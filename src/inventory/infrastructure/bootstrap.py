"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module receives its collaborators explicitly.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from inventory.application.resolver import ProductResolver
from inventory.domain.repository.product_store import ProductStore
from inventory.domain.service.change_notifier import ChangeNotifier
from inventory.infrastructure.config import Settings
from inventory.infrastructure.persistence.sqlite_product_store import (
    SqliteProductStore,
)


@dataclass
class Inventory:
    """One fully wired instance of the application."""

    store: ProductStore
    notifier: ChangeNotifier
    resolver: ProductResolver

    def close(self) -> None:
        self.store.close()


def build_inventory(settings: Settings, database_path: str | Path | None = None) -> Inventory:
    store = SqliteProductStore(database_path or settings.database_path)
    notifier = ChangeNotifier()
    resolver = ProductResolver(
        store, notifier, default_image_uri=settings.default_image_uri
    )
    return Inventory(store=store, notifier=notifier, resolver=resolver)
