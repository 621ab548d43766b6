"""DocumentStore-backed implementation of InventoryRepository."""

from __future__ import annotations

from typing import Any, Callable

from stockpilot.domain.exceptions import ValidationError
from stockpilot.domain.model.inventory import (
    InventoryFormData,
    InventoryItem,
    InventoryUpdate,
    changes_to_document,
    sum_lot_quantities,
)
from stockpilot.domain.model.subscription import Subscription
from stockpilot.domain.repository.document_store import DocumentStore
from stockpilot.domain.repository.inventory_repository import InventoryRepository
from stockpilot.infrastructure.persistence.collections import (
    INVENTORY,
    collection_path,
    listen_to_collection,
)


class StoreInventoryRepository(InventoryRepository):

    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    # --- InventoryRepository interface ----------------------------------------

    def listen(
        self, org_id: str, on_update: Callable[[list[InventoryItem]], None]
    ) -> Subscription:
        return listen_to_collection(
            self._store, org_id, INVENTORY, InventoryItem.from_document, on_update
        )

    def get_by_id(self, org_id: str, item_id: str) -> InventoryItem | None:
        doc = self._store.get(collection_path(org_id, INVENTORY), item_id)
        if doc is None:
            return None
        return InventoryItem.from_document(doc.id, doc.data)

    def add(self, org_id: str, form: InventoryFormData) -> str:
        return self._store.add(collection_path(org_id, INVENTORY), form.to_document())

    def update(self, org_id: str, item_id: str, changes: dict[str, Any]) -> None:
        if "quantity" in changes:
            raise ValidationError("Quantity is derived from lots and cannot be set")
        data = changes_to_document(changes)
        if "lots" in changes:
            # Same write as the lots, never a separate one
            data["quantity"] = sum_lot_quantities(changes["lots"])
        self._store.update(collection_path(org_id, INVENTORY), item_id, data)

    def delete(self, org_id: str, item_id: str) -> None:
        self._store.delete(collection_path(org_id, INVENTORY), item_id)

    def batch_update(self, org_id: str, updates: list[InventoryUpdate]) -> None:
        # Fields are written as given: quantity is not recomputed from lots
        self._store.batch_update(
            collection_path(org_id, INVENTORY),
            [(u.item_id, changes_to_document(u.changes)) for u in updates],
        )
