"""Application service: Remove Inventory Item use case."""

from __future__ import annotations

from stockpilot.domain.repository.inventory_repository import InventoryRepository


class RemoveInventoryItemHandler:

    def __init__(self, inventory_repo: InventoryRepository, org_id: str) -> None:
        self._inventory_repo = inventory_repo
        self._org_id = org_id

    def handle(self, item_id: str) -> None:
        """Delete an item. There is no undo."""
        self._inventory_repo.delete(self._org_id, item_id)
