"""Application service: Update Inventory Item use case."""

from __future__ import annotations

from typing import Any

from stockpilot.domain.exceptions import EntityNotFoundError
from stockpilot.domain.repository.inventory_repository import InventoryRepository


class UpdateInventoryItemHandler:

    def __init__(self, inventory_repo: InventoryRepository, org_id: str) -> None:
        self._inventory_repo = inventory_repo
        self._org_id = org_id

    def handle(self, item_id: str, changes: dict[str, Any]) -> None:
        """Merge partial changes into an item.

        Passing ``lots`` rewrites the derived quantity in the same write.
        """
        if self._inventory_repo.get_by_id(self._org_id, item_id) is None:
            raise EntityNotFoundError(f"Inventory item '{item_id}' not found")
        self._inventory_repo.update(self._org_id, item_id, changes)
