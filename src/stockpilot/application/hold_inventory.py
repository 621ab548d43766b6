"""Application service: Hold / Release Inventory use case.

Flags several items at once through the atomic batch update, so either
every listed item changes or none does.
"""

from __future__ import annotations

from stockpilot.domain.exceptions import ValidationError
from stockpilot.domain.model.inventory import InventoryUpdate
from stockpilot.domain.repository.inventory_repository import InventoryRepository


class SetHoldHandler:

    def __init__(self, inventory_repo: InventoryRepository, org_id: str) -> None:
        self._inventory_repo = inventory_repo
        self._org_id = org_id

    def handle(self, item_ids: list[str], on_hold: bool) -> int:
        unique_ids = list(dict.fromkeys(i.strip() for i in item_ids if i.strip()))
        if not unique_ids:
            raise ValidationError("At least one inventory item ID is required")

        self._inventory_repo.batch_update(
            self._org_id,
            [InventoryUpdate(item_id, {"on_hold": on_hold}) for item_id in unique_ids],
        )
        return len(unique_ids)
