"""Application service: Add Lot use case.

Receiving new stock appends a lot to an existing item. Lots sharing an
expiration date are kept separate, as received.
"""

from __future__ import annotations

from stockpilot.domain.exceptions import EntityNotFoundError
from stockpilot.domain.model.inventory import Lot, sum_lot_quantities
from stockpilot.domain.repository.inventory_repository import InventoryRepository


class AddLotHandler:

    def __init__(self, inventory_repo: InventoryRepository, org_id: str) -> None:
        self._inventory_repo = inventory_repo
        self._org_id = org_id

    def handle(self, item_id: str, lot: Lot) -> int:
        """Append ``lot`` and return the item's new quantity."""
        item = self._inventory_repo.get_by_id(self._org_id, item_id)
        if item is None:
            raise EntityNotFoundError(f"Inventory item '{item_id}' not found")

        lots = [*item.lots, lot]
        self._inventory_repo.update(self._org_id, item_id, {"lots": lots})
        return sum_lot_quantities(lots)
