"""Application service: Add Inventory Item use case."""

from __future__ import annotations

from stockpilot.domain.model.inventory import InventoryFormData, Lot
from stockpilot.domain.repository.inventory_repository import InventoryRepository


class AddInventoryItemHandler:

    def __init__(self, inventory_repo: InventoryRepository, org_id: str) -> None:
        self._inventory_repo = inventory_repo
        self._org_id = org_id

    def handle(
        self,
        product_id: str,
        sku: str,
        lots: list[Lot],
        locations: list[str] | None = None,
        customer_type: str = "Regular",
        on_hold: bool = False,
    ) -> str:
        """Store a new inventory item; its quantity is the sum of its lots."""
        form = InventoryFormData.create(
            product_id=product_id,
            sku=sku,
            lots=lots,
            locations=locations,
            customer_type=customer_type,
            on_hold=on_hold,
        )
        return self._inventory_repo.add(self._org_id, form)
