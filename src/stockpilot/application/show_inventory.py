"""Application service: Show Inventory use case (query)."""

from __future__ import annotations

from stockpilot.application.dto import InventoryLineDTO
from stockpilot.domain.model.combined import CombinedInventoryItem, combine_inventory
from stockpilot.domain.model.inventory import InventoryItem
from stockpilot.domain.model.product import Product


class ShowInventoryHandler:

    def handle(
        self,
        products: list[Product],
        inventory: list[InventoryItem],
        include_held: bool = True,
    ) -> list[InventoryLineDTO]:
        lines = [
            self._to_dto(line)
            for line in combine_inventory(products, inventory)
            if include_held or not line.item.on_hold
        ]
        return sorted(lines, key=lambda l: (l.product_name.lower(), l.sku))

    @staticmethod
    def _to_dto(line: CombinedInventoryItem) -> InventoryLineDTO:
        item = line.item
        expires = item.next_expiration
        return InventoryLineDTO(
            id=item.id,
            product_name=line.product_name or "(unknown product)",
            item_number=line.item_number,
            sku=item.sku,
            product_type=line.product_type.value if line.product_type else "",
            customer_type=item.customer_type.value,
            quantity=item.quantity,
            pallets=format_pallets(line.pallets),
            lot_count=len(item.lots),
            next_expiration=expires.isoformat() if expires else "",
            locations=", ".join(item.locations),
            on_hold=item.on_hold,
            total_sales=item.total_sales,
        )


def format_pallets(pallets: float | str) -> str:
    if isinstance(pallets, str):
        return pallets
    return f"{pallets:.2f}"
