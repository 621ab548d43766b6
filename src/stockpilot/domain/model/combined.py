"""CombinedInventoryItem — the read-only inventory line shown to users.

Never persisted. It is recomputed from the current product and
inventory lists every time it is needed.
"""

from __future__ import annotations

from dataclasses import dataclass

from stockpilot.domain.model.inventory import InventoryItem
from stockpilot.domain.model.product import (
    CountryLabel,
    Product,
    ProductType,
    TargetLabel,
)

NOT_APPLICABLE = "N/A"


@dataclass(frozen=True)
class CombinedInventoryItem:
    """An inventory item with its product's fields denormalized onto it.

    Product fields are None when the referenced product is unknown.
    """

    item: InventoryItem
    product_name: str
    item_number: str
    product_type: ProductType | None
    target_label: TargetLabel | None
    country_label: CountryLabel | None
    pallets: float | str

    @property
    def id(self) -> str:
        return self.item.id

    @property
    def quantity(self) -> int:
        return self.item.quantity


def compute_pallets(quantity: int, product: Product | None) -> float | str:
    """Quantity expressed in pallets, or NOT_APPLICABLE without a pallet size."""
    cases = product.cases_per_pallet_count if product is not None else None
    if cases is None:
        return NOT_APPLICABLE
    return round(quantity / cases, 2)


def combine_inventory(
    products: list[Product], inventory: list[InventoryItem]
) -> list[CombinedInventoryItem]:
    """Join every inventory item with its product, preserving inventory order."""
    by_id = {p.id: p for p in products}
    combined: list[CombinedInventoryItem] = []
    for item in inventory:
        product = by_id.get(item.product_id)
        combined.append(
            CombinedInventoryItem(
                item=item,
                product_name=product.name if product else "",
                item_number=product.item_number if product else "",
                product_type=product.product_type if product else None,
                target_label=product.target_label if product else None,
                country_label=product.country_label if product else None,
                pallets=compute_pallets(item.quantity, product),
            )
        )
    return combined
