"""Application service: Show Dashboard use case (query).

Aggregates the live product and inventory lists into the headline
numbers of the dashboard view. Pure computation, no repository access.
"""

from __future__ import annotations

from collections import Counter
from datetime import date

from stockpilot.application.dto import DashboardDTO, TopSellerDTO
from stockpilot.domain.model.combined import combine_inventory
from stockpilot.domain.model.inventory import InventoryItem
from stockpilot.domain.model.product import Product

TOP_SELLER_COUNT = 5


class ShowDashboardHandler:

    def __init__(self, expiry_window_days: int = 30) -> None:
        self._expiry_window_days = expiry_window_days

    def handle(
        self,
        products: list[Product],
        inventory: list[InventoryItem],
        today: date | None = None,
    ) -> DashboardDTO:
        today = today or date.today()
        combined = combine_inventory(products, inventory)

        units_by_type: Counter[str] = Counter()
        for line in combined:
            type_name = line.product_type.value if line.product_type else "Unknown"
            units_by_type[type_name] += line.quantity

        sellers = sorted(
            (line for line in combined if line.item.total_sales > 0),
            key=lambda line: line.item.total_sales,
            reverse=True,
        )[:TOP_SELLER_COUNT]

        return DashboardDTO(
            product_count=len(products),
            inventory_item_count=len(inventory),
            total_units=sum(item.quantity for item in inventory),
            total_pallets=round(
                sum(line.pallets for line in combined if not isinstance(line.pallets, str)),
                2,
            ),
            on_hold_count=sum(1 for item in inventory if item.on_hold),
            expiring_lot_count=sum(
                len(item.expiring_lots(self._expiry_window_days, today))
                for item in inventory
            ),
            expired_lot_count=sum(len(item.expired_lots(today)) for item in inventory),
            expiry_window_days=self._expiry_window_days,
            units_by_product_type=dict(units_by_type),
            top_sellers=[
                TopSellerDTO(
                    product_name=line.product_name,
                    sku=line.item.sku,
                    total_sales=line.item.total_sales,
                )
                for line in sellers
            ],
        )
