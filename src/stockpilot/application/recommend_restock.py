"""Application service: Recommend Restock use case.

Sends a compact view of the current inventory to the recommendation
service and returns its suggestions unchanged.
"""

from __future__ import annotations

from datetime import date

from stockpilot.domain.exceptions import ValidationError
from stockpilot.domain.model.combined import CombinedInventoryItem
from stockpilot.domain.repository.recommendation_client import (
    Recommendation,
    RecommendationClient,
)


class RecommendRestockHandler:

    def __init__(self, client: RecommendationClient) -> None:
        self._client = client

    def handle(
        self, combined: list[CombinedInventoryItem], today: date | None = None
    ) -> list[Recommendation]:
        if not combined:
            raise ValidationError("No inventory to analyse")
        today = today or date.today()
        return self._client.recommend([self._to_payload(line, today) for line in combined])

    @staticmethod
    def _to_payload(line: CombinedInventoryItem, today: date) -> dict:
        item = line.item
        return {
            "sku": item.sku,
            "productName": line.product_name,
            "productType": line.product_type.value if line.product_type else None,
            "customerType": item.customer_type.value,
            "quantity": item.quantity,
            "pallets": line.pallets,
            "totalSales": item.total_sales,
            "onHold": item.on_hold,
            "lots": [
                {
                    "quantity": lot.quantity,
                    "expirationDate": lot.expiration_date.isoformat(),
                    "daysToExpiry": (lot.expiration_date - today).days,
                }
                for lot in item.lots
            ],
        }
