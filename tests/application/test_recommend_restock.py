"""Tests for the RecommendRestock use case."""

from datetime import date

import pytest

from stockpilot.application.recommend_restock import RecommendRestockHandler
from stockpilot.domain.exceptions import RecommendationError, ValidationError
from stockpilot.domain.model.combined import combine_inventory
from stockpilot.domain.model.inventory import InventoryItem, Lot
from stockpilot.domain.model.product import (
    CountryLabel,
    Product,
    ProductType,
    TargetLabel,
)
from stockpilot.domain.repository.recommendation_client import Recommendation
from tests.fakes import FakeRecommendationClient

TODAY = date(2025, 1, 1)


def _combined():
    product = Product(
        id="p1", name="Tea", item_number="T1", product_type=ProductType.AMBIENT,
        cases_per_pallet="4", shelf_life_in_days="",
        target_label=TargetLabel.TARGET, country_label=CountryLabel.US,
    )
    item = InventoryItem(
        id="i1", product_id="p1", sku="SKU-1",
        lots=[Lot(8, date(2025, 1, 11))], quantity=8, total_sales=12,
    )
    return combine_inventory([product], [item])


class TestRecommendRestock:

    def test_sends_inventory_snapshot(self):
        client = FakeRecommendationClient()
        RecommendRestockHandler(client).handle(_combined(), today=TODAY)

        [payload] = client.requests
        [line] = payload
        assert line["sku"] == "SKU-1"
        assert line["productName"] == "Tea"
        assert line["productType"] == "Ambient"
        assert line["pallets"] == 2.0
        assert line["totalSales"] == 12
        assert line["lots"] == [
            {"quantity": 8, "expirationDate": "2025-01-11", "daysToExpiry": 10}
        ]

    def test_returns_client_recommendations(self):
        rec = Recommendation(sku="SKU-1", product_name="Tea", action="Restock",
                             reason="Selling fast", suggested_quantity=20)
        client = FakeRecommendationClient([rec])
        assert RecommendRestockHandler(client).handle(_combined(), today=TODAY) == [rec]

    def test_empty_inventory_rejected(self):
        client = FakeRecommendationClient()
        with pytest.raises(ValidationError):
            RecommendRestockHandler(client).handle([])
        assert client.requests == []

    def test_client_errors_propagate(self):
        client = FakeRecommendationClient(error="service down")
        with pytest.raises(RecommendationError, match="service down"):
            RecommendRestockHandler(client).handle(_combined(), today=TODAY)
