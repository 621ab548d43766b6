"""Integration tests for the inventory use cases.

Uses in-memory fake repositories — no file I/O.
"""

from datetime import date

import pytest

from stockpilot.application.add_inventory import AddInventoryItemHandler
from stockpilot.application.add_lot import AddLotHandler
from stockpilot.application.hold_inventory import SetHoldHandler
from stockpilot.application.remove_inventory import RemoveInventoryItemHandler
from stockpilot.application.update_inventory import UpdateInventoryItemHandler
from stockpilot.domain.exceptions import EntityNotFoundError, ValidationError
from stockpilot.domain.model.inventory import CustomerType, InventoryItem, Lot
from tests.fakes import FakeInventoryRepository

ORG = "acme"


def _item(iid: str = "i1", qty: int = 10) -> InventoryItem:
    return InventoryItem(
        id=iid, product_id="p1", sku=f"S-{iid}",
        lots=[Lot(qty, date(2025, 3, 1))], quantity=qty,
    )


class TestAddInventoryItem:

    def test_quantity_is_sum_of_lots(self):
        repo = FakeInventoryRepository(org_id=ORG)
        item_id = AddInventoryItemHandler(repo, ORG).handle(
            "p1", "SKU-1",
            [Lot(5, date(2025, 1, 1)), Lot(7, date(2025, 2, 1))],
            locations=["A1", "A1", " B2 "],
        )
        item = repo.get_by_id(ORG, item_id)
        assert item.quantity == 12
        assert item.total_sales == 0
        assert item.locations == ["A1", "B2"]
        assert item.customer_type is CustomerType.REGULAR

    def test_no_lots_means_zero_quantity(self):
        repo = FakeInventoryRepository(org_id=ORG)
        item_id = AddInventoryItemHandler(repo, ORG).handle("p1", "SKU-1", [])
        assert repo.get_by_id(ORG, item_id).quantity == 0

    def test_walmart_customer(self):
        repo = FakeInventoryRepository(org_id=ORG)
        item_id = AddInventoryItemHandler(repo, ORG).handle(
            "p1", "SKU-1", [], customer_type="Walmart", on_hold=True
        )
        item = repo.get_by_id(ORG, item_id)
        assert item.customer_type is CustomerType.WALMART
        assert item.on_hold is True

    def test_sku_required(self):
        repo = FakeInventoryRepository(org_id=ORG)
        with pytest.raises(ValidationError, match="SKU"):
            AddInventoryItemHandler(repo, ORG).handle("p1", "  ", [])

    def test_unknown_customer_type_rejected(self):
        repo = FakeInventoryRepository(org_id=ORG)
        with pytest.raises(ValidationError, match="customer type"):
            AddInventoryItemHandler(repo, ORG).handle("p1", "S", [], customer_type="Costco")


class TestUpdateInventoryItem:

    def test_lots_change_rewrites_quantity(self):
        repo = FakeInventoryRepository([_item()], org_id=ORG)
        UpdateInventoryItemHandler(repo, ORG).handle(
            "i1", {"lots": [Lot(3, date(2025, 1, 1)), Lot(4, date(2025, 1, 1))]}
        )
        assert repo.get_by_id(ORG, "i1").quantity == 7

    def test_other_fields_keep_quantity(self):
        repo = FakeInventoryRepository([_item(qty=10)], org_id=ORG)
        UpdateInventoryItemHandler(repo, ORG).handle("i1", {"sku": "NEW"})
        item = repo.get_by_id(ORG, "i1")
        assert item.sku == "NEW"
        assert item.quantity == 10

    def test_missing_item(self):
        repo = FakeInventoryRepository(org_id=ORG)
        with pytest.raises(EntityNotFoundError):
            UpdateInventoryItemHandler(repo, ORG).handle("nope", {"sku": "X"})


class TestAddLot:

    def test_appends_lot_and_returns_quantity(self):
        repo = FakeInventoryRepository([_item(qty=10)], org_id=ORG)
        quantity = AddLotHandler(repo, ORG).handle("i1", Lot(5, date(2025, 3, 1)))

        assert quantity == 15
        item = repo.get_by_id(ORG, "i1")
        assert item.quantity == 15
        # Same expiration date stays a separate lot
        assert len(item.lots) == 2

    def test_missing_item(self):
        repo = FakeInventoryRepository(org_id=ORG)
        with pytest.raises(EntityNotFoundError):
            AddLotHandler(repo, ORG).handle("nope", Lot(1, date(2025, 1, 1)))


class TestRemoveInventoryItem:

    def test_deletes(self):
        repo = FakeInventoryRepository([_item()], org_id=ORG)
        RemoveInventoryItemHandler(repo, ORG).handle("i1")
        assert repo.get_by_id(ORG, "i1") is None

    def test_missing_is_noop(self):
        repo = FakeInventoryRepository([_item()], org_id=ORG)
        RemoveInventoryItemHandler(repo, ORG).handle("nope")
        assert repo.get_by_id(ORG, "i1") is not None


class TestSetHold:

    def test_holds_in_one_batch(self):
        repo = FakeInventoryRepository([_item("i1"), _item("i2")], org_id=ORG)
        count = SetHoldHandler(repo, ORG).handle(["i1", "i2", "i1"], on_hold=True)

        assert count == 2
        assert len(repo.batches) == 1
        assert repo.get_by_id(ORG, "i1").on_hold is True
        assert repo.get_by_id(ORG, "i2").on_hold is True

    def test_release(self):
        repo = FakeInventoryRepository([_item()], org_id=ORG)
        SetHoldHandler(repo, ORG).handle(["i1"], on_hold=True)
        SetHoldHandler(repo, ORG).handle(["i1"], on_hold=False)
        assert repo.get_by_id(ORG, "i1").on_hold is False

    def test_unknown_id_changes_nothing(self):
        repo = FakeInventoryRepository([_item()], org_id=ORG)
        with pytest.raises(EntityNotFoundError):
            SetHoldHandler(repo, ORG).handle(["i1", "ghost"], on_hold=True)
        assert repo.get_by_id(ORG, "i1").on_hold is False
        assert repo.batches == []

    def test_requires_ids(self):
        repo = FakeInventoryRepository(org_id=ORG)
        with pytest.raises(ValidationError):
            SetHoldHandler(repo, ORG).handle([" ", ""], on_hold=True)
