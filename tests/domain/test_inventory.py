"""Unit tests for lots and the InventoryItem aggregate."""

from datetime import date

import pytest

from stockpilot.domain.exceptions import ValidationError
from stockpilot.domain.model.inventory import (
    CustomerType,
    InventoryFormData,
    InventoryItem,
    Lot,
    changes_to_document,
    sum_lot_quantities,
)

TODAY = date(2025, 6, 1)


class TestLot:

    def test_negative_quantity_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            Lot(-1, TODAY)

    def test_zero_quantity_allowed(self):
        assert Lot(0, TODAY).quantity == 0

    def test_non_integer_quantity_rejected(self):
        with pytest.raises(ValidationError, match="must be an integer"):
            Lot(2.5, TODAY)

    def test_bool_quantity_rejected(self):
        with pytest.raises(ValidationError, match="must be an integer"):
            Lot(True, TODAY)

    def test_of_parses_strings(self):
        assert Lot.of("12", "2025-07-31") == Lot(12, date(2025, 7, 31))

    def test_of_rejects_bad_date(self):
        with pytest.raises(ValidationError, match="expected YYYY-MM-DD"):
            Lot.of("12", "31/07/2025")

    def test_document_uses_iso_date(self):
        assert Lot(5, date(2025, 1, 2)).to_document() == {
            "quantity": 5,
            "expirationDate": "2025-01-02",
        }

    def test_expiry_window(self):
        lot = Lot(1, date(2025, 6, 20))
        assert lot.expires_within(30, TODAY)
        assert not lot.expires_within(10, TODAY)
        assert not lot.is_expired(TODAY)
        assert Lot(1, date(2025, 5, 31)).is_expired(TODAY)


class TestDerivedQuantity:

    def test_sum_of_lots(self):
        lots = [Lot(5, TODAY), Lot(3, TODAY)]
        assert sum_lot_quantities(lots) == 8

    def test_no_lots_is_zero(self):
        assert sum_lot_quantities([]) == 0

    def test_form_document_has_derived_quantity_and_zero_sales(self):
        form = InventoryFormData.create(
            product_id="p1", sku="SKU-1",
            lots=[Lot(5, TODAY), Lot(3, date(2025, 9, 1))],
        )
        doc = form.to_document()
        assert doc["quantity"] == 8
        assert doc["totalSales"] == 0
        assert "id" not in doc


class TestInventoryFormData:

    def test_requires_sku(self):
        with pytest.raises(ValidationError, match="SKU is required"):
            InventoryFormData.create(product_id="p1", sku=" ", lots=[])

    def test_requires_product(self):
        with pytest.raises(ValidationError, match="Product is required"):
            InventoryFormData.create(product_id="", sku="S", lots=[])

    def test_locations_deduplicated_in_order(self):
        form = InventoryFormData.create(
            product_id="p1", sku="S", lots=[],
            locations=["B2", " A1 ", "B2", ""],
        )
        assert form.locations == ("B2", "A1")

    def test_customer_type_from_string(self):
        form = InventoryFormData.create(
            product_id="p1", sku="S", lots=[], customer_type="Walmart",
        )
        assert form.customer_type is CustomerType.WALMART

    def test_unknown_customer_type_rejected(self):
        with pytest.raises(ValidationError, match="Invalid customer type"):
            InventoryFormData.create(
                product_id="p1", sku="S", lots=[], customer_type="Costco",
            )


class TestInventoryItemDocument:

    def test_from_document(self):
        item = InventoryItem.from_document("i1", {
            "productId": "p1",
            "sku": "S",
            "lots": [{"quantity": 4, "expirationDate": "2025-08-01"}],
            "locations": ["A1"],
            "customerType": "Walmart",
            "onHold": True,
            "quantity": 4,
            "totalSales": 12,
        })
        assert item.lots == [Lot(4, date(2025, 8, 1))]
        assert item.customer_type is CustomerType.WALMART
        assert item.on_hold is True
        assert item.total_sales == 12

    def test_fractional_lot_quantity_rejected(self):
        with pytest.raises(ValueError):
            Lot.from_document({"quantity": 2.7, "expirationDate": "2025-08-01"})

    def test_bool_lot_quantity_rejected(self):
        with pytest.raises(ValueError):
            Lot.from_document({"quantity": True, "expirationDate": "2025-08-01"})

    def test_next_expiration(self):
        item = InventoryItem(
            id="i1", product_id="p1", sku="S",
            lots=[Lot(1, date(2025, 9, 1)), Lot(1, date(2025, 7, 1))],
        )
        assert item.next_expiration == date(2025, 7, 1)

    def test_next_expiration_without_lots(self):
        assert InventoryItem(id="i1", product_id="p1", sku="S").next_expiration is None


class TestChangesToDocument:

    def test_translates_field_names(self):
        doc = changes_to_document({
            "on_hold": True,
            "customer_type": "Walmart",
            "lots": [Lot(2, date(2025, 1, 1))],
        })
        assert doc == {
            "onHold": True,
            "customerType": "Walmart",
            "lots": [{"quantity": 2, "expirationDate": "2025-01-01"}],
        }

    def test_unknown_field_rejected(self):
        with pytest.raises(ValidationError, match="Unknown inventory field"):
            changes_to_document({"colour": "red"})

    def test_empty_changes_rejected(self):
        with pytest.raises(ValidationError, match="No fields"):
            changes_to_document({})

    def test_lots_must_be_lot_instances(self):
        with pytest.raises(ValidationError, match="Lot instances"):
            changes_to_document({"lots": [{"quantity": 1}]})
