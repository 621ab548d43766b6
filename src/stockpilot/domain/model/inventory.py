"""InventoryItem aggregate — stock of one product held as dated lots.

Each InventoryItem owns an ordered list of lots. The item's ``quantity``
is a cached, derived value that always equals the sum of its lot
quantities.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta
from enum import Enum
from typing import Any

from stockpilot.domain.exceptions import ValidationError
from stockpilot.domain.model.product import coerce_enum


class CustomerType(Enum):
    REGULAR = "Regular"
    WALMART = "Walmart"


@dataclass(frozen=True)
class Lot:
    """A batch of units sharing one expiration date."""

    quantity: int
    expiration_date: date

    def __post_init__(self) -> None:
        if isinstance(self.quantity, bool) or not isinstance(self.quantity, int):
            raise ValidationError(
                f"Lot quantity must be an integer, got {type(self.quantity).__name__}"
            )
        if self.quantity < 0:
            raise ValidationError("Lot quantity cannot be negative")
        if not isinstance(self.expiration_date, date):
            raise ValidationError("Lot expiration date must be a date")

    def is_expired(self, today: date) -> bool:
        return self.expiration_date < today

    def expires_within(self, days: int, today: date) -> bool:
        return today <= self.expiration_date <= today + timedelta(days=days)

    def to_document(self) -> dict:
        return {
            "quantity": self.quantity,
            "expirationDate": self.expiration_date.isoformat(),
        }

    @staticmethod
    def of(quantity: int | str, expiration_date: str | date) -> Lot:
        """Build a lot from loosely typed input (e.g. CLI or CSV values)."""
        try:
            qty = int(quantity)
        except (TypeError, ValueError):
            raise ValidationError(f"Invalid lot quantity: {quantity!r}") from None
        if isinstance(expiration_date, date):
            return Lot(qty, expiration_date)
        try:
            expires = date.fromisoformat(str(expiration_date).strip())
        except ValueError:
            raise ValidationError(
                f"Invalid expiration date {expiration_date!r} (expected YYYY-MM-DD)"
            ) from None
        return Lot(qty, expires)

    @staticmethod
    def from_document(data: dict) -> Lot:
        quantity = data["quantity"]
        if isinstance(quantity, bool) or not isinstance(quantity, int):
            raise ValueError(f"Stored lot quantity must be an integer, got {quantity!r}")
        return Lot(
            quantity=quantity,
            expiration_date=date.fromisoformat(data["expirationDate"]),
        )


def sum_lot_quantities(lots: list[Lot]) -> int:
    """The derived inventory quantity: the sum of every lot's quantity."""
    return sum(lot.quantity for lot in lots)


@dataclass(frozen=True)
class InventoryFormData:
    """An inventory item as submitted from the create form.

    Carries neither identity nor the derived ``quantity`` / ``total_sales``
    counters; those are assigned when the item is stored.
    """

    product_id: str
    sku: str
    lots: tuple[Lot, ...]
    locations: tuple[str, ...]
    customer_type: CustomerType
    on_hold: bool = False

    @staticmethod
    def create(
        product_id: str,
        sku: str,
        lots: list[Lot],
        locations: list[str] | None = None,
        customer_type: CustomerType | str = CustomerType.REGULAR,
        on_hold: bool = False,
    ) -> InventoryFormData:
        if not product_id or not product_id.strip():
            raise ValidationError("Product is required")
        if not sku or not sku.strip():
            raise ValidationError("SKU is required")
        for lot in lots:
            if not isinstance(lot, Lot):
                raise ValidationError("Lots must be Lot instances")
        return InventoryFormData(
            product_id=product_id.strip(),
            sku=sku.strip(),
            lots=tuple(lots),
            locations=tuple(normalize_locations(locations or [])),
            customer_type=coerce_enum(CustomerType, customer_type, "customer type"),
            on_hold=bool(on_hold),
        )

    @property
    def quantity(self) -> int:
        return sum_lot_quantities(list(self.lots))

    def to_document(self) -> dict:
        """Stored form of a new item: derived quantity, zero sales."""
        return {
            "productId": self.product_id,
            "sku": self.sku,
            "lots": [lot.to_document() for lot in self.lots],
            "locations": list(self.locations),
            "customerType": self.customer_type.value,
            "onHold": self.on_hold,
            "quantity": self.quantity,
            "totalSales": 0,
        }


@dataclass
class InventoryItem:
    """Aggregate root for stock of one product.

    Invariant: ``quantity`` == ``sum_lot_quantities(lots)`` for every
    item written through ``add`` or ``update``.
    """

    id: str
    product_id: str
    sku: str
    lots: list[Lot] = field(default_factory=list)
    locations: list[str] = field(default_factory=list)
    customer_type: CustomerType = CustomerType.REGULAR
    on_hold: bool = False
    quantity: int = 0
    total_sales: int = 0

    def expired_lots(self, today: date) -> list[Lot]:
        return [lot for lot in self.lots if lot.is_expired(today)]

    def expiring_lots(self, days: int, today: date) -> list[Lot]:
        return [lot for lot in self.lots if lot.expires_within(days, today)]

    @property
    def next_expiration(self) -> date | None:
        if not self.lots:
            return None
        return min(lot.expiration_date for lot in self.lots)

    @staticmethod
    def from_document(doc_id: str, data: dict) -> InventoryItem:
        return InventoryItem(
            id=doc_id,
            product_id=data["productId"],
            sku=data.get("sku", ""),
            lots=[Lot.from_document(raw) for raw in data.get("lots", [])],
            locations=list(data.get("locations", [])),
            customer_type=CustomerType(data.get("customerType", "Regular")),
            on_hold=bool(data.get("onHold", False)),
            quantity=int(data.get("quantity", 0)),
            total_sales=int(data.get("totalSales", 0)),
        )


@dataclass(frozen=True)
class InventoryUpdate:
    """One entry of a batch update: partial changes for one item."""

    item_id: str
    changes: dict[str, Any]


# Python attribute name -> stored document field name
UPDATABLE_FIELDS = {
    "product_id": "productId",
    "sku": "sku",
    "lots": "lots",
    "locations": "locations",
    "customer_type": "customerType",
    "on_hold": "onHold",
    "total_sales": "totalSales",
    "quantity": "quantity",
}


def normalize_locations(locations: list[str]) -> list[str]:
    """Strip blanks and duplicates, keeping first-seen order."""
    seen: list[str] = []
    for loc in locations:
        loc = loc.strip()
        if loc and loc not in seen:
            seen.append(loc)
    return seen


def changes_to_document(changes: dict[str, Any]) -> dict:
    """Translate a partial change set into stored field names and values."""
    if not changes:
        raise ValidationError("No fields to update")
    unknown = sorted(set(changes) - set(UPDATABLE_FIELDS))
    if unknown:
        raise ValidationError(f"Unknown inventory field(s): {', '.join(unknown)}")

    data: dict[str, Any] = {}
    for name, value in changes.items():
        if name == "lots":
            for lot in value:
                if not isinstance(lot, Lot):
                    raise ValidationError("Lots must be Lot instances")
            value = [lot.to_document() for lot in value]
        elif name == "locations":
            value = normalize_locations(list(value))
        elif name == "customer_type":
            value = coerce_enum(CustomerType, value, "customer type").value
        elif name == "on_hold":
            value = bool(value)
        data[UPDATABLE_FIELDS[name]] = value
    return data
