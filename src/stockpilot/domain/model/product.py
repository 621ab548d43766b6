"""Product aggregate.

Products live independently of inventory. They are created from a form
submission and carry the catalog attributes shown next to every
inventory line (type, pallet size, labels).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from stockpilot.domain.exceptions import ValidationError


class ProductType(Enum):
    AMBIENT = "Ambient"
    REFRIGERATED = "Refrigerated"
    FROZEN = "Frozen"


class TargetLabel(Enum):
    REGULAR_CUSTOMER = "Regular Customer"
    TARGET = "Target"


class CountryLabel(Enum):
    US = "US"
    CANADA = "Canada"


def parse_count(value: str, field_name: str) -> str:
    """Validate a string-encoded count: empty or a non-negative integer."""
    value = (value or "").strip()
    if value and not value.isdigit():
        raise ValidationError(
            f"{field_name} must be a whole number, got {value!r}"
        )
    return value


@dataclass(frozen=True)
class ProductFormData:
    """A product as submitted from the create form — no identity yet.

    Use ``ProductFormData.create()`` for user input; the plain constructor
    performs no validation.
    """

    name: str
    item_number: str
    product_type: ProductType
    cases_per_pallet: str
    shelf_life_in_days: str
    target_label: TargetLabel
    country_label: CountryLabel

    @staticmethod
    def create(
        name: str,
        item_number: str,
        product_type: ProductType | str,
        cases_per_pallet: str = "",
        shelf_life_in_days: str = "",
        target_label: TargetLabel | str = TargetLabel.REGULAR_CUSTOMER,
        country_label: CountryLabel | str = CountryLabel.US,
    ) -> ProductFormData:
        if not name or not name.strip():
            raise ValidationError("Product name is required")
        if not item_number or not item_number.strip():
            raise ValidationError("Item number is required")
        return ProductFormData(
            name=name.strip(),
            item_number=item_number.strip(),
            product_type=coerce_enum(ProductType, product_type, "product type"),
            cases_per_pallet=parse_count(cases_per_pallet, "Cases per pallet"),
            shelf_life_in_days=parse_count(shelf_life_in_days, "Shelf life"),
            target_label=coerce_enum(TargetLabel, target_label, "target label"),
            country_label=coerce_enum(CountryLabel, country_label, "country label"),
        )

    def to_document(self) -> dict:
        return {
            "name": self.name,
            "itemNumber": self.item_number,
            "productType": self.product_type.value,
            "casesPerPallet": self.cases_per_pallet,
            "shelfLifeInDays": self.shelf_life_in_days,
            "targetLabel": self.target_label.value,
            "countryLabel": self.country_label.value,
        }


@dataclass
class Product:
    """A product in the catalog, as stored under its store-assigned ID."""

    id: str
    name: str
    item_number: str
    product_type: ProductType
    cases_per_pallet: str
    shelf_life_in_days: str
    target_label: TargetLabel
    country_label: CountryLabel

    @property
    def cases_per_pallet_count(self) -> int | None:
        """Cases per pallet as a positive int, or None when not usable."""
        value = (self.cases_per_pallet or "").strip()
        if not value.isdigit() or int(value) == 0:
            return None
        return int(value)

    @staticmethod
    def from_document(doc_id: str, data: dict) -> Product:
        return Product(
            id=doc_id,
            name=data["name"],
            item_number=data["itemNumber"],
            product_type=ProductType(data["productType"]),
            cases_per_pallet=str(data.get("casesPerPallet", "")),
            shelf_life_in_days=str(data.get("shelfLifeInDays", "")),
            target_label=TargetLabel(data["targetLabel"]),
            country_label=CountryLabel(data["countryLabel"]),
        )


def coerce_enum(enum_cls, value, label: str):
    """Accept an enum member or its stored string value."""
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ValidationError(
            f"Invalid {label} {value!r} (expected one of: {allowed})"
        ) from None
