"""Application service: Import Products use case.

Reads a CSV export of the catalog and creates every row in one atomic
batch: either the whole file lands or nothing does.
"""

from __future__ import annotations

from pathlib import Path

import pandas as pd

from stockpilot.domain.exceptions import ValidationError
from stockpilot.domain.model.product import ProductFormData
from stockpilot.domain.repository.product_repository import ProductRepository

# CSV header -> ProductFormData.create() argument
CSV_COLUMNS = {
    "Name": "name",
    "Item Number": "item_number",
    "Product Type": "product_type",
    "Cases Per Pallet": "cases_per_pallet",
    "Shelf Life (Days)": "shelf_life_in_days",
    "Target Label": "target_label",
    "Country Label": "country_label",
}
REQUIRED_COLUMNS = ("Name", "Item Number", "Product Type")
_REQUIRED_ARGS = {CSV_COLUMNS[c] for c in REQUIRED_COLUMNS}


class ImportProductsHandler:

    def __init__(self, product_repo: ProductRepository, org_id: str) -> None:
        self._product_repo = product_repo
        self._org_id = org_id

    def handle(self, csv_path: Path) -> list[str]:
        forms = self.parse(csv_path)
        if not forms:
            raise ValidationError(f"No products found in {csv_path.name}")
        return self._product_repo.add_bulk(self._org_id, forms)

    @staticmethod
    def parse(csv_path: Path) -> list[ProductFormData]:
        try:
            df = pd.read_csv(
                csv_path, dtype=str, keep_default_na=False, encoding="utf-8-sig"
            )
        except FileNotFoundError:
            raise ValidationError(f"File not found: {csv_path}") from None
        except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as exc:
            raise ValidationError(f"Cannot read {csv_path.name}: {exc}") from exc

        df.columns = [str(c).strip() for c in df.columns]
        missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
        if missing:
            raise ValidationError(f"Missing column(s): {', '.join(missing)}")

        df = df.rename(columns=CSV_COLUMNS)
        known = [c for c in CSV_COLUMNS.values() if c in df.columns]

        forms: list[ProductFormData] = []
        for row_number, row in enumerate(df[known].to_dict("records"), start=2):
            # Blank optional cells fall back to the form defaults
            row = {k: v for k, v in row.items() if v.strip() or k in _REQUIRED_ARGS}
            try:
                forms.append(ProductFormData.create(**row))
            except ValidationError as exc:
                raise ValidationError(f"Row {row_number}: {exc}") from exc
        return forms
