"""Application service: Inventory Reports.

Tabular views of the combined inventory built with pandas: the full
table, grouped summaries, a printable one-row-per-lot listing, and a
dated CSV export.
"""

from __future__ import annotations

from datetime import date
from pathlib import Path

import pandas as pd

from stockpilot.domain.exceptions import ValidationError
from stockpilot.domain.model.combined import CombinedInventoryItem

REPORT_COLUMNS = [
    "Product",
    "Item Number",
    "SKU",
    "Product Type",
    "Customer Type",
    "Target Label",
    "Country",
    "Quantity",
    "Pallets",
    "Lots",
    "Locations",
    "On Hold",
    "Total Sales",
]

# summary key -> report column
SUMMARY_GROUPS = {
    "product-type": "Product Type",
    "customer-type": "Customer Type",
    "country": "Country",
    "target-label": "Target Label",
}

LOT_COLUMNS = ["Expiration Date", "Product", "SKU", "Quantity", "Locations", "On Hold"]


def _label(value) -> str:
    return value.value if value is not None else ""


class InventoryReportHandler:

    def build_frame(self, combined: list[CombinedInventoryItem]) -> pd.DataFrame:
        rows = [
            {
                "Product": line.product_name,
                "Item Number": line.item_number,
                "SKU": line.item.sku,
                "Product Type": _label(line.product_type),
                "Customer Type": line.item.customer_type.value,
                "Target Label": _label(line.target_label),
                "Country": _label(line.country_label),
                "Quantity": line.quantity,
                "Pallets": line.pallets,
                "Lots": len(line.item.lots),
                "Locations": ", ".join(line.item.locations),
                "On Hold": line.item.on_hold,
                "Total Sales": line.item.total_sales,
            }
            for line in combined
        ]
        return pd.DataFrame(rows, columns=REPORT_COLUMNS)

    def summarize(self, frame: pd.DataFrame, by: str) -> pd.DataFrame:
        """Item count, units and sales per group, largest quantity first."""
        if by not in SUMMARY_GROUPS:
            raise ValidationError(
                f"Cannot summarize by {by!r} (choose from {', '.join(SUMMARY_GROUPS)})"
            )
        column = SUMMARY_GROUPS[by]
        summary = (
            frame.groupby(column)
            .agg(
                Items=("SKU", "count"),
                Quantity=("Quantity", "sum"),
                **{"Total Sales": ("Total Sales", "sum")},
            )
            .reset_index()
            .sort_values("Quantity", ascending=False, ignore_index=True)
        )
        return summary

    def lot_listing(self, combined: list[CombinedInventoryItem]) -> pd.DataFrame:
        """Printable listing: one row per lot, soonest expiration first."""
        rows = [
            {
                "Expiration Date": lot.expiration_date.isoformat(),
                "Product": line.product_name,
                "SKU": line.item.sku,
                "Quantity": lot.quantity,
                "Locations": ", ".join(line.item.locations),
                "On Hold": line.item.on_hold,
            }
            for line in combined
            for lot in line.item.lots
        ]
        frame = pd.DataFrame(rows, columns=LOT_COLUMNS)
        return frame.sort_values(["Expiration Date", "Product"], ignore_index=True)

    def export_csv(
        self,
        frame: pd.DataFrame,
        output_dir: Path,
        filename_base: str = "inventory_report",
        today: date | None = None,
    ) -> Path:
        """Write ``frame`` to ``{filename_base}_{YYYY-MM-DD}.csv`` and return the path."""
        output_dir.mkdir(parents=True, exist_ok=True)
        date_suffix = (today or date.today()).isoformat()
        csv_path = output_dir / f"{filename_base}_{date_suffix}.csv"
        frame.to_csv(csv_path, index=False)
        return csv_path
