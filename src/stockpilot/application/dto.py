"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class InventoryLineDTO:
    """Output: one combined inventory line as displayed to the user."""

    id: str
    product_name: str
    item_number: str
    sku: str
    product_type: str
    customer_type: str
    quantity: int
    pallets: str  # formatted, e.g. "2.50" or "N/A"
    lot_count: int
    next_expiration: str  # YYYY-MM-DD, or "" without lots
    locations: str
    on_hold: bool
    total_sales: int


@dataclass(frozen=True)
class TopSellerDTO:
    product_name: str
    sku: str
    total_sales: int


@dataclass(frozen=True)
class DashboardDTO:
    """Output: headline numbers for the dashboard view."""

    product_count: int
    inventory_item_count: int
    total_units: int
    total_pallets: float
    on_hold_count: int
    expiring_lot_count: int
    expired_lot_count: int
    expiry_window_days: int
    units_by_product_type: dict[str, int]
    top_sellers: list[TopSellerDTO]
