"""Application service: Add Product use case."""

from __future__ import annotations

from stockpilot.domain.model.product import ProductFormData
from stockpilot.domain.repository.product_repository import ProductRepository


class AddProductHandler:

    def __init__(self, product_repo: ProductRepository, org_id: str) -> None:
        self._product_repo = product_repo
        self._org_id = org_id

    def handle(
        self,
        name: str,
        item_number: str,
        product_type: str,
        cases_per_pallet: str = "",
        shelf_life_in_days: str = "",
        target_label: str = "Regular Customer",
        country_label: str = "US",
    ) -> str:
        """Add a new product to the catalog and return its ID."""
        form = ProductFormData.create(
            name=name,
            item_number=item_number,
            product_type=product_type,
            cases_per_pallet=cases_per_pallet,
            shelf_life_in_days=shelf_life_in_days,
            target_label=target_label,
            country_label=country_label,
        )
        return self._product_repo.add(self._org_id, form)
