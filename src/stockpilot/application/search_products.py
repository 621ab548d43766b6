"""Application service: Search Products use case (query).

Exact match on either the product name or the item number; no
substring or fuzzy matching.
"""

from __future__ import annotations

from stockpilot.domain.exceptions import ValidationError
from stockpilot.domain.model.product import Product
from stockpilot.domain.repository.product_repository import ProductRepository


class SearchProductsHandler:

    def __init__(self, product_repo: ProductRepository, org_id: str) -> None:
        self._product_repo = product_repo
        self._org_id = org_id

    def handle(self, keyword: str) -> list[Product]:
        if not keyword or not keyword.strip():
            raise ValidationError("Search keyword is required")
        return self._product_repo.search(self._org_id, keyword.strip())
