"""Abstract repository for the Product catalog.

Defined in the domain layer so the domain never depends on
infrastructure. Every operation is scoped to one organization.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable

from stockpilot.domain.model.product import Product, ProductFormData
from stockpilot.domain.model.subscription import Subscription


class ProductRepository(ABC):

    @abstractmethod
    def listen(
        self, org_id: str, on_update: Callable[[list[Product]], None]
    ) -> Subscription:
        """Deliver the full product list now and after every change.

        On a feed error an empty list is delivered instead.
        """

    @abstractmethod
    def add(self, org_id: str, form: ProductFormData) -> str:
        """Create one product and return its new ID."""

    @abstractmethod
    def add_bulk(self, org_id: str, forms: list[ProductFormData]) -> list[str]:
        """Create every product atomically, or none of them."""

    @abstractmethod
    def search(self, org_id: str, keyword: str) -> list[Product]:
        """Products whose name or item number equals ``keyword`` exactly."""
