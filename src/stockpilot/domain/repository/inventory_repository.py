"""Abstract repository for InventoryItem aggregates."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable

from stockpilot.domain.model.inventory import (
    InventoryFormData,
    InventoryItem,
    InventoryUpdate,
)
from stockpilot.domain.model.subscription import Subscription


class InventoryRepository(ABC):

    @abstractmethod
    def listen(
        self, org_id: str, on_update: Callable[[list[InventoryItem]], None]
    ) -> Subscription:
        """Deliver the full inventory list now and after every change.

        On a feed error an empty list is delivered instead.
        """

    @abstractmethod
    def get_by_id(self, org_id: str, item_id: str) -> InventoryItem | None:
        """Return one inventory item, or None if not found."""

    @abstractmethod
    def add(self, org_id: str, form: InventoryFormData) -> str:
        """Create an item with quantity derived from its lots and zero sales."""

    @abstractmethod
    def update(self, org_id: str, item_id: str, changes: dict[str, Any]) -> None:
        """Merge partial changes; recomputes quantity when lots change."""

    @abstractmethod
    def delete(self, org_id: str, item_id: str) -> None:
        """Remove an item permanently."""

    @abstractmethod
    def batch_update(self, org_id: str, updates: list[InventoryUpdate]) -> None:
        """Apply every update atomically. Quantity is NOT recomputed here."""
