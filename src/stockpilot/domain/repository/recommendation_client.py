"""Abstract client for the AI restock recommendation service."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class Recommendation:
    sku: str
    product_name: str
    action: str
    reason: str
    suggested_quantity: int | None = None


class RecommendationClient(ABC):

    @abstractmethod
    def recommend(self, inventory: list[dict]) -> list[Recommendation]:
        """Return restock recommendations for the given inventory lines.

        Raises RecommendationError when no answer can be obtained.
        """
