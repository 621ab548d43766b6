"""In-memory fakes for testing.

These implement the same abstract interfaces as the store-backed and
terminal implementations but keep everything in memory. No file I/O,
no prompts, no network.
"""

from __future__ import annotations

import dataclasses
from typing import Any, Callable

from stockpilot.domain.exceptions import (
    EntityNotFoundError,
    IdentityProviderError,
    RecommendationError,
)
from stockpilot.domain.model.inventory import (
    InventoryFormData,
    InventoryItem,
    InventoryUpdate,
    sum_lot_quantities,
)
from stockpilot.domain.model.product import Product, ProductFormData
from stockpilot.domain.model.session import Principal
from stockpilot.domain.model.subscription import Subscription
from stockpilot.domain.repository.identity_provider import IdentityProvider
from stockpilot.domain.repository.inventory_repository import InventoryRepository
from stockpilot.domain.repository.notifier import Notice, Notifier
from stockpilot.domain.repository.product_repository import ProductRepository
from stockpilot.domain.repository.recommendation_client import (
    Recommendation,
    RecommendationClient,
)


class _Feed:
    """Per-org listener lists with full-list delivery."""

    def __init__(self) -> None:
        self.listeners: dict[str, list[Callable]] = {}

    def listen(self, org_id: str, on_update: Callable, current: list) -> Subscription:
        self.listeners.setdefault(org_id, []).append(on_update)
        on_update(list(current))
        return Subscription(lambda: self.listeners[org_id].remove(on_update))

    def push(self, org_id: str, current: list) -> None:
        for listener in list(self.listeners.get(org_id, [])):
            listener(list(current))

    def fail(self, org_id: str) -> None:
        for listener in list(self.listeners.get(org_id, [])):
            listener([])

    def count(self, org_id: str) -> int:
        return len(self.listeners.get(org_id, []))


class FakeProductRepository(ProductRepository):

    def __init__(self, products: list[Product] | None = None, org_id: str = "acme") -> None:
        self._store: dict[str, dict[str, Product]] = {org_id: {}}
        for p in products or []:
            self._store[org_id][p.id] = p
        self._next_id = 1
        self.feed = _Feed()

    def listen(self, org_id: str, on_update) -> Subscription:
        return self.feed.listen(org_id, on_update, self._list(org_id))

    def add(self, org_id: str, form: ProductFormData) -> str:
        return self.add_bulk(org_id, [form])[0]

    def add_bulk(self, org_id: str, forms: list[ProductFormData]) -> list[str]:
        ids = []
        for form in forms:
            product_id = f"p{self._next_id}"
            self._next_id += 1
            self._store.setdefault(org_id, {})[product_id] = Product.from_document(
                product_id, form.to_document()
            )
            ids.append(product_id)
        self.feed.push(org_id, self._list(org_id))
        return ids

    def search(self, org_id: str, keyword: str) -> list[Product]:
        return [
            p for p in self._list(org_id)
            if p.name == keyword or p.item_number == keyword
        ]

    def _list(self, org_id: str) -> list[Product]:
        return list(self._store.get(org_id, {}).values())


class FakeInventoryRepository(InventoryRepository):

    def __init__(
        self, items: list[InventoryItem] | None = None, org_id: str = "acme"
    ) -> None:
        self._store: dict[str, dict[str, InventoryItem]] = {org_id: {}}
        for item in items or []:
            self._store[org_id][item.id] = item
        self._next_id = 1
        self.feed = _Feed()
        self.batches: list[list[InventoryUpdate]] = []

    def listen(self, org_id: str, on_update) -> Subscription:
        return self.feed.listen(org_id, on_update, self._list(org_id))

    def get_by_id(self, org_id: str, item_id: str) -> InventoryItem | None:
        return self._store.get(org_id, {}).get(item_id)

    def add(self, org_id: str, form: InventoryFormData) -> str:
        item_id = f"i{self._next_id}"
        self._next_id += 1
        self._store.setdefault(org_id, {})[item_id] = InventoryItem.from_document(
            item_id, form.to_document()
        )
        self.feed.push(org_id, self._list(org_id))
        return item_id

    def update(self, org_id: str, item_id: str, changes: dict[str, Any]) -> None:
        item = self._require(org_id, item_id)
        if "lots" in changes:
            changes = {**changes, "quantity": sum_lot_quantities(changes["lots"])}
        self._store[org_id][item_id] = dataclasses.replace(item, **changes)
        self.feed.push(org_id, self._list(org_id))

    def delete(self, org_id: str, item_id: str) -> None:
        self._store.get(org_id, {}).pop(item_id, None)
        self.feed.push(org_id, self._list(org_id))

    def batch_update(self, org_id: str, updates: list[InventoryUpdate]) -> None:
        for u in updates:
            self._require(org_id, u.item_id)
        for u in updates:
            item = self._store[org_id][u.item_id]
            self._store[org_id][u.item_id] = dataclasses.replace(item, **u.changes)
        self.batches.append(list(updates))
        self.feed.push(org_id, self._list(org_id))

    def _require(self, org_id: str, item_id: str) -> InventoryItem:
        item = self.get_by_id(org_id, item_id)
        if item is None:
            raise EntityNotFoundError(f"Inventory item '{item_id}' not found")
        return item

    def _list(self, org_id: str) -> list[InventoryItem]:
        return list(self._store.get(org_id, {}).values())


class FakeIdentityProvider(IdentityProvider):
    """Identity provider driven by the test.

    ``next_principal`` is what the next interactive sign-in returns;
    set ``fail_sign_in`` / ``fail_sign_out`` to simulate provider errors.
    With ``deferred`` the initial session is only reported on ``emit``.
    """

    def __init__(self, current: Principal | None = None, deferred: bool = False) -> None:
        self.current = current
        self.deferred = deferred
        self.next_principal: Principal | None = None
        self.fail_sign_in = False
        self.fail_sign_out = False
        self.sign_out_calls = 0
        self._callbacks: list[Callable] = []

    def interactive_sign_in(self) -> Principal:
        if self.fail_sign_in or self.next_principal is None:
            raise IdentityProviderError("popup closed by user")
        self.emit(self.next_principal)
        return self.next_principal

    def sign_out(self) -> None:
        self.sign_out_calls += 1
        if self.fail_sign_out:
            raise IdentityProviderError("network error")
        self.emit(None)

    def on_session_change(self, callback) -> Subscription:
        self._callbacks.append(callback)
        if not self.deferred:
            callback(self.current)
        return Subscription(lambda: self._callbacks.remove(callback))

    def emit(self, principal: Principal | None) -> None:
        self.current = principal
        for callback in list(self._callbacks):
            callback(principal)

    @property
    def observer_count(self) -> int:
        return len(self._callbacks)


class FakeNotifier(Notifier):

    def __init__(self) -> None:
        self.notices: list[Notice] = []

    def notify(self, notice: Notice) -> None:
        self.notices.append(notice)


class FakeRecommendationClient(RecommendationClient):

    def __init__(
        self,
        recommendations: list[Recommendation] | None = None,
        error: str | None = None,
    ) -> None:
        self.recommendations = recommendations or []
        self.error = error
        self.requests: list[list[dict]] = []

    def recommend(self, inventory: list[dict]) -> list[Recommendation]:
        self.requests.append(inventory)
        if self.error:
            raise RecommendationError(self.error)
        return list(self.recommendations)
