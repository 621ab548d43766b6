"""Application shell: the top-level state of a StockPilot session.

Owns the active view, the in-memory mirrors of the product and
inventory collections, and the loading flags. Whenever the auth gate
publishes a principal the shell listens to both collections; when the
session ends it detaches and clears everything.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable

from stockpilot.domain.exceptions import NotAuthenticatedError
from stockpilot.domain.model.combined import CombinedInventoryItem, combine_inventory
from stockpilot.domain.model.inventory import InventoryItem
from stockpilot.domain.model.product import Product
from stockpilot.domain.model.session import Principal
from stockpilot.domain.model.subscription import Subscription
from stockpilot.domain.repository.inventory_repository import InventoryRepository
from stockpilot.domain.repository.product_repository import ProductRepository
from stockpilot.domain.service.auth_gate import AuthGate

logger = logging.getLogger(__name__)


class View(Enum):
    DASHBOARD = "dashboard"
    INVENTORY = "inventory"
    PRODUCTS = "products"
    REPORTS = "reports"
    PRINTABLE = "printable"


class Screen(Enum):
    """What the shell shows besides the views themselves."""

    LOADING = "loading"
    SIGN_IN = "sign_in"


class StockPilotApp:

    def __init__(
        self,
        gate: AuthGate,
        product_repo: ProductRepository,
        inventory_repo: InventoryRepository,
        company_id: str,
        on_change: Callable[[StockPilotApp], None] | None = None,
    ) -> None:
        self._gate = gate
        self._product_repo = product_repo
        self._inventory_repo = inventory_repo
        self._company_id = company_id
        self._on_change = on_change

        self.active_view = View.DASHBOARD
        self.products: list[Product] = []
        self.inventory: list[InventoryItem] = []
        self.loading_data = True
        self.recommendations_open = False

        self._data_subscriptions: list[Subscription] = []
        self._gate_subscription: Subscription | None = None

    # --- Lifecycle ------------------------------------------------------------

    def start(self) -> StockPilotApp:
        if self._gate_subscription is None:
            self._gate_subscription = self._gate.subscribe(self._on_principal)
        return self

    def close(self) -> None:
        if self._gate_subscription is not None:
            self._gate_subscription.cancel()
            self._gate_subscription = None
        self._detach()

    # --- State ----------------------------------------------------------------

    @property
    def principal(self) -> Principal | None:
        return self._gate.principal

    @property
    def company_id(self) -> str:
        return self._company_id

    @property
    def is_loading(self) -> bool:
        return self._gate.is_loading or (
            self.principal is not None and self.loading_data
        )

    @property
    def screen(self) -> View | Screen:
        if self.is_loading:
            return Screen.LOADING
        if self.principal is None:
            return Screen.SIGN_IN
        return self.active_view

    @property
    def title(self) -> str:
        return self.active_view.value.capitalize()

    def combined_inventory(self) -> list[CombinedInventoryItem]:
        return combine_inventory(self.products, self.inventory)

    def require_principal(self) -> Principal:
        principal = self.principal
        if principal is None:
            raise NotAuthenticatedError("Please sign in to manage your inventory.")
        return principal

    # --- Commands -------------------------------------------------------------

    def navigate(self, view: View | str) -> None:
        self.require_principal()
        self.active_view = View(view)
        self._changed()

    def open_recommendations(self) -> None:
        self.require_principal()
        self.recommendations_open = True
        self._changed()

    def close_recommendations(self) -> None:
        self.recommendations_open = False
        self._changed()

    # --- Observers ------------------------------------------------------------

    def _on_principal(self, principal: Principal | None) -> None:
        if principal is None:
            self._detach()
            self.products = []
            self.inventory = []
            self.loading_data = False
            self.recommendations_open = False
            self._changed()
            return

        # A new principal replaces any previous feeds
        self._detach()
        self.loading_data = True
        self._changed()
        logger.info("Listening to %s data for %s", self._company_id, principal.email)
        self._data_subscriptions = [
            self._product_repo.listen(self._company_id, self._set_products),
            self._inventory_repo.listen(self._company_id, self._set_inventory),
        ]

    def _set_products(self, products: list[Product]) -> None:
        self.products = products
        self._changed()

    def _set_inventory(self, inventory: list[InventoryItem]) -> None:
        self.inventory = inventory
        self.loading_data = False
        self._changed()

    def _detach(self) -> None:
        for subscription in self._data_subscriptions:
            subscription.cancel()
        self._data_subscriptions = []

    def _changed(self) -> None:
        if self._on_change is not None:
            self._on_change(self)
