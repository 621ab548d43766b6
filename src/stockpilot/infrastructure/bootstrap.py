"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions. Paths and options are
read from ``settings`` at call time so tests can point them elsewhere.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from stockpilot.application.app_shell import StockPilotApp
from stockpilot.domain.exceptions import RecommendationError
from stockpilot.domain.service.auth_gate import AuthGate
from stockpilot.infrastructure import settings
from stockpilot.infrastructure.auth.local_identity_provider import LocalIdentityProvider
from stockpilot.infrastructure.notifications.click_notifier import ClickNotifier
from stockpilot.infrastructure.persistence.json_document_store import JsonDocumentStore
from stockpilot.infrastructure.persistence.store_inventory_repository import (
    StoreInventoryRepository,
)
from stockpilot.infrastructure.persistence.store_product_repository import (
    StoreProductRepository,
)
from stockpilot.infrastructure.recommendations.http_recommendation_client import (
    HttpRecommendationClient,
)


def document_store() -> JsonDocumentStore:
    return JsonDocumentStore(settings.STORE_FILE)


def auth_gate() -> AuthGate:
    return AuthGate(
        provider=LocalIdentityProvider(settings.SESSION_FILE),
        notifier=ClickNotifier(),
        allowed_domains=settings.ALLOWED_DOMAINS,
    )


def recommendation_client() -> HttpRecommendationClient:
    if not settings.RECOMMENDATIONS_URL:
        raise RecommendationError(
            "Recommendations are not configured "
            "(set STOCKPILOT_RECOMMENDATIONS_URL)"
        )
    return HttpRecommendationClient(
        settings.RECOMMENDATIONS_URL, timeout=settings.RECOMMENDATIONS_TIMEOUT
    )


@dataclass
class Services:
    store: JsonDocumentStore
    product_repo: StoreProductRepository
    inventory_repo: StoreInventoryRepository
    gate: AuthGate
    app: StockPilotApp

    @property
    def org_id(self) -> str:
        return self.app.company_id

    def close(self) -> None:
        self.app.close()
        self.gate.close()


def services(on_change: Callable[[StockPilotApp], None] | None = None) -> Services:
    """Build and start a full session: store, repositories, gate and shell."""
    store = document_store()
    product_repo = StoreProductRepository(store)
    inventory_repo = StoreInventoryRepository(store)
    gate = auth_gate()
    app = StockPilotApp(
        gate=gate,
        product_repo=product_repo,
        inventory_repo=inventory_repo,
        company_id=settings.COMPANY_ID,
        on_change=on_change,
    ).start()
    return Services(store, product_repo, inventory_repo, gate, app)
