"""HTTP client for the restock recommendation service.

POSTs ``{"inventory": [...]}`` and expects
``{"recommendations": [{"sku", "productName", "action", "reason",
"suggestedQuantity"}, ...]}`` back.
"""

from __future__ import annotations

import logging

import requests

from stockpilot.domain.exceptions import RecommendationError
from stockpilot.domain.repository.recommendation_client import (
    Recommendation,
    RecommendationClient,
)

logger = logging.getLogger(__name__)


class HttpRecommendationClient(RecommendationClient):

    def __init__(
        self,
        url: str,
        timeout: float = 30.0,
        session: requests.Session | None = None,
    ) -> None:
        self._url = url
        self._timeout = timeout
        self._session = session or requests.Session()

    def recommend(self, inventory: list[dict]) -> list[Recommendation]:
        logger.info("Requesting recommendations for %d line(s)", len(inventory))
        try:
            response = self._session.post(
                self._url, json={"inventory": inventory}, timeout=self._timeout
            )
            response.raise_for_status()
            payload = response.json()
        except requests.exceptions.RequestException as exc:
            raise RecommendationError(f"Recommendation request failed: {exc}") from exc
        except ValueError as exc:
            raise RecommendationError("Recommendation service returned invalid JSON") from exc

        try:
            return [_to_recommendation(raw) for raw in payload["recommendations"]]
        except (KeyError, TypeError, ValueError) as exc:
            raise RecommendationError(
                f"Unexpected recommendation payload: {exc!r}"
            ) from exc


def _to_recommendation(raw: dict) -> Recommendation:
    suggested = raw.get("suggestedQuantity")
    return Recommendation(
        sku=str(raw["sku"]),
        product_name=str(raw.get("productName", "")),
        action=str(raw["action"]),
        reason=str(raw.get("reason", "")),
        suggested_quantity=int(suggested) if suggested is not None else None,
    )
