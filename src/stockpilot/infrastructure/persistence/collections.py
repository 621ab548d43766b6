"""Organization-scoped collection paths and the snapshot listener shared
by the store-backed repositories."""

from __future__ import annotations

import logging
from typing import Callable, TypeVar

from stockpilot.domain.exceptions import DomainException, ValidationError
from stockpilot.domain.model.subscription import Subscription
from stockpilot.domain.repository.document_store import Document, DocumentStore

logger = logging.getLogger(__name__)

PRODUCTS = "products"
INVENTORY = "inventory"
COLLECTIONS = (PRODUCTS, INVENTORY)

T = TypeVar("T")


def collection_path(org_id: str, collection_name: str) -> str:
    """``/companies/{org_id}/{collection_name}`` for a known collection."""
    if collection_name not in COLLECTIONS:
        raise ValidationError(f"Unknown collection: {collection_name!r}")
    if not org_id or not org_id.strip() or "/" in org_id:
        raise ValidationError(f"Invalid organization id: {org_id!r}")
    return f"/companies/{org_id}/{collection_name}"


def to_domain_list(
    documents: list[Document],
    convert: Callable[[str, dict], T],
    collection_name: str,
) -> list[T]:
    """Convert documents, skipping (and logging) any that are malformed."""
    items: list[T] = []
    for doc in documents:
        try:
            items.append(convert(doc.id, doc.data))
        except (KeyError, TypeError, ValueError, DomainException) as exc:
            logger.warning(
                "Skipping malformed %s document %s: %r", collection_name, doc.id, exc
            )
    return items


def listen_to_collection(
    store: DocumentStore,
    org_id: str,
    collection_name: str,
    convert: Callable[[str, dict], T],
    on_update: Callable[[list[T]], None],
) -> Subscription:
    """Deliver the full converted list on every change; an empty list on error."""
    path = collection_path(org_id, collection_name)

    def on_snapshot(documents: list[Document]) -> None:
        on_update(to_domain_list(documents, convert, collection_name))

    def on_error(exc: Exception) -> None:
        logger.error("Error fetching %s: %s", collection_name, exc)
        on_update([])

    return store.listen(path, on_snapshot, on_error)
