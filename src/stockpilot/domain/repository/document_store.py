"""Abstract backing document store.

Documents live in collections addressed by slash-separated paths such
as ``/companies/acme/products``. Implementations own persistence,
identity assignment, batching and push delivery of snapshots.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable

from stockpilot.domain.model.subscription import Subscription


@dataclass(frozen=True)
class Document:
    """A stored document tagged with its store-assigned identity."""

    id: str
    data: dict[str, Any]


SnapshotCallback = Callable[[list[Document]], None]
ErrorCallback = Callable[[Exception], None]


class DocumentStore(ABC):

    @abstractmethod
    def listen(
        self,
        path: str,
        on_snapshot: SnapshotCallback,
        on_error: ErrorCallback,
    ) -> Subscription:
        """Push the full document list of ``path`` now and after every change.

        Failures to read the collection go to ``on_error``. Once the
        returned subscription is cancelled no further callbacks run.
        """

    @abstractmethod
    def add(self, path: str, data: dict[str, Any]) -> str:
        """Create a document with a store-assigned ID and return the ID."""

    @abstractmethod
    def batch_add(self, path: str, documents: list[dict[str, Any]]) -> list[str]:
        """Create every document atomically, or none of them."""

    @abstractmethod
    def get(self, path: str, doc_id: str) -> Document | None:
        """Return one document, or None if it does not exist."""

    @abstractmethod
    def update(self, path: str, doc_id: str, fields: dict[str, Any]) -> None:
        """Merge ``fields`` into an existing document."""

    @abstractmethod
    def batch_update(
        self, path: str, updates: list[tuple[str, dict[str, Any]]]
    ) -> None:
        """Apply every ``(doc_id, fields)`` merge atomically, or none of them."""

    @abstractmethod
    def delete(self, path: str, doc_id: str) -> None:
        """Remove a document. Deleting a missing document is not an error."""

    @abstractmethod
    def query(self, path: str, field: str, value: Any) -> list[Document]:
        """Return every document whose ``field`` equals ``value``."""
