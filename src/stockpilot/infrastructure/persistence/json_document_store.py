"""JSON-file-backed implementation of DocumentStore.

The whole database is one JSON object mapping collection paths to
``{doc_id: document}`` maps. Every write rewrites the file through a
temporary file and ``os.replace``, so a batch lands completely or not at
all. Listeners registered on a collection receive the full document
list after every committed write to it.
"""

from __future__ import annotations

import copy
import json
import logging
import os
import tempfile
import threading
import uuid
from pathlib import Path
from typing import Any

from stockpilot.domain.exceptions import DocumentNotFoundError, DocumentStoreError
from stockpilot.domain.model.subscription import Subscription
from stockpilot.domain.repository.document_store import (
    Document,
    DocumentStore,
    ErrorCallback,
    SnapshotCallback,
)

logger = logging.getLogger(__name__)

MAX_DOCUMENT_BYTES = 1024 * 1024


class _Listener:

    def __init__(self, on_snapshot: SnapshotCallback, on_error: ErrorCallback) -> None:
        self.on_snapshot = on_snapshot
        self.on_error = on_error


class JsonDocumentStore(DocumentStore):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._lock = threading.RLock()
        self._listeners: dict[str, list[_Listener]] = {}
        self._last_text: str | None = None
        self._ensure_file()

    # --- DocumentStore interface ----------------------------------------------

    def listen(
        self,
        path: str,
        on_snapshot: SnapshotCallback,
        on_error: ErrorCallback,
    ) -> Subscription:
        key = _collection_key(path)
        listener = _Listener(on_snapshot, on_error)
        with self._lock:
            self._listeners.setdefault(key, []).append(listener)
            try:
                db = self._load()
            except DocumentStoreError as exc:
                self._dispatch_error(listener, exc)
            else:
                self._dispatch(listener, self._documents(db, key))
        return Subscription(lambda: self._remove_listener(key, listener))

    def add(self, path: str, data: dict[str, Any]) -> str:
        return self.batch_add(path, [data])[0]

    def batch_add(self, path: str, documents: list[dict[str, Any]]) -> list[str]:
        key = _collection_key(path)
        # Validate everything before touching the file
        for data in documents:
            _validate_document(data)

        with self._lock:
            db = self._load()
            collection = db.setdefault(key, {})
            ids: list[str] = []
            for data in documents:
                doc_id = _new_id()
                collection[doc_id] = copy.deepcopy(data)
                ids.append(doc_id)
            self._persist(db)
            self._notify(key, db)
        logger.info("Added %d document(s) to %s", len(ids), key)
        return ids

    def get(self, path: str, doc_id: str) -> Document | None:
        key = _collection_key(path)
        with self._lock:
            data = self._load().get(key, {}).get(doc_id)
        if data is None:
            return None
        return Document(id=doc_id, data=data)

    def update(self, path: str, doc_id: str, fields: dict[str, Any]) -> None:
        self.batch_update(path, [(doc_id, fields)])

    def batch_update(
        self, path: str, updates: list[tuple[str, dict[str, Any]]]
    ) -> None:
        key = _collection_key(path)
        for _, fields in updates:
            _validate_document(fields)

        with self._lock:
            db = self._load()
            collection = db.get(key, {})
            merged: dict[str, dict[str, Any]] = {}
            for doc_id, fields in updates:
                current = merged.get(doc_id) or collection.get(doc_id)
                if current is None:
                    raise DocumentNotFoundError(
                        f"No document '{doc_id}' in {key}"
                    )
                candidate = {**current, **copy.deepcopy(fields)}
                _validate_document(candidate)
                merged[doc_id] = candidate

            collection.update(merged)
            db[key] = collection
            self._persist(db)
            self._notify(key, db)
        logger.info("Updated %d document(s) in %s", len(updates), key)

    def delete(self, path: str, doc_id: str) -> None:
        key = _collection_key(path)
        with self._lock:
            db = self._load()
            if db.get(key, {}).pop(doc_id, None) is None:
                return
            self._persist(db)
            self._notify(key, db)
        logger.info("Deleted %s/%s", key, doc_id)

    def query(self, path: str, field: str, value: Any) -> list[Document]:
        key = _collection_key(path)
        with self._lock:
            collection = self._load().get(key, {})
        return [
            Document(id=doc_id, data=data)
            for doc_id, data in collection.items()
            if field in data and data[field] == value
        ]

    # --- Change feed ----------------------------------------------------------

    def refresh(self) -> bool:
        """Re-read the file and push snapshots if it changed on disk.

        Returns True when listeners were notified (with data or an error).
        """
        with self._lock:
            try:
                text = self._read_text()
            except DocumentStoreError as exc:
                # Any readable file after this counts as a change
                self._last_text = None
                self._notify_error(exc)
                return True
            if text == self._last_text:
                return False
            try:
                db = self._parse(text)
            except DocumentStoreError as exc:
                self._last_text = text
                self._notify_error(exc)
                return True
            for key in list(self._listeners):
                self._notify(key, db)
            return True

    # --- Listener helpers -----------------------------------------------------

    def _remove_listener(self, key: str, listener: _Listener) -> None:
        with self._lock:
            listeners = self._listeners.get(key, [])
            if listener in listeners:
                listeners.remove(listener)

    def _notify(self, key: str, db: dict) -> None:
        listeners = list(self._listeners.get(key, []))
        if not listeners:
            return
        for listener in listeners:
            self._dispatch(listener, self._documents(db, key))

    def _notify_error(self, exc: DocumentStoreError) -> None:
        for listeners in list(self._listeners.values()):
            for listener in list(listeners):
                self._dispatch_error(listener, exc)

    @staticmethod
    def _dispatch(listener: _Listener, documents: list[Document]) -> None:
        try:
            listener.on_snapshot(documents)
        except Exception:
            logger.exception("Snapshot listener raised")

    @staticmethod
    def _dispatch_error(listener: _Listener, exc: Exception) -> None:
        try:
            listener.on_error(exc)
        except Exception:
            logger.exception("Snapshot error listener raised")

    @staticmethod
    def _documents(db: dict, key: str) -> list[Document]:
        return [
            Document(id=doc_id, data=copy.deepcopy(data))
            for doc_id, data in db.get(key, {}).items()
        ]

    # --- File helpers ---------------------------------------------------------

    def _load(self) -> dict:
        return self._parse(self._read_text())

    def _read_text(self) -> str:
        try:
            return self._file_path.read_text(encoding="utf-8")
        except OSError as exc:
            raise DocumentStoreError(f"Cannot read {self._file_path}: {exc}") from exc

    def _parse(self, text: str) -> dict:
        try:
            db = json.loads(text)
        except json.JSONDecodeError as exc:
            raise DocumentStoreError(f"Corrupt store file {self._file_path}: {exc}") from exc
        if not isinstance(db, dict):
            raise DocumentStoreError(f"Corrupt store file {self._file_path}")
        self._last_text = text
        return db

    def _persist(self, db: dict) -> None:
        text = json.dumps(db, indent=2) + "\n"
        try:
            fd, tmp_name = tempfile.mkstemp(
                dir=self._file_path.parent, prefix=".store-", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                tmp.write(text)
            os.replace(tmp_name, self._file_path)
        except OSError as exc:
            raise DocumentStoreError(f"Cannot write {self._file_path}: {exc}") from exc
        self._last_text = text

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("{}", encoding="utf-8")


def _collection_key(path: str) -> str:
    segments = path.strip("/").split("/")
    if any(not s for s in segments) or len(segments) % 2 == 0:
        raise DocumentStoreError(f"Invalid collection path: {path!r}")
    return "/".join(segments)


def _new_id() -> str:
    return uuid.uuid4().hex[:20]


def _validate_document(data: Any) -> None:
    if not isinstance(data, dict):
        raise DocumentStoreError("Document must be a mapping")
    for name in data:
        if not isinstance(name, str) or not name:
            raise DocumentStoreError(f"Invalid field name: {name!r}")
        if name.startswith("__") and name.endswith("__"):
            raise DocumentStoreError(f"Reserved field name: {name!r}")
    try:
        encoded = json.dumps(data)
    except (TypeError, ValueError) as exc:
        raise DocumentStoreError(f"Document is not serializable: {exc}") from exc
    if len(encoded.encode("utf-8")) > MAX_DOCUMENT_BYTES:
        raise DocumentStoreError("Document exceeds the 1 MiB size limit")
