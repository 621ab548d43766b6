"""DocumentStore-backed implementation of ProductRepository."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Callable

from stockpilot.domain.model.product import Product, ProductFormData
from stockpilot.domain.model.subscription import Subscription
from stockpilot.domain.repository.document_store import DocumentStore
from stockpilot.domain.repository.product_repository import ProductRepository
from stockpilot.infrastructure.persistence.collections import (
    PRODUCTS,
    collection_path,
    listen_to_collection,
    to_domain_list,
)


class StoreProductRepository(ProductRepository):

    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    # --- ProductRepository interface ------------------------------------------

    def listen(
        self, org_id: str, on_update: Callable[[list[Product]], None]
    ) -> Subscription:
        return listen_to_collection(
            self._store, org_id, PRODUCTS, Product.from_document, on_update
        )

    def add(self, org_id: str, form: ProductFormData) -> str:
        return self._store.add(collection_path(org_id, PRODUCTS), form.to_document())

    def add_bulk(self, org_id: str, forms: list[ProductFormData]) -> list[str]:
        return self._store.batch_add(
            collection_path(org_id, PRODUCTS),
            [form.to_document() for form in forms],
        )

    def search(self, org_id: str, keyword: str) -> list[Product]:
        path = collection_path(org_id, PRODUCTS)
        with ThreadPoolExecutor(max_workers=2) as pool:
            by_name = pool.submit(self._store.query, path, "name", keyword)
            by_item_number = pool.submit(self._store.query, path, "itemNumber", keyword)
            results = by_name.result() + by_item_number.result()

        # A product matching both lookups is returned once
        unique = list({doc.id: doc for doc in results}.values())
        return to_domain_list(unique, Product.from_document, PRODUCTS)
