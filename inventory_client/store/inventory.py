"""Inventory repositories and the store that groups them."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any
from urllib.parse import urlencode

from inventory_client import serialization
from inventory_client.client import RequestClient
from inventory_client.exceptions import InventoryClientError
from inventory_client.images import MATERIAL_IMAGE_CACHE_KEY, PRODUCT_IMAGE_CACHE_KEY, ImageCache
from inventory_client.models import Address, Customer, Phone, Product, RawMaterial, Supplier
from inventory_client.storage import KeyValueStore, MemoryStore
from inventory_client.store.base import Repository

logger = logging.getLogger(__name__)


class AddressRepository(Repository[Address]):
    path = "/addresses"
    collection_key = "addresses"
    search_fields = ("id", "street", "number", "postal_code")

    def from_response(self, record: dict) -> Address:
        return serialization.address_from_response(record)

    def to_payload(self, record: Address) -> dict[str, Any]:
        return serialization.address_to_payload(record)

    async def search_remote(self, term: str, field: str | None = None) -> list[Address]:
        """Ask the backend first; fall back to filtering the local list."""
        query = (term or "").strip()
        if not query:
            return []
        local_fields = {"rua": "street", "numero": "number", "cep": "postal_code", "id": "id"}
        params = {"query": query}
        if field:
            params["field"] = field
        try:
            envelope = await self.client.request(f"{self.path}/search?{urlencode(params)}")
            found = [self.from_response(row) for row in self._extract_rows(envelope.data)]
        except InventoryClientError as exc:
            logger.warning("Address search failed, filtering locally: %s", exc)
            found = []
        if found:
            return found
        fields = (local_fields.get(field, field),) if field else None
        return self.search(query, fields)


class CustomerRepository(Repository[Customer]):
    path = "/customers"
    collection_key = "customers"
    search_fields = ("id", "name", "email", "cpf", "cnpj")

    def from_response(self, record: dict) -> Customer:
        return serialization.customer_from_response(record)

    def to_payload(self, record: Customer) -> dict[str, Any]:
        return serialization.customer_to_payload(record)


class SupplierRepository(Repository[Supplier]):
    path = "/suppliers"
    collection_key = "suppliers"
    search_fields = ("id", "cnpj", "legal_name", "contact_name", "email", "phone")

    def from_response(self, record: dict) -> Supplier:
        return serialization.supplier_from_response(record)

    def to_payload(self, record: Supplier) -> dict[str, Any]:
        return serialization.supplier_to_payload(record)


class ProductRepository(Repository[Product]):
    path = "/products"
    collection_key = "products"
    search_fields = ("id", "code", "name", "description")

    def __init__(self, client: RequestClient, images: ImageCache) -> None:
        super().__init__(client)
        self.images = images

    def from_response(self, record: dict) -> Product:
        return serialization.product_from_response(record)

    def to_payload(self, record: Product) -> dict[str, Any]:
        return serialization.product_to_payload(record)

    def after_load(self, records: list[Product]) -> list[Product]:
        return self.images.merge(records, lambda product: product.code or product.id)

    def after_create(self, submitted: Product, created: Product) -> None:
        self.images.remember(submitted.code, submitted.image_url)
        if not created.image_url:
            created.image_url = submitted.image_url


class MaterialRepository(Repository[RawMaterial]):
    path = "/materials"
    collection_key = "materials"
    search_fields = ("id", "name", "description", "material")

    def __init__(self, client: RequestClient, images: ImageCache) -> None:
        super().__init__(client)
        self.images = images

    def from_response(self, record: dict) -> RawMaterial:
        return serialization.material_from_response(record)

    def to_payload(self, record: RawMaterial) -> dict[str, Any]:
        return serialization.material_to_payload(record)

    def after_load(self, records: list[RawMaterial]) -> list[RawMaterial]:
        return self.images.merge(records, lambda material: material.name or material.id)

    def after_create(self, submitted: RawMaterial, created: RawMaterial) -> None:
        self.images.remember(submitted.name, submitted.image_url)
        if not created.image_url:
            created.image_url = submitted.image_url


class PhoneRepository(Repository[Phone]):
    path = "/phones"
    collection_key = "phones"
    search_fields = ("id", "customer_id", "area_code", "number")

    def from_response(self, record: dict) -> Phone:
        return serialization.phone_from_response(record)

    def to_payload(self, record: Phone) -> dict[str, Any]:
        return serialization.phone_to_payload(record)


@dataclass
class EntityStores:
    """The six entity repositories of the client."""

    addresses: AddressRepository
    customers: CustomerRepository
    suppliers: SupplierRepository
    products: ProductRepository
    materials: MaterialRepository
    phones: PhoneRepository

    @classmethod
    def create(cls, client: RequestClient, storage: KeyValueStore | None = None) -> "EntityStores":
        """Build every repository on one request client."""
        storage = storage if storage is not None else MemoryStore()
        return cls(
            addresses=AddressRepository(client),
            customers=CustomerRepository(client),
            suppliers=SupplierRepository(client),
            products=ProductRepository(client, ImageCache(storage, PRODUCT_IMAGE_CACHE_KEY)),
            materials=MaterialRepository(client, ImageCache(storage, MATERIAL_IMAGE_CACHE_KEY)),
            phones=PhoneRepository(client),
        )

    def repositories(self) -> dict[str, Repository]:
        return {
            "addresses": self.addresses,
            "customers": self.customers,
            "suppliers": self.suppliers,
            "products": self.products,
            "materials": self.materials,
            "phones": self.phones,
        }

    def get(self, name: str) -> Repository:
        try:
            return self.repositories()[name]
        except KeyError:
            raise KeyError(f"Unknown entity collection: {name}") from None

    def clear_all(self) -> None:
        for repository in self.repositories().values():
            repository.clear()

    def summary(self) -> dict[str, int]:
        """Return in-memory counts per collection."""
        return {name: len(repository) for name, repository in self.repositories().items()}
