"""Client-side entity stores."""

from inventory_client.store.base import Repository
from inventory_client.store.inventory import (
    AddressRepository,
    CustomerRepository,
    EntityStores,
    MaterialRepository,
    PhoneRepository,
    ProductRepository,
    SupplierRepository,
)

__all__ = [
    "AddressRepository",
    "CustomerRepository",
    "EntityStores",
    "MaterialRepository",
    "PhoneRepository",
    "ProductRepository",
    "Repository",
    "SupplierRepository",
]
