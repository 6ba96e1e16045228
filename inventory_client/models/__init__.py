"""Inventory entity models."""

from inventory_client.models.address import Address
from inventory_client.models.customer import Customer
from inventory_client.models.enums import MaterialType, NoticeLevel, Page, ProductCategory
from inventory_client.models.material import RawMaterial
from inventory_client.models.phone import Phone
from inventory_client.models.product import Product
from inventory_client.models.supplier import Supplier

__all__ = [
    "Address",
    "Customer",
    "MaterialType",
    "NoticeLevel",
    "Page",
    "Phone",
    "Product",
    "ProductCategory",
    "RawMaterial",
    "Supplier",
]
