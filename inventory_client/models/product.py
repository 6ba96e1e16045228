"""Product (catalog item) model."""

from dataclasses import dataclass
from decimal import Decimal

from inventory_client.models.enums import ProductCategory


@dataclass
class Product:
    """Sellable item; ``code`` is unique across products."""

    code: str
    name: str
    category: ProductCategory
    quantity: int
    price: Decimal
    description: str | None = None
    supplier_id: int | None = None
    image_url: str | None = None
    id: int | None = None
