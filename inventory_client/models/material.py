"""Raw material model."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from inventory_client.models.enums import MaterialType


@dataclass
class RawMaterial:
    """Raw material used to manufacture products."""

    name: str
    type: MaterialType | None = None
    cost: Decimal | None = None
    expiry_date: date | None = None
    description: str | None = None
    size: str | None = None
    material: str | None = None
    accessory: str | None = None
    image_url: str | None = None
    id: int | None = None
