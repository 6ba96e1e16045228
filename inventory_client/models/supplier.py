"""Supplier model."""

from dataclasses import dataclass


@dataclass
class Supplier:
    """Supplier entity."""

    cnpj: str  # 14 digits
    legal_name: str
    contact_name: str
    email: str | None = None
    phone: str | None = None  # 10-11 digits
    address_id: int | None = None
    id: int | None = None
