"""Customer model."""

from dataclasses import dataclass
from datetime import date


@dataclass
class Customer:
    """Customer entity, identified by CPF and/or CNPJ."""

    name: str
    birth_date: date | None
    address_id: int
    email: str | None = None
    cpf: str | None = None  # 11 digits
    cnpj: str | None = None  # 14 digits
    id: int | None = None
