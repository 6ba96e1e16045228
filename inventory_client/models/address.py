"""Address model."""

from dataclasses import dataclass


@dataclass
class Address:
    """Street address referenced by customers and suppliers.

    ``postal_code`` holds digits only (CEP); ``number`` is a non-negative
    integer.
    """

    street: str
    postal_code: str
    number: int
    district: str | None = None
    id: int | None = None
