"""Phone model."""

from dataclasses import dataclass


@dataclass
class Phone:
    """Customer phone number, split into area code and local number."""

    area_code: str  # up to 3 digits
    number: str  # up to 9 digits
    customer_id: int
    country_code: str = "55"
    id: int | None = None

    @property
    def digits(self) -> str:
        """Area code and local number, as dialed inside the country."""
        return f"{self.area_code}{self.number}"
