"""Realistic Brazilian drafts for demos, seeding and tests.

Usage::

    samples = SampleDrafts(seed=42)
    draft = samples.customer(address_id=3)
    draft.cpf                # '123.456.789-09'
"""

from __future__ import annotations

import random
from decimal import Decimal

from faker import Faker

from inventory_client.forms import (
    AddressDraft,
    CustomerDraft,
    MaterialDraft,
    PhoneDraft,
    ProductDraft,
    SupplierDraft,
)
from inventory_client.models import MaterialType, ProductCategory

AREA_CODES = ("11", "21", "31", "41", "47", "48", "51", "61", "71", "81", "85")
MATERIAL_NAMES = ("Vime", "Palha de milho", "Fita de cetim", "Papel seda", "Juta", "Laço", "Feltro")


def _cnpj_check_digit(digits: list[int]) -> int:
    weights = [6, 5, 4, 3, 2, 9, 8, 7, 6, 5, 4, 3, 2][-len(digits):]
    total = sum(d * w for d, w in zip(digits, weights))
    remainder = total % 11
    return 0 if remainder < 2 else 11 - remainder


def generate_cnpj() -> str:
    """Generate a valid CNPJ (14 digits) for a head office (``0001``)."""
    digits = [random.randint(0, 9) for _ in range(8)] + [0, 0, 0, 1]
    digits.append(_cnpj_check_digit(digits))
    digits.append(_cnpj_check_digit(digits))
    return "".join(str(d) for d in digits)


class SampleDrafts:
    """Faker-backed factory of form drafts.

    Parameters
    ----------
    seed : int | None
        Random seed for reproducibility.
    locale : str
        Faker locale (default ``pt_BR``).
    """

    def __init__(self, seed: int | None = None, locale: str = "pt_BR") -> None:
        self.fake = Faker(locale)
        if seed is not None:
            self.fake.seed_instance(seed)
            random.seed(seed)

    def phone_digits(self) -> str:
        return random.choice(AREA_CODES) + "9" + self.fake.numerify("########")

    def address(self) -> AddressDraft:
        return AddressDraft(
            street=self.fake.street_name(),
            number=str(random.randint(1, 3000)),
            postal_code=self.fake.postcode(),
            district=self.fake.bairro(),
        )

    def customer(self, address_id: int | None = None, with_phone: bool = False) -> CustomerDraft:
        birth = self.fake.date_of_birth(minimum_age=18, maximum_age=85)
        return CustomerDraft(
            name=self.fake.name(),
            birth_date=birth.strftime("%d/%m/%Y"),
            email=self.fake.email(),
            cpf=self.fake.cpf(),
            address_id=address_id,
            phone=self.phone_digits() if with_phone else "",
        )

    def supplier(self, address_id: int | None = None) -> SupplierDraft:
        phone = self.phone_digits()
        return SupplierDraft(
            cnpj=generate_cnpj(),
            legal_name=self.fake.company(),
            contact_name=self.fake.name(),
            email=self.fake.company_email(),
            phone=f"({phone[:2]}) {phone[2:7]}-{phone[7:]}",
            address_id=address_id,
        )

    def phone(self, customer_id: int | None = None) -> PhoneDraft:
        digits = self.phone_digits()
        return PhoneDraft(area_code=digits[:2], number=digits[2:], customer_id=customer_id)

    def product(self, supplier_id: int | None = None) -> ProductDraft:
        price = Decimal(random.randint(990, 49990)) / 100
        return ProductDraft(
            code=f"CST-{self.fake.unique.numerify('#####')}",
            name=f"Cesta {self.fake.unique.word().capitalize()}",
            description=self.fake.sentence(nb_words=8),
            category=random.choice(list(ProductCategory)).value,
            quantity=random.randint(0, 200),
            price=f"{price:.2f}",
            supplier_id=supplier_id,
        )

    def material(self) -> MaterialDraft:
        cost = Decimal(random.randint(50, 5000)) / 100
        expiry = self.fake.date_between(start_date="+30d", end_date="+2y")
        return MaterialDraft(
            name=f"{random.choice(MATERIAL_NAMES)} {self.fake.unique.color_name()}",
            type=random.choice(list(MaterialType)).value,
            cost=f"{cost:.2f}",
            expiry_date=expiry.isoformat(),
            size=random.choice(("P", "M", "G")),
            material=random.choice(("natural", "sintético")),
        )

    def draft_for(self, entity: str, **references: int | None):
        """Return a sample draft for an entity collection name."""
        factories = {
            "addresses": self.address,
            "customers": self.customer,
            "suppliers": self.supplier,
            "phones": self.phone,
            "products": self.product,
            "materials": self.material,
        }
        try:
            factory = factories[entity]
        except KeyError:
            raise ValueError(f"No sample drafts for {entity}") from None
        return factory(**references)
