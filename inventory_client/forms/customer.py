"""Customer form, with an optional embedded phone."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from inventory_client.exceptions import CompositeError, InventoryClientError, ValidationError
from inventory_client.forms.base import FormController
from inventory_client.models import Customer, Phone
from inventory_client.normalizers import (
    CNPJ_DIGITS,
    CPF_DIGITS,
    PHONE_DIGITS,
    digits_only,
    normalize_date,
    normalize_id,
    normalize_optional_string,
    split_country_code,
)
from inventory_client.notices import NoticeBoard
from inventory_client.store import CustomerRepository, PhoneRepository

MIN_PHONE_DIGITS = 10
PHONE_NOT_SAVED = "Customer saved, but the phone was not: {reason}"


@dataclass
class CustomerDraft:
    name: str = ""
    birth_date: str = ""
    email: str = ""
    cpf: str = ""
    cnpj: str = ""
    address_id: str | int | None = None
    phone: str = ""


def validate_customer(draft: CustomerDraft, existing: Iterable[Customer] = ()) -> Customer:
    """Check a customer draft and build the record to send.

    Parameters
    ----------
    draft : CustomerDraft
        Raw form values.
    existing : Iterable[Customer]
        Customers already in memory, used for the CPF/CNPJ duplicate check.

    Returns
    -------
    Customer
        Record with digits-only identifiers and a parsed birth date.
    """
    cpf = digits_only(draft.cpf)
    cnpj = digits_only(draft.cnpj)
    if not cpf and not cnpj:
        raise ValidationError("Provide a CPF or CNPJ.")

    address_id = normalize_id(draft.address_id)
    if not address_id or address_id <= 0:
        raise ValidationError("Select a valid address.")

    birth_date = normalize_date(draft.birth_date)
    if birth_date is None:
        raise ValidationError("Provide a valid birth date.")

    if cpf and len(cpf) != CPF_DIGITS:
        raise ValidationError("CPF must have 11 digits.")
    if cnpj and len(cnpj) != CNPJ_DIGITS:
        raise ValidationError("CNPJ must have 14 digits.")

    if digits_only(draft.phone):
        _, national = phone_parts(draft.phone)
        if len(national) < MIN_PHONE_DIGITS:
            raise ValidationError("Phone must have at least 10 digits (area code + number).")

    for customer in existing:
        if (cpf and digits_only(customer.cpf) == cpf) or (cnpj and digits_only(customer.cnpj) == cnpj):
            raise ValidationError("A customer with this CPF or CNPJ is already registered.")

    return Customer(
        name=(draft.name or "").strip(),
        birth_date=birth_date,
        address_id=address_id,
        email=normalize_optional_string(draft.email),
        cpf=cpf or None,
        cnpj=cnpj or None,
    )


def phone_parts(value: str | None) -> tuple[str, str]:
    """Return ``(country_code, national_digits)`` for a typed phone.

    Accepts national digits or the ``+55 (11) 99999-8888`` display format.
    Raises :class:`ValidationError` when the national part has more than
    11 digits.
    """
    country, national = split_country_code(value)
    if len(digits_only(value)) > len(country) + PHONE_DIGITS:
        raise ValidationError("Phone must have at most 11 digits after the country code.")
    return country, national


def embedded_phone(value: str | None, customer_id: int) -> Phone | None:
    """Split a typed phone into country code, area code and number for a new customer."""
    if not digits_only(value):
        return None
    country, national = phone_parts(value)
    return Phone(
        area_code=national[:2],
        number=national[2:],
        customer_id=customer_id,
        country_code=country,
    )


class CustomerForm(FormController[CustomerDraft, Customer]):
    success_message = "Customer saved successfully."

    def __init__(
        self,
        repository: CustomerRepository,
        phones: PhoneRepository,
        notices: NoticeBoard,
    ) -> None:
        super().__init__(repository, notices)
        self.phones = phones

    def new_draft(self) -> CustomerDraft:
        return CustomerDraft()

    def validate(self, draft: CustomerDraft) -> Customer:
        return validate_customer(draft, self.repository.items)

    async def after_create(self, created: Customer, draft: CustomerDraft) -> None:
        if not digits_only(draft.phone):
            return
        if created.id is None:
            raise CompositeError(
                PHONE_NOT_SAVED.format(reason="the server did not return the customer id."),
                completed=created,
            )
        phone = embedded_phone(draft.phone, created.id)
        try:
            await self.phones.create(phone)
        except InventoryClientError as exc:
            raise CompositeError(PHONE_NOT_SAVED.format(reason=exc.message), completed=created) from exc
        self.notices.success("Phone saved successfully.")
