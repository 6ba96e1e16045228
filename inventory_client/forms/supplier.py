"""Supplier form."""

from dataclasses import dataclass
from typing import Iterable

from inventory_client.exceptions import ValidationError
from inventory_client.forms.base import FormController
from inventory_client.models import Supplier
from inventory_client.normalizers import (
    CNPJ_DIGITS,
    PHONE_DIGITS,
    digits_only,
    normalize_id,
    normalize_optional_string,
    split_country_code,
)

MIN_PHONE_DIGITS = 10


@dataclass
class SupplierDraft:
    cnpj: str = ""
    legal_name: str = ""
    contact_name: str = ""
    email: str = ""
    phone: str = ""
    address_id: str | int | None = None


def validate_supplier(draft: SupplierDraft, existing: Iterable[Supplier] = ()) -> Supplier:
    cnpj = digits_only(draft.cnpj)
    if len(cnpj) != CNPJ_DIGITS:
        raise ValidationError("CNPJ must have exactly 14 digits.")

    phone = digits_only(draft.phone)
    if len(phone) > PHONE_DIGITS:
        _, phone = split_country_code(draft.phone)
    if phone and len(phone) < MIN_PHONE_DIGITS:
        raise ValidationError("Phone must have at least 10 digits (area code + number).")

    for supplier in existing:
        if digits_only(supplier.cnpj) == cnpj:
            raise ValidationError("A supplier with this CNPJ is already registered.")

    address_id = normalize_id(draft.address_id)
    return Supplier(
        cnpj=cnpj,
        legal_name=(draft.legal_name or "").strip(),
        contact_name=(draft.contact_name or "").strip(),
        email=normalize_optional_string(draft.email),
        phone=phone or None,
        address_id=address_id if address_id and address_id > 0 else None,
    )


class SupplierForm(FormController[SupplierDraft, Supplier]):
    success_message = "Supplier saved successfully."

    def new_draft(self) -> SupplierDraft:
        return SupplierDraft()

    def validate(self, draft: SupplierDraft) -> Supplier:
        return validate_supplier(draft, self.repository.items)
