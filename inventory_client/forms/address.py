"""Address form."""

from dataclasses import dataclass
from typing import Iterable

from inventory_client.exceptions import ValidationError
from inventory_client.forms.base import FormController
from inventory_client.models import Address
from inventory_client.normalizers import digits_only, normalize_optional_string, sanitize_postal_code


@dataclass
class AddressDraft:
    street: str = ""
    number: str = ""
    postal_code: str = ""
    district: str = ""


def validate_address(draft: AddressDraft, existing: Iterable[Address] = ()) -> Address:
    street = (draft.street or "").strip()
    number = digits_only(draft.number)
    postal_code = digits_only(sanitize_postal_code(draft.postal_code))
    if not street or not number or not postal_code:
        raise ValidationError("Fill in street, number and postal code.")

    for address in existing:
        if (
            address.street.strip().lower() == street.lower()
            and str(address.number) == str(int(number))
            and digits_only(address.postal_code) == postal_code
        ):
            raise ValidationError("Address already registered.")

    return Address(
        street=street,
        postal_code=postal_code,
        number=int(number),
        district=normalize_optional_string(draft.district),
    )


class AddressForm(FormController[AddressDraft, Address]):
    success_message = "Address saved successfully."

    def new_draft(self) -> AddressDraft:
        return AddressDraft()

    def validate(self, draft: AddressDraft) -> Address:
        return validate_address(draft, self.repository.items)
