"""Phone form."""

from dataclasses import dataclass

from inventory_client.exceptions import ValidationError
from inventory_client.forms.base import FormController
from inventory_client.models import Phone
from inventory_client.normalizers import DEFAULT_COUNTRY_CODE, digits_only, normalize_id

MIN_PHONE_DIGITS = 10


@dataclass
class PhoneDraft:
    area_code: str = ""
    number: str = ""
    customer_id: str | int | None = None
    country_code: str = DEFAULT_COUNTRY_CODE


def validate_phone(draft: PhoneDraft) -> Phone:
    area_code = digits_only(draft.area_code)[:3]
    number = digits_only(draft.number)[:9]
    if len(area_code + number) < MIN_PHONE_DIGITS:
        raise ValidationError("Phone must have at least 10 digits (area code + number).")

    customer_id = normalize_id(draft.customer_id)
    if not customer_id or customer_id <= 0:
        raise ValidationError("Select a valid customer.")

    return Phone(
        area_code=area_code,
        number=number,
        customer_id=customer_id,
        country_code=digits_only(draft.country_code) or DEFAULT_COUNTRY_CODE,
    )


class PhoneForm(FormController[PhoneDraft, Phone]):
    success_message = "Phone saved successfully."

    def new_draft(self) -> PhoneDraft:
        return PhoneDraft()

    def validate(self, draft: PhoneDraft) -> Phone:
        return validate_phone(draft)
