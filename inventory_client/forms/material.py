"""Raw material form."""

from dataclasses import dataclass
from typing import Iterable

from inventory_client.exceptions import ValidationError
from inventory_client.forms.base import FormController
from inventory_client.models import MaterialType, RawMaterial
from inventory_client.normalizers import normalize_date, normalize_decimal, normalize_optional_string


@dataclass
class MaterialDraft:
    name: str = ""
    type: str = ""
    cost: str = ""
    expiry_date: str = ""
    description: str = ""
    size: str = ""
    material: str = ""
    accessory: str = ""
    image_url: str = ""


def validate_material(draft: MaterialDraft, existing: Iterable[RawMaterial] = ()) -> RawMaterial:
    name = (draft.name or "").strip()
    if not name:
        raise ValidationError("Provide the raw material name.")

    material_type = None
    if normalize_optional_string(draft.type):
        try:
            material_type = MaterialType(draft.type.strip())
        except ValueError:
            raise ValidationError(f"Unknown material type: {draft.type}") from None

    cost = None
    if normalize_optional_string(draft.cost):
        cost = normalize_decimal(draft.cost)
        if cost is None:
            raise ValidationError("Provide a valid cost.")
        if cost < 0:
            raise ValidationError("Cost cannot be negative.")

    expiry_date = None
    if normalize_optional_string(draft.expiry_date):
        expiry_date = normalize_date(draft.expiry_date)
        if expiry_date is None:
            raise ValidationError("Provide a valid expiry date.")

    for existing_material in existing:
        if existing_material.name.strip().lower() == name.lower() and existing_material.type == material_type:
            raise ValidationError("This raw material is already registered.")

    return RawMaterial(
        name=name,
        type=material_type,
        cost=cost,
        expiry_date=expiry_date,
        description=normalize_optional_string(draft.description),
        size=normalize_optional_string(draft.size),
        material=normalize_optional_string(draft.material),
        accessory=normalize_optional_string(draft.accessory),
        image_url=normalize_optional_string(draft.image_url),
    )


class MaterialForm(FormController[MaterialDraft, RawMaterial]):
    success_message = "Raw material saved successfully."

    def new_draft(self) -> MaterialDraft:
        return MaterialDraft()

    def validate(self, draft: MaterialDraft) -> RawMaterial:
        return validate_material(draft, self.repository.items)
