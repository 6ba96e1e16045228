"""Product (catalog item) form."""

from dataclasses import dataclass
from typing import Iterable

from inventory_client.exceptions import ValidationError
from inventory_client.forms.base import FormController
from inventory_client.models import Product, ProductCategory
from inventory_client.normalizers import normalize_decimal, normalize_id, normalize_optional_string


@dataclass
class ProductDraft:
    code: str = ""
    name: str = ""
    description: str = ""
    category: str = ProductCategory.PRODUCT.value
    quantity: str | int = 0
    price: str = "0"
    supplier_id: str | int | None = None
    image_url: str = ""


def _parse_quantity(value: object) -> int:
    text = "" if value is None else str(value).strip()
    if not text:
        return 0
    try:
        return int(text)
    except ValueError:
        raise ValidationError("Quantity must be a whole number.") from None


def validate_product(draft: ProductDraft, existing: Iterable[Product] = ()) -> Product:
    code = (draft.code or "").strip()
    name = (draft.name or "").strip()
    if not code or not name:
        raise ValidationError("Provide the product code and name.")

    quantity = _parse_quantity(draft.quantity)
    if quantity < 0:
        raise ValidationError("Quantity cannot be negative.")

    price = normalize_decimal(draft.price)
    if price is None:
        raise ValidationError("Provide a valid price.")
    if price < 0:
        raise ValidationError("Price cannot be negative.")

    try:
        category = ProductCategory(draft.category or ProductCategory.PRODUCT.value)
    except ValueError:
        raise ValidationError(f"Unknown product category: {draft.category}") from None

    for product in existing:
        if product.code.strip().lower() == code.lower() or product.name.strip().lower() == name.lower():
            raise ValidationError("A product with this code or name is already registered.")

    supplier_id = normalize_id(draft.supplier_id)
    return Product(
        code=code,
        name=name,
        category=category,
        quantity=quantity,
        price=price,
        description=normalize_optional_string(draft.description),
        supplier_id=supplier_id if supplier_id and supplier_id > 0 else None,
        image_url=normalize_optional_string(draft.image_url),
    )


class ProductForm(FormController[ProductDraft, Product]):
    success_message = "Product saved successfully."

    def new_draft(self) -> ProductDraft:
        return ProductDraft()

    def validate(self, draft: ProductDraft) -> Product:
        return validate_product(draft, self.repository.items)
