"""Entity forms: drafts, validation and the submit protocol."""

from inventory_client.forms.address import AddressDraft, AddressForm, validate_address
from inventory_client.forms.base import FormController
from inventory_client.forms.customer import CustomerDraft, CustomerForm, validate_customer
from inventory_client.forms.material import MaterialDraft, MaterialForm, validate_material
from inventory_client.forms.phone import PhoneDraft, PhoneForm, validate_phone
from inventory_client.forms.product import ProductDraft, ProductForm, validate_product
from inventory_client.forms.supplier import SupplierDraft, SupplierForm, validate_supplier

__all__ = [
    "AddressDraft",
    "AddressForm",
    "CustomerDraft",
    "CustomerForm",
    "FormController",
    "MaterialDraft",
    "MaterialForm",
    "PhoneDraft",
    "PhoneForm",
    "ProductDraft",
    "ProductForm",
    "SupplierDraft",
    "SupplierForm",
    "validate_address",
    "validate_customer",
    "validate_material",
    "validate_phone",
    "validate_product",
    "validate_supplier",
]
