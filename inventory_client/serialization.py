"""Conversion between entity dataclasses and backend JSON records.

Request bodies use the backend's camelCase keys (``razaoSocial``,
``enderecoId``...). Response records are accepted in either camelCase or
snake_case, with identifiers coerced to ``int`` and money to ``Decimal``.
"""

from dataclasses import asdict, is_dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from inventory_client.models import (
    Address,
    Customer,
    MaterialType,
    Phone,
    Product,
    ProductCategory,
    RawMaterial,
    Supplier,
)
from inventory_client.normalizers import (
    digits_only,
    normalize_date,
    normalize_decimal,
    normalize_id,
    normalize_optional_string,
)


def serialize_value(value: Any) -> Any:
    """Serialize a value for a JSON request body."""
    if isinstance(value, Decimal):
        return float(value)
    elif isinstance(value, Enum):
        return value.value
    elif isinstance(value, datetime):
        return value.isoformat()
    elif isinstance(value, date):
        return value.isoformat()
    elif isinstance(value, dict):
        return {k: serialize_value(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [serialize_value(v) for v in value]
    return value


def to_dict(obj: Any) -> dict:
    """Convert a dataclass (or dict) to a JSON-ready dict with its own field names."""
    if is_dataclass(obj):
        return {key: serialize_value(value) for key, value in asdict(obj).items()}
    elif isinstance(obj, dict):
        return serialize_value(obj)
    else:
        return {"value": str(obj)}


def _pick(record: dict, *keys: str) -> Any:
    """Return the first non-None value among ``keys``."""
    for key in keys:
        value = record.get(key)
        if value is not None:
            return value
    return None


def _text(record: dict, *keys: str) -> str:
    value = _pick(record, *keys)
    return "" if value is None else str(value)


def _enum(enum_type: type[Enum], value: Any) -> Any:
    if value is None or value == "":
        return None
    try:
        return enum_type(str(value).strip().lower())
    except ValueError:
        return None


# --- Request bodies ---


def address_to_payload(address: Address) -> dict[str, Any]:
    return {
        "rua": address.street,
        "numero": address.number,
        "cep": address.postal_code,
    }


def customer_to_payload(customer: Customer) -> dict[str, Any]:
    body: dict[str, Any] = {
        "nome": customer.name,
        "email": customer.email,
        "dataNascimento": serialize_value(customer.birth_date),
        "enderecoId": customer.address_id,
    }
    if customer.cpf:
        body["cpf"] = customer.cpf
    if customer.cnpj:
        body["cnpj"] = customer.cnpj
    return body


def supplier_to_payload(supplier: Supplier) -> dict[str, Any]:
    return {
        "cnpj": supplier.cnpj,
        "razaoSocial": supplier.legal_name,
        "contato": supplier.contact_name,
        "email": supplier.email,
        "telefone": supplier.phone,
        "enderecoId": supplier.address_id,
    }


def product_to_payload(product: Product) -> dict[str, Any]:
    return {
        "codigo": product.code,
        "nome": product.name,
        "descricao": product.description,
        "categoria": serialize_value(product.category),
        "quantidade": product.quantity,
        "preco": serialize_value(product.price),
        "fornecedorId": product.supplier_id,
        "imagemUrl": product.image_url,
    }


def material_to_payload(material: RawMaterial) -> dict[str, Any]:
    return {
        "nome": material.name,
        "tipo": serialize_value(material.type),
        "custo": serialize_value(material.cost),
        "dataValidade": serialize_value(material.expiry_date),
        "descricao": material.description,
        "tamanho": material.size,
        "material": material.material,
        "acessorio": material.accessory,
        "imagemUrl": material.image_url,
    }


def phone_to_payload(phone: Phone) -> dict[str, Any]:
    return {
        "clienteId": phone.customer_id,
        "ddi": phone.country_code,
        "ddd": phone.area_code,
        "numero": phone.number,
    }


# --- Response records ---


def address_from_response(record: dict) -> Address:
    return Address(
        street=_text(record, "rua", "street"),
        postal_code=digits_only(_pick(record, "cep", "postal_code", "postalCode")),
        number=normalize_id(digits_only(_pick(record, "numero", "number"))) or 0,
        district=normalize_optional_string(_pick(record, "bairro", "district")),
        id=normalize_id(record.get("id")),
    )


def customer_from_response(record: dict) -> Customer:
    return Customer(
        name=_text(record, "nome", "name"),
        birth_date=normalize_date(_pick(record, "data_nascimento", "dataNascimento", "birth_date")),
        address_id=normalize_id(_pick(record, "endereco_id", "enderecoId", "address_id")) or 0,
        email=normalize_optional_string(record.get("email")),
        cpf=digits_only(record.get("cpf")) or None,
        cnpj=digits_only(record.get("cnpj")) or None,
        id=normalize_id(record.get("id")),
    )


def supplier_from_response(record: dict) -> Supplier:
    return Supplier(
        cnpj=digits_only(record.get("cnpj")),
        legal_name=_text(record, "razao_social", "razaoSocial", "legal_name"),
        contact_name=_text(record, "contato", "contact_name"),
        email=normalize_optional_string(record.get("email")),
        phone=digits_only(_pick(record, "telefone", "phone")) or None,
        address_id=normalize_id(_pick(record, "endereco_id", "enderecoId", "address_id")),
        id=normalize_id(record.get("id")),
    )


def product_from_response(record: dict) -> Product:
    return Product(
        code=_text(record, "codigo", "code"),
        name=_text(record, "nome", "name"),
        category=_enum(ProductCategory, _pick(record, "categoria", "category")) or ProductCategory.PRODUCT,
        quantity=normalize_id(_pick(record, "quantidade", "quantity")) or 0,
        price=normalize_decimal(_pick(record, "preco", "price")) or Decimal("0"),
        description=normalize_optional_string(_pick(record, "descricao", "description")),
        supplier_id=normalize_id(_pick(record, "fornecedor_id", "fornecedorId", "supplier_id")),
        image_url=normalize_optional_string(_pick(record, "imagem_url", "imagemUrl", "image_url")),
        id=normalize_id(record.get("id")),
    )


def material_from_response(record: dict) -> RawMaterial:
    return RawMaterial(
        name=_text(record, "nome", "name"),
        type=_enum(MaterialType, _pick(record, "tipo", "type")),
        cost=normalize_decimal(_pick(record, "custo", "cost")),
        expiry_date=normalize_date(_pick(record, "datavalidade", "dataValidade", "expiry_date")),
        description=normalize_optional_string(_pick(record, "descricao", "description")),
        size=normalize_optional_string(_pick(record, "tamanho", "size")),
        material=normalize_optional_string(record.get("material")),
        accessory=normalize_optional_string(_pick(record, "acessorio", "accessory")),
        image_url=normalize_optional_string(_pick(record, "imagem_url", "imagemUrl", "image_url")),
        id=normalize_id(record.get("id")),
    )


def phone_from_response(record: dict) -> Phone:
    return Phone(
        area_code=digits_only(_pick(record, "ddd", "area_code")),
        number=digits_only(_pick(record, "numero", "number")),
        customer_id=normalize_id(_pick(record, "cliente_id", "clienteId", "customer_id")) or 0,
        country_code=digits_only(record.get("ddi")) or "55",
        id=normalize_id(record.get("id")),
    )
