"""Tests for entity <-> backend record conversion."""

from datetime import date
from decimal import Decimal

from inventory_client import serialization
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


class TestSerializeValue:
    """Tests for serialize_value and to_dict."""

    def test_scalars(self) -> None:
        assert serialization.serialize_value(Decimal("10.50")) == 10.5
        assert serialization.serialize_value(date(2024, 1, 15)) == "2024-01-15"
        assert serialization.serialize_value(ProductCategory.COMBO) == "combo"

    def test_nested(self) -> None:
        value = {"a": [Decimal("1.5"), date(2024, 1, 1)]}
        assert serialization.serialize_value(value) == {"a": [1.5, "2024-01-01"]}

    def test_to_dict_dataclass(self) -> None:
        address = Address(street="Rua A", postal_code="01310100", number=10, id=1)
        assert serialization.to_dict(address) == {
            "street": "Rua A",
            "postal_code": "01310100",
            "number": 10,
            "district": None,
            "id": 1,
        }

    def test_to_dict_other(self) -> None:
        assert serialization.to_dict(42) == {"value": "42"}


class TestPayloads:
    """Tests for request bodies."""

    def test_address(self) -> None:
        address = Address(street="Rua A", postal_code="01310100", number=10)
        assert serialization.address_to_payload(address) == {
            "rua": "Rua A",
            "numero": 10,
            "cep": "01310100",
        }

    def test_customer_omits_empty_ids(self) -> None:
        customer = Customer(name="Ana", birth_date=date(1990, 5, 1), address_id=3, cpf="12345678909")
        body = serialization.customer_to_payload(customer)

        assert body == {
            "nome": "Ana",
            "email": None,
            "dataNascimento": "1990-05-01",
            "enderecoId": 3,
            "cpf": "12345678909",
        }

    def test_supplier(self) -> None:
        supplier = Supplier(
            cnpj="11222333000181",
            legal_name="Cestas ME",
            contact_name="Ana",
            phone="1140028922",
        )
        body = serialization.supplier_to_payload(supplier)

        assert body["razaoSocial"] == "Cestas ME"
        assert body["telefone"] == "1140028922"
        assert body["enderecoId"] is None

    def test_product(self) -> None:
        product = Product(
            code="C1",
            name="Cesta",
            category=ProductCategory.CATALOG,
            quantity=2,
            price=Decimal("99.90"),
            supplier_id=4,
        )
        body = serialization.product_to_payload(product)

        assert body["codigo"] == "C1"
        assert body["categoria"] == "catalogo"
        assert body["preco"] == 99.9
        assert body["fornecedorId"] == 4

    def test_material(self) -> None:
        material = RawMaterial(
            name="Vime",
            type=MaterialType.INPUT,
            cost=Decimal("3.50"),
            expiry_date=date(2025, 1, 1),
        )
        body = serialization.material_to_payload(material)

        assert body["tipo"] == "insumo"
        assert body["custo"] == 3.5
        assert body["dataValidade"] == "2025-01-01"

    def test_phone(self) -> None:
        phone = Phone(area_code="11", number="999998888", customer_id=5)
        assert serialization.phone_to_payload(phone) == {
            "clienteId": 5,
            "ddi": "55",
            "ddd": "11",
            "numero": "999998888",
        }


class TestFromResponse:
    """Tests for response record mapping."""

    def test_address_snake_and_camel(self) -> None:
        address = serialization.address_from_response(
            {"id": "7", "rua": "Rua A", "numero": "10", "cep": "01310-100"}
        )
        assert address == Address(street="Rua A", postal_code="01310100", number=10, id=7)

    def test_customer_snake_case(self) -> None:
        customer = serialization.customer_from_response(
            {
                "id": 1,
                "nome": "Ana",
                "data_nascimento": "1990-05-01T00:00:00.000Z",
                "endereco_id": "3",
                "cpf": "123.456.789-09",
            }
        )
        assert customer.birth_date == date(1990, 5, 1)
        assert customer.address_id == 3
        assert customer.cpf == "12345678909"
        assert customer.cnpj is None

    def test_supplier_camel_case(self) -> None:
        supplier = serialization.supplier_from_response(
            {"id": 2, "cnpj": "11222333000181", "razaoSocial": "Cestas ME", "contato": "Ana"}
        )
        assert supplier.legal_name == "Cestas ME"
        assert supplier.contact_name == "Ana"
        assert supplier.address_id is None

    def test_product_defaults(self) -> None:
        product = serialization.product_from_response({"codigo": "C1", "nome": "Cesta"})

        assert product.category == ProductCategory.PRODUCT
        assert product.quantity == 0
        assert product.price == Decimal("0")

    def test_product_values(self) -> None:
        product = serialization.product_from_response(
            {"codigo": "C1", "nome": "Cesta", "categoria": "Combo", "quantidade": "3", "preco": "19.90"}
        )
        assert product.category == ProductCategory.COMBO
        assert product.quantity == 3
        assert product.price == Decimal("19.90")

    def test_material_unknown_type(self) -> None:
        material = serialization.material_from_response({"nome": "Vime", "tipo": "outro"})
        assert material.type is None

    def test_phone_default_country(self) -> None:
        phone = serialization.phone_from_response({"ddd": "11", "numero": "4002-8922", "cliente_id": 5})
        assert phone.country_code == "55"
        assert phone.number == "40028922"
        assert phone.digits == "1140028922"
