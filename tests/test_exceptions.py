"""Tests for custom exception hierarchy."""

from inventory_client.exceptions import (
    CompositeError,
    ConfigurationError,
    ErrorKind,
    InventoryClientError,
    RequestError,
    StorageError,
    ValidationError,
)


class TestExceptionHierarchy:
    """Test exception inheritance chain."""

    def test_base_is_exception(self) -> None:
        assert isinstance(InventoryClientError("test"), Exception)

    def test_subclasses(self) -> None:
        for error in (
            RequestError("x"),
            ValidationError("x"),
            CompositeError("x"),
            ConfigurationError("x"),
            StorageError("x"),
        ):
            assert isinstance(error, InventoryClientError)

    def test_exception_message(self) -> None:
        err = ValidationError("Provide a CPF or CNPJ.")
        assert str(err) == "Provide a CPF or CNPJ."
        assert err.message == "Provide a CPF or CNPJ."


class TestErrorKinds:
    """Test the kind carried by each error."""

    def test_validation(self) -> None:
        assert ValidationError("x").kind == ErrorKind.VALIDATION

    def test_composite_keeps_completed(self) -> None:
        err = CompositeError("Customer saved, but the phone was not: x", completed={"id": 1})
        assert err.kind == ErrorKind.COMPOSITE
        assert err.completed == {"id": 1}

    def test_request_default_is_status(self) -> None:
        assert RequestError("x").kind == ErrorKind.STATUS

    def test_request_transport(self) -> None:
        err = RequestError("Unexpected server response.", ErrorKind.TRANSPORT)
        assert err.kind == ErrorKind.TRANSPORT
        assert err.status is None

    def test_request_str_includes_status(self) -> None:
        err = RequestError("CPF já cadastrado", status=409)
        assert str(err) == "CPF já cadastrado (status: 409)"
        assert err.message == "CPF já cadastrado"
