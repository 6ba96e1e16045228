"""Tests for identifier and contact field normalizers."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from inventory_client.normalizers import (
    digits_only,
    format_cnpj,
    format_cpf,
    format_phone,
    format_postal_code,
    normalize_date,
    normalize_decimal,
    normalize_id,
    normalize_optional_string,
    sanitize_postal_code,
    split_country_code,
)


class TestDigitsOnly:
    """Tests for digits_only."""

    def test_strips_punctuation(self) -> None:
        assert digits_only("(11) 4002-8922") == "1140028922"

    def test_none_is_empty(self) -> None:
        assert digits_only(None) == ""

    def test_numbers_are_stringified(self) -> None:
        assert digits_only(12345) == "12345"

    def test_non_ascii_digits_removed(self) -> None:
        assert digits_only("\u0661\u0661\u0662") == ""
        assert digits_only("1\u0662-3\uff14") == "13"


class TestFormatCpf:
    """Tests for format_cpf."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("", ""),
            ("123", "123"),
            ("1234", "123.4"),
            ("1234567", "123.456.7"),
            ("12345678909", "123.456.789-09"),
            ("123456789091234", "123.456.789-09"),
        ],
    )
    def test_progressive(self, raw: str, expected: str) -> None:
        assert format_cpf(raw) == expected

    def test_keeps_digits(self) -> None:
        raw = "123.456.789-0912"
        assert digits_only(format_cpf(raw)) == digits_only(raw)[:11]


class TestFormatCnpj:
    """Tests for format_cnpj."""

    def test_full(self) -> None:
        assert format_cnpj("12345678000199") == "12.345.678/0001-99"

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("12", "12"),
            ("12345", "12.345"),
            ("12345678", "12.345.678"),
            ("123456780001", "12.345.678/0001"),
        ],
    )
    def test_progressive(self, raw: str, expected: str) -> None:
        assert format_cnpj(raw) == expected

    def test_idempotent(self) -> None:
        once = format_cnpj("11222333000181")
        assert format_cnpj(once) == once


class TestFormatPhone:
    """Tests for format_phone."""

    def test_mobile(self) -> None:
        assert format_phone("11999998888") == "+55 (11) 99999-8888"

    def test_landline(self) -> None:
        assert format_phone("1140028922") == "+55 (11) 4002-8922"

    def test_short_number_has_no_dash(self) -> None:
        assert format_phone("1199") == "+55 (11) 99"

    def test_area_code_only(self) -> None:
        assert format_phone("11") == "+55 (11)"

    def test_empty(self) -> None:
        assert format_phone("") == ""

    def test_custom_country_code(self) -> None:
        assert format_phone("11999998888", "1") == "+1 (11) 99999-8888"

    def test_idempotent(self) -> None:
        once = format_phone("11999998888")
        assert format_phone(once) == once

    def test_national_digits_preserved(self) -> None:
        raw = "(11) 99999-8888"
        assert digits_only(format_phone(raw)) == "55" + digits_only(raw)[:11]


class TestSplitCountryCode:
    """Tests for split_country_code."""

    def test_plus_prefix(self) -> None:
        assert split_country_code("+55 (11) 4002-8922") == ("55", "1140028922")

    def test_extra_leading_digits(self) -> None:
        assert split_country_code("5511999998888") == ("55", "11999998888")

    def test_default(self) -> None:
        assert split_country_code("1140028922") == ("55", "1140028922")


class TestPostalCode:
    """Tests for postal code helpers."""

    def test_sanitize_keeps_first_hyphen(self) -> None:
        assert sanitize_postal_code("01310-100-9") == "01310-1009"

    def test_sanitize_drops_letters(self) -> None:
        assert sanitize_postal_code("CEP 01310 100") == "01310100"

    def test_sanitize_caps_length(self) -> None:
        assert len(sanitize_postal_code("0131010012345")) == 10

    def test_format(self) -> None:
        assert format_postal_code("01310100") == "01310-100"
        assert format_postal_code("013") == "013"


class TestCoercions:
    """Tests for optional value coercions."""

    def test_optional_string(self) -> None:
        assert normalize_optional_string("  ana  ") == "ana"
        assert normalize_optional_string("   ") is None
        assert normalize_optional_string(None) is None

    @pytest.mark.parametrize(
        "raw, expected",
        [(5, 5), ("7", 7), (" 8 ", 8), ("3.0", 3), ("", None), ("abc", None), (None, None), (True, None)],
    )
    def test_normalize_id(self, raw: object, expected: int | None) -> None:
        assert normalize_id(raw) == expected

    def test_decimal_comma(self) -> None:
        assert normalize_decimal("1.234,50") == Decimal("1234.50")

    def test_decimal_dot(self) -> None:
        assert normalize_decimal("19.90") == Decimal("19.90")

    def test_decimal_invalid(self) -> None:
        assert normalize_decimal("R$ abc") is None
        assert normalize_decimal("") is None

    def test_date_brazilian(self) -> None:
        assert normalize_date("25/12/1990") == date(1990, 12, 25)

    def test_date_iso(self) -> None:
        assert normalize_date("1990-12-25") == date(1990, 12, 25)
        assert normalize_date("1990-12-25T10:00:00Z") == date(1990, 12, 25)

    def test_date_objects(self) -> None:
        assert normalize_date(datetime(2024, 1, 2, 3, 4)) == date(2024, 1, 2)
        assert normalize_date(date(2024, 1, 2)) == date(2024, 1, 2)

    def test_date_invalid(self) -> None:
        assert normalize_date("31/02/2024") is None
        assert normalize_date("soon") is None
