"""Tests for community code derivation."""

import pytest

from hubit_api.lib.community_code import AddressTuple, derive_code, number_segment, region_segment, street_segment


def _address(**overrides: str) -> AddressTuple:
    fields = {
        "country": "España",
        "province": "Andalucía",
        "city": "Sevilla",
        "street": "Gran Vía",
        "street_number": "7",
    }
    fields.update(overrides)
    return AddressTuple(**fields)


class TestDeriveCode:
    def test_reference_address(self) -> None:
        assert derive_code(_address()) == "ESP-AND-SEV-GRANVA0007"

    def test_deterministic(self) -> None:
        assert derive_code(_address()) == derive_code(_address())

    def test_long_number_not_truncated(self) -> None:
        assert derive_code(_address(street_number="12345")).endswith("GRANVA12345")

    def test_street_without_letters_is_all_pad(self) -> None:
        assert derive_code(_address(street="123 456")) == "ESP-AND-SEV-XXXXXX0007"

    def test_short_region_fields_are_padded(self) -> None:
        code = derive_code(_address(country="UK", province="Y", city="Ly"))
        assert code == "UKX-YXX-LYX-GRANVA0007"

    def test_surrounding_whitespace_ignored(self) -> None:
        assert derive_code(_address(country="  spain ", street_number=" 7 ")) == "SPA-AND-SEV-GRANVA0007"

    def test_distinct_addresses_may_share_code(self) -> None:
        """Only the leading characters are kept, so close addresses collide."""
        a = _address(city="Sevilla")
        b = _address(city="Seville")
        assert a != b
        assert derive_code(a) == derive_code(b)


class TestSegments:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [("España", "ESP"), ("es", "ESX"), ("a", "AXX"), ("madrid", "MAD")],
    )
    def test_region_segment(self, value: str, expected: str) -> None:
        assert region_segment(value) == expected

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("Gran Vía", "GRANVA"),
            ("Calle Mayor", "CALLEM"),
            ("Sol", "SOLXXX"),
            ("C/ Alcalá, 3", "CALCAL"),
        ],
    )
    def test_street_segment(self, value: str, expected: str) -> None:
        assert street_segment(value) == expected

    @pytest.mark.parametrize(
        ("value", "expected"),
        [("7", "0007"), ("42", "0042"), ("1234", "1234"), ("98765", "98765")],
    )
    def test_number_segment(self, value: str, expected: str) -> None:
        assert number_segment(value) == expected
