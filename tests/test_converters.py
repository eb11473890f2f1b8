"""
Tests for the converter registry and built-in converters.
"""

from datetime import date, datetime, time, timezone
from decimal import Decimal, InvalidOperation
from uuid import UUID

import pytest

from autoasm.converters import ConverterRegistry, default_registry, str_to_bool


class Celsius(float):
    pass


class TestConverterRegistry:
    """Tests for ConverterRegistry lookups."""

    def test_find_registered_pair(self):
        registry = ConverterRegistry().register(str, int, int)

        assert registry.find(str, int) is int
        assert (str, int) in registry
        assert len(registry) == 1

    def test_find_missing_pair(self):
        assert ConverterRegistry().find(str, int) is None

    def test_lookup_is_exact_type(self):
        """A converter for float should not apply to a float subclass."""
        registry = ConverterRegistry().register(float, str, str)

        assert registry.find(Celsius, str) is None

    def test_lookup_is_directional(self):
        registry = ConverterRegistry().register(str, int, int)

        assert registry.find(int, str) is None

    def test_register_replaces(self):
        """Registering a pair twice should keep the latest converter."""
        registry = ConverterRegistry().register(str, int, int).register(str, int, len)

        assert registry.find(str, int) is len

    def test_copy_is_independent(self):
        """Registering on a copy should not affect the original."""
        original = ConverterRegistry().register(str, int, int)
        copied = original.copy().register(int, str, str)

        assert (int, str) in copied
        assert (int, str) not in original

    def test_default_registry_is_fresh(self):
        """Each default_registry() call should return a new registry."""
        first = default_registry()
        first.register(bytes, str, bytes.decode)

        assert (bytes, str) not in default_registry()


class TestDefaultConverters:
    """Tests for the built-in seed set."""

    @pytest.fixture
    def registry(self):
        return default_registry()

    @pytest.mark.parametrize(
        "value, target, expected",
        [
            (3, float, 3.0),
            (3, Decimal, Decimal(3)),
            (0.1, Decimal, Decimal("0.1")),
            (" 42 ", int, 42),
            ("2.5", float, 2.5),
            ("1.10", Decimal, Decimal("1.10")),
            ("yes", bool, True),
            ("Off", bool, False),
            (42, str, "42"),
            (Decimal("1.10"), str, "1.10"),
            ("12345678-1234-5678-1234-567812345678", UUID, UUID("12345678-1234-5678-1234-567812345678")),
            (date(2018, 1, 10), datetime, datetime(2018, 1, 10)),
            ("2018-01-10", date, date(2018, 1, 10)),
            ("2018-01-10T12:30:00", datetime, datetime(2018, 1, 10, 12, 30)),
            ("12:30", time, time(12, 30)),
            (date(2018, 1, 10), str, "2018-01-10"),
            (time(12, 30), str, "12:30:00"),
            (0, datetime, datetime(1970, 1, 1, tzinfo=timezone.utc)),
        ],
    )
    def test_conversion(self, registry, value, target, expected):
        converter = registry.find(type(value), target)

        assert converter is not None
        assert converter(value) == expected

    def test_invalid_decimal(self, registry):
        with pytest.raises(InvalidOperation):
            registry.find(str, Decimal)("abc")


class TestStrToBool:
    """Tests for str_to_bool."""

    @pytest.mark.parametrize("text", ["true", "TRUE", " yes ", "1", "on", "y"])
    def test_true(self, text):
        assert str_to_bool(text) is True

    @pytest.mark.parametrize("text", ["false", "No", "0", "off", "n"])
    def test_false(self, text):
        assert str_to_bool(text) is False

    def test_unrecognised(self):
        with pytest.raises(ValueError, match="Not a boolean"):
            str_to_bool("maybe")
