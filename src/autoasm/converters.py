"""
Converter registry and the built-in scalar and temporal converters.

The registry is a lookup table keyed by the exact ``(source_type,
target_type)`` pair. A converter registered for ``A`` does not apply to
subclasses of ``A``; register the subclass explicitly if it needs one.

Example::

    registry = default_registry()
    registry.register(Money, Decimal, lambda money: money.amount)
    assembler = AutoAssembler(converters=registry)
"""

import logging
from datetime import date, datetime, time, timezone
from decimal import Decimal
from typing import Any, Callable, Iterator, Optional
from uuid import UUID

from .constants import FALSE_STRINGS, TRUE_STRINGS

logger = logging.getLogger(__name__)

ConverterFunc = Callable[[Any], Any]


class ConverterRegistry:
    """
    Exact-type table of value converters.

    Populated once, typically before it is handed to an AutoAssembler;
    lookups never mutate it, so a populated registry may be shared.
    """

    def __init__(self, converters: Optional[dict[tuple[type, type], ConverterFunc]] = None):
        self._converters: dict[tuple[type, type], ConverterFunc] = dict(converters or {})

    def register(self, source_type: type, target_type: type, func: ConverterFunc) -> "ConverterRegistry":
        """
        Register ``func`` for converting ``source_type`` values into ``target_type``.

        Replaces any converter already registered for the pair.

        Returns:
            The registry itself, so registrations can be chained
        """
        if (source_type, target_type) in self._converters:
            logger.debug(f"Replacing converter {source_type.__name__} -> {target_type.__name__}")
        self._converters[(source_type, target_type)] = func
        return self

    def find(self, source_type: type, target_type: type) -> Optional[ConverterFunc]:
        """Return the converter for the exact pair, or None."""
        return self._converters.get((source_type, target_type))

    def copy(self) -> "ConverterRegistry":
        return ConverterRegistry(self._converters)

    def __contains__(self, pair: object) -> bool:
        return pair in self._converters

    def __len__(self) -> int:
        return len(self._converters)

    def __iter__(self) -> Iterator[tuple[type, type]]:
        return iter(self._converters)


def str_to_bool(value: str) -> bool:
    """
    Parse a boolean from common spellings.

    Raises:
        ValueError: ``value`` is not a recognised spelling
    """
    normalized = value.strip().lower()
    if normalized in TRUE_STRINGS:
        return True
    if normalized in FALSE_STRINGS:
        return False
    raise ValueError(f"Not a boolean: {value!r}")


def date_to_datetime(value: date) -> datetime:
    return datetime(value.year, value.month, value.day)


def timestamp_to_datetime(value: float) -> datetime:
    """POSIX timestamp to an aware UTC datetime."""
    return datetime.fromtimestamp(value, tz=timezone.utc)


def str_to_decimal(value: str) -> Decimal:
    # Decimal("abc") raises InvalidOperation, an ArithmeticError
    return Decimal(value.strip())


def default_registry() -> ConverterRegistry:
    """
    Create a registry seeded with the built-in converters.

    Covers numeric widening, string <-> primitive parsing and
    formatting, and ISO-8601 date/time bridges. Each call returns a new
    registry, so callers may extend it freely.
    """
    registry = ConverterRegistry()

    # Numeric widening
    registry.register(int, float, float)
    registry.register(int, Decimal, Decimal)
    registry.register(float, Decimal, lambda value: Decimal(str(value)))

    # String <-> primitive
    registry.register(str, int, lambda value: int(value.strip()))
    registry.register(str, float, lambda value: float(value.strip()))
    registry.register(str, Decimal, str_to_decimal)
    registry.register(str, bool, str_to_bool)
    registry.register(str, UUID, UUID)
    for primitive in (int, float, Decimal, bool, UUID):
        registry.register(primitive, str, str)

    # Temporal bridges
    registry.register(date, datetime, date_to_datetime)
    registry.register(str, date, date.fromisoformat)
    registry.register(str, datetime, datetime.fromisoformat)
    registry.register(str, time, time.fromisoformat)
    registry.register(date, str, date.isoformat)
    registry.register(datetime, str, datetime.isoformat)
    registry.register(time, str, time.isoformat)
    registry.register(int, datetime, timestamp_to_datetime)
    registry.register(float, datetime, timestamp_to_datetime)

    return registry
