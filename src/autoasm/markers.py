"""
Declarations attached to model types: field mapping directives, the
convertibility marker and runtime type registries.

Markers live in side tables keyed by the exact class they were declared
on, so a subclass of a convertible type is not itself convertible unless
it is decorated too.

Example::

    @convertible
    class AddressDTO:
        city: str

    @dataclass
    class OrderDTO:
        status: Annotated[str, FieldMapping("NEW")]
        price: Annotated[Decimal, FieldMapping(source="detail.price")]
        address: AddressDTO

    class PaymentDTO(ABC): ...

    @mapped_class(CardPayment)
    class CardPaymentDTO(PaymentDTO):
        last4: str

    runtime_type(PaymentDTO, CardPaymentDTO)
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional, TypeVar

from .constants import PATH_SEPARATOR
from .errors import ConfigurationError

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=type)

_CONVERTIBLE: set[type] = set()
_MAPPED_CLASSES: dict[type, type] = {}
_RUNTIME_TYPES: dict[type, "RuntimeTypeRegistry"] = {}


@dataclass(frozen=True)
class FieldMapping:
    """
    Per-property directive overriding name based matching.

    Attributes:
        value: Literal constant used instead of any source lookup
        source: Alternate source property name, dotted for nested owners
    """

    value: Optional[str] = None
    source: Optional[str] = None

    def __post_init__(self) -> None:
        if self.value is not None and self.source is not None:
            raise ConfigurationError("FieldMapping accepts either a constant value or a source path, not both")
        if self.source is not None and not all(self.source.split(PATH_SEPARATOR)):
            raise ConfigurationError(f"FieldMapping source path is malformed: {self.source!r}")

    @property
    def is_constant(self) -> bool:
        return self.value is not None

    @property
    def source_path(self) -> tuple[str, ...]:
        """Source path split into hops; empty when no source is declared."""
        if self.source is None:
            return ()
        return tuple(self.source.split(PATH_SEPARATOR))


@dataclass(frozen=True)
class RuntimeVariant:
    """One concrete subtype of a polymorphic target and its source class."""

    target: type
    source: Optional[type]


class RuntimeTypeRegistry:
    """
    Closed list of concrete subtypes that may stand in for a base type.

    Variants keep declaration order; the first whose source class
    matches the value wins. A variant without a mapped source class is a
    configuration error, raised when resolution reaches it.
    """

    def __init__(self, base: type, subtypes: tuple[type, ...]):
        self.base = base
        self._subtypes = subtypes

    @property
    def subtypes(self) -> tuple[type, ...]:
        return self._subtypes

    def variants(self) -> tuple[RuntimeVariant, ...]:
        return tuple(RuntimeVariant(sub, _MAPPED_CLASSES.get(sub)) for sub in self._subtypes)

    def resolve(self, value: Any) -> Optional[type]:
        """
        Find the subtype to assemble ``value`` into.

        Returns:
            The first declared subtype whose mapped source class matches
            the value, or None if no variant applies.

        Raises:
            ConfigurationError: A variant reached during the scan has no
                mapped source class.
        """
        for variant in self.variants():
            if variant.source is None:
                raise ConfigurationError(
                    f"Runtime type subclass <{variant.target.__name__}> of "
                    f"<{self.base.__name__}> should be declared with @mapped_class"
                )
            if isinstance(value, variant.source):
                return variant.target
        return None

    def __repr__(self) -> str:
        names = ", ".join(sub.__name__ for sub in self._subtypes)
        return f"RuntimeTypeRegistry({self.base.__name__}: [{names}])"


def convertible(cls: T) -> T:
    """Mark ``cls`` as producible by recursively assembling a mismatched value."""
    _CONVERTIBLE.add(cls)
    return cls


def mapped_class(source_cls: type) -> Callable[[T], T]:
    """Declare the source class a polymorphic target subtype corresponds to."""

    def decorator(cls: T) -> T:
        _MAPPED_CLASSES[cls] = source_cls
        return cls

    return decorator


def runtime_type(base: type, *subtypes: type) -> RuntimeTypeRegistry:
    """
    Declare the concrete subtypes ``base`` may resolve to.

    Call after the subtypes are defined. Subtypes are checked against
    their mapped source classes in the order given here.
    """
    if not subtypes:
        raise ConfigurationError(f"Runtime type <{base.__name__}> declares no subtypes")
    registry = RuntimeTypeRegistry(base, tuple(subtypes))
    _RUNTIME_TYPES[base] = registry
    logger.debug(f"Declared {registry!r}")
    return registry


def is_convertible(cls: type) -> bool:
    return cls in _CONVERTIBLE


def get_mapped_class(cls: type) -> Optional[type]:
    return _MAPPED_CLASSES.get(cls)


def get_runtime_type(cls: type) -> Optional[RuntimeTypeRegistry]:
    return _RUNTIME_TYPES.get(cls)
