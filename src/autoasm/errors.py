"""
Exception taxonomy for auto-assembler.

Every failure is fatal for the call that raised it: the engine is a
deterministic transformer, so nothing here is retried or downgraded to a
warning. Errors carry the offending types and property name so the
message alone is enough to find the wiring mistake.
"""

from typing import Any, Optional


def _type_name(tp: Any) -> str:
    return getattr(tp, "__name__", repr(tp))


class AssemblerError(Exception):
    """Base class for all auto-assembler errors."""


class ConfigurationError(AssemblerError):
    """
    A declared directive or marker is structurally invalid.

    Raised lazily, at the first use of the offending type, e.g. a
    runtime-type subtype that does not declare its mapped source class.
    """


class ConstructionError(AssemblerError):
    """A type could not be instantiated without arguments."""

    def __init__(self, cls: type, reason: str):
        self.cls = cls
        super().__init__(f"Cannot construct <{_type_name(cls)}> without arguments: {reason}")


class TypeMismatchError(AssemblerError, TypeError):
    """
    No conversion rule could turn a value into the required type.

    Attributes:
        source_type: Runtime type of the value being converted
        target_type: Type the value had to become
        property_name: Property being populated, when known
    """

    def __init__(
        self,
        source_type: type,
        target_type: type,
        property_name: Optional[str] = None,
        detail: Optional[str] = None,
    ):
        self.source_type = source_type
        self.target_type = target_type
        self.property_name = property_name
        self.detail = detail
        super().__init__(self._format())

    def _format(self) -> str:
        message = (
            f"Type mismatch and cannot convert: {_type_name(self.source_type)}"
            f" to {_type_name(self.target_type)}"
        )
        if self.property_name:
            message += f" (property '{self.property_name}')"
        if self.detail:
            message += f": {self.detail}"
        return message

    def with_property(self, property_name: str) -> "TypeMismatchError":
        """Return a copy of this error naming the property."""
        return TypeMismatchError(self.source_type, self.target_type, property_name, self.detail)


class PropertyAccessError(AssemblerError, AttributeError):
    """Reading or writing a property through its accessor failed."""

    def __init__(self, owner_type: type, property_name: str, reason: str):
        self.owner_type = owner_type
        self.property_name = property_name
        super().__init__(
            f"Cannot access property '{property_name}' of <{_type_name(owner_type)}>: {reason}"
        )


__all__ = [
    "AssemblerError",
    "ConfigurationError",
    "ConstructionError",
    "TypeMismatchError",
    "PropertyAccessError",
]
