"""
AutoAssembler - transforms objects between a source shape and a target shape.

``assemble`` builds a target instance from a source object by matching
property names, honouring field mapping directives and converting values
whose types differ. ``disassemble`` performs the inverse transformation.
"""

import functools
import logging
import os
from collections.abc import Iterable, Mapping
from datetime import date, time
from decimal import Decimal
from enum import Enum
from typing import Any, Optional, TypeVar
from uuid import UUID

from .constants import RESERVED_PROPERTY_NAMES
from .converters import ConverterFunc, ConverterRegistry, default_registry
from .errors import TypeMismatchError
from .handlers import (
    FieldMappingAssembleReadHandler,
    FieldMappingDisassembleReadHandler,
    PropertyLocator,
    ReadHandler,
    ReadHandlerChain,
    ReflectionReadHandler,
)
from .introspection import (
    list_readable_properties,
    list_writable_properties,
    new_instance,
    read_property,
    set_property,
)
from .markers import FieldMapping, get_runtime_type, is_convertible

logger = logging.getLogger(__name__)

S = TypeVar("S")
T = TypeVar("T")

# Failures a converter may raise for a value it cannot handle
_CONVERTER_ERRORS = (ValueError, TypeError, ArithmeticError)

_SCALAR_TYPES = (str, int, float, bool, Decimal, date, time, UUID, Enum, os.PathLike)


class AutoAssembler:
    """
    Transforms objects between two type shapes without per-field code.

    Target properties are populated from source properties of the same
    name. Values whose type differs from the property type are converted
    by, in order: a registered converter, recursive assembly into a
    ``@convertible`` type, or dispatch to a subtype declared with
    ``runtime_type``. Anything else is a TypeMismatchError.

    Example:
        assembler = AutoAssembler()
        dto = assembler.assemble(order, OrderDTO)
        order_again = assembler.disassemble(dto, Order)

    The assembler holds no per-call state; one instance may serve any
    number of threads.

    Attributes:
        converters: Registry consulted for type mismatches
        assemble_read_handler: Chain resolving values when assembling
        disassemble_read_handler: Chain resolving values when disassembling
        property_locator: Finds write targets when disassembling
    """

    def __init__(self, converters: Optional[ConverterRegistry] = None):
        """
        Initialize the assembler.

        Args:
            converters: Optional converter registry. If None, uses the
                        built-in converters from default_registry().
        """
        self.converters = converters if converters is not None else default_registry()
        # Declared directives win over plain name matching
        self.assemble_read_handler: ReadHandler = ReadHandlerChain(
            FieldMappingAssembleReadHandler(),
            ReflectionReadHandler(),
        )
        # Directives mostly affect where values are written on the way back
        self.disassemble_read_handler: ReadHandler = ReadHandlerChain(
            ReflectionReadHandler(),
            FieldMappingDisassembleReadHandler(),
        )
        self.property_locator = PropertyLocator()

    def assemble(self, source: Any, target_cls: type[T]) -> T:
        """
        Build a ``target_cls`` instance populated from ``source``.

        1. ``target_cls`` must be constructible without arguments
        2. Every writable property of ``target_cls`` is resolved from the
           source; absent (or None) values leave the property untouched
        3. Resolved values are converted to the property type

        Args:
            source: Source object, or a mapping read by key
            target_cls: Class to instantiate

        Returns:
            The populated target, never None

        Raises:
            ConstructionError: ``target_cls`` cannot be instantiated
            TypeMismatchError: A value could not be converted
            PropertyAccessError: A property write failed
        """
        target = new_instance(target_cls)

        for descriptor in list_writable_properties(target_cls):
            value = self.assemble_read_handler.read(descriptor.directive, source, descriptor.name)
            if value is None:
                continue
            try:
                converted = self.convert_on_assembling(value, descriptor.property_type)
            except TypeMismatchError as e:
                if e.property_name is not None:
                    raise
                raise e.with_property(descriptor.name) from e
            logger.debug(f"Assembling {target_cls.__name__}.{descriptor.name}")
            set_property(descriptor, target, converted)

        return target

    def disassemble(self, target: Any, source_cls: type[S]) -> S:
        """
        Rebuild a ``source_cls`` instance from an assembled ``target``.

        Every readable property of the target's runtime type (every public
        string key, for a mapping target) is resolved and written to the
        property the locator finds on the new source, which may belong to
        a nested object for directives with a source path. Properties with
        no counterpart are dropped.

        Polymorphic properties are not resolved in this direction: a
        value is only disassembled recursively when the target-side type
        is ``@convertible``.

        Args:
            target: Assembled object to read from, or a mapping read by key
            source_cls: Class to instantiate

        Returns:
            The reconstructed source object

        Raises:
            ConstructionError: ``source_cls`` cannot be instantiated
            TypeMismatchError: A value could not be converted
            PropertyAccessError: A property write failed
        """
        source = new_instance(source_cls)

        for name, directive, property_type in _readable_entries(target):
            value = self.disassemble_read_handler.read(directive, target, name)
            if value is None:
                continue
            location = self.property_locator.locate(source, name, directive)
            if location is None:
                continue
            try:
                converted = self.convert_on_disassembling(value, property_type, location.property_type)
            except TypeMismatchError as e:
                if e.property_name is not None:
                    raise
                raise e.with_property(name) from e
            logger.debug(
                f"Disassembling {type(target).__name__}.{name} into "
                f"{type(location.owner).__name__}.{location.descriptor.name}"
            )
            location.write(converted)

        return source

    def assemble_all(self, sources: Iterable[Any], target_cls: type[T]) -> list[T]:
        """Assemble each source into ``target_cls``."""
        return [self.assemble(source, target_cls) for source in sources]

    def disassemble_all(self, targets: Iterable[Any], source_cls: type[S]) -> list[S]:
        """Disassemble each target into ``source_cls``."""
        return [self.disassemble(target, source_cls) for target in targets]

    def convert_on_assembling(self, value: Any, target_type: type) -> Any:
        """
        Convert a resolved source value to a target property type.

        Args:
            value: Non-None value read from the source
            target_type: Property type on the target

        Returns:
            The value, converted or recursively assembled
        """
        if _is_assignable(value, target_type):
            return value

        converter = self.converters.find(type(value), target_type)
        if converter is not None:
            return self._apply(converter, value, target_type)

        if is_convertible(target_type):
            return self.assemble(value, target_type)

        registry = get_runtime_type(target_type)
        if registry is not None:
            subtype = registry.resolve(value)
            if subtype is not None:
                logger.debug(f"Runtime type {target_type.__name__} resolved to {subtype.__name__}")
                return self.assemble(value, subtype)

        raise TypeMismatchError(type(value), target_type)

    def convert_on_disassembling(self, value: Any, target_property_type: type, expected_type: type) -> Any:
        """
        Convert a target value back to a source property type.

        Args:
            value: Non-None value read from the target
            target_property_type: Declared type of the target property
            expected_type: Type of the located source property

        Returns:
            The value, converted or recursively disassembled
        """
        if _is_assignable(value, expected_type):
            return value

        converter = self.converters.find(type(value), expected_type)
        if converter is not None:
            return self._apply(converter, value, expected_type)

        if is_convertible(target_property_type):
            return self.disassemble(value, expected_type)

        raise TypeMismatchError(type(value), expected_type)

    def _apply(self, converter: ConverterFunc, value: Any, target_type: type) -> Any:
        try:
            return converter(value)
        except _CONVERTER_ERRORS as e:
            raise TypeMismatchError(type(value), target_type, detail=str(e)) from e


def _is_assignable(value: Any, target_type: type) -> bool:
    # bool subclasses int, but a flag is not a number
    if isinstance(value, bool) and target_type is not bool and issubclass(target_type, int):
        return False
    return isinstance(value, target_type)


def _readable_entries(target: Any) -> list[tuple[str, Optional[FieldMapping], type]]:
    """Name, directive and declared type of each value to disassemble."""
    if isinstance(target, Mapping):
        return [
            (key, None, object)
            for key in target
            if isinstance(key, str) and not key.startswith("_") and key not in RESERVED_PROPERTY_NAMES
        ]
    return [
        (descriptor.name, descriptor.directive, descriptor.property_type)
        for descriptor in list_readable_properties(type(target))
    ]


@functools.lru_cache(maxsize=None)
def get_default() -> AutoAssembler:
    """Return the shared AutoAssembler using the built-in converters."""
    return AutoAssembler()


def to_dict(obj: Any) -> Any:
    """
    Recursively dump the readable properties of ``obj``.

    Scalars are returned unchanged; mappings and sequences are dumped
    element-wise. Useful for serializing assembled objects to JSON.
    """
    if obj is None or isinstance(obj, _SCALAR_TYPES):
        return obj
    if isinstance(obj, Mapping):
        return {key: to_dict(value) for key, value in obj.items()}
    if isinstance(obj, (list, tuple, set, frozenset)):
        return [to_dict(item) for item in obj]
    return {
        descriptor.name: to_dict(read_property(descriptor, obj))
        for descriptor in list_readable_properties(type(obj))
    }
