"""
Property locator for the disassemble direction.

Given the source object being reconstructed, finds the owner and the
property that should receive a value read from the target. The owner is
not always the top-level object: a directive with a dotted source path
writes into a nested object, created on demand.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

from ..introspection import (
    PropertyDescriptor,
    find_property,
    new_instance,
    read_property,
    set_property,
)
from ..markers import FieldMapping

logger = logging.getLogger(__name__)


class ConstantHolder:
    """
    Synthetic owner for constant properties with no counterpart on the source.

    Starts out holding the declared literal; a located write replaces it
    and the holder is then discarded.
    """

    value: object

    def __init__(self, value: object = None):
        self.value = value


@dataclass(frozen=True)
class Location:
    """A resolved write target: the owning object and its property."""

    owner: Any
    descriptor: PropertyDescriptor

    @property
    def property_type(self) -> type:
        return self.descriptor.property_type

    @property
    def is_synthetic(self) -> bool:
        return isinstance(self.owner, ConstantHolder)

    def write(self, value: Any) -> None:
        set_property(self.descriptor, self.owner, value)


class PropertyLocator:
    """
    Resolves where on a reconstructed source object a value belongs.

    Resolution order:
    1. A directive with a source path walks that path, creating unset
       intermediate owners with their no-argument constructor.
    2. A writable property of the same name on the owner.
    3. For a constant directive, a synthetic ConstantHolder.
    Anything else is absent and the value is dropped.
    """

    def locate(
        self,
        owner: Any,
        property_name: str,
        field_mapping: Optional[FieldMapping],
    ) -> Optional[Location]:
        if field_mapping is not None and field_mapping.source_path:
            return self._locate_path(owner, field_mapping.source_path)

        descriptor = find_property(type(owner), property_name)
        if descriptor is not None and descriptor.writable:
            return Location(owner, descriptor)

        if field_mapping is not None and field_mapping.is_constant:
            holder = ConstantHolder(field_mapping.value)
            return Location(holder, find_property(ConstantHolder, "value"))

        logger.debug(f"No property '{property_name}' on <{type(owner).__name__}>, value dropped")
        return None

    def _locate_path(self, owner: Any, path: tuple[str, ...]) -> Optional[Location]:
        # Resolve every hop before creating anything, so an unmatched path
        # leaves the owner untouched
        hops: list[tuple[PropertyDescriptor, Any]] = []
        current, current_type = owner, type(owner)
        for hop in path[:-1]:
            descriptor = find_property(current_type, hop)
            if descriptor is None:
                return None
            nested = None
            if current is not None and descriptor.readable:
                nested = read_property(descriptor, current)
            if nested is None and not descriptor.writable:
                return None
            hops.append((descriptor, nested))
            current = nested
            current_type = type(nested) if nested is not None else descriptor.property_type

        leaf = find_property(current_type, path[-1])
        if leaf is None or not leaf.writable:
            return None

        current = owner
        for descriptor, nested in hops:
            if nested is None:
                nested = new_instance(descriptor.property_type)
                set_property(descriptor, current, nested)
                logger.debug(
                    f"Created <{type(nested).__name__}> for '{descriptor.name}' on <{type(current).__name__}>"
                )
            current = nested
        return Location(current, leaf)
