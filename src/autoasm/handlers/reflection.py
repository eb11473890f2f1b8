"""
Same-name property reads.
"""

from collections.abc import Mapping
from typing import Any, Optional

from ..introspection import find_property, read_attribute, read_property
from ..markers import FieldMapping
from .base import ReadHandler


def read_by_name(owner: Any, property_name: str) -> Any:
    """
    Read ``property_name`` from ``owner`` without any directive.

    Mappings are read by key, so JSON-like records can act as sources.
    Objects are read through their introspected readable properties.
    Names the owner's type does not declare fall back to plain instance
    attributes, so undeclared objects such as ``SimpleNamespace`` work too.
    """
    if owner is None:
        return None
    if isinstance(owner, Mapping):
        return owner.get(property_name)
    descriptor = find_property(type(owner), property_name)
    if descriptor is None:
        return read_attribute(owner, property_name)
    if not descriptor.readable:
        return None
    return read_property(descriptor, owner)


def read_path(owner: Any, path: tuple[str, ...]) -> Any:
    """Walk a dotted path of same-name reads; absent if any hop is absent."""
    current = owner
    for hop in path:
        current = read_by_name(current, hop)
        if current is None:
            return None
    return current


class ReflectionReadHandler(ReadHandler):
    """Reads the property of the same name from the owner."""

    def read(self, field_mapping: Optional[FieldMapping], owner: Any, property_name: str) -> Any:
        return read_by_name(owner, property_name)
