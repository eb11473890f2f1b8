"""
Tests for property introspection and accessor helpers.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date
from typing import Annotated, Any, ClassVar, Optional, Protocol, TypedDict, Union, runtime_checkable

import pytest

from autoasm import FieldMapping
from autoasm.constants import FIELD_MAPPING_KEY
from autoasm.errors import ConfigurationError, ConstructionError, PropertyAccessError
from autoasm.introspection import (
    find_property,
    list_properties,
    list_readable_properties,
    list_writable_properties,
    new_instance,
    resolve_property_type,
    set_property,
)

from .fixtures import BasicOrder, OrderDTO


class Named(Protocol):
    name: str


@runtime_checkable
class Closeable(Protocol):
    def close(self) -> None: ...


class Point(TypedDict):
    x: int
    y: int


class Untyped:
    @property
    def mystery(self):
        return 1


class Unresolvable:
    missing: "DoesNotExist"  # noqa: F821


@dataclass
class WithClassVar:
    registry: ClassVar[dict] = {}
    name: Optional[str] = None


class Abstract(ABC):
    @abstractmethod
    def run(self) -> None: ...


@dataclass
class Plain:
    value: Optional[int] = None


@dataclass(frozen=True)
class FrozenDTO:
    value: Optional[int] = None


@dataclass
class WithMetadata:
    code: Optional[str] = field(default=None, metadata={FIELD_MAPPING_KEY: FieldMapping("X")})


@dataclass
class WithBadMetadata:
    code: Optional[str] = field(default=None, metadata={FIELD_MAPPING_KEY: "X"})


class TestListProperties:
    """Tests for list_properties ordering and contents."""

    def test_base_class_properties_come_first(self):
        """Inherited properties should precede the subclass's own."""
        names = [d.name for d in list_properties(OrderDTO)]

        assert names == ["id", "name", "setter_only", "null_ignored", "order_date"]

    def test_ordering_is_idempotent(self):
        """Repeated introspection should yield the same descriptors."""
        first = list_properties(BasicOrder)
        list_properties.cache_clear()
        second = list_properties(BasicOrder)

        assert first == second

    def test_accessor_properties(self):
        """Property objects should report their getter and setter."""
        setter_only = find_property(BasicOrder, "setter_only")
        null_ignored = find_property(BasicOrder, "null_ignored")

        assert setter_only.property_type is str
        assert setter_only.writable and not setter_only.readable
        assert null_ignored.property_type is date
        assert null_ignored.readable and not null_ignored.writable
        assert null_ignored.is_accessor

    def test_private_and_reserved_names_excluded(self):
        """Private attributes and the class descriptor should never be listed."""
        names = {d.name for d in list_properties(BasicOrder)}

        assert "_setter_only" not in names
        assert "__class__" not in names
        assert "class" not in names

    def test_readable_and_writable_filters(self):
        """Readable/writable filters should respect accessor capabilities."""
        readable = {d.name for d in list_readable_properties(BasicOrder)}
        writable = {d.name for d in list_writable_properties(BasicOrder)}

        assert "setter_only" not in readable
        assert "null_ignored" not in writable
        assert "id" in readable and "id" in writable

    def test_class_vars_skipped(self):
        """ClassVar annotations are not instance properties."""
        assert [d.name for d in list_properties(WithClassVar)] == ["name"]

    def test_annotated_directive(self):
        """FieldMapping in Annotated metadata should become the directive."""
        from .fixtures import ConstDTO

        descriptor = find_property(ConstDTO, "const_int")

        assert descriptor.directive == FieldMapping("342")
        assert descriptor.property_type is int

    def test_dataclass_metadata_directive(self):
        """FieldMapping in dataclass field metadata should become the directive."""
        assert find_property(WithMetadata, "code").directive == FieldMapping("X")

    def test_invalid_metadata_directive(self):
        """Metadata under the directive key must be a FieldMapping."""
        with pytest.raises(ConfigurationError, match="expected a FieldMapping"):
            list_properties(WithBadMetadata)

    def test_untyped_accessor_is_configuration_error(self):
        """A property with no declared type anywhere should be rejected."""
        with pytest.raises(ConfigurationError, match="mystery"):
            list_properties(Untyped)

    def test_unresolvable_annotation_is_configuration_error(self):
        """An annotation naming an undefined type should be rejected."""
        with pytest.raises(ConfigurationError, match="Unresolvable"):
            list_properties(Unresolvable)

    def test_declaring_class(self):
        """Descriptors should name the class that declares them."""
        from .fixtures import BaseDTO

        assert find_property(OrderDTO, "id").owner is BaseDTO
        assert find_property(OrderDTO, "name").owner is OrderDTO


class TestResolvePropertyType:
    """Tests for reducing annotations to runtime classes."""

    @pytest.mark.parametrize(
        "hint, expected",
        [
            (int, int),
            (Optional[int], int),
            (int | None, int),
            (Annotated[Optional[str], FieldMapping("a")], str),
            (list[int], list),
            (dict[str, Any], dict),
            (Any, object),
            (Union[int, str], object),
            (Named, object),
            (Optional[Named], object),
            (Closeable, Closeable),
            (Point, dict),
        ],
    )
    def test_resolution(self, hint, expected):
        assert resolve_property_type(hint) is expected


class TestConstruction:
    """Tests for new_instance."""

    def test_constructs_with_defaults(self):
        assert new_instance(OrderDTO) == OrderDTO()

    def test_abstract_class_fails(self):
        """Abstract classes cannot be instantiated."""
        with pytest.raises(ConstructionError, match="Abstract"):
            new_instance(Abstract)


class TestSetProperty:
    """Tests for set_property."""

    def test_sets_value(self):
        target = Plain()
        set_property(find_property(Plain, "value"), target, 3)

        assert target.value == 3

    def test_rejects_wrong_type(self):
        """A value not matching the property type should be refused."""
        with pytest.raises(PropertyAccessError, match="not a int"):
            set_property(find_property(Plain, "value"), Plain(), "3")

    def test_wraps_setter_failure(self):
        """A frozen dataclass rejecting assignment should raise PropertyAccessError."""
        with pytest.raises(PropertyAccessError, match="value"):
            set_property(find_property(FrozenDTO, "value"), FrozenDTO(), 3)

    def test_read_only_property(self):
        """Writing a getter-only property should raise PropertyAccessError."""
        with pytest.raises(PropertyAccessError, match="no setter"):
            set_property(find_property(BasicOrder, "null_ignored"), BasicOrder(), date.today())
