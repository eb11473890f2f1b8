"""
Property introspection, construction and accessor helpers.

A type's shape is the ordered set of its annotated attributes and
``property`` objects. Shapes are computed once per class and cached, so
repeated transformations never re-inspect a type.

Ordering is base classes first, then declaration order within each
class, which makes introspection deterministic for a given type.
"""

import dataclasses
import functools
import inspect
import logging
import types
from dataclasses import dataclass
from typing import (
    Annotated,
    Any,
    ClassVar,
    Optional,
    Union,
    get_args,
    get_origin,
    get_type_hints,
    is_typeddict,
)

from .constants import FIELD_MAPPING_KEY, RESERVED_PROPERTY_NAMES
from .errors import ConfigurationError, ConstructionError, PropertyAccessError
from .markers import FieldMapping

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PropertyDescriptor:
    """
    One named, typed property of a type shape.

    Attributes:
        name: Attribute name on instances
        owner: Class that declares the property
        type_hint: Annotation as written, including ``Annotated`` extras
        property_type: Runtime-checkable class derived from ``type_hint``
        readable: Whether the property can be read
        writable: Whether the property can be written
        directive: Field mapping declared on the property, if any
        is_accessor: Whether the property is a ``property`` object
    """

    name: str
    owner: type
    type_hint: Any
    property_type: type
    readable: bool
    writable: bool
    directive: Optional[FieldMapping] = None
    is_accessor: bool = False


def resolve_property_type(hint: Any) -> type:
    """
    Reduce an annotation to a class usable with ``isinstance``.

    ``Annotated[X, ...]`` and ``Optional[X]`` reduce to ``X``, generic
    aliases such as ``list[int]`` to their origin. Anything that cannot
    be checked at runtime (``Any``, unions of several types, type
    variables, literals, protocols not marked ``@runtime_checkable``)
    reduces to ``object``. A ``TypedDict`` reduces to ``dict``.
    """
    if hint is Any or hint is None:
        return object
    origin = get_origin(hint)
    if origin is Annotated:
        return resolve_property_type(get_args(hint)[0])
    if origin is Union or origin is types.UnionType:
        members = [arg for arg in get_args(hint) if arg is not type(None)]
        if len(members) == 1:
            return resolve_property_type(members[0])
        return object
    if origin is not None:
        return origin if isinstance(origin, type) else object
    supertype = getattr(hint, "__supertype__", None)
    if supertype is not None:
        return resolve_property_type(supertype)
    if isinstance(hint, type):
        if is_typeddict(hint):
            return dict
        if getattr(hint, "_is_protocol", False) and not getattr(hint, "_is_runtime_protocol", False):
            return object
        return hint
    return object


def _is_class_var(hint: Any) -> bool:
    return hint is ClassVar or get_origin(hint) is ClassVar


def _lookup_static(cls: type, name: str) -> Any:
    for klass in cls.__mro__:
        if name in vars(klass):
            return vars(klass)[name]
    return None


def _declaring_class(cls: type, name: str) -> type:
    for klass in cls.__mro__:
        if name in vars(klass) or name in inspect.get_annotations(klass):
            return klass
    return cls


def _directive_from_hint(hint: Any) -> Optional[FieldMapping]:
    if get_origin(hint) is Annotated:
        for extra in hint.__metadata__:
            if isinstance(extra, FieldMapping):
                return extra
    return None


def _dataclass_directives(cls: type) -> dict[str, FieldMapping]:
    if not dataclasses.is_dataclass(cls):
        return {}
    directives = {}
    for f in dataclasses.fields(cls):
        directive = f.metadata.get(FIELD_MAPPING_KEY)
        if directive is not None:
            if not isinstance(directive, FieldMapping):
                raise ConfigurationError(
                    f"Field '{f.name}' of <{cls.__name__}> carries {directive!r} "
                    f"under '{FIELD_MAPPING_KEY}', expected a FieldMapping"
                )
            directives[f.name] = directive
    return directives


def _ordered_names(cls: type) -> list[str]:
    names: dict[str, None] = {}
    for klass in reversed(cls.__mro__):
        if klass is object:
            continue
        for name in inspect.get_annotations(klass):
            names.setdefault(name, None)
        for name, attr in vars(klass).items():
            if isinstance(attr, property):
                names.setdefault(name, None)
    return [
        name
        for name in names
        if not name.startswith("_") and name not in RESERVED_PROPERTY_NAMES
    ]


def _accessor_hint(cls: type, name: str, prop: property) -> Any:
    try:
        if prop.fget is not None:
            hint = get_type_hints(prop.fget, include_extras=True).get("return")
            if hint is not None:
                return hint
        if prop.fset is not None:
            hints = get_type_hints(prop.fset, include_extras=True)
            params = [p for p in inspect.signature(prop.fset).parameters if p != "self"]
            if params and params[-1] in hints:
                return hints[params[-1]]
    except (NameError, TypeError) as e:
        raise ConfigurationError(
            f"Cannot resolve accessor annotations of property '{name}' on <{cls.__name__}>: {e}"
        ) from e
    return None


@functools.lru_cache(maxsize=None)
def list_properties(cls: type) -> tuple[PropertyDescriptor, ...]:
    """
    List every property of ``cls`` in a stable order.

    Raises:
        ConfigurationError: An annotation cannot be resolved, or an
            accessor property declares no type anywhere.
    """
    try:
        hints = get_type_hints(cls, include_extras=True)
    except (NameError, TypeError) as e:
        raise ConfigurationError(f"Cannot resolve annotations of <{cls.__name__}>: {e}") from e

    field_directives = _dataclass_directives(cls)
    descriptors = []
    for name in _ordered_names(cls):
        static = _lookup_static(cls, name)
        if isinstance(static, property):
            hint = hints.get(name)
            if hint is None:
                hint = _accessor_hint(cls, name, static)
            if hint is None:
                raise ConfigurationError(
                    f"Get declared type of property '{name}' from <{cls.__name__}> failed: "
                    f"neither an annotation nor its accessors declare one"
                )
            readable = static.fget is not None
            writable = static.fset is not None
        else:
            hint = hints.get(name)
            if hint is None or _is_class_var(hint):
                continue
            readable = writable = True

        descriptors.append(
            PropertyDescriptor(
                name=name,
                owner=_declaring_class(cls, name),
                type_hint=hint,
                property_type=resolve_property_type(hint),
                readable=readable,
                writable=writable,
                directive=_directive_from_hint(hint) or field_directives.get(name),
                is_accessor=isinstance(static, property),
            )
        )

    logger.debug(f"Introspected <{cls.__name__}>: {[d.name for d in descriptors]}")
    return tuple(descriptors)


@functools.lru_cache(maxsize=None)
def _properties_by_name(cls: type) -> dict[str, PropertyDescriptor]:
    return {descriptor.name: descriptor for descriptor in list_properties(cls)}


def find_property(cls: type, name: str) -> Optional[PropertyDescriptor]:
    """Look up a property of ``cls`` by name."""
    return _properties_by_name(cls).get(name)


def read_attribute(owner: Any, name: str) -> Any:
    """
    Read an instance attribute that the owner's type does not declare.

    Covers plain objects such as ``SimpleNamespace`` or classes that only
    assign attributes in ``__init__``. Private and reserved names, methods
    and other class-level attributes read as None.
    """
    if name.startswith("_") or name in RESERVED_PROPERTY_NAMES:
        return None
    static = _lookup_static(type(owner), name)
    # Slots are the only class-level attributes holding instance data
    if static is not None and not isinstance(static, types.MemberDescriptorType):
        return None
    return getattr(owner, name, None)


def list_writable_properties(cls: type) -> tuple[PropertyDescriptor, ...]:
    return tuple(d for d in list_properties(cls) if d.writable)


def list_readable_properties(cls: type) -> tuple[PropertyDescriptor, ...]:
    return tuple(d for d in list_properties(cls) if d.readable)


def new_instance(cls: type) -> Any:
    """
    Construct ``cls`` with no arguments.

    Raises:
        ConstructionError: ``cls`` is abstract, a protocol, or requires
            constructor arguments.
    """
    try:
        return cls()
    except TypeError as e:
        raise ConstructionError(cls, str(e)) from e


def read_property(descriptor: PropertyDescriptor, owner: Any) -> Any:
    """
    Read a property value, returning None for attributes never assigned.

    Raises:
        PropertyAccessError: The property has no getter, or its getter
            raised an ``AttributeError``.
    """
    if not descriptor.readable:
        raise PropertyAccessError(type(owner), descriptor.name, "property has no getter")
    if descriptor.is_accessor:
        try:
            return getattr(owner, descriptor.name)
        except AttributeError as e:
            raise PropertyAccessError(type(owner), descriptor.name, str(e)) from e
    return getattr(owner, descriptor.name, None)


def set_property(descriptor: PropertyDescriptor, owner: Any, value: Any) -> None:
    """
    Write a property value.

    Raises:
        PropertyAccessError: The property has no setter, the value does
            not match the property type, or the setter rejected it.
    """
    if not descriptor.writable:
        raise PropertyAccessError(type(owner), descriptor.name, "property has no setter")
    if value is not None and not isinstance(value, descriptor.property_type):
        raise PropertyAccessError(
            type(owner),
            descriptor.name,
            f"value of type {type(value).__name__} is not a {descriptor.property_type.__name__}",
        )
    try:
        setattr(owner, descriptor.name, value)
    except (AttributeError, TypeError) as e:
        raise PropertyAccessError(type(owner), descriptor.name, str(e)) from e
