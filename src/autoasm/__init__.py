"""
Auto-assembler.

Transform objects between an internal domain model and an external
representation without hand-written per-field mapping code.

Target properties are populated from source properties of the same
name; directives, converters and markers cover the cases where the two
shapes differ.

Programmatic usage::

    from autoasm import AutoAssembler, FieldMapping, convertible

    @convertible
    @dataclass
    class AddressDTO:
        city: Optional[str] = None

    @dataclass
    class OrderDTO:
        id: Optional[int] = None
        channel: Annotated[Optional[str], FieldMapping("web")] = None
        address: Optional[AddressDTO] = None

    assembler = AutoAssembler()
    dto = assembler.assemble(order, OrderDTO)
    order_again = assembler.disassemble(dto, Order)

CLI usage::

    autoasm inspect shop.dto:OrderDTO
    autoasm assemble shop.dto:OrderDTO order.json
"""

__version__ = "0.1.0"

from .assembler import AutoAssembler, get_default, to_dict
from .converters import ConverterRegistry, default_registry
from .errors import (
    AssemblerError,
    ConfigurationError,
    ConstructionError,
    PropertyAccessError,
    TypeMismatchError,
)
from .markers import FieldMapping, convertible, mapped_class, runtime_type

__all__ = [
    "AutoAssembler",
    "get_default",
    "to_dict",
    "ConverterRegistry",
    "default_registry",
    "FieldMapping",
    "convertible",
    "mapped_class",
    "runtime_type",
    "AssemblerError",
    "ConfigurationError",
    "ConstructionError",
    "PropertyAccessError",
    "TypeMismatchError",
    "__version__",
]
