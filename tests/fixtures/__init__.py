"""Model classes for auto-assembler tests."""

from .models import (
    Address,
    AddressDTO,
    BaseDTO,
    BasicOrder,
    ConstDTO,
    Customer,
    CustomerDTO,
    Detail,
    Item,
    ItemDTO,
    Node,
    NodeDTO,
    OrderDTO,
    create_basic_order,
)
from .runtime_types import (
    ConditionOrder,
    ConditionOrderDTO,
    ExternalProperties,
    ExternalPropertiesDTO,
    FirstExternalProperties,
    FirstExternalPropertiesDTO,
    SecondExternalProperties,
    SecondExternalPropertiesDTO,
    UnregisteredExternalProperties,
)

__all__ = [
    "Address",
    "AddressDTO",
    "BaseDTO",
    "BasicOrder",
    "ConstDTO",
    "Customer",
    "CustomerDTO",
    "Detail",
    "Item",
    "ItemDTO",
    "Node",
    "NodeDTO",
    "OrderDTO",
    "create_basic_order",
    "ConditionOrder",
    "ConditionOrderDTO",
    "ExternalProperties",
    "ExternalPropertiesDTO",
    "FirstExternalProperties",
    "FirstExternalPropertiesDTO",
    "SecondExternalProperties",
    "SecondExternalPropertiesDTO",
    "UnregisteredExternalProperties",
]
