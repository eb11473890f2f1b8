"""
Value resolution strategies used by the assembler.

Read handlers resolve a raw value for one property; a ReadHandlerChain
tries them in order. The PropertyLocator decides where a value is
written when disassembling.
"""

from .base import ReadHandler, ReadHandlerChain
from .field_mapping import FieldMappingAssembleReadHandler, FieldMappingDisassembleReadHandler
from .locator import ConstantHolder, Location, PropertyLocator
from .reflection import ReflectionReadHandler, read_by_name, read_path

__all__ = [
    "ReadHandler",
    "ReadHandlerChain",
    "ReflectionReadHandler",
    "FieldMappingAssembleReadHandler",
    "FieldMappingDisassembleReadHandler",
    "PropertyLocator",
    "Location",
    "ConstantHolder",
    "read_by_name",
    "read_path",
]
