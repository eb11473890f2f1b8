"""
Read handlers honouring FieldMapping directives.
"""

from typing import Any, Optional

from ..markers import FieldMapping
from .base import ReadHandler
from .reflection import read_path


class FieldMappingAssembleReadHandler(ReadHandler):
    """
    Resolves a target property from its directive when assembling.

    A constant always wins over the source content. A source path is
    walked on the source object; if any hop is absent the property falls
    through to the next handler.
    """

    def read(self, field_mapping: Optional[FieldMapping], owner: Any, property_name: str) -> Any:
        if field_mapping is None:
            return None
        if field_mapping.is_constant:
            return field_mapping.value
        if field_mapping.source_path:
            return read_path(owner, field_mapping.source_path)
        return None


class FieldMappingDisassembleReadHandler(ReadHandler):
    """
    Supplies the declared constant when the target property itself is unset.

    Directives with a source path only change where the value is written
    on disassembly, which is the locator's job.
    """

    def read(self, field_mapping: Optional[FieldMapping], owner: Any, property_name: str) -> Any:
        if field_mapping is not None and field_mapping.is_constant:
            return field_mapping.value
        return None
