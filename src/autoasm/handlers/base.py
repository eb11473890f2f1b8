"""
Base read handler and the chain that combines handlers.

A read handler resolves the raw value for one property of the object
being transformed. Handlers return None for "absent"; a present value
of None is indistinguishable from absent and is skipped the same way.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

from ..markers import FieldMapping

logger = logging.getLogger(__name__)


class ReadHandler(ABC):
    """
    Abstract strategy resolving a property value from an owner object.

    Subclasses must implement read(), returning None when they cannot
    produce a value so that the next handler in a chain gets its turn.
    """

    @abstractmethod
    def read(self, field_mapping: Optional[FieldMapping], owner: Any, property_name: str) -> Any:
        """
        Resolve the value of ``property_name`` from ``owner``.

        Args:
            field_mapping: Directive declared on the property, if any
            owner: Object the value is read from
            property_name: Name of the property being populated

        Returns:
            The resolved value, or None if this handler has none
        """
        pass


class ReadHandlerChain(ReadHandler):
    """
    Ordered handlers tried in sequence until one produces a value.

    The chain holds no per-call state and may be shared across threads.
    """

    def __init__(self, *handlers: ReadHandler):
        self._handlers = tuple(handlers)

    @property
    def handlers(self) -> tuple[ReadHandler, ...]:
        return self._handlers

    def read(self, field_mapping: Optional[FieldMapping], owner: Any, property_name: str) -> Any:
        for handler in self._handlers:
            value = handler.read(field_mapping, owner, property_name)
            if value is not None:
                logger.debug(f"'{property_name}' resolved by {type(handler).__name__}")
                return value
        return None

    def __repr__(self) -> str:
        return f"ReadHandlerChain({', '.join(type(h).__name__ for h in self._handlers)})"
