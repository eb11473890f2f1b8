"""
Constants for auto-assembler.

Centralizes magic strings to improve maintainability and type safety.
"""

# Every object exposes its type under this name; it is never user data
RESERVED_PROPERTY_NAMES = frozenset({"__class__", "class"})

# Key under which a FieldMapping is stored in dataclasses.field(metadata=...)
FIELD_MAPPING_KEY = "autoasm.field_mapping"

# Separator for alternate source paths such as "detail.price"
PATH_SEPARATOR = "."

# Accepted spellings for string -> bool conversion
TRUE_STRINGS = frozenset({"true", "yes", "y", "1", "on"})
FALSE_STRINGS = frozenset({"false", "no", "n", "0", "off"})

# Environment variable read by the CLI for its default log level
ENV_LOG_LEVEL = "AUTOASM_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"
