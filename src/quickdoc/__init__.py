"""quickdoc - schema generation from typed Python values."""

from quickdoc.logging_config import configure_logging
from quickdoc.schema import (
    MISSING,
    Builder,
    MaxDepthExceededError,
    PropType,
    Property,
    SchemaError,
    SchemaOptions,
    UnsupportedKindError,
    schema_for,
    to_openapi_schema,
)

__version__ = "0.1.0"

__all__ = [
    "MISSING",
    "Builder",
    "MaxDepthExceededError",
    "PropType",
    "Property",
    "SchemaError",
    "SchemaOptions",
    "UnsupportedKindError",
    "__version__",
    "configure_logging",
    "schema_for",
    "to_openapi_schema",
]
