"""Property tree generation from typed Python values."""

from quickdoc.schema.builder import MISSING, Builder, render_value
from quickdoc.schema.config import SchemaOptions, get_schema_options
from quickdoc.schema.descriptor import (
    FieldDescriptor,
    TypeCategory,
    TypeDescriptor,
    describe,
)
from quickdoc.schema.errors import MaxDepthExceededError, SchemaError, UnsupportedKindError
from quickdoc.schema.openapi import parse_example, schema_for, to_openapi_schema
from quickdoc.schema.property import PropType, Property

__all__ = [
    "MISSING",
    "Builder",
    "FieldDescriptor",
    "MaxDepthExceededError",
    "PropType",
    "Property",
    "SchemaError",
    "SchemaOptions",
    "TypeCategory",
    "TypeDescriptor",
    "UnsupportedKindError",
    "describe",
    "get_schema_options",
    "parse_example",
    "render_value",
    "schema_for",
    "to_openapi_schema",
]
