"""Projection of property trees onto OpenAPI schema objects."""

from __future__ import annotations

from typing import Any

from quickdoc.schema.builder import Builder
from quickdoc.schema.config import SchemaOptions
from quickdoc.schema.property import PropType, Property


def to_openapi_schema(prop: Property | None) -> dict[str, Any]:
    """Convert a property tree into an OpenAPI schema object.

    Args:
        prop: Root property, or None for a value that carried no information.

    Returns:
        Schema object as a plain dict. An empty dict accepts any value.
    """
    if prop is None:
        return {}

    schema: dict[str, Any] = {"type": prop.type.value}
    if prop.name:
        schema["title"] = prop.name
    if prop.description:
        schema["description"] = prop.description

    if prop.type is PropType.ARRAY:
        schema["items"] = to_openapi_schema(prop.properties[0] if prop.properties else None)
    elif prop.type is PropType.OBJECT:
        schema["properties"] = {
            child.name: to_openapi_schema(child) for child in prop.properties if child.name
        }
    elif prop.value is not None:
        schema["example"] = parse_example(prop.type, prop.value)
    return schema


def parse_example(kind: PropType, text: str) -> Any:
    """Parse example text back into a JSON value of the given kind.

    Text that does not parse is returned unchanged.
    """
    if kind is PropType.BOOLEAN:
        if text in ("true", "false"):
            return text == "true"
        return text
    try:
        if kind is PropType.INTEGER:
            return int(text)
        if kind is PropType.NUMBER:
            return float(text)
    except ValueError:
        return text
    return text


def schema_for(obj: Any, options: SchemaOptions | None = None) -> dict[str, Any]:
    """Build the OpenAPI schema of a value in one call.

    Unless options are given, absent composites are skipped and serialization
    aliases name the fields.
    """
    if options is None:
        options = SchemaOptions(explore_absent_composites=False, prefer_serialization_tag_name=True)
    return to_openapi_schema(Builder(options).get_schema(obj))
