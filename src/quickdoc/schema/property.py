"""Property tree: the abstract shape of an inspected value."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class PropType(StrEnum):
    """Kinds a property node can take.

    Values double as the schema primitive type names.
    """

    STRING = "string"
    INTEGER = "integer"
    NUMBER = "number"
    BOOLEAN = "boolean"
    OBJECT = "object"
    ARRAY = "array"


SCALAR_TYPES = frozenset({PropType.STRING, PropType.INTEGER, PropType.NUMBER, PropType.BOOLEAN})


@dataclass
class Property:
    """A node of the property tree.

    Objects hold one child per field in declaration order. Arrays hold at most
    one child describing the element shape. Scalars never hold children.
    """

    type: PropType
    name: str | None = None
    description: str | None = None
    value: str | None = None  # example, rendered as text
    properties: list[Property] = field(default_factory=list)

    @property
    def is_scalar(self) -> bool:
        return self.type in SCALAR_TYPES

    def with_name(self, name: str) -> Property:
        """Return a copy of this property carrying ``name``."""
        return dataclasses.replace(self, name=name)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-friendly dict, omitting unset attributes."""
        data: dict[str, Any] = {"type": self.type.value}
        if self.name is not None:
            data["name"] = self.name
        if self.description:
            data["description"] = self.description
        if self.value is not None:
            data["value"] = self.value
        if self.properties:
            data["properties"] = [child.to_dict() for child in self.properties]
        return data
