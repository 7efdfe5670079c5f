"""Classification of Python annotations into type descriptors.

The introspector never interrogates raw annotations itself. Every type it meets
goes through ``describe``, which folds the many spellings Python offers
(``Optional[X]``, ``X | None``, ``list[X]``, ``Sequence[X]``, dataclasses,
pydantic models, ...) into one closed set of categories.
"""

from __future__ import annotations

import collections.abc
import dataclasses
import types
import typing
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum, StrEnum
from functools import lru_cache
from typing import Any

from pydantic import BaseModel

from quickdoc.schema.errors import SchemaError
from quickdoc.schema.property import PropType

_NONE_TYPE = type(None)

_SEQUENCE_ABCS = (
    collections.abc.Sequence,
    collections.abc.MutableSequence,
    collections.abc.Set,
    collections.abc.MutableSet,
    collections.abc.Collection,
    collections.abc.Iterable,
)


class TypeCategory(StrEnum):
    """Closed set of shapes the introspector knows how to walk."""

    INDIRECTION = "indirection"
    SCALAR = "scalar"
    COMPOSITE = "composite"
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class FieldDescriptor:
    """A declared field of a composite type."""

    index: int
    name: str
    annotation: Any
    tag: str | None = None


@dataclass(frozen=True)
class TypeDescriptor:
    """Description of one annotation.

    Attributes:
        category: Which walking rule applies.
        annotation: The annotation that was described.
        kind: Property kind for scalars.
        target: Wrapped type for indirections; None when the concrete type
            can only be known from a runtime value.
        element: Element annotation for sequences.
        type_id: Stable identity of a composite type.
        fields: Declared fields of a composite type, in declaration order.
    """

    category: TypeCategory
    annotation: Any
    kind: PropType | None = None
    target: Any = None
    element: Any = None
    type_id: str | None = None
    fields: tuple[FieldDescriptor, ...] = ()


def describe(annotation: Any) -> TypeDescriptor:
    """Classify an annotation.

    Args:
        annotation: A class or typing construct.

    Returns:
        TypeDescriptor for the annotation.

    Raises:
        SchemaError: If a composite's annotations cannot be resolved.
    """
    if annotation is Any:
        return TypeDescriptor(TypeCategory.INDIRECTION, annotation)

    supertype = getattr(annotation, "__supertype__", None)
    if supertype is not None:
        # typing.NewType
        return describe(supertype)

    origin = typing.get_origin(annotation)
    args = typing.get_args(annotation)

    if origin is typing.Annotated:
        return describe(args[0])
    if origin is typing.Union or origin is types.UnionType:
        members = [arg for arg in args if arg is not _NONE_TYPE]
        target = members[0] if len(members) == 1 else None
        return TypeDescriptor(TypeCategory.INDIRECTION, annotation, target=target)
    if origin is typing.Literal:
        kind = _literal_kind(args)
        if kind is None:
            return TypeDescriptor(TypeCategory.UNKNOWN, annotation)
        return TypeDescriptor(TypeCategory.SCALAR, annotation, kind=kind)

    base = origin if origin is not None else annotation
    if not isinstance(base, type):
        return TypeDescriptor(TypeCategory.UNKNOWN, annotation)

    kind = scalar_kind(base)
    if kind is not None:
        return TypeDescriptor(TypeCategory.SCALAR, annotation, kind=kind)

    if is_composite(base):
        return TypeDescriptor(
            TypeCategory.COMPOSITE,
            annotation,
            type_id=type_id(base),
            fields=composite_fields(base),
        )

    if issubclass(base, (bytes, bytearray, memoryview)):
        return TypeDescriptor(TypeCategory.UNKNOWN, annotation)
    if issubclass(base, collections.abc.Mapping):
        return TypeDescriptor(TypeCategory.MAPPING, annotation)
    if issubclass(base, _SEQUENCE_ABCS):
        return TypeDescriptor(
            TypeCategory.SEQUENCE, annotation, element=_element_annotation(args)
        )

    return TypeDescriptor(TypeCategory.UNKNOWN, annotation)


def scalar_kind(cls: type) -> PropType | None:
    """Return the scalar kind of a class, or None if it is not scalar."""
    # bool before int: bool subclasses int
    if issubclass(cls, bool):
        return PropType.BOOLEAN
    if issubclass(cls, int):
        return PropType.INTEGER
    if issubclass(cls, (float, Decimal)):
        return PropType.NUMBER
    if issubclass(cls, str):
        return PropType.STRING
    if issubclass(cls, Enum):
        kinds = {scalar_kind(type(member.value)) for member in cls}
        if len(kinds) == 1:
            return kinds.pop()
    return None


def is_composite(cls: type) -> bool:
    """Whether instances of ``cls`` are walked field by field."""
    if dataclasses.is_dataclass(cls):
        return True
    if issubclass(cls, BaseModel):
        return True
    return issubclass(cls, tuple) and hasattr(cls, "_fields")


def type_id(cls: type) -> str:
    """Stable identity of a composite type."""
    return f"{cls.__module__}.{cls.__qualname__}"


@lru_cache(maxsize=512)
def composite_fields(cls: type) -> tuple[FieldDescriptor, ...]:
    """Return the declared fields of a composite class in declaration order.

    Cached per class; the result is immutable.
    """
    if issubclass(cls, BaseModel):
        return tuple(
            FieldDescriptor(
                index=index,
                name=name,
                annotation=info.annotation if info.annotation is not None else Any,
                tag=info.serialization_alias or info.alias,
            )
            for index, (name, info) in enumerate(cls.model_fields.items())
        )

    hints = _resolve_hints(cls)
    if dataclasses.is_dataclass(cls):
        return tuple(
            FieldDescriptor(
                index=index,
                name=f.name,
                annotation=hints.get(f.name, Any),
                tag=_metadata_tag(f.metadata),
            )
            for index, f in enumerate(dataclasses.fields(cls))
        )

    return tuple(
        FieldDescriptor(index=index, name=name, annotation=hints.get(name, Any))
        for index, name in enumerate(cls._fields)
    )


def _resolve_hints(cls: type) -> dict[str, Any]:
    try:
        return typing.get_type_hints(cls)
    except (NameError, TypeError) as exc:
        raise SchemaError(f"Cannot resolve annotations of {type_id(cls)}: {exc}") from exc


def _metadata_tag(metadata: collections.abc.Mapping[str, Any]) -> str | None:
    """Read a serialization name from dataclass field metadata.

    ``json`` follows the ``"name,option,..."`` convention; ``alias`` is taken
    verbatim.
    """
    json_tag = metadata.get("json")
    if isinstance(json_tag, str):
        name = json_tag.split(",")[0].strip()
        if name:
            return name
    alias = metadata.get("alias")
    if isinstance(alias, str) and alias:
        return alias
    return None


def _element_annotation(args: tuple[Any, ...]) -> Any:
    # fixed-length tuples are sampled by their first member
    return args[0] if args else Any


def _literal_kind(values: tuple[Any, ...]) -> PropType | None:
    kinds = {scalar_kind(type(value)) for value in values}
    if len(kinds) == 1:
        return kinds.pop()
    return None
