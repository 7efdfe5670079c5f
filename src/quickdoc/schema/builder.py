"""Introspector: walks a type and optional value into a property tree.

Every composite type entered during a walk is recorded under its type identity
together with the field path (sequence of field indexes from the root) at
which it was entered. Re-entering a type at a path that extends one of its
recorded paths means the type contains itself along that lineage, so the walk
stops there with an empty object. Unrelated occurrences of the same type are
expanded in full.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Final, cast

from quickdoc.schema.config import SchemaOptions, get_schema_options
from quickdoc.schema.descriptor import FieldDescriptor, TypeCategory, TypeDescriptor, describe
from quickdoc.schema.errors import MaxDepthExceededError, UnsupportedKindError
from quickdoc.schema.property import PropType, Property

logger = logging.getLogger(__name__)

Path = tuple[int, ...]
VisitedPaths = dict[str, list[Path]]


class _Missing(Enum):
    MISSING = "MISSING"

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Final = _Missing.MISSING
"""Marks a value that is genuinely absent, as opposed to present but None."""


class Builder:
    """Builds property trees from typed values or bare types.

    A builder holds only its options, so one instance can serve any number of
    calls, including concurrent ones. Visitation state lives for a single
    top-level call.

    Example:
        >>> builder = Builder(SchemaOptions(explore_absent_composites=False))
        >>> builder.get_schema(42).value
        '42'
    """

    def __init__(self, options: SchemaOptions | None = None) -> None:
        """Initialize the builder.

        Args:
            options: Schema options. If None, options are loaded from the
                environment via get_schema_options().
        """
        self._options = options if options is not None else get_schema_options()

    @property
    def options(self) -> SchemaOptions:
        return self._options

    def get_schema(self, obj: Any) -> Property | None:
        """Build the property tree of a value.

        Args:
            obj: Any value. ``None`` carries no type information.

        Returns:
            The root property, or None when there is nothing to describe.

        Raises:
            UnsupportedKindError: If the value contains a mapping or a type
                with no property representation.
            MaxDepthExceededError: If nesting exceeds ``max_depth``.
        """
        if obj is None:
            return None
        logger.debug("Building schema for value of type %s", type(obj).__qualname__)
        return self.inspect(type(obj), obj)

    def get_type_schema(self, annotation: Any) -> Property | None:
        """Build the property tree of a type with no example values."""
        logger.debug("Building schema for type %r", annotation)
        return self.inspect(annotation)

    def inspect(self, annotation: Any, value: Any = MISSING) -> Property | None:
        """Inspect an annotation with an optional value.

        Args:
            annotation: The declared type to walk.
            value: The value to sample examples from. ``MISSING`` walks the
                type alone; ``None`` is a present but empty value.

        Returns:
            The root property, or None when the input yields no information.
        """
        visited: VisitedPaths = {}
        return self._inspect(annotation, value, visited, ())

    def _inspect(
        self, annotation: Any, value: Any, visited: VisitedPaths, path: Path
    ) -> Property | None:
        descriptor = describe(annotation)
        category = descriptor.category

        if category is TypeCategory.INDIRECTION:
            return self._inspect_indirection(descriptor, value, visited, path)
        if category is TypeCategory.SCALAR:
            rendered = None if _is_absent(value) else render_value(value)
            return Property(type=cast(PropType, descriptor.kind), value=rendered)
        if category is TypeCategory.COMPOSITE:
            return self._inspect_composite(descriptor, value, visited, path)
        if category is TypeCategory.SEQUENCE:
            return self._inspect_sequence(descriptor, value, visited, path)

        logger.warning("Unsupported %s type %r at path %s", category.value, annotation, list(path))
        raise UnsupportedKindError(annotation, category.value, path)

    def _inspect_indirection(
        self, descriptor: TypeDescriptor, value: Any, visited: VisitedPaths, path: Path
    ) -> Property | None:
        if descriptor.target is None:
            # Any or a multi-member union: only a value names the type
            if _is_absent(value):
                return None
            return self._inspect(type(value), value, visited, path)
        # an empty optional is an absent value of its target
        target_value = MISSING if value is None else value
        return self._inspect(descriptor.target, target_value, visited, path)

    def _inspect_composite(
        self, descriptor: TypeDescriptor, value: Any, visited: VisitedPaths, path: Path
    ) -> Property | None:
        if _is_absent(value) and not self._options.explore_absent_composites:
            return None

        type_id = cast(str, descriptor.type_id)
        recorded = visited.setdefault(type_id, [])
        for prior in recorded:
            if path[: len(prior)] == prior:
                logger.debug(
                    "Cycle on %s at path %s (entered at %s)",
                    type_id,
                    list(path),
                    list(prior),
                )
                return Property(type=PropType.OBJECT)

        max_depth = self._options.max_depth
        if max_depth is not None and len(path) > max_depth:
            raise MaxDepthExceededError(max_depth, path)

        recorded.append(path)
        properties: list[Property] = []
        for field in descriptor.fields:
            field_value = MISSING if _is_absent(value) else getattr(value, field.name, MISSING)
            prop = self._inspect(field.annotation, field_value, visited, path + (field.index,))
            if prop is None:
                continue
            properties.append(prop.with_name(self._field_name(field)))
        return Property(type=PropType.OBJECT, properties=properties)

    def _inspect_sequence(
        self, descriptor: TypeDescriptor, value: Any, visited: VisitedPaths, path: Path
    ) -> Property:
        # one representative element; the sequence does not consume a path segment
        first = MISSING if _is_absent(value) else next(iter(value), MISSING)
        element = self._inspect(descriptor.element, first, visited, path)
        properties = [element] if element is not None else []
        return Property(type=PropType.ARRAY, properties=properties)

    def _field_name(self, field: FieldDescriptor) -> str:
        if self._options.prefer_serialization_tag_name and field.tag:
            return field.tag
        return field.name


def render_value(value: Any) -> str:
    """Render a scalar as example text.

    Booleans render as ``true``/``false``, enum members by their value.
    """
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _is_absent(value: Any) -> bool:
    return value is MISSING or value is None
