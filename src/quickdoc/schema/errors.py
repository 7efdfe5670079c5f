"""Errors raised while building a property tree."""

from __future__ import annotations

from typing import Any


class SchemaError(Exception):
    """Base exception for schema generation failures."""

    pass


class UnsupportedKindError(SchemaError):
    """Raised when a type cannot be described as a property tree.

    Mappings and unrecognized types abort the whole inspection.
    """

    def __init__(self, annotation: Any, kind: str, path: tuple[int, ...]) -> None:
        self.annotation = annotation
        self.kind = kind
        self.path = path
        super().__init__(
            f"Unsupported {kind} type {_type_label(annotation)} at path {list(path)}"
        )


class MaxDepthExceededError(SchemaError):
    """Raised when nesting goes deeper than the configured ceiling."""

    def __init__(self, max_depth: int, path: tuple[int, ...]) -> None:
        self.max_depth = max_depth
        self.path = path
        super().__init__(f"Maximum depth {max_depth} exceeded at path {list(path)}")


def _type_label(annotation: Any) -> str:
    if isinstance(annotation, type):
        return f"{annotation.__module__}.{annotation.__qualname__}"
    return repr(annotation)
