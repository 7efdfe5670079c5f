"""Command-line interface for quickdoc."""

import argparse
import importlib
import json
import logging
import sys
from typing import Any

from quickdoc.logging_config import configure_logging
from quickdoc.schema import Builder, SchemaError, SchemaOptions, to_openapi_schema

logger = logging.getLogger(__name__)


def resolve_target(target: str) -> Any:
    """Import ``package.module:attribute`` and return the attribute.

    Dotted attribute paths (``module:Outer.Inner``) are followed.

    Raises:
        ValueError: If the target is malformed.
        ImportError: If the module cannot be imported.
        AttributeError: If the attribute does not exist.
    """
    module_name, sep, attribute = target.partition(":")
    if not sep or not module_name or not attribute:
        raise ValueError(f"Target must look like 'package.module:attribute', got {target!r}")
    obj: Any = importlib.import_module(module_name)
    for part in attribute.split("."):
        obj = getattr(obj, part)
    return obj


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="quickdoc",
        description="Print the schema of a Python type or value as JSON",
    )
    parser.add_argument(
        "target",
        help="Object to describe, as package.module:attribute. "
        "Classes are described without examples.",
    )
    parser.add_argument(
        "--format",
        choices=("tree", "openapi"),
        default="openapi",
        help="Output format (default: openapi)",
    )
    parser.add_argument(
        "--explore-absent",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Expand composites that have no value (default: from environment)",
    )
    parser.add_argument(
        "--tag-names",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Name fields by their serialization alias (default: from environment)",
    )
    parser.add_argument(
        "--max-depth",
        type=int,
        default=None,
        help="Fail when composites nest deeper than this",
    )
    parser.add_argument(
        "--indent",
        type=int,
        default=2,
        help="JSON indentation (default: 2)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version="%(prog)s 0.1.0",
    )
    return parser


def main(args: list[str] | None = None) -> int:
    """Run the quickdoc command.

    Args:
        args: Command-line arguments. If None, uses sys.argv[1:].

    Returns:
        Exit code (0 for success, 1 for failures).
    """
    parsed = build_parser().parse_args(args)
    configure_logging()

    overrides: dict[str, Any] = {}
    if parsed.explore_absent is not None:
        overrides["explore_absent_composites"] = parsed.explore_absent
    if parsed.tag_names is not None:
        overrides["prefer_serialization_tag_name"] = parsed.tag_names
    if parsed.max_depth is not None:
        overrides["max_depth"] = parsed.max_depth

    try:
        options = SchemaOptions(**overrides)
        obj = resolve_target(parsed.target)
        builder = Builder(options)
        if isinstance(obj, type):
            prop = builder.get_type_schema(obj)
        else:
            prop = builder.get_schema(obj)
    except (ValueError, ImportError, AttributeError, SchemaError) as exc:
        # pydantic's ValidationError is a ValueError
        logger.debug("Failed to describe %s", parsed.target, exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 1

    if parsed.format == "tree":
        output: Any = prop.to_dict() if prop is not None else None
    else:
        output = to_openapi_schema(prop)
    print(json.dumps(output, indent=parsed.indent))
    return 0


if __name__ == "__main__":
    sys.exit(main())
