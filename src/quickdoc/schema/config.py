"""Configuration for schema generation.

Options load from environment variables (prefix ``QUICKDOC_``) and an optional
.env file, the same way for the library and the command line.
"""

from __future__ import annotations

import logging
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class SchemaOptions(BaseSettings):
    """Options controlling how values are turned into property trees.

    Environment Variables:
        QUICKDOC_EXPLORE_ABSENT_COMPOSITES: Expand composites with no value
            (default: true)
        QUICKDOC_PREFER_SERIALIZATION_TAG_NAME: Name fields by their
            serialization alias when declared (default: true)
        QUICKDOC_MAX_DEPTH: Deepest field path allowed for a composite
            (default: unbounded)

    Example:
        >>> options = SchemaOptions(explore_absent_composites=False)
        >>> options.prefer_serialization_tag_name
        True
    """

    model_config = SettingsConfigDict(
        env_prefix="QUICKDOC_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    explore_absent_composites: bool = Field(
        default=True,
        description="Expand composite types even when no value is available",
    )
    prefer_serialization_tag_name: bool = Field(
        default=True,
        description="Use serialization aliases as property names when present",
    )
    max_depth: int | None = Field(
        default=None,
        ge=1,
        description="Maximum field path length at which a composite may be expanded",
    )


@lru_cache
def get_schema_options() -> SchemaOptions:
    """Get cached schema options loaded from the environment.

    To reload, call get_schema_options.cache_clear() first.

    Returns:
        SchemaOptions instance.
    """
    options = SchemaOptions()
    logger.info(
        "Loaded schema options: explore_absent_composites=%s, "
        "prefer_serialization_tag_name=%s, max_depth=%s",
        options.explore_absent_composites,
        options.prefer_serialization_tag_name,
        options.max_depth,
    )
    return options
