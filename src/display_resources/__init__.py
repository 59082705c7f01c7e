"""display-resources - Locate and read resources referenced by displays."""

from display_resources.cache import ContentCache

# Duration parsing
from display_resources.duration import parse_duration, to_seconds

# Errors
from display_resources.exceptions import (
    InvalidResourceError,
    ResourceError,
    ResourceFetchError,
    ResourceTimeoutError,
)
from display_resources.fetch import UrlReader

# Path algebra
from display_resources.paths import (
    combine_display_paths,
    get_directory,
    get_relative_path,
    has_scheme,
    is_absolute,
    is_url,
    normalize,
    split_path,
)
from display_resources.resolver import (
    ResourceResolver,
    copy_resource,
    get_default_resolver,
)
from display_resources.settings import ResolverSettings

# Core types
from display_resources.types import CacheEntry, DisplaySource, Duration

__version__ = "0.1.0"

__all__ = [
    "CacheEntry",
    "ContentCache",
    "DisplaySource",
    "Duration",
    "InvalidResourceError",
    "ResolverSettings",
    "ResourceError",
    "ResourceFetchError",
    "ResourceResolver",
    "ResourceTimeoutError",
    "UrlReader",
    "combine_display_paths",
    "copy_resource",
    "get_default_resolver",
    "get_directory",
    "get_relative_path",
    "has_scheme",
    "is_absolute",
    "is_url",
    "normalize",
    "parse_duration",
    "split_path",
    "to_seconds",
]
