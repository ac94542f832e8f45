"""Media utilities public API (re-exports)."""

from .negotiator import Negotiator, merge_formats, negotiate
from .types import (
    DEFAULT_CONTENT_TYPES,
    WILDCARD,
    ContentTypeRegistry,
    parse_accept_header,
    strip_media_params,
)

__all__ = [
    "ContentTypeRegistry",
    "DEFAULT_CONTENT_TYPES",
    "WILDCARD",
    "parse_accept_header",
    "strip_media_params",
    "Negotiator",
    "merge_formats",
    "negotiate",
]
