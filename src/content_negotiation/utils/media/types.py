"""Format to content-type registry and Accept header helpers.

This module provides the registry that maps format tokens (``"json"``,
``"html"``) to MIME content types, and matches the media types listed in
an ``Accept`` header against a format's content types.

Each format keeps an ordered list of content types: the first one is the
primary type emitted in responses, the rest are aliases that are only
used for matching Accept entries.
"""

import logging
from typing import Dict, Iterable, List, Optional

from content_negotiation.config.settings import Settings, settings as default_settings

logger = logging.getLogger(__name__)

WILDCARD = "*/*"

DEFAULT_CONTENT_TYPES: Dict[str, List[str]] = {
    "html": ["text/html", "application/xhtml+xml"],
    "json": ["application/json", "text/json"],
    "xml": ["application/xml", "text/xml"],
    "js": ["application/javascript", "text/javascript"],
    "txt": ["text/plain"],
}


def strip_media_params(entry: str) -> str:
    """Return the media type portion of an Accept entry.

    Parameters such as quality factors are dropped, e.g.
    ``"application/json;q=0.9"`` becomes ``"application/json"``.

    :param entry: A single Accept header entry
    :type entry: str
    :return: The media type without parameters
    :rtype: str
    """
    return entry.split(";", 1)[0].strip()


def parse_accept_header(raw: Optional[str], default: str = WILDCARD) -> List[str]:
    """Split a raw Accept header into its entries.

    A missing or empty header means the client accepts anything; a header
    of only whitespace yields no entries and so matches nothing. Entries
    keep their parameters; use :func:`strip_media_params` to compare them.

    :param raw: Raw Accept header value
    :type raw: Optional[str]
    :param default: Entry assumed when no header is present
    :type default: str
    :return: Accept entries in header order
    :rtype: List[str]
    """
    if not raw:
        return [default]
    return [part.strip() for part in raw.split(",") if part.strip()]


class ContentTypeRegistry:
    """Registry for format tokens and their content types.

    Starts from :data:`DEFAULT_CONTENT_TYPES` and the settings'
    ``extra_content_types``. Lookups are by exact format token.

    :param settings: Settings providing extra content types
    :type settings: Optional[Settings]
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self._content_types: Dict[str, List[str]] = {
            fmt: list(types) for fmt, types in DEFAULT_CONTENT_TYPES.items()
        }
        cfg = settings or default_settings
        for fmt, types in cfg.extra_content_types.items():
            self.register(fmt, *types)

    def register(self, format: str, *content_types: str) -> None:
        """Register or replace the content types for a format.

        :param format: Format token, e.g. ``"csv"``
        :type format: str
        :param content_types: Primary content type followed by aliases
        :type content_types: str
        :raises ValueError: If no content type is given
        """
        if not content_types:
            raise ValueError(f"At least one content type is required for '{format}'")
        self._content_types[format] = [ct.strip().lower() for ct in content_types]
        logger.debug("Registered format %s -> %s", format, content_types[0])

    def formats(self) -> List[str]:
        """Return the registered format tokens."""
        return list(self._content_types)

    def content_types(self, format: str) -> List[str]:
        """Return all content types registered for a format (primary first)."""
        return list(self._content_types.get(format, []))

    def resolve(self, format: Optional[str]) -> Optional[str]:
        """Resolve the primary content type for a format.

        :param format: Format token
        :type format: Optional[str]
        :return: Primary content type or None if the format is unknown
        :rtype: Optional[str]
        """
        types = self._content_types.get(format) if format else None
        return types[0] if types else None

    def match(self, accepts: Iterable[str], format: str) -> Optional[str]:
        """Match Accept entries against the content types of a format.

        An entry matches when its media type equals one of the format's
        content types, when it is ``type/*`` and one of them has that major
        type, or when it is ``*/*``. Parameters on entries are ignored.

        :param accepts: Accept header entries
        :type accepts: Iterable[str]
        :param format: Format token to match
        :type format: str
        :return: The format's primary content type, or None if nothing matches
        :rtype: Optional[str]
        """
        types = self._content_types.get(format)
        if not types:
            return None
        majors = {ct.split("/", 1)[0] for ct in types}
        for entry in accepts:
            media = strip_media_params(entry).lower()
            if media == WILDCARD or media in types:
                return types[0]
            if media.endswith("/*") and media[:-2] in majors:
                return types[0]
        return None


__all__ = [
    "ContentTypeRegistry",
    "DEFAULT_CONTENT_TYPES",
    "WILDCARD",
    "parse_accept_header",
    "strip_media_params",
]
