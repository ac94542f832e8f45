"""Format negotiation.

This module decides, for one request, the single format to respond with
and its content type. The decision takes, in priority order, an explicit
format hint, a format hint from the request parameters, and the
handler's own list of allowed formats, and checks the candidates against
the client's Accept header.

Negotiation is a pure decision: it never raises for a negotiation
failure. It returns either a :class:`NegotiationResult` or a
:class:`NegotiationFailure`, and the caller decides how to surface the
failure.
"""

import logging
from typing import Iterable, List, Optional

from content_negotiation.config.settings import Settings, settings as default_settings
from content_negotiation.models import (
    FailureReason,
    NegotiationFailure,
    NegotiationOutcome,
    NegotiationRequest,
    NegotiationResult,
)

from .types import WILDCARD, ContentTypeRegistry, parse_accept_header, strip_media_params

logger = logging.getLogger(__name__)


def merge_formats(allowed: Iterable[str], extra: Iterable[str]) -> List[str]:
    """Merge extra formats into the allowed ones.

    Order is preserved and formats already present are not duplicated.
    Tokens are compared case-sensitively.

    :param allowed: Allowed formats in priority order
    :type allowed: Iterable[str]
    :param extra: Formats to append
    :type extra: Iterable[str]
    :return: Merged format list
    :rtype: List[str]
    """
    merged = list(allowed)
    for fmt in extra:
        if fmt not in merged:
            merged.append(fmt)
    return merged


class Negotiator:
    """Negotiator choosing a response format for a request.

    Candidate selection:

    1. An explicit ``requested_format`` is the only candidate, whether or
       not it is allowed.
    2. Otherwise a ``param_format`` that is among the allowed and extra
       formats is the only candidate.
    3. A ``param_format`` outside those formats leaves no candidates.
    4. Without hints, every allowed and extra format is a candidate.

    If the Accept header contains ``*/*`` the first candidate wins.
    Otherwise candidates are matched in order and the first candidate the
    Accept header does not match ends the negotiation with a failure; later
    candidates are not tried.

    :param registry: Registry resolving and matching content types
    :type registry: Optional[ContentTypeRegistry]
    :param settings: Settings providing the default Accept value
    :type settings: Optional[Settings]
    """

    def __init__(
        self,
        registry: Optional[ContentTypeRegistry] = None,
        settings: Optional[Settings] = None,
    ):
        self.settings = settings or default_settings
        self.registry = registry or ContentTypeRegistry(self.settings)

    def candidates(self, request: NegotiationRequest) -> List[str]:
        """Return the candidate formats for a request, in priority order.

        :param request: Negotiation input
        :type request: NegotiationRequest
        :return: Candidate formats, possibly empty
        :rtype: List[str]
        """
        if request.requested_format:
            return [request.requested_format]

        merged = merge_formats(request.allowed_formats, request.extra_formats)
        if request.param_format:
            if request.param_format in merged:
                return [request.param_format]
            logger.debug(
                "Format hint %s is not among %s", request.param_format, merged
            )
            return []
        return merged

    def negotiate(self, request: NegotiationRequest) -> NegotiationOutcome:
        """Negotiate the format and content type for a request.

        :param request: Negotiation input
        :type request: NegotiationRequest
        :return: The negotiated result or a failure
        :rtype: NegotiationOutcome
        """
        types = self.candidates(request)
        if not types:
            return self._fail(FailureReason.EMPTY_CANDIDATES, None, types)

        accepts = parse_accept_header(
            request.accept_header, default=self.settings.default_accept
        )

        if any(strip_media_params(entry) == WILDCARD for entry in accepts):
            fmt = types[0]
            content_type = self.registry.resolve(fmt)
            if not content_type:
                return self._fail(FailureReason.UNRESOLVED_CONTENT_TYPE, fmt, types)
            logger.debug("Wildcard accept, responding with %s (%s)", fmt, content_type)
            return NegotiationResult(format=fmt, content_type=content_type)

        # A miss on the highest-priority candidate is final; later
        # candidates are never tried.
        fmt = types[0]
        content_type = self.registry.match(accepts, fmt)
        if not content_type:
            return self._fail(FailureReason.UNMATCHED_CANDIDATE, fmt, types)
        logger.debug("Accept matched %s (%s)", fmt, content_type)
        return NegotiationResult(format=fmt, content_type=content_type)

    def _fail(
        self, reason: FailureReason, fmt: Optional[str], types: List[str]
    ) -> NegotiationFailure:
        logger.warning(
            "Negotiation failed (%s) for format %s among %s", reason.value, fmt, types
        )
        return NegotiationFailure(reason=reason, format=fmt, candidates=list(types))


def negotiate(
    request: NegotiationRequest, registry: Optional[ContentTypeRegistry] = None
) -> NegotiationOutcome:
    """Negotiate with a default :class:`Negotiator`.

    :param request: Negotiation input
    :type request: NegotiationRequest
    :param registry: Optional registry to use
    :type registry: Optional[ContentTypeRegistry]
    :return: The negotiated result or a failure
    :rtype: NegotiationOutcome
    """
    return Negotiator(registry).negotiate(request)


__all__ = [
    "Negotiator",
    "merge_formats",
    "negotiate",
]
