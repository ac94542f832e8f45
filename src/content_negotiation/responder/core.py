"""Responder: negotiation plus strategy dispatch for one request.

A :class:`Responder` is built per request around a
:class:`~content_negotiation.responder.context.RequestContext`. It
negotiates the response format, hands the content to the matching
strategy and falls back to :meth:`Responder.respond`, which formats the
content through the formatter collaborator and writes it through the
context's response writer.
"""

import logging
from collections.abc import Mapping
from typing import Any, Callable, Dict, Optional

from content_negotiation.config.settings import Settings, settings as default_settings
from content_negotiation.exceptions import MissingResponseOptionError
from content_negotiation.models import (
    FailureReason,
    NegotiationFailure,
    NegotiationOutcome,
    NegotiationRequest,
    NegotiationResult,
    ResponseEnvelope,
)
from content_negotiation.utils.media import ContentTypeRegistry, Negotiator

from .context import RequestContext
from .strategies import RESPOND_WITH_STRATEGIES, StrategyLike, as_strategy

logger = logging.getLogger(__name__)

Formatter = Callable[[str, Any, RequestContext, Dict[str, Any], Callable[[Any], None]], None]
"""``format_content(format, content, context, options, on_formatted)``."""


def infer_type(content: Any, options: Optional[Dict[str, Any]] = None) -> Optional[str]:
    """Infer the type token of a model or collection.

    An explicit ``options["type"]`` wins. Otherwise the lower-cased ``type``
    of the first element (sequences) or of the content itself is used; an
    empty sequence has no type.

    :param content: Model, mapping, or sequence of those
    :type content: Any
    :param options: Response options
    :type options: Optional[Dict[str, Any]]
    :return: Inferred type token or None
    :rtype: Optional[str]
    """
    if options and options.get("type"):
        return options["type"]

    if isinstance(content, (list, tuple)):
        if not content:
            return None
        content = content[0]

    if isinstance(content, Mapping):
        value = content.get("type")
    else:
        value = getattr(content, "type", None)
    return value.lower() if isinstance(value, str) else None


class Responder:
    """Determines the best way to respond to a request.

    :param context: Request-scoped context
    :type context: RequestContext
    :param format_content: Formatter collaborator producing the body
    :type format_content: Formatter
    :param registry: Content-type registry used for negotiation
    :type registry: Optional[ContentTypeRegistry]
    :param settings: Settings for defaults
    :type settings: Optional[Settings]
    """

    def __init__(
        self,
        context: RequestContext,
        format_content: Formatter,
        registry: Optional[ContentTypeRegistry] = None,
        settings: Optional[Settings] = None,
    ):
        self.context = context
        self.format_content = format_content
        self.settings = settings or default_settings
        self.negotiator = Negotiator(
            registry or ContentTypeRegistry(self.settings), self.settings
        )

    @property
    def registry(self) -> ContentTypeRegistry:
        return self.negotiator.registry

    def negotiate(
        self,
        format: Optional[str] = None,
        strategies: Optional[Dict[str, StrategyLike]] = None,
    ) -> NegotiationOutcome:
        """Negotiate the response format for the current request.

        Custom strategy keys are added to the allowed formats. The format
        hint is read from the request parameter named by
        ``settings.format_param``; a hint that is not a string cannot name
        an allowed format and fails with no candidates.

        :param format: Explicit format to respond with
        :type format: Optional[str]
        :param strategies: Strategy map whose keys extend the allowed formats
        :type strategies: Optional[Dict[str, StrategyLike]]
        :return: The negotiated result or a failure
        :rtype: NegotiationOutcome
        """
        hint = self.context.params.get(self.settings.format_param)
        if not format and hint is not None and not isinstance(hint, str):
            logger.warning("Rejecting non-string format hint %r", hint)
            return NegotiationFailure(reason=FailureReason.EMPTY_CANDIDATES)

        request = NegotiationRequest(
            requested_format=format,
            param_format=hint,
            accept_header=self.context.accept,
            allowed_formats=self.context.responds_with,
            extra_formats=list(strategies or {}),
        )
        return self.negotiator.negotiate(request)

    def respond_with(
        self,
        content: Any,
        options: Optional[Dict[str, Any]] = None,
        callback: Optional[Callable] = None,
    ) -> None:
        """Respond with a model or collection using the built-in strategies.

        The content's type is inferred (see :func:`infer_type`) and passed
        to the strategies as ``options["type"]``.

        :param content: Model, mapping, or sequence of those
        :type content: Any
        :param options: Response options (``status``, ``silent``, ``type``...)
        :type options: Optional[Dict[str, Any]]
        :param callback: Callback forwarded to the response writer
        :type callback: Optional[Callable]
        """
        opts = dict(options or {})
        opts["type"] = infer_type(content, opts)
        self.respond_to(content, RESPOND_WITH_STRATEGIES, opts, callback)

    def respond_to(
        self,
        content: Any,
        strategies: Optional[Dict[str, StrategyLike]] = None,
        options: Optional[Dict[str, Any]] = None,
        callback: Optional[Callable] = None,
    ) -> None:
        """Negotiate and delegate the response to a strategy.

        A negotiation failure goes to the context's error handler when one
        is set and is raised otherwise; either way no strategy runs. Nothing
        runs either when the context is already marked completed.

        :param content: Content to respond with
        :type content: Any
        :param strategies: Map of format to strategy
        :type strategies: Optional[Dict[str, StrategyLike]]
        :param options: Options passed on to the strategy
        :type options: Optional[Dict[str, Any]]
        :param callback: Callback forwarded to the response writer
        :type callback: Optional[Callable]
        :raises UndefinedFormatError: If negotiation fails and the context
                                      has no error handler
        """
        strategies = strategies or {}
        outcome = self.negotiate(None, strategies)

        if not outcome.ok:
            error = outcome.to_error()
            if self.context.error_handler is None:
                raise error
            self.context.error_handler(error)
            return

        # An error response was already sent for this request
        if self.context.completed:
            logger.debug("Request already completed, skipping dispatch")
            return

        negotiated: NegotiationResult = outcome
        opts = {**(options or {}), **negotiated.model_dump()}

        strategy = as_strategy(strategies.get(negotiated.format))
        if strategy is not None:
            logger.debug("Dispatching %s to %r", negotiated.format, strategy)
            strategy.handle(self, content, opts, callback)
        else:
            self.respond(content, opts, callback)

    def respond(
        self,
        content: Any,
        options: Dict[str, Any],
        callback: Optional[Callable] = None,
    ) -> None:
        """Format content and write the response.

        Lower-level path that expects negotiation to be done already.

        :param content: Content to respond with
        :type content: Any
        :param options: Must contain ``format`` and ``content_type``;
                        ``status_code`` is optional
        :type options: Dict[str, Any]
        :param callback: Callback forwarded to the response writer
        :type callback: Optional[Callable]
        :raises MissingResponseOptionError: If ``format`` or
                                            ``content_type`` is missing
        """
        opts = options or {}
        for required in ("format", "content_type"):
            if not opts.get(required):
                raise MissingResponseOptionError(required)

        def on_formatted(body: Any) -> None:
            envelope = ResponseEnvelope(
                status_code=opts.get("status_code") or self.settings.default_status_code,
                headers={"Content-Type": opts["content_type"]},
                body=body,
            )
            self.context.write_response(
                envelope.status_code, envelope.headers, envelope.body, callback
            )

        self.format_content(opts["format"], content, self.context, opts, on_formatted)

    def redirect(self, *args, **kwargs) -> Any:
        """Delegate a redirect to the request context."""
        return self.context.redirect(*args, **kwargs)

    def flash(self, message: str, kind: str = "info") -> None:
        """Delegate a flash message to the request context."""
        self.context.flash(message, kind)
