"""Starlette adapter for the responder.

Wires a :class:`~content_negotiation.responder.Responder` to a Starlette
request: the request's parameters and headers become the request context,
the written envelope (or a redirect) becomes a Starlette ``Response``, and
content negotiation errors become JSON error responses.

Serialization stays with the caller: endpoints pass their own formatter,
which must call ``on_formatted`` before returning.

Example::

    async def show(request):
        return respond_to_request(
            request,
            {"name": "widget"},
            responds_with=["json", "html"],
            format_content=my_formatter,
        )
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

from starlette.requests import Request
from starlette.responses import JSONResponse, RedirectResponse, Response

from content_negotiation.config.settings import Settings
from content_negotiation.exceptions import ContentNegotiationError
from content_negotiation.responder import RequestContext, Responder
from content_negotiation.responder.core import Formatter
from content_negotiation.responder.strategies import StrategyLike
from content_negotiation.utils.media import ContentTypeRegistry

logger = logging.getLogger(__name__)


class ResponseCollector:
    """Collects the response produced for one request.

    Acts as the context's response writer, redirect target and flash store.
    """

    def __init__(self) -> None:
        self.response: Optional[Response] = None
        self.flashes: List[Tuple[str, str]] = []

    def write_response(
        self,
        status_code: int,
        headers: Dict[str, str],
        body: Any,
        callback: Optional[Callable] = None,
    ) -> None:
        self.response = Response(content=body, status_code=status_code, headers=headers)
        if callback:
            callback(body)

    def redirect(self, url: str, status_code: int = 302) -> None:
        self.response = RedirectResponse(url, status_code=status_code)

    def flash(self, message: str, kind: str) -> None:
        self.flashes.append((kind, message))

    def write_error(self, error: ContentNegotiationError) -> None:
        model = error.to_response_model()
        self.response = JSONResponse(model.model_dump(), status_code=model.status_code)


def context_from_request(
    request: Request,
    responds_with: List[str],
    collector: ResponseCollector,
) -> RequestContext:
    """Build a request context from a Starlette request.

    Query parameters are overridden by path parameters of the same name.
    Repeated Accept headers are joined into one comma-separated value.
    Negotiation errors are answered through ``collector`` and mark the
    context completed; other errors propagate.

    :param request: Incoming Starlette request
    :type request: Request
    :param responds_with: Formats the endpoint can produce
    :type responds_with: List[str]
    :param collector: Collector receiving the response
    :type collector: ResponseCollector
    :return: Request context for a responder
    :rtype: RequestContext
    """
    params: Dict[str, Any] = dict(request.query_params)
    params.update(request.path_params)

    headers = dict(request.headers)
    accept = request.headers.getlist("accept")
    if accept:
        headers["accept"] = ", ".join(accept)

    context = RequestContext(
        params=params,
        headers=headers,
        responds_with=list(responds_with),
        write_response=collector.write_response,
        flash=collector.flash,
        redirect=collector.redirect,
    )

    def handle_error(error: Exception) -> None:
        if not isinstance(error, ContentNegotiationError):
            raise error
        logger.warning("Responding with %s: %s", error.status_code, error.message)
        collector.write_error(error)
        context.completed = True

    context.error_handler = handle_error
    return context


def _run(
    request: Request,
    responds_with: List[str],
    format_content: Formatter,
    action: Callable[[Responder], None],
    registry: Optional[ContentTypeRegistry],
    settings: Optional[Settings],
) -> Response:
    collector = ResponseCollector()
    context = context_from_request(request, responds_with, collector)
    responder = Responder(context, format_content, registry=registry, settings=settings)
    action(responder)
    request.state.flashes = collector.flashes
    if collector.response is None:
        raise ContentNegotiationError(
            "No response was written for the request", code="NO_RESPONSE"
        )
    return collector.response


def respond_to_request(
    request: Request,
    content: Any,
    *,
    responds_with: List[str],
    format_content: Formatter,
    strategies: Optional[Dict[str, StrategyLike]] = None,
    options: Optional[Dict[str, Any]] = None,
    registry: Optional[ContentTypeRegistry] = None,
    settings: Optional[Settings] = None,
) -> Response:
    """Negotiate, dispatch to ``strategies`` and return the Starlette response.

    :raises ContentNegotiationError: If no strategy wrote a response
    """
    return _run(
        request,
        responds_with,
        format_content,
        lambda responder: responder.respond_to(content, strategies, options),
        registry,
        settings,
    )


def respond_with_request(
    request: Request,
    content: Any,
    *,
    responds_with: List[str],
    format_content: Formatter,
    options: Optional[Dict[str, Any]] = None,
    registry: Optional[ContentTypeRegistry] = None,
    settings: Optional[Settings] = None,
) -> Response:
    """Respond with a model or collection using the built-in strategies."""
    return _run(
        request,
        responds_with,
        format_content,
        lambda responder: responder.respond_with(content, options),
        registry,
        settings,
    )


__all__ = [
    "ResponseCollector",
    "context_from_request",
    "respond_to_request",
    "respond_with_request",
]
