"""Response strategies.

A strategy renders the response for one format. Strategies are looked up
by the negotiated format in a strategy map; a key mapped to ``None`` or
:data:`USE_DEFAULT` still adds its format to the negotiation candidates
but leaves rendering to the responder's default path.

Custom strategies subclass :class:`Strategy`, or are plain callables with
the signature ``(responder, content, options, callback)``.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Callable, Dict, Optional, Union

if TYPE_CHECKING:
    from .core import Responder

logger = logging.getLogger(__name__)


class _UseDefault:
    """Marker for strategy map entries without a custom handler."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "USE_DEFAULT"


USE_DEFAULT = _UseDefault()


class Strategy(ABC):
    """Base class for format-specific response strategies."""

    @abstractmethod
    def handle(
        self,
        responder: "Responder",
        content: Any,
        options: Dict[str, Any],
        callback: Optional[Callable] = None,
    ) -> None:
        """Render ``content`` for the negotiated format.

        :param responder: Responder for the current request; gives access
                          to ``respond``, ``redirect`` and ``flash``
        :type responder: Responder
        :param content: Content to respond with
        :type content: Any
        :param options: Response options including ``format`` and
                        ``content_type``
        :type options: Dict[str, Any]
        :param callback: Callback forwarded to the response writer
        :type callback: Optional[Callable]
        """


class FunctionStrategy(Strategy):
    """Adapter turning a plain callable into a :class:`Strategy`."""

    def __init__(self, func: Callable[..., None]):
        self.func = func

    def handle(self, responder, content, options, callback=None) -> None:
        self.func(responder, content, options, callback)

    def __repr__(self) -> str:
        return f"FunctionStrategy({getattr(self.func, '__name__', self.func)!r})"


StrategyLike = Union[Strategy, Callable[..., None], _UseDefault, None]


def as_strategy(value: StrategyLike) -> Optional[Strategy]:
    """Return the strategy for a map entry, or None to use the default path."""
    if value is None or value is USE_DEFAULT:
        return None
    if isinstance(value, Strategy):
        return value
    if callable(value):
        return FunctionStrategy(value)
    return None


def _get(content: Any, name: str) -> Any:
    if isinstance(content, Mapping):
        return content.get(name)
    return getattr(content, name, None)


def content_errors(content: Any) -> Any:
    """Return validation errors carried by the content, if any."""
    if isinstance(content, (list, tuple)):
        return None
    return _get(content, "errors") or None


class ApiStrategy(Strategy):
    """Strategy for data formats (json, xml, js, txt).

    Content carrying ``errors`` is answered with status 400 and only the
    errors. Otherwise content is wrapped under its type key when
    ``options["type"]`` is known, using the plural key for sequences.
    """

    def handle(self, responder, content, options, callback=None) -> None:
        errors = content_errors(content)
        if errors:
            options["status_code"] = 400
            payload = {"errors": errors}
        else:
            payload = self.wrap(content, options.get("type"))
        responder.respond(payload, options, callback)

    @staticmethod
    def wrap(content: Any, type_: Optional[str]) -> Any:
        if not type_:
            return content
        if isinstance(content, (list, tuple)):
            return {f"{type_}s": list(content)}
        return {type_: content}


class HtmlStrategy(Strategy):
    """Strategy for html responses.

    Flashes ``options["status"]`` unless ``options["silent"]`` is set,
    redirects to ``options["location"]`` after a successful change, and
    otherwise renders through the default responder.
    """

    def handle(self, responder, content, options, callback=None) -> None:
        errors = content_errors(content)
        status = options.get("status")
        if status and not options.get("silent"):
            responder.flash(status, "error" if errors else "success")

        if errors:
            options["status_code"] = 400
        elif options.get("location"):
            logger.debug("Redirecting to %s", options["location"])
            responder.redirect(options["location"])
            if callback:
                callback(None)
            return

        responder.respond(content, options, callback)


_api = ApiStrategy()

RESPOND_WITH_STRATEGIES: Dict[str, Strategy] = {
    "html": HtmlStrategy(),
    "json": _api,
    "xml": _api,
    "js": _api,
    "txt": _api,
}


__all__ = [
    "ApiStrategy",
    "FunctionStrategy",
    "HtmlStrategy",
    "RESPOND_WITH_STRATEGIES",
    "Strategy",
    "StrategyLike",
    "USE_DEFAULT",
    "as_strategy",
    "content_errors",
]
