"""Responder public API (re-exports).

Recommended imports:
    from content_negotiation.responder import Responder, RequestContext, Strategy
"""

from .context import RequestContext
from .core import Responder, infer_type
from .strategies import (
    RESPOND_WITH_STRATEGIES,
    USE_DEFAULT,
    ApiStrategy,
    FunctionStrategy,
    HtmlStrategy,
    Strategy,
)

__all__ = [
    "RequestContext",
    "Responder",
    "infer_type",
    "Strategy",
    "FunctionStrategy",
    "ApiStrategy",
    "HtmlStrategy",
    "RESPOND_WITH_STRATEGIES",
    "USE_DEFAULT",
]
