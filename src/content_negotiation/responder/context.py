"""Request-scoped context handed to a responder.

The context gathers everything a responder needs from the surrounding
request-handling layer: request parameters and headers, the formats the
handler responds with, and the callables used to flash messages, redirect
and write the final response. One context is created per request.
"""

from typing import Any, Callable, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

ResponseWriter = Callable[[int, Dict[str, str], Any, Optional[Callable]], None]
"""``write_response(status_code, headers, body, callback)``."""

FlashFunc = Callable[[str, str], None]
"""``flash(message, kind)``."""

ErrorHandler = Callable[[Exception], None]
"""Caller error layer; expected to send an error response and set ``completed``."""


class RequestContext(BaseModel):
    """Request-scoped fields and collaborators used by a responder.

    :param params: Request parameters (path, query and body values)
    :type params: Dict[str, Any]
    :param headers: Request headers
    :type headers: Dict[str, str]
    :param responds_with: Formats the handler can produce, in priority order
    :type responds_with: List[str]
    :param write_response: Writes status, headers and body to the client
    :type write_response: ResponseWriter
    :param flash: Stores a flash message of a given kind
    :type flash: FlashFunc
    :param redirect: Redirects the client
    :type redirect: Callable[..., Any]
    :param error_handler: Handles errors raised while responding; when
                          unset errors propagate to the caller
    :type error_handler: Optional[ErrorHandler]
    :param completed: Whether a response was already sent for this request
    :type completed: bool
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    params: Dict[str, Any] = Field(default_factory=dict)
    headers: Dict[str, str] = Field(default_factory=dict)
    responds_with: List[str] = Field(default_factory=list)
    write_response: ResponseWriter
    flash: FlashFunc
    redirect: Callable[..., Any]
    error_handler: Optional[ErrorHandler] = None
    completed: bool = False

    def header(self, name: str) -> Optional[str]:
        """Return a request header value, matching the name case-insensitively."""
        wanted = name.lower()
        for key, value in self.headers.items():
            if key.lower() == wanted:
                return value
        return None

    @property
    def accept(self) -> Optional[str]:
        return self.header("accept")
