"""HTTP content negotiation and response-format dispatch.

This package decides which single representation a request handler should
emit, based on the formats the handler can produce, the client's ``Accept``
header and any format hint carried by the request. It then routes the
payload to a per-format rendering strategy or to the default responder.

:var __version__: Current package version
:type __version__: str
"""

__version__ = "0.1.0"
