"""Content negotiation models package.

This package contains the Pydantic models used throughout the negotiator
and the responder.
"""

from .negotiation import (
    ErrorResponse,
    FailureReason,
    NegotiationFailure,
    NegotiationOutcome,
    NegotiationRequest,
    NegotiationResult,
    ResponseEnvelope,
)

__all__ = [
    "ErrorResponse",
    "FailureReason",
    "NegotiationFailure",
    "NegotiationOutcome",
    "NegotiationRequest",
    "NegotiationResult",
    "ResponseEnvelope",
]
