"""Pydantic models for negotiation requests, outcomes and responses.

The negotiator returns an explicit outcome instead of raising: either a
:class:`NegotiationResult` (success) or a :class:`NegotiationFailure`.
Both expose ``ok`` and ``unwrap()`` so callers can branch on the outcome
or convert a failure into :class:`~content_negotiation.exceptions.UndefinedFormatError`.

The models provide type safety for:
- Negotiation input (hints, Accept header, allowed formats)
- Negotiation outcomes
- Response envelopes handed to the response writer
- Serializable error responses
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field


class FailureReason(str, Enum):
    """Reasons a negotiation can fail.

    All of them surface as the same error kind; the reason is kept for
    logging and error details.
    """

    EMPTY_CANDIDATES = "empty_candidates"
    UNRESOLVED_CONTENT_TYPE = "unresolved_content_type"
    UNMATCHED_CANDIDATE = "unmatched_candidate"


class NegotiationRequest(BaseModel):
    """Input to a single negotiation.

    :param requested_format: Explicit format hint, wins over everything else
    :type requested_format: Optional[str]
    :param param_format: Format hint derived from request data
    :type param_format: Optional[str]
    :param accept_header: Raw Accept header value
    :type accept_header: Optional[str]
    :param allowed_formats: Formats the handler can produce, in priority order
    :type allowed_formats: List[str]
    :param extra_formats: Formats contributed by custom strategies
    :type extra_formats: List[str]
    """

    requested_format: Optional[str] = None
    param_format: Optional[str] = None
    accept_header: Optional[str] = None
    allowed_formats: List[str] = Field(default_factory=list)
    extra_formats: List[str] = Field(default_factory=list)


class NegotiationResult(BaseModel):
    """Successful negotiation: the format to emit and its content type."""

    format: str = Field(..., description="Negotiated format token")
    content_type: str = Field(..., description="Content type for the format")

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> "NegotiationResult":
        """Return the result itself."""
        return self


class NegotiationFailure(BaseModel):
    """Failed negotiation.

    :param reason: Why negotiation failed
    :type reason: FailureReason
    :param format: Candidate format at which negotiation failed, if any
    :type format: Optional[str]
    :param candidates: Candidate formats that were considered
    :type candidates: List[str]
    """

    reason: FailureReason
    format: Optional[str] = None
    candidates: List[str] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return False

    def to_error(self):
        """Build the :class:`UndefinedFormatError` describing this failure.

        :return: Error carrying the failure reason and candidates
        :rtype: UndefinedFormatError
        """
        from ..exceptions import UndefinedFormatError

        return UndefinedFormatError(
            reason=self.reason.value,
            format=self.format,
            candidates=self.candidates,
        )

    def unwrap(self) -> NegotiationResult:
        """Raise the error describing this failure.

        :raises UndefinedFormatError: Always
        """
        raise self.to_error()


NegotiationOutcome = Union[NegotiationResult, NegotiationFailure]


class ResponseEnvelope(BaseModel):
    """Final response handed to the response writer.

    :param status_code: HTTP status code
    :type status_code: int
    :param headers: Response headers, at least ``Content-Type``
    :type headers: Dict[str, str]
    :param body: Formatted payload
    :type body: Any
    """

    status_code: int = 200
    headers: Dict[str, str] = Field(default_factory=dict)
    body: Any = None

    @property
    def content_type(self) -> Optional[str]:
        return self.headers.get("Content-Type")


class ErrorResponse(BaseModel):
    """Standardized error response model.

    Serializable form of a content negotiation error, suitable for the
    body of the 5xx response produced by the caller's error layer.
    """

    message: str = Field(..., description="Human-readable error message")
    code: str = Field(..., description="Error code")
    status_code: int = Field(..., description="HTTP status code")
    details: Dict[str, Any] = Field(
        default_factory=dict, description="Additional error details"
    )
