"""Structured exception classes for content negotiation."""

import json
from typing import Any, Dict, List, Optional

from .models.negotiation import ErrorResponse


class ContentNegotiationError(Exception):
    """Base exception for all content negotiation errors.

    This exception serves as the parent class for every error raised by
    the negotiator and the responder, providing a consistent interface for
    the caller's error-handling layer.

    :param message: Human-readable error message
    :param code: Optional error code for programmatic handling
    :param status_code: HTTP status code the caller should respond with
    :param details: Optional dictionary containing additional error context
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
    ):
        """Initialize the exception with message, code, and details."""
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.status_code = status_code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary format.

        :return: Dictionary containing error code, message, and details
        """
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }

    def to_json(self) -> str:
        """Convert exception to JSON string.

        :return: JSON-encoded string representation of the exception
        """
        return json.dumps(self.to_dict())

    def to_response_model(self) -> ErrorResponse:
        """Convert to the serializable :class:`ErrorResponse` model.

        :return: ErrorResponse model instance
        :rtype: ErrorResponse
        """
        return ErrorResponse(
            message=self.message,
            code=self.code,
            status_code=self.status_code,
            details=self.details,
        )


class UndefinedFormatError(ContentNegotiationError):
    """Raised when no format can be negotiated for a request.

    This covers an empty candidate set, a wildcard Accept header whose
    first candidate has no registered content type, and a candidate the
    Accept header does not match.

    :param reason: Failure reason identifier
    :param format: The candidate format that failed, if any
    :param candidates: The candidate formats considered
    """

    def __init__(
        self,
        reason: Optional[str] = None,
        format: Optional[str] = None,
        candidates: Optional[List[str]] = None,
    ):
        """Initialize undefined format error with the failure context."""
        details: Dict[str, Any] = {}
        if reason:
            details["reason"] = reason
        if format:
            details["format"] = format
        if candidates is not None:
            details["candidates"] = list(candidates)
        super().__init__(
            message="Format not defined in response formats.",
            code="UNDEFINED_FORMAT",
            status_code=500,
            details=details,
        )
        self.reason = reason
        self.format = format
        self.candidates = list(candidates or [])


class MissingResponseOptionError(ContentNegotiationError):
    """Raised when the default responder is called without negotiated options.

    :param option: Name of the missing option
    """

    def __init__(self, option: str):
        """Initialize missing option error with the option name."""
        super().__init__(
            message=f"Response option '{option}' is required",
            code="MISSING_RESPONSE_OPTION",
            status_code=500,
            details={"option": option},
        )
        self.option = option
