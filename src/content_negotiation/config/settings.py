"""Configuration settings for content negotiation.

This module defines the configuration settings used by the negotiator and
the responder: default status code, the Accept header assumed when a
client sends none, the request parameter carrying a format hint, and any
additional format to content-type mappings. Settings are loaded from
environment variables and .env files.
"""

from typing import Dict, List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All variables use the ``RESPONDER_`` prefix, for example
    ``RESPONDER_DEFAULT_STATUS_CODE=201``.

    :param default_status_code: Status code used when a response does not
                                set one
    :type default_status_code: int
    :param default_accept: Accept header value assumed when the client
                           sends none
    :type default_accept: str
    :param format_param: Name of the request parameter carrying a format hint
    :type format_param: str
    :param extra_content_types: Additional format to content-type mappings,
                                primary content type first
    :type extra_content_types: Dict[str, List[str]]
    """

    model_config = SettingsConfigDict(
        env_prefix="RESPONDER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    default_status_code: int = Field(
        200, description="Status code for responses that do not set one"
    )
    default_accept: str = Field(
        "*/*", description="Accept header assumed when the client sends none"
    )
    format_param: str = Field(
        "format", description="Request parameter carrying a format hint"
    )
    extra_content_types: Dict[str, List[str]] = Field(
        default_factory=dict,
        description="Additional format to content-type mappings (JSON in env)",
    )

    @field_validator("default_status_code")
    @classmethod
    def validate_status_code(cls, v: int) -> int:
        """Reject status codes outside the HTTP range.

        :param v: The configured status code
        :type v: int
        :return: The validated status code
        :rtype: int
        :raises ValueError: If the code is outside 100-599
        """
        if not 100 <= v <= 599:
            raise ValueError(f"Invalid HTTP status code: {v}")
        return v

    @field_validator("extra_content_types")
    @classmethod
    def validate_extra_content_types(
        cls, v: Dict[str, List[str]]
    ) -> Dict[str, List[str]]:
        """Ensure every configured format has at least one content type."""
        for fmt, content_types in v.items():
            if not content_types:
                raise ValueError(f"No content types configured for format '{fmt}'")
        return v


settings = Settings()
"""Global settings instance.

Created once at import and used as the default wherever a component is
not given its own :class:`Settings`.
"""
