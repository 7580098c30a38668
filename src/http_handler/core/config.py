"""Configuration model for the HTTP handler.

Consolidates the dispatch settings in one immutable object so the handler can
be constructed with explicit values in tests and from environment settings in
the composition root.
"""

from typing import FrozenSet
from pydantic import BaseModel, Field, field_validator


class HandlerConfig(BaseModel):
    """Configuration for HttpHandler behavior.

    Attributes:
        request_timeout: Seconds before the transport gives up on a request
        bypass_cache: Build every request with a cache-ignoring policy
        success_status_codes: Status codes accepted by decoded and mapping calls
        strict_status_code: The single status accepted by shape-checked calls
    """

    request_timeout: float = Field(
        default=60.0,
        gt=0,
        description="Timeout in seconds applied to every request"
    )

    bypass_cache: bool = Field(
        default=True,
        description="Ignore local and intermediate caches for every request"
    )

    success_status_codes: FrozenSet[int] = Field(
        default=frozenset({200, 201, 202, 203, 204}),
        description="Status codes treated as success by make and make_decodable"
    )

    strict_status_code: int = Field(
        default=200,
        description="Only status code treated as success by make_typed"
    )

    model_config = {
        "frozen": True,
        "extra": "forbid",
    }

    @field_validator("success_status_codes")
    def non_empty_codes(cls, value: FrozenSet[int]) -> FrozenSet[int]:
        if not value:
            raise ValueError("success_status_codes must not be empty")
        return value

    @classmethod
    def from_app_settings(cls, settings) -> "HandlerConfig":
        """Factory method to construct config from a HandlerSettings instance."""
        return cls(
            request_timeout=settings.HTTP_HANDLER_REQUEST_TIMEOUT,
            bypass_cache=settings.HTTP_HANDLER_BYPASS_CACHE,
            success_status_codes=frozenset(settings.HTTP_HANDLER_SUCCESS_STATUS_CODES),
            strict_status_code=settings.HTTP_HANDLER_STRICT_STATUS_CODE,
        )
