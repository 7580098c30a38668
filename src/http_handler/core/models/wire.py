from enum import Enum
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class CachePolicy(str, Enum):
    use_protocol = "use_protocol"
    reload_ignoring_cache = "reload_ignoring_cache"


# Sent when the cache policy asks intermediaries to revalidate.
NO_CACHE_HEADERS: Dict[str, str] = {
    "Cache-Control": "no-cache",
    "Pragma": "no-cache",
}


class WireRequest(BaseModel):
    """Absolute request ready to be handed to an HttpClientPort."""

    model_config = ConfigDict(frozen=True)

    url: str
    method: str = "GET"
    headers: Dict[str, str] = Field(default_factory=dict)
    body: Optional[bytes] = None
    timeout: float = Field(default=60.0, gt=0)
    cache_policy: CachePolicy = CachePolicy.reload_ignoring_cache

    def effective_headers(self) -> Dict[str, str]:
        """Caller headers plus the cache headers implied by the policy.

        Caller supplied values always win, compared case-insensitively.
        """
        headers = dict(self.headers)
        if self.cache_policy is CachePolicy.reload_ignoring_cache:
            present = {key.lower() for key in headers}
            for key, value in NO_CACHE_HEADERS.items():
                if key.lower() not in present:
                    headers[key] = value
        return headers


class RawResponse(BaseModel):
    """What the transport reported for one request.

    `status` is None when no HTTP response was received. In that case `error`
    normally carries the transport failure.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    status: Optional[int] = None
    headers: Dict[str, str] = Field(default_factory=dict)
    body: Optional[bytes] = None
    error: Optional[BaseException] = None
    url: str = ""
    method: str = ""

    @property
    def is_http(self) -> bool:
        return self.status is not None

    @property
    def has_body(self) -> bool:
        return bool(self.body)

    def text(self) -> str:
        if self.body is None:
            return ""
        return self.body.decode("utf-8", errors="replace")

    def debug_description(self) -> str:
        if not self.is_http:
            detail = repr(self.error) if self.error is not None else "no response"
            return f"<RawResponse: {self.method} {self.url}> {{ {detail} }}"
        return (
            f"<HTTPResponse: {self.method} {self.url}> "
            f"{{ Status Code: {self.status}, Headers {self.headers} }}"
        )
