from typing import Any, Dict, Mapping, Optional

from http_handler.core.interfaces.request import HttpRequestPort
from http_handler.core.models.request_type import RequestType


class HandlerRequest(HttpRequestPort):
    """Immutable request descriptor built from plain values.

    The mappings passed in are copied, and copies are handed out again, so a
    caller mutating its own dict after construction does not change the call.
    """

    def __init__(
        self,
        endpoint: str,
        method: str = "GET",
        parameters: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
        type: RequestType = RequestType.regular,
    ) -> None:
        self._endpoint = endpoint
        self._method = method
        self._parameters = dict(parameters) if parameters is not None else None
        self._headers = dict(headers or {})
        self._type = type

    def endpoint(self) -> str:
        return self._endpoint

    def method(self) -> str:
        return self._method

    def parameters(self) -> Optional[Dict[str, Any]]:
        if self._parameters is None:
            return None
        return dict(self._parameters)

    def headers(self) -> Dict[str, str]:
        return dict(self._headers)

    def type(self) -> RequestType:
        return self._type

    def __repr__(self) -> str:
        return (
            f"HandlerRequest(method={self._method!r}, endpoint={self._endpoint!r}, "
            f"type={self._type.value})"
        )
