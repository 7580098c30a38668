# http_handler/core/interfaces/http_client.py
from abc import ABC, abstractmethod

from http_handler.core.models.wire import RawResponse, WireRequest


class HttpClientPort(ABC):
    @abstractmethod
    async def __aenter__(self) -> "HttpClientPort":
        """Async context manager entry method"""
        pass

    @abstractmethod
    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit method"""
        pass

    @abstractmethod
    async def send(self, request: WireRequest) -> RawResponse:
        """Send a prepared request and report what the transport saw.

        Adapters must not raise for transport failures. Connection errors and
        timeouts are returned as a RawResponse with `error` set and no status,
        so the caller can map every outcome to exactly one result.
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close the HTTP client session"""
        pass
