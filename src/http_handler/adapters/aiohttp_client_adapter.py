import asyncio
import aiohttp
from typing import Dict, Optional

from multidict import CIMultiDictProxy

from http_handler.core.interfaces.http_client import HttpClientPort
from http_handler.core.models.wire import RawResponse, WireRequest
from http_handler.core import settings


def flatten_headers(headers: CIMultiDictProxy) -> Dict[str, str]:
    """Collapse repeated header fields into one comma separated value."""
    return {str(key): ", ".join(headers.getall(key)) for key in headers.keys()}


class AioHttpClientAdapter(HttpClientPort):
    def __init__(self, sock_connect_timeout: float = 10.0):
        self._session: Optional[aiohttp.ClientSession] = None
        # Connect timeout is an adapter concern; the total timeout comes from
        # each WireRequest.
        self._default_sock_connect = sock_connect_timeout

    async def __aenter__(self):
        """Async context manager entry"""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit"""
        await self.close()
        return False

    def _client_timeout(self, request: WireRequest) -> aiohttp.ClientTimeout:
        return aiohttp.ClientTimeout(
            total=request.timeout,
            sock_connect=min(self._default_sock_connect, request.timeout),
        )

    async def send(self, request: WireRequest) -> RawResponse:
        """Send the request and read the whole body.

        Transport failures are logged and reported in the returned RawResponse
        instead of being raised.
        """
        if self._session is None:
            raise RuntimeError("HTTP client not initialized. Use 'async with' context manager.")

        try:
            async with self._session.request(
                request.method,
                request.url,
                data=request.body,
                headers=request.effective_headers(),
                timeout=self._client_timeout(request),
            ) as response:
                body = await response.read()
                return RawResponse(
                    status=response.status,
                    headers=flatten_headers(response.headers),
                    body=body or None,
                    url=request.url,
                    method=request.method,
                )

        except asyncio.TimeoutError as timeout_error:
            settings.logger.error(
                "Timeout when requesting remote service. Method: %s, URL: %s",
                request.method,
                request.url,
            )
            return RawResponse(error=timeout_error, url=request.url, method=request.method)

        except aiohttp.ClientError as client_error:
            settings.logger.error(
                "Connection error when requesting remote service. Method: %s, URL: %s, Error: %s",
                request.method,
                request.url,
                str(client_error),
            )
            return RawResponse(error=client_error, url=request.url, method=request.method)

    async def close(self) -> None:
        """Close the session"""
        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None
