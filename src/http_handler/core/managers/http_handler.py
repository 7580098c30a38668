# http_handler/core/managers/http_handler.py
from __future__ import annotations

import asyncio
import json
import uuid
from typing import Any, Awaitable, Callable, Dict, FrozenSet, Optional, Set, Tuple, Type, TypeVar

from yarl import URL

from http_handler.adapters.aiohttp_client_adapter import AioHttpClientAdapter
from http_handler.adapters.json_body_builder import JsonBodyBuilder
from http_handler.adapters.pydantic_response_decoder import PydanticJsonDecoder
from http_handler.adapters.schedulers import LoopScheduler
from http_handler.core import settings
from http_handler.core.config import HandlerConfig
from http_handler.core.exceptions import (
    InvalidUrlError,
    NoDataFromServerError,
    NotHttpResponseError,
    SerializationError,
    ServerResponseNotParseableError,
    WrongStatusCodeError,
)
from http_handler.core.interfaces.body_builder import BodyBuilderPort
from http_handler.core.interfaces.http_client import HttpClientPort
from http_handler.core.interfaces.request import HttpRequestPort
from http_handler.core.interfaces.response_decoder import ResponseDecoderPort
from http_handler.core.interfaces.scheduler import CompletionSchedulerPort
from http_handler.core.logging_config import request_id_var
from http_handler.core.models.request_type import RequestType
from http_handler.core.models.result import Failure, Result, Success
from http_handler.core.models.shape import ExpectedShape
from http_handler.core.models.wire import CachePolicy, RawResponse, WireRequest

T = TypeVar("T")

DecodableCompletion = Callable[[Result], None]
TypedCompletion = Callable[[Optional[Any], Optional[BaseException]], None]
MappingCompletion = Callable[
    [Optional[Dict[str, Any]], Dict[str, str], Optional[BaseException]], None
]


class HttpHandler:
    """Turns request descriptors into HTTP calls and funnels every outcome
    into exactly one result.

    Two layers are exposed:

    - awaitable `fetch_decodable`, `fetch_typed` and `fetch`, which return a
      `Result` and never raise for request, transport or decode failures;
    - callback based `make_decodable`, `make_typed` and `make`, which run the
      matching fetch in a new task on the running loop and hand the outcome to
      the completion through the configured scheduler.

    The handler only holds its base URL, its collaborators and the set of
    in-flight tasks, so one instance can serve many concurrent calls. Use it as
    an async context manager so the HTTP client session is opened and closed.
    """

    def __init__(
        self,
        base_url: str,
        http_client: HttpClientPort | None = None,
        body_builder: BodyBuilderPort | None = None,
        decoder: ResponseDecoderPort | None = None,
        scheduler: CompletionSchedulerPort | None = None,
        config: HandlerConfig | None = None,
    ) -> None:
        self.base_url = base_url
        self.http_client = http_client or AioHttpClientAdapter()
        self.body_builder = body_builder or JsonBodyBuilder()
        self.decoder = decoder or PydanticJsonDecoder()
        self.scheduler = scheduler or LoopScheduler()
        self.config = config or HandlerConfig()
        # Strong references so running dispatches are not garbage collected
        self._in_flight: Set[asyncio.Task] = set()

    async def __aenter__(self) -> "HttpHandler":
        await self.http_client.__aenter__()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()
        return False

    async def aclose(self) -> None:
        """Wait for in-flight dispatches, then close the HTTP client."""
        if self._in_flight:
            await asyncio.gather(*list(self._in_flight), return_exceptions=True)
        await self.http_client.close()

    # --- Request building -------------------------------------------------
    def build_url(self, endpoint: str) -> str:
        """Join base URL and endpoint into an absolute http(s) URL.

        Raises InvalidUrlError when the result cannot be used for a request.
        """
        raw = self.base_url + endpoint
        try:
            url = URL(raw)
        except (TypeError, ValueError) as exc:
            raise InvalidUrlError(raw) from exc
        if not url.is_absolute() or url.scheme not in ("http", "https") or not url.host:
            raise InvalidUrlError(raw)
        return str(url)

    def decorate_request(self, wire: WireRequest, request: HttpRequestPort) -> WireRequest:
        """Apply method, headers and body of `request` to `wire`.

        Subclasses may override this to add headers or sign requests. Raises
        SerializationError when the body cannot be built.
        """
        if request.type() is RequestType.multipart:
            settings.logger.debug(
                "Multipart request for %s is sent with a regular body", request.endpoint()
            )
        headers = dict(wire.headers)
        headers.update(request.headers())
        body = self.body_builder.build_body(request) if self.body_builder else None
        return wire.model_copy(
            update={"method": request.method(), "headers": headers, "body": body}
        )

    def prepare(self, request: HttpRequestPort) -> WireRequest:
        cache_policy = (
            CachePolicy.reload_ignoring_cache
            if self.config.bypass_cache
            else CachePolicy.use_protocol
        )
        wire = WireRequest(
            url=self.build_url(request.endpoint()),
            method=request.method(),
            timeout=self.config.request_timeout,
            cache_policy=cache_policy,
        )
        return self.decorate_request(wire, request)

    # --- Shared dispatch --------------------------------------------------
    async def _exchange(
        self, request: HttpRequestPort, accepted: FrozenSet[int]
    ) -> RawResponse | Failure:
        """Send `request` and validate the response up to, not including, decoding."""
        try:
            wire = self.prepare(request)
        except (InvalidUrlError, SerializationError) as exc:
            settings.logger.warning("Request %r not sent: %s", request, exc)
            return Failure(error=exc)

        settings.logger.debug("Sending %s %s", wire.method, wire.url)
        response = await self.http_client.send(wire)

        if not response.is_http:
            if response.error is not None:
                return Failure(error=response.error)
            return Failure(error=NotHttpResponseError(response.debug_description()))

        if response.error is not None:
            return Failure(error=response.error, headers=response.headers)

        if not response.has_body:
            return Failure(error=NoDataFromServerError(), headers=response.headers)

        if response.status not in accepted:
            settings.logger.warning(
                "Unexpected status %s for %s %s", response.status, wire.method, wire.url
            )
            return Failure(
                error=WrongStatusCodeError(response.debug_description()),
                headers=response.headers,
            )

        return response

    async def _run(
        self,
        request: HttpRequestPort,
        accepted: FrozenSet[int],
        finish: Callable[[RawResponse], Result],
    ) -> Result:
        token = request_id_var.set(uuid.uuid4().hex[:12])
        try:
            outcome = await self._exchange(request, accepted)
            if isinstance(outcome, Failure):
                return outcome
            return finish(outcome)
        except Exception as unexpected_error:
            settings.logger.error(
                "Unexpected error while dispatching %r: %s", request, str(unexpected_error)
            )
            return Failure(error=unexpected_error)
        finally:
            request_id_var.reset(token)

    @staticmethod
    def _parse_json(response: RawResponse) -> Any:
        try:
            return json.loads(response.body)
        except ValueError as exc:
            raise ServerResponseNotParseableError(response.text()) from exc

    # --- Awaitable API ----------------------------------------------------
    async def fetch_decodable(
        self,
        request: HttpRequestPort,
        model: Type[T],
        decoder: ResponseDecoderPort | None = None,
    ) -> Result:
        """Send `request` and decode the body into `model`.

        Accepts the configured success status codes. Decoder errors are
        returned unchanged, with the undecoded body in `Failure.raw_body`.
        """
        active_decoder = decoder or self.decoder

        def finish(response: RawResponse) -> Result:
            try:
                value = active_decoder.decode(model, response.body)
            except Exception as decode_error:
                settings.logger.error(
                    "Error when decoding %s: %s",
                    getattr(model, "__name__", repr(model)),
                    response.text(),
                )
                return Failure(
                    error=decode_error, headers=response.headers, raw_body=response.body
                )
            return Success(value=value, headers=response.headers)

        return await self._run(request, self.config.success_status_codes, finish)

    async def fetch_typed(self, request: HttpRequestPort, shape: ExpectedShape) -> Result:
        """Send `request` and check that the JSON body has the expected shape.

        Only the strict status code (200 by default) counts as success.
        """

        def finish(response: RawResponse) -> Result:
            try:
                parsed = self._parse_json(response)
            except ServerResponseNotParseableError as exc:
                return Failure(error=exc, headers=response.headers, raw_body=response.body)
            if not shape.matches(parsed):
                return Failure(
                    error=ServerResponseNotParseableError(response.text()),
                    headers=response.headers,
                    raw_body=response.body,
                )
            return Success(value=parsed, headers=response.headers)

        return await self._run(
            request, frozenset({self.config.strict_status_code}), finish
        )

    async def fetch(self, request: HttpRequestPort) -> Result:
        """Send `request` and return the JSON object body as a dict."""

        def finish(response: RawResponse) -> Result:
            try:
                parsed = self._parse_json(response)
            except ServerResponseNotParseableError as exc:
                return Failure(error=exc, headers=response.headers, raw_body=response.body)
            if not isinstance(parsed, dict):
                return Failure(
                    error=ServerResponseNotParseableError(response.text()),
                    headers=response.headers,
                    raw_body=response.body,
                )
            return Success(value=parsed, headers=response.headers)

        return await self._run(request, self.config.success_status_codes, finish)

    # --- Callback API -----------------------------------------------------
    def _spawn(
        self,
        factory: Callable[[], Awaitable[Result]],
        unpack: Callable[[Result], Tuple[Any, ...]],
        completion: Callable[..., None],
    ) -> None:
        loop = asyncio.get_running_loop()
        task = loop.create_task(factory())
        self._in_flight.add(task)

        def on_done(finished: asyncio.Task) -> None:
            self._in_flight.discard(finished)
            if finished.cancelled():
                result: Result = Failure(error=asyncio.CancelledError())
            elif finished.exception() is not None:
                result = Failure(error=finished.exception())
            else:
                result = finished.result()
            try:
                self.scheduler.deliver(completion, *unpack(result))
            except Exception as delivery_error:
                settings.logger.error(
                    "Failed to deliver completion for dispatch: %s", str(delivery_error)
                )

        task.add_done_callback(on_done)

    def make_decodable(
        self,
        request: HttpRequestPort,
        model: Type[T],
        completion: DecodableCompletion,
        decoder: ResponseDecoderPort | None = None,
    ) -> None:
        """Callback form of `fetch_decodable`; completion gets the Result.

        Must be called from a running event loop, otherwise RuntimeError is
        raised and no completion fires.
        """
        self._spawn(
            lambda: self.fetch_decodable(request, model, decoder),
            lambda result: (result,),
            completion,
        )

    def make_typed(
        self,
        request: HttpRequestPort,
        shape: ExpectedShape,
        completion: TypedCompletion,
    ) -> None:
        """Callback form of `fetch_typed`; completion gets (value, error).

        Must be called from a running event loop, otherwise RuntimeError is
        raised and no completion fires.
        """

        def unpack(result: Result) -> Tuple[Any, ...]:
            if isinstance(result, Success):
                return result.value, None
            return None, result.error

        self._spawn(lambda: self.fetch_typed(request, shape), unpack, completion)

    def make(self, request: HttpRequestPort, completion: MappingCompletion) -> None:
        """Callback form of `fetch`; completion gets (mapping, headers, error).

        Must be called from a running event loop, otherwise RuntimeError is
        raised and no completion fires.
        """

        def unpack(result: Result) -> Tuple[Any, ...]:
            if isinstance(result, Success):
                return result.value, result.headers, None
            return None, result.headers, result.error

        self._spawn(lambda: self.fetch(request), unpack, completion)
