"""Sync and async HTTP transports for the Gyazo API.

Each transport handles one request lifecycle and nothing more:

1. Send the :class:`EncodedRequest` with the bearer credential attached.
2. On a transport-level failure (DNS, connect, timeout, protocol) -- raise
   :class:`GyazifyNetworkError` with the ``httpx`` exception chained.
3. Otherwise -- record metrics, optionally dump the exchange, and return
   the raw :class:`httpx.Response` for the decoder.

There are no retries, no backoff and no status handling here; the decoder
owns status classification and callers own retry policy.

The underlying ``httpx`` transport can be swapped (``http_transport=``),
which is how tests substitute :class:`httpx.MockTransport`.
"""

from __future__ import annotations

import json as _json
import sys
import time
from typing import Any

import httpx

from gyazify.config import GyazifyConfig
from gyazify.errors import ErrorCode, GyazifyNetworkError
from gyazify.observability import NoopMetricsHook, get_logger

from .encode import EncodedRequest

log = get_logger("gyazify.transport")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _default_headers(config: GyazifyConfig) -> dict[str, str]:
    headers = {
        "Authorization": f"Bearer {config.token}",
        "Accept": "application/json",
    }
    if config.user_agent:
        headers["User-Agent"] = config.user_agent
    return headers


def _dump_exchange(
    request: EncodedRequest,
    response_status: int | None,
    response_body: Any | None,
    token: str | None = None,
) -> None:
    """Write a redacted debug dump of the request/response to stderr."""
    from gyazify.utils.redact import redact

    dump: dict[str, Any] = {
        "method": request.method,
        "url": request.url,
    }
    if request.params:
        dump["params"] = request.params
    if request.fields:
        dump["fields"] = request.fields
    if request.content is not None:
        dump["request_body"] = request.content
    if response_status is not None:
        dump["response_status"] = response_status
    if response_body is not None:
        dump["response_body"] = response_body
    print(
        _json.dumps(redact(dump, token), indent=2, default=str),
        file=sys.stderr,
    )


def _emit_debug_dump(
    config: GyazifyConfig,
    request: EncodedRequest,
    response: httpx.Response,
) -> None:
    if not config.debug_dump_payload:
        return
    try:
        body = response.json()
    except ValueError:
        body = response.text[:1000]
    _dump_exchange(request, response.status_code, body, token=config.token)


def _network_error(
    metrics: Any,
    request: EncodedRequest,
    exc: Exception,
) -> GyazifyNetworkError:
    metrics.increment(
        "gyazify.requests_total",
        tags={"method": request.method, "endpoint": request.endpoint, "status": "error"},
    )
    metrics.increment(
        "gyazify.errors_total",
        tags={"endpoint": request.endpoint, "code": ErrorCode.NETWORK_ERROR.value},
    )
    log.warning(
        "Request network error",
        extra={
            "extra_fields": {
                "op": request.endpoint,
                "method": request.method,
                "url": request.url,
                "error": str(exc),
            }
        },
    )
    return GyazifyNetworkError(
        message=f"Network error on {request.method} {request.url}: {exc}",
        context={"method": request.method, "url": request.url},
        cause=exc,
    )


def _record_response(
    metrics: Any,
    request: EncodedRequest,
    response: httpx.Response,
    elapsed_ms: float,
) -> None:
    tags = {
        "method": request.method,
        "endpoint": request.endpoint,
        "status": str(response.status_code),
    }
    metrics.increment("gyazify.requests_total", tags=tags)
    metrics.timing("gyazify.request_duration_ms", elapsed_ms, tags=tags)
    log.debug(
        "Request complete",
        extra={
            "extra_fields": {
                "op": request.endpoint,
                "method": request.method,
                "status_code": response.status_code,
                "duration_ms": round(elapsed_ms, 2),
            }
        },
    )


# ---------------------------------------------------------------------------
# Sync transport
# ---------------------------------------------------------------------------

class GyazoTransport:
    """Synchronous HTTP transport with bearer authentication.

    Parameters
    ----------
    config:
        A :class:`GyazifyConfig` instance controlling transport behaviour.
    http_transport:
        Optional ``httpx`` transport, e.g. :class:`httpx.MockTransport`.
    """

    def __init__(
        self,
        config: GyazifyConfig,
        http_transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._config = config
        self._metrics = config.metrics if config.metrics is not None else NoopMetricsHook()
        self._client = httpx.Client(
            headers=_default_headers(config),
            timeout=httpx.Timeout(config.timeout_seconds),
            proxy=config.http_proxy,
            transport=http_transport,
        )

    @property
    def config(self) -> GyazifyConfig:
        return self._config

    def send(self, request: EncodedRequest) -> httpx.Response:
        """Send *request* and return the raw response.

        Raises
        ------
        GyazifyNetworkError
            On any ``httpx`` transport failure.
        """
        t0 = time.monotonic()
        try:
            response = self._client.request(
                request.method, request.url, **request.send_kwargs(),
            )
        except httpx.TransportError as exc:
            raise _network_error(self._metrics, request, exc) from exc
        elapsed_ms = (time.monotonic() - t0) * 1000

        _record_response(self._metrics, request, response, elapsed_ms)
        _emit_debug_dump(self._config, request, response)
        return response

    def close(self) -> None:
        """Close the underlying HTTP client and release resources."""
        self._client.close()

    def __enter__(self) -> GyazoTransport:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()


# ---------------------------------------------------------------------------
# Async transport
# ---------------------------------------------------------------------------

class AsyncGyazoTransport:
    """Asynchronous HTTP transport with bearer authentication.

    Mirrors :class:`GyazoTransport` but uses ``httpx.AsyncClient``.
    """

    def __init__(
        self,
        config: GyazifyConfig,
        http_transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config
        self._metrics = config.metrics if config.metrics is not None else NoopMetricsHook()
        self._client = httpx.AsyncClient(
            headers=_default_headers(config),
            timeout=httpx.Timeout(config.timeout_seconds),
            proxy=config.http_proxy,
            transport=http_transport,
        )

    @property
    def config(self) -> GyazifyConfig:
        return self._config

    async def send(self, request: EncodedRequest) -> httpx.Response:
        """Send *request* and return the raw response (async).

        See :meth:`GyazoTransport.send`.
        """
        t0 = time.monotonic()
        try:
            response = await self._client.request(
                request.method, request.url, **request.send_kwargs(),
            )
        except httpx.TransportError as exc:
            raise _network_error(self._metrics, request, exc) from exc
        elapsed_ms = (time.monotonic() - t0) * 1000

        _record_response(self._metrics, request, response, elapsed_ms)
        _emit_debug_dump(self._config, request, response)
        return response

    async def close(self) -> None:
        """Close the underlying async HTTP client and release resources."""
        await self._client.aclose()

    async def __aenter__(self) -> AsyncGyazoTransport:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()
