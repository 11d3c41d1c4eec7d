"""Response decoding for the Gyazo API.

:func:`raise_for_status` classifies the status code and raises the matching
:class:`~gyazify.errors.GyazifyError` subclass; the ``decode_*`` functions
turn a successful body into its typed model.  :func:`decode_response`
combines the two and is what the endpoint wrappers call.

Status classification:

* ``200`` / ``201`` -- success, body decoded.
* ``4xx`` -- :class:`GyazifyApiError` or one of its subclasses.
* ``5xx`` -- :class:`GyazifyServerError`.
* anything else -- :class:`GyazifyUnexpectedStatusError`.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from enum import Enum
from typing import Any, TypeVar

import httpx

from gyazify.errors import (
    GyazifyApiError,
    GyazifyAuthError,
    GyazifyBadRequestError,
    GyazifyDecodeError,
    GyazifyError,
    GyazifyNotFoundError,
    GyazifyPermissionError,
    GyazifyRateLimitError,
    GyazifyServerError,
    GyazifyUnexpectedStatusError,
    GyazifyUnprocessableError,
)
from gyazify.models import (
    DeleteResponse,
    ImageInfo,
    ImageList,
    OembedResponse,
    UploadResponse,
)

T = TypeVar("T")

SUCCESS_STATUSES: frozenset[int] = frozenset({200, 201})

_API_ERRORS: dict[int, tuple[type[GyazifyApiError], str]] = {
    400: (GyazifyBadRequestError, "Bad request"),
    401: (GyazifyAuthError, "Authentication failed"),
    403: (GyazifyPermissionError, "Permission denied"),
    404: (GyazifyNotFoundError, "Not found"),
    422: (GyazifyUnprocessableError, "Unprocessable entity"),
    429: (GyazifyRateLimitError, "Rate limit exceeded"),
}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _parse_retry_after(response: httpx.Response) -> float | None:
    """Extract the ``Retry-After`` header value as a float, or ``None``."""
    raw = response.headers.get("retry-after")
    if raw is None:
        return None
    try:
        value = float(raw)
    except (ValueError, TypeError):
        return None
    if not math.isfinite(value) or value < 0:
        return None
    return value


def _code_tag(code: Any) -> str:
    return code.value if isinstance(code, Enum) else str(code)


def _request_line(response: httpx.Response) -> tuple[str, str]:
    try:
        request = response.request
    except RuntimeError:
        return "", ""
    return request.method, request.url.path


def _error_message(response: httpx.Response) -> tuple[str, Any]:
    """Return ``(message, body)`` from an error response."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        message = body.get("message") or body.get("error")
        if isinstance(message, str) and message:
            return message, body
    return response.text[:500], body


# ---------------------------------------------------------------------------
# Status classification
# ---------------------------------------------------------------------------

def raise_for_status(response: httpx.Response, endpoint: str) -> None:
    """Raise the typed error for *response* unless it is a success."""
    status = response.status_code
    if status in SUCCESS_STATUSES:
        return

    method, path = _request_line(response)
    ctx: dict[str, Any] = {"endpoint": endpoint, "method": method, "path": path}

    if 400 <= status < 500:
        message, body = _error_message(response)
        ctx["body"] = body
        error_cls, label = _API_ERRORS.get(status, (GyazifyApiError, f"Client error {status}"))
        if error_cls is GyazifyRateLimitError:
            ctx["retry_after_seconds"] = _parse_retry_after(response)
        raise error_cls(
            message=f"{label} on {endpoint}: {message}",
            status_code=status,
            context=ctx,
        )

    if 500 <= status < 600:
        message, _ = _error_message(response)
        raise GyazifyServerError(
            message=f"Server error {status} on {endpoint}: {message}",
            status_code=status,
            context=ctx,
        )

    raise GyazifyUnexpectedStatusError(
        message=f"Unexpected status {status} on {endpoint}",
        status_code=status,
        context=ctx,
    )


# ---------------------------------------------------------------------------
# Body decoding
# ---------------------------------------------------------------------------

def decode_json(response: httpx.Response, expected: str) -> Any:
    """Parse the response body as JSON, raising :class:`GyazifyDecodeError`."""
    try:
        return response.json()
    except ValueError as exc:
        raise GyazifyDecodeError(
            message=f"Response body for {expected} is not valid JSON",
            context={"expected": expected, "body": response.text[:500]},
            cause=exc,
        ) from exc


def decode_upload(response: httpx.Response) -> UploadResponse:
    return UploadResponse.from_dict(decode_json(response, "UploadResponse"))


def decode_image(response: httpx.Response) -> ImageInfo:
    return ImageInfo.from_dict(decode_json(response, "ImageInfo"))


def decode_image_list(response: httpx.Response) -> ImageList:
    return ImageList.from_json(
        decode_json(response, "ImageList"),
        headers=dict(response.headers),
    )


def decode_delete(response: httpx.Response) -> DeleteResponse:
    return DeleteResponse.from_dict(decode_json(response, "DeleteResponse"))


def decode_oembed(response: httpx.Response) -> OembedResponse:
    return OembedResponse.from_dict(decode_json(response, "OembedResponse"))


def decode_response(
    response: httpx.Response,
    endpoint: str,
    decoder: Callable[[httpx.Response], T],
    metrics: Any | None = None,
) -> T:
    """Classify *response* and decode a success body with *decoder*.

    Every typed error raised here is counted as ``gyazify.errors_total``
    on *metrics* (tags ``endpoint`` and ``code``) before it propagates.
    """
    try:
        raise_for_status(response, endpoint)
        return decoder(response)
    except GyazifyError as exc:
        if metrics is not None:
            metrics.increment(
                "gyazify.errors_total",
                tags={"endpoint": endpoint, "code": _code_tag(exc.code)},
            )
        raise
