"""Shared test fixtures for the gyazify test suite."""

from __future__ import annotations

import json
from collections.abc import Callable

import httpx
import pytest

from gyazify.config import GyazifyConfig


def _json_response(
    status_code: int,
    body: object = None,
    headers: dict[str, str] | None = None,
) -> httpx.Response:
    """Build an httpx.Response with a JSON body (no body for ``None``)."""
    content = json.dumps(body).encode() if body is not None else b""
    return httpx.Response(status_code, content=content, headers=headers or {})


class RecordingHandler:
    """``httpx.MockTransport`` handler that records every request.

    Queued responses are returned in order; the last one repeats.
    """

    def __init__(self, *responses: httpx.Response) -> None:
        self._responses = list(responses)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if len(self._responses) > 1:
            return self._responses.pop(0)
        return self._responses[0]

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def config() -> GyazifyConfig:
    """Default test configuration with a dummy token."""
    return GyazifyConfig(token="test_token_1234")


@pytest.fixture
def png_bytes() -> bytes:
    """A minimal byte string carrying the PNG signature."""
    return b"\x89PNG\r\n\x1a\n" + b"\x00" * 24


@pytest.fixture
def json_response() -> Callable[..., httpx.Response]:
    return _json_response


@pytest.fixture
def make_handler() -> Callable[..., RecordingHandler]:
    return RecordingHandler
