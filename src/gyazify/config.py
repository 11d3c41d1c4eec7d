"""SDK configuration for gyazify.

:class:`GyazifyConfig` is a dataclass that captures every tuneable knob
exposed by the SDK.  Instances are shared by :class:`GyazifyClient` and
:class:`AsyncGyazifyClient` and are never mutated after construction.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any

DEFAULT_BASE_URL = "https://api.gyazo.com"
DEFAULT_UPLOAD_URL = "https://upload.gyazo.com"
DEFAULT_PERMALINK_BASE = "https://gyazo.com"

_LOCAL_HOSTS = ("localhost", "127.0.0.1", "::1")


def _check_https(name: str, url: str) -> None:
    from urllib.parse import urlparse

    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.hostname:
        raise ValueError(f"{name} must be an absolute http(s) URL, got {url!r}")
    if parsed.scheme == "http" and parsed.hostname not in _LOCAL_HOSTS:
        raise ValueError(
            f"{name} uses insecure HTTP for non-local host '{parsed.hostname}'. "
            "Use HTTPS to protect your access token, or target localhost for testing."
        )


@dataclass
class GyazifyConfig:
    """Complete configuration for a gyazify client.

    Every parameter has a sensible default so that the only *required*
    value is ``token``.

    Parameters
    ----------
    token:
        Gyazo access token, sent as a bearer credential.  **Required.**
        Never logged.
    base_url:
        Root URL for image, list, delete and oEmbed endpoints.  Override for
        proxy or testing environments.
    upload_url:
        Root URL for the upload endpoint.  Gyazo serves uploads from a
        separate host.
    permalink_base:
        Root of public image permalinks, used to build oEmbed URLs.
    timeout_seconds:
        HTTP request timeout in seconds.
    http_proxy:
        Optional HTTP/HTTPS proxy URL.
    user_agent:
        Value of the ``User-Agent`` header.  ``None`` keeps the httpx default.
    metrics:
        Optional :class:`~gyazify.observability.MetricsHook` implementation.
    debug_dump_payload:
        Write a redacted dump of each request/response pair to *stderr*.
    """

    # ── Core ────────────────────────────────────────────────────────────
    token: str = ""

    base_url: str = DEFAULT_BASE_URL

    upload_url: str = DEFAULT_UPLOAD_URL

    permalink_base: str = DEFAULT_PERMALINK_BASE

    # ── HTTP ────────────────────────────────────────────────────────────
    timeout_seconds: float = 30.0

    http_proxy: str | None = None

    user_agent: str | None = None

    # ── Observability ──────────────────────────────────────────────────
    metrics: Any | None = None

    # ── Debug ───────────────────────────────────────────────────────────
    debug_dump_payload: bool = False

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        _check_https("base_url", self.base_url)
        _check_https("upload_url", self.upload_url)
        _check_https("permalink_base", self.permalink_base)

        # Trailing slashes would double up when paths are appended.
        self.base_url = self.base_url.rstrip("/")
        self.upload_url = self.upload_url.rstrip("/")
        self.permalink_base = self.permalink_base.rstrip("/")

        # The token travels in an HTTP header.
        if not self.token.isascii() or "\r" in self.token or "\n" in self.token:
            raise ValueError("token must be ASCII without line breaks")

        if self.timeout_seconds <= 0:
            raise ValueError(f"timeout_seconds must be > 0, got {self.timeout_seconds}")

    def __repr__(self) -> str:
        """Mask the token to prevent accidental credential leakage."""
        parts: list[str] = []
        for f in dataclasses.fields(self):
            val = getattr(self, f.name)
            if f.name == "token":
                masked = f"...{val[-4:]}" if len(val) >= 4 else "****"
                parts.append(f"token='{masked}'")
            else:
                parts.append(f"{f.name}={val!r}")
        return f"GyazifyConfig({', '.join(parts)})"
