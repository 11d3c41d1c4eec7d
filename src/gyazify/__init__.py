"""gyazify: typed client for the Gyazo image-hosting API.

Public re-exports
-----------------

* **Clients:** :class:`GyazifyClient`, :class:`AsyncGyazifyClient`
* **Configuration:** :class:`GyazifyConfig`
* **Upload parameters:** :class:`UploadParams`, :class:`UploadParamsBuilder`
* **Errors:** Every :class:`GyazifyError` subclass and :class:`ErrorCode`
* **Models:** All response dataclasses

Usage::

    from gyazify import GyazifyClient, UploadParamsBuilder

    client = GyazifyClient(token="...")
    params = UploadParamsBuilder(open("shot.png", "rb").read()).title("Shot").build()
    result = client.upload_image(params)
    print(result.permalink_url)
"""

from __future__ import annotations

# ── Clients ────────────────────────────────────────────────────────────
from gyazify.async_client import AsyncGyazifyClient
from gyazify.client import GyazifyClient

# ── Configuration ───────────────────────────────────────────────────────
from gyazify.config import GyazifyConfig

# ── Errors ──────────────────────────────────────────────────────────────
from gyazify.errors import (
    ErrorCode,
    GyazifyApiError,
    GyazifyAuthError,
    GyazifyBadRequestError,
    GyazifyDecodeError,
    GyazifyError,
    GyazifyNetworkError,
    GyazifyNotFoundError,
    GyazifyPermissionError,
    GyazifyRateLimitError,
    GyazifyServerError,
    GyazifyUnexpectedStatusError,
    GyazifyUnprocessableError,
    GyazifyValidationError,
)

# ── Models ──────────────────────────────────────────────────────────────
from gyazify.models import (
    DeleteResponse,
    ImageInfo,
    ImageList,
    ImageListEntry,
    ImageMetadata,
    ImageOcr,
    OembedResponse,
    UploadResponse,
)
from gyazify.params import UploadParams, UploadParamsBuilder, validate_upload_params

# ── Public surface ──────────────────────────────────────────────────────

__all__ = [
    # Clients
    "GyazifyClient",
    "AsyncGyazifyClient",
    # Configuration
    "GyazifyConfig",
    # Upload parameters
    "UploadParams",
    "UploadParamsBuilder",
    "validate_upload_params",
    # Error base + code enum
    "GyazifyError",
    "ErrorCode",
    # Client-side errors
    "GyazifyValidationError",
    "GyazifyNetworkError",
    # API errors
    "GyazifyApiError",
    "GyazifyBadRequestError",
    "GyazifyAuthError",
    "GyazifyPermissionError",
    "GyazifyNotFoundError",
    "GyazifyUnprocessableError",
    "GyazifyRateLimitError",
    # Server / decoding errors
    "GyazifyServerError",
    "GyazifyDecodeError",
    "GyazifyUnexpectedStatusError",
    # Models
    "UploadResponse",
    "ImageInfo",
    "ImageListEntry",
    "ImageList",
    "ImageMetadata",
    "ImageOcr",
    "DeleteResponse",
    "OembedResponse",
]
