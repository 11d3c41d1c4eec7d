"""Request encoding for the Gyazo API.

Turns validated inputs into wire-ready :class:`EncodedRequest` objects.
Nothing here performs I/O; the transport sends what these functions build.

* Upload -- ``POST {upload_url}/api/upload`` with a multipart body.  The
  image is the binary part ``imagedata``; every populated optional field
  follows as a text part, unset fields produce no part at all.
* Get / delete -- ``/api/images/{image_id}`` with a path-quoted identifier.
* List -- ``GET /api/images`` with optional ``page`` / ``per_page``.
* oEmbed -- ``GET /api/oembed?url=<permalink>``.

The multipart boundary is derived from a digest of the payload, so encoding
the same :class:`UploadParams` twice yields byte-identical bodies.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any
from urllib.parse import quote

import httpx

from gyazify.config import GyazifyConfig
from gyazify.errors import GyazifyValidationError
from gyazify.params import UploadParams
from gyazify.utils.hashing import hash_parts
from gyazify.utils.mime import upload_file_info

MAX_PER_PAGE = 100


@dataclass(frozen=True)
class EncodedRequest:
    """A fully encoded HTTP request, ready for the transport.

    Attributes
    ----------
    method:
        HTTP method.
    url:
        Absolute URL, without query string.
    endpoint:
        Short operation name used for logging and metric tags.
    params:
        Query parameters, or ``None``.
    content:
        Raw request body, or ``None`` for body-less requests.
    headers:
        Per-request headers (``Content-Type`` for uploads).
    fields:
        Text fields of a multipart body, kept for debug dumps.
    """

    method: str
    url: str
    endpoint: str
    params: dict[str, str] | None = None
    content: bytes | None = None
    headers: dict[str, str] = field(default_factory=dict)
    fields: dict[str, str] = field(default_factory=dict)

    def send_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for :meth:`httpx.Client.request`."""
        kwargs: dict[str, Any] = {}
        if self.params is not None:
            kwargs["params"] = self.params
        if self.content is not None:
            kwargs["content"] = self.content
        if self.headers:
            kwargs["headers"] = dict(self.headers)
        return kwargs


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _image_path(image_id: Any) -> str:
    if not isinstance(image_id, str) or not image_id:
        raise GyazifyValidationError(
            message="image_id must be a non-empty string",
            context={"field": "image_id", "value": image_id, "constraint": "non-empty string"},
        )
    # Dot segments would be collapsed by URL normalisation.
    if image_id in (".", ".."):
        raise GyazifyValidationError(
            message="image_id must not be a dot segment",
            context={"field": "image_id", "value": image_id, "constraint": "not . or .."},
        )
    return f"/api/images/{quote(image_id, safe='')}"


def _positive_int(name: str, value: Any, maximum: int | None = None) -> str:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise GyazifyValidationError(
            message=f"{name} must be a positive integer",
            context={"field": name, "value": value, "constraint": ">= 1"},
        )
    if maximum is not None and value > maximum:
        raise GyazifyValidationError(
            message=f"{name} must be at most {maximum}",
            context={"field": name, "value": value, "constraint": f"<= {maximum}"},
        )
    return str(value)


# ---------------------------------------------------------------------------
# Encoders
# ---------------------------------------------------------------------------

def encode_upload(params: UploadParams, config: GyazifyConfig) -> EncodedRequest:
    """Encode *params* as a deterministic multipart upload request."""
    text_fields = params.text_fields()
    filename, content_type = upload_file_info(params.imagedata)
    boundary = hash_parts([("imagedata", params.imagedata), *text_fields.items()])

    url = f"{config.upload_url}/api/upload"
    request = httpx.Request(
        "POST",
        url,
        data=text_fields,
        files={"imagedata": (filename, params.imagedata, content_type)},
        headers={"Content-Type": f"multipart/form-data; boundary={boundary}"},
    )
    return EncodedRequest(
        method="POST",
        url=url,
        endpoint="upload_image",
        content=request.read(),
        headers={"Content-Type": request.headers["Content-Type"]},
        fields=text_fields,
    )


def encode_get_image(image_id: str, config: GyazifyConfig) -> EncodedRequest:
    return EncodedRequest(
        method="GET",
        url=f"{config.base_url}{_image_path(image_id)}",
        endpoint="get_image",
    )


def encode_list_images(
    config: GyazifyConfig,
    page: int | None = None,
    per_page: int | None = None,
) -> EncodedRequest:
    """Encode ``GET /api/images``.  Omitted paging values are not sent."""
    query: dict[str, str] = {}
    if page is not None:
        query["page"] = _positive_int("page", page)
    if per_page is not None:
        query["per_page"] = _positive_int("per_page", per_page, MAX_PER_PAGE)
    return EncodedRequest(
        method="GET",
        url=f"{config.base_url}/api/images",
        endpoint="list_images",
        params=query or None,
    )


def encode_delete_image(image_id: str, config: GyazifyConfig) -> EncodedRequest:
    return EncodedRequest(
        method="DELETE",
        url=f"{config.base_url}{_image_path(image_id)}",
        endpoint="delete_image",
    )


def encode_get_oembed(url: str, config: GyazifyConfig) -> EncodedRequest:
    """Encode an oEmbed lookup for a Gyazo permalink *url*."""
    prefix = f"{config.permalink_base}/"
    if not isinstance(url, str) or not url.startswith(prefix) or url == prefix:
        raise GyazifyValidationError(
            message=f"URL must start with '{prefix}'",
            context={"field": "url", "value": url, "constraint": f"starts with {prefix}"},
        )
    return EncodedRequest(
        method="GET",
        url=f"{config.base_url}/api/oembed",
        endpoint="get_oembed",
        params={"url": url},
    )


def build_oembed_url(image_id: str, config: GyazifyConfig) -> str:
    """Return the oEmbed endpoint URL for *image_id*.

    Pure string formatting; the identifier is embedded verbatim.
    """
    if not isinstance(image_id, str) or not image_id:
        raise GyazifyValidationError(
            message="image_id must be a non-empty string",
            context={"field": "image_id", "value": image_id, "constraint": "non-empty string"},
        )
    return f"{config.base_url}/api/oembed?url={config.permalink_base}/{image_id}"
