"""gyazify.gyazo_api -- Gyazo API encoding, transport and decoding.

This sub-package provides:

* :mod:`.encode` -- Request encoding (multipart uploads, paths, queries).
* :mod:`.transport` -- HTTP transport with bearer authentication.
* :mod:`.decode` -- Status classification and typed body decoding.
* :mod:`.images` -- Image endpoint wrappers composing the three above.
"""

from __future__ import annotations

from .decode import decode_response, raise_for_status
from .encode import (
    EncodedRequest,
    build_oembed_url,
    encode_delete_image,
    encode_get_image,
    encode_get_oembed,
    encode_list_images,
    encode_upload,
)
from .images import AsyncImageAPI, ImageAPI
from .transport import AsyncGyazoTransport, GyazoTransport

__all__ = [
    "AsyncGyazoTransport",
    "AsyncImageAPI",
    "EncodedRequest",
    "GyazoTransport",
    "ImageAPI",
    "build_oembed_url",
    "decode_response",
    "encode_delete_image",
    "encode_get_image",
    "encode_get_oembed",
    "encode_list_images",
    "encode_upload",
    "raise_for_status",
]
