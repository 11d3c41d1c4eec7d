"""Image API wrappers for the Gyazo API.

Provides :class:`ImageAPI` (sync) and :class:`AsyncImageAPI` (async).  Each
method is one encode → send → decode pass; all HTTP concerns live in the
transport and all status handling in :mod:`.decode`.
"""

from __future__ import annotations

from gyazify.models import (
    DeleteResponse,
    ImageInfo,
    ImageList,
    OembedResponse,
    UploadResponse,
)
from gyazify.observability import NoopMetricsHook
from gyazify.params import UploadParams

from .decode import (
    decode_delete,
    decode_image,
    decode_image_list,
    decode_oembed,
    decode_response,
    decode_upload,
)
from .encode import (
    encode_delete_image,
    encode_get_image,
    encode_get_oembed,
    encode_list_images,
    encode_upload,
)
from .transport import AsyncGyazoTransport, GyazoTransport


class ImageAPI:
    """Synchronous wrapper for the Gyazo image endpoints.

    Parameters
    ----------
    transport:
        A configured :class:`GyazoTransport` instance.
    """

    def __init__(self, transport: GyazoTransport) -> None:
        self._transport = transport
        self._config = transport.config
        self._metrics = (
            self._config.metrics if self._config.metrics is not None else NoopMetricsHook()
        )

    def upload(self, params: UploadParams) -> UploadResponse:
        """``POST /api/upload``."""
        request = encode_upload(params, self._config)
        response = self._transport.send(request)
        return decode_response(response, request.endpoint, decode_upload, self._metrics)

    def get(self, image_id: str) -> ImageInfo:
        """``GET /api/images/{image_id}``."""
        request = encode_get_image(image_id, self._config)
        response = self._transport.send(request)
        return decode_response(response, request.endpoint, decode_image, self._metrics)

    def list(self, page: int | None = None, per_page: int | None = None) -> ImageList:
        """``GET /api/images``.

        Parameters
        ----------
        page:
            1-based page number.  Omitted means the API default (first page).
        per_page:
            Page size, at most 100.  Omitted means the API default.
        """
        request = encode_list_images(self._config, page=page, per_page=per_page)
        response = self._transport.send(request)
        return decode_response(response, request.endpoint, decode_image_list, self._metrics)

    def delete(self, image_id: str) -> DeleteResponse:
        """``DELETE /api/images/{image_id}``."""
        request = encode_delete_image(image_id, self._config)
        response = self._transport.send(request)
        return decode_response(response, request.endpoint, decode_delete, self._metrics)

    def oembed(self, url: str) -> OembedResponse:
        """``GET /api/oembed?url=...``."""
        request = encode_get_oembed(url, self._config)
        response = self._transport.send(request)
        return decode_response(response, request.endpoint, decode_oembed, self._metrics)


class AsyncImageAPI:
    """Asynchronous wrapper for the Gyazo image endpoints.

    Mirrors :class:`ImageAPI` but all methods are coroutines.
    """

    def __init__(self, transport: AsyncGyazoTransport) -> None:
        self._transport = transport
        self._config = transport.config
        self._metrics = (
            self._config.metrics if self._config.metrics is not None else NoopMetricsHook()
        )

    async def upload(self, params: UploadParams) -> UploadResponse:
        request = encode_upload(params, self._config)
        response = await self._transport.send(request)
        return decode_response(response, request.endpoint, decode_upload, self._metrics)

    async def get(self, image_id: str) -> ImageInfo:
        request = encode_get_image(image_id, self._config)
        response = await self._transport.send(request)
        return decode_response(response, request.endpoint, decode_image, self._metrics)

    async def list(
        self,
        page: int | None = None,
        per_page: int | None = None,
    ) -> ImageList:
        request = encode_list_images(self._config, page=page, per_page=per_page)
        response = await self._transport.send(request)
        return decode_response(response, request.endpoint, decode_image_list, self._metrics)

    async def delete(self, image_id: str) -> DeleteResponse:
        request = encode_delete_image(image_id, self._config)
        response = await self._transport.send(request)
        return decode_response(response, request.endpoint, decode_delete, self._metrics)

    async def oembed(self, url: str) -> OembedResponse:
        request = encode_get_oembed(url, self._config)
        response = await self._transport.send(request)
        return decode_response(response, request.endpoint, decode_oembed, self._metrics)
