"""Asynchronous Gyazo SDK client.

:class:`AsyncGyazifyClient` mirrors :class:`GyazifyClient` but every I/O
method is an ``async def`` coroutine.  Calls hold no shared mutable state,
so one client may serve many concurrent tasks.

Usage::

    import asyncio
    from gyazify import AsyncGyazifyClient

    async def main():
        async with AsyncGyazifyClient(token="...") as client:
            images = await client.list_images(per_page=20)
            for image in images:
                print(image.image_id, image.permalink_url)

    asyncio.run(main())
"""

from __future__ import annotations

import time
from typing import Any

import httpx

from gyazify.client import _log_complete, _log_start
from gyazify.config import GyazifyConfig
from gyazify.gyazo_api.encode import build_oembed_url
from gyazify.gyazo_api.images import AsyncImageAPI
from gyazify.gyazo_api.transport import AsyncGyazoTransport
from gyazify.models import (
    DeleteResponse,
    ImageInfo,
    ImageList,
    OembedResponse,
    UploadResponse,
)
from gyazify.params import UploadParams


class AsyncGyazifyClient:
    """Asynchronous Gyazo SDK client.

    Parameters
    ----------
    token:
        Gyazo access token.  **Required.**
    http_transport:
        Optional async ``httpx`` transport, e.g. :class:`httpx.MockTransport`.
    **kwargs:
        All remaining keyword arguments are forwarded to
        :class:`GyazifyConfig`.
    """

    def __init__(
        self,
        token: str,
        *,
        http_transport: httpx.AsyncBaseTransport | None = None,
        **kwargs: Any,
    ) -> None:
        self._config = GyazifyConfig(token=token, **kwargs)
        self._transport = AsyncGyazoTransport(self._config, http_transport=http_transport)
        self._images = AsyncImageAPI(self._transport)

    @property
    def config(self) -> GyazifyConfig:
        return self._config

    async def upload_image(self, params: UploadParams) -> UploadResponse:
        """Upload an image (async).  See :meth:`GyazifyClient.upload_image`."""
        _log_start("upload_image", size_bytes=len(params.imagedata))
        t0 = time.monotonic()
        result = await self._images.upload(params)
        _log_complete(
            "upload_image", t0,
            image_id=result.image_id, size_bytes=len(params.imagedata),
        )
        return result

    async def get_image(self, image_id: str) -> ImageInfo:
        _log_start("get_image", image_id=image_id)
        t0 = time.monotonic()
        result = await self._images.get(image_id)
        _log_complete("get_image", t0, image_id=image_id)
        return result

    async def list_images(
        self,
        page: int | None = None,
        per_page: int | None = None,
    ) -> ImageList:
        _log_start("list_images", page=page, per_page=per_page)
        t0 = time.monotonic()
        result = await self._images.list(page=page, per_page=per_page)
        _log_complete("list_images", t0, count=len(result), page=page)
        return result

    async def delete_image(self, image_id: str) -> DeleteResponse:
        _log_start("delete_image", image_id=image_id)
        t0 = time.monotonic()
        result = await self._images.delete(image_id)
        _log_complete("delete_image", t0, image_id=image_id)
        return result

    def get_oembed_url(self, image_id: str) -> str:
        """Return the oEmbed URL for *image_id*.  Synchronous: no I/O."""
        return build_oembed_url(image_id, self._config)

    async def get_oembed(self, url: str) -> OembedResponse:
        _log_start("get_oembed", url=url)
        t0 = time.monotonic()
        result = await self._images.oembed(url)
        _log_complete("get_oembed", t0, url=url)
        return result

    async def close(self) -> None:
        """Close the underlying async HTTP client and release resources."""
        await self._transport.close()

    async def __aenter__(self) -> AsyncGyazifyClient:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()
