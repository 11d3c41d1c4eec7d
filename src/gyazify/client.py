"""Synchronous Gyazo SDK client.

:class:`GyazifyClient` is the single entry point for the Gyazo API.  Every
method is one HTTP exchange (except :meth:`GyazifyClient.get_oembed_url`,
which performs none) and either returns a typed model or raises a
:class:`~gyazify.errors.GyazifyError` subclass.

Usage::

    from gyazify import GyazifyClient, UploadParamsBuilder

    with GyazifyClient(token="...") as client:
        params = UploadParamsBuilder(png_bytes).title("Screenshot").build()
        uploaded = client.upload_image(params)
        print(uploaded.permalink_url)
"""

from __future__ import annotations

import time
from typing import Any

import httpx

from gyazify.config import GyazifyConfig
from gyazify.gyazo_api.encode import build_oembed_url
from gyazify.gyazo_api.images import ImageAPI
from gyazify.gyazo_api.transport import GyazoTransport
from gyazify.models import (
    DeleteResponse,
    ImageInfo,
    ImageList,
    OembedResponse,
    UploadResponse,
)
from gyazify.observability import get_logger
from gyazify.params import UploadParams

log = get_logger("gyazify.client")


def _log_start(op: str, **fields: Any) -> None:
    log.debug(f"{op} start", extra={"extra_fields": {"op": op, **fields}})


def _log_complete(op: str, t0: float, **fields: Any) -> None:
    log.info(
        f"{op} complete",
        extra={
            "extra_fields": {
                "op": op,
                "duration_ms": round((time.monotonic() - t0) * 1000, 2),
                **fields,
            }
        },
    )


class GyazifyClient:
    """Synchronous Gyazo SDK client.

    Parameters
    ----------
    token:
        Gyazo access token.  **Required.**  Not validated until first use.
    http_transport:
        Optional ``httpx`` transport, e.g. :class:`httpx.MockTransport` in
        tests.
    **kwargs:
        All remaining keyword arguments are forwarded to
        :class:`GyazifyConfig`.
    """

    def __init__(
        self,
        token: str,
        *,
        http_transport: httpx.BaseTransport | None = None,
        **kwargs: Any,
    ) -> None:
        self._config = GyazifyConfig(token=token, **kwargs)
        self._transport = GyazoTransport(self._config, http_transport=http_transport)
        self._images = ImageAPI(self._transport)

    @property
    def config(self) -> GyazifyConfig:
        return self._config

    # ------------------------------------------------------------------
    # Images
    # ------------------------------------------------------------------

    def upload_image(self, params: UploadParams) -> UploadResponse:
        """Upload an image.

        Parameters
        ----------
        params:
            Validated parameters from :class:`UploadParamsBuilder`.

        Returns
        -------
        UploadResponse
        """
        _log_start("upload_image", size_bytes=len(params.imagedata))
        t0 = time.monotonic()
        result = self._images.upload(params)
        _log_complete(
            "upload_image", t0,
            image_id=result.image_id, size_bytes=len(params.imagedata),
        )
        return result

    def get_image(self, image_id: str) -> ImageInfo:
        """Fetch the metadata of one image.

        Raises
        ------
        GyazifyNotFoundError
            When the image does not exist.
        """
        _log_start("get_image", image_id=image_id)
        t0 = time.monotonic()
        result = self._images.get(image_id)
        _log_complete("get_image", t0, image_id=image_id)
        return result

    def list_images(
        self,
        page: int | None = None,
        per_page: int | None = None,
    ) -> ImageList:
        """List the token owner's images, newest first.

        An empty :class:`ImageList` is a valid result, not an error.
        """
        _log_start("list_images", page=page, per_page=per_page)
        t0 = time.monotonic()
        result = self._images.list(page=page, per_page=per_page)
        _log_complete("list_images", t0, count=len(result), page=page)
        return result

    def delete_image(self, image_id: str) -> DeleteResponse:
        """Delete one image."""
        _log_start("delete_image", image_id=image_id)
        t0 = time.monotonic()
        result = self._images.delete(image_id)
        _log_complete("delete_image", t0, image_id=image_id)
        return result

    # ------------------------------------------------------------------
    # oEmbed
    # ------------------------------------------------------------------

    def get_oembed_url(self, image_id: str) -> str:
        """Return the oEmbed URL for *image_id* without any network call."""
        return build_oembed_url(image_id, self._config)

    def get_oembed(self, url: str) -> OembedResponse:
        """Fetch the oEmbed document for a Gyazo permalink *url*.

        Raises
        ------
        GyazifyValidationError
            When *url* is not under ``config.permalink_base``.
        """
        _log_start("get_oembed", url=url)
        t0 = time.monotonic()
        result = self._images.oembed(url)
        _log_complete("get_oembed", t0, url=url)
        return result

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self) -> None:
        """Close the underlying HTTP client and release resources."""
        self._transport.close()

    def __enter__(self) -> GyazifyClient:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()
