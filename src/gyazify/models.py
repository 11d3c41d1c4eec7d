"""Public data models for the gyazify SDK.

Every response type returned by the client lives here.  All types are
frozen dataclasses whose field names match the JSON keys of the Gyazo API
exactly (``type`` being the only exception, exposed as ``type`` as well
since dataclass fields may shadow builtins).

Each model has a ``from_dict`` constructor that validates the decoded JSON
and raises :class:`~gyazify.errors.GyazifyDecodeError` on a shape mismatch.
Optional keys may be absent or ``null``; required keys must be present
with the documented type.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from typing import Any, overload

from gyazify.errors import GyazifyDecodeError

_MISSING = object()


# ---------------------------------------------------------------------------
# Field helpers
# ---------------------------------------------------------------------------

def _require_object(data: Any, expected: str) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise GyazifyDecodeError(
            message=f"Expected a JSON object for {expected}, got {type(data).__name__}",
            context={"expected": expected, "body": data},
        )
    return data


def _field(
    data: dict[str, Any],
    name: str,
    kind: type | tuple[type, ...],
    expected: str,
    *,
    required: bool,
) -> Any:
    value = data.get(name, _MISSING)
    if value is _MISSING or value is None:
        if required:
            raise GyazifyDecodeError(
                message=f"Missing required field {name!r} in {expected}",
                context={"expected": expected, "field": name, "body": data},
            )
        return None
    kinds = kind if isinstance(kind, tuple) else (kind,)
    # bool is a subclass of int; never accept it where a number is expected.
    if (isinstance(value, bool) and bool not in kinds) or not isinstance(value, kinds):
        raise GyazifyDecodeError(
            message=(
                f"Field {name!r} in {expected} has type {type(value).__name__}"
            ),
            context={"expected": expected, "field": name, "body": data},
        )
    return value


def _str(data: dict[str, Any], name: str, expected: str, *, required: bool = True) -> Any:
    return _field(data, name, str, expected, required=required)


# ---------------------------------------------------------------------------
# Image records
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ImageMetadata:
    """Caller-supplied metadata attached to an image at upload time."""

    app: str | None = None
    title: str | None = None
    url: str | None = None
    desc: str | None = None

    @classmethod
    def from_dict(cls, data: Any) -> ImageMetadata:
        obj = _require_object(data, "ImageMetadata")
        return cls(
            app=_str(obj, "app", "ImageMetadata", required=False),
            title=_str(obj, "title", "ImageMetadata", required=False),
            url=_str(obj, "url", "ImageMetadata", required=False),
            desc=_str(obj, "desc", "ImageMetadata", required=False),
        )


@dataclass(frozen=True)
class ImageOcr:
    """Text Gyazo recognised in the image."""

    locale: str
    description: str

    @classmethod
    def from_dict(cls, data: Any) -> ImageOcr:
        obj = _require_object(data, "ImageOcr")
        return cls(
            locale=_str(obj, "locale", "ImageOcr"),
            description=_str(obj, "description", "ImageOcr"),
        )


@dataclass(frozen=True)
class ImageInfo:
    """Full metadata record for a previously uploaded image.

    A read-only projection of remote state at request time.  ``permalink_url``
    and ``url`` are ``None`` for images the token owner has restricted.
    """

    image_id: str
    type: str
    created_at: str
    permalink_url: str | None = None
    thumb_url: str | None = None
    url: str | None = None
    metadata: ImageMetadata = field(default_factory=ImageMetadata)
    ocr: ImageOcr | None = None
    star: bool | None = None
    access_policy: str | None = None
    metadata_is_public: bool | None = None

    @classmethod
    def from_dict(cls, data: Any) -> ImageInfo:
        name = "ImageInfo"
        obj = _require_object(data, name)
        raw_metadata = obj.get("metadata")
        raw_ocr = obj.get("ocr")
        return cls(
            image_id=_str(obj, "image_id", name),
            type=_str(obj, "type", name),
            created_at=_str(obj, "created_at", name),
            permalink_url=_str(obj, "permalink_url", name, required=False),
            thumb_url=_str(obj, "thumb_url", name, required=False),
            url=_str(obj, "url", name, required=False),
            metadata=(
                ImageMetadata.from_dict(raw_metadata)
                if raw_metadata is not None
                else ImageMetadata()
            ),
            ocr=ImageOcr.from_dict(raw_ocr) if raw_ocr is not None else None,
            star=_field(obj, "star", bool, name, required=False),
            access_policy=_str(obj, "access_policy", name, required=False),
            metadata_is_public=_field(obj, "metadata_is_public", bool, name, required=False),
        )


ImageListEntry = ImageInfo
"""Entries of a listing call share the :class:`ImageInfo` shape."""


@dataclass(frozen=True)
class ImageList(Sequence[ImageInfo]):
    """One page of images as returned by ``GET /api/images``.

    Behaves as a read-only sequence of :class:`ImageInfo`.  The paging
    fields come from the ``X-Total-Count``, ``X-Current-Page``,
    ``X-Per-Page`` and ``X-User-Type`` response headers and are ``None``
    when the header is absent.
    """

    images: tuple[ImageInfo, ...] = ()
    total_count: int | None = None
    current_page: int | None = None
    per_page: int | None = None
    user_type: str | None = None

    @overload
    def __getitem__(self, index: int) -> ImageInfo: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[ImageInfo, ...]: ...

    def __getitem__(self, index):
        return self.images[index]

    def __len__(self) -> int:
        return len(self.images)

    def __iter__(self) -> Iterator[ImageInfo]:
        return iter(self.images)

    @classmethod
    def from_json(
        cls,
        data: Any,
        headers: dict[str, str] | None = None,
    ) -> ImageList:
        if not isinstance(data, list):
            raise GyazifyDecodeError(
                message=f"Expected a JSON array for ImageList, got {type(data).__name__}",
                context={"expected": "ImageList", "body": data},
            )
        headers = {k.lower(): v for k, v in (headers or {}).items()}
        return cls(
            images=tuple(ImageInfo.from_dict(item) for item in data),
            total_count=_int_header(headers, "x-total-count"),
            current_page=_int_header(headers, "x-current-page"),
            per_page=_int_header(headers, "x-per-page"),
            user_type=headers.get("x-user-type"),
        )


def _int_header(headers: dict[str, str], name: str) -> int | None:
    raw = headers.get(name)
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError:
        return None


# ---------------------------------------------------------------------------
# Operation results
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class UploadResponse:
    """Result of :meth:`GyazifyClient.upload_image`."""

    image_id: str
    permalink_url: str
    url: str
    thumb_url: str | None = None
    type: str | None = None
    created_at: str | None = None

    @classmethod
    def from_dict(cls, data: Any) -> UploadResponse:
        name = "UploadResponse"
        obj = _require_object(data, name)
        return cls(
            image_id=_str(obj, "image_id", name),
            permalink_url=_str(obj, "permalink_url", name),
            url=_str(obj, "url", name),
            thumb_url=_str(obj, "thumb_url", name, required=False),
            type=_str(obj, "type", name, required=False),
            created_at=_str(obj, "created_at", name, required=False),
        )


@dataclass(frozen=True)
class DeleteResponse:
    """Result of :meth:`GyazifyClient.delete_image`."""

    image_id: str
    type: str

    @classmethod
    def from_dict(cls, data: Any) -> DeleteResponse:
        name = "DeleteResponse"
        obj = _require_object(data, name)
        return cls(
            image_id=_str(obj, "image_id", name),
            type=_str(obj, "type", name),
        )


@dataclass(frozen=True)
class OembedResponse:
    """oEmbed document for a Gyazo permalink."""

    version: str
    type: str
    provider_name: str
    provider_url: str
    url: str
    width: int
    height: int

    @classmethod
    def from_dict(cls, data: Any) -> OembedResponse:
        name = "OembedResponse"
        obj = _require_object(data, name)
        return cls(
            version=_str(obj, "version", name),
            type=_str(obj, "type", name),
            provider_name=_str(obj, "provider_name", name),
            provider_url=_str(obj, "provider_url", name),
            url=_str(obj, "url", name),
            width=_field(obj, "width", int, name, required=True),
            height=_field(obj, "height", int, name, required=True),
        )
