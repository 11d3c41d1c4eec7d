"""Upload parameters and their builder.

:class:`UploadParams` is the immutable, validated payload consumed by
:meth:`GyazifyClient.upload_image`.  Callers normally assemble it with the
chainable :class:`UploadParamsBuilder`::

    params = (
        UploadParamsBuilder(png_bytes)
        .title("Screenshot")
        .desc("Login page")
        .access_policy("only_me")
        .build()
    )

All checks live in :func:`validate_upload_params`, a pure function that the
builder calls once from :meth:`UploadParamsBuilder.build`.  Setters only
record values, so errors surface in one place.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, fields
from datetime import datetime, timezone
from typing import Any

from gyazify.errors import GyazifyValidationError

ACCESS_POLICIES: frozenset[str] = frozenset({"anyone", "only_me"})

# Gyazo reads this flag from a form field, so the wire value is a string.
METADATA_IS_PUBLIC_VALUES: frozenset[str] = frozenset({"true", "false"})

# Optional text fields in the order they are written to the multipart body.
OPTIONAL_FIELDS: tuple[str, ...] = (
    "access_policy",
    "metadata_is_public",
    "referer_url",
    "app",
    "title",
    "desc",
    "created_at",
    "collection_id",
)


@dataclass(frozen=True)
class UploadParams:
    """Validated parameters for ``POST /api/upload``.

    Build instances through :class:`UploadParamsBuilder` or
    :func:`validate_upload_params`; direct construction skips validation.
    """

    imagedata: bytes
    access_policy: str | None = None
    metadata_is_public: str | None = None
    referer_url: str | None = None
    app: str | None = None
    title: str | None = None
    desc: str | None = None
    created_at: str | None = None
    collection_id: str | None = None

    def populated_fields(self) -> tuple[str, ...]:
        """Names of every field that carries a value, ``imagedata`` first."""
        return tuple(f.name for f in fields(self) if getattr(self, f.name) is not None)

    def text_fields(self) -> dict[str, str]:
        """Populated optional fields in wire order."""
        return {
            name: getattr(self, name)
            for name in OPTIONAL_FIELDS
            if getattr(self, name) is not None
        }

    def __repr__(self) -> str:
        shown = ", ".join(f"{name}={value!r}" for name, value in self.text_fields().items())
        sep = ", " if shown else ""
        return f"UploadParams(imagedata=<{len(self.imagedata)} bytes>{sep}{shown})"


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

def _invalid(field_name: str, value: Any, constraint: str) -> GyazifyValidationError:
    return GyazifyValidationError(
        message=f"{field_name} {constraint}",
        context={"field": field_name, "value": value, "constraint": constraint},
    )


def _check_text(field_name: str, value: Any) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise _invalid(field_name, value, "must be a string")
    if value == "":
        raise _invalid(field_name, value, "must not be empty")
    return value


def _normalize_created_at(value: Any) -> str | None:
    """Return *value* as the string Gyazo expects (Unix seconds)."""
    if value is None:
        return None
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return str(int(value.timestamp()))
    if isinstance(value, bool):
        raise _invalid("created_at", value, "must be a string, number or datetime")
    if isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            raise _invalid("created_at", value, "must be a finite number")
        if value < 0:
            raise _invalid("created_at", value, "must not be negative")
        return str(int(value)) if float(value).is_integer() else str(value)
    return _check_text("created_at", value)


def validate_upload_params(
    imagedata: Any,
    *,
    access_policy: Any = None,
    metadata_is_public: Any = None,
    referer_url: Any = None,
    app: Any = None,
    title: Any = None,
    desc: Any = None,
    created_at: Any = None,
    collection_id: Any = None,
) -> UploadParams:
    """Validate raw upload fields and return an immutable :class:`UploadParams`.

    Parameters
    ----------
    imagedata:
        Image bytes.  Must be non-empty.
    access_policy:
        ``"anyone"`` or ``"only_me"``.
    metadata_is_public:
        The *string* ``"true"`` or ``"false"``.  Booleans are rejected so
        the wire value is always explicit.
    referer_url, app, title, desc, collection_id:
        Optional non-empty strings.
    created_at:
        Capture time: a non-empty string, a non-negative Unix timestamp, or
        a :class:`~datetime.datetime` (naive values are taken as UTC).

    Raises
    ------
    GyazifyValidationError
        When any rule is violated.  ``context["field"]`` names the culprit.
    """
    if not isinstance(imagedata, (bytes, bytearray, memoryview)):
        raise _invalid("imagedata", type(imagedata).__name__, "must be bytes")
    data = bytes(imagedata)
    if not data:
        raise _invalid("imagedata", b"", "must not be empty")

    policy = _check_text("access_policy", access_policy)
    if policy is not None and policy not in ACCESS_POLICIES:
        raise _invalid("access_policy", policy, "must be 'anyone' or 'only_me'")

    if isinstance(metadata_is_public, bool):
        raise _invalid(
            "metadata_is_public", metadata_is_public, "must be the string 'true' or 'false'",
        )
    public = _check_text("metadata_is_public", metadata_is_public)
    if public is not None and public not in METADATA_IS_PUBLIC_VALUES:
        raise _invalid("metadata_is_public", public, "must be 'true' or 'false'")

    # A private image cannot expose its metadata.
    if policy == "only_me" and public == "true":
        raise GyazifyValidationError(
            message="metadata_is_public='true' conflicts with access_policy='only_me'",
            context={
                "field": "metadata_is_public",
                "value": public,
                "constraint": "must not be 'true' when access_policy is 'only_me'",
            },
        )

    return UploadParams(
        imagedata=data,
        access_policy=policy,
        metadata_is_public=public,
        referer_url=_check_text("referer_url", referer_url),
        app=_check_text("app", app),
        title=_check_text("title", title),
        desc=_check_text("desc", desc),
        created_at=_normalize_created_at(created_at),
        collection_id=_check_text("collection_id", collection_id),
    )


# ---------------------------------------------------------------------------
# Builder
# ---------------------------------------------------------------------------

class UploadParamsBuilder:
    """Chainable builder for :class:`UploadParams`.

    Each setter records its value and returns the builder; nothing is
    checked until :meth:`build`.
    """

    def __init__(self, imagedata: bytes) -> None:
        self._imagedata = imagedata
        self._values: dict[str, Any] = {}

    def access_policy(self, access_policy: str) -> UploadParamsBuilder:
        self._values["access_policy"] = access_policy
        return self

    def metadata_is_public(self, metadata_is_public: str) -> UploadParamsBuilder:
        self._values["metadata_is_public"] = metadata_is_public
        return self

    def referer_url(self, referer_url: str) -> UploadParamsBuilder:
        self._values["referer_url"] = referer_url
        return self

    def app(self, app: str) -> UploadParamsBuilder:
        self._values["app"] = app
        return self

    def title(self, title: str) -> UploadParamsBuilder:
        self._values["title"] = title
        return self

    def desc(self, desc: str) -> UploadParamsBuilder:
        self._values["desc"] = desc
        return self

    def created_at(self, created_at: str | int | float | datetime) -> UploadParamsBuilder:
        self._values["created_at"] = created_at
        return self

    def collection_id(self, collection_id: str) -> UploadParamsBuilder:
        self._values["collection_id"] = collection_id
        return self

    def build(self) -> UploadParams:
        """Validate the recorded values and return :class:`UploadParams`.

        Raises
        ------
        GyazifyValidationError
            See :func:`validate_upload_params`.
        """
        return validate_upload_params(self._imagedata, **self._values)
