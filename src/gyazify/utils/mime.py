"""Image type sniffing for the upload part.

Gyazo identifies the uploaded format from the bytes themselves, but a
correct ``Content-Type`` and file name on the ``imagedata`` part keep the
request well-formed for intermediaries.
"""

from __future__ import annotations

# Map of magic bytes to MIME types for sniffing.
_MAGIC_BYTES: list[tuple[bytes, str]] = [
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"\xff\xd8\xff", "image/jpeg"),
    (b"GIF87a", "image/gif"),
    (b"GIF89a", "image/gif"),
    (b"RIFF", "image/webp"),  # RIFF....WEBP (check further)
    (b"BM", "image/bmp"),
]

_EXTENSIONS: dict[str, str] = {
    "image/png": "png",
    "image/jpeg": "jpg",
    "image/gif": "gif",
    "image/webp": "webp",
    "image/bmp": "bmp",
}

DEFAULT_FILENAME = "image.png"
DEFAULT_CONTENT_TYPE = "application/octet-stream"


def sniff_mime(data: bytes) -> str | None:
    """Detect an image MIME type from the first bytes of *data*."""
    for magic, mime in _MAGIC_BYTES:
        if data[:len(magic)] == magic:
            if magic == b"RIFF" and data[8:12] != b"WEBP":
                continue
            return mime
    return None


def upload_file_info(data: bytes) -> tuple[str, str]:
    """Return ``(filename, content_type)`` for the ``imagedata`` part."""
    mime = sniff_mime(data)
    if mime is None:
        return DEFAULT_FILENAME, DEFAULT_CONTENT_TYPE
    return f"image.{_EXTENSIONS[mime]}", mime
