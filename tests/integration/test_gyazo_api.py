"""Integration tests for the Gyazo API.

These tests require a real Gyazo access token and upload (then delete) a
small generated image.  Set GYAZO_ACCESS_TOKEN to run them.

Usage:
    GYAZO_ACCESS_TOKEN=xxx pytest tests/integration/ -v
"""
import os
import struct
import zlib

import pytest

# Skip entire module if no token is configured
pytestmark = pytest.mark.skipif(
    not os.environ.get("GYAZO_ACCESS_TOKEN"),
    reason="GYAZO_ACCESS_TOKEN not set; skipping integration tests",
)


def _png_1x1() -> bytes:
    def chunk(kind: bytes, data: bytes) -> bytes:
        body = kind + data
        return struct.pack(">I", len(data)) + body + struct.pack(">I", zlib.crc32(body))

    header = struct.pack(">IIBBBBB", 1, 1, 8, 2, 0, 0, 0)
    pixel = zlib.compress(b"\x00\xff\x00\x00")
    return (
        b"\x89PNG\r\n\x1a\n"
        + chunk(b"IHDR", header)
        + chunk(b"IDAT", pixel)
        + chunk(b"IEND", b"")
    )


@pytest.fixture
def token():
    return os.environ["GYAZO_ACCESS_TOKEN"]


@pytest.fixture
def client(token):
    from gyazify import GyazifyClient
    with GyazifyClient(token=token) as c:
        yield c


@pytest.fixture
async def async_client(token):
    from gyazify import AsyncGyazifyClient
    async with AsyncGyazifyClient(token=token) as c:
        yield c


@pytest.fixture
def uploaded(client):
    from gyazify import UploadParamsBuilder
    params = (
        UploadParamsBuilder(_png_1x1())
        .title("gyazify integration test")
        .access_policy("only_me")
        .build()
    )
    result = client.upload_image(params)
    yield result
    client.delete_image(result.image_id)


class TestImageLifecycle:
    """Upload, read back, list and delete one image."""

    def test_upload_and_get(self, client, uploaded):
        assert uploaded.image_id
        assert uploaded.permalink_url.startswith("https://gyazo.com/")
        info = client.get_image(uploaded.image_id)
        assert info.image_id == uploaded.image_id
        assert info.type == "png"

    def test_listed(self, client, uploaded):
        images = client.list_images(per_page=20)
        assert uploaded.image_id in [image.image_id for image in images]

    def test_oembed(self, client, uploaded):
        oembed = client.get_oembed(uploaded.permalink_url)
        assert oembed.type == "photo"
        assert oembed.width == 1


class TestErrors:
    def test_missing_image(self, client):
        from gyazify import GyazifyNotFoundError
        with pytest.raises(GyazifyNotFoundError):
            client.get_image("0" * 32)

    def test_bad_token(self):
        from gyazify import GyazifyAuthError, GyazifyClient
        with GyazifyClient(token="invalid-token") as c:
            with pytest.raises(GyazifyAuthError):
                c.list_images()


class TestAsync:
    @pytest.mark.asyncio
    async def test_list(self, async_client):
        images = await async_client.list_images(per_page=1)
        assert len(images) <= 1
