"""Unit tests for gyazify/gyazo_api/decode.py.

Covers:
- status classification in raise_for_status
- error message extraction and context
- decode_* success paths for every documented response shape
- DecodeError on malformed bodies
"""

from __future__ import annotations

import json
from unittest.mock import MagicMock

import httpx
import pytest

from gyazify.errors import (
    ErrorCode,
    GyazifyApiError,
    GyazifyAuthError,
    GyazifyBadRequestError,
    GyazifyDecodeError,
    GyazifyNotFoundError,
    GyazifyPermissionError,
    GyazifyRateLimitError,
    GyazifyServerError,
    GyazifyUnexpectedStatusError,
    GyazifyUnprocessableError,
)
from gyazify.gyazo_api.decode import (
    _parse_retry_after,
    decode_delete,
    decode_image,
    decode_image_list,
    decode_oembed,
    decode_response,
    decode_upload,
    raise_for_status,
)
from gyazify.models import ImageInfo, ImageList, UploadResponse

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

IMAGE_JSON = {
    "image_id": "abc123",
    "permalink_url": "https://gyazo.com/abc123",
    "thumb_url": "https://thumb.gyazo.com/thumb/abc123",
    "type": "png",
    "created_at": "2024-08-10 12:00:00",
    "metadata": {"app": None, "title": None, "url": None, "desc": None},
    "ocr": None,
}


def make_response(
    status_code: int = 200,
    body: object = None,
    headers: dict | None = None,
    text: str | None = None,
) -> httpx.Response:
    """Build a minimal httpx.Response with a request attached."""
    if text is not None:
        content = text.encode()
    elif body is not None:
        content = json.dumps(body).encode()
    else:
        content = b""
    resp = httpx.Response(status_code, content=content, headers=headers or {})
    resp.request = httpx.Request("GET", "https://api.gyazo.com/api/images/abc123")
    return resp


# ---------------------------------------------------------------------------
# _parse_retry_after
# ---------------------------------------------------------------------------

class TestParseRetryAfter:
    def test_numeric(self):
        assert _parse_retry_after(make_response(headers={"retry-after": "5"})) == 5.0

    def test_float(self):
        assert _parse_retry_after(make_response(headers={"retry-after": "2.5"})) == 2.5

    def test_http_date_not_supported(self):
        resp = make_response(headers={"retry-after": "Wed, 21 Oct 2015 07:28:00 GMT"})
        assert _parse_retry_after(resp) is None

    def test_missing(self):
        assert _parse_retry_after(make_response()) is None

    @pytest.mark.parametrize("raw", ["nan", "inf", "-inf", "-5"])
    def test_non_finite_or_negative(self, raw):
        assert _parse_retry_after(make_response(headers={"retry-after": raw})) is None

    def test_rate_limit_error_ignores_unusable_header(self):
        resp = make_response(429, {"message": "slow"}, headers={"retry-after": "inf"})
        with pytest.raises(GyazifyRateLimitError) as exc_info:
            raise_for_status(resp, "list_images")
        assert exc_info.value.retry_after_seconds is None


# ---------------------------------------------------------------------------
# raise_for_status
# ---------------------------------------------------------------------------

class TestRaiseForStatus:
    @pytest.mark.parametrize("status", [200, 201])
    def test_success_statuses_pass(self, status):
        raise_for_status(make_response(status, {}), "get_image")

    @pytest.mark.parametrize("status,error_cls,code", [
        (400, GyazifyBadRequestError, ErrorCode.BAD_REQUEST),
        (401, GyazifyAuthError, ErrorCode.AUTH_ERROR),
        (403, GyazifyPermissionError, ErrorCode.PERMISSION_ERROR),
        (404, GyazifyNotFoundError, ErrorCode.NOT_FOUND),
        (422, GyazifyUnprocessableError, ErrorCode.UNPROCESSABLE),
        (429, GyazifyRateLimitError, ErrorCode.RATE_LIMITED),
    ])
    def test_known_client_errors(self, status, error_cls, code):
        with pytest.raises(error_cls) as exc_info:
            raise_for_status(make_response(status, {"message": "nope"}), "get_image")
        err = exc_info.value
        assert isinstance(err, GyazifyApiError)
        assert err.code == code
        assert err.status_code == status
        assert err.context["status_code"] == status
        assert err.context["endpoint"] == "get_image"
        assert err.context["method"] == "GET"
        assert err.context["path"] == "/api/images/abc123"
        assert "nope" in err.message

    @pytest.mark.parametrize("status", [402, 405, 409, 418, 499])
    def test_other_client_errors_are_generic_api_errors(self, status):
        with pytest.raises(GyazifyApiError) as exc_info:
            raise_for_status(make_response(status, {"message": "x"}), "list_images")
        err = exc_info.value
        assert type(err) is GyazifyApiError
        assert err.code == ErrorCode.API_ERROR
        assert err.status_code == status

    def test_rate_limit_carries_retry_after(self):
        resp = make_response(429, {"message": "slow down"}, headers={"retry-after": "30"})
        with pytest.raises(GyazifyRateLimitError) as exc_info:
            raise_for_status(resp, "list_images")
        assert exc_info.value.retry_after_seconds == 30.0

    def test_rate_limit_without_header(self):
        with pytest.raises(GyazifyRateLimitError) as exc_info:
            raise_for_status(make_response(429), "list_images")
        assert exc_info.value.retry_after_seconds is None

    def test_message_falls_back_to_text(self):
        with pytest.raises(GyazifyNotFoundError) as exc_info:
            raise_for_status(make_response(404, text="plain not found"), "get_image")
        assert "plain not found" in exc_info.value.message
        assert exc_info.value.context["body"] is None

    def test_error_key_used_when_message_missing(self):
        with pytest.raises(GyazifyAuthError) as exc_info:
            raise_for_status(make_response(401, {"error": "invalid_token"}), "get_image")
        assert "invalid_token" in exc_info.value.message

    def test_long_text_is_truncated(self):
        with pytest.raises(GyazifyBadRequestError) as exc_info:
            raise_for_status(make_response(400, text="x" * 2000), "upload_image")
        assert exc_info.value.message.count("x") == 500

    @pytest.mark.parametrize("status", [500, 502, 503, 504, 599])
    def test_server_errors(self, status):
        with pytest.raises(GyazifyServerError) as exc_info:
            raise_for_status(make_response(status), "get_image")
        assert exc_info.value.code == ErrorCode.SERVER_ERROR
        assert exc_info.value.status_code == status

    def test_server_error_is_not_api_error(self):
        with pytest.raises(GyazifyServerError) as exc_info:
            raise_for_status(make_response(500), "get_image")
        assert not isinstance(exc_info.value, GyazifyApiError)

    @pytest.mark.parametrize("status", [100, 202, 204, 301, 302, 304, 600])
    def test_unexpected_statuses(self, status):
        with pytest.raises(GyazifyUnexpectedStatusError) as exc_info:
            raise_for_status(make_response(status), "get_image")
        assert exc_info.value.code == ErrorCode.UNEXPECTED_STATUS
        assert exc_info.value.status_code == status

    def test_response_without_request(self):
        resp = httpx.Response(404, content=b"{}")
        with pytest.raises(GyazifyNotFoundError) as exc_info:
            raise_for_status(resp, "get_image")
        assert exc_info.value.context["method"] == ""


# ---------------------------------------------------------------------------
# Body decoders
# ---------------------------------------------------------------------------

class TestDecoders:
    def test_upload(self):
        body = {
            "image_id": "abc123",
            "permalink_url": "https://gyazo.com/abc123",
            "thumb_url": "https://thumb.gyazo.com/thumb/abc123",
            "url": "https://i.gyazo.com/abc123.png",
            "type": "png",
        }
        result = decode_upload(make_response(200, body))
        assert result == UploadResponse(
            image_id="abc123",
            permalink_url="https://gyazo.com/abc123",
            url="https://i.gyazo.com/abc123.png",
            thumb_url="https://thumb.gyazo.com/thumb/abc123",
            type="png",
        )

    def test_image(self):
        result = decode_image(make_response(200, IMAGE_JSON))
        assert isinstance(result, ImageInfo)
        assert result.image_id == "abc123"
        assert result.permalink_url == "https://gyazo.com/abc123"
        assert result.metadata.title is None

    def test_image_list(self):
        resp = make_response(
            200,
            [IMAGE_JSON, {**IMAGE_JSON, "image_id": "def456"}],
            headers={"X-Total-Count": "2", "X-Current-Page": "1", "X-Per-Page": "20"},
        )
        result = decode_image_list(resp)
        assert isinstance(result, ImageList)
        assert [image.image_id for image in result] == ["abc123", "def456"]
        assert result.total_count == 2
        assert result.current_page == 1
        assert result.per_page == 20

    def test_empty_image_list(self):
        result = decode_image_list(make_response(200, []))
        assert len(result) == 0
        assert list(result) == []

    def test_delete(self):
        result = decode_delete(make_response(200, {"image_id": "abc123", "type": "png"}))
        assert result.image_id == "abc123"
        assert result.type == "png"

    def test_oembed(self):
        body = {
            "version": "1.0",
            "type": "photo",
            "provider_name": "Gyazo",
            "provider_url": "https://gyazo.com",
            "url": "https://i.gyazo.com/abc123.png",
            "width": 400,
            "height": 300,
        }
        result = decode_oembed(make_response(200, body))
        assert result.version == "1.0"
        assert result.type == "photo"
        assert (result.width, result.height) == (400, 300)

    def test_invalid_json(self):
        with pytest.raises(GyazifyDecodeError) as exc_info:
            decode_image(make_response(200, text="<html>oops</html>"))
        assert exc_info.value.code == ErrorCode.DECODE_ERROR
        assert exc_info.value.cause is not None

    def test_empty_body(self):
        with pytest.raises(GyazifyDecodeError):
            decode_delete(make_response(200))

    def test_list_expected_but_object_returned(self):
        with pytest.raises(GyazifyDecodeError, match="JSON array"):
            decode_image_list(make_response(200, {"images": []}))

    def test_object_expected_but_list_returned(self):
        with pytest.raises(GyazifyDecodeError, match="JSON object"):
            decode_upload(make_response(200, []))


class TestDecodeResponse:
    def test_success_runs_decoder(self):
        body = {"image_id": "abc123", "type": "png"}
        result = decode_response(make_response(200, body), "delete_image", decode_delete)
        assert result.image_id == "abc123"

    def test_error_skips_decoder(self):
        def decoder(_response):
            raise AssertionError("decoder must not run")

        with pytest.raises(GyazifyNotFoundError):
            decode_response(make_response(404, {"message": "x"}), "get_image", decoder)

    def test_error_counted_on_metrics(self):
        metrics = MagicMock()
        with pytest.raises(GyazifyServerError):
            decode_response(make_response(502, {}), "list_images", decode_image_list, metrics)
        metrics.increment.assert_called_once_with(
            "gyazify.errors_total",
            tags={"endpoint": "list_images", "code": "SERVER_ERROR"},
        )

    def test_decode_failure_counted_on_metrics(self):
        metrics = MagicMock()
        with pytest.raises(GyazifyDecodeError):
            decode_response(
                make_response(200, {"type": "png"}), "delete_image", decode_delete, metrics,
            )
        metrics.increment.assert_called_once_with(
            "gyazify.errors_total",
            tags={"endpoint": "delete_image", "code": "DECODE_ERROR"},
        )

    def test_success_not_counted(self):
        metrics = MagicMock()
        decode_response(
            make_response(200, {"image_id": "a", "type": "png"}), "delete_image", decode_delete, metrics,
        )
        metrics.increment.assert_not_called()
