"""Full error hierarchy for the gyazify SDK.

Every public error class inherits from GyazifyError. Each carries a
machine-readable ``code`` (from :class:`ErrorCode`), a human-readable
``message``, an optional structured ``context`` dict, and an optional
``cause`` (chained exception).

Error codes are defined as a :class:`str` enum so that they serialise
naturally to JSON and can be matched with simple ``==`` comparisons.

The hierarchy::

    GyazifyError
    ├── GyazifyValidationError        caller input rejected before any I/O
    ├── GyazifyNetworkError           DNS / connect / timeout failures
    ├── GyazifyApiError               any 4xx response
    │   ├── GyazifyBadRequestError        400
    │   ├── GyazifyAuthError              401
    │   ├── GyazifyPermissionError        403
    │   ├── GyazifyNotFoundError          404
    │   ├── GyazifyUnprocessableError     422
    │   └── GyazifyRateLimitError         429
    ├── GyazifyServerError            any 5xx response
    ├── GyazifyDecodeError            body did not match the expected shape
    └── GyazifyUnexpectedStatusError  any other status
"""

from __future__ import annotations

from enum import Enum
from typing import Any

# ---------------------------------------------------------------------------
# Error code enum
# ---------------------------------------------------------------------------

class ErrorCode(str, Enum):
    """Machine-readable error codes for every error the SDK can raise."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    NETWORK_ERROR = "NETWORK_ERROR"
    API_ERROR = "API_ERROR"
    BAD_REQUEST = "BAD_REQUEST"
    AUTH_ERROR = "AUTH_ERROR"
    PERMISSION_ERROR = "PERMISSION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    UNPROCESSABLE = "UNPROCESSABLE"
    RATE_LIMITED = "RATE_LIMITED"
    SERVER_ERROR = "SERVER_ERROR"
    DECODE_ERROR = "DECODE_ERROR"
    UNEXPECTED_STATUS = "UNEXPECTED_STATUS"


# ---------------------------------------------------------------------------
# Base error
# ---------------------------------------------------------------------------

class GyazifyError(Exception):
    """Base exception for all gyazify errors.

    Parameters
    ----------
    code:
        A value from :class:`ErrorCode` (or any string) identifying the
        error category.
    message:
        A developer-friendly description of what went wrong.
    context:
        Arbitrary structured data providing extra diagnostic detail.
        Keys and expected types are documented per subclass.
    cause:
        The underlying exception, if this error wraps another.
    """

    def __init__(
        self,
        code: str,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.code: str = code
        self.message: str = message
        self.context: dict[str, Any] = context or {}
        self.cause: Exception | None = cause
        super().__init__(message)
        if cause is not None:
            self.__cause__ = cause

    def __repr__(self) -> str:
        ctx = f", context={self.context!r}" if self.context else ""
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r}{ctx})"


# ---------------------------------------------------------------------------
# Client-side errors
# ---------------------------------------------------------------------------

class GyazifyValidationError(GyazifyError):
    """Caller-supplied parameters were rejected before any request was sent.

    Context keys: ``field``, ``value``, ``constraint``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.VALIDATION_ERROR,
            message=message,
            context=context,
            cause=cause,
        )


class GyazifyNetworkError(GyazifyError):
    """A transport-level failure occurred (timeout, DNS, connection reset).

    Context keys: ``method``, ``url``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.NETWORK_ERROR,
            message=message,
            context=context,
            cause=cause,
        )


# ---------------------------------------------------------------------------
# API errors (4xx)
# ---------------------------------------------------------------------------

class GyazifyApiError(GyazifyError):
    """Gyazo API answered with a 4xx status.

    Raised directly for 4xx codes without a dedicated subclass.

    Context keys: ``status_code``, ``method``, ``path``, ``body``.
    """

    def __init__(
        self,
        message: str,
        status_code: int,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
        code: str = ErrorCode.API_ERROR,
    ) -> None:
        self.status_code: int = status_code
        ctx = {"status_code": status_code}
        ctx.update(context or {})
        super().__init__(
            code=code,
            message=message,
            context=ctx,
            cause=cause,
        )


class GyazifyBadRequestError(GyazifyApiError):
    """Gyazo API returned 400 -- the request parameters were invalid."""

    def __init__(
        self,
        message: str,
        status_code: int = 400,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, status_code, context, cause, ErrorCode.BAD_REQUEST)


class GyazifyAuthError(GyazifyApiError):
    """Gyazo API returned 401 -- the access token is missing, invalid or revoked."""

    def __init__(
        self,
        message: str,
        status_code: int = 401,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, status_code, context, cause, ErrorCode.AUTH_ERROR)


class GyazifyPermissionError(GyazifyApiError):
    """Gyazo API returned 403 -- the token may not access this resource."""

    def __init__(
        self,
        message: str,
        status_code: int = 403,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, status_code, context, cause, ErrorCode.PERMISSION_ERROR)


class GyazifyNotFoundError(GyazifyApiError):
    """Gyazo API returned 404 -- the image does not exist."""

    def __init__(
        self,
        message: str,
        status_code: int = 404,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, status_code, context, cause, ErrorCode.NOT_FOUND)


class GyazifyUnprocessableError(GyazifyApiError):
    """Gyazo API returned 422 -- the upload could not be processed."""

    def __init__(
        self,
        message: str,
        status_code: int = 422,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, status_code, context, cause, ErrorCode.UNPROCESSABLE)


class GyazifyRateLimitError(GyazifyApiError):
    """Gyazo API returned 429 -- rate limit exceeded.

    Context keys: ``retry_after_seconds`` (``None`` when the response
    carried no usable ``Retry-After`` header).
    """

    def __init__(
        self,
        message: str,
        status_code: int = 429,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, status_code, context, cause, ErrorCode.RATE_LIMITED)

    @property
    def retry_after_seconds(self) -> float | None:
        return self.context.get("retry_after_seconds")


# ---------------------------------------------------------------------------
# Server / decoding errors
# ---------------------------------------------------------------------------

class GyazifyServerError(GyazifyError):
    """Gyazo API returned a 5xx status.

    Context keys: ``status_code``, ``method``, ``path``.
    """

    def __init__(
        self,
        message: str,
        status_code: int,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.status_code: int = status_code
        ctx = {"status_code": status_code}
        ctx.update(context or {})
        super().__init__(
            code=ErrorCode.SERVER_ERROR,
            message=message,
            context=ctx,
            cause=cause,
        )


class GyazifyDecodeError(GyazifyError):
    """A success response body did not match the expected shape.

    Context keys: ``expected``, ``field``, ``body``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.DECODE_ERROR,
            message=message,
            context=context,
            cause=cause,
        )


class GyazifyUnexpectedStatusError(GyazifyError):
    """The response status is neither a handled success, 4xx nor 5xx.

    Context keys: ``status_code``, ``method``, ``path``.
    """

    def __init__(
        self,
        message: str,
        status_code: int,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.status_code: int = status_code
        ctx = {"status_code": status_code}
        ctx.update(context or {})
        super().__init__(
            code=ErrorCode.UNEXPECTED_STATUS,
            message=message,
            context=ctx,
            cause=cause,
        )
