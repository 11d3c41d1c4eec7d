"""Token / payload redaction for safe logging.

Before any request or response is written to logs or debug output the
:func:`redact` function must be applied.  It enforces the following rules:

* **Credential-bearing keys** (``authorization``, ``access_token``, ...)
  are replaced with a masked placeholder that shows only the last four
  characters of the token (or a generic marker if the token is unknown).
* **Binary values** (``bytes`` and strings that look like raw bytes) are
  replaced with ``<binary:N_bytes>`` so image data never reaches a log.
* The full access **token is never present** in the output, wherever it
  appears (URLs, messages, nested values).
"""

from __future__ import annotations

import copy
import re
from typing import Any

# Substrings: if any of these appear in a key name (case-insensitive), the
# value is redacted.
_SENSITIVE_KEY_PATTERNS: frozenset[str] = frozenset({
    "token",
    "secret",
    "password",
    "credential",
    "authorization",
    "cookie",
    "api_key",
})

# Heuristic: a string value longer than this threshold that looks like raw
# bytes (not valid readable text) is treated as binary.
_BINARY_LENGTH_THRESHOLD = 256

_BEARER_RE = re.compile(r"(Bearer\s+)\S+")


def _mask_token(value: str, token: str | None) -> str:
    """Replace bearer / token strings with a safe placeholder."""
    if token and token in value:
        suffix = token[-4:] if len(token) >= 8 else "****"
        value = value.replace(token, f"<redacted:...{suffix}>")
    return _BEARER_RE.sub(lambda m: f"{m.group(1)}<redacted>", value)


def _looks_binary(value: str) -> bool:
    """Heuristic: return True if *value* appears to be raw binary data."""
    if len(value) < _BINARY_LENGTH_THRESHOLD:
        return False
    sample = value[:512]
    non_printable = sum(
        1 for ch in sample if not ch.isprintable() and ch not in ("\n", "\r", "\t")
    )
    return non_printable > len(sample) * 0.1


def _redact_value(value: Any, token: str | None) -> Any:
    if isinstance(value, dict):
        return _redact_dict(value, token)
    if isinstance(value, (list, tuple)):
        return [_redact_value(item, token) for item in value]
    if isinstance(value, (bytes, bytearray, memoryview)):
        return f"<binary:{len(bytes(value))}_bytes>"
    if isinstance(value, str):
        if _looks_binary(value):
            return f"<binary:{len(value.encode('utf-8', 'surrogatepass'))}_bytes>"
        return _mask_token(value, token)
    return value


def _redact_dict(d: dict, token: str | None) -> dict:
    result: dict = {}
    for key, value in d.items():
        key_lower = key.lower() if isinstance(key, str) else ""
        if any(pat in key_lower for pat in _SENSITIVE_KEY_PATTERNS):
            if isinstance(value, str):
                result[key] = _mask_token(value, token)
                if result[key] == value:
                    result[key] = "<redacted>"
            else:
                result[key] = "<redacted>"
        else:
            result[key] = _redact_value(value, token)
    return result


def redact(payload: dict, token: str | None = None) -> dict:
    """Return a deep copy of *payload* with sensitive data redacted.

    Parameters
    ----------
    payload:
        The dictionary to sanitize (typically a request/response dump or a
        set of headers).
    token:
        The Gyazo access token.  If supplied, any occurrence of this exact
        string anywhere in the payload is replaced.

    Returns
    -------
    dict
        A new dictionary with all sensitive data removed.  The original
        *payload* is never mutated.

    Examples
    --------
    >>> redact({"Authorization": "Bearer abc123"})
    {'Authorization': 'Bearer <redacted>'}

    >>> redact({"imagedata": b"\\x89PNG"})
    {'imagedata': '<binary:4_bytes>'}
    """
    safe = copy.deepcopy(payload)
    return _redact_dict(safe, token)
