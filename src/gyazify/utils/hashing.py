"""MD5 helpers for deterministic request encoding.

The multipart encoder derives its boundary from a digest of the payload so
that identical upload parameters always produce byte-identical bodies.
These hashes are **not** used for security purposes.
"""

from __future__ import annotations

import hashlib
from collections.abc import Iterable


def hash_parts(parts: Iterable[tuple[str, str | bytes]]) -> str:
    """Return the hex-encoded MD5 of an ordered sequence of named parts.

    Each part contributes its name, its length and its content, so
    ``[("a", "bc")]`` and ``[("ab", "c")]`` hash differently.

    Examples
    --------
    >>> hash_parts([("a", "1"), ("b", "2")]) == hash_parts([("a", "1"), ("b", "2")])
    True
    >>> hash_parts([("a", "1"), ("b", "2")]) == hash_parts([("b", "2"), ("a", "1")])
    False
    """
    digest = hashlib.md5()
    for name, value in parts:
        raw = value.encode("utf-8") if isinstance(value, str) else value
        digest.update(name.encode("utf-8"))
        digest.update(b"\x00")
        digest.update(str(len(raw)).encode("ascii"))
        digest.update(b"\x00")
        digest.update(raw)
    return digest.hexdigest()
