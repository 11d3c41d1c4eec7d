from .hashing import hash_parts
from .mime import sniff_mime, upload_file_info
from .redact import redact

__all__ = [
    "hash_parts",
    "redact",
    "sniff_mime",
    "upload_file_info",
]
