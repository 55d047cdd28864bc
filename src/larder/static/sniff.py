"""Content-type guessing from a resource name and its first bytes.

The name is consulted first through ``mimetypes``. Only when the
extension is unknown are the leading bytes inspected, and such guesses
are reported as uncertain unless a well-known signature matches.
"""

import codecs
import mimetypes

# How many leading bytes the static middleware reads for a guess
SNIFF_LENGTH = 128

_SIGNATURES: tuple[tuple[bytes, str], ...] = (
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"GIF87a", "image/gif"),
    (b"GIF89a", "image/gif"),
    (b"\xff\xd8\xff", "image/jpeg"),
    (b"%PDF-", "application/pdf"),
    (b"\x1f\x8b", "application/gzip"),
    (b"PK\x03\x04", "application/zip"),
)


def guess_content_type(name: str, prefix: bytes) -> tuple[str, bool]:
    """Return ``(content_type, uncertain)`` for a resource.

    *prefix* is at most the first ``SNIFF_LENGTH`` bytes of the content.
    """
    content_type, _ = mimetypes.guess_type(name, strict=False)
    if content_type is not None:
        return content_type, False

    for signature, signature_type in _SIGNATURES:
        if prefix.startswith(signature):
            return signature_type, False

    if prefix and b"\x00" not in prefix and _is_utf8(prefix):
        return "text/plain", True
    return "application/octet-stream", True


def _is_utf8(data: bytes) -> bool:
    # A truncated multi-byte sequence at the end of the prefix is fine
    decoder = codecs.getincrementaldecoder("utf-8")()
    try:
        decoder.decode(data, final=False)
    except UnicodeDecodeError:
        return False
    return True
