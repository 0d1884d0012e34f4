"""Request path encoding.

ASGI servers percent-decode ``scope["path"]``. Rules match and
substitute against the encoded form so whatever lands in a ``Location``
header is a valid URL.
"""

from urllib.parse import quote

from rerouter._internal.asgi import Scope

# RFC 3986 pchar plus "/"; "%" is kept so existing escapes pass through
_PATH_SAFE = "/:@!$&'()*+,;=-._~%"


def encode_path(path: str | bytes) -> str:
    """Percent-encode anything in *path* that is not legal in a URL path.

    Bytes are escaped byte for byte; text is encoded as UTF-8 first.
    """
    return quote(path, safe=_PATH_SAFE)


def scope_path(scope: Scope) -> str:
    """The encoded request path of an ASGI HTTP scope.

    Prefers ``raw_path`` (the bytes the client sent) and falls back to
    re-encoding the decoded ``path``.
    """
    raw = scope.get("raw_path")
    if raw:
        return encode_path(raw.split(b"?", 1)[0])
    return encode_path(scope["path"])
