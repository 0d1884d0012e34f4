"""Host name normalization shared by the HTTP request and the rule matcher."""


def normalize_host(value: str | None) -> str | None:
    """Lowercase a host value and strip any port.

    Handles bracketed IPv6 literals (``[::1]:8080`` -> ``[::1]``) and a
    trailing root dot (``example.com.``). Returns ``None`` for a missing
    or blank value.
    """
    if value is None:
        return None
    value = value.strip().lower()
    if not value:
        return None
    if value.startswith("["):
        end = value.find("]")
        return value[: end + 1] if end != -1 else value
    host, _, _port = value.partition(":")
    return host.rstrip(".") or None
