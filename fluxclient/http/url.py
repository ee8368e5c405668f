# fluxclient/http/url.py
from __future__ import annotations

from urllib.parse import urlsplit, urlunsplit

from fluxclient.exceptions import InvalidAddressError, ValidationError


def normalize_server_url(
    server_url: str,
    *,
    allowed_schemes: tuple[str, ...] = ("http", "https"),
) -> str:
    """
    Normalize a user-supplied server URL to a base URL ending with ``"/"``.

    The server may live under a path prefix (e.g. behind a reverse proxy at
    ``"https://example.org/influx"``), so the path is kept. Query and fragment
    are rejected. Relative API paths are later appended to the returned value,
    which is why it always ends with a slash.

    Parameters
    ----------
    server_url
        Server base URL including scheme, e.g. ``"http://localhost:8086"``.
    allowed_schemes
        Allowed URL schemes.

    Returns
    -------
    base_url
        Normalized base URL of the form ``"scheme://host[:port][/prefix]/"``.

    Raises
    ------
    InvalidAddressError
        If `server_url` is empty/blank, has no scheme or host, uses a disallowed
        scheme, or carries a query/fragment.
    """
    if not server_url or not server_url.strip():
        raise InvalidAddressError(
            "server_url must be a non-empty URL, e.g. 'http://localhost:8086'"
        )

    parts = urlsplit(server_url.strip())

    scheme = parts.scheme.lower()
    if scheme not in allowed_schemes:
        raise InvalidAddressError(
            f"Unsupported URL scheme '{scheme}'. Allowed: {allowed_schemes}"
        )

    if not parts.netloc:
        raise InvalidAddressError(
            "server_url must include a host (and optional port), e.g. 'http://localhost:8086'"
        )

    if parts.query or parts.fragment:
        raise InvalidAddressError("server_url must not include a query or fragment")

    path = parts.path if parts.path.endswith("/") else parts.path + "/"
    return urlunsplit((scheme, parts.netloc, path, "", ""))


def join_url(base: str, *, segments: list[str]) -> str:
    """
    Join path segments onto a base URL.

    Ensures exactly one ``"/"`` between components by stripping redundant slashes
    from `base` and each entry in `segments`. Empty or slash-only segments are
    ignored.

    Parameters
    ----------
    base
        Base URL, typically the normalized server URL.
    segments
        Path segments to append to `base` (e.g. ``["api", "v2", "buckets"]``).

    Returns
    -------
    url
        The joined URL consisting of `base` followed by the provided path segments.

    Raises
    ------
    ValidationError
        If `base` is empty/blank.
    """
    if not base or not base.strip():
        raise ValidationError("base must be a non-empty URL")

    base = base.rstrip("/")
    cleaned = [s.strip("/") for s in segments if s and s.strip("/")]
    return base + ("/" + "/".join(cleaned) if cleaned else "")
