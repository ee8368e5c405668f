# request/response handling

import logging
from collections.abc import Iterable
from typing import Any

import requests

from fluxclient.exceptions import ApiError

logger = logging.getLogger(__name__)


def decode_error(resp: requests.Response) -> ApiError:
    """
    Decode a server-reported error envelope into an `ApiError`.

    The server answers failed requests with ``{"code": ..., "message": ...}``.
    Bodies that are not JSON (proxies, load balancers) fall back to the raw text.

    Parameters
    ----------
    resp
        Response carrying an error status.

    Returns
    -------
    error
        The decoded error. Not raised here.
    """
    text = None
    try:
        text = resp.text
    except Exception:
        text = None

    code = None
    message = None
    try:
        payload = resp.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict):
        code = payload.get("code")
        message = payload.get("message")
        if message is None and payload.get("error"):
            message = str(payload["error"])
    if not message:
        message = text or resp.reason or f"HTTP {resp.status_code}"

    retry_after = None
    header = resp.headers.get("Retry-After")
    if header and header.strip().isdigit():
        retry_after = int(header.strip())

    return ApiError(
        method=resp.request.method if resp.request else "HTTP",
        url=resp.url,
        status_code=resp.status_code,
        code=code,
        message=message,
        response_text=text,
        retry_after=retry_after,
    )


def raise_for_status(
    resp: requests.Response, *, expected: Iterable[int] | None = None
) -> None:
    """
    Raise `ApiError` unless the response status is acceptable.

    Parameters
    ----------
    resp
        Response object.
    expected
        Accepted status codes. If None, any 2xx status is accepted.

    Raises
    ------
    ApiError
        If the status is not accepted. Includes the decoded error envelope.
    """
    method = resp.request.method if resp.request else "HTTP"
    logger.debug("%s %s -> %s", method, resp.url, resp.status_code)
    if expected is None:
        ok = 200 <= resp.status_code < 300
    else:
        ok = resp.status_code in set(expected)
    if not ok:
        raise decode_error(resp)


def read_json(resp: requests.Response, *, expected: Iterable[int] | None = None) -> Any:
    """
    Decode JSON response after checking status.

    Parameters
    ----------
    resp
        Response object.
    expected
        Accepted status codes, see `raise_for_status`.

    Returns
    -------
    payload
        Parsed JSON payload, or None for an empty body (e.g. 204).

    Raises
    ------
    ApiError
        If status indicates error or JSON decoding fails.
    """
    raise_for_status(resp, expected=expected)
    if not resp.content:
        return None
    try:
        return resp.json()
    except Exception as e:
        raise ApiError(
            method=resp.request.method if resp.request else "HTTP",
            url=resp.url,
            status_code=resp.status_code,
            message="Failed to decode JSON response.",
            response_text=getattr(resp, "text", None),
        ) from e


def read_text(resp: requests.Response, *, expected: Iterable[int] | None = None) -> str:
    """
    Decode text response after checking status.

    Parameters
    ----------
    resp
        Response object.
    expected
        Accepted status codes, see `raise_for_status`.

    Returns
    -------
    text
        Response body as text.

    Raises
    ------
    ApiError
        If status indicates error.
    """
    raise_for_status(resp, expected=expected)
    return resp.text
