# transport shared by every sub-client of a fluxclient.Client

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

import requests

from fluxclient.http.auth import authorization_headers
from fluxclient.http.request import read_json, read_text, raise_for_status
from fluxclient.http.session import create_session
from fluxclient.http.url import join_url, normalize_server_url

logger = logging.getLogger(__name__)

Timeout = float | tuple[float, float]


@dataclass
class HttpService:
    """
    HTTP transport holding the server address, session and credential.

    Parameters
    ----------
    server_url
        Server base URL including scheme, e.g. ``"http://localhost:8086"``.
    authorization
        Full Authorization header value (e.g. ``"Token abc"``). Empty means
        requests are sent unauthenticated.
    session
        Optional externally managed requests session. If omitted, a session is
        created and owned by this service.
    timeout
        Default request timeout in seconds (float) or (connect, read) tuple.
    verify
        TLS verification passed to `requests` (True/False or path to CA bundle).
    user_agent
        Value of the User-Agent header.
    """

    server_url: str
    authorization: str = ""
    session: requests.Session | None = None
    timeout: Timeout = 20.0
    verify: bool | str = True
    user_agent: str = "fluxclient"
    owns_session: bool = field(init=False, default=False)

    def __post_init__(self) -> None:
        self.base_url = normalize_server_url(self.server_url)
        if self.session is None:
            self.session = create_session()
            self.owns_session = True

    def set_authorization(self, authorization: str) -> None:
        """
        Replace the Authorization header value used by all later requests.

        The value is read for every request, so the swap is visible to every
        sub-client sharing this service.
        """
        self.authorization = authorization

    def url(self, path: str) -> str:
        return join_url(self.base_url, segments=[path])

    def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any | None = None,
        data: Any | None = None,
        headers: dict[str, str] | None = None,
        timeout: Timeout | None = None,
    ) -> requests.Response:
        """
        Send a request to `path`, relative to the server base URL.

        Parameters with a None value are dropped. Transport errors raised by
        `requests` propagate unchanged.
        """
        if params:
            params = {k: v for k, v in params.items() if v is not None}
        merged = {"User-Agent": self.user_agent}
        merged.update(authorization_headers(self.authorization))
        if headers:
            merged.update(headers)
        url = self.url(path)
        logger.debug("%s %s", method, url)
        resp = self.session.request(
            method=method,
            url=url,
            params=params,
            json=json,
            data=data,
            headers=merged,
            timeout=self.timeout if timeout is None else timeout,
            verify=self.verify,
        )
        return resp

    def get_json(
        self,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        timeout: Timeout | None = None,
    ) -> Any:
        return read_json(self.request("GET", path, params=params, timeout=timeout))

    def post_json(
        self,
        path: str,
        *,
        json: Any | None = None,
        params: dict[str, Any] | None = None,
        expected: Iterable[int] | None = None,
        timeout: Timeout | None = None,
    ) -> Any:
        return read_json(
            self.request("POST", path, json=json, params=params, timeout=timeout),
            expected=expected,
        )

    def patch_json(
        self, path: str, *, json: Any | None = None, timeout: Timeout | None = None
    ) -> Any:
        return read_json(self.request("PATCH", path, json=json, timeout=timeout))

    def post_text(
        self,
        path: str,
        *,
        json: Any | None = None,
        data: Any | None = None,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        timeout: Timeout | None = None,
    ) -> str:
        return read_text(
            self.request(
                "POST",
                path,
                json=json,
                data=data,
                params=params,
                headers=headers,
                timeout=timeout,
            )
        )

    def delete(self, path: str, *, timeout: Timeout | None = None) -> None:
        raise_for_status(self.request("DELETE", path, timeout=timeout))

    def close(self) -> None:
        """
        Release pooled connections if the session was created internally.

        Caller-supplied sessions are left open. A closed session can still be
        used; `requests` reopens connections on demand.
        """
        if self.owns_session and self.session is not None:
            logger.debug("Closing internally created HTTP session")
            self.session.close()
