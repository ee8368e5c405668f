# create requests.Session used for http requests done by fluxclient

import requests


def create_session(*, headers: dict[str, str] | None = None) -> requests.Session:
    """
    Create a configured `requests.Session`.

    The session owns the connection pool shared by every sub-client of a
    `fluxclient.Client`.

    Parameters
    ----------
    headers
        Default headers to apply to the session.

    Returns
    -------
    session
        A `requests.Session` instance.
    """
    s = requests.Session()
    s.headers.update({"Accept": "application/json"})
    if headers:
        s.headers.update(headers)
    return s
