from fluxclient.http.auth import authorization_headers, token_authorization
from fluxclient.http.request import decode_error
from fluxclient.http.service import HttpService
from fluxclient.http.session import create_session
from fluxclient.http.url import join_url, normalize_server_url

__all__ = [
    "HttpService",
    "authorization_headers",
    "create_session",
    "decode_error",
    "join_url",
    "normalize_server_url",
    "token_authorization",
]
