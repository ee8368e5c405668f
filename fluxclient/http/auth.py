# authentication mechanisms used by fluxclient

TOKEN_SCHEME = "Token"


def token_authorization(token: str | None) -> str:
    """
    Construct the Authorization header value for an API token.

    Parameters
    ----------
    token
        API token or None.

    Returns
    -------
    authorization
        ``"Token <token>"``, or an empty string if `token` is None/blank.
    """
    if token and token.strip():
        return f"{TOKEN_SCHEME} {token.strip()}"
    return ""


def authorization_headers(authorization: str | None) -> dict[str, str]:
    """
    Wrap an Authorization header value in a header dict.

    Parameters
    ----------
    authorization
        Full header value (scheme and credential) or None.

    Returns
    -------
    headers
        Header dict. Empty if `authorization` is None/blank.
    """
    if authorization:
        return {"Authorization": authorization}
    return {}
