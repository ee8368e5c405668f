"""
Helpers shared by the resource sub-clients.
"""

from fluxclient.exceptions import ValidationError


def require(value: str | None, what: str) -> str:
    """
    Return `value` stripped, or raise if it is empty/blank.

    Raises
    ------
    ValidationError
        If `value` is None or blank.
    """
    if not value or not value.strip():
        raise ValidationError(f"{what} must be non-empty")
    return value.strip()
