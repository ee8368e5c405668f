"""
Client configuration.
"""

import platform
from dataclasses import dataclass, field

import requests

from fluxclient.exceptions import ValidationError

PRECISIONS = ("ns", "us", "ms", "s")


def default_user_agent() -> str:
    from fluxclient import __version__

    return f"fluxclient/{__version__} ({platform.system().lower()}; {platform.machine()})"


@dataclass
class WriteOptions:
    """
    Batching parameters for write clients.

    Parameters
    ----------
    batch_size
        Maximum number of records sent in one write request.
    flush_interval_ms
        Interval after which buffered records are sent even if the batch is
        not full.
    precision
        Timestamp precision of the written records: ``ns``, ``us``, ``ms`` or ``s``.
    """

    batch_size: int = 5000
    flush_interval_ms: int = 1000
    precision: str = "ns"

    def __post_init__(self) -> None:
        if self.batch_size < 1:
            raise ValidationError("batch_size must be positive")
        if self.flush_interval_ms < 1:
            raise ValidationError("flush_interval_ms must be positive")
        if self.precision not in PRECISIONS:
            raise ValidationError(
                f"Unsupported precision '{self.precision}'. Allowed: {PRECISIONS}"
            )


@dataclass
class Options:
    """
    Options shared by a client and all of its sub-clients.

    Parameters
    ----------
    timeout
        Default request timeout in seconds (float) or (connect, read) tuple.
    verify
        TLS verification passed to `requests` (True/False or path to CA bundle).
    session
        Optional externally managed requests session. The client never closes a
        session it did not create.
    log_level
        If set, applied to the ``fluxclient`` logger when a client is created.
    write_options
        Batching parameters for write clients.
    user_agent
        User-Agent header sent with every request.
    """

    timeout: float | tuple[float, float] = 20.0
    verify: bool | str = True
    session: requests.Session | None = None
    log_level: int | str | None = None
    write_options: WriteOptions = field(default_factory=WriteOptions)
    user_agent: str = field(default_factory=default_user_agent)

    @property
    def owns_session(self) -> bool:
        return self.session is None
