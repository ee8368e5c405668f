"""
fluxclient: client for time-series servers speaking the ``/api/v2`` HTTP API.

Public API is intentionally small; everything starts from `fluxclient.Client`.
"""

import importlib.metadata

try:
    # Installed package will find its version
    __version__ = importlib.metadata.version(__name__)
except importlib.metadata.PackageNotFoundError:
    # Repository clones will register an unknown version
    __version__ = "0.0.0+unknown"

from fluxclient.client import Client
from fluxclient.exceptions import (
    ApiError,
    ClientClosedError,
    FluxClientError,
    InvalidAddressError,
    ValidationError,
)
from fluxclient.models import HealthCheck, OnboardingResponse
from fluxclient.options import Options, WriteOptions

__all__ = [
    "ApiError",
    "Client",
    "ClientClosedError",
    "FluxClientError",
    "HealthCheck",
    "InvalidAddressError",
    "OnboardingResponse",
    "Options",
    "ValidationError",
    "WriteOptions",
]
