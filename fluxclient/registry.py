"""
Lazily created, cached sub-clients of a `fluxclient.Client`.
"""

import logging
import threading
from collections.abc import Callable
from typing import Any, TypeVar

from fluxclient.api.write import WriteClient

logger = logging.getLogger(__name__)

T = TypeVar("T")

AUTHORIZATIONS = "authorizations"
ORGANIZATIONS = "organizations"
USERS = "users"
DELETE = "delete"
BUCKETS = "buckets"
LABELS = "labels"
TASKS = "tasks"
WRITE = "write"
WRITE_BLOCKING = "write_blocking"

SINGLETON_KINDS = (AUTHORIZATIONS, ORGANIZATIONS, USERS, DELETE, BUCKETS, LABELS, TASKS)
WRITE_KINDS = (WRITE, WRITE_BLOCKING)

# Must not occur in organization or bucket names.
KEY_SEPARATOR = "\t"


def write_key(org: str, bucket: str) -> str:
    """Compound cache key of a write client."""
    return f"{org}{KEY_SEPARATOR}{bucket}"


class SubClientRegistry:
    """
    Thread-safe store of sub-clients keyed by kind (and key, for write clients).

    One coarse lock serializes every check-and-create. Sub-client constructors
    perform no I/O, so holding the lock while constructing is cheap. The same
    lock is taken by `Client.setup` while it swaps the credential, so no
    sub-client is created mid-transition.
    """

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self._singletons: dict[str, Any] = {}
        self._write_clients: dict[str, dict[str, WriteClient]] = {
            kind: {} for kind in WRITE_KINDS
        }

    def get_or_create(self, kind: str, factory: Callable[[], T], key: str | None = None) -> T:
        """
        Return the cached instance for ``(kind, key)``, creating it on first use.

        Parameters
        ----------
        kind
            One of `SINGLETON_KINDS` or `WRITE_KINDS`.
        factory
            Zero-argument constructor called at most once per ``(kind, key)``.
        key
            Compound key from `write_key`; required for write kinds, ignored
            for singleton kinds.

        Returns
        -------
        instance
            The cached (possibly just created) sub-client.
        """
        with self.lock:
            if kind in WRITE_KINDS:
                if key is None:
                    raise ValueError(f"a key is required for '{kind}' sub-clients")
                cache = self._write_clients[kind]
                if key not in cache:
                    logger.debug("Creating %s client for %r", kind, key)
                    cache[key] = factory()
                return cache[key]
            if kind not in SINGLETON_KINDS:
                raise ValueError(f"Unknown sub-client kind '{kind}'")
            if kind not in self._singletons:
                logger.debug("Creating %s client", kind)
                self._singletons[kind] = factory()
            return self._singletons[kind]

    def drain_write_clients(self) -> None:
        """
        Close every cached write client and empty both write caches.

        Asynchronous clients flush buffered records and stop their background
        work; closing a blocking client is a no-op.
        """
        with self.lock:
            for kind in WRITE_KINDS:
                cache = self._write_clients[kind]
                for key in list(cache):
                    logger.debug("Closing %s client for %r", kind, key)
                    cache.pop(key).close()

    def size(self, kind: str) -> int:
        with self.lock:
            if kind in WRITE_KINDS:
                return len(self._write_clients[kind])
            return 1 if kind in self._singletons else 0
