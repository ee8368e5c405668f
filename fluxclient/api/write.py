"""
Writing line-protocol records into a bucket.

`WriteApiBlocking` sends every call immediately. `WriteApi` buffers records
and sends them in batches from a background thread.
"""

import logging
import queue
import threading
import time
from abc import ABC, abstractmethod
from collections.abc import Callable

import requests

from fluxclient.exceptions import ClientClosedError, FluxClientError
from fluxclient.http.request import raise_for_status
from fluxclient.http.service import HttpService, Timeout
from fluxclient.options import WriteOptions

logger = logging.getLogger(__name__)

WRITE_PATH = "api/v2/write"

_STOP = object()


def post_records(
    service: HttpService,
    org: str,
    bucket: str,
    precision: str,
    records: list[str],
    *,
    timeout: Timeout | None = None,
) -> None:
    """
    Send line-protocol records in a single write request.

    Raises
    ------
    ApiError
        If the server rejects the batch.
    requests.RequestException
        On transport failures.
    """
    body = "\n".join(records).encode("utf-8")
    resp = service.request(
        "POST",
        WRITE_PATH,
        params={"org": org, "bucket": bucket, "precision": precision},
        data=body,
        headers={"Content-Type": "text/plain; charset=utf-8"},
        timeout=timeout,
    )
    raise_for_status(resp)


class WriteClient(ABC):
    """
    Common surface of the write clients.

    `close` is what lets the owning client drain every cached writer without
    knowing whether it buffers.
    """

    def __init__(
        self,
        org: str,
        bucket: str,
        service: HttpService,
        write_options: WriteOptions | None = None,
    ) -> None:
        self.org = org
        self.bucket = bucket
        self.service = service
        self.write_options = write_options or WriteOptions()

    @abstractmethod
    def write_record(self, *records: str) -> None:
        """Write one or more line-protocol records."""

    @abstractmethod
    def flush(self) -> None:
        """Send everything written so far."""

    @abstractmethod
    def close(self) -> None:
        """Flush and release resources held by the writer."""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


class WriteApiBlocking(WriteClient):
    """
    Synchronous writer: each `write_record` call is one HTTP request.
    """

    def write_record(self, *records: str, timeout: Timeout | None = None) -> None:
        """
        Write line-protocol records and wait for the server to accept them.

        Parameters
        ----------
        records
            Line-protocol records, one point each.
        timeout
            Optional request timeout overriding the client default.

        Raises
        ------
        ApiError
            If the server rejects the records.
        """
        if not records:
            return
        post_records(
            self.service,
            self.org,
            self.bucket,
            self.write_options.precision,
            list(records),
            timeout=timeout,
        )

    def flush(self) -> None:
        pass

    def close(self) -> None:
        pass


class WriteApi(WriteClient):
    """
    Non-blocking writer with batching.

    Records are buffered until `WriteOptions.batch_size` records are collected
    or `WriteOptions.flush_interval_ms` elapsed, then sent by a background
    thread. The thread starts with the first write.

    Parameters
    ----------
    org
        Organization name.
    bucket
        Bucket name.
    service
        Shared HTTP transport.
    write_options
        Batching parameters.
    error_callback
        Called as ``error_callback(batch, exc)`` when a batch cannot be written.
        Failures are logged either way.
    """

    def __init__(
        self,
        org: str,
        bucket: str,
        service: HttpService,
        write_options: WriteOptions | None = None,
        error_callback: Callable[[list[str], Exception], None] | None = None,
    ) -> None:
        super().__init__(org, bucket, service, write_options)
        self.error_callback = error_callback
        self._buffer: list[str] = []
        self._lock = threading.Lock()
        self._queue: queue.Queue = queue.Queue()
        self._thread: threading.Thread | None = None
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def write_record(self, *records: str) -> None:
        """
        Buffer line-protocol records for sending.

        Raises
        ------
        ClientClosedError
            If the writer was closed.
        """
        batch_size = self.write_options.batch_size
        with self._lock:
            if self._closed:
                raise ClientClosedError(
                    f"write client for {self.org}/{self.bucket} is closed"
                )
            if not records:
                return
            self._start()
            self._buffer.extend(records)
            while len(self._buffer) >= batch_size:
                self._queue.put(self._buffer[:batch_size])
                self._buffer = self._buffer[batch_size:]

    def flush(self) -> None:
        """
        Send buffered records and wait until every pending batch was handled.
        """
        self._enqueue_buffer()
        if self._thread is not None:
            self._queue.join()

    def close(self) -> None:
        """
        Flush pending records and stop the background thread.

        Calling it again is a no-op.
        """
        with self._lock:
            if self._closed:
                return
            self._closed = True
        self.flush()
        if self._thread is not None:
            self._queue.put(_STOP)
            self._thread.join()
            self._thread = None
        logger.debug("Write client for %s/%s closed", self.org, self.bucket)

    def _start(self) -> None:
        # caller holds self._lock
        if self._thread is None:
            self._thread = threading.Thread(
                target=self._run,
                name=f"fluxclient-write-{self.org}-{self.bucket}",
                daemon=True,
            )
            self._thread.start()

    def _enqueue_buffer(self) -> None:
        with self._lock:
            if self._buffer:
                self._queue.put(self._buffer)
                self._buffer = []

    def _run(self) -> None:
        interval = self.write_options.flush_interval_ms / 1000
        next_flush = time.monotonic() + interval
        while True:
            try:
                batch = self._queue.get(timeout=max(0.0, next_flush - time.monotonic()))
            except queue.Empty:
                batch = None
            if batch is not None:
                try:
                    if batch is _STOP:
                        return
                    self._send(batch)
                finally:
                    self._queue.task_done()
            if time.monotonic() >= next_flush:
                self._enqueue_buffer()
                next_flush = time.monotonic() + interval

    def _send(self, batch: list[str]) -> None:
        try:
            post_records(
                self.service,
                self.org,
                self.bucket,
                self.write_options.precision,
                batch,
            )
        except (requests.RequestException, FluxClientError) as e:
            logger.error(
                "Failed to write %d records to %s/%s: %s",
                len(batch),
                self.org,
                self.bucket,
                e,
            )
            if self.error_callback is not None:
                try:
                    self.error_callback(batch, e)
                except Exception:
                    logger.exception(
                        "Error callback failed for %s/%s", self.org, self.bucket
                    )
