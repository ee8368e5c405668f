"""
Client wiring the sub-clients of a time-series server together.
"""

import logging
from collections.abc import Callable

from fluxclient import registry
from fluxclient.api.authorizations import AuthorizationsApi
from fluxclient.api.buckets import BucketsApi
from fluxclient.api.delete import DeleteApi
from fluxclient.api.labels import LabelsApi
from fluxclient.api.organizations import OrganizationsApi
from fluxclient.api.query import QueryApi
from fluxclient.api.tasks import TasksApi
from fluxclient.api.users import UsersApi
from fluxclient.api.write import WriteApi, WriteApiBlocking
from fluxclient.exceptions import ApiError, ValidationError
from fluxclient.http.auth import token_authorization
from fluxclient.http.request import read_json, raise_for_status
from fluxclient.http.service import HttpService, Timeout
from fluxclient.models import HealthCheck, OnboardingResponse
from fluxclient.options import Options

logger = logging.getLogger(__name__)

NANOSECONDS_PER_SECOND = 1_000_000_000


class Client:
    """
    Entry point to a server: health checks, onboarding and sub-clients.

    Write clients are cached per organization/bucket pair and every other
    sub-client (except `query_api`) is created once per client. All sub-clients
    share one HTTP session and one credential.

    Parameters
    ----------
    server_url
        Server base URL, e.g. ``"http://localhost:8086"``.
    token
        API token. May be empty for a freshly installed server that was not set
        up yet; `setup` installs the token it receives.
    options
        Client options. Defaults to `Options()`.
    """

    def __init__(
        self, server_url: str, token: str = "", options: Options | None = None
    ) -> None:
        self._options = options or Options()
        if self._options.log_level is not None:
            logging.getLogger("fluxclient").setLevel(self._options.log_level)
        self._server_url = server_url
        self._service = HttpService(
            server_url,
            authorization=token_authorization(token),
            session=self._options.session,
            timeout=self._options.timeout,
            verify=self._options.verify,
            user_agent=self._options.user_agent,
        )
        self._registry = registry.SubClientRegistry()
        logger.info("Using URL '%s'", self._service.base_url)

    @property
    def options(self) -> Options:
        return self._options

    @property
    def server_url(self) -> str:
        return self._server_url

    @property
    def http_service(self) -> HttpService:
        return self._service

    def setup(
        self,
        username: str,
        password: str,
        org: str,
        bucket: str,
        retention_period_hours: int = 0,
        *,
        timeout: Timeout | None = None,
    ) -> OnboardingResponse:
        """
        Initialize a new server with a user, organization and bucket.

        On success the returned token becomes the credential of this client
        and of every sub-client it hands out.

        Parameters
        ----------
        username
            Name of the initial user.
        password
            Password of the initial user.
        org
            Name of the initial organization.
        bucket
            Name of the initial bucket.
        retention_period_hours
            Retention of the initial bucket. 0 means infinite.
        timeout
            Optional request timeout overriding the client default.

        Returns
        -------
        onboarding
            The created user, organization, bucket and authorization.

        Raises
        ------
        ValidationError
            If `username` or `password` is empty. Nothing is sent.
        ApiError
            If the server refuses the setup, e.g. because it is already set up,
            or answers without a token. The credential is left unchanged.
        """
        if not username or not password:
            raise ValidationError("a username and a password is required for a setup")

        retention_seconds = retention_period_hours * 3600
        body = {
            "username": username,
            "password": password,
            "org": org,
            "bucket": bucket,
            "retentionPeriodSeconds": retention_seconds,
            # same duration in the server's native unit (nanoseconds)
            "retentionPeriodHrs": retention_seconds * NANOSECONDS_PER_SECOND,
        }
        # The request runs under the registry lock: sub-client creation waits
        # until the new credential is installed.
        with self._registry.lock:
            resp = self._service.request(
                "POST", "api/v2/setup", json=body, timeout=timeout
            )
            onboarding = OnboardingResponse.from_dict(
                read_json(resp, expected=(201,)) or {}
            )
            if not onboarding.auth.token:
                raise ApiError(
                    method="POST",
                    url=resp.url,
                    status_code=resp.status_code,
                    message="setup response carries no token",
                )
            self._service.set_authorization(token_authorization(onboarding.auth.token))
        logger.info("Server set up for org '%s', bucket '%s'", org, bucket)
        return onboarding

    def ready(self, *, timeout: Timeout | None = None) -> bool:
        """
        Check that the server is running.

        Authentication is not needed and not validated.

        Raises
        ------
        ApiError
            If the server answers with an error status.
        """
        raise_for_status(self._service.request("GET", "ready", timeout=timeout))
        return True

    def health(self, *, timeout: Timeout | None = None) -> HealthCheck:
        """
        Return the server health.

        A degraded server (HTTP 503) is a normal result with
        ``status == "fail"``, not an error. Authentication is not needed.

        Raises
        ------
        ApiError
            For error statuses other than 503.
        """
        resp = self._service.request("GET", "health", timeout=timeout)
        try:
            payload = read_json(resp, expected=(200, 503))
        except ApiError:
            # non-JSON 503 bodies come from proxies in front of the server
            if resp.status_code != 503:
                raise
            payload = None
        if not payload and resp.status_code == 503:
            return HealthCheck(status="fail", message=resp.reason)
        return HealthCheck.from_dict(payload or {})

    def close(self) -> None:
        """
        Flush and close every asynchronous write client.

        Also releases pooled connections if the HTTP session was created by
        this client.
        """
        self._registry.drain_write_clients()
        self._service.close()

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def write_api(
        self,
        org: str,
        bucket: str,
        *,
        error_callback: Callable[[list[str], Exception], None] | None = None,
    ) -> WriteApi:
        """
        Return the non-blocking write client for an organization/bucket pair.

        The same instance is returned for the same pair until `close`.
        `error_callback` only applies when the instance is created.
        """
        return self._registry.get_or_create(
            registry.WRITE,
            lambda: WriteApi(
                org,
                bucket,
                self._service,
                self._options.write_options,
                error_callback=error_callback,
            ),
            key=registry.write_key(org, bucket),
        )

    def write_api_blocking(self, org: str, bucket: str) -> WriteApiBlocking:
        """
        Return the blocking write client for an organization/bucket pair.

        The same instance is returned for the same pair until `close`.
        """
        return self._registry.get_or_create(
            registry.WRITE_BLOCKING,
            lambda: WriteApiBlocking(
                org, bucket, self._service, self._options.write_options
            ),
            key=registry.write_key(org, bucket),
        )

    def query_api(self, org: str) -> QueryApi:
        """Return a new query client for an organization. Not cached."""
        return QueryApi(org, self._service)

    def authorizations_api(self) -> AuthorizationsApi:
        return self._registry.get_or_create(
            registry.AUTHORIZATIONS, lambda: AuthorizationsApi(self._service)
        )

    def organizations_api(self) -> OrganizationsApi:
        return self._registry.get_or_create(
            registry.ORGANIZATIONS, lambda: OrganizationsApi(self._service)
        )

    def users_api(self) -> UsersApi:
        return self._registry.get_or_create(
            registry.USERS, lambda: UsersApi(self._service)
        )

    def delete_api(self) -> DeleteApi:
        return self._registry.get_or_create(
            registry.DELETE, lambda: DeleteApi(self._service)
        )

    def buckets_api(self) -> BucketsApi:
        return self._registry.get_or_create(
            registry.BUCKETS, lambda: BucketsApi(self._service)
        )

    def labels_api(self) -> LabelsApi:
        return self._registry.get_or_create(
            registry.LABELS, lambda: LabelsApi(self._service)
        )

    def tasks_api(self) -> TasksApi:
        return self._registry.get_or_create(
            registry.TASKS, lambda: TasksApi(self._service)
        )
