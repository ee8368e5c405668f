"""
Deleting points from a bucket.
"""

from dataclasses import dataclass
from datetime import datetime, timezone

from fluxclient.api._common import require
from fluxclient.exceptions import ValidationError
from fluxclient.http.request import raise_for_status
from fluxclient.http.service import HttpService, Timeout


def rfc3339(value: datetime) -> str:
    """
    Format a datetime as RFC3339 in UTC.

    Naive datetimes are taken as UTC.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


@dataclass
class DeleteApi:
    service: HttpService

    def delete(
        self,
        start: datetime,
        stop: datetime,
        predicate: str = "",
        *,
        org: str,
        bucket: str,
        timeout: Timeout | None = None,
    ) -> None:
        """
        Delete points in ``[start, stop]`` matching `predicate`.

        Parameters
        ----------
        start
            Start of the time range.
        stop
            End of the time range.
        predicate
            Delete predicate, e.g. ``'_measurement="cpu" AND host="a"'``.
            Empty deletes everything in the range.
        org
            Organization name.
        bucket
            Bucket name.
        timeout
            Optional request timeout overriding the client default.

        Raises
        ------
        ValidationError
            If `org` or `bucket` is empty or `stop` precedes `start`.
        ApiError
            If the server rejects the request.
        """
        org = require(org, "org")
        bucket = require(bucket, "bucket")
        if stop < start:
            raise ValidationError("stop must not precede start")
        body = {"start": rfc3339(start), "stop": rfc3339(stop)}
        if predicate:
            body["predicate"] = predicate
        resp = self.service.request(
            "POST",
            "api/v2/delete",
            params={"org": org, "bucket": bucket},
            json=body,
            timeout=timeout,
        )
        raise_for_status(resp)
