"""
Bucket management.
"""

from dataclasses import dataclass

from fluxclient.api._common import require
from fluxclient.exceptions import ValidationError
from fluxclient.http.service import HttpService
from fluxclient.models import Bucket


@dataclass
class BucketsApi:
    service: HttpService

    def find_buckets(self, *, org: str | None = None) -> list[Bucket]:
        payload = self.service.get_json("api/v2/buckets", params={"org": org})
        return [Bucket.from_dict(b) for b in (payload or {}).get("buckets", [])]

    def find_bucket_by_name(self, name: str, *, org: str | None = None) -> Bucket | None:
        """
        Look up a bucket by name.

        Returns
        -------
        bucket
            The bucket, or None if no bucket has that name.
        """
        name = require(name, "bucket name")
        payload = self.service.get_json(
            "api/v2/buckets", params={"name": name, "org": org}
        )
        buckets = (payload or {}).get("buckets", [])
        return Bucket.from_dict(buckets[0]) if buckets else None

    def create_bucket(
        self,
        name: str,
        org_id: str,
        *,
        retention_seconds: int = 0,
        description: str | None = None,
    ) -> Bucket:
        """
        Create a bucket.

        Parameters
        ----------
        name
            Bucket name.
        org_id
            Id of the owning organization.
        retention_seconds
            Data older than this is dropped. 0 keeps data forever.
        description
            Optional description.

        Raises
        ------
        ValidationError
            If `name` or `org_id` is empty or `retention_seconds` is negative.
        """
        if retention_seconds < 0:
            raise ValidationError("retention_seconds must not be negative")
        body = {
            "name": require(name, "bucket name"),
            "orgID": require(org_id, "org_id"),
            "retentionRules": [],
        }
        if retention_seconds:
            body["retentionRules"] = [
                {"type": "expire", "everySeconds": retention_seconds}
            ]
        if description is not None:
            body["description"] = description
        payload = self.service.post_json("api/v2/buckets", json=body, expected=(201,))
        return Bucket.from_dict(payload)

    def delete_bucket(self, bucket_id: str) -> None:
        bucket_id = require(bucket_id, "bucket_id")
        self.service.delete(f"api/v2/buckets/{bucket_id}")
