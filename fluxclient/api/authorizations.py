"""
Authorization (API token) management.
"""

from dataclasses import dataclass

from fluxclient.api._common import require
from fluxclient.exceptions import ValidationError
from fluxclient.http.service import HttpService
from fluxclient.models import Authorization, Permission

STATUSES = ("active", "inactive")


@dataclass
class AuthorizationsApi:
    """
    Create, list, activate/deactivate and delete authorizations.
    """

    service: HttpService

    def find_authorizations(
        self,
        *,
        org: str | None = None,
        org_id: str | None = None,
        user: str | None = None,
        user_id: str | None = None,
    ) -> list[Authorization]:
        """
        List authorizations, optionally filtered by organization or user.

        Returns
        -------
        authorizations
            Matching authorizations.
        """
        payload = self.service.get_json(
            "api/v2/authorizations",
            params={"org": org, "orgID": org_id, "user": user, "userID": user_id},
        )
        return [Authorization.from_dict(a) for a in (payload or {}).get("authorizations", [])]

    def create_authorization(
        self,
        org_id: str,
        permissions: list[Permission],
        *,
        description: str | None = None,
    ) -> Authorization:
        """
        Create an authorization granting `permissions` within an organization.

        Raises
        ------
        ValidationError
            If `org_id` is empty or no permission is given.
        """
        org_id = require(org_id, "org_id")
        if not permissions:
            raise ValidationError("at least one permission is required")
        body = {
            "orgID": org_id,
            "permissions": [p.to_dict() for p in permissions],
        }
        if description is not None:
            body["description"] = description
        payload = self.service.post_json(
            "api/v2/authorizations", json=body, expected=(201,)
        )
        return Authorization.from_dict(payload)

    def update_authorization_status(
        self, authorization_id: str, status: str
    ) -> Authorization:
        """
        Activate or deactivate an authorization.

        Parameters
        ----------
        authorization_id
            Authorization id.
        status
            ``"active"`` or ``"inactive"``.
        """
        authorization_id = require(authorization_id, "authorization_id")
        if status not in STATUSES:
            raise ValidationError(f"status must be one of {STATUSES}")
        payload = self.service.patch_json(
            f"api/v2/authorizations/{authorization_id}", json={"status": status}
        )
        return Authorization.from_dict(payload)

    def delete_authorization(self, authorization_id: str) -> None:
        authorization_id = require(authorization_id, "authorization_id")
        self.service.delete(f"api/v2/authorizations/{authorization_id}")
