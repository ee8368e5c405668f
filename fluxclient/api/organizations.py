"""
Organization management.
"""

from dataclasses import dataclass

from fluxclient.api._common import require
from fluxclient.exceptions import ApiError
from fluxclient.http.service import HttpService
from fluxclient.models import Organization, User


@dataclass
class OrganizationsApi:
    service: HttpService

    def find_organizations(self) -> list[Organization]:
        payload = self.service.get_json("api/v2/orgs")
        return [Organization.from_dict(o) for o in (payload or {}).get("orgs", [])]

    def find_organization_by_name(self, name: str) -> Organization | None:
        """
        Look up an organization by name.

        Returns
        -------
        org
            The organization, or None if no organization has that name.
        """
        name = require(name, "organization name")
        try:
            payload = self.service.get_json("api/v2/orgs", params={"org": name})
        except ApiError as e:
            # the server answers an unknown name with 404
            if e.status_code == 404:
                return None
            raise
        orgs = (payload or {}).get("orgs", [])
        return Organization.from_dict(orgs[0]) if orgs else None

    def find_organization_by_id(self, org_id: str) -> Organization:
        org_id = require(org_id, "org_id")
        return Organization.from_dict(self.service.get_json(f"api/v2/orgs/{org_id}"))

    def create_organization(
        self, name: str, *, description: str | None = None
    ) -> Organization:
        body = {"name": require(name, "organization name")}
        if description is not None:
            body["description"] = description
        payload = self.service.post_json("api/v2/orgs", json=body, expected=(201,))
        return Organization.from_dict(payload)

    def delete_organization(self, org_id: str) -> None:
        org_id = require(org_id, "org_id")
        self.service.delete(f"api/v2/orgs/{org_id}")

    def get_members(self, org_id: str) -> list[User]:
        """List the members of an organization."""
        org_id = require(org_id, "org_id")
        payload = self.service.get_json(f"api/v2/orgs/{org_id}/members")
        return [User.from_dict(u) for u in (payload or {}).get("users", [])]
