"""
Label management.
"""

from dataclasses import dataclass

from fluxclient.api._common import require
from fluxclient.http.service import HttpService
from fluxclient.models import Label


@dataclass
class LabelsApi:
    service: HttpService

    def find_labels(self, *, org_id: str | None = None) -> list[Label]:
        payload = self.service.get_json("api/v2/labels", params={"orgID": org_id})
        return [Label.from_dict(lb) for lb in (payload or {}).get("labels", [])]

    def create_label(
        self, name: str, org_id: str, *, properties: dict[str, str] | None = None
    ) -> Label:
        body = {
            "name": require(name, "label name"),
            "orgID": require(org_id, "org_id"),
        }
        if properties:
            body["properties"] = dict(properties)
        payload = self.service.post_json("api/v2/labels", json=body, expected=(201,))
        return Label.from_dict((payload or {}).get("label", {}))

    def update_label(
        self,
        label_id: str,
        *,
        name: str | None = None,
        properties: dict[str, str] | None = None,
    ) -> Label:
        """
        Rename a label and/or replace its properties.

        Properties set to an empty string are removed by the server.
        """
        label_id = require(label_id, "label_id")
        body = {}
        if name is not None:
            body["name"] = require(name, "label name")
        if properties is not None:
            body["properties"] = dict(properties)
        payload = self.service.patch_json(f"api/v2/labels/{label_id}", json=body)
        return Label.from_dict((payload or {}).get("label", {}))

    def delete_label(self, label_id: str) -> None:
        label_id = require(label_id, "label_id")
        self.service.delete(f"api/v2/labels/{label_id}")
