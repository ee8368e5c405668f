"""
Scheduled Flux task management.
"""

from dataclasses import dataclass

from fluxclient.api._common import require
from fluxclient.exceptions import ValidationError
from fluxclient.http.service import HttpService
from fluxclient.models import Run, Task

STATUSES = ("active", "inactive")


@dataclass
class TasksApi:
    """
    Create, list, enable/disable, run and delete tasks.
    """

    service: HttpService

    def find_tasks(
        self, *, name: str | None = None, org_id: str | None = None
    ) -> list[Task]:
        payload = self.service.get_json(
            "api/v2/tasks", params={"name": name, "orgID": org_id}
        )
        return [Task.from_dict(t) for t in (payload or {}).get("tasks", [])]

    def get_task(self, task_id: str) -> Task:
        task_id = require(task_id, "task_id")
        return Task.from_dict(self.service.get_json(f"api/v2/tasks/{task_id}"))

    def create_task(
        self,
        org_id: str,
        flux: str,
        *,
        description: str | None = None,
        status: str = "active",
    ) -> Task:
        """
        Create a task from a Flux script.

        The script carries its own schedule in an ``option task = {...}`` line.

        Raises
        ------
        ValidationError
            If `org_id` or `flux` is empty or `status` is unknown.
        """
        if status not in STATUSES:
            raise ValidationError(f"status must be one of {STATUSES}")
        body = {
            "orgID": require(org_id, "org_id"),
            "flux": require(flux, "flux"),
            "status": status,
        }
        if description is not None:
            body["description"] = description
        payload = self.service.post_json("api/v2/tasks", json=body, expected=(201,))
        return Task.from_dict(payload)

    def update_task_status(self, task_id: str, status: str) -> Task:
        task_id = require(task_id, "task_id")
        if status not in STATUSES:
            raise ValidationError(f"status must be one of {STATUSES}")
        payload = self.service.patch_json(
            f"api/v2/tasks/{task_id}", json={"status": status}
        )
        return Task.from_dict(payload)

    def delete_task(self, task_id: str) -> None:
        task_id = require(task_id, "task_id")
        self.service.delete(f"api/v2/tasks/{task_id}")

    def find_runs(self, task_id: str) -> list[Run]:
        task_id = require(task_id, "task_id")
        payload = self.service.get_json(f"api/v2/tasks/{task_id}/runs")
        return [Run.from_dict(r) for r in (payload or {}).get("runs", [])]

    def run_manually(self, task_id: str) -> Run:
        """Schedule an immediate run of a task."""
        task_id = require(task_id, "task_id")
        payload = self.service.post_json(
            f"api/v2/tasks/{task_id}/runs", json={}, expected=(201,)
        )
        return Run.from_dict(payload)
