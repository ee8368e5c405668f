"""
Data models for server entities.

All models are built from the JSON payloads returned by the ``/api/v2`` endpoints.
Missing keys default to None so partial payloads never raise.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class HealthCheck:
    """
    Server health check result.

    Parameters
    ----------
    name
        Service name.
    status
        ``"pass"`` for a healthy server, ``"fail"`` for a degraded one.
    message
        Optional human-readable explanation.
    version
        Server version.
    commit
        Server build commit.
    checks
        Nested checks of server components.
    """

    name: str | None = None
    status: str | None = None
    message: str | None = None
    version: str | None = None
    commit: str | None = None
    checks: list["HealthCheck"] = field(default_factory=list)

    @property
    def is_healthy(self) -> bool:
        return self.status == "pass"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "HealthCheck":
        return cls(
            name=data.get("name"),
            status=data.get("status"),
            message=data.get("message"),
            version=data.get("version"),
            commit=data.get("commit"),
            checks=[cls.from_dict(c) for c in data.get("checks") or []],
        )


@dataclass(frozen=True)
class Organization:
    id: str | None = None
    name: str | None = None
    description: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Organization":
        return cls(
            id=data.get("id"),
            name=data.get("name"),
            description=data.get("description"),
        )


@dataclass(frozen=True)
class Bucket:
    """
    Bucket with its retention.

    `retention_seconds` of 0 means infinite retention.
    """

    id: str | None = None
    name: str | None = None
    org_id: str | None = None
    description: str | None = None
    retention_seconds: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Bucket":
        retention = 0
        for rule in data.get("retentionRules") or []:
            if rule.get("type", "expire") == "expire":
                retention = int(rule.get("everySeconds") or 0)
        return cls(
            id=data.get("id"),
            name=data.get("name"),
            org_id=data.get("orgID"),
            description=data.get("description"),
            retention_seconds=retention,
        )


@dataclass(frozen=True)
class User:
    id: str | None = None
    name: str | None = None
    status: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "User":
        return cls(id=data.get("id"), name=data.get("name"), status=data.get("status"))


@dataclass(frozen=True)
class Permission:
    """
    Access right on a resource type, optionally narrowed to one resource.

    Parameters
    ----------
    action
        ``"read"`` or ``"write"``.
    resource_type
        Resource type, e.g. ``"buckets"``.
    resource_id
        Optional id of a single resource.
    org_id
        Optional organization the resource belongs to.
    """

    action: str
    resource_type: str
    resource_id: str | None = None
    org_id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        resource: dict[str, Any] = {"type": self.resource_type}
        if self.resource_id:
            resource["id"] = self.resource_id
        if self.org_id:
            resource["orgID"] = self.org_id
        return {"action": self.action, "resource": resource}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Permission":
        resource = data.get("resource") or {}
        return cls(
            action=data.get("action"),
            resource_type=resource.get("type"),
            resource_id=resource.get("id"),
            org_id=resource.get("orgID"),
        )


@dataclass(frozen=True)
class Authorization:
    id: str | None = None
    token: str | None = None
    status: str | None = None
    description: str | None = None
    org_id: str | None = None
    user_id: str | None = None
    permissions: list[Permission] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Authorization":
        return cls(
            id=data.get("id"),
            token=data.get("token"),
            status=data.get("status"),
            description=data.get("description"),
            org_id=data.get("orgID"),
            user_id=data.get("userID"),
            permissions=[Permission.from_dict(p) for p in data.get("permissions") or []],
        )


@dataclass(frozen=True)
class Label:
    id: str | None = None
    name: str | None = None
    org_id: str | None = None
    properties: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Label":
        return cls(
            id=data.get("id"),
            name=data.get("name"),
            org_id=data.get("orgID"),
            properties=dict(data.get("properties") or {}),
        )


@dataclass(frozen=True)
class Task:
    id: str | None = None
    name: str | None = None
    org_id: str | None = None
    status: str | None = None
    flux: str | None = None
    description: str | None = None
    every: str | None = None
    cron: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Task":
        return cls(
            id=data.get("id"),
            name=data.get("name"),
            org_id=data.get("orgID"),
            status=data.get("status"),
            flux=data.get("flux"),
            description=data.get("description"),
            every=data.get("every"),
            cron=data.get("cron"),
        )


@dataclass(frozen=True)
class Run:
    id: str | None = None
    task_id: str | None = None
    status: str | None = None
    scheduled_for: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Run":
        return cls(
            id=data.get("id"),
            task_id=data.get("taskID"),
            status=data.get("status"),
            scheduled_for=data.get("scheduledFor"),
        )


@dataclass(frozen=True)
class OnboardingResponse:
    """
    Entities created by the initial server setup.

    Parameters
    ----------
    user
        The initial user.
    org
        The initial organization.
    bucket
        The initial bucket.
    auth
        The authorization whose token the client installs after setup.
    """

    user: User
    org: Organization
    bucket: Bucket
    auth: Authorization

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "OnboardingResponse":
        return cls(
            user=User.from_dict(data.get("user") or {}),
            org=Organization.from_dict(data.get("org") or {}),
            bucket=Bucket.from_dict(data.get("bucket") or {}),
            auth=Authorization.from_dict(data.get("auth") or {}),
        )
