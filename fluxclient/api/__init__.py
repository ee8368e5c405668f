from fluxclient.api.authorizations import AuthorizationsApi
from fluxclient.api.buckets import BucketsApi
from fluxclient.api.delete import DeleteApi
from fluxclient.api.labels import LabelsApi
from fluxclient.api.organizations import OrganizationsApi
from fluxclient.api.query import QueryApi
from fluxclient.api.tasks import TasksApi
from fluxclient.api.users import UsersApi
from fluxclient.api.write import WriteApi, WriteApiBlocking, WriteClient

__all__ = [
    "AuthorizationsApi",
    "BucketsApi",
    "DeleteApi",
    "LabelsApi",
    "OrganizationsApi",
    "QueryApi",
    "TasksApi",
    "UsersApi",
    "WriteApi",
    "WriteApiBlocking",
    "WriteClient",
]
