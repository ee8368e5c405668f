import unittest
from datetime import datetime, timedelta, timezone

from fake_session import FakeSession, make_response

from fluxclient.api import (
    AuthorizationsApi,
    BucketsApi,
    DeleteApi,
    LabelsApi,
    OrganizationsApi,
    TasksApi,
    UsersApi,
)
from fluxclient.api.delete import rfc3339
from fluxclient.exceptions import ApiError, ValidationError
from fluxclient.http.service import HttpService
from fluxclient.models import Permission

BASE = "http://localhost:8086"


class ApiTestCase(unittest.TestCase):
    def service(self, *responses):
        self.session = FakeSession(list(responses))
        return HttpService(BASE, "Token t", session=self.session)

    @property
    def call(self):
        return self.session.calls[-1]


class TestAuthorizationsApi(ApiTestCase):
    def test_create(self):
        api = AuthorizationsApi(
            self.service(make_response(201, {"id": "a1", "token": "tok", "orgID": "o1"}))
        )
        auth = api.create_authorization(
            "o1",
            [Permission("read", "buckets", org_id="o1"), Permission("write", "buckets", "b1")],
            description="ci",
        )
        self.assertEqual(auth.token, "tok")
        self.assertEqual(self.call.url, f"{BASE}/api/v2/authorizations")
        self.assertEqual(
            self.call.json,
            {
                "orgID": "o1",
                "permissions": [
                    {"action": "read", "resource": {"type": "buckets", "orgID": "o1"}},
                    {"action": "write", "resource": {"type": "buckets", "id": "b1"}},
                ],
                "description": "ci",
            },
        )

    def test_create_requires_permissions(self):
        api = AuthorizationsApi(self.service())
        with self.assertRaises(ValidationError):
            api.create_authorization("o1", [])

    def test_find(self):
        payload = {
            "authorizations": [
                {"id": "a1", "permissions": [{"action": "read", "resource": {"type": "orgs"}}]}
            ]
        }
        api = AuthorizationsApi(self.service(make_response(200, payload)))
        found = api.find_authorizations(org="my-org")
        self.assertEqual(found[0].permissions[0], Permission("read", "orgs"))
        self.assertEqual(self.call.params, {"org": "my-org"})

    def test_update_status(self):
        api = AuthorizationsApi(self.service(make_response(200, {"id": "a1", "status": "inactive"})))
        self.assertEqual(api.update_authorization_status("a1", "inactive").status, "inactive")
        self.assertEqual(self.call.method, "PATCH")
        with self.assertRaises(ValidationError):
            api.update_authorization_status("a1", "paused")

    def test_delete(self):
        api = AuthorizationsApi(self.service())
        api.delete_authorization("a1")
        self.assertEqual(self.call.method, "DELETE")
        self.assertEqual(self.call.url, f"{BASE}/api/v2/authorizations/a1")


class TestOrganizationsApi(ApiTestCase):
    def test_find_by_name(self):
        api = OrganizationsApi(self.service(make_response(200, {"orgs": [{"id": "o1", "name": "acme"}]})))
        org = api.find_organization_by_name("acme")
        self.assertEqual(org.id, "o1")
        self.assertEqual(self.call.params, {"org": "acme"})

    def test_find_by_name_unknown(self):
        api = OrganizationsApi(
            self.service(make_response(404, {"code": "not found", "message": "organization not found"}))
        )
        self.assertIsNone(api.find_organization_by_name("nope"))

    def test_other_errors_propagate(self):
        api = OrganizationsApi(self.service(make_response(401, {"code": "unauthorized"})))
        with self.assertRaises(ApiError):
            api.find_organization_by_name("acme")

    def test_create_and_members(self):
        api = OrganizationsApi(
            self.service(
                make_response(201, {"id": "o2", "name": "new"}),
                make_response(200, {"users": [{"id": "u1", "name": "admin"}]}),
            )
        )
        self.assertEqual(api.create_organization("new").id, "o2")
        self.assertEqual(self.session.calls[0].json, {"name": "new"})
        self.assertEqual(api.get_members("o2")[0].name, "admin")
        self.assertEqual(self.call.url, f"{BASE}/api/v2/orgs/o2/members")


class TestUsersApi(ApiTestCase):
    def test_me(self):
        api = UsersApi(self.service(make_response(200, {"id": "u1", "name": "admin"})))
        self.assertEqual(api.me().name, "admin")
        self.assertEqual(self.call.url, f"{BASE}/api/v2/me")

    def test_find_by_name_missing(self):
        api = UsersApi(self.service(make_response(200, {"users": []})))
        self.assertIsNone(api.find_user_by_name("ghost"))

    def test_update_password(self):
        api = UsersApi(self.service())
        api.update_user_password("u1", "new-secret")
        self.assertEqual(self.call.url, f"{BASE}/api/v2/users/u1/password")
        self.assertEqual(self.call.json, {"password": "new-secret"})
        with self.assertRaises(ValidationError):
            api.update_user_password("u1", "")


class TestDeleteApi(ApiTestCase):
    def test_delete(self):
        api = DeleteApi(self.service())
        start = datetime(2024, 1, 1, tzinfo=timezone.utc)
        api.delete(start, start + timedelta(hours=1), '_measurement="cpu"', org="o", bucket="b")
        self.assertEqual(self.call.url, f"{BASE}/api/v2/delete")
        self.assertEqual(self.call.params, {"org": "o", "bucket": "b"})
        self.assertEqual(
            self.call.json,
            {
                "start": "2024-01-01T00:00:00Z",
                "stop": "2024-01-01T01:00:00Z",
                "predicate": '_measurement="cpu"',
            },
        )

    def test_stop_before_start(self):
        api = DeleteApi(self.service())
        now = datetime.now(timezone.utc)
        with self.assertRaises(ValidationError):
            api.delete(now, now - timedelta(seconds=1), org="o", bucket="b")
        self.assertEqual(self.session.calls, [])

    def test_rfc3339(self):
        self.assertEqual(rfc3339(datetime(2024, 5, 1, 12, 0)), "2024-05-01T12:00:00Z")
        cet = timezone(timedelta(hours=1))
        self.assertEqual(rfc3339(datetime(2024, 5, 1, 13, 0, tzinfo=cet)), "2024-05-01T12:00:00Z")


class TestBucketsApi(ApiTestCase):
    def test_create_with_retention(self):
        api = BucketsApi(self.service(make_response(201, {"id": "b1", "name": "data"})))
        api.create_bucket("data", "o1", retention_seconds=86400)
        self.assertEqual(
            self.call.json,
            {
                "name": "data",
                "orgID": "o1",
                "retentionRules": [{"type": "expire", "everySeconds": 86400}],
            },
        )

    def test_create_validation(self):
        api = BucketsApi(self.service())
        with self.assertRaises(ValidationError):
            api.create_bucket("data", "o1", retention_seconds=-1)
        with self.assertRaises(ValidationError):
            api.create_bucket("", "o1")

    def test_find_by_name(self):
        payload = {"buckets": [{"id": "b1", "name": "data", "retentionRules": [{"type": "expire", "everySeconds": 60}]}]}
        api = BucketsApi(self.service(make_response(200, payload), make_response(200, {"buckets": []})))
        self.assertEqual(api.find_bucket_by_name("data").retention_seconds, 60)
        self.assertIsNone(api.find_bucket_by_name("other"))


class TestLabelsApi(ApiTestCase):
    def test_create_and_update(self):
        api = LabelsApi(
            self.service(
                make_response(201, {"label": {"id": "l1", "name": "prod", "properties": {"color": "red"}}}),
                make_response(200, {"label": {"id": "l1", "name": "live"}}),
            )
        )
        label = api.create_label("prod", "o1", properties={"color": "red"})
        self.assertEqual(label.properties, {"color": "red"})
        self.assertEqual(api.update_label("l1", name="live").name, "live")
        self.assertEqual(self.call.json, {"name": "live"})


class TestTasksApi(ApiTestCase):
    def test_create(self):
        flux = 'option task = {name: "t", every: 1h}\nfrom(bucket: "b")'
        api = TasksApi(self.service(make_response(201, {"id": "t1", "name": "t", "every": "1h"})))
        task = api.create_task("o1", flux)
        self.assertEqual(task.every, "1h")
        self.assertEqual(self.call.json, {"orgID": "o1", "flux": flux, "status": "active"})

    def test_runs(self):
        api = TasksApi(
            self.service(
                make_response(201, {"id": "r1", "taskID": "t1", "status": "scheduled"}),
                make_response(200, {"runs": [{"id": "r1", "taskID": "t1", "status": "success"}]}),
            )
        )
        self.assertEqual(api.run_manually("t1").status, "scheduled")
        self.assertEqual(api.find_runs("t1")[0].status, "success")
        self.assertEqual(self.call.url, f"{BASE}/api/v2/tasks/t1/runs")

    def test_status_validation(self):
        api = TasksApi(self.service())
        with self.assertRaises(ValidationError):
            api.update_task_status("t1", "paused")
        with self.assertRaises(ValidationError):
            api.get_task(" ")


if __name__ == "__main__":
    unittest.main()
