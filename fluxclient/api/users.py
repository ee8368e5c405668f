"""
User management.
"""

from dataclasses import dataclass

from fluxclient.api._common import require
from fluxclient.exceptions import ValidationError
from fluxclient.http.request import raise_for_status
from fluxclient.http.service import HttpService
from fluxclient.models import User


@dataclass
class UsersApi:
    """
    User lookup, creation, password changes and deletion.
    """

    service: HttpService

    def me(self) -> User:
        """Return the user owning the current credential."""
        return User.from_dict(self.service.get_json("api/v2/me"))

    def find_users(self) -> list[User]:
        payload = self.service.get_json("api/v2/users")
        return [User.from_dict(u) for u in (payload or {}).get("users", [])]

    def find_user_by_name(self, name: str) -> User | None:
        """
        Look up a user by name.

        Returns
        -------
        user
            The user, or None if no user has that name.
        """
        name = require(name, "user name")
        payload = self.service.get_json("api/v2/users", params={"name": name})
        users = (payload or {}).get("users", [])
        return User.from_dict(users[0]) if users else None

    def create_user(self, name: str) -> User:
        body = {"name": require(name, "user name"), "status": "active"}
        payload = self.service.post_json("api/v2/users", json=body, expected=(201,))
        return User.from_dict(payload)

    def update_user_password(self, user_id: str, password: str) -> None:
        """
        Set a new password for a user.

        Raises
        ------
        ValidationError
            If `user_id` or `password` is empty.
        ApiError
            If the server rejects the password (e.g. too short).
        """
        user_id = require(user_id, "user_id")
        if not password:
            raise ValidationError("password must be non-empty")
        resp = self.service.request(
            "POST", f"api/v2/users/{user_id}/password", json={"password": password}
        )
        raise_for_status(resp)

    def delete_user(self, user_id: str) -> None:
        user_id = require(user_id, "user_id")
        self.service.delete(f"api/v2/users/{user_id}")
