"""User operations."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..context import Context
from ..response import Response
from ..types import CreateUserOptions, User, UserListOptions
from ..urls import path_segment

if TYPE_CHECKING:
    from ..client import Client

USERS_PATH = "api/v1/users"


def _user_path(user_id: str) -> str:
    return f"{USERS_PATH}/{path_segment(user_id)}"


class UserService:
    """Users of the organization."""

    def __init__(self, client: Client):
        self._client = client

    def get(self, ctx: Context, user_id: str) -> Response[User]:
        """Fetch a user by id or login."""
        return self._client.get(ctx, _user_path(user_id), into=User)

    def list(
        self,
        ctx: Context,
        options: UserListOptions | None = None,
    ) -> Response[list[User]]:
        """List one page of users.

        Pagination is left to the caller: the ``Link`` header of the returned
        response names the next page, whose cursor goes into
        ``options.after``.
        """
        return self._client.get(ctx, USERS_PATH, into=list[User], params=options)

    def create(self, ctx: Context, user: User, activate: bool = True) -> Response[User]:
        """Create a user, activating it immediately unless ``activate`` is False."""
        return self._client.post(
            ctx,
            USERS_PATH,
            body=user,
            into=User,
            params=CreateUserOptions(activate=activate),
        )

    def update(self, ctx: Context, user_id: str, user: User) -> Response[User]:
        """Replace the user's profile and credentials."""
        return self._client.put(ctx, _user_path(user_id), body=user, into=User)

    def deactivate(self, ctx: Context, user_id: str) -> Response[None]:
        return self._client.post(ctx, f"{_user_path(user_id)}/lifecycle/deactivate")

    def delete(self, ctx: Context, user_id: str) -> Response[None]:
        """Delete a user. The API only deletes users that are deactivated."""
        return self._client.delete(ctx, _user_path(user_id))
