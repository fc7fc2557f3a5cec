"""Group operations."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..context import Context
from ..response import Response
from ..types import Group, GroupListOptions, User, UserListOptions
from ..urls import path_segment

if TYPE_CHECKING:
    from ..client import Client

GROUPS_PATH = "api/v1/groups"


def _group_path(group_id: str) -> str:
    return f"{GROUPS_PATH}/{path_segment(group_id)}"


def _membership_path(group_id: str, user_id: str) -> str:
    return f"{_group_path(group_id)}/users/{path_segment(user_id)}"


class GroupService:
    """Groups of the organization and their memberships."""

    def __init__(self, client: Client):
        self._client = client

    def get(self, ctx: Context, group_id: str) -> Response[Group]:
        return self._client.get(ctx, _group_path(group_id), into=Group)

    def list(
        self,
        ctx: Context,
        options: GroupListOptions | None = None,
    ) -> Response[list[Group]]:
        """List one page of groups."""
        return self._client.get(ctx, GROUPS_PATH, into=list[Group], params=options)

    def create(self, ctx: Context, group: Group) -> Response[Group]:
        return self._client.post(ctx, GROUPS_PATH, body=group, into=Group)

    def delete(self, ctx: Context, group_id: str) -> Response[None]:
        return self._client.delete(ctx, _group_path(group_id))

    def list_members(
        self,
        ctx: Context,
        group_id: str,
        options: UserListOptions | None = None,
    ) -> Response[list[User]]:
        """List one page of the group's members."""
        return self._client.get(
            ctx,
            f"{_group_path(group_id)}/users",
            into=list[User],
            params=options,
        )

    def add_user(self, ctx: Context, group_id: str, user_id: str) -> Response[None]:
        return self._client.put(ctx, _membership_path(group_id, user_id))

    def remove_user(self, ctx: Context, group_id: str, user_id: str) -> Response[None]:
        return self._client.delete(ctx, _membership_path(group_id, user_id))
