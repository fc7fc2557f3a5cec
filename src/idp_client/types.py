"""API resource types for the identity provider.

Pydantic models representing the users and groups returned by the API with
minimal processing. Unknown fields are kept so that round-tripping a
resource through an update does not drop attributes this client does not
model.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .options import QueryOptions


class _Resource(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")


class UserProfile(_Resource):
    """Profile attributes of a user."""

    login: str = ""
    email: str = ""
    first_name: str | None = Field(None, alias="firstName")
    last_name: str | None = Field(None, alias="lastName")
    mobile_phone: str | None = Field(None, alias="mobilePhone")


class User(_Resource):
    """A user account.

    ``status`` is one of the lifecycle states reported by the API (e.g.
    STAGED, ACTIVE, SUSPENDED, DEPROVISIONED).
    """

    id: str | None = None
    status: str | None = None
    created: datetime | None = None
    activated: datetime | None = None
    last_login: datetime | None = Field(None, alias="lastLogin")
    last_updated: datetime | None = Field(None, alias="lastUpdated")
    profile: UserProfile = Field(default_factory=UserProfile)


class GroupProfile(_Resource):
    """Profile attributes of a group."""

    name: str = ""
    description: str | None = None


class Group(_Resource):
    """A group of users."""

    id: str | None = None
    type: str | None = None
    created: datetime | None = None
    last_updated: datetime | None = Field(None, alias="lastUpdated")
    last_membership_updated: datetime | None = Field(
        None,
        alias="lastMembershipUpdated",
    )
    profile: GroupProfile = Field(default_factory=GroupProfile)


class UserListOptions(QueryOptions):
    """Query options for listing users."""

    q: str | None = None
    filter: str | None = None
    search: str | None = None
    limit: int | None = None
    after: str | None = None


class GroupListOptions(QueryOptions):
    """Query options for listing groups."""

    q: str | None = None
    filter: str | None = None
    limit: int | None = None
    after: str | None = None
    expand: list[str] | None = None


class CreateUserOptions(QueryOptions):
    """Query options for creating a user."""

    activate: bool = True
