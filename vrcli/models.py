"""Core data models for vrcli."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator


class UserStatus(str, Enum):
    ACTIVE = "active"
    JOIN_ME = "join me"
    ASK_ME = "ask me"
    BUSY = "busy"
    OFFLINE = "offline"


# ---------------------------------------------------------------------------
# Collection items
# ---------------------------------------------------------------------------


class Item(BaseModel, frozen=True, populate_by_name=True, extra="ignore"):
    """One entry of a remote collection. Field aliases follow the API wire format."""

    id: str
    display_name: str = Field(default="", alias="displayName")
    status: UserStatus | None = None
    platform: str = Field(default="", alias="last_platform")
    location: str | None = None
    last_activity: str | None = None

    @field_validator("status", mode="before")
    @classmethod
    def _known_status(cls, value: Any) -> Any:
        if isinstance(value, str) and value not in {s.value for s in UserStatus}:
            return None
        return value

    @field_validator("last_activity", "location", mode="before")
    @classmethod
    def _blank_is_none(cls, value: Any) -> Any:
        if value == "":
            return None
        return value


class Friend(Item):
    """An entry of the authenticated user's friends list."""

    status_description: str = Field(default="", alias="statusDescription")
    bio: str = ""
    tags: list[str] = Field(default_factory=list)


class User(Item):
    """A user record, either from search results or a full lookup."""

    username: str | None = None
    bio: str = ""
    date_joined: str | None = None
    status_description: str = Field(default="", alias="statusDescription")
    tags: list[str] = Field(default_factory=list)

    @field_validator("date_joined", mode="before")
    @classmethod
    def _blank_date(cls, value: Any) -> Any:
        if value == "":
            return None
        return value


class World(Item):
    """A world record. Search results omit ``visits`` and ``description``."""

    display_name: str = Field(default="", alias="name")
    author_id: str = Field(default="", alias="authorId")
    author_name: str = Field(default="", alias="authorName")
    capacity: int = 0
    description: str | None = None
    tags: list[str] = Field(default_factory=list)
    visits: int | None = None
    favorites: int = 0
    created_at: str | None = None
    updated_at: str | None = None


class FriendStatus(BaseModel, frozen=True, populate_by_name=True, extra="ignore"):
    """Friendship between the authenticated user and another user."""

    is_friend: bool = Field(default=False, alias="isFriend")
    incoming_request: bool = Field(default=False, alias="incomingRequest")
    outgoing_request: bool = Field(default=False, alias="outgoingRequest")

    def describe(self) -> str:
        if self.is_friend:
            return "You are friends with this user"
        if self.incoming_request:
            return "This user has sent you a friend request"
        if self.outgoing_request:
            return "You have sent a friend request to this user"
        return "No friendship or pending requests"


# ---------------------------------------------------------------------------
# Pipeline configuration values
# ---------------------------------------------------------------------------


class Partition(BaseModel, frozen=True):
    """A named server-side filter, sent as extra query parameters."""

    name: str
    params: dict[str, str] = Field(default_factory=dict)


UNFILTERED = Partition(name="all")
FRIENDS_ONLINE = Partition(name="online", params={"offline": "false"})
FRIENDS_OFFLINE = Partition(name="offline", params={"offline": "true"})
WORLDS_FEATURED = Partition(name="featured", params={"featured": "true"})


class DisplayOptions(BaseModel, frozen=True, populate_by_name=True):
    """Which optional fields to surface and in which format."""

    long_format: bool = False
    show_id: bool = False
    show_status: bool = False
    show_platform: bool = False
    show_location: bool = False
    show_activity: bool = False
    json_output: bool = Field(default=False, alias="json")

    @property
    def any_column(self) -> bool:
        return self.long_format or any(
            (self.show_id, self.show_status, self.show_platform, self.show_location, self.show_activity)
        )

    def expanded(self) -> DisplayOptions:
        """Return a copy where ``long_format`` switches on every column."""
        if not self.long_format:
            return self
        return self.model_copy(
            update={
                "show_id": True,
                "show_status": True,
                "show_platform": True,
                "show_location": True,
                "show_activity": True,
            }
        )


class SortSpec(BaseModel, frozen=True):
    """A sort method name (validated lazily) plus a reversal flag."""

    method: str = "name"
    reverse: bool = False
