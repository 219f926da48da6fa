"""Display adapter for friends-list entries."""

from __future__ import annotations

from vrcli.formatting import format_platform_short, format_user_status, normalize_location, status_color
from vrcli.models import Friend
from vrcli.views.base import TableDisplayable


class FriendView(TableDisplayable):
    def __init__(self, friend: Friend) -> None:
        self._friend = friend

    def display_name(self) -> str:
        return self._friend.display_name

    def id(self) -> str | None:
        return self._friend.id

    def status(self) -> str | None:
        return format_user_status(self._friend.status)

    def status_color(self) -> str | None:
        return status_color(self._friend.status)

    def platform(self) -> str | None:
        return self._friend.platform

    def formatted_platform(self) -> str | None:
        return format_platform_short(self._friend.platform)

    def location(self) -> str | None:
        return normalize_location(self._friend.location)

    def activity(self) -> str | None:
        return self._friend.last_activity
