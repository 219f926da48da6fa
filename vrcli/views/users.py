"""Display adapter for user records."""

from __future__ import annotations

from typing import Any

from vrcli.formatting import format_platform_short, format_user_status, normalize_location, status_color
from vrcli.models import DisplayOptions, User
from vrcli.views.base import TableDisplayable


class UserView(TableDisplayable):
    def __init__(self, user: User) -> None:
        self._user = user

    def display_name(self) -> str:
        return self._user.display_name

    def id(self) -> str | None:
        return self._user.id

    def status(self) -> str | None:
        return format_user_status(self._user.status)

    def status_color(self) -> str | None:
        return status_color(self._user.status)

    def platform(self) -> str | None:
        return self._user.platform

    def formatted_platform(self) -> str | None:
        return format_platform_short(self._user.platform)

    def location(self) -> str | None:
        # Search results carry no location; only full records do.
        if self._user.location is None:
            return None
        return normalize_location(self._user.location)

    def activity(self) -> str | None:
        return self._user.last_activity

    def json_extras(self, options: DisplayOptions) -> dict[str, Any]:
        extras: dict[str, Any] = {}
        if self._user.username:
            extras["username"] = self._user.username
        if self._user.bio:
            extras["bio"] = self._user.bio
        if options.show_activity and self._user.date_joined:
            extras["date_joined"] = self._user.date_joined
        return extras
