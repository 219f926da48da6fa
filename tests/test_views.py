"""Tests for the display adapters."""

from __future__ import annotations

import click

from vrcli.models import DisplayOptions, Friend, User, UserStatus, World
from vrcli.views import FriendView, UserView, WorldView

_ALL = DisplayOptions(long_format=True).expanded()

_FRIEND = Friend.model_validate({
    "id": "usr_1",
    "displayName": "Neko",
    "status": "join me",
    "last_platform": "standalonewindows",
    "location": "",
    "last_activity": "2024-05-01T10:00:00Z",
})

_SEARCH_WORLD = World.model_validate({
    "id": "wrld_1",
    "name": "The Black Cat",
    "authorId": "usr_9",
    "authorName": "Fins",
    "capacity": 32,
    "tags": ["system_approved", "author_tag_social"],
    "favorites": 1200,
})


class TestFriendView:
    def test_fields(self) -> None:
        view = FriendView(_FRIEND)
        assert view.display_name() == "Neko"
        assert view.id() == "usr_1"
        assert view.status() == "Join me"
        assert view.formatted_platform() == "PC"
        assert view.platform() == "standalonewindows"
        assert view.location() == "private"
        assert view.activity() == "2024-05-01T10:00:00Z"

    def test_colored_status(self) -> None:
        colored = FriendView(_FRIEND).colored_status()
        assert colored != "Join me"
        assert click.unstyle(colored or "") == "Join me"

    def test_source_item_untouched(self) -> None:
        before = _FRIEND.model_dump()
        FriendView(_FRIEND).to_json_object(_ALL)
        assert _FRIEND.model_dump() == before

    def test_json_only_display_name_by_default(self) -> None:
        assert FriendView(_FRIEND).to_json_object(DisplayOptions()) == {"display_name": "Neko"}

    def test_json_flags_select_keys(self) -> None:
        obj = FriendView(_FRIEND).to_json_object(DisplayOptions(show_id=True, show_location=True))
        assert obj == {"display_name": "Neko", "id": "usr_1", "location": "private"}
        assert "status" not in obj

    def test_missing_value_is_omitted_not_null(self) -> None:
        friend = _FRIEND.model_copy(update={"last_activity": None})
        obj = FriendView(friend).to_json_object(DisplayOptions(show_activity=True))
        assert "activity" not in obj


class TestUserView:
    def test_search_result_has_no_location(self) -> None:
        user = User(id="usr_2", display_name="Mia", status=UserStatus.ACTIVE, platform="android")
        view = UserView(user)
        assert view.location() is None
        assert view.formatted_platform() == "Quest"
        assert view.status_color() == "green"

    def test_json_extras(self) -> None:
        user = User.model_validate({
            "id": "usr_2",
            "displayName": "Mia",
            "username": "mia",
            "bio": "hello",
            "date_joined": "2020-01-01",
            "status": "busy",
        })
        obj = UserView(user).to_json_object(_ALL)
        assert obj["username"] == "mia"
        assert obj["bio"] == "hello"
        assert obj["date_joined"] == "2020-01-01"
        assert obj["status"] == "Busy"

    def test_date_joined_needs_activity_flag(self) -> None:
        user = User(id="usr_2", display_name="Mia", date_joined="2020-01-01")
        assert "date_joined" not in UserView(user).to_json_object(DisplayOptions(show_id=True))


class TestWorldView:
    def test_column_labels(self) -> None:
        names = WorldView(_SEARCH_WORLD).column_names()
        assert (names.status, names.platform, names.location, names.activity) == (
            "Author",
            "Capacity",
            "Tags",
            "Visits",
        )
        assert names.name == "Name"

    def test_table_fields(self) -> None:
        view = WorldView(_SEARCH_WORLD)
        assert view.display_name() == "The Black Cat"
        assert view.status() == "Fins"
        assert view.formatted_platform() == "32"
        assert view.formatted_location() == "system_approved, author_tag_social"
        assert view.formatted_activity() == "N/A"
        assert view.colored_status() == "Fins"

    def test_json_uses_native_types(self) -> None:
        world = _SEARCH_WORLD.model_copy(update={"visits": 99, "description": "A bar"})
        obj = WorldView(world).to_json_object(_ALL)
        assert obj["display_name"] == "The Black Cat"
        assert obj["author_name"] == "Fins"
        assert obj["author_id"] == "usr_9"
        assert obj["capacity"] == 32
        assert obj["tags"] == ["system_approved", "author_tag_social"]
        assert obj["visits"] == 99
        assert obj["favorites"] == 1200
        assert obj["description"] == "A bar"
        assert "status" not in obj and "platform" not in obj

    def test_json_minimal(self) -> None:
        assert WorldView(_SEARCH_WORLD).to_json_object(DisplayOptions()) == {"display_name": "The Black Cat"}
