"""Tests for client-side sorting."""

from __future__ import annotations

import logging

import pytest

from vrcli.models import Friend, SortSpec, UserStatus
from vrcli.sorting import (
    SortMethod,
    platform_bucket,
    resolve_sort_method,
    sort_and_limit,
    sort_items,
    status_priority,
)


def _friend(id: str, name: str, **kwargs: object) -> Friend:
    return Friend(id=id, display_name=name, **kwargs)


_MIXED = [
    _friend("usr_3", "zed", status=UserStatus.BUSY, platform="android", last_activity="2024-03-01T10:00:00Z"),
    _friend("usr_1", "Amy", status=UserStatus.ACTIVE, platform="standalonewindows"),
    _friend("usr_2", "mia", status=UserStatus.ACTIVE, platform="ios", last_activity="2024-05-01T10:00:00Z"),
    _friend("usr_4", "Bob", status=UserStatus.OFFLINE, platform="weird", last_activity="2024-01-01T10:00:00Z"),
    _friend("usr_5", "amy", status=UserStatus.JOIN_ME, platform="standalonewindows"),
]


def _names(items: list[Friend]) -> list[str]:
    return [f.display_name for f in items]


class TestResolveSortMethod:
    def test_known_names(self) -> None:
        assert resolve_sort_method("status") is SortMethod.STATUS
        assert resolve_sort_method("Activity") is SortMethod.ACTIVITY

    def test_unknown_falls_back_with_warning(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="vrcli.sorting"):
            assert resolve_sort_method("bogus") is SortMethod.NAME
        assert "Unknown sort method 'bogus'" in caplog.text
        assert "name, status, activity, platform, id" in caplog.text


class TestHelpers:
    def test_status_priority_order(self) -> None:
        ordered = sorted(UserStatus, key=status_priority)
        assert ordered == [
            UserStatus.ACTIVE,
            UserStatus.JOIN_ME,
            UserStatus.ASK_ME,
            UserStatus.BUSY,
            UserStatus.OFFLINE,
        ]
        assert status_priority(None) > status_priority(UserStatus.OFFLINE)

    def test_platform_buckets(self) -> None:
        assert platform_bucket("standalonewindows") == "1_PC"
        assert platform_bucket("android") == "2_Quest"
        assert platform_bucket("ios") == "3_iOS"
        assert platform_bucket("linux") == "9_linux"


class TestSortItems:
    def test_name_is_case_insensitive(self) -> None:
        result = sort_items(_MIXED, SortMethod.NAME)
        assert _names(result) == ["Amy", "amy", "Bob", "mia", "zed"]

    def test_status_then_name(self) -> None:
        result = sort_items(_MIXED, SortMethod.STATUS)
        assert _names(result) == ["Amy", "mia", "amy", "zed", "Bob"]

    def test_activity_recent_first_missing_last(self) -> None:
        result = sort_items(_MIXED, SortMethod.ACTIVITY)
        assert _names(result) == ["mia", "zed", "Bob", "Amy", "amy"]

    def test_platform_buckets_then_name(self) -> None:
        result = sort_items(_MIXED, SortMethod.PLATFORM)
        assert _names(result) == ["Amy", "amy", "zed", "mia", "Bob"]

    def test_id(self) -> None:
        result = sort_items(_MIXED, SortMethod.ID)
        assert [f.id for f in result] == ["usr_1", "usr_2", "usr_3", "usr_4", "usr_5"]

    @pytest.mark.parametrize("method", list(SortMethod))
    def test_reverse_is_exact_mirror(self, method: SortMethod) -> None:
        forward = sort_items(_MIXED, method)
        backward = sort_items(_MIXED, method, reverse=True)
        assert backward == list(reversed(forward))

    def test_does_not_mutate_input(self) -> None:
        items = list(_MIXED)
        sort_items(items, SortMethod.NAME)
        assert items == _MIXED


class TestSortAndLimit:
    def test_limit_applies_after_sorting(self) -> None:
        items = [_friend("1", "Zed"), _friend("2", "Amy"), _friend("3", "Mia")]
        result = sort_and_limit(items, SortSpec(method="name"), limit=2)
        assert _names(result) == ["Amy", "Mia"]

    def test_no_limit_keeps_everything(self) -> None:
        assert len(sort_and_limit(_MIXED, SortSpec())) == len(_MIXED)

    def test_unknown_method_matches_name(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING):
            bogus = sort_and_limit(_MIXED, SortSpec(method="bogus"))
        assert bogus == sort_and_limit(_MIXED, SortSpec(method="name"))
        assert "bogus" in caplog.text

    def test_reverse_with_limit(self) -> None:
        items = [_friend("1", "Zed"), _friend("2", "Amy"), _friend("3", "Mia")]
        result = sort_and_limit(items, SortSpec(method="name", reverse=True), limit=1)
        assert _names(result) == ["Zed"]
