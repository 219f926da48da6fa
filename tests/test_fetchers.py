"""Tests for the retrieval pipeline wiring."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from vrcli.fetchers import fetch_friends, prepare, search_users, search_worlds
from vrcli.models import Friend, Partition, SortSpec, User, World
from vrcli.pagination import PagingOptions

_PAGING = PagingOptions(page_size=2, max_concurrency=2, request_delay=0, max_pages=5)


class FakeClient:
    """Stands in for VRChatClient; serves one short page per partition."""

    def __init__(self) -> None:
        self.partitions: list[str] = []
        self.queries: list[str] = []

    async def get_friends_page(self, partition: Partition, offset: int, limit: int) -> list[Friend]:
        self.partitions.append(partition.name)
        if offset:
            return []
        if partition.name == "online":
            return [Friend(id="usr_1", display_name="Zed"), Friend(id="usr_2", display_name="Amy")]
        return [Friend(id="usr_2", display_name="Amy")]

    def search_users_page(self, query: str):
        self.queries.append(query)

        async def fetch(partition: Partition, offset: int, limit: int) -> list[User]:
            self.partitions.append(partition.name)
            return [User(id="usr_9", display_name=query)] if offset == 0 else []

        return fetch

    def search_worlds_page(self, query: str):
        self.queries.append(query)

        async def fetch(partition: Partition, offset: int, limit: int) -> list[World]:
            self.partitions.append(partition.name)
            return []

        return fetch


class TestFetchFriends:
    @pytest.mark.asyncio
    async def test_both_partitions_merged(self) -> None:
        client = FakeClient()
        friends = await fetch_friends(client, _PAGING)  # type: ignore[arg-type]
        assert [f.id for f in friends] == ["usr_1", "usr_2"]
        assert set(client.partitions) == {"online", "offline"}

    @pytest.mark.asyncio
    async def test_online_only(self) -> None:
        client = FakeClient()
        friends = await fetch_friends(client, _PAGING, online=True)  # type: ignore[arg-type]
        assert len(friends) == 2
        assert set(client.partitions) == {"online"}

    @pytest.mark.asyncio
    async def test_offline_only(self) -> None:
        client = FakeClient()
        friends = await fetch_friends(client, _PAGING, offline=True)  # type: ignore[arg-type]
        assert [f.id for f in friends] == ["usr_2"]
        assert set(client.partitions) == {"offline"}

    @pytest.mark.asyncio
    async def test_conflicting_flags(self) -> None:
        with pytest.raises(ValueError):
            await fetch_friends(MagicMock(), _PAGING, online=True, offline=True)


class TestSearches:
    @pytest.mark.asyncio
    async def test_users(self) -> None:
        client = FakeClient()
        users = await search_users(client, _PAGING, "neko")  # type: ignore[arg-type]
        assert [u.display_name for u in users] == ["neko"]
        assert client.queries == ["neko"]
        assert set(client.partitions) == {"all"}

    @pytest.mark.asyncio
    async def test_featured_worlds_partition(self) -> None:
        client = FakeClient()
        await search_worlds(client, _PAGING, "bar", featured=True)  # type: ignore[arg-type]
        assert set(client.partitions) == {"featured"}


class TestPrepare:
    def test_sort_then_limit(self) -> None:
        items = [
            Friend(id="1", display_name="Zed"),
            Friend(id="2", display_name="Amy"),
            Friend(id="3", display_name="Mia"),
        ]
        assert [f.display_name for f in prepare(items, SortSpec(method="name"), 2)] == ["Amy", "Mia"]
