"""Collection retrieval: pick partitions, paginate, merge, then sort and limit."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TypeVar

from vrcli.client import VRChatClient
from vrcli.models import (
    FRIENDS_OFFLINE,
    FRIENDS_ONLINE,
    UNFILTERED,
    WORLDS_FEATURED,
    Friend,
    Item,
    SortSpec,
    User,
    World,
)
from vrcli.pagination import PagingOptions, fetch_pages, fetch_partitions
from vrcli.sorting import sort_and_limit

logger = logging.getLogger(__name__)

ItemT = TypeVar("ItemT", bound=Item)


async def fetch_friends(
    client: VRChatClient,
    paging: PagingOptions,
    *,
    online: bool = False,
    offline: bool = False,
    limit: int | None = None,
    offset: int = 0,
) -> list[Friend]:
    """Fetch friends from one partition, or from both merged when neither flag is set.

    The API's ``offline`` filter does not return the whole list when omitted,
    so "all friends" is the union of the online and offline partitions.
    """
    if online and offline:
        raise ValueError("online and offline are mutually exclusive")
    if online or offline:
        partition = FRIENDS_ONLINE if online else FRIENDS_OFFLINE
        return await fetch_pages(
            client.get_friends_page, partition, limit=limit, start_offset=offset, paging=paging
        )

    friends = await fetch_partitions(
        client.get_friends_page,
        (FRIENDS_ONLINE, FRIENDS_OFFLINE),
        limit=limit,
        start_offset=offset,
        paging=paging,
    )
    logger.debug("Fetched %d friend(s) across online and offline", len(friends))
    return friends


async def search_users(
    client: VRChatClient,
    paging: PagingOptions,
    query: str,
    *,
    limit: int | None = None,
    offset: int = 0,
) -> list[User]:
    return await fetch_pages(
        client.search_users_page(query), UNFILTERED, limit=limit, start_offset=offset, paging=paging
    )


async def search_worlds(
    client: VRChatClient,
    paging: PagingOptions,
    query: str,
    *,
    featured: bool = False,
    limit: int | None = None,
    offset: int = 0,
) -> list[World]:
    partition = WORLDS_FEATURED if featured else UNFILTERED
    return await fetch_pages(
        client.search_worlds_page(query), partition, limit=limit, start_offset=offset, paging=paging
    )


def prepare(items: Iterable[ItemT], sort: SortSpec, limit: int | None = None) -> list[ItemT]:
    """Sorter stage: order first, then truncate, so the limit keeps the top N."""
    return sort_and_limit(items, sort, limit)
