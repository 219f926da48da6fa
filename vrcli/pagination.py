"""Concurrent pagination over partitioned collections.

``fetch_pages`` walks the offsets of one partition with a bounded number of
requests in flight and stops scheduling once a short page shows the
collection is exhausted.  ``fetch_partitions`` runs one such walk per
partition and merges the results, keeping the first copy of every id.
"""

from __future__ import annotations

import asyncio
import logging
import math
from collections.abc import Awaitable, Callable, Hashable, Iterable, Sequence
from dataclasses import dataclass
from operator import attrgetter
from typing import Any, TypeVar

from vrcli.config import Config
from vrcli.models import Partition

logger = logging.getLogger(__name__)

T = TypeVar("T")

PageFetcher = Callable[[Partition, int, int], Awaitable[Sequence[T]]]

# A caller-supplied limit only applies after sorting, so over-fetch.
_LIMIT_OVERFETCH = 2
_MIN_PAGES_WITH_LIMIT = 3


@dataclass(frozen=True)
class PagingOptions:
    """Request policy shared by every paginated walk of one command."""

    page_size: int = 60
    max_concurrency: int = 5
    request_delay: float = 0.05
    max_pages: int = 20

    def __post_init__(self) -> None:
        for name in ("page_size", "max_concurrency", "max_pages"):
            if getattr(self, name) < 1:
                raise ValueError(f"{name} must be at least 1, got {getattr(self, name)}")
        if self.request_delay < 0:
            raise ValueError(f"request_delay must not be negative, got {self.request_delay}")

    @classmethod
    def from_config(cls, config: Config) -> PagingOptions:
        return cls(
            page_size=config.page_size,
            max_concurrency=config.max_concurrency,
            request_delay=config.request_delay,
            max_pages=config.max_pages,
        )

    def page_cap(self, limit: int | None) -> int:
        """Maximum number of pages to request for an optional result limit."""
        if limit is None:
            return self.max_pages
        wanted = math.ceil(limit * _LIMIT_OVERFETCH / self.page_size)
        return max(wanted, _MIN_PAGES_WITH_LIMIT)


async def fetch_pages(
    fetch_page: PageFetcher[T],
    partition: Partition,
    *,
    limit: int | None = None,
    start_offset: int = 0,
    paging: PagingOptions = PagingOptions(),
) -> list[T]:
    """Fetch every page of *partition* and return the items in dispatch order.

    Offsets ``start_offset, start_offset + page_size, ...`` are requested in
    increasing order with at most ``paging.max_concurrency`` in flight.  Once a
    page shorter than ``page_size`` arrives no further offsets are requested;
    pages already in flight are still awaited and kept.  The first failure is
    re-raised after every started request has finished.
    """
    page_size = paging.page_size
    pages = paging.page_cap(limit)
    semaphore = asyncio.Semaphore(paging.max_concurrency)

    exhausted_at: int | None = None
    first_error: BaseException | None = None

    def settled(index: int) -> bool:
        return first_error is not None or (exhausted_at is not None and index > exhausted_at)

    async def run(index: int) -> Sequence[T]:
        nonlocal exhausted_at, first_error
        async with semaphore:
            if settled(index):
                return []
            if paging.request_delay:
                await asyncio.sleep(paging.request_delay)
                # The walk may have ended while this task slept.
                if settled(index):
                    return []
            offset = start_offset + index * page_size
            try:
                page = await fetch_page(partition, offset, page_size)
            except Exception as e:
                if first_error is None:
                    first_error = e
                raise
            logger.debug(
                "partition=%s offset=%d received %d item(s)", partition.name, offset, len(page)
            )
            if len(page) < page_size and (exhausted_at is None or index < exhausted_at):
                exhausted_at = index
            return page

    tasks = [asyncio.ensure_future(run(index)) for index in range(pages)]
    results = await asyncio.gather(*tasks, return_exceptions=True)
    if first_error is not None:
        raise first_error

    items: list[T] = []
    for result in results:
        if isinstance(result, BaseException):
            raise result
        items.extend(result)
    return items


async def fetch_partitions(
    fetch_page: PageFetcher[T],
    partitions: Iterable[Partition],
    *,
    key: Callable[[T], Hashable] = attrgetter("id"),
    **kwargs: Any,
) -> list[T]:
    """Walk every partition concurrently, then merge keeping the first copy of each key.

    If any partition fails the whole merge fails; the other partitions are
    still awaited before the error is raised.
    """
    partitions = list(partitions)
    results = await asyncio.gather(
        *(fetch_pages(fetch_page, partition, **kwargs) for partition in partitions),
        return_exceptions=True,
    )
    for result in results:
        if isinstance(result, BaseException):
            raise result

    seen: set[Hashable] = set()
    merged: list[T] = []
    for partition, batch in zip(partitions, results):
        before = len(merged)
        for item in batch:
            item_key = key(item)
            if item_key not in seen:
                seen.add(item_key)
                merged.append(item)
        logger.debug(
            "partition=%s contributed %d of %d item(s)", partition.name, len(merged) - before, len(batch)
        )
    return merged
