"""Client-side ordering of fetched collections."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from enum import Enum
from functools import cmp_to_key
from typing import TypeVar

from vrcli.models import Item, SortSpec, UserStatus

logger = logging.getLogger(__name__)

ItemT = TypeVar("ItemT", bound=Item)

Comparator = Callable[[Item, Item], int]


class SortMethod(str, Enum):
    NAME = "name"
    STATUS = "status"
    ACTIVITY = "activity"
    PLATFORM = "platform"
    ID = "id"

    @classmethod
    def names(cls) -> list[str]:
        return [method.value for method in cls]


_STATUS_PRIORITY: dict[UserStatus, int] = {
    UserStatus.ACTIVE: 1,
    UserStatus.JOIN_ME: 2,
    UserStatus.ASK_ME: 3,
    UserStatus.BUSY: 4,
    UserStatus.OFFLINE: 5,
}
_UNKNOWN_STATUS_PRIORITY = 6


def resolve_sort_method(name: str) -> SortMethod:
    """Map *name* to a SortMethod, warning and falling back to ``name`` when unknown."""
    try:
        return SortMethod(name.strip().lower())
    except ValueError:
        logger.warning(
            "Unknown sort method '%s'. Using default 'name' sorting. Available methods: %s",
            name,
            ", ".join(SortMethod.names()),
        )
        return SortMethod.NAME


# ---------------------------------------------------------------------------
# Comparators
# ---------------------------------------------------------------------------


def _cmp(a: object, b: object) -> int:
    return (a > b) - (a < b)  # type: ignore[operator]


def _by_name(a: Item, b: Item) -> int:
    return _cmp(a.display_name.lower(), b.display_name.lower())


def _by_status(a: Item, b: Item) -> int:
    return _cmp(status_priority(a.status), status_priority(b.status)) or _by_name(a, b)


def _by_activity(a: Item, b: Item) -> int:
    if a.last_activity and b.last_activity:
        # Most recent first.
        return _cmp(b.last_activity, a.last_activity)
    if a.last_activity:
        return -1
    if b.last_activity:
        return 1
    return _by_name(a, b)


def _by_platform(a: Item, b: Item) -> int:
    return _cmp(platform_bucket(a.platform), platform_bucket(b.platform)) or _by_name(a, b)


def _by_id(a: Item, b: Item) -> int:
    return _cmp(a.id, b.id)


_COMPARATORS: dict[SortMethod, Comparator] = {
    SortMethod.NAME: _by_name,
    SortMethod.STATUS: _by_status,
    SortMethod.ACTIVITY: _by_activity,
    SortMethod.PLATFORM: _by_platform,
    SortMethod.ID: _by_id,
}


def status_priority(status: UserStatus | None) -> int:
    """Lower is more available."""
    if status is None:
        return _UNKNOWN_STATUS_PRIORITY
    return _STATUS_PRIORITY[status]


def platform_bucket(platform: str) -> str:
    """Group platform strings into ordered families; unknown ones sort last."""
    lowered = platform.lower()
    if "windows" in lowered:
        return "1_PC"
    if "android" in lowered:
        return "2_Quest"
    if "ios" in lowered:
        return "3_iOS"
    return f"9_{platform}"


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def sort_items(items: Iterable[ItemT], method: SortMethod, reverse: bool = False) -> list[ItemT]:
    """Return a new list ordered by *method*.

    The id breaks any remaining tie so the order is total, which makes the
    reversed order the exact mirror of the forward one.
    """
    primary = _COMPARATORS[method]

    def compare(a: Item, b: Item) -> int:
        result = primary(a, b) or _by_id(a, b)
        return -result if reverse else result

    return sorted(items, key=cmp_to_key(compare))


def sort_and_limit(items: Iterable[ItemT], spec: SortSpec, limit: int | None = None) -> list[ItemT]:
    """Sort by *spec*, then keep the first *limit* items."""
    ordered = sort_items(items, resolve_sort_method(spec.method), spec.reverse)
    if limit is not None:
        return ordered[:limit]
    return ordered
