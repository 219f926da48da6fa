"""Display adapter for worlds.

Worlds have no status, platform or activity of their own, so the shared
columns are relabelled: Status shows the author, Platform the capacity,
Location the tags and Activity the visit count.
"""

from __future__ import annotations

from typing import Any

from vrcli.models import DisplayOptions, World
from vrcli.views.base import ColumnNames, TableDisplayable

WORLD_COLUMNS = ColumnNames(
    status="Author",
    platform="Capacity",
    location="Tags",
    activity="Visits",
)


class WorldView(TableDisplayable):
    def __init__(self, world: World) -> None:
        self._world = world

    def display_name(self) -> str:
        return self._world.display_name

    def id(self) -> str | None:
        return self._world.id

    def status(self) -> str | None:
        return self._world.author_name

    def platform(self) -> str | None:
        return str(self._world.capacity)

    def location(self) -> str | None:
        if not self._world.tags:
            return None
        return ", ".join(self._world.tags)

    def activity(self) -> str | None:
        if self._world.visits is None:
            return "N/A"
        return str(self._world.visits)

    def column_names(self) -> ColumnNames:
        return WORLD_COLUMNS

    def to_json_object(self, options: DisplayOptions) -> dict[str, Any]:
        # Native JSON types for the relabelled columns.
        obj = super().to_json_object(options)
        if "status" in obj:
            obj["author_name"] = obj.pop("status")
        if "platform" in obj:
            obj["capacity"] = self._world.capacity
            del obj["platform"]
        if "location" in obj:
            obj["tags"] = list(self._world.tags)
            del obj["location"]
        if "activity" in obj:
            del obj["activity"]
            if self._world.visits is not None:
                obj["visits"] = self._world.visits
        return obj

    def json_extras(self, options: DisplayOptions) -> dict[str, Any]:
        extras: dict[str, Any] = {}
        if options.show_id and self._world.author_id:
            extras["author_id"] = self._world.author_id
        if options.long_format:
            if self._world.description:
                extras["description"] = self._world.description
            if self._world.visits is not None:
                extras["visits"] = self._world.visits
            extras["favorites"] = self._world.favorites
            if self._world.created_at:
                extras["created_at"] = self._world.created_at
            if self._world.updated_at:
                extras["updated_at"] = self._world.updated_at
        return extras
