"""Base display-adapter interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

import click

from vrcli.models import DisplayOptions


@dataclass(frozen=True)
class ColumnNames:
    """Header labels, in fixed column order."""

    name: str = "Name"
    id: str = "ID"
    status: str = "Status"
    platform: str = "Platform"
    location: str = "Location"
    activity: str = "Activity"


DEFAULT_COLUMNS = ColumnNames()


class TableDisplayable(ABC):
    """Read-only presentation view over one collection item.

    Only ``display_name`` is mandatory; every optional field defaults to
    ``None`` so each view supplies just what is meaningful for its type.
    """

    @abstractmethod
    def display_name(self) -> str:
        ...

    def id(self) -> str | None:
        return None

    def status(self) -> str | None:
        return None

    def status_color(self) -> str | None:
        """click colour name for the status column, if any."""
        return None

    def colored_status(self) -> str | None:
        status = self.status()
        color = self.status_color()
        if status is None or color is None:
            return status
        return click.style(status, fg=color)

    def platform(self) -> str | None:
        return None

    def formatted_platform(self) -> str | None:
        return self.platform()

    def location(self) -> str | None:
        return None

    def formatted_location(self) -> str | None:
        return self.location()

    def activity(self) -> str | None:
        return None

    def formatted_activity(self) -> str | None:
        return self.activity()

    def column_names(self) -> ColumnNames:
        return DEFAULT_COLUMNS

    # ------------------------------------------------------------------
    # JSON
    # ------------------------------------------------------------------

    def json_extras(self, options: DisplayOptions) -> dict[str, Any]:
        """Type-specific keys appended after the common ones."""
        return {}

    def to_json_object(self, options: DisplayOptions) -> dict[str, Any]:
        """``display_name`` always; other keys only when their flag is set and a value exists."""
        obj: dict[str, Any] = {"display_name": self.display_name()}
        optional = (
            ("id", options.show_id, self.id),
            ("status", options.show_status, self.status),
            ("platform", options.show_platform, self.platform),
            ("location", options.show_location, self.location),
            ("activity", options.show_activity, self.activity),
        )
        for key, enabled, getter in optional:
            if not enabled:
                continue
            value = getter()
            if value is not None:
                obj[key] = value
        obj.update(self.json_extras(options))
        return obj
