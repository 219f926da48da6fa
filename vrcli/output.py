"""Rendering of collections as plain lists, aligned tables or JSON."""

from __future__ import annotations

import json
from collections.abc import Callable, Sequence
from dataclasses import dataclass

import click
from rich.cells import cell_len

from vrcli.formatting import fit_to_width, parse_location
from vrcli.models import DisplayOptions, FriendStatus
from vrcli.views.base import DEFAULT_COLUMNS, ColumnNames, TableDisplayable

Echo = Callable[[str], None]

DEFAULT_EMPTY_MESSAGE = "No items found."

_PADDING = 2


@dataclass(frozen=True)
class _Column:
    key: str
    max_width: int | None

    def label(self, names: ColumnNames) -> str:
        return getattr(names, self.key)

    def value(self, view: TableDisplayable) -> str:
        getter = {
            "name": view.display_name,
            "id": view.id,
            "status": view.status,
            "platform": view.formatted_platform,
            "location": view.formatted_location,
            "activity": view.formatted_activity,
        }[self.key]
        return getter() or ""


# Fixed column order; the id column is never capped so ids stay copyable.
_COLUMNS: tuple[_Column, ...] = (
    _Column("name", 30),
    _Column("id", None),
    _Column("status", 15),
    _Column("platform", 15),
    _Column("location", 40),
    _Column("activity", None),
)


def _visible_columns(options: DisplayOptions) -> list[_Column]:
    enabled = {
        "name": True,
        "id": options.show_id,
        "status": options.show_status,
        "platform": options.show_platform,
        "location": options.show_location,
        "activity": options.show_activity,
    }
    return [column for column in _COLUMNS if enabled[column.key]]


class ColumnWidths:
    """Per-column cell widths computed from the header labels and the data."""

    def __init__(self, widths: dict[str, int]) -> None:
        self._widths = widths

    def __getitem__(self, key: str) -> int:
        return self._widths[key]

    def __contains__(self, key: str) -> bool:
        return key in self._widths

    @classmethod
    def from_views(cls, views: Sequence[TableDisplayable], options: DisplayOptions) -> ColumnWidths:
        names = views[0].column_names() if views else DEFAULT_COLUMNS
        widths: dict[str, int] = {}
        # The last visible column is printed at its natural length.
        for column in _visible_columns(options)[:-1]:
            natural = max(
                [cell_len(column.label(names))] + [cell_len(column.value(view)) for view in views]
            )
            width = natural + _PADDING
            if column.max_width is not None:
                width = min(width, column.max_width)
            widths[column.key] = width
        return cls(widths)


# ---------------------------------------------------------------------------
# Formatters
# ---------------------------------------------------------------------------


def format_json(views: Sequence[TableDisplayable], options: DisplayOptions) -> str:
    return json.dumps([view.to_json_object(options) for view in views], indent=2, ensure_ascii=False)


def format_simple_list(views: Sequence[TableDisplayable]) -> str:
    return "\n".join(name for name in (view.display_name() for view in views) if name)


def _status_cell(view: TableDisplayable, width: int | None) -> str:
    if width is None:
        return view.colored_status() or ""
    cell = fit_to_width(view.status() or "", width)
    color = view.status_color()
    if color is None:
        return cell
    text = cell.rstrip(" ")
    return click.style(text, fg=color) + cell[len(text):]


def format_table(views: Sequence[TableDisplayable], options: DisplayOptions) -> str:
    """Aligned table, header first. Fixed-width cells are exactly their column width."""
    if not views:
        return ""
    columns = _visible_columns(options)
    widths = ColumnWidths.from_views(views, options)
    names = views[0].column_names()

    header = "".join(
        fit_to_width(column.label(names), widths[column.key]) if column.key in widths else column.label(names)
        for column in columns
    )
    lines = [header]
    for view in views:
        cells: list[str] = []
        for column in columns:
            width = widths[column.key] if column.key in widths else None
            if column.key == "status":
                cells.append(_status_cell(view, width))
            elif width is None:
                cells.append(column.value(view))
            else:
                cells.append(fit_to_width(column.value(view), width))
        lines.append("".join(cells))
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Sinks
# ---------------------------------------------------------------------------


def render(
    views: Sequence[TableDisplayable],
    options: DisplayOptions,
    *,
    empty_message: str = DEFAULT_EMPTY_MESSAGE,
    echo: Echo = click.echo,
) -> None:
    """Write *views* to *echo* as JSON, a name list or a table, depending on *options*."""
    if not views:
        echo("[]" if options.json_output else empty_message)
        return

    if options.json_output:
        echo(format_json(views, options))
    elif not options.any_column:
        names = format_simple_list(views)
        if names:
            echo(names)
    else:
        echo(format_table(views, options))


def render_details(view: TableDisplayable, *, echo: Echo = click.echo) -> None:
    """Print every available field of a single record as ``Label: value`` lines."""
    names = view.column_names()
    echo(f"{names.name}: {view.display_name()}")
    fields = (
        (names.id, view.id()),
        (names.status, view.colored_status()),
        (names.platform, view.formatted_platform()),
        (names.location, view.formatted_location()),
        (names.activity, view.formatted_activity()),
    )
    for label, value in fields:
        if value:
            echo(f"{label}: {value}")

    info = parse_location(view.location())
    if info:
        echo(f"  World ID: {info.world_id}")
        echo(f"  Instance ID: {info.instance_id}")
        if info.instance_type:
            echo(f"  Instance Type: {info.instance_type}")


def render_friend_status(status: FriendStatus, *, echo: Echo = click.echo) -> None:
    echo("Friend Status:")
    echo(f"  Is friend: {'yes' if status.is_friend else 'no'}")
    echo(f"  {status.describe()}")
