"""CLI entry point for vrcli."""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from collections.abc import Awaitable, Callable, Sequence
from typing import Any, NoReturn, TypeVar

import click

from vrcli import __version__
from vrcli.client import VRChatClient
from vrcli.config import Config, config_path
from vrcli.errors import FetchError, VRCliError
from vrcli.fetchers import fetch_friends, prepare, search_users, search_worlds
from vrcli.models import DisplayOptions, FriendStatus, Item, SortSpec, User
from vrcli.output import render, render_details, render_friend_status
from vrcli.pagination import PagingOptions
from vrcli.sorting import SortMethod
from vrcli.views import FriendView, TableDisplayable, UserView, WorldView

T = TypeVar("T")
ItemT = TypeVar("ItemT", bound=Item)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _fail(message: str) -> NoReturn:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def _load_config() -> Config:
    try:
        config = Config.from_env()
    except VRCliError as e:
        _fail(str(e))
    if not config.has_credentials:
        _fail(
            "No credentials configured. Set VRCLI_AUTH_COOKIE (or VRCLI_USERNAME and "
            f"VRCLI_PASSWORD), or save them to {config_path()}."
        )
    return config


def _with_client(config: Config, action: Callable[[VRChatClient], Awaitable[T]]) -> T:
    """Run *action* against a fresh client; any VRCliError ends the command."""

    async def run() -> T:
        async with VRChatClient(config) as client:
            return await action(client)

    try:
        return asyncio.run(run())
    except VRCliError as e:
        _fail(str(e))


def _list_and_render(
    fetch: Callable[[VRChatClient, PagingOptions], Awaitable[list[ItemT]]],
    view: Callable[[ItemT], TableDisplayable],
    *,
    sort: SortSpec,
    limit: int | None,
    options: DisplayOptions,
    empty_message: str,
) -> None:
    config = _load_config()
    paging = PagingOptions.from_config(config)
    items = _with_client(config, lambda client: fetch(client, paging))
    views: Sequence[TableDisplayable] = [view(item) for item in prepare(items, sort, limit)]
    render(views, options, empty_message=empty_message)


def _listing_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Limit, offset, sort and display flags shared by every listing command."""
    decorators = [
        click.option("--limit", "-n", type=click.IntRange(min=1), default=None, help="Maximum number of results (applied after sorting)"),
        click.option("--offset", "-o", type=click.IntRange(min=0), default=0, show_default=True, help="Offset of the first page"),
        click.option("--sort", "-s", "sort_method", default="name", show_default=True, help=f"Sort method: {', '.join(SortMethod.names())}"),
        click.option("--reverse", "-r", is_flag=True, help="Reverse sort order"),
        click.option("--long", "-l", "long_format", is_flag=True, help="Show every column"),
        click.option("--show-id", is_flag=True, help="Show IDs"),
        click.option("--show-status", is_flag=True, help="Show status"),
        click.option("--show-platform", is_flag=True, help="Show platform"),
        click.option("--show-location", is_flag=True, help="Show location"),
        click.option("--show-activity", is_flag=True, help="Show last activity"),
        click.option("--json", "json_output", is_flag=True, help="Output as JSON"),
    ]
    for decorator in reversed(decorators):
        func = decorator(func)
    return func


def _display_options(params: dict[str, Any]) -> DisplayOptions:
    return DisplayOptions(
        long_format=params["long_format"],
        show_id=params["show_id"],
        show_status=params["show_status"],
        show_platform=params["show_platform"],
        show_location=params["show_location"],
        show_activity=params["show_activity"],
        json_output=params["json_output"],
    )


def _sort_spec(params: dict[str, Any]) -> SortSpec:
    return SortSpec(method=params["sort_method"], reverse=params["reverse"])


_DETAIL_OPTIONS = DisplayOptions(long_format=True, json_output=True).expanded()


def _show_single(view: TableDisplayable, json_output: bool) -> None:
    if json_output:
        click.echo(json.dumps(view.to_json_object(_DETAIL_OPTIONS), indent=2, ensure_ascii=False))
    else:
        render_details(view)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(__version__, prog_name="vrcli")
@click.option("--verbose", "-v", is_flag=True, help="Log HTTP requests and paging decisions")
def main(verbose: bool) -> None:
    """vrcli — VRChat from the terminal: friends, users and worlds."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )


@main.group()
def friends() -> None:
    """Manage friends."""


@friends.command("list")
@click.option("--online", is_flag=True, help="Show only online friends")
@click.option("--offline", is_flag=True, help="Show only offline friends")
@_listing_options
def friends_list(online: bool, offline: bool, limit: int | None, offset: int, **params: Any) -> None:
    """List friends (online and offline merged unless filtered)."""
    if online and offline:
        raise click.UsageError("--online and --offline are mutually exclusive")

    _list_and_render(
        lambda client, paging: fetch_friends(
            client, paging, online=online, offline=offline, limit=limit, offset=offset
        ),
        FriendView,
        sort=_sort_spec(params),
        limit=limit,
        options=_display_options(params).expanded(),
        empty_message="No friends found.",
    )


@friends.command("get")
@click.argument("identifier")
@click.option("--id", "force_id", is_flag=True, help="Treat IDENTIFIER as a user ID")
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
def friends_get(identifier: str, force_id: bool, json_output: bool) -> None:
    """Show a user's details together with your friendship status."""
    config = _load_config()

    async def lookup(client: VRChatClient) -> tuple[User, FriendStatus | None]:
        user = await client.resolve_user(identifier, force_id=force_id)
        try:
            status = await client.get_friend_status(user.id)
        except FetchError as e:
            logger.warning("Friend status unavailable for %s: %s", user.id, e)
            status = None
        return user, status

    user, status = _with_client(config, lookup)
    view = UserView(user)
    if json_output:
        obj = view.to_json_object(_DETAIL_OPTIONS)
        if status is not None:
            obj["friend_status"] = status.model_dump()
        click.echo(json.dumps(obj, indent=2, ensure_ascii=False))
        return

    render_details(view)
    if status is not None:
        render_friend_status(status)


@friends.command("status")
@click.argument("identifier")
@click.option("--id", "force_id", is_flag=True, help="Treat IDENTIFIER as a user ID")
def friends_status(identifier: str, force_id: bool) -> None:
    """Check your friendship status with a user."""
    config = _load_config()

    async def lookup(client: VRChatClient) -> tuple[User, FriendStatus]:
        user = await client.resolve_user(identifier, force_id=force_id)
        return user, await client.get_friend_status(user.id)

    user, status = _with_client(config, lookup)
    click.echo(f"User: {user.display_name} ({user.id})")
    render_friend_status(status)


@main.group()
def users() -> None:
    """User operations."""


@users.command("search")
@click.argument("query")
@_listing_options
def users_search(query: str, limit: int | None, offset: int, **params: Any) -> None:
    """Search users by display name."""
    _list_and_render(
        lambda client, paging: search_users(client, paging, query, limit=limit, offset=offset),
        UserView,
        sort=_sort_spec(params),
        limit=limit,
        options=_display_options(params).expanded(),
        empty_message=f"No users found for query: {query}",
    )


@users.command("get")
@click.argument("identifier")
@click.option("--id", "force_id", is_flag=True, help="Treat IDENTIFIER as a user ID")
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
def users_get(identifier: str, force_id: bool, json_output: bool) -> None:
    """Show one user, looked up by ID or exact display name."""
    config = _load_config()
    user = _with_client(config, lambda client: client.resolve_user(identifier, force_id=force_id))
    _show_single(UserView(user), json_output)


@users.command("get-by-name")
@click.argument("username")
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
def users_get_by_name(username: str, json_output: bool) -> None:
    """Show one user, looked up by exact account username."""
    config = _load_config()
    user = _with_client(config, lambda client: client.get_user_by_name(username))
    _show_single(UserView(user), json_output)


@main.group()
def worlds() -> None:
    """World operations."""


@worlds.command("search")
@click.argument("query")
@click.option("--featured", is_flag=True, help="Only featured worlds")
@_listing_options
def worlds_search(query: str, featured: bool, limit: int | None, offset: int, **params: Any) -> None:
    """Search worlds by name."""
    options = _display_options(params).expanded()
    if params["long_format"] and not params["show_activity"]:
        # Search results carry no visit counts.
        options = options.model_copy(update={"show_activity": False})

    _list_and_render(
        lambda client, paging: search_worlds(
            client, paging, query, featured=featured, limit=limit, offset=offset
        ),
        WorldView,
        sort=_sort_spec(params),
        limit=limit,
        options=options,
        empty_message=f"No worlds found for query: {query}",
    )


@worlds.command("get")
@click.argument("world_id")
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
def worlds_get(world_id: str, json_output: bool) -> None:
    """Show one world by ID."""
    config = _load_config()
    world = _with_client(config, lambda client: client.get_world(world_id))
    _show_single(WorldView(world), json_output)


@main.group()
def auth() -> None:
    """Authentication."""


@auth.command("status")
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
def auth_status(json_output: bool) -> None:
    """Verify the configured credentials against the API."""
    config = _load_config()
    user = _with_client(config, lambda client: client.get_current_user())

    if json_output:
        payload = {
            "authenticated": True,
            "user_id": user.get("id"),
            "display_name": user.get("displayName"),
        }
        click.echo(json.dumps(payload, indent=2, ensure_ascii=False))
        return

    click.echo("Authentication Status: Active")
    click.echo(f"User ID: {user.get('id')}")
    click.echo(f"Display Name: {user.get('displayName')}")


if __name__ == "__main__":
    main()
