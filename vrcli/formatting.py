"""Display-string helpers shared by the views and the renderer."""

from __future__ import annotations

import re
from dataclasses import dataclass

from rich.cells import cell_len, set_cell_size

from vrcli.models import UserStatus

PRIVATE_LOCATION = "private"
ELLIPSIS = "..."

_STATUS_LABELS: dict[UserStatus, str] = {
    UserStatus.ACTIVE: "Active",
    UserStatus.JOIN_ME: "Join me",
    UserStatus.ASK_ME: "Ask me",
    UserStatus.BUSY: "Busy",
    UserStatus.OFFLINE: "Offline",
}

# click colour names
_STATUS_COLORS: dict[UserStatus, str] = {
    UserStatus.ACTIVE: "green",
    UserStatus.JOIN_ME: "cyan",
    UserStatus.ASK_ME: "yellow",
    UserStatus.BUSY: "red",
    UserStatus.OFFLINE: "bright_black",
}

_PLATFORM_NAMES: dict[str, str] = {
    "standalonewindows": "PC",
    "android": "Quest",
    "quest": "Quest",
    "ios": "iOS",
    "steamvr": "SteamVR",
    "oculuspc": "Oculus",
    "unknownplatform": "Unknown",
    "": "Unknown",
}

_UNITY_VERSION_RE = re.compile(r"^(20\d\d)\.")


def format_user_status(status: UserStatus | None) -> str:
    if status is None:
        return "Unknown"
    return _STATUS_LABELS[status]


def status_color(status: UserStatus | None) -> str | None:
    if status is None:
        return None
    return _STATUS_COLORS[status]


def format_platform_short(platform: str) -> str:
    """Turn an API platform string into a short label, e.g. ``standalonewindows`` -> ``PC``."""
    if platform in _PLATFORM_NAMES:
        return _PLATFORM_NAMES[platform]
    match = _UNITY_VERSION_RE.match(platform)
    if match:
        return f"Unity{match.group(1)}"
    if len(platform) > 8:
        return f"{platform[:5]}{ELLIPSIS}"
    return platform


# ---------------------------------------------------------------------------
# Locations
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LocationInfo:
    """A ``wrld_xxx:instance~params`` location split into its parts."""

    world_id: str
    instance_id: str
    instance_type: str | None = None


def normalize_location(location: str | None) -> str:
    if not location or location == PRIVATE_LOCATION:
        return PRIVATE_LOCATION
    return location


def parse_location(location: str | None) -> LocationInfo | None:
    """Decompose a ``world:instance`` location; ``None`` for private or plain values."""
    if not location or ":" not in location:
        return None
    world_id, instance_id = location.split(":", 1)
    if not world_id or not instance_id:
        return None
    instance_type = None
    if "~" in instance_id:
        instance_type = instance_id.split("~", 1)[1].split("(", 1)[0] or None
    return LocationInfo(world_id=world_id, instance_id=instance_id, instance_type=instance_type)


# ---------------------------------------------------------------------------
# Width handling
# ---------------------------------------------------------------------------


def fit_to_width(text: str, width: int) -> str:
    """Pad or truncate *text* so it occupies exactly *width* terminal cells.

    Widths come from rich, which measures joined emoji and variation
    selectors the way the terminal draws them.  Truncated text ends with
    ``...``; a glyph that would straddle the limit is dropped and the gap
    padded after the ellipsis.
    """
    if width <= 0:
        return ""
    current = cell_len(text)
    if current <= width:
        return text + " " * (width - current)

    if width <= len(ELLIPSIS):
        return ELLIPSIS[:width]

    kept = set_cell_size(text, width - len(ELLIPSIS)).rstrip(" ")
    result = kept + ELLIPSIS
    return result + " " * (width - cell_len(result))
