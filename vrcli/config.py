"""Configuration management for vrcli."""

from __future__ import annotations

import json
import os
from collections.abc import Callable
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, TypeVar

import click

from vrcli import __version__
from vrcli.errors import ConfigError

DEFAULT_API_BASE = "https://api.vrchat.cloud/api/1"

N = TypeVar("N", int, float)


def config_path() -> Path:
    """Location of the credentials file saved by a previous login."""
    return Path(click.get_app_dir("vrcli")) / "config.json"


@dataclass(frozen=True)
class Config:
    """Global configuration."""

    auth_cookie: str | None = None
    two_factor_cookie: str | None = None
    username: str | None = None
    password: str | None = None
    api_base: str = DEFAULT_API_BASE
    user_agent: str = f"vrcli/{__version__}"
    http_timeout: float = 30.0

    # Pagination policy
    page_size: int = 60
    max_concurrency: int = 5
    request_delay: float = 0.05
    max_pages: int = 20

    @property
    def has_credentials(self) -> bool:
        return bool(self.auth_cookie or (self.username and self.password))

    @classmethod
    def from_env(cls, path: Path | None = None) -> Config:
        config = cls(
            auth_cookie=os.getenv("VRCLI_AUTH_COOKIE"),
            two_factor_cookie=os.getenv("VRCLI_TWO_FACTOR_COOKIE"),
            username=os.getenv("VRCLI_USERNAME"),
            password=os.getenv("VRCLI_PASSWORD"),
            api_base=os.getenv("VRCLI_API_BASE", DEFAULT_API_BASE),
            http_timeout=_env_number("VRCLI_TIMEOUT", 30.0, float, minimum=0),
            page_size=_env_number("VRCLI_PAGE_SIZE", 60, int, minimum=1),
            max_concurrency=_env_number("VRCLI_MAX_CONCURRENCY", 5, int, minimum=1),
            request_delay=_env_number("VRCLI_REQUEST_DELAY", 0.05, float, minimum=0),
            max_pages=_env_number("VRCLI_MAX_PAGES", 20, int, minimum=1),
        )
        if config.has_credentials:
            return config

        # Fall back to the credentials saved by a previous login.
        path = path or config_path()
        if not path.exists():
            return config
        return replace(config, **_read_auth_method(path))


def _env_number(name: str, default: N, convert: Callable[[str], N], *, minimum: float) -> N:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = convert(raw.strip())
    except ValueError as e:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from e
    # NaN fails this comparison too.
    if not value >= minimum:
        raise ConfigError(f"{name} must be at least {minimum}, got {raw!r}")
    return value


def _read_auth_method(path: Path) -> dict[str, Any]:
    """Parse ``{"auth_method": {"Cookie": {...}}}`` or ``{"auth_method": {"Password": {...}}}``."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        method = data["auth_method"]
    except (OSError, ValueError, KeyError, TypeError) as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e

    if not isinstance(method, dict):
        raise ConfigError(f"Invalid auth_method in {path}")

    if "Cookie" in method:
        cookie = method["Cookie"] or {}
        return {
            "auth_cookie": cookie.get("auth_cookie"),
            "two_factor_cookie": cookie.get("two_fa_cookie"),
        }
    if "Password" in method:
        creds = method["Password"] or {}
        return {
            "username": creds.get("username"),
            "password": creds.get("password"),
        }
    raise ConfigError(f"Unknown auth_method in {path}: {', '.join(method) or 'empty'}")
