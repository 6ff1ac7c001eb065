"""Core configuration.

Why here:
- Centralises environment variables (pydantic-settings) away from the CLI.
- Lets adapters (HTTP/API) read configuration consistently.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Any

from dotenv import set_key
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

ACCESS_TOKEN_ENV = "VERCEL_ACCESS_TOKEN"


def get_user_config_dir() -> Path:
    """Per-user configuration directory (cross-platform, no dependencies)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "vercel-pull"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "vercel-pull"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "vercel-pull"
    return Path.home() / ".config" / "vercel-pull"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def write_user_env_vars(values: dict[str, str]) -> Path:
    """Write or update variables in the user's global .env file."""

    env_path = get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)
    env_path.touch(mode=0o600, exist_ok=True)
    for key, value in values.items():
        if value is not None:
            set_key(env_path, key, value, quote_mode="never")
    return env_path


class AppSettings(BaseSettings):
    """Central application settings.

    The access token keeps the platform's own variable name
    (`VERCEL_ACCESS_TOKEN`); every other field uses the `VERCEL_PULL_` prefix.
    """

    model_config = SettingsConfigDict(
        env_prefix="VERCEL_PULL_",
        extra="ignore",
        case_sensitive=False,
        populate_by_name=True,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    access_token: str | None = Field(
        default=None,
        validation_alias=AliasChoices(ACCESS_TOKEN_ENV),
        description="Bearer token for the Vercel REST API.",
    )
    api_base_url: str = Field(
        default="https://api.vercel.com",
        min_length=8,
        description="Base URL of the Vercel REST API.",
    )
    http_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Per-request timeout (seconds).",
    )
    user_agent: str = Field(
        default="vercel-pull/0.1",
        min_length=1,
        description="User-Agent sent with every API request.",
    )
    default_output_dir: Path = Field(
        default=Path("./output"),
        description="Output directory offered by the interactive prompt.",
    )
    deployments_limit: int = Field(
        default=20,
        ge=1,
        le=100,
        description="Maximum number of deployments listed in the picker.",
    )

    def __init__(self, **values: Any) -> None:
        # Project .env, then the user config .env (later wins); resolved per instance.
        values.setdefault("_env_file", (".env", str(get_user_env_file())))
        super().__init__(**values)
