"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from adapters.vercel_api import VercelApiClient
from core.config import ACCESS_TOKEN_ENV, AppSettings, write_user_env_vars
from core.errors import ApiError, VercelPullError

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_api(settings: AppSettings, token: str) -> tuple[bool, str]:
    try:
        user = await VercelApiClient(token, settings).get_user()
        return True, f"Authenticated as {user.username}"
    except ApiError as exc:
        return False, f"{exc.code}: {exc.message}"
    except VercelPullError as exc:
        return False, str(exc)


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()
    token = (settings.access_token or "").strip()

    table = Table(title="vercel-pull Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    if token:
        table.add_row("Access token", "OK", f"{ACCESS_TOKEN_ENV} is set")
    else:
        table.add_row("Access token", "MISSING", f"Set {ACCESS_TOKEN_ENV} or run `doctor setup-token`")
    table.add_row("API base_url", "OK", escape(settings.api_base_url))
    table.add_row("Output dir", "OK", str(settings.default_output_dir))

    if token:
        ok_api, detail_api = asyncio.run(_check_api(settings, token))
        table.add_row("API /v2/user", "OK" if ok_api else "FAIL", escape(detail_api))
    else:
        table.add_row("API /v2/user", "SKIPPED", "No token")

    _console.print(table)


@app.command(name="setup-token")
def setup_token() -> None:
    """Store the access token in the user config .env (no manual editing)."""

    token = typer.prompt("Vercel access token", hide_input=True, confirmation_prompt=False).strip()
    if not token:
        raise typer.BadParameter("token is required")

    env_path = write_user_env_vars({ACCESS_TOKEN_ENV: token})
    _console.print(f"[green]Saved access token to:[/green] {escape(str(env_path))}")
