"""Entry point of the vercel-pull CLI (Typer).

Commands:
- `pull`: pick an account/team and a deployment, then mirror its files.
- `doctor`: environment diagnostics and token setup.

The command layer only prompts and prints; the flow itself lives in
`core.services.deployment_pipeline`.
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from adapters.vercel_api import VercelApiClient
from cli import doctor
from cli.prompts import (
    ask_output_directory,
    deployment_choices,
    resolve_deployment,
    resolve_team,
    select,
    team_choices,
)
from cli.ui_components import build_summary_table, print_banner
from core.config import AppSettings
from core.credentials import get_access_token
from core.errors import PromptAbortError, VercelPullError
from core.services.deployment_pipeline import PullHooks, check_deployment_source, pull_deployment
from core.services.file_tree import MaterializeHooks

app = typer.Typer(no_args_is_help=True, help="Download the file tree of a Vercel deployment.")
app.add_typer(doctor.app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)


def _build_hooks() -> PullHooks:
    def on_skip(path: Path, reason: str) -> None:
        _console.print(f"[dim]Skipped {escape(str(path))} ({escape(reason)})[/dim]")

    def on_failure(path: Path, exc: Exception) -> None:
        _err_console.print(f"[red]Failed:[/red] {escape(str(path))}: {escape(str(exc))}")

    return PullHooks(
        message=lambda text: _console.print(escape(text)),
        on_total=lambda total: _console.print(f"Total files to download: {total}"),
        materialize=MaterializeHooks(
            on_download=lambda path: _console.print(f"Downloading: {escape(str(path))}"),
            on_skip=on_skip,
            on_failure=on_failure,
        ),
    )


async def _pull(
    *,
    settings: AppSettings,
    token: str,
    output_dir: Path,
    team: str | None,
    deployment_option: str | None,
) -> int:
    client = VercelApiClient(token, settings)
    user = await client.get_user()
    teams = await client.get_teams()

    if team is not None:
        team_id = resolve_team(team, user, teams)
    else:
        team_id = select(_console, "Pick a team", team_choices(user, teams))

    deployments = await client.get_deployments(team_id)
    if deployment_option is not None:
        deployment = resolve_deployment(deployment_option, deployments)
    else:
        deployment = select(_console, "Pick a deployment", deployment_choices(deployments))

    hooks = _build_hooks()
    if not check_deployment_source(deployment, hooks=hooks):
        return 0

    result = await pull_deployment(
        client=client,
        team_id=team_id,
        deployment=deployment,
        output_dir=output_dir,
        hooks=hooks,
    )
    _console.print(build_summary_table(result))
    return 0


@app.command()
def pull(
    output: Path | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Output directory (skips the prompt).",
    ),
    yes: bool = typer.Option(
        False,
        "--yes",
        "-y",
        help="Overwrite an existing output directory without asking.",
    ),
    team: str | None = typer.Option(
        None,
        "--team",
        help="Team id or name, or 'personal' (skips the team picker).",
    ),
    deployment: str | None = typer.Option(
        None,
        "--deployment",
        help="Deployment uid or url (skips the deployment picker).",
    ),
    no_banner: bool = typer.Option(False, "--no-banner", help="Do not print the banner."),
) -> None:
    """Pick a deployment and download its files."""

    settings = AppSettings()
    if not no_banner:
        print_banner(_console)

    try:
        token = get_access_token(settings)
        output_dir = ask_output_directory(
            default=settings.default_output_dir,
            output=output,
            assume_yes=yes,
        )
        code = asyncio.run(
            _pull(
                settings=settings,
                token=token,
                output_dir=output_dir,
                team=team,
                deployment_option=deployment,
            )
        )
    except PromptAbortError as exc:
        _err_console.print(escape(str(exc)))
        raise typer.Exit(1) from exc
    except VercelPullError as exc:
        _err_console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise typer.Exit(1) from exc

    raise typer.Exit(code)


def run() -> None:
    # UnicodeEncodeError on Windows terminals (cp1252 vs utf-8).
    if sys.platform == "win32":
        sys.stdout.reconfigure(encoding="utf-8")
        sys.stderr.reconfigure(encoding="utf-8")
    app()


if __name__ == "__main__":
    run()
