"""Interactive prompts (output directory, team and deployment pickers)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Generic, Sequence, TypeVar

import typer
from rich.console import Console
from rich.prompt import IntPrompt

from cli.ui_components import build_choices_table, format_relative_time
from core.domain.models import AuthUser, Deployment, Team
from core.errors import PromptAbortError

T = TypeVar("T")


@dataclass
class Choice(Generic[T]):
    title: str
    description: str
    value: T


def ask_output_directory(
    *,
    default: Path,
    output: Path | None = None,
    assume_yes: bool = False,
) -> Path:
    """Ask for the output directory and confirm overwriting an existing one.

    Declining the overwrite raises `PromptAbortError`.
    """

    if output is None:
        output = Path(typer.prompt("Output Directory", default=str(default)))
    if output.exists() and not assume_yes:
        if not typer.confirm(f'Target directory "{output}" exists. Overwrite?', default=False):
            raise PromptAbortError()
    return output


def select(console: Console, message: str, choices: Sequence[Choice[T]]) -> T:
    """Single-select menu: numbered table + integer prompt."""

    if not choices:
        raise PromptAbortError(f"Nothing to pick for: {message}")
    console.print(build_choices_table(message, [(c.title, c.description) for c in choices]))
    picked = IntPrompt.ask(
        message,
        console=console,
        choices=[str(i) for i in range(1, len(choices) + 1)],
        default=1,
        show_choices=False,
    )
    return choices[picked - 1].value


def team_choices(user: AuthUser, teams: Sequence[Team]) -> list[Choice[str | None]]:
    """Personal account first (team id `None`), then each team."""

    choices: list[Choice[str | None]] = [
        Choice(title=user.username, description="Personal account", value=None)
    ]
    for team in teams:
        choices.append(Choice(title=team.name, description=team.membership.role, value=team.id))
    return choices


def deployment_choices(
    deployments: Sequence[Deployment],
    *,
    now: datetime | None = None,
) -> list[Choice[Deployment]]:
    return [
        Choice(
            title=deployment.url,
            description=f"{deployment.target or 'preview'} ({format_relative_time(deployment.ready, now=now)})",
            value=deployment,
        )
        for deployment in deployments
    ]


def resolve_team(option: str, user: AuthUser, teams: Sequence[Team]) -> str | None:
    """Map a `--team` value (id, name or `personal`) to a team id."""

    if option.lower() in ("personal", user.username.lower()):
        return None
    for team in teams:
        if option in (team.id, team.name):
            return team.id
    raise typer.BadParameter(f"Unknown team {option!r}.", param_hint="--team")


def resolve_deployment(option: str, deployments: Sequence[Deployment]) -> Deployment:
    """Map a `--deployment` value (uid or url) to a listed deployment."""

    needle = option.removeprefix("https://").rstrip("/")
    for deployment in deployments:
        if needle in (deployment.uid, deployment.url):
            return deployment
    raise typer.BadParameter(
        f"Deployment {option!r} is not among the listed deployments.",
        param_hint="--deployment",
    )
