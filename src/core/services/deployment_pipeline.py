"""Deployment pull orchestration.

Glues the API client and the materializer together so the CLI only deals
with prompts and printing. Side-effects other than writing the output tree
(printing, progress) are delegated to `PullHooks`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Protocol

from core.domain.models import Deployment, FileTreeEntry
from core.interfaces.content import FileContentFetcher
from core.services.file_tree import (
    MaterializeHooks,
    MaterializeResult,
    count_file_tree_length,
    materialize_file_tree,
)

GIT_SOURCE = "git"


class DeploymentFilesApi(Protocol):
    """The part of the API client the pull flow depends on."""

    async def get_deployment_file_tree(
        self,
        team_id: str | None,
        deployment: Deployment,
    ) -> list[FileTreeEntry]:
        ...

    def content_fetcher(self, team_id: str | None, deployment: Deployment) -> FileContentFetcher:
        ...


@dataclass
class PullHooks:
    """Optional callbacks for UI layers."""

    message: Callable[[str], None] | None = None
    on_total: Callable[[int], None] | None = None
    materialize: MaterializeHooks = field(default_factory=MaterializeHooks)


@dataclass
class PullResult:
    deployment: Deployment
    output_dir: Path
    total: int
    materialized: MaterializeResult


def git_source_url(deployment: Deployment) -> str | None:
    """GitHub tree URL of the commit a git deployment was built from."""

    meta = deployment.meta
    if not meta.get("githubCommitRepo"):
        return None
    return (
        f"https://github.com/{meta.get('githubCommitOrg')}/"
        f"{meta.get('githubCommitRepo')}/tree/{meta.get('githubCommitSha')}"
    )


def check_deployment_source(deployment: Deployment, *, hooks: PullHooks | None = None) -> bool:
    """Return False (after explaining why) when files cannot be downloaded.

    Git-sourced deployments only keep a reference to the commit, so the API
    has no file tree for them; point the user at the source instead.
    """

    if deployment.source != GIT_SOURCE:
        return True

    hooks = hooks or PullHooks()
    if hooks.message:
        hooks.message("The files of this deployment cannot be downloaded.")
        github_url = git_source_url(deployment)
        if github_url:
            hooks.message(f"View Source on GitHub: {github_url}")
        else:
            hooks.message(f"View Source on Vercel: {deployment.inspector_url}")
    return False


async def pull_deployment(
    *,
    client: DeploymentFilesApi,
    team_id: str | None,
    deployment: Deployment,
    output_dir: Path,
    hooks: PullHooks | None = None,
) -> PullResult:
    """Download the whole file tree of `deployment` into `output_dir`."""

    hooks = hooks or PullHooks()
    if hooks.message:
        hooks.message(f"Downloading files from deployment: {deployment.url}")

    tree = await client.get_deployment_file_tree(team_id, deployment)
    total = count_file_tree_length(tree)
    if hooks.on_total:
        hooks.on_total(total)

    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    materialized = await materialize_file_tree(
        tree,
        output_dir,
        client.content_fetcher(team_id, deployment),
        hooks=hooks.materialize,
    )
    return PullResult(
        deployment=deployment,
        output_dir=output_dir,
        total=total,
        materialized=materialized,
    )
