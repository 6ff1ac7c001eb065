"""Deployment file tree materialization.

Recreates a remote `FileTreeEntry` forest under a local directory:
directories are created (idempotently) before their children are visited,
files are fetched one by one through a `FileContentFetcher` and written as
binary blobs. A failure on one file is reported and recorded but never stops
the walk, so a partially downloaded deployment is the worst outcome.

All console output goes through `MaterializeHooks`; nothing here prints.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Sequence

from core.domain.models import FileTreeEntry, FileTreeType
from core.interfaces.content import FileContentFetcher


@dataclass
class MaterializeHooks:
    """Optional callbacks for UI layers (progress, warnings)."""

    on_directory: Callable[[Path], None] | None = None
    on_download: Callable[[Path], None] | None = None
    on_skip: Callable[[Path, str], None] | None = None
    on_failure: Callable[[Path, Exception], None] | None = None


@dataclass
class FailedEntry:
    path: Path
    error: Exception


@dataclass
class MaterializeResult:
    """Outcome of a materialization run."""

    downloaded: list[Path] = field(default_factory=list)
    skipped: list[Path] = field(default_factory=list)
    failed: list[FailedEntry] = field(default_factory=list)
    directories_created: list[Path] = field(default_factory=list)


def count_file_tree_length(entries: Sequence[FileTreeEntry]) -> int:
    """Number of units to download.

    A directory carrying `children` (even an empty list) only contributes its
    children; every other entry counts as one.
    """

    count = 0
    for entry in entries:
        if entry.is_directory and entry.children is not None:
            count += count_file_tree_length(entry.children)
        else:
            count += 1
    return count


def _is_safe_name(name: str) -> bool:
    if name in ("", ".", ".."):
        return False
    return "/" not in name and "\\" not in name and "\x00" not in name


async def materialize_file_tree(
    entries: Sequence[FileTreeEntry],
    path: Path,
    fetch: FileContentFetcher,
    *,
    hooks: MaterializeHooks | None = None,
) -> MaterializeResult:
    """Walk `entries` depth-first (pre-order) and mirror them under `path`."""

    hooks = hooks or MaterializeHooks()
    result = MaterializeResult()
    await _materialize_entries(entries, Path(path), fetch, hooks, result)
    return result


async def _materialize_entries(
    entries: Sequence[FileTreeEntry],
    path: Path,
    fetch: FileContentFetcher,
    hooks: MaterializeHooks,
    result: MaterializeResult,
) -> None:
    for entry in entries:
        if entry.type is FileTreeType.DIRECTORY:
            await _materialize_directory(entry, path, fetch, hooks, result)
        elif entry.type is FileTreeType.FILE:
            await _download_file(entry, path, fetch, hooks, result)
        else:
            target = path / entry.name
            result.skipped.append(target)
            if hooks.on_skip:
                hooks.on_skip(target, entry.type.value)


async def _materialize_directory(
    entry: FileTreeEntry,
    path: Path,
    fetch: FileContentFetcher,
    hooks: MaterializeHooks,
    result: MaterializeResult,
) -> None:
    dir_path = path / entry.name
    if not _is_safe_name(entry.name):
        result.skipped.append(dir_path)
        if hooks.on_skip:
            hooks.on_skip(dir_path, f"unsafe directory name {entry.name!r}")
        return

    if not dir_path.exists():
        dir_path.mkdir(parents=True, exist_ok=True)
        result.directories_created.append(dir_path)
        if hooks.on_directory:
            hooks.on_directory(dir_path)

    if entry.children:
        await _materialize_entries(entry.children, dir_path, fetch, hooks, result)


async def _download_file(
    entry: FileTreeEntry,
    path: Path,
    fetch: FileContentFetcher,
    hooks: MaterializeHooks,
    result: MaterializeResult,
) -> None:
    file_path = path / entry.name

    if not _is_safe_name(entry.name):
        exc = ValueError(f"Refusing to write unsafe file name {entry.name!r}.")
        result.failed.append(FailedEntry(path=file_path, error=exc))
        if hooks.on_failure:
            hooks.on_failure(file_path, exc)
        return

    # Some deployments list a file under the same name as a directory.
    if file_path.is_dir():
        result.skipped.append(file_path)
        if hooks.on_skip:
            hooks.on_skip(file_path, "a directory with the same name exists")
        return

    try:
        if hooks.on_download:
            hooks.on_download(file_path)
        content = await fetch(entry)
        file_path.write_bytes(content)
    except Exception as exc:
        result.failed.append(FailedEntry(path=file_path, error=exc))
        if hooks.on_failure:
            hooks.on_failure(file_path, exc)
        return

    result.downloaded.append(file_path)
