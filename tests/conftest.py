"""Pytest fixtures for vercel-pull tests."""

import sys
from pathlib import Path

import pytest

# Ensure src is on path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


@pytest.fixture(autouse=True)
def isolated_env(tmp_path_factory, monkeypatch):
    """Run each test in an empty cwd, without a token from the outer shell
    and with the user config directory pointed at a scratch location."""
    monkeypatch.delenv("VERCEL_ACCESS_TOKEN", raising=False)
    home = tmp_path_factory.mktemp("home")
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("USERPROFILE", str(home))
    monkeypatch.setenv("APPDATA", str(home / "AppData"))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home / ".config"))
    workdir = tmp_path_factory.mktemp("cwd")
    monkeypatch.chdir(workdir)
    return workdir



@pytest.fixture
def settings():
    from core.config import AppSettings

    return AppSettings(api_base_url="https://api.vercel.test", deployments_limit=20)


@pytest.fixture
def deployment():
    from core.domain.models import Deployment

    return Deployment.model_validate(
        {
            "uid": "dpl_123",
            "url": "my-app-abc123.vercel.app",
            "name": "my-app",
            "source": "cli",
            "target": "production",
            "inspectorUrl": "https://vercel.com/me/my-app/dpl_123",
            "ready": 1_700_000_000_000,
        }
    )


class FakeFetcher:
    """Returns canned bytes per uid and records the order of calls."""

    def __init__(self, contents, failing=()):
        self.contents = contents
        self.failing = set(failing)
        self.calls = []

    async def __call__(self, entry):
        self.calls.append(entry.uid)
        if entry.uid in self.failing:
            raise RuntimeError(f"boom {entry.uid}")
        return self.contents[entry.uid]


@pytest.fixture
def fake_fetcher_factory():
    return FakeFetcher
