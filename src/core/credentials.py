"""Access token lookup."""

from __future__ import annotations

from core.config import AppSettings
from core.errors import MissingCredentialError


def get_access_token(settings: AppSettings | None = None) -> str:
    """Return the bearer token or raise `MissingCredentialError`.

    Runs before any network call so a missing token fails fast.
    """

    settings = settings or AppSettings()
    token = (settings.access_token or "").strip()
    if not token:
        raise MissingCredentialError()
    return token
