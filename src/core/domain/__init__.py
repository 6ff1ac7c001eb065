"""Domain models and entities.

Why:
- Pure, strict data structures (Pydantic v2) live here.
- The domain knows nothing about HTTP, the CLI or the filesystem.
"""

from core.domain.models import (
    ApiErrorPayload,
    AuthUser,
    Deployment,
    FileTreeEntry,
    FileTreeType,
    Team,
    TeamMembership,
)

__all__ = [
    "ApiErrorPayload",
    "AuthUser",
    "Deployment",
    "FileTreeEntry",
    "FileTreeType",
    "Team",
    "TeamMembership",
]
