"""Contract for fetching file contents.

Why Protocol:
- The materializer only needs "give me the bytes of this entry"; the API
  client, a test double or a local mirror can all provide it.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import FileTreeEntry


@runtime_checkable
class FileContentFetcher(Protocol):
    """Returns the raw bytes of a `file` entry.

    Design rules:
    - Asynchronous because it typically performs HTTP I/O.
    - Raises on failure; the caller decides whether the failure is fatal.
    """

    async def __call__(self, entry: FileTreeEntry) -> bytes:
        ...
