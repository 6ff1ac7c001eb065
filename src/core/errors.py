"""Error taxonomy shared by the core, adapters and CLI.

Everything except per-file download failures inherits from `VercelPullError`
and is meant to bubble up to the CLI, which prints it and exits non-zero.
"""

from __future__ import annotations

from core.config import ACCESS_TOKEN_ENV

ERRORS_DOC_URL = "https://vercel.com/docs/rest-api#errors/generic-errors"
TOKEN_GUIDE_URL = "https://vercel.com/guides/how-do-i-use-a-vercel-api-access-token#creating-an-access-token"


class VercelPullError(Exception):
    """Base class for fatal errors of a run."""


class MissingCredentialError(VercelPullError):
    def __init__(self, message: str | None = None) -> None:
        super().__init__(
            message
            or "\n".join(
                [
                    "Vercel Access Tokens are required to authenticate and use the Vercel API.",
                    f"Please generate one and set it to the {ACCESS_TOKEN_ENV} environment variable.",
                    f"See: {TOKEN_GUIDE_URL}",
                ]
            )
        )


class ApiError(VercelPullError):
    """Structured `error` body returned by the API."""

    def __init__(self, code: str, message: str, *, context: str | None = None) -> None:
        self.code = code
        self.message = message
        self.context = context
        lines = []
        if context:
            lines.append(context)
        lines.append(message)
        lines.append(f"See {ERRORS_DOC_URL}")
        super().__init__("\n".join(lines))


class TransportError(VercelPullError):
    """Network failure or an HTTP error without a structured body."""


class PromptAbortError(VercelPullError):
    """The user declined to continue (e.g. overwriting the output directory)."""

    def __init__(self, message: str = "Exiting.") -> None:
        super().__init__(message)
