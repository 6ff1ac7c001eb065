"""Vercel REST API adapter.

Responsibility:
- Issue the authenticated GETs the pull flow needs (user, teams,
  deployments, file tree, file content).
- Turn structured `error` bodies into `ApiError` and everything else that
  goes wrong on the wire into `TransportError`.
- Normalise payloads into domain models (and file content into raw bytes).

Endpoint versions:
- Listing and file tree use v6; file content uses v7, which answers with a
  JSON object carrying base64 `data`.
"""

from __future__ import annotations

import base64
import binascii
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from core.config import AppSettings
from core.domain.models import ApiErrorPayload, AuthUser, Deployment, FileTreeEntry, Team
from core.errors import ApiError, TransportError
from core.interfaces.content import FileContentFetcher
from adapters.http_client import build_async_client

ModelT = TypeVar("ModelT", bound=BaseModel)


def _team_params(team_id: str | None, **extra: Any) -> dict[str, Any]:
    params: dict[str, Any] = dict(extra)
    if team_id is not None:
        params["teamId"] = team_id
    return params


def _raise_for_error_body(data: Any, *, context: str) -> None:
    if isinstance(data, dict) and data.get("error"):
        raw = data["error"]
        if isinstance(raw, dict):
            payload = ApiErrorPayload(
                code=str(raw.get("code") or "unknown_error"),
                message=str(raw.get("message") or ""),
            )
        else:
            payload = ApiErrorPayload(message=str(raw))
        raise ApiError(payload.code, payload.message, context=context)


def _validate(model: type[ModelT], data: Any, *, context: str) -> ModelT:
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise ApiError(
            "unexpected_response",
            f"{model.__name__} payload does not match the expected shape: {exc}",
            context=context,
        ) from exc


def _expect_object(data: Any, *, what: str) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise ApiError("unexpected_response", f"{what} response is not a JSON object.")
    return data


def decode_file_content(payload: Any) -> bytes:
    """Normalise a file-content response to raw bytes.

    The payload is either `{"data": "<base64>"}` or `{"error": {...}}`;
    the latter raises `ApiError`, as does any other shape.
    """

    _raise_for_error_body(payload, context="Error has occurred when attempting to download a file.")
    if not isinstance(payload, dict) or not isinstance(payload.get("data"), str):
        raise ApiError(
            "unexpected_response",
            "File content response carries neither `data` nor `error`.",
        )
    try:
        return base64.b64decode(payload["data"], validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ApiError("invalid_encoding", f"File content is not valid base64: {exc}") from exc


class VercelApiClient:
    """Thin async client over the handful of endpoints used by the CLI."""

    def __init__(
        self,
        access_token: str,
        settings: AppSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._access_token = access_token
        self._settings = settings or AppSettings()
        self._transport = transport

    async def _get_json(self, path: str, *, params: dict[str, Any] | None = None, context: str) -> Any:
        try:
            async with build_async_client(
                self._settings,
                access_token=self._access_token,
                transport=self._transport,
            ) as client:
                response = await client.get(path, params=params or None)
        except httpx.HTTPError as exc:
            raise TransportError(f"{context}\n{type(exc).__name__}: {exc}") from exc

        try:
            data = response.json()
        except ValueError as exc:
            raise TransportError(
                f"{context}\nHTTP {response.status_code}: response body is not JSON."
            ) from exc

        _raise_for_error_body(data, context=context)
        if response.is_error:
            raise TransportError(f"{context}\nHTTP {response.status_code} from {response.url}")
        return data

    async def get_user(self) -> AuthUser:
        context = "Error has occurred when attempting to fetch the current user."
        data = await self._get_json("/v2/user", context=context)
        user = _expect_object(data, what="User").get("user")
        return _validate(AuthUser, user or {}, context=context)

    async def get_teams(self) -> list[Team]:
        context = "Error has occurred when attempting to download list of teams."
        data = await self._get_json("/v2/teams", context=context)
        teams = _expect_object(data, what="Teams").get("teams") or []
        return [_validate(Team, team, context=context) for team in teams]

    async def get_deployments(self, team_id: str | None = None) -> list[Deployment]:
        context = "Error has occurred when attempting to download list of deployments."
        data = await self._get_json(
            "/v6/deployments",
            params=_team_params(team_id, limit=self._settings.deployments_limit),
            context=context,
        )
        deployments = _expect_object(data, what="Deployments").get("deployments") or []
        return [_validate(Deployment, item, context=context) for item in deployments]

    async def get_deployment_file_tree(
        self,
        team_id: str | None,
        deployment: Deployment,
    ) -> list[FileTreeEntry]:
        context = "Error has occurred when attempting to download the deployment file tree."
        data = await self._get_json(
            f"/v6/deployments/{deployment.uid}/files",
            params=_team_params(team_id),
            context=context,
        )
        if not isinstance(data, list):
            raise ApiError("unexpected_response", "Deployment file tree is not a list.", context=context)
        return [_validate(FileTreeEntry, entry, context=context) for entry in data]

    async def get_file_content(
        self,
        team_id: str | None,
        deployment: Deployment,
        file_uid: str,
    ) -> bytes:
        data = await self._get_json(
            f"/v7/deployments/{deployment.uid}/files/{file_uid}",
            params=_team_params(team_id),
            context="Error has occurred when attempting to download a file.",
        )
        return decode_file_content(data)

    def content_fetcher(self, team_id: str | None, deployment: Deployment) -> FileContentFetcher:
        """Bind file-content retrieval to one deployment for the materializer."""

        async def fetch(entry: FileTreeEntry) -> bytes:
            if not entry.uid:
                raise ValueError(f"File entry {entry.name!r} has no uid.")
            return await self.get_file_content(team_id, deployment, entry.uid)

        return fetch
