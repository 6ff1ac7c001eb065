"""Tests for the Vercel API adapter (httpx.MockTransport)."""

import base64

import httpx
import pytest

from adapters.vercel_api import VercelApiClient, decode_file_content
from core.errors import ApiError, TransportError


def _client(settings, handler, requests=None):
    def recording(request):
        if requests is not None:
            requests.append(request)
        return handler(request)

    return VercelApiClient("tok_abc", settings, transport=httpx.MockTransport(recording))


class TestDecodeFileContent:
    def test_decodes_base64_data(self):
        payload = {"data": base64.b64encode(b"\x00\x01binary").decode()}
        assert decode_file_content(payload) == b"\x00\x01binary"

    def test_error_payload_raises(self):
        with pytest.raises(ApiError) as excinfo:
            decode_file_content({"error": {"code": "not_found", "message": "File not found"}})
        assert excinfo.value.code == "not_found"
        assert "File not found" in str(excinfo.value)

    def test_unknown_shape_raises(self):
        with pytest.raises(ApiError) as excinfo:
            decode_file_content({"something": "else"})
        assert excinfo.value.code == "unexpected_response"

    def test_invalid_base64_raises(self):
        with pytest.raises(ApiError) as excinfo:
            decode_file_content({"data": "not base64!!"})
        assert excinfo.value.code == "invalid_encoding"


@pytest.mark.asyncio
class TestVercelApiClient:
    async def test_get_user_sends_bearer_token(self, settings):
        requests = []
        client = _client(
            settings,
            lambda r: httpx.Response(200, json={"user": {"username": "jane", "email": "j@x.dev"}}),
            requests,
        )

        user = await client.get_user()

        assert user.username == "jane"
        assert requests[0].url.path == "/v2/user"
        assert requests[0].headers["Authorization"] == "Bearer tok_abc"
        assert requests[0].url.host == "api.vercel.test"

    async def test_get_teams(self, settings):
        body = {"teams": [{"id": "team_1", "name": "Acme", "membership": {"role": "OWNER"}}]}
        client = _client(settings, lambda r: httpx.Response(200, json=body))

        teams = await client.get_teams()

        assert [(t.id, t.name, t.membership.role) for t in teams] == [("team_1", "Acme", "OWNER")]

    async def test_get_teams_empty_when_missing(self, settings):
        client = _client(settings, lambda r: httpx.Response(200, json={}))
        assert await client.get_teams() == []

    async def test_get_deployments_personal_has_no_team_param(self, settings):
        requests = []
        body = {"deployments": [{"uid": "dpl_1", "url": "a.vercel.app", "name": "a", "meta": None}]}
        client = _client(settings, lambda r: httpx.Response(200, json=body), requests)

        deployments = await client.get_deployments(None)

        assert [d.uid for d in deployments] == ["dpl_1"]
        assert deployments[0].meta == {}
        assert requests[0].url.path == "/v6/deployments"
        assert "teamId" not in requests[0].url.params
        assert requests[0].url.params["limit"] == "20"

    async def test_get_deployments_with_team(self, settings):
        requests = []
        client = _client(settings, lambda r: httpx.Response(200, json={"deployments": []}), requests)

        await client.get_deployments("team_1")

        assert requests[0].url.params["teamId"] == "team_1"

    async def test_get_deployments_error_body(self, settings):
        client = _client(
            settings,
            lambda r: httpx.Response(403, json={"error": {"code": "X", "message": "Y"}}),
        )

        with pytest.raises(ApiError) as excinfo:
            await client.get_deployments(None)

        assert excinfo.value.code == "X"
        assert "Y" in str(excinfo.value)
        assert "list of deployments" in str(excinfo.value)

    async def test_error_body_with_success_status_still_fails(self, settings):
        body = {"deployments": [{"uid": "dpl_1", "url": "a", "name": "a"}], "error": {"code": "X", "message": "Y"}}
        client = _client(settings, lambda r: httpx.Response(200, json=body))

        with pytest.raises(ApiError):
            await client.get_deployments(None)

    async def test_malformed_deployment_is_api_error(self, settings):
        body = {"deployments": [{"uid": "d1", "url": "a"}]}
        client = _client(settings, lambda r: httpx.Response(200, json=body))

        with pytest.raises(ApiError) as excinfo:
            await client.get_deployments(None)

        assert excinfo.value.code == "unexpected_response"
        assert "list of deployments" in str(excinfo.value)

    async def test_null_user_is_api_error(self, settings):
        client = _client(settings, lambda r: httpx.Response(200, json={"user": None}))

        with pytest.raises(ApiError) as excinfo:
            await client.get_user()

        assert excinfo.value.code == "unexpected_response"

    async def test_malformed_file_tree_entry_is_api_error(self, settings, deployment):
        client = _client(settings, lambda r: httpx.Response(200, json=[{"type": "file"}]))

        with pytest.raises(ApiError) as excinfo:
            await client.get_deployment_file_tree(None, deployment)

        assert excinfo.value.code == "unexpected_response"

    async def test_get_deployment_file_tree(self, settings, deployment):
        requests = []
        body = [
            {
                "name": "src",
                "type": "directory",
                "mode": 16877,
                "children": [{"name": "a.txt", "type": "file", "uid": "f1", "mode": 33188, "contentType": "text/plain"}],
            },
            {"name": "weird", "type": "something-new", "mode": 0},
        ]
        client = _client(settings, lambda r: httpx.Response(200, json=body), requests)

        tree = await client.get_deployment_file_tree("team_1", deployment)

        assert requests[0].url.path == "/v6/deployments/dpl_123/files"
        assert requests[0].url.params["teamId"] == "team_1"
        assert tree[0].children[0].content_type == "text/plain"
        assert tree[1].type.value == "invalid"

    async def test_get_deployment_file_tree_error(self, settings, deployment):
        body = {"error": {"code": "forbidden", "message": "Not authorized"}}
        client = _client(settings, lambda r: httpx.Response(403, json=body))

        with pytest.raises(ApiError, match="Not authorized"):
            await client.get_deployment_file_tree(None, deployment)

    async def test_get_file_content(self, settings, deployment):
        requests = []
        body = {"data": base64.b64encode(b"hello").decode()}
        client = _client(settings, lambda r: httpx.Response(200, json=body), requests)

        content = await client.get_file_content(None, deployment, "f1")

        assert content == b"hello"
        assert requests[0].url.path == "/v7/deployments/dpl_123/files/f1"

    async def test_content_fetcher_uses_entry_uid(self, settings, deployment):
        from core.domain.models import FileTreeEntry

        requests = []
        body = {"data": base64.b64encode(b"x").decode()}
        client = _client(settings, lambda r: httpx.Response(200, json=body), requests)
        fetch = client.content_fetcher("team_1", deployment)

        assert await fetch(FileTreeEntry(name="a", type="file", uid="f9")) == b"x"
        assert requests[0].url.path.endswith("/files/f9")

    async def test_non_json_error_is_transport_error(self, settings):
        client = _client(settings, lambda r: httpx.Response(502, text="Bad gateway"))

        with pytest.raises(TransportError):
            await client.get_user()

    async def test_http_error_without_structured_body(self, settings):
        client = _client(settings, lambda r: httpx.Response(500, json={"detail": "oops"}))

        with pytest.raises(TransportError, match="HTTP 500"):
            await client.get_teams()

    async def test_network_failure_is_transport_error(self, settings):
        def handler(request):
            raise httpx.ConnectError("name resolution failed", request=request)

        client = _client(settings, handler)

        with pytest.raises(TransportError, match="ConnectError"):
            await client.get_user()
