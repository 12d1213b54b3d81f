"""Tests for Figma account routes (app/routes/figma.py).

Covers:
- GET/POST /api/v1/validate-token
- GET/POST /api/v1/list-files
"""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest
from httpx import AsyncClient

from figma_extractor.integrations import FigmaClientError


@pytest.fixture
def configured_token(monkeypatch):
    monkeypatch.setattr("figma_extractor.config.FIGMA_TOKEN", "env-figma-token")
    return "env-figma-token"


@pytest.fixture
def no_token(monkeypatch):
    monkeypatch.setattr("figma_extractor.config.FIGMA_TOKEN", "")


# ---------------------------------------------------------------------------
# /api/v1/validate-token
# ---------------------------------------------------------------------------


class TestValidateToken:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("method", ["GET", "POST"])
    async def test_valid(self, client: AsyncClient, configured_token, figma_tokens, method):
        resp = await client.request(method, "/api/v1/validate-token")
        assert resp.status_code == 200, resp.text
        assert resp.json() == {
            "success": True,
            "message": "Figma token is valid",
            "user": {"id": "u1", "email": "dev@example.com", "handle": "dev"},
        }
        assert figma_tokens == [configured_token]

    @pytest.mark.asyncio
    async def test_not_configured(self, client: AsyncClient, no_token, mock_figma):
        resp = await client.get("/api/v1/validate-token")
        assert resp.status_code == 401
        assert resp.json()["error"] == "Figma token not configured"
        mock_figma.get_me.assert_not_called()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [401, 403])
    async def test_rejected(self, client: AsyncClient, configured_token, mock_figma, status):
        mock_figma.get_me = AsyncMock(side_effect=FigmaClientError("denied", status_code=status))
        resp = await client.get("/api/v1/validate-token")
        assert resp.status_code == 401
        body = resp.json()
        assert body["error"] == "Invalid Figma token"
        assert "help" in body["details"]

    @pytest.mark.asyncio
    async def test_other_figma_error_passes_through(self, client: AsyncClient, configured_token, mock_figma):
        mock_figma.get_me = AsyncMock(side_effect=FigmaClientError("Figma API timeout", status_code=504))
        resp = await client.get("/api/v1/validate-token")
        assert resp.status_code == 504


# ---------------------------------------------------------------------------
# /api/v1/list-files
# ---------------------------------------------------------------------------


class TestListFiles:
    @pytest.mark.asyncio
    async def test_project_files_get(self, client: AsyncClient, configured_token, mock_figma):
        mock_figma.get_project_files = AsyncMock(
            return_value={"name": "Web", "files": [{"key": "K1", "name": "Home"}]}
        )
        resp = await client.get("/api/v1/list-files", params={"project_id": "P1"})
        assert resp.status_code == 200, resp.text
        body = resp.json()
        assert body["source"] == "project"
        assert body["id"] == "P1"
        assert body["data"]["files"][0]["key"] == "K1"
        assert body["metadata"]["provider"] == "figma"
        mock_figma.get_project_files.assert_awaited_once_with("P1")

    @pytest.mark.asyncio
    async def test_team_projects_post_camel_case(self, client: AsyncClient, configured_token, mock_figma):
        resp = await client.post("/api/v1/list-files", json={"teamId": "T1"})
        assert resp.status_code == 200, resp.text
        assert resp.json()["source"] == "team"
        mock_figma.get_team_projects.assert_awaited_once_with("T1")
        mock_figma.get_project_files.assert_not_called()

    @pytest.mark.asyncio
    async def test_project_wins_over_team(self, client: AsyncClient, configured_token, mock_figma):
        resp = await client.get("/api/v1/list-files", params={"team_id": "T1", "project_id": "P1"})
        assert resp.json()["source"] == "project"
        mock_figma.get_team_projects.assert_not_called()

    @pytest.mark.asyncio
    async def test_request_token_overrides_env(self, client: AsyncClient, configured_token, figma_tokens):
        resp = await client.post(
            "/api/v1/list-files", json={"project_id": "P1", "figmaToken": "request-token"}
        )
        assert resp.status_code == 200, resp.text
        assert figma_tokens == ["request-token"]

    @pytest.mark.asyncio
    async def test_missing_ids(self, client: AsyncClient, configured_token):
        resp = await client.get("/api/v1/list-files")
        assert resp.status_code == 400
        assert "team_id or project_id" in resp.json()["error"]

    @pytest.mark.asyncio
    async def test_no_token(self, client: AsyncClient, no_token):
        resp = await client.get("/api/v1/list-files", params={"projectId": "P1"})
        assert resp.status_code == 401
