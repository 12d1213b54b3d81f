"""Figma REST API client for the extractor.

Fetches file documents, node subtrees, rendered node images, and project/team
listings using Personal Access Token (PAT) authentication.

Environment:
    FIGMA_ACCESS_TOKEN or FIGMA_TOKEN: Figma Personal Access Token

Usage:
    async with FigmaClient(token) as client:
        file_data = await client.get_file("6kGd851qaAX4TiL44vpIrO")
        nodes = await client.get_file_nodes("6kGd851qaAX4TiL44vpIrO", ["16650:538"])
        files = await client.get_project_files("1234567")
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from figma_extractor import config, settings
from figma_extractor.errors import ExternalAPIError

logger = logging.getLogger("figma_extractor.integrations.figma")

FIGMA_API_BASE = "https://api.figma.com"

# Figma status → error message; {path} is the requested path
STATUS_MESSAGES = {
    401: "Invalid Figma access token. The token is invalid or expired.",
    403: "Figma API returned 403 Forbidden. The token lacks access to {path} "
         "or the file_content:read scope.",
    404: "Figma resource not found: {path}",
    429: "Figma API rate limit exceeded. Retry later.",
}


class FigmaClientError(ExternalAPIError):
    """Raised when a Figma API call fails."""


class FigmaClient:
    """Async Figma REST API client.

    Args:
        token: Figma PAT. Falls back to the configured FIGMA token.
        timeout: HTTP request timeout in seconds.
    """

    def __init__(
        self,
        token: Optional[str] = None,
        timeout: float = settings.FIGMA_HTTP_TIMEOUT,
    ):
        self._token = token or config.FIGMA_TOKEN
        if not self._token:
            raise FigmaClientError(
                "Figma token not configured. Set FIGMA_ACCESS_TOKEN environment variable "
                "or pass token= to FigmaClient().",
                status_code=401,
            )
        self._timeout = timeout
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self) -> "FigmaClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=FIGMA_API_BASE,
                headers={"X-FIGMA-TOKEN": self._token},
                timeout=self._timeout,
                limits=httpx.Limits(max_connections=4, max_keepalive_connections=2),
            )
        return self._client

    async def close(self) -> None:
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def _get(self, path: str, params: Optional[Dict] = None) -> Dict[str, Any]:
        """GET ``path`` and return the decoded body; non-200 maps to FigmaClientError."""
        client = await self._get_client()
        try:
            resp = await client.get(path, params=params)
        except httpx.TimeoutException as e:
            raise FigmaClientError(f"Figma API timeout: {path}", status_code=504) from e
        except httpx.TransportError as e:
            raise FigmaClientError(f"Figma API connection error: {path}") from e

        status = resp.status_code
        if status == 200:
            return resp.json()

        message = STATUS_MESSAGES.get(status)
        if message is not None:
            raise FigmaClientError(message.format(path=path), status_code=status)
        raise FigmaClientError(
            f"Figma API error {status}: {resp.text[:200]}",
            status_code=status if status >= 400 else 502,
        )

    # ------------------------------------------------------------------
    # Files and nodes
    # ------------------------------------------------------------------

    async def get_file(self, file_key: str) -> Dict[str, Any]:
        """Fetch a whole Figma file document.

        GET /v1/files/:key
        """
        data = await self._get(f"/v1/files/{file_key}")
        logger.info(
            f"get_file: file={file_key}, name={data.get('name')!r}, "
            f"version={data.get('version')}"
        )
        return data

    async def get_file_nodes(
        self,
        file_key: str,
        node_ids: List[str],
    ) -> Dict[str, Any]:
        """Fetch specific nodes from a Figma file.

        GET /v1/files/:key/nodes?ids=...
        """
        ids_param = ",".join(node_ids)
        data = await self._get(f"/v1/files/{file_key}/nodes", params={"ids": ids_param})
        logger.info(
            f"get_file_nodes: file={file_key}, requested={len(node_ids)}, "
            f"returned={len(data.get('nodes') or {})}"
        )
        return data

    async def get_node_images(
        self,
        file_key: str,
        node_ids: List[str],
        fmt: str = settings.FIGMA_IMAGE_FORMAT,
    ) -> Dict[str, Optional[str]]:
        """Render node images via Figma's image export API.

        GET /v1/images/:key?ids=...&format=svg
        """
        data = await self._get(
            f"/v1/images/{file_key}",
            params={"ids": ",".join(node_ids), "format": fmt},
        )

        if data.get("err"):
            raise FigmaClientError(f"Figma image render error: {data['err']}")

        images = data.get("images") or {}
        logger.info(
            f"get_node_images: file={file_key}, requested={len(node_ids)}, "
            f"rendered={sum(1 for v in images.values() if v)}"
        )
        return images

    # ------------------------------------------------------------------
    # Projects, teams, account
    # ------------------------------------------------------------------

    async def get_project_files(self, project_id: str) -> Dict[str, Any]:
        """List files of a project.

        GET /v1/projects/:id/files
        """
        data = await self._get(f"/v1/projects/{project_id}/files")
        logger.info(
            f"get_project_files: project={project_id}, files={len(data.get('files') or [])}"
        )
        return data

    async def get_team_projects(self, team_id: str) -> Dict[str, Any]:
        """List projects of a team.

        GET /v1/teams/:id/projects
        """
        data = await self._get(f"/v1/teams/{team_id}/projects")
        logger.info(
            f"get_team_projects: team={team_id}, projects={len(data.get('projects') or [])}"
        )
        return data

    async def get_me(self) -> Dict[str, Any]:
        """Fetch the user that owns the token (token validation).

        GET /v1/me
        """
        return await self._get("/v1/me")
