"""Figma account endpoints: token validation and file listing."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.dependencies import FigmaClientFactory, get_figma_client_factory
from figma_extractor import config
from figma_extractor.errors import UnauthorizedError, ValidationError
from figma_extractor.integrations import FigmaClientError

from .schemas import ListFilesRequest

logger = logging.getLogger("api.routes.figma")

router = APIRouter(prefix="/api/v1", tags=["figma"])


# --- Token validation ---


async def _validate_token(make_figma: FigmaClientFactory) -> dict:
    if not config.FIGMA_TOKEN:
        raise UnauthorizedError(
            "Figma token not configured",
            details="Please set FIGMA_ACCESS_TOKEN in environment variables",
        )
    figma = make_figma(config.FIGMA_TOKEN)
    try:
        me = await figma.get_me()
    except FigmaClientError as e:
        if e.status_code in (401, 403):
            raise UnauthorizedError(
                "Invalid Figma token",
                details={
                    "reason": "The configured FIGMA_ACCESS_TOKEN is invalid or expired",
                    "help": "Generate a new token at https://www.figma.com/settings",
                },
            ) from e
        raise
    finally:
        await figma.close()

    return {
        "success": True,
        "message": "Figma token is valid",
        "user": {
            "id": me.get("id"),
            "email": me.get("email"),
            "handle": me.get("handle"),
        },
    }


@router.get("/validate-token")
async def validate_token_get(make_figma: FigmaClientFactory = Depends(get_figma_client_factory)):
    """Check the configured Figma token against GET /v1/me."""
    return await _validate_token(make_figma)


@router.post("/validate-token")
async def validate_token_post(make_figma: FigmaClientFactory = Depends(get_figma_client_factory)):
    return await _validate_token(make_figma)


# --- File listing ---


async def _list_files(
    team_id: Optional[str],
    project_id: Optional[str],
    figma_token: Optional[str],
    make_figma: FigmaClientFactory,
) -> dict:
    if not team_id and not project_id:
        raise ValidationError(
            "Missing required parameter: team_id or project_id",
            details="Please provide either team_id or project_id to list files",
        )

    token = figma_token or config.FIGMA_TOKEN
    if not token:
        raise UnauthorizedError(
            "Figma access token not configured",
            details="Please set FIGMA_ACCESS_TOKEN in environment variables "
                    "or provide figmaToken in request",
        )

    figma = make_figma(token)
    try:
        if project_id:
            source, source_id = "project", project_id
            data = await figma.get_project_files(project_id)
        else:
            source, source_id = "team", team_id
            data = await figma.get_team_projects(team_id)
    finally:
        await figma.close()

    return {
        "success": True,
        "source": source,
        "id": source_id,
        "data": data,
        "metadata": {
            "provider": "figma",
            "timestamp": datetime.now(timezone.utc).isoformat(),
        },
    }


@router.get("/list-files")
async def list_files_get(
    team_id: Optional[str] = Query(default=None),
    project_id: Optional[str] = Query(default=None),
    teamId: Optional[str] = Query(default=None),
    projectId: Optional[str] = Query(default=None),
    figmaToken: Optional[str] = Query(default=None),
    make_figma: FigmaClientFactory = Depends(get_figma_client_factory),
):
    """List a project's files (project_id) or a team's projects (team_id)."""
    return await _list_files(team_id or teamId, project_id or projectId, figmaToken, make_figma)


@router.post("/list-files")
async def list_files_post(
    body: Optional[ListFilesRequest] = None,
    make_figma: FigmaClientFactory = Depends(get_figma_client_factory),
):
    body = body or ListFilesRequest()
    return await _list_files(
        body.team_id or body.teamId,
        body.project_id or body.projectId,
        body.figma_token,
        make_figma,
    )
