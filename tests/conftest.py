"""Root conftest for API and repository tests.

Provides:
- A GeneratedCodeRepository backed by a temp JSON file
- Fake Figma client / analyzer factories
- An httpx AsyncClient bound to the FastAPI app with dependencies overridden
"""

from __future__ import annotations

from typing import AsyncGenerator, Dict, List
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.dependencies import get_analyzer_factory, get_figma_client_factory, get_repository
from app.main import app
from app.repositories import GeneratedCodeRepository


SAMPLE_FILE = {
    "name": "Landing Page",
    "version": "987",
    "lastModified": "2024-05-01T10:00:00Z",
    "thumbnailUrl": "https://figma-cdn.example.com/thumb.png",
    "document": {
        "children": [
            {
                "id": "0:1",
                "name": "Page 1",
                "type": "CANVAS",
                "children": [
                    {
                        "id": "1:2",
                        "name": "Hero",
                        "type": "FRAME",
                        "absoluteBoundingBox": {"x": 0, "y": 0, "width": 1440, "height": 600},
                        "children": [
                            {"id": "1:3", "name": "Headline", "type": "TEXT", "characters": "Hi"},
                        ],
                    },
                    {
                        "id": "1:4",
                        "name": "Card",
                        "type": "INSTANCE",
                        "absoluteBoundingBox": {"x": 0, "y": 600, "width": 300, "height": 200},
                    },
                ],
            }
        ]
    },
    "styles": {
        "S:1": {"name": "Primary", "styleType": "FILL"},
        "S:2": {"name": "Heading", "styleType": "TEXT"},
        "S:3": {"name": "Grid", "styleType": "GRID"},
    },
}

SAMPLE_ARTIFACT = {
    "framework": "react",
    "components": [
        {"name": "Hero", "code": "export default function Hero() {}", "styles": "", "dependencies": ["react"]},
    ],
    "globalStyles": "body { margin: 0; }",
    "notes": "ok",
}


@pytest.fixture
def repository(tmp_path) -> GeneratedCodeRepository:
    return GeneratedCodeRepository(str(tmp_path / "database" / "generated-code.json"))


@pytest.fixture
def mock_figma():
    """Fake FigmaClient; every method is an AsyncMock."""
    figma = MagicMock()
    figma.get_file = AsyncMock(return_value=SAMPLE_FILE)
    figma.get_file_nodes = AsyncMock(return_value={"name": "Landing Page", "nodes": {}})
    figma.get_project_files = AsyncMock(return_value={"name": "Website", "files": []})
    figma.get_team_projects = AsyncMock(return_value={"name": "Team", "projects": []})
    figma.get_me = AsyncMock(return_value={"id": "u1", "email": "dev@example.com", "handle": "dev"})
    figma.close = AsyncMock()
    return figma


@pytest.fixture
def figma_tokens() -> List:
    """Tokens passed to the Figma client factory, in call order."""
    return []


@pytest.fixture
def mock_analyzer():
    analyzer = MagicMock()
    analyzer.analyze_and_generate_code = AsyncMock(return_value=SAMPLE_ARTIFACT)
    return analyzer


@pytest.fixture
def analyzer_calls() -> List[Dict]:
    return []


@pytest_asyncio.fixture
async def client(
    repository,
    mock_figma,
    figma_tokens,
    mock_analyzer,
    analyzer_calls,
) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client for testing FastAPI routes with fake collaborators."""

    def make_figma(token=None):
        figma_tokens.append(token)
        return mock_figma

    def make_analyzer(provider="github", api_key=None):
        analyzer_calls.append({"provider": provider, "api_key": api_key})
        return mock_analyzer

    app.dependency_overrides[get_repository] = lambda: repository
    app.dependency_overrides[get_figma_client_factory] = lambda: make_figma
    app.dependency_overrides[get_analyzer_factory] = lambda: make_analyzer
    try:
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac
    finally:
        app.dependency_overrides.clear()
