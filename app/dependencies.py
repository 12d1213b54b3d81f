"""FastAPI dependencies: record store and client factories.

Routes receive factories rather than clients so that tokens taken from the
request (or the environment) are bound per call. Tests override these with
``app.dependency_overrides``.
"""

from __future__ import annotations

from typing import Callable, Optional

from figma_extractor import config
from figma_extractor.codegen import DesignAnalyzer
from figma_extractor.integrations import CompletionClient, FigmaClient, ProviderConfig

from .repositories import GeneratedCodeRepository

FigmaClientFactory = Callable[[Optional[str]], FigmaClient]
AnalyzerFactory = Callable[..., DesignAnalyzer]


def get_repository() -> GeneratedCodeRepository:
    return GeneratedCodeRepository(config.DATABASE_PATH)


def _make_figma_client(token: Optional[str] = None) -> FigmaClient:
    return FigmaClient(token=token)


def _make_analyzer(provider: str = "github", api_key: Optional[str] = None) -> DesignAnalyzer:
    return DesignAnalyzer(CompletionClient(ProviderConfig.from_env(provider, api_key=api_key)))


def get_figma_client_factory() -> FigmaClientFactory:
    return _make_figma_client


def get_analyzer_factory() -> AnalyzerFactory:
    return _make_analyzer
