"""Runtime settings: tunable parameters for extraction and code generation.

All values read from environment variables with sensible defaults.
Infrastructure config (tokens, host, paths) stays in figma_extractor/config.py.
"""

from __future__ import annotations

import os


def _int(key: str, default: int) -> int:
    return int(os.getenv(key, str(default)))


def _float(key: str, default: float) -> float:
    return float(os.getenv(key, str(default)))


def _str(key: str, default: str) -> str:
    return os.getenv(key, default)


# =====================================================================
# Extraction
# =====================================================================

# Root components kept per file, for both code generation and the saved spec
DEFAULT_MAX_COMPONENTS = _int("DEFAULT_MAX_COMPONENTS", 10)

# Frameworks generated when a project request does not list any
DEFAULT_FRAMEWORK = _str("DEFAULT_FRAMEWORK", "react")

# Image export format for GET /v1/images
FIGMA_IMAGE_FORMAT = _str("FIGMA_IMAGE_FORMAT", "svg")


# =====================================================================
# LLM completion
# =====================================================================

LLM_TEMPERATURE = _float("LLM_TEMPERATURE", 0.7)
LLM_MAX_TOKENS = _int("LLM_MAX_TOKENS", 4000)


# =====================================================================
# HTTP Clients
# =====================================================================

FIGMA_HTTP_TIMEOUT = _float("FIGMA_HTTP_TIMEOUT", 60.0)
LLM_HTTP_TIMEOUT = _float("LLM_HTTP_TIMEOUT", 120.0)
