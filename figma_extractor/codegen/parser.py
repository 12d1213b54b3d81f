"""Completion response → CodeArtifact parsing.

The model is asked for a JSON object but may wrap it in prose or return
plain code. The span from the first ``{`` to the last ``}`` is parsed; when
there is no span, or the span is not valid JSON, the raw text is wrapped as a
single ``GeneratedComponent``.
"""

from __future__ import annotations

import json
import logging
from enum import Enum
from typing import Any, Dict, List, Tuple

logger = logging.getLogger("figma_extractor.codegen")

FALLBACK_COMPONENT_NAME = "GeneratedComponent"

NO_SPAN_NOTES = "Generated code from AI response"
SPAN_UNPARSEABLE_NOTES = "Raw AI response"


class ParseOutcome(str, Enum):
    PARSED = "parsed"
    SPAN_UNPARSEABLE = "span_unparseable"
    NO_SPAN = "no_span"


def _find_object_span(text: str) -> str:
    """Return text from the first ``{`` to the last ``}``, or "" if none."""
    start = text.find("{")
    end = text.rfind("}")
    if start < 0 or end <= start:
        return ""
    return text[start:end + 1]


def _normalize_component(raw: Any) -> Dict[str, Any]:
    raw = raw if isinstance(raw, dict) else {"code": str(raw)}
    dependencies = raw.get("dependencies") or []
    if not isinstance(dependencies, list):
        dependencies = [dependencies]
    return {
        "name": raw.get("name") or FALLBACK_COMPONENT_NAME,
        "code": raw.get("code") or "",
        "styles": raw.get("styles") or "",
        "dependencies": dependencies,
    }


def _fallback_artifact(text: str, framework: str, notes: str) -> Dict[str, Any]:
    return {
        "framework": framework,
        "components": [
            {
                "name": FALLBACK_COMPONENT_NAME,
                "code": text,
                "styles": "",
                "dependencies": [],
            }
        ],
        "globalStyles": "",
        "notes": notes,
    }


def parse_response(text: str, framework: str) -> Tuple[Dict[str, Any], ParseOutcome]:
    """Parse completion text into a CodeArtifact.

    Returns:
        (artifact, outcome); outcome names which branch produced the artifact.
    """
    text = text or ""
    span = _find_object_span(text)
    if not span:
        logger.info(f"parse_response: no JSON object in {framework} response, wrapping raw text")
        return _fallback_artifact(text, framework, NO_SPAN_NOTES), ParseOutcome.NO_SPAN

    try:
        data = json.loads(span)
    except json.JSONDecodeError as e:
        logger.warning(f"parse_response: {framework} response JSON invalid ({e}), wrapping raw text")
        return _fallback_artifact(text, framework, SPAN_UNPARSEABLE_NOTES), ParseOutcome.SPAN_UNPARSEABLE

    raw_components = data.get("components") or []
    if not isinstance(raw_components, list):
        raw_components = [raw_components]
    components: List[Dict[str, Any]] = [_normalize_component(c) for c in raw_components]
    artifact = {
        "framework": framework,
        "components": components,
        "globalStyles": data.get("globalStyles") or "",
        "notes": data.get("notes") or "",
    }
    return artifact, ParseOutcome.PARSED
