"""Figma node → component property projection.

Each recognized node type maps to exactly one projection function. Nodes with
any other type are treated as opaque and get an empty property bag. Fields
missing from the Figma payload are left out of the bag rather than set to None.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Dict, Optional


class NodeKind(str, Enum):
    """Figma node types the extractor projects properties for."""

    TEXT = "TEXT"
    RECTANGLE = "RECTANGLE"
    FRAME = "FRAME"
    INSTANCE = "INSTANCE"
    COMPONENT = "COMPONENT"
    OTHER = "OTHER"

    @classmethod
    def of(cls, node: Dict[str, Any]) -> "NodeKind":
        try:
            return cls(node.get("type"))
        except ValueError:
            return cls.OTHER


# ---------------------------------------------------------------------------
# Field access helpers
# ---------------------------------------------------------------------------


def _first_fill_color(node: Dict[str, Any]) -> Optional[Any]:
    fills = node.get("fills")
    if not isinstance(fills, list) or not fills or not isinstance(fills[0], dict):
        return None
    return fills[0].get("color")


def _bbox(node: Dict[str, Any]) -> Dict[str, Any]:
    return node.get("absoluteBoundingBox") or {}


def _compact(props: Dict[str, Any]) -> Dict[str, Any]:
    """Drop keys whose source field was absent."""
    return {k: v for k, v in props.items() if v is not None}


# ---------------------------------------------------------------------------
# Per-kind projections
# ---------------------------------------------------------------------------


def _text_properties(node: Dict[str, Any]) -> Dict[str, Any]:
    style = node.get("style") or {}
    return _compact({
        "content": node.get("characters") or "",
        "fontSize": style.get("fontSize"),
        "fontFamily": style.get("fontFamily"),
        "fontWeight": style.get("fontWeight"),
        "textAlign": style.get("textAlignHorizontal"),
        "color": _first_fill_color(node),
    })


def _box_properties(node: Dict[str, Any]) -> Dict[str, Any]:
    bbox = _bbox(node)
    return _compact({
        "width": bbox.get("width"),
        "height": bbox.get("height"),
        "x": bbox.get("x"),
        "y": bbox.get("y"),
        "backgroundColor": _first_fill_color(node),
        "borderRadius": node.get("cornerRadius"),
        # Falsy paddingLeft (including 0) falls through to paddingTop
        "padding": node.get("paddingLeft") or node.get("paddingTop") or 0,
    })


def _instance_properties(node: Dict[str, Any]) -> Dict[str, Any]:
    bbox = _bbox(node)
    return _compact({
        "componentName": node.get("name"),
        "width": bbox.get("width"),
        "height": bbox.get("height"),
    })


def _no_properties(node: Dict[str, Any]) -> Dict[str, Any]:
    return {}


PROPERTY_EXTRACTORS: Dict[NodeKind, Callable[[Dict[str, Any]], Dict[str, Any]]] = {
    NodeKind.TEXT: _text_properties,
    NodeKind.RECTANGLE: _box_properties,
    NodeKind.FRAME: _box_properties,
    NodeKind.INSTANCE: _instance_properties,
    NodeKind.COMPONENT: _instance_properties,
    NodeKind.OTHER: _no_properties,
}

assert set(PROPERTY_EXTRACTORS) == set(NodeKind), "every NodeKind needs an extractor"


def extract_properties(node: Dict[str, Any]) -> Dict[str, Any]:
    """Project a Figma node onto the property bag for its type."""
    return PROPERTY_EXTRACTORS[NodeKind.of(node)](node)
