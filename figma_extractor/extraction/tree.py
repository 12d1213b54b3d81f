"""Figma document tree → flat component list.

Walks ``document → pages → page children`` depth-first. Every visited node
becomes a Component linked to its parent; the flat list holds every visited
node with each subtree's descendants ahead of the subtree root. Components
hanging directly off a page have no parent and form the root set that
code generation and persistence work with.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .nodes import extract_properties

logger = logging.getLogger("figma_extractor.extraction")


@dataclass
class Component:
    id: str
    name: str
    type: str
    parent: Optional[str] = None
    children: List["Component"] = field(default_factory=list)
    properties: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "parent": self.parent,
            "children": [child.to_dict() for child in self.children],
            "properties": dict(self.properties),
        }


@dataclass
class ExtractedDesign:
    """File metadata plus its root components."""

    name: Optional[str]
    version: Optional[str]
    last_modified: Optional[str]
    components: List[Component] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "version": self.version,
            "lastModified": self.last_modified,
            "components": [c.to_dict() for c in self.components],
        }


# ---------------------------------------------------------------------------
# Traversal
# ---------------------------------------------------------------------------


def _walk(
    node: Optional[Dict[str, Any]],
    parent_id: Optional[str] = None,
) -> Tuple[Optional[Component], List[Component]]:
    """Build the component for ``node`` and the flat list of its subtree.

    Returns ``(None, [])`` for a missing node so callers can skip it.
    """
    if node is None:
        return None, []

    component = Component(
        id=node.get("id"),
        name=node.get("name"),
        type=node.get("type"),
        parent=parent_id,
        properties=extract_properties(node),
    )

    flat: List[Component] = []
    for child in node.get("children") or []:
        child_component, child_flat = _walk(child, component.id)
        if child_component is not None:
            component.children.append(child_component)
        flat.extend(child_flat)

    flat.append(component)
    return component, flat


def flatten_document(file_data: Dict[str, Any]) -> List[Component]:
    """Flatten every page of a ``GET /v1/files/:key`` response."""
    document = file_data.get("document") or {}
    flat: List[Component] = []
    for page in document.get("children") or []:
        if not page:
            continue
        for child in page.get("children") or []:
            _, subtree = _walk(child)
            flat.extend(subtree)
    return flat


def flatten_nodes_response(nodes_response: Dict[str, Any]) -> List[Component]:
    """Flatten a ``GET /v1/files/:key/nodes`` response.

    Each requested node's document plays the role of a page, so its direct
    children become root components.
    """
    pages = [
        entry.get("document")
        for entry in (nodes_response.get("nodes") or {}).values()
        if entry and entry.get("document")
    ]
    return flatten_document({"document": {"children": pages}})


def filter_roots(components: List[Component]) -> List[Component]:
    """Keep only components with no parent (direct children of a page)."""
    return [c for c in components if c.parent is None]


def limit_components(components: List[Component], maximum: int) -> List[Component]:
    """Return at most ``maximum`` leading components, in order."""
    if maximum < 0:
        raise ValueError(f"maximum must be >= 0, got {maximum}")
    if len(components) <= maximum:
        return components
    logger.info(f"Limiting components from {len(components)} to {maximum}")
    return components[:maximum]


# ---------------------------------------------------------------------------
# High-level
# ---------------------------------------------------------------------------


def extract_components(file_data: Dict[str, Any]) -> ExtractedDesign:
    """Extract the root components of a whole Figma file."""
    flat = flatten_document(file_data)
    roots = filter_roots(flat)
    logger.info(
        f"extract_components: file={file_data.get('name')!r}, "
        f"visited={len(flat)}, roots={len(roots)}"
    )
    return ExtractedDesign(
        name=file_data.get("name"),
        version=file_data.get("version"),
        last_modified=file_data.get("lastModified"),
        components=roots,
    )


def extract_node_components(nodes_response: Dict[str, Any]) -> ExtractedDesign:
    """Extract the root components below specific nodes of a file."""
    flat = flatten_nodes_response(nodes_response)
    return ExtractedDesign(
        name=nodes_response.get("name"),
        version=nodes_response.get("version"),
        last_modified=nodes_response.get("lastModified"),
        components=filter_roots(flat),
    )
