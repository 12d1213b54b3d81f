"""Figma document extraction: property projection, tree flattening, styles."""

from .nodes import NodeKind, extract_properties
from .styles import collect_styles
from .tree import (
    Component,
    ExtractedDesign,
    extract_components,
    extract_node_components,
    filter_roots,
    flatten_document,
    flatten_nodes_response,
    limit_components,
)

__all__ = [
    "Component",
    "ExtractedDesign",
    "NodeKind",
    "collect_styles",
    "extract_components",
    "extract_node_components",
    "extract_properties",
    "filter_roots",
    "flatten_document",
    "flatten_nodes_response",
    "limit_components",
]
