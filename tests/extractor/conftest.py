"""Shared Figma payload fixtures for extractor tests."""

import pytest

from figma_payloads import make_file


@pytest.fixture
def frame_with_button():
    """A FRAME (0,0,500,500) whose only child is a COMPONENT named Button."""
    return {
        "id": "1:2",
        "name": "Screen",
        "type": "FRAME",
        "absoluteBoundingBox": {"x": 0, "y": 0, "width": 500, "height": 500},
        "fills": [{"type": "SOLID", "color": {"r": 1, "g": 1, "b": 1, "a": 1}}],
        "cornerRadius": 8,
        "children": [
            {
                "id": "1:3",
                "name": "Button",
                "type": "COMPONENT",
                "absoluteBoundingBox": {"x": 10, "y": 10, "width": 100, "height": 50},
                "children": [],
            }
        ],
    }


@pytest.fixture
def sample_file(frame_with_button):
    return make_file(frame_with_button)


@pytest.fixture
def nested_file():
    """Two roots; the first has a TEXT and a nested FRAME with a RECTANGLE."""
    header = {
        "id": "10:1",
        "name": "Header",
        "type": "FRAME",
        "absoluteBoundingBox": {"x": 0, "y": 0, "width": 393, "height": 92},
        "paddingTop": 12,
        "children": [
            {
                "id": "10:2",
                "name": "Title",
                "type": "TEXT",
                "characters": "Hello",
                "style": {
                    "fontSize": 18,
                    "fontFamily": "Inter",
                    "fontWeight": 600,
                    "textAlignHorizontal": "CENTER",
                },
                "fills": [{"color": {"r": 0, "g": 0, "b": 0, "a": 1}}],
            },
            None,
            {
                "id": "10:3",
                "name": "Actions",
                "type": "FRAME",
                "children": [
                    {"id": "10:4", "name": "Bg", "type": "RECTANGLE"},
                ],
            },
        ],
    }
    footer = {"id": "20:1", "name": "Divider", "type": "LINE"}
    return make_file(header, footer)
