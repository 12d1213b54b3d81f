"""Input validation helpers shared by the API and the extraction services."""

from __future__ import annotations

import re
from typing import Any, Optional

from figma_extractor.errors import ValidationError

_UNSAFE_CHARS_RE = re.compile(r"[^a-z0-9]", re.IGNORECASE)


def sanitize_file_name(name: str) -> str:
    """Replace every non-alphanumeric character with '-' and lowercase."""
    return _UNSAFE_CHARS_RE.sub("-", name or "").lower()


def validate_positive_integer(value: Any, field_name: str, default: int) -> int:
    if value is None:
        return default
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a positive integer") from None
    if parsed < 1:
        raise ValidationError(f"{field_name} must be a positive integer")
    return parsed


def validate_boolean(value: Any, default: bool = False) -> bool:
    if value is None:
        return default
    return bool(value)


def require_file_or_project(
    file_key: Optional[str],
    team_id: Optional[str],
    project_id: Optional[str],
) -> None:
    """A request names a single file, or a team + project pair."""
    if not file_key and (not team_id or not project_id):
        raise ValidationError("Either fileKey OR (teamId and projectId) are required")
