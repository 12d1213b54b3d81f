"""Named style classification (fills, text, effects)."""

from __future__ import annotations

from typing import Any, Dict, Optional

# styleType → output bucket
STYLE_BUCKETS = {
    "FILL": "colors",
    "TEXT": "typography",
    "EFFECT": "effects",
}


def collect_styles(styles: Optional[Dict[str, Dict[str, Any]]]) -> Dict[str, Dict[str, Any]]:
    """Partition a file's ``styles`` map into colors, typography and effects.

    Definitions are re-keyed by their ``name``. Unknown style types are dropped;
    a later definition with the same name replaces an earlier one.
    """
    buckets: Dict[str, Dict[str, Any]] = {name: {} for name in STYLE_BUCKETS.values()}
    for style in (styles or {}).values():
        if not isinstance(style, dict):
            continue
        bucket = STYLE_BUCKETS.get(style.get("styleType"))
        if bucket is not None:
            buckets[bucket][style.get("name")] = style
    return buckets
