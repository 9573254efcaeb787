from __future__ import annotations

from typing import Any, Dict, Optional

from .paths import split_path


def get_mapping_by_path(scene: Any, path: str) -> Optional[Dict[str, Any]]:
    """Return the mapping found at a dot path inside a scene.

    Traversal is dict-only: a missing key, a list or a scalar anywhere on the
    way (including at the end of the path) yields None.
    """
    keys = split_path(path)
    if not keys:
        return None

    val = scene
    for key in keys:
        if not isinstance(val, dict):
            return None
        val = val.get(key)

    if isinstance(val, dict):
        return val
    return None
